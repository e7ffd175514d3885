"""
Context Fields

Data descriptors used by extension contexts. Every assignment is normalized,
so a context's fields are always in canonical form after any mutation.
"""

from datetime import datetime, timedelta
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, List, Optional
from urllib.parse import urlsplit

from feedext.datetime_utils import to_utc
from feedext.exceptions import ExtensionArgumentError


def normalize_text(value: Optional[str]) -> str:
    """Trim text; None and whitespace-only become empty."""
    if value is None:
        return ""
    return str(value).strip()


def normalize_uri(value: Optional[str]) -> Optional[str]:
    """
    Trim a URI reference; empty becomes None.

    Returns:
        The URI text, or None when empty

    Raises:
        ValueError: If the value cannot be split as a URI reference
    """
    text = normalize_text(value)
    if not text:
        return None
    urlsplit(text)
    return text


def parse_uri(text: Optional[str]) -> Optional[str]:
    """Parse a URI reference; None when empty or malformed."""
    try:
        return normalize_uri(text)
    except ValueError:
        return None


def parse_decimal(text: Optional[str]) -> Optional[Decimal]:
    """Parse a decimal using invariant formatting; None when malformed."""
    if not text:
        return None
    try:
        value = Decimal(text.strip())
    except InvalidOperation:
        return None
    if not value.is_finite():
        return None
    return value


def format_decimal(value: Decimal) -> str:
    """Format a decimal without exponent, sign on zero or redundant trailing zeros."""
    if value.is_zero():
        value = abs(value)
    text = format(value, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text or "0"


def parse_integer(text: Optional[str]) -> Optional[int]:
    """Parse an integer; None when malformed."""
    if not text:
        return None
    try:
        return int(text.strip())
    except ValueError:
        return None


class _Field:
    """Base descriptor storing the normalized value on the instance."""

    default: Any = None

    def __set_name__(self, owner, name):
        self.name = name
        self.attr = f"_{name}"

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        return getattr(obj, self.attr, self.default)

    def __set__(self, obj, value):
        setattr(obj, self.attr, self.normalize(value))

    def normalize(self, value):
        return value

    def _reject(self, value, reason: str):
        raise ExtensionArgumentError(f"Invalid value {value!r} for {self.name}: {reason}", self.name)


class TextField(_Field):
    """Trimmed text; unset is the empty string."""

    default = ""

    def normalize(self, value):
        return normalize_text(value)


class UriField(_Field):
    """URI reference text; unset is None."""

    def normalize(self, value):
        try:
            return normalize_uri(value)
        except ValueError as e:
            self._reject(value, str(e))


class DateTimeField(_Field):
    """Aware UTC datetime; unset is None."""

    def normalize(self, value):
        if value is None:
            return None
        if not isinstance(value, datetime):
            self._reject(value, "expected datetime")
        return to_utc(value)


class DecimalField(_Field):
    """Decimal number; unset is None."""

    def normalize(self, value):
        if value is None:
            return None
        if isinstance(value, float):
            value = Decimal(str(value))
        try:
            value = Decimal(value)
        except (InvalidOperation, TypeError, ValueError):
            self._reject(value, "expected a decimal number")
        if not value.is_finite():
            self._reject(value, "expected a finite number")
        # -0 equals 0 and must serialize the same
        if value.is_zero():
            value = abs(value)
        return value


class IntegerField(_Field):
    """Integer with an optional lower bound; unset is None."""

    def __init__(self, minimum: Optional[int] = None):
        self.minimum = minimum

    def normalize(self, value):
        if value is None:
            return None
        if isinstance(value, bool) or not isinstance(value, int):
            self._reject(value, "expected int")
        if self.minimum is not None and value < self.minimum:
            self._reject(value, f"must not be less than {self.minimum}")
        return value


class BooleanField(_Field):
    """Boolean flag; unset is False."""

    default = False

    def normalize(self, value):
        return bool(value)


class EnumField(_Field):
    """Enumeration member; unset is the enumeration's NONE member."""

    def __init__(self, enum_type):
        self.enum_type = enum_type
        self.default = enum_type.NONE

    def normalize(self, value):
        if value is None:
            return self.enum_type.NONE
        if not isinstance(value, self.enum_type):
            self._reject(value, f"expected {self.enum_type.__name__}")
        return value


class DurationField(_Field):
    """Non-negative timedelta; unset is None."""

    def normalize(self, value):
        if value is None:
            return None
        if not isinstance(value, timedelta):
            self._reject(value, "expected timedelta")
        if value < timedelta(0):
            self._reject(value, "must not be negative")
        return value


class _ListField(_Field):
    """List of normalized entries; unset is an empty list."""

    def __get__(self, obj, objtype=None):
        if obj is None:
            return self
        if not hasattr(obj, self.attr):
            setattr(obj, self.attr, [])
        return getattr(obj, self.attr)

    def normalize(self, value):
        if value is None:
            return []
        if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
            self._reject(value, "expected a list")
        items = []
        for item in value:
            items.extend(self.normalize_item(item))
        return items

    def normalize_item(self, item) -> Iterable:
        return [item]


class TextListField(_ListField):
    """
    Trimmed text entries with empty entries dropped.

    When a separator is given, entries holding it are split, so the list
    survives being written as one separated value.
    """

    def __init__(self, separator: Optional[str] = None):
        self.separator = separator

    def normalize_item(self, item) -> List[str]:
        text = normalize_text(item)
        parts = text.split(self.separator) if self.separator else [text]
        return [part.strip() for part in parts if part.strip()]


class UriListField(_ListField):
    """URI references with empty entries dropped."""

    def normalize_item(self, item) -> List[str]:
        try:
            uri = normalize_uri(item)
        except ValueError as e:
            self._reject(item, str(e))
        return [uri] if uri else []
