"""
Tests for normalizing context fields.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal
from enum import Enum

import pytest

from feedext.exceptions import ExtensionArgumentError
from feedext.fields import (
    BooleanField,
    DateTimeField,
    DecimalField,
    DurationField,
    EnumField,
    IntegerField,
    TextField,
    TextListField,
    UriField,
    UriListField,
    format_decimal,
    parse_decimal,
    parse_integer,
    parse_uri,
)


class Color(Enum):
    NONE = ""
    RED = "red"


class Sample:
    text = TextField()
    uri = UriField()
    when = DateTimeField()
    amount = DecimalField()
    count = IntegerField(minimum=1)
    flag = BooleanField()
    color = EnumField(Color)
    length = DurationField()
    tags = TextListField(separator=",")
    links = UriListField()


class TestDefaults:
    """Tests for unset values."""

    def test_unset_values(self):
        """Each field type has its unset sentinel."""
        sample = Sample()
        assert sample.text == ""
        assert sample.uri is None
        assert sample.when is None
        assert sample.amount is None
        assert sample.count is None
        assert sample.flag is False
        assert sample.color is Color.NONE
        assert sample.length is None
        assert sample.tags == []
        assert sample.links == []


class TestNormalization:
    """Tests for normalization on assignment."""

    def test_text_trimmed(self):
        """Text is trimmed and None becomes empty."""
        sample = Sample()
        sample.text = "  padded  "
        assert sample.text == "padded"
        sample.text = None
        assert sample.text == ""

    def test_uri_empty_is_unset(self):
        """Blank URIs are unset."""
        sample = Sample()
        sample.uri = " http://example.com/ "
        assert sample.uri == "http://example.com/"
        sample.uri = "   "
        assert sample.uri is None

    def test_uri_invalid(self):
        """URIs that cannot be split are rejected."""
        sample = Sample()
        with pytest.raises(ExtensionArgumentError):
            sample.uri = "http://[broken"

    def test_datetime_utc(self):
        """Date-times are stored as aware UTC values."""
        sample = Sample()
        sample.when = datetime(2008, 1, 23, 5, tzinfo=timezone(timedelta(hours=5)))
        assert sample.when == datetime(2008, 1, 23, tzinfo=timezone.utc)
        assert sample.when.tzinfo == timezone.utc

        sample.when = datetime(2008, 1, 23)
        assert sample.when.tzinfo == timezone.utc

    def test_datetime_rejects_text(self):
        """Only datetime values are accepted."""
        sample = Sample()
        with pytest.raises(ExtensionArgumentError):
            sample.when = "2008-01-23"

    def test_decimal(self):
        """Numbers are stored as decimals."""
        sample = Sample()
        sample.amount = 1.5
        assert sample.amount == Decimal("1.5")
        sample.amount = "42.10"
        assert sample.amount == Decimal("42.10")

    def test_decimal_negative_zero(self):
        """Negative zero is stored as zero."""
        sample = Sample()
        sample.amount = Decimal("-0.00")
        assert sample.amount == 0
        assert not sample.amount.is_signed()

    def test_decimal_invalid(self):
        """Non-numeric and non-finite values are rejected."""
        sample = Sample()
        with pytest.raises(ExtensionArgumentError):
            sample.amount = "abc"
        with pytest.raises(ExtensionArgumentError):
            sample.amount = float("nan")

    def test_integer_minimum(self):
        """Integers below the minimum are rejected."""
        sample = Sample()
        sample.count = 3
        assert sample.count == 3
        with pytest.raises(ExtensionArgumentError):
            sample.count = 0
        with pytest.raises(ExtensionArgumentError):
            sample.count = True

    def test_enum(self):
        """Enum fields accept members and None."""
        sample = Sample()
        sample.color = Color.RED
        assert sample.color is Color.RED
        sample.color = None
        assert sample.color is Color.NONE
        with pytest.raises(ExtensionArgumentError):
            sample.color = "red"

    def test_duration(self):
        """Durations must be non-negative timedeltas."""
        sample = Sample()
        sample.length = timedelta(minutes=5)
        assert sample.length == timedelta(minutes=5)
        with pytest.raises(ExtensionArgumentError):
            sample.length = timedelta(seconds=-1)
        with pytest.raises(ExtensionArgumentError):
            sample.length = 300

    def test_text_list(self):
        """Entries are trimmed, empties dropped and separators split."""
        sample = Sample()
        sample.tags = [" rock ", "", "jazz, blues", None]
        assert sample.tags == ["rock", "jazz", "blues"]
        sample.tags = None
        assert sample.tags == []
        with pytest.raises(ExtensionArgumentError):
            sample.tags = "rock"

    def test_uri_list(self):
        """URI entries are trimmed and empties dropped."""
        sample = Sample()
        sample.links = [" http://a.example ", "", "http://b.example"]
        assert sample.links == ["http://a.example", "http://b.example"]
        with pytest.raises(ExtensionArgumentError):
            sample.links = ["http://[broken"]

    def test_lists_not_shared(self):
        """Each instance gets its own list."""
        first = Sample()
        second = Sample()
        first.tags.append("rock")
        assert second.tags == []

    def test_error_names_field(self):
        """Errors carry the offending field name."""
        sample = Sample()
        with pytest.raises(ExtensionArgumentError) as exc_info:
            sample.count = -5
        assert exc_info.value.argument == "count"


class TestParsers:
    """Tests for lenient parsing helpers."""

    def test_parse_decimal(self):
        """Decimals parse with invariant formatting."""
        assert parse_decimal("45.256") == Decimal("45.256")
        assert parse_decimal(" -71.92 ") == Decimal("-71.92")
        assert parse_decimal("1,5") is None
        assert parse_decimal("Infinity") is None
        assert parse_decimal("") is None

    def test_format_decimal(self):
        """Decimals are written without exponent or trailing zeros."""
        assert format_decimal(Decimal("45.2560")) == "45.256"
        assert format_decimal(Decimal("100")) == "100"
        assert format_decimal(Decimal("1E+2")) == "100"
        assert format_decimal(Decimal("-0.50")) == "-0.5"
        assert format_decimal(Decimal("-0")) == "0"
        assert format_decimal(Decimal("-0.000")) == "0"

    def test_parse_integer(self):
        """Integers parse or yield None."""
        assert parse_integer("12") == 12
        assert parse_integer("twelve") is None
        assert parse_integer(None) is None

    def test_parse_uri(self):
        """URIs parse or yield None."""
        assert parse_uri(" http://example.com ") == "http://example.com"
        assert parse_uri("http://[broken") is None
        assert parse_uri("") is None
