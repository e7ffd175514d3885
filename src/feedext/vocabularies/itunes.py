"""
Apple iTunes Podcasting Extension

Podcast metadata for feed channels and items: owner, categories, artwork,
duration, explicit-content rating and directory blocking.
"""

import logging
import re
from datetime import timedelta
from typing import Iterator, List, Mapping, Optional

from lxml import etree

from feedext.comparison import (
    compare_enum,
    compare_objects,
    compare_sequence,
    compare_text,
    compare_uri,
    compare_values,
)
from feedext.enums import VocabularyEnum
from feedext.exceptions import require
from feedext.extension import Comparable, ExtensionContext, SyndicationExtension
from feedext.fields import (
    BooleanField,
    DurationField,
    EnumField,
    TextField,
    TextListField,
    UriField,
    parse_uri,
)
from feedext.models import ExtensionDescriptor
from feedext.nodes import attribute, find_all, find_element, find_text
from feedext.writer import ExtensionWriter

logger = logging.getLogger("feedext.vocabularies.itunes")

PREFIX = "itunes"
NAMESPACE = "http://www.itunes.com/dtds/podcast-1.0.dtd"

_DIGITS = re.compile(r"^\d+$")


class ITunesExplicitMaterial(VocabularyEnum):
    """Parental advisory rating."""
    NONE = ""
    CLEAN = "clean"
    NO = "no"
    YES = "yes"


def parse_duration(text: Optional[str]) -> Optional[timedelta]:
    """
    Parse an iTunes duration.

    Accepts whole seconds ("3600"), MM:SS and HH:MM:SS.

    Returns:
        timedelta, or None if the value is empty or malformed
    """
    if not text or not text.strip():
        return None
    text = text.strip()
    if _DIGITS.match(text):
        return timedelta(seconds=int(text))

    parts = text.split(":")
    if len(parts) not in (2, 3) or not all(_DIGITS.match(p) for p in parts):
        return None
    numbers = [int(p) for p in parts]
    if len(numbers) == 2:
        minutes, seconds = numbers
        return timedelta(minutes=minutes, seconds=seconds)
    hours, minutes, seconds = numbers
    return timedelta(hours=hours, minutes=minutes, seconds=seconds)


def format_duration(value: timedelta) -> str:
    """Format a duration as HH:MM:SS using total hours."""
    total = int(value.total_seconds())
    hours, remainder = divmod(total, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def parse_keywords(text: Optional[str]) -> List[str]:
    """Split comma-separated keywords, dropping empty entries."""
    if not text:
        return []
    return [k.strip() for k in text.split(",") if k.strip()]


class ITunesOwner(Comparable):
    """Contact information for the owner of a podcast."""

    email = TextField()
    name = TextField()

    def __init__(self, email: str = "", name: str = ""):
        self.email = email
        self.name = name

    def load(self, source: etree._Element, namespaces: Mapping[str, str]) -> bool:
        require(source, "source")
        was_loaded = False
        email = find_text(source, f"{PREFIX}:email", namespaces)
        if email is not None:
            self.email = email
            was_loaded = True
        name = find_text(source, f"{PREFIX}:name", namespaces)
        if name is not None:
            self.name = name
            was_loaded = True
        return was_loaded

    def write_to(self, writer: ExtensionWriter, namespace: str) -> None:
        if not self.email and not self.name:
            return
        with writer.element("owner", namespace):
            if self.email:
                writer.write_element("email", namespace, self.email)
            if self.name:
                writer.write_element("name", namespace, self.name)

    def compare_to(self, other: Optional["ITunesOwner"]) -> int:
        if other is None:
            return 1
        self._check_comparable(other)
        return compare_text(self.email, other.email) or compare_text(self.name, other.name)

    def hash_key(self) -> str:
        return f"{self.email}|{self.name}".casefold()

    def __repr__(self):
        return f"ITunesOwner(email={self.email!r}, name={self.name!r})"


class ITunesCategory(Comparable):
    """Directory category, optionally holding sub-categories."""

    text = TextField()

    def __init__(self, text: str = "", categories: Optional[List["ITunesCategory"]] = None):
        self.text = text
        self.categories: List[ITunesCategory] = list(categories or [])

    def load(self, source: etree._Element, namespaces: Mapping[str, str]) -> bool:
        require(source, "source")
        was_loaded = False
        text = attribute(source, "text")
        if text is not None:
            self.text = text
            was_loaded = True
        for child in find_all(source, f"{PREFIX}:category", namespaces):
            category = ITunesCategory()
            if category.load(child, namespaces):
                self.categories.append(category)
                was_loaded = True
        return was_loaded

    def write_to(self, writer: ExtensionWriter, namespace: str) -> None:
        attributes = {"text": self.text} if self.text else None
        with writer.element("category", namespace, attributes):
            for category in self.categories:
                category.write_to(writer, namespace)

    def compare_to(self, other: Optional["ITunesCategory"]) -> int:
        if other is None:
            return 1
        self._check_comparable(other)
        return compare_text(self.text, other.text) or compare_sequence(
            self.categories, other.categories, compare_objects
        )

    def hash_key(self) -> str:
        nested = ",".join(c.hash_key() for c in self.categories)
        return f"{self.text.casefold()}[{nested}]"

    def __repr__(self):
        return f"ITunesCategory(text={self.text!r}, categories={self.categories!r})"


class ITunesSyndicationExtensionContext(ExtensionContext):
    """Fields of the iTunes podcasting vocabulary."""

    author = TextField()
    duration = DurationField()
    explicit_material = EnumField(ITunesExplicitMaterial)
    image = UriField()
    is_blocked = BooleanField()
    keywords = TextListField(separator=",")
    new_feed_url = UriField()
    subtitle = TextField()
    summary = TextField()

    def __init__(self):
        self.categories: List[ITunesCategory] = []
        self.owner: Optional[ITunesOwner] = None

    def _load(self, source: etree._Element, namespaces: Mapping[str, str]) -> bool:
        loaded = [self._load_common(source, namespaces), self._load_optionals(source, namespaces)]
        return any(loaded)

    def _load_common(self, source, namespaces) -> bool:
        was_loaded = False

        author = find_text(source, f"{PREFIX}:author", namespaces)
        if author is not None:
            self.author = author
            was_loaded = True

        keywords = parse_keywords(find_text(source, f"{PREFIX}:keywords", namespaces))
        if keywords:
            self.keywords = self.keywords + keywords
            was_loaded = True

        new_feed_url = find_text(source, f"{PREFIX}:new-feed-url", namespaces)
        if new_feed_url is not None:
            url = parse_uri(new_feed_url)
            if url is None:
                logger.warning(f"Ignoring malformed new-feed-url: {new_feed_url!r}")
            else:
                self.new_feed_url = url
                was_loaded = True

        owner_element = find_element(source, f"{PREFIX}:owner", namespaces)
        if owner_element is not None:
            owner = ITunesOwner()
            if owner.load(owner_element, namespaces):
                self.owner = owner
                was_loaded = True

        subtitle = find_text(source, f"{PREFIX}:subtitle", namespaces)
        if subtitle is not None:
            self.subtitle = subtitle
            was_loaded = True

        summary = find_text(source, f"{PREFIX}:summary", namespaces)
        if summary is not None:
            self.summary = summary
            was_loaded = True

        for category_element in find_all(source, f"{PREFIX}:category", namespaces):
            category = ITunesCategory()
            if category.load(category_element, namespaces):
                self.categories.append(category)
                was_loaded = True

        return was_loaded

    def _load_optionals(self, source, namespaces) -> bool:
        was_loaded = False

        block = find_text(source, f"{PREFIX}:block", namespaces)
        if block is not None:
            flag = block.strip().casefold()
            if flag in ("yes", "no"):
                self.is_blocked = flag == "yes"
                was_loaded = True
            else:
                logger.warning(f"Ignoring unrecognized block value: {block!r}")

        explicit = find_text(source, f"{PREFIX}:explicit", namespaces)
        if explicit is not None:
            material = ITunesExplicitMaterial.by_name(explicit)
            if material is None:
                logger.warning(f"Ignoring unrecognized explicit value: {explicit!r}")
            else:
                self.explicit_material = material
                was_loaded = True

        image_element = find_element(source, f"{PREFIX}:image", namespaces)
        href = attribute(image_element, "href")
        if href is not None:
            image = parse_uri(href)
            if image is None:
                logger.warning(f"Ignoring malformed image href: {href!r}")
            else:
                self.image = image
                was_loaded = True

        duration_text = find_text(source, f"{PREFIX}:duration", namespaces)
        if duration_text is not None:
            duration = parse_duration(duration_text)
            if duration is None:
                logger.warning(f"Ignoring malformed duration: {duration_text!r}")
            else:
                self.duration = duration
                was_loaded = True

        return was_loaded

    def _write(self, writer: ExtensionWriter, namespace: str) -> None:
        if self.new_feed_url:
            writer.write_element("new-feed-url", namespace, self.new_feed_url)
        if self.subtitle:
            writer.write_element("subtitle", namespace, self.subtitle)
        if self.author:
            writer.write_element("author", namespace, self.author)
        if self.summary:
            writer.write_element("summary", namespace, self.summary)
        if self.owner is not None:
            self.owner.write_to(writer, namespace)
        if self.image:
            writer.write_element("image", namespace, attributes={"href": self.image})
        if self.duration is not None:
            writer.write_element("duration", namespace, format_duration(self.duration))

        keywords = [k for entry in self.keywords for k in parse_keywords(entry)]
        if keywords:
            writer.write_element("keywords", namespace, ",".join(keywords))

        if self.explicit_material is not ITunesExplicitMaterial.NONE:
            writer.write_element(
                "explicit", namespace, ITunesExplicitMaterial.as_string(self.explicit_material)
            )
        if self.is_blocked:
            writer.write_element("block", namespace, "yes")

        for category in self.categories:
            category.write_to(writer, namespace)

    def comparisons(self, other: "ITunesSyndicationExtensionContext") -> Iterator[int]:
        yield compare_text(self.author, other.author)
        yield compare_sequence(self.categories, other.categories, compare_objects)
        yield compare_values(self.duration, other.duration)
        yield compare_enum(self.explicit_material, other.explicit_material)
        yield compare_uri(self.image, other.image)
        yield compare_values(self.is_blocked, other.is_blocked)
        yield compare_sequence(self.keywords, other.keywords, compare_text)
        yield compare_uri(self.new_feed_url, other.new_feed_url)
        yield compare_objects(self.owner, other.owner)
        yield compare_text(self.subtitle, other.subtitle)
        yield compare_text(self.summary, other.summary)


class ITunesSyndicationExtension(SyndicationExtension):
    """Apple iTunes podcasting metadata."""

    descriptor = ExtensionDescriptor(
        prefix=PREFIX,
        namespace=NAMESPACE,
        version="1.0",
        documentation="http://www.apple.com/itunes/store/podcaststechspecs.html#rss",
        name="Apple iTunes Podcasting Extension",
        description="Extends syndication feeds to provide Apple iTunes podcasting media information.",
    )
    context_class = ITunesSyndicationExtensionContext
