"""
Feed Paging and Archiving (RFC 5005)

Marks complete and archive feeds, and carries the atom:link relations that
connect the pages of a paged or archived feed.
"""

import logging
from typing import Iterator, List, Mapping, Optional

from lxml import etree

from feedext.comparison import compare_enum, compare_objects, compare_sequence, compare_uri, compare_values
from feedext.enums import VocabularyEnum
from feedext.exceptions import require
from feedext.extension import Comparable, ExtensionContext, SyndicationExtension
from feedext.fields import BooleanField, EnumField, UriField, parse_uri
from feedext.models import ExtensionDescriptor
from feedext.namespaces import ATOM_NS
from feedext.nodes import attribute, find_all, find_element
from feedext.writer import ExtensionWriter

logger = logging.getLogger("feedext.vocabularies.feed_history")

PREFIX = "fh"
NAMESPACE = "http://purl.org/syndication/history/1.0"
ATOM_PREFIX = "atom"


class FeedHistoryLinkRelationType(VocabularyEnum):
    """Link relations used for feed paging and archiving."""
    NONE = ""
    CURRENT = "current"
    FIRST = "first"
    LAST = "last"
    NEXT = "next"
    NEXT_ARCHIVE = "next-archive"
    PREVIOUS = "previous"
    PREVIOUS_ARCHIVE = "prev-archive"


class FeedHistoryLinkRelation(Comparable):
    """An atom:link with a paging or archiving relation."""

    relation_type = EnumField(FeedHistoryLinkRelationType)
    uri = UriField()

    def __init__(self, relation_type: FeedHistoryLinkRelationType = None, uri: Optional[str] = None):
        self.relation_type = relation_type
        self.uri = uri

    def load(self, source: etree._Element) -> bool:
        """Load from an atom:link element; links with other relations are ignored."""
        require(source, "source")
        relation_type = FeedHistoryLinkRelationType.by_name(attribute(source, "rel"))
        if relation_type is None:
            return False

        href = attribute(source, "href")
        uri = parse_uri(href) if href is not None else None
        if href is not None and uri is None:
            logger.warning(f"Ignoring malformed link href: {href!r}")
        self.relation_type = relation_type
        self.uri = uri
        return True

    def write_to(self, writer: ExtensionWriter) -> None:
        attributes = {
            "href": self.uri or "",
            "rel": FeedHistoryLinkRelationType.as_string(self.relation_type),
        }
        writer.write_element("link", ATOM_NS, attributes=attributes)

    def compare_to(self, other: Optional["FeedHistoryLinkRelation"]) -> int:
        if other is None:
            return 1
        self._check_comparable(other)
        return compare_enum(self.relation_type, other.relation_type) or compare_uri(self.uri, other.uri)

    def hash_key(self) -> str:
        return f"{self.relation_type.value}|{self.uri or ''}".casefold()

    def __repr__(self):
        return f"FeedHistoryLinkRelation({self.relation_type!s}, {self.uri!r})"


class FeedHistorySyndicationExtensionContext(ExtensionContext):
    """Archive and completeness markers plus paging links."""

    is_archive = BooleanField()
    is_complete = BooleanField()

    def __init__(self):
        self.relations: List[FeedHistoryLinkRelation] = []

    def _load(self, source: etree._Element, namespaces: Mapping[str, str]) -> bool:
        was_loaded = False

        if find_element(source, f"{PREFIX}:archive", namespaces) is not None:
            self.is_archive = True
            was_loaded = True
        if find_element(source, f"{PREFIX}:complete", namespaces) is not None:
            self.is_complete = True
            was_loaded = True

        for link in find_all(source, f"{ATOM_PREFIX}:link", namespaces):
            relation = FeedHistoryLinkRelation()
            if relation.load(link):
                self.relations.append(relation)
                was_loaded = True

        return was_loaded

    def _write(self, writer: ExtensionWriter, namespace: str) -> None:
        if self.is_archive:
            writer.write_element("archive", namespace)
        if self.is_complete:
            writer.write_element("complete", namespace)
        for relation in self.relations:
            relation.write_to(writer)

    def comparisons(self, other: "FeedHistorySyndicationExtensionContext") -> Iterator[int]:
        yield compare_values(self.is_archive, other.is_archive)
        yield compare_values(self.is_complete, other.is_complete)
        yield compare_sequence(self.relations, other.relations, compare_objects)


class FeedHistorySyndicationExtension(SyndicationExtension):
    """Feed paging and archiving."""

    descriptor = ExtensionDescriptor(
        prefix=PREFIX,
        namespace=NAMESPACE,
        version="1.0",
        documentation="http://www.ietf.org/rfc/rfc5005.txt",
        name="Feed Paging and Archiving",
        description=(
            "Extends syndication feeds to provide a means of publishing of entries "
            "across one or more feed documents."
        ),
    )
    context_class = FeedHistorySyndicationExtensionContext
    extra_namespaces = {ATOM_PREFIX: ATOM_NS}
