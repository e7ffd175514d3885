"""
RDF Site Summary 1.0 Slash Module

Slash-style site metadata for items: section, department, comment count and
the hit parade of comment counts at thresholds.
"""

import logging
from typing import Iterator, List, Mapping

from lxml import etree

from feedext.comparison import compare_sequence, compare_text, compare_values
from feedext.extension import ExtensionContext, SyndicationExtension
from feedext.fields import IntegerField, TextField, parse_integer
from feedext.models import ExtensionDescriptor
from feedext.nodes import find_text
from feedext.writer import ExtensionWriter

logger = logging.getLogger("feedext.vocabularies.slash")

PREFIX = "slash"
NAMESPACE = "http://purl.org/rss/1.0/modules/slash/"


def parse_hit_parade(text: str) -> List[int]:
    """
    Parse a comma separated hit parade.

    Raises:
        ValueError: If any entry is not an integer
    """
    return [int(entry.strip()) for entry in text.split(",") if entry.strip()]


class SiteSummarySlashSyndicationExtensionContext(ExtensionContext):
    """Fields of the Slash module."""

    comments = IntegerField(minimum=0)
    department = TextField()
    section = TextField()

    def __init__(self):
        self.hit_parade: List[int] = []

    def _load(self, source: etree._Element, namespaces: Mapping[str, str]) -> bool:
        was_loaded = False

        section = find_text(source, f"{PREFIX}:section", namespaces)
        if section is not None:
            self.section = section
            was_loaded = True

        department = find_text(source, f"{PREFIX}:department", namespaces)
        if department is not None:
            self.department = department
            was_loaded = True

        comments_text = find_text(source, f"{PREFIX}:comments", namespaces)
        if comments_text is not None:
            comments = parse_integer(comments_text)
            if comments is None or comments < 0:
                logger.warning(f"Ignoring malformed comments: {comments_text!r}")
            else:
                self.comments = comments
                was_loaded = True

        hit_parade_text = find_text(source, f"{PREFIX}:hit_parade", namespaces)
        if hit_parade_text is not None:
            try:
                hit_parade = parse_hit_parade(hit_parade_text)
            except ValueError:
                logger.warning(f"Ignoring malformed hit_parade: {hit_parade_text!r}")
            else:
                if hit_parade:
                    self.hit_parade.extend(hit_parade)
                    was_loaded = True

        return was_loaded

    def _write(self, writer: ExtensionWriter, namespace: str) -> None:
        if self.section:
            writer.write_element("section", namespace, self.section, cdata=True)
        if self.department:
            writer.write_element("department", namespace, self.department, cdata=True)
        if self.comments is not None:
            writer.write_element("comments", namespace, str(self.comments))
        if self.hit_parade:
            writer.write_element("hit_parade", namespace, ",".join(str(h) for h in self.hit_parade))

    def comparisons(self, other: "SiteSummarySlashSyndicationExtensionContext") -> Iterator[int]:
        yield compare_values(self.comments, other.comments)
        yield compare_text(self.department, other.department)
        yield compare_sequence(self.hit_parade, other.hit_parade)
        yield compare_text(self.section, other.section)


class SiteSummarySlashSyndicationExtension(SyndicationExtension):
    """Slash-based site metadata."""

    descriptor = ExtensionDescriptor(
        prefix=PREFIX,
        namespace=NAMESPACE,
        version="1.0",
        documentation="http://web.resource.org/rss/1.0/modules/slash/",
        name="RDF Site Summary (Slash)",
        description="Extends syndication feeds to provide a means of describing Slash-based site meta-data.",
    )
    context_class = SiteSummarySlashSyndicationExtensionContext
