"""
Atom Feed Ranking Extension

A single ranking value for an entry, qualified by the ranking scheme and
domain it belongs to.
"""

import logging
from typing import Iterator, Mapping

from lxml import etree

from feedext.comparison import compare_text, compare_uri, compare_values
from feedext.extension import ExtensionContext, SyndicationExtension
from feedext.fields import DecimalField, TextField, UriField, format_decimal, parse_decimal, parse_uri
from feedext.models import ExtensionDescriptor
from feedext.nodes import attribute, element_value, find_element
from feedext.writer import ExtensionWriter

logger = logging.getLogger("feedext.vocabularies.feed_rank")

PREFIX = "re"
NAMESPACE = "http://purl.org/atompub/rank/1.0"


class FeedRankSyndicationExtensionContext(ExtensionContext):
    """Fields of a single re:rank element."""

    domain = UriField()
    label = TextField()
    scheme = UriField()
    value = DecimalField()

    def _load(self, source: etree._Element, namespaces: Mapping[str, str]) -> bool:
        rank = find_element(source, f"{PREFIX}:rank", namespaces)
        if rank is None:
            return False

        was_loaded = False
        for name in ("scheme", "domain"):
            raw = attribute(rank, name)
            if raw is None:
                continue
            uri = parse_uri(raw)
            if uri is None:
                logger.warning(f"Ignoring malformed rank {name}: {raw!r}")
                continue
            setattr(self, name, uri)
            was_loaded = True

        label = attribute(rank, "label")
        if label is not None:
            self.label = label
            was_loaded = True

        text = element_value(rank).strip()
        if text:
            value = parse_decimal(text)
            if value is None:
                logger.warning(f"Ignoring malformed rank value: {text!r}")
            else:
                self.value = value
                was_loaded = True

        return was_loaded

    def _write(self, writer: ExtensionWriter, namespace: str) -> None:
        if self.scheme is None and self.domain is None and not self.label and self.value is None:
            return

        # Attributes are unqualified so the element reads back as written
        attributes = {}
        if self.scheme:
            attributes["scheme"] = self.scheme
        if self.domain:
            attributes["domain"] = self.domain
        if self.label:
            attributes["label"] = self.label
        text = format_decimal(self.value) if self.value is not None else None
        writer.write_element("rank", namespace, text, attributes)

    def comparisons(self, other: "FeedRankSyndicationExtensionContext") -> Iterator[int]:
        yield compare_uri(self.domain, other.domain)
        yield compare_text(self.label, other.label)
        yield compare_uri(self.scheme, other.scheme)
        yield compare_values(self.value, other.value)


class FeedRankSyndicationExtension(SyndicationExtension):
    """Ranking of entries within a feed."""

    descriptor = ExtensionDescriptor(
        prefix=PREFIX,
        namespace=NAMESPACE,
        version="1.0",
        documentation="http://tools.ietf.org/html/draft-snell-atompub-feed-index-10",
        name="Atom Feed Ranking",
        description="Extends syndication feeds to provide a means of ranking entries.",
    )
    context_class = FeedRankSyndicationExtensionContext
