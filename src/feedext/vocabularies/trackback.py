"""
Trackback RSS Module

The trackback ping URL of an item and the resources it pinged.
"""

import logging
from typing import Iterator, Mapping

from lxml import etree

from feedext.comparison import compare_sequence, compare_uri
from feedext.extension import ExtensionContext, SyndicationExtension
from feedext.fields import UriField, UriListField, normalize_uri, parse_uri
from feedext.models import ExtensionDescriptor
from feedext.nodes import element_value, find_all, find_text
from feedext.writer import ExtensionWriter

logger = logging.getLogger("feedext.vocabularies.trackback")

PREFIX = "trackback"
NAMESPACE = "http://madskills.com/public/xml/rss/module/trackback/"


class TrackbackSyndicationExtensionContext(ExtensionContext):
    """Ping URL and pinged resources."""

    ping = UriField()
    about = UriListField()

    def _load(self, source: etree._Element, namespaces: Mapping[str, str]) -> bool:
        was_loaded = False

        ping = find_text(source, f"{PREFIX}:ping", namespaces)
        if ping is not None:
            uri = parse_uri(ping)
            if uri is None:
                logger.warning(f"Ignoring malformed ping: {ping!r}")
            else:
                self.ping = uri
                was_loaded = True

        for about_element in find_all(source, f"{PREFIX}:about", namespaces):
            text = element_value(about_element)
            uri = parse_uri(text)
            if uri is None:
                if text.strip():
                    logger.warning(f"Ignoring malformed about: {text!r}")
                continue
            self.about.append(uri)
            was_loaded = True

        return was_loaded

    def _write(self, writer: ExtensionWriter, namespace: str) -> None:
        if self.ping:
            writer.write_element("ping", namespace, self.ping)
        for about in self.about:
            about = normalize_uri(about)
            if about:
                writer.write_element("about", namespace, about)

    def comparisons(self, other: "TrackbackSyndicationExtensionContext") -> Iterator[int]:
        yield compare_sequence(self.about, other.about, compare_uri)
        yield compare_uri(self.ping, other.ping)


class TrackbackSyndicationExtension(SyndicationExtension):
    """Trackback ping metadata for items."""

    descriptor = ExtensionDescriptor(
        prefix=PREFIX,
        namespace=NAMESPACE,
        version="1.0",
        documentation="http://madskills.com/public/xml/rss/module/trackback/",
        name="Trackback",
        description="Extends syndication feeds to provide a means of publishing trackback ping information.",
    )
    context_class = TrackbackSyndicationExtensionContext
