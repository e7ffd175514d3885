"""
Pingback RSS Module

The pingback server and target of an item and the resources it pinged.
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

logger = logging.getLogger("feedext.vocabularies.pingback")

PREFIX = "pingback"
NAMESPACE = "http://madskills.com/public/xml/rss/module/pingback/"


class PingbackSyndicationExtensionContext(ExtensionContext):
    """Pingback server, target and pinged resources."""

    server = UriField()
    target = UriField()
    about = UriListField()

    def _load(self, source: etree._Element, namespaces: Mapping[str, str]) -> bool:
        was_loaded = False

        for local_name in ("server", "target"):
            text = find_text(source, f"{PREFIX}:{local_name}", namespaces)
            if text is None:
                continue
            uri = parse_uri(text)
            if uri is None:
                logger.warning(f"Ignoring malformed {local_name}: {text!r}")
                continue
            setattr(self, local_name, uri)
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
        if self.server:
            writer.write_element("server", namespace, self.server)
        if self.target:
            writer.write_element("target", namespace, self.target)
        for about in self.about:
            about = normalize_uri(about)
            if about:
                writer.write_element("about", namespace, about)

    def comparisons(self, other: "PingbackSyndicationExtensionContext") -> Iterator[int]:
        yield compare_sequence(self.about, other.about, compare_uri)
        yield compare_uri(self.server, other.server)
        yield compare_uri(self.target, other.target)


class PingbackSyndicationExtension(SyndicationExtension):
    """Pingback metadata for items."""

    descriptor = ExtensionDescriptor(
        prefix=PREFIX,
        namespace=NAMESPACE,
        version="1.0",
        documentation="http://madskills.com/public/xml/rss/module/pingback/",
        name="Pingback",
        description="Extends syndication feeds to provide a means of publishing pingback information.",
    )
    context_class = PingbackSyndicationExtensionContext
