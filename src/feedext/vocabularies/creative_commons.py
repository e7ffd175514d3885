"""
Creative Commons RSS Module

Licenses that apply to a channel or item.
"""

import logging
from typing import Iterator, Mapping

from lxml import etree

from feedext.comparison import compare_sequence, compare_uri
from feedext.extension import ExtensionContext, SyndicationExtension
from feedext.fields import UriListField, normalize_uri, parse_uri
from feedext.models import ExtensionDescriptor
from feedext.nodes import element_value, find_all
from feedext.writer import ExtensionWriter

logger = logging.getLogger("feedext.vocabularies.creative_commons")

PREFIX = "creativeCommons"
NAMESPACE = "http://backend.userland.com/creativeCommonsRssModule"


class CreativeCommonsSyndicationExtensionContext(ExtensionContext):
    """License URIs, in document order."""

    licenses = UriListField()

    def _load(self, source: etree._Element, namespaces: Mapping[str, str]) -> bool:
        was_loaded = False
        for license_element in find_all(source, f"{PREFIX}:license", namespaces):
            text = element_value(license_element)
            if not text.strip():
                continue
            license_uri = parse_uri(text)
            if license_uri is None:
                logger.warning(f"Ignoring malformed license: {text!r}")
                continue
            self.licenses.append(license_uri)
            was_loaded = True
        return was_loaded

    def _write(self, writer: ExtensionWriter, namespace: str) -> None:
        for license_uri in self.licenses:
            license_uri = normalize_uri(license_uri)
            if license_uri:
                writer.write_element("license", namespace, license_uri)

    def comparisons(self, other: "CreativeCommonsSyndicationExtensionContext") -> Iterator[int]:
        yield compare_sequence(self.licenses, other.licenses, compare_uri)


class CreativeCommonsSyndicationExtension(SyndicationExtension):
    """Creative Commons licensing of feed content."""

    descriptor = ExtensionDescriptor(
        prefix=PREFIX,
        namespace=NAMESPACE,
        version="1.0",
        documentation="http://backend.userland.com/creativeCommonsRssModule",
        name="Creative Commons",
        description="Extends syndication feeds to provide a means of specifying the license that applies to content.",
    )
    context_class = CreativeCommonsSyndicationExtensionContext
