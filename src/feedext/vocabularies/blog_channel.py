"""
blogChannel RSS Module

Links from a weblog's channel to its blogroll, subscriptions, a recommended
weblog and a change-notification service.
"""

import logging
from typing import Iterator, Mapping

from lxml import etree

from feedext.comparison import compare_uri
from feedext.extension import ExtensionContext, SyndicationExtension
from feedext.fields import UriField, parse_uri
from feedext.models import ExtensionDescriptor
from feedext.nodes import find_text
from feedext.writer import ExtensionWriter

logger = logging.getLogger("feedext.vocabularies.blog_channel")

PREFIX = "blogChannel"
NAMESPACE = "http://backend.userland.com/blogChannelModule"

# Element name -> context attribute, in write order
_ELEMENTS = (
    ("blogRoll", "blog_roll"),
    ("mySubscriptions", "my_subscriptions"),
    ("blink", "blink"),
    ("changes", "changes"),
)


class BlogChannelSyndicationExtensionContext(ExtensionContext):
    """Fields of the blogChannel module."""

    blink = UriField()
    blog_roll = UriField()
    changes = UriField()
    my_subscriptions = UriField()

    def _load(self, source: etree._Element, namespaces: Mapping[str, str]) -> bool:
        was_loaded = False
        for local_name, attr in _ELEMENTS:
            text = find_text(source, f"{PREFIX}:{local_name}", namespaces)
            if text is None:
                continue
            uri = parse_uri(text)
            if uri is None:
                logger.warning(f"Ignoring malformed {local_name}: {text!r}")
                continue
            setattr(self, attr, uri)
            was_loaded = True
        return was_loaded

    def _write(self, writer: ExtensionWriter, namespace: str) -> None:
        for local_name, attr in _ELEMENTS:
            value = getattr(self, attr)
            if value:
                writer.write_element(local_name, namespace, value)

    def comparisons(self, other: "BlogChannelSyndicationExtensionContext") -> Iterator[int]:
        yield compare_uri(self.blink, other.blink)
        yield compare_uri(self.blog_roll, other.blog_roll)
        yield compare_uri(self.changes, other.changes)
        yield compare_uri(self.my_subscriptions, other.my_subscriptions)


class BlogChannelSyndicationExtension(SyndicationExtension):
    """Weblog channel links."""

    descriptor = ExtensionDescriptor(
        prefix=PREFIX,
        namespace=NAMESPACE,
        version="1.0",
        documentation="http://backend.userland.com/blogChannelModule",
        name="blogChannel RSS Module",
        description="Extends syndication feeds to provide weblog-specific channel information.",
    )
    context_class = BlogChannelSyndicationExtensionContext
