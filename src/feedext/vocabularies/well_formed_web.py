"""
Well-Formed Web Comment API

Where to post comments for an item, and where to read them.
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

logger = logging.getLogger("feedext.vocabularies.well_formed_web")

PREFIX = "wfw"
NAMESPACE = "http://wellformedweb.org/CommentAPI/"


class WellFormedWebCommentsSyndicationExtensionContext(ExtensionContext):
    """Comment endpoint and comment feed."""

    comments = UriField()
    comments_feed = UriField()

    def _load(self, source: etree._Element, namespaces: Mapping[str, str]) -> bool:
        was_loaded = False

        comment = find_text(source, f"{PREFIX}:comment", namespaces)
        if comment is not None:
            uri = parse_uri(comment)
            if uri is None:
                logger.warning(f"Ignoring malformed comment: {comment!r}")
            else:
                self.comments = uri
                was_loaded = True

        comment_rss = find_text(source, f"{PREFIX}:commentRss", namespaces)
        if comment_rss is None:
            # Common misspelling
            comment_rss = find_text(source, f"{PREFIX}:commentRSS", namespaces)
        if comment_rss is not None:
            uri = parse_uri(comment_rss)
            if uri is None:
                logger.warning(f"Ignoring malformed commentRss: {comment_rss!r}")
            else:
                self.comments_feed = uri
                was_loaded = True

        return was_loaded

    def _write(self, writer: ExtensionWriter, namespace: str) -> None:
        if self.comments:
            writer.write_element("comment", namespace, self.comments)
        if self.comments_feed:
            writer.write_element("commentRss", namespace, self.comments_feed)

    def comparisons(self, other: "WellFormedWebCommentsSyndicationExtensionContext") -> Iterator[int]:
        yield compare_uri(self.comments, other.comments)
        yield compare_uri(self.comments_feed, other.comments_feed)


class WellFormedWebCommentsSyndicationExtension(SyndicationExtension):
    """Comment posting and retrieval endpoints for items."""

    descriptor = ExtensionDescriptor(
        prefix=PREFIX,
        namespace=NAMESPACE,
        version="1.0",
        documentation="http://wellformedweb.org/news/wfw_namespace_elements/",
        name="Well-Formed Web Comment API",
        description="Extends syndication feeds to provide a means of posting and retrieving comments on items.",
    )
    context_class = WellFormedWebCommentsSyndicationExtensionContext
