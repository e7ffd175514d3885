"""
Built-in Extension Vocabularies
"""

from typing import Iterable, Optional

from feedext.exceptions import ExtensionConfigError
from feedext.registry import ExtensionRegistry
from feedext.vocabularies.basic_geocoding import BasicGeocodingSyndicationExtension
from feedext.vocabularies.blog_channel import BlogChannelSyndicationExtension
from feedext.vocabularies.creative_commons import CreativeCommonsSyndicationExtension
from feedext.vocabularies.dublin_core import (
    DublinCoreElementSetSyndicationExtension,
    DublinCoreTypeVocabularies,
)
from feedext.vocabularies.feed_history import (
    FeedHistoryLinkRelation,
    FeedHistoryLinkRelationType,
    FeedHistorySyndicationExtension,
)
from feedext.vocabularies.feed_rank import FeedRankSyndicationExtension
from feedext.vocabularies.itunes import (
    ITunesCategory,
    ITunesExplicitMaterial,
    ITunesOwner,
    ITunesSyndicationExtension,
)
from feedext.vocabularies.pingback import PingbackSyndicationExtension
from feedext.vocabularies.slash import SiteSummarySlashSyndicationExtension
from feedext.vocabularies.syndication import (
    SiteSummaryUpdatePeriod,
    SiteSummaryUpdateSyndicationExtension,
)
from feedext.vocabularies.trackback import TrackbackSyndicationExtension
from feedext.vocabularies.well_formed_web import WellFormedWebCommentsSyndicationExtension

# Registration order
BUILTIN_EXTENSIONS = (
    ITunesSyndicationExtension,
    DublinCoreElementSetSyndicationExtension,
    CreativeCommonsSyndicationExtension,
    FeedRankSyndicationExtension,
    BlogChannelSyndicationExtension,
    WellFormedWebCommentsSyndicationExtension,
    BasicGeocodingSyndicationExtension,
    SiteSummarySlashSyndicationExtension,
    SiteSummaryUpdateSyndicationExtension,
    FeedHistorySyndicationExtension,
    TrackbackSyndicationExtension,
    PingbackSyndicationExtension,
)

BUILTIN_PREFIXES = {t.descriptor.prefix: t for t in BUILTIN_EXTENSIONS}


def create_default_registry(prefixes: Optional[Iterable[str]] = None) -> ExtensionRegistry:
    """
    Build a registry holding the built-in vocabularies.

    Args:
        prefixes: Prefixes of the vocabularies to register (all when None)

    Returns:
        New, unfrozen ExtensionRegistry

    Raises:
        ExtensionConfigError: If a prefix is not a built-in vocabulary
    """
    if prefixes is None:
        return ExtensionRegistry(BUILTIN_EXTENSIONS)

    registry = ExtensionRegistry()
    for prefix in prefixes:
        extension_type = BUILTIN_PREFIXES.get(prefix)
        if extension_type is None:
            raise ExtensionConfigError(f"Unknown vocabulary prefix: {prefix}")
        registry.register(extension_type)
    return registry


__all__ = [
    "BUILTIN_EXTENSIONS",
    "BUILTIN_PREFIXES",
    "create_default_registry",
    "BasicGeocodingSyndicationExtension",
    "BlogChannelSyndicationExtension",
    "CreativeCommonsSyndicationExtension",
    "DublinCoreElementSetSyndicationExtension",
    "DublinCoreTypeVocabularies",
    "FeedHistoryLinkRelation",
    "FeedHistoryLinkRelationType",
    "FeedHistorySyndicationExtension",
    "FeedRankSyndicationExtension",
    "ITunesCategory",
    "ITunesExplicitMaterial",
    "ITunesOwner",
    "ITunesSyndicationExtension",
    "PingbackSyndicationExtension",
    "SiteSummarySlashSyndicationExtension",
    "SiteSummaryUpdatePeriod",
    "SiteSummaryUpdateSyndicationExtension",
    "TrackbackSyndicationExtension",
    "WellFormedWebCommentsSyndicationExtension",
]
