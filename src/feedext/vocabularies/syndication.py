"""
RDF Site Summary 1.0 Syndication Module

Hints to aggregators about how often a channel is updated.
"""

import logging
from typing import Iterator, Mapping

from lxml import etree

from feedext.comparison import compare_enum, compare_values
from feedext.datetime_utils import format_rfc3339, parse_rfc3339
from feedext.enums import VocabularyEnum
from feedext.extension import ExtensionContext, SyndicationExtension
from feedext.fields import DateTimeField, EnumField, IntegerField, parse_integer
from feedext.models import ExtensionDescriptor
from feedext.nodes import find_text
from feedext.writer import ExtensionWriter

logger = logging.getLogger("feedext.vocabularies.syndication")

PREFIX = "sy"
NAMESPACE = "http://purl.org/rss/1.0/modules/syndication/"


class SiteSummaryUpdatePeriod(VocabularyEnum):
    """Period over which a channel is updated."""
    NONE = ""
    DAILY = "daily"
    HOURLY = "hourly"
    MONTHLY = "monthly"
    WEEKLY = "weekly"
    YEARLY = "yearly"


class SiteSummaryUpdateSyndicationExtensionContext(ExtensionContext):
    """Update period, frequency within the period, and base date."""

    base = DateTimeField()
    frequency = IntegerField(minimum=1)
    period = EnumField(SiteSummaryUpdatePeriod)

    def _load(self, source: etree._Element, namespaces: Mapping[str, str]) -> bool:
        was_loaded = False

        period_text = find_text(source, f"{PREFIX}:updatePeriod", namespaces)
        if period_text is not None:
            period = SiteSummaryUpdatePeriod.by_name(period_text)
            if period is None:
                logger.warning(f"Ignoring unrecognized updatePeriod: {period_text!r}")
            else:
                self.period = period
                was_loaded = True

        frequency_text = find_text(source, f"{PREFIX}:updateFrequency", namespaces)
        if frequency_text is not None:
            frequency = parse_integer(frequency_text)
            if frequency is None or frequency < 1:
                logger.warning(f"Ignoring malformed updateFrequency: {frequency_text!r}")
            else:
                self.frequency = frequency
                was_loaded = True

        base_text = find_text(source, f"{PREFIX}:updateBase", namespaces)
        if base_text is not None:
            base = parse_rfc3339(base_text)
            if base is None:
                logger.warning(f"Ignoring malformed updateBase: {base_text!r}")
            else:
                self.base = base
                was_loaded = True

        return was_loaded

    def _write(self, writer: ExtensionWriter, namespace: str) -> None:
        if self.period is not SiteSummaryUpdatePeriod.NONE:
            writer.write_element("updatePeriod", namespace, SiteSummaryUpdatePeriod.as_string(self.period))
        if self.frequency is not None:
            writer.write_element("updateFrequency", namespace, str(self.frequency))
        if self.base is not None:
            writer.write_element("updateBase", namespace, format_rfc3339(self.base))

    def comparisons(self, other: "SiteSummaryUpdateSyndicationExtensionContext") -> Iterator[int]:
        yield compare_values(self.base, other.base)
        yield compare_values(self.frequency, other.frequency)
        yield compare_enum(self.period, other.period)


class SiteSummaryUpdateSyndicationExtension(SyndicationExtension):
    """Channel update schedule hints."""

    descriptor = ExtensionDescriptor(
        prefix=PREFIX,
        namespace=NAMESPACE,
        version="1.0",
        documentation="http://web.resource.org/rss/1.0/modules/syndication/",
        name="RDF Site Summary (Syndication)",
        description=(
            "Extends syndication feeds to provide syndication hints to aggregators and "
            "other entities regarding how often a feed is updated."
        ),
    )
    context_class = SiteSummaryUpdateSyndicationExtensionContext
