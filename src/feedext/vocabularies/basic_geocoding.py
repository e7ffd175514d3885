"""
W3C Basic Geo (WGS84 lat/long) Vocabulary
"""

import logging
from typing import Iterator, Mapping

from lxml import etree

from feedext.comparison import compare_values
from feedext.extension import ExtensionContext, SyndicationExtension
from feedext.fields import DecimalField, format_decimal, parse_decimal
from feedext.models import ExtensionDescriptor
from feedext.nodes import find_text
from feedext.writer import ExtensionWriter

logger = logging.getLogger("feedext.vocabularies.basic_geocoding")

PREFIX = "geo"
NAMESPACE = "http://www.w3.org/2003/01/geo/wgs84_pos#"


class BasicGeocodingSyndicationExtensionContext(ExtensionContext):
    """WGS84 latitude and longitude in decimal degrees."""

    latitude = DecimalField()
    longitude = DecimalField()

    def _load(self, source: etree._Element, namespaces: Mapping[str, str]) -> bool:
        was_loaded = False
        for local_name, attr in (("lat", "latitude"), ("long", "longitude")):
            text = find_text(source, f"{PREFIX}:{local_name}", namespaces)
            if text is None:
                continue
            value = parse_decimal(text)
            if value is None:
                logger.warning(f"Ignoring malformed {local_name}: {text!r}")
                continue
            setattr(self, attr, value)
            was_loaded = True
        return was_loaded

    def _write(self, writer: ExtensionWriter, namespace: str) -> None:
        if self.latitude is not None:
            writer.write_element("lat", namespace, format_decimal(self.latitude))
        if self.longitude is not None:
            writer.write_element("long", namespace, format_decimal(self.longitude))

    def comparisons(self, other: "BasicGeocodingSyndicationExtensionContext") -> Iterator[int]:
        yield compare_values(self.latitude, other.latitude)
        yield compare_values(self.longitude, other.longitude)


class BasicGeocodingSyndicationExtension(SyndicationExtension):
    """Latitude and longitude of spatially-located things."""

    descriptor = ExtensionDescriptor(
        prefix=PREFIX,
        namespace=NAMESPACE,
        version="1.0",
        documentation="http://www.w3.org/2003/01/geo/",
        name="Basic Geocoding Vocabulary",
        description=(
            "Extends syndication feeds to provide a means of representing latitude, "
            "longitude and other information about spatially-located things."
        ),
    )
    context_class = BasicGeocodingSyndicationExtensionContext
