"""
Dublin Core Metadata Element Set

The fifteen DCMES elements. Dates are RFC 3339 and languages are validated
BCP 47 tags; the type element uses the DCMI type vocabulary.
"""

import logging
from typing import Iterator, Mapping, Optional

from lxml import etree

from feedext.comparison import compare_enum, compare_text, compare_values
from feedext.datetime_utils import format_rfc3339, parse_rfc3339
from feedext.enums import VocabularyEnum
from feedext.exceptions import ExtensionArgumentError
from feedext.extension import ExtensionContext, SyndicationExtension
from feedext.fields import DateTimeField, EnumField, TextField
from feedext.language import LanguageTag, parse_language_tag
from feedext.models import ExtensionDescriptor
from feedext.nodes import find_text
from feedext.writer import ExtensionWriter

logger = logging.getLogger("feedext.vocabularies.dublin_core")

PREFIX = "dc"
NAMESPACE = "http://purl.org/dc/elements/1.1/"

# Plain text elements, in alphabetical (load) order
_TEXT_ELEMENTS = (
    "contributor",
    "coverage",
    "creator",
    "description",
    "format",
    "identifier",
    "publisher",
    "relation",
    "rights",
    "source",
    "subject",
    "title",
)


class DublinCoreTypeVocabularies(VocabularyEnum):
    """DCMI Type Vocabulary."""
    NONE = ""
    COLLECTION = "Collection"
    DATASET = "Dataset"
    EVENT = "Event"
    IMAGE = "Image"
    INTERACTIVE_RESOURCE = "InteractiveResource"
    MOVING_IMAGE = "MovingImage"
    PHYSICAL_OBJECT = "PhysicalObject"
    SERVICE = "Service"
    SOFTWARE = "Software"
    SOUND = "Sound"
    STILL_IMAGE = "StillImage"
    TEXT = "Text"


class DublinCoreElementSetSyndicationExtensionContext(ExtensionContext):
    """Fields of the Dublin Core element set."""

    contributor = TextField()
    coverage = TextField()
    creator = TextField()
    date = DateTimeField()
    description = TextField()
    format = TextField()
    identifier = TextField()
    publisher = TextField()
    relation = TextField()
    rights = TextField()
    source = TextField()
    subject = TextField()
    title = TextField()
    type_vocabulary = EnumField(DublinCoreTypeVocabularies)

    def __init__(self):
        self._language: Optional[LanguageTag] = None

    @property
    def language(self) -> Optional[LanguageTag]:
        return self._language

    @language.setter
    def language(self, value) -> None:
        if value is None or isinstance(value, LanguageTag):
            self._language = value
            return
        tag = parse_language_tag(str(value))
        if tag is None:
            raise ExtensionArgumentError(f"Invalid language tag {value!r}", "language")
        self._language = tag

    def _load(self, source: etree._Element, namespaces: Mapping[str, str]) -> bool:
        was_loaded = False

        for local_name in _TEXT_ELEMENTS:
            value = find_text(source, f"{PREFIX}:{local_name}", namespaces)
            if value is not None:
                setattr(self, local_name, value)
                was_loaded = True

        date_text = find_text(source, f"{PREFIX}:date", namespaces)
        if date_text is not None:
            date = parse_rfc3339(date_text)
            if date is None:
                logger.warning(f"Ignoring malformed date: {date_text!r}")
            else:
                self.date = date
                was_loaded = True

        language_text = find_text(source, f"{PREFIX}:language", namespaces)
        if language_text is not None:
            language = parse_language_tag(language_text)
            if language is None:
                logger.warning(f"Ignoring malformed language: {language_text!r}")
            else:
                self.language = language
                was_loaded = True

        type_text = find_text(source, f"{PREFIX}:type", namespaces)
        if type_text is not None:
            type_vocabulary = DublinCoreTypeVocabularies.by_name(type_text)
            if type_vocabulary is None:
                logger.warning(f"Ignoring unrecognized type: {type_text!r}")
            else:
                self.type_vocabulary = type_vocabulary
                was_loaded = True

        return was_loaded

    def _write(self, writer: ExtensionWriter, namespace: str) -> None:
        if self.contributor:
            writer.write_element("contributor", namespace, self.contributor)
        if self.coverage:
            writer.write_element("coverage", namespace, self.coverage)
        if self.creator:
            writer.write_element("creator", namespace, self.creator)
        if self.date is not None:
            writer.write_element("date", namespace, format_rfc3339(self.date))
        if self.description:
            writer.write_element("description", namespace, self.description)
        if self.format:
            writer.write_element("format", namespace, self.format)
        if self.identifier:
            writer.write_element("identifier", namespace, self.identifier)
        if self.language is not None:
            writer.write_element("language", namespace, str(self.language))
        if self.publisher:
            writer.write_element("publisher", namespace, self.publisher)
        if self.relation:
            writer.write_element("relation", namespace, self.relation)
        if self.rights:
            writer.write_element("rights", namespace, self.rights)
        if self.source:
            writer.write_element("source", namespace, self.source)
        if self.subject:
            writer.write_element("subject", namespace, self.subject)
        if self.title:
            writer.write_element("title", namespace, self.title)
        if self.type_vocabulary is not DublinCoreTypeVocabularies.NONE:
            writer.write_element(
                "type", namespace, DublinCoreTypeVocabularies.as_string(self.type_vocabulary)
            )

    def comparisons(self, other: "DublinCoreElementSetSyndicationExtensionContext") -> Iterator[int]:
        yield compare_text(self.contributor, other.contributor)
        yield compare_text(self.coverage, other.coverage)
        yield compare_text(self.creator, other.creator)
        yield compare_values(self.date, other.date)
        yield compare_text(self.description, other.description)
        yield compare_text(self.format, other.format)
        yield compare_text(self.identifier, other.identifier)
        yield compare_text(
            str(self.language) if self.language else None,
            str(other.language) if other.language else None,
        )
        yield compare_text(self.publisher, other.publisher)
        yield compare_text(self.relation, other.relation)
        yield compare_text(self.rights, other.rights)
        yield compare_text(self.source, other.source)
        yield compare_text(self.subject, other.subject)
        yield compare_text(self.title, other.title)
        yield compare_enum(self.type_vocabulary, other.type_vocabulary)


class DublinCoreElementSetSyndicationExtension(SyndicationExtension):
    """Dublin Core Metadata Element Set, version 1.1."""

    descriptor = ExtensionDescriptor(
        prefix=PREFIX,
        namespace=NAMESPACE,
        version="1.1",
        documentation="http://dublincore.org/documents/dces/",
        name="Dublin Core Metadata Element Set",
        description=(
            "Extends syndication feeds with the fifteen Dublin Core elements "
            "used to describe resources."
        ),
    )
    context_class = DublinCoreElementSetSyndicationExtensionContext
