"""
Tests for the extension base: identity, loading, writing and value semantics.
"""

from datetime import datetime, timezone

import pytest
from lxml import etree

from feedext.exceptions import ExtensionArgumentError, ExtensionTypeMismatchError
from feedext.models import ExtensionDescriptor
from feedext.vocabularies import (
    DublinCoreElementSetSyndicationExtension,
    ITunesSyndicationExtension,
    SiteSummaryUpdateSyndicationExtension,
)
from feedext.vocabularies.dublin_core import DublinCoreElementSetSyndicationExtensionContext
from feedext.vocabularies.itunes import ITunesSyndicationExtensionContext

DC_NS = "http://purl.org/dc/elements/1.1/"


class CustomDublinCore(DublinCoreElementSetSyndicationExtension):
    """Subclass used to check exact type matching."""


class TestDescriptor:
    """Tests for extension identity."""

    def test_identity_properties(self):
        """Identity properties delegate to the descriptor."""
        extension = DublinCoreElementSetSyndicationExtension()

        assert extension.prefix == "dc"
        assert extension.namespace == DC_NS
        assert extension.version == "1.1"
        assert extension.documentation == "http://dublincore.org/documents/dces/"
        assert extension.name == "Dublin Core Metadata Element Set"

    def test_descriptor_trimmed(self):
        """Descriptor values are trimmed."""
        descriptor = ExtensionDescriptor(" ex ", " http://example.com/ns ", "1.0", "http://example.com", " Example ")
        assert descriptor.prefix == "ex"
        assert descriptor.namespace == "http://example.com/ns"
        assert descriptor.name == "Example"
        assert descriptor.description == ""

    def test_descriptor_required(self):
        """Empty required values are rejected."""
        with pytest.raises(ExtensionArgumentError):
            ExtensionDescriptor("", "http://example.com/ns", "1.0", "http://example.com", "Example")
        with pytest.raises(ExtensionArgumentError):
            ExtensionDescriptor("ex", "  ", "1.0", "http://example.com", "Example")


class TestContext:
    """Tests for context ownership."""

    def test_default_context(self):
        """A fresh extension owns an empty context of its type."""
        extension = ITunesSyndicationExtension()
        assert isinstance(extension.context, ITunesSyndicationExtensionContext)

    def test_replace_context(self):
        """The context can be replaced by one of the right type."""
        context = DublinCoreElementSetSyndicationExtensionContext()
        context.creator = "Jane Doe"
        extension = DublinCoreElementSetSyndicationExtension(context)
        assert extension.context.creator == "Jane Doe"

    def test_reject_none_context(self):
        """A None context is rejected."""
        extension = DublinCoreElementSetSyndicationExtension()
        with pytest.raises(ExtensionArgumentError):
            extension.context = None

    def test_reject_wrong_context(self):
        """A context of another vocabulary is rejected."""
        extension = DublinCoreElementSetSyndicationExtension()
        with pytest.raises(ExtensionArgumentError):
            extension.context = ITunesSyndicationExtensionContext()


class TestLoad:
    """Tests for loading through the base class."""

    ITEM_XML = b'''<item xmlns:dc="http://purl.org/dc/elements/1.1/">
        <title>Item</title>
        <dc:creator>Jane Doe</dc:creator>
    </item>'''

    def test_load_element(self):
        """Load from an element."""
        extension = DublinCoreElementSetSyndicationExtension()
        assert extension.load(etree.fromstring(self.ITEM_XML)) is True
        assert extension.context.creator == "Jane Doe"

    def test_load_raw_xml(self):
        """Load from raw bytes and text."""
        extension = DublinCoreElementSetSyndicationExtension()
        assert extension.load(self.ITEM_XML) is True

        extension = DublinCoreElementSetSyndicationExtension()
        assert extension.load(self.ITEM_XML.decode("utf-8")) is True

    def test_load_nothing(self):
        """Structural absence returns False."""
        extension = DublinCoreElementSetSyndicationExtension()
        assert extension.load(b"<item><title>Item</title></item>") is False

    def test_load_other_prefix(self):
        """The vocabulary is found under a document-chosen prefix."""
        extension = DublinCoreElementSetSyndicationExtension()
        assert extension.load(b'<item xmlns:d="http://purl.org/dc/elements/1.1/"><d:title>T</d:title></item>')
        assert extension.context.title == "T"

    def test_load_none(self):
        """A missing source is an argument error."""
        with pytest.raises(ExtensionArgumentError):
            DublinCoreElementSetSyndicationExtension().load(None)

    def test_exists_in_source(self):
        """Presence of the vocabulary's declarations."""
        extension = DublinCoreElementSetSyndicationExtension()
        assert extension.exists_in_source(etree.fromstring(self.ITEM_XML)) is True
        assert extension.exists_in_source(etree.fromstring(b"<item/>")) is False


class TestWrite:
    """Tests for writing through the base class."""

    def test_write_to_element(self):
        """Writing beneath an lxml element."""
        extension = DublinCoreElementSetSyndicationExtension()
        extension.context.title = "Title"
        parent = etree.Element("item", nsmap=extension.namespace_declaration())

        extension.write_to(parent)

        assert parent[0].tag == "{%s}title" % DC_NS
        assert parent[0].text == "Title"

    def test_to_xml(self):
        """Standalone serialization uses the vocabulary prefix."""
        extension = DublinCoreElementSetSyndicationExtension()
        extension.context.title = "Title"

        xml = extension.to_xml()

        assert xml.startswith("<dc:title")
        assert "Title</dc:title>" in xml
        assert str(extension) == xml

    def test_empty_writes_nothing(self):
        """Unset fields are omitted."""
        assert DublinCoreElementSetSyndicationExtension().to_xml() == ""

    def test_write_none(self):
        """A missing writer is an argument error."""
        with pytest.raises(ExtensionArgumentError):
            DublinCoreElementSetSyndicationExtension().write_to(None)

    def test_namespace_declaration(self):
        """Declarations include the vocabulary prefix."""
        assert DublinCoreElementSetSyndicationExtension().namespace_declaration() == {"dc": DC_NS}


class TestValueSemantics:
    """Tests for equality, ordering and hashing."""

    def _dc(self, **fields):
        extension = DublinCoreElementSetSyndicationExtension()
        for name, value in fields.items():
            setattr(extension.context, name, value)
        return extension

    def test_empty_instances_equal(self):
        """Two fresh instances are equal and hash alike."""
        first = DublinCoreElementSetSyndicationExtension()
        second = DublinCoreElementSetSyndicationExtension()
        assert first == second
        assert first.compare_to(second) == 0
        assert hash(first) == hash(second)

    def test_case_insensitive_text(self):
        """Text differing only in case is equal and hashes alike."""
        first = self._dc(creator="Jane Doe")
        second = self._dc(creator="JANE DOE")
        assert first == second
        assert hash(first) == hash(second)

    def test_total_order(self):
        """Exactly one of <, ==, > holds."""
        first = self._dc(title="Alpha")
        second = self._dc(title="beta")

        assert first < second
        assert second > first
        assert first != second
        assert first <= second and second >= first
        assert first.compare_to(second) == -second.compare_to(first)

    def test_first_difference_decides(self):
        """An earlier field decides regardless of later ones."""
        first = self._dc(contributor="A", title="Z")
        second = self._dc(contributor="B", title="A")
        assert first < second

    def test_unset_sorts_first(self):
        """An unset date sorts before a set date."""
        first = self._dc()
        second = self._dc(date=datetime(2008, 1, 23, tzinfo=timezone.utc))
        assert first < second

    def test_compare_none(self):
        """Any instance is greater than None."""
        assert DublinCoreElementSetSyndicationExtension().compare_to(None) == 1

    def test_compare_other_type(self):
        """Ordering across vocabularies is a type mismatch."""
        with pytest.raises(ExtensionTypeMismatchError):
            DublinCoreElementSetSyndicationExtension().compare_to(ITunesSyndicationExtension())
        with pytest.raises(TypeError):
            DublinCoreElementSetSyndicationExtension() < SiteSummaryUpdateSyndicationExtension()

    def test_equality_other_type(self):
        """Instances of different vocabularies are never equal."""
        assert DublinCoreElementSetSyndicationExtension() != ITunesSyndicationExtension()
        assert DublinCoreElementSetSyndicationExtension() != CustomDublinCore()
        assert DublinCoreElementSetSyndicationExtension() != "dc"


class TestMatchByType:
    """Tests for exact type matching."""

    def test_same_type(self):
        """An instance matches its own vocabulary."""
        assert DublinCoreElementSetSyndicationExtension.match_by_type(DublinCoreElementSetSyndicationExtension())

    def test_other_type(self):
        """Other vocabularies do not match."""
        assert not DublinCoreElementSetSyndicationExtension.match_by_type(ITunesSyndicationExtension())

    def test_subclass(self):
        """Subclasses do not match their parent, nor the reverse."""
        assert not DublinCoreElementSetSyndicationExtension.match_by_type(CustomDublinCore())
        assert not CustomDublinCore.match_by_type(DublinCoreElementSetSyndicationExtension())
        assert CustomDublinCore.match_by_type(CustomDublinCore())
