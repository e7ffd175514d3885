"""
Syndication Extension Base

Common behaviour for every extension vocabulary: identity, loading from a
node, writing to a writer, and equality/ordering/hashing derived from a
single comparison routine.
"""

import logging
from abc import ABC, abstractmethod
from itertools import chain
from typing import Any, ClassVar, Dict, Iterator, Mapping, Optional, Union

from lxml import etree

from feedext.comparison import (
    compare_fields,
    compare_ordinal,
    compare_text,
    compare_uri,
    compare_version,
)
from feedext.exceptions import (
    ExtensionArgumentError,
    ExtensionTypeMismatchError,
    require,
    require_text,
)
from feedext.models import ExtensionDescriptor
from feedext.namespaces import bind_namespace, declares_namespace, parse_xml, resolve_namespaces
from feedext.writer import ExtensionWriter

logger = logging.getLogger("feedext.extension")


class Comparable:
    """
    Equality, ordering and hashing derived from compare_to().

    Subclasses implement compare_to() and may override hash_key().
    """

    def compare_to(self, other: Any) -> int:
        raise NotImplementedError

    def hash_key(self) -> str:
        return str(self).casefold()

    def _check_comparable(self, other: Any) -> None:
        if type(other) is not type(self):
            raise ExtensionTypeMismatchError(type(self), type(other))

    def __eq__(self, other):
        if not isinstance(other, Comparable):
            return NotImplemented
        if type(other) is not type(self):
            return False
        return self.compare_to(other) == 0

    def __ne__(self, other):
        result = self.__eq__(other)
        if result is NotImplemented:
            return result
        return not result

    def __lt__(self, other):
        if not isinstance(other, Comparable):
            return NotImplemented
        return self.compare_to(other) < 0

    def __le__(self, other):
        if not isinstance(other, Comparable):
            return NotImplemented
        return self.compare_to(other) <= 0

    def __gt__(self, other):
        if not isinstance(other, Comparable):
            return NotImplemented
        return self.compare_to(other) > 0

    def __ge__(self, other):
        if not isinstance(other, Comparable):
            return NotImplemented
        return self.compare_to(other) >= 0

    def __hash__(self):
        return hash(self.hash_key())


class ExtensionContext(ABC):
    """
    Field-holding value object owned by a single extension instance.

    Subclasses implement _load(), _write() and comparisons().
    """

    def load(self, source: etree._Element, namespaces: Mapping[str, str]) -> bool:
        """
        Read every recognized field from the children of source.

        Args:
            source: Element whose children carry the vocabulary
            namespaces: Prefix to namespace binding

        Returns:
            True if at least one field was read
        """
        require(source, "source")
        require(namespaces, "namespaces")
        return self._load(source, namespaces)

    def write_to(self, writer: ExtensionWriter, namespace: str) -> None:
        """
        Write one element per field holding a non-default value.

        Args:
            writer: Destination writer
            namespace: Namespace URI to qualify elements with
        """
        require(writer, "writer")
        self._write(writer, require_text(namespace, "namespace"))

    @abstractmethod
    def _load(self, source: etree._Element, namespaces: Mapping[str, str]) -> bool:
        ...

    @abstractmethod
    def _write(self, writer: ExtensionWriter, namespace: str) -> None:
        ...

    @abstractmethod
    def comparisons(self, other: "ExtensionContext") -> Iterator[int]:
        """Yield per-field comparison results in declaration order."""
        ...


class SyndicationExtension(Comparable, ABC):
    """
    Base class for extension vocabularies.

    Each vocabulary declares its identity in `descriptor` and the class of
    its field holder in `context_class`. `extra_namespaces` lists prefixes,
    besides the vocabulary's own, that its elements are written under.
    """

    descriptor: ClassVar[ExtensionDescriptor]
    context_class: ClassVar[type]
    extra_namespaces: ClassVar[Dict[str, str]] = {}

    def __init__(self, context: Optional[ExtensionContext] = None):
        self._context = None
        self.context = context if context is not None else self.context_class()

    # -------------------------------------------------------------------------
    # Identity
    # -------------------------------------------------------------------------

    @property
    def prefix(self) -> str:
        return self.descriptor.prefix

    @property
    def namespace(self) -> str:
        return self.descriptor.namespace

    @property
    def version(self) -> str:
        return self.descriptor.version

    @property
    def documentation(self) -> str:
        return self.descriptor.documentation

    @property
    def name(self) -> str:
        return self.descriptor.name

    @property
    def description(self) -> str:
        return self.descriptor.description

    @property
    def context(self) -> ExtensionContext:
        return self._context

    @context.setter
    def context(self, value: ExtensionContext) -> None:
        require(value, "context")
        if not isinstance(value, self.context_class):
            raise ExtensionArgumentError(
                f"context must be {self.context_class.__name__}, got {type(value).__name__}",
                "context",
            )
        self._context = value

    @classmethod
    def match_by_type(cls, candidate: "SyndicationExtension") -> bool:
        """
        Predicate: True iff candidate is exactly this vocabulary type.

        Subclasses of a vocabulary do not match their parent.
        """
        require(candidate, "candidate")
        return type(candidate) is cls

    def namespace_declaration(self) -> Dict[str, str]:
        """Prefix to namespace declarations needed to write this extension."""
        declarations = {self.prefix: self.namespace}
        declarations.update(self.extra_namespaces)
        return declarations

    # -------------------------------------------------------------------------
    # Loading and writing
    # -------------------------------------------------------------------------

    def create_namespace_binding(
        self,
        source: etree._Element,
        namespaces: Optional[Mapping[str, str]] = None,
    ) -> Dict[str, str]:
        """Bind this vocabulary's prefixes against the declarations in scope."""
        if namespaces is None:
            namespaces = resolve_namespaces(source)
        binding = bind_namespace(namespaces, self.prefix, self.namespace)
        for prefix, uri in self.extra_namespaces.items():
            binding = bind_namespace(binding, prefix, uri)
        return binding

    def exists_in_source(self, source: etree._Element) -> bool:
        """True if the vocabulary's namespace or prefix is declared at source."""
        require(source, "source")
        return declares_namespace(source, self.prefix, self.namespace)

    def load(
        self,
        source: Union[etree._Element, bytes, str],
        namespaces: Optional[Mapping[str, str]] = None,
    ) -> bool:
        """
        Load fields from the children of source.

        Args:
            source: Owning element, or raw XML whose root is the owning element
            namespaces: In-scope declarations (resolved from source if omitted)

        Returns:
            True if at least one field was read
        """
        require(source, "source")
        if isinstance(source, (bytes, str)):
            source = parse_xml(source)

        binding = self.create_namespace_binding(source, namespaces)
        was_loaded = self.context.load(source, binding)
        logger.debug(f"{type(self).__name__} load from <{etree.QName(source).localname}>: {was_loaded}")
        return was_loaded

    def write_to(self, writer: Union[ExtensionWriter, etree._Element]) -> None:
        """
        Write this extension's elements.

        Args:
            writer: ExtensionWriter, or an lxml element to write beneath
        """
        require(writer, "writer")
        if isinstance(writer, etree._Element):
            writer = ExtensionWriter(writer)
        self.context.write_to(writer, self.namespace)

    def to_xml(self, pretty_print: bool = False) -> str:
        """Serialize as an XML fragment."""
        writer = ExtensionWriter.fragment(self.namespace_declaration())
        self.write_to(writer)
        return writer.children_to_string(pretty_print=pretty_print)

    def __str__(self):
        return self.to_xml()

    def __repr__(self):
        return f"<{type(self).__name__} {self.prefix}={self.namespace!r}>"

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def _identity_comparisons(self, other: "SyndicationExtension") -> Iterator[int]:
        yield compare_text(self.description, other.description)
        yield compare_uri(self.documentation, other.documentation)
        yield compare_text(self.name, other.name)
        yield compare_version(self.version, other.version)
        yield compare_ordinal(self.namespace, other.namespace)
        yield compare_ordinal(self.prefix, other.prefix)

    def compare_to(self, other: Optional["SyndicationExtension"]) -> int:
        """
        Three-way comparison against another extension of the same type.

        Identity fields are compared first, then context fields in
        declaration order; the first difference decides.

        Returns:
            -1, 0 or 1 (1 when other is None)

        Raises:
            ExtensionTypeMismatchError: If other is a different vocabulary
        """
        if other is None:
            return 1
        self._check_comparable(other)
        return compare_fields(chain(
            self._identity_comparisons(other),
            self.context.comparisons(other.context),
        ))

    def hash_key(self) -> str:
        return self.to_xml().casefold()

