"""
Extension Registry

Maps namespace URIs to extension types. Registries are passed explicitly to
the code that needs them; there is no process-wide instance.
"""

import logging
from collections import OrderedDict
from typing import Dict, Iterator, List, Mapping, Optional, Type, Union

from lxml import etree

from feedext.exceptions import (
    ExtensionArgumentError,
    ExtensionRegistrationError,
    require,
    require_text,
)
from feedext.extension import SyndicationExtension
from feedext.models import ExtensionDescriptor
from feedext.namespaces import namespace_of

logger = logging.getLogger("feedext.registry")

Candidate = Union[etree._Element, str, SyndicationExtension, Type[SyndicationExtension]]


class ExtensionRegistry:
    """
    Registered extension types keyed by namespace URI.

    Registration order is preserved. After freeze() the registry is
    read-only and may be shared between threads.
    """

    def __init__(self, extension_types=None):
        self._types: "OrderedDict[str, Type[SyndicationExtension]]" = OrderedDict()
        self._frozen = False
        for extension_type in extension_types or ():
            self.register(extension_type)

    # -------------------------------------------------------------------------
    # Mutation
    # -------------------------------------------------------------------------

    @property
    def frozen(self) -> bool:
        return self._frozen

    def freeze(self) -> "ExtensionRegistry":
        """Make the registry read-only."""
        self._frozen = True
        logger.debug(f"Registry frozen with {len(self._types)} extension types")
        return self

    def _check_mutable(self, namespace: str = None) -> None:
        if self._frozen:
            raise ExtensionRegistrationError("Registry is frozen", namespace)

    def register(self, extension_type: Type[SyndicationExtension]) -> ExtensionDescriptor:
        """
        Register an extension type under its namespace.

        Args:
            extension_type: SyndicationExtension subclass

        Returns:
            The type's descriptor

        Raises:
            ExtensionArgumentError: If extension_type is not an extension class
            ExtensionRegistrationError: If the namespace is claimed by another
                class, or the registry is frozen
        """
        require(extension_type, "extension_type")
        if not (isinstance(extension_type, type) and issubclass(extension_type, SyndicationExtension)):
            raise ExtensionArgumentError(
                f"{extension_type!r} is not a SyndicationExtension type", "extension_type"
            )
        descriptor = getattr(extension_type, "descriptor", None)
        if not isinstance(descriptor, ExtensionDescriptor):
            raise ExtensionArgumentError(
                f"{extension_type.__name__} does not declare a descriptor", "extension_type"
            )

        namespace = descriptor.namespace
        self._check_mutable(namespace)
        existing = self._types.get(namespace)
        if existing is extension_type:
            return descriptor
        if existing is not None:
            raise ExtensionRegistrationError(
                f"Namespace already registered by {existing.__name__}, "
                f"cannot register {extension_type.__name__}",
                namespace,
            )

        self._types[namespace] = extension_type
        logger.debug(f"Registered {extension_type.__name__} for {namespace}")
        return descriptor

    def unregister(self, namespace: str) -> bool:
        """
        Remove the type registered under a namespace.

        Returns:
            True if a type was removed
        """
        namespace = require_text(namespace, "namespace")
        self._check_mutable(namespace)
        removed = self._types.pop(namespace, None)
        if removed is not None:
            logger.debug(f"Unregistered {removed.__name__} for {namespace}")
        return removed is not None

    # -------------------------------------------------------------------------
    # Lookup
    # -------------------------------------------------------------------------

    def get(self, namespace: str) -> Optional[Type[SyndicationExtension]]:
        """Return the type registered under a namespace URI, or None."""
        if not namespace:
            return None
        return self._types.get(namespace)

    def match_type(self, candidate: Candidate) -> Optional[Type[SyndicationExtension]]:
        """
        Resolve a candidate to a registered extension type.

        Args:
            candidate: lxml element (by the namespace of its tag), namespace
                URI, extension instance or extension class (by exact type)

        Returns:
            Registered type, or None if nothing matches
        """
        require(candidate, "candidate")

        if isinstance(candidate, etree._Element):
            return self.get(namespace_of(candidate))

        if isinstance(candidate, str):
            return self.get(candidate.strip())

        if isinstance(candidate, SyndicationExtension):
            candidate = type(candidate)

        if isinstance(candidate, type):
            for extension_type in self._types.values():
                if extension_type is candidate:
                    return extension_type
            return None

        raise ExtensionArgumentError(
            f"Cannot match candidate of type {type(candidate).__name__}", "candidate"
        )

    def match(self, candidate: Candidate) -> Optional[ExtensionDescriptor]:
        """Resolve a candidate to the descriptor of a registered type, or None."""
        extension_type = self.match_type(candidate)
        if extension_type is None:
            return None
        return extension_type.descriptor

    def create(self, namespace: str) -> Optional[SyndicationExtension]:
        """Instantiate the type registered under a namespace, or None."""
        extension_type = self.get(namespace)
        if extension_type is None:
            return None
        return extension_type()

    def detect(self, namespaces: Mapping[str, str]) -> List[Type[SyndicationExtension]]:
        """
        Registered types whose namespace or prefix is declared.

        Args:
            namespaces: Prefix to namespace URI declarations in scope

        Returns:
            Matching types in registration order
        """
        require(namespaces, "namespaces")
        declared_uris = set(namespaces.values())
        return [
            extension_type
            for namespace, extension_type in self._types.items()
            if namespace in declared_uris or extension_type.descriptor.prefix in namespaces
        ]

    def descriptors(self) -> List[ExtensionDescriptor]:
        return [t.descriptor for t in self._types.values()]

    def types(self) -> List[Type[SyndicationExtension]]:
        return list(self._types.values())

    def as_dict(self) -> Dict[str, Type[SyndicationExtension]]:
        return dict(self._types)

    def __iter__(self) -> Iterator[Type[SyndicationExtension]]:
        return iter(list(self._types.values()))

    def __len__(self) -> int:
        return len(self._types)

    def __contains__(self, item) -> bool:
        if isinstance(item, str):
            return item in self._types
        if isinstance(item, type):
            return any(t is item for t in self._types.values())
        return False

    def __repr__(self):
        state = "frozen" if self._frozen else "mutable"
        return f"<ExtensionRegistry {len(self._types)} types, {state}>"
