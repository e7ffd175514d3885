"""
Extension Adapter

Fills an entity's extension collection from the children of a source element
using a registry, and writes collections back out.
"""

import logging
from typing import Dict, Iterable, List, Type

from lxml import etree

from feedext.exceptions import ExtensionArgumentError, require
from feedext.extension import SyndicationExtension
from feedext.models import ExtensionLoadSettings
from feedext.namespaces import namespace_of, resolve_namespaces
from feedext.writer import ExtensionWriter

logger = logging.getLogger("feedext.adapter")


class ExtensionAdapter:
    """
    Loads registered extensions found beneath a source element.

    Args:
        source: The owning feed, channel or item element
        registry: ExtensionRegistry used to resolve namespaces
        settings: Load settings (defaults apply when None)
    """

    def __init__(self, source: etree._Element, registry, settings: ExtensionLoadSettings = None):
        self.source = require(source, "source")
        self.registry = require(registry, "registry")
        self.settings = settings if settings is not None else ExtensionLoadSettings()

    def candidate_types(self) -> List[Type[SyndicationExtension]]:
        """
        Extension types to attempt, without duplicates.

        Types matched by child element namespace come first (document order),
        then types detected from the declarations in scope, then the
        settings' supported extensions.
        """
        candidates: List[Type[SyndicationExtension]] = []

        def add(extension_type):
            if extension_type not in candidates:
                candidates.append(extension_type)

        for child in self.source:
            if not isinstance(child.tag, str):
                continue
            namespace = namespace_of(child)
            if not namespace:
                continue
            extension_type = self.registry.get(namespace)
            if extension_type is None:
                logger.debug(f"Skipping <{child.tag}>: namespace not registered")
                continue
            add(extension_type)

        if self.settings.auto_detect_extensions:
            for extension_type in self.registry.detect(resolve_namespaces(self.source)):
                add(extension_type)

        for extension_type in self.settings.supported_extensions:
            if not (isinstance(extension_type, type) and issubclass(extension_type, SyndicationExtension)):
                raise ExtensionArgumentError(
                    f"{extension_type!r} is not a SyndicationExtension type", "supported_extensions"
                )
            add(extension_type)

        return candidates

    def fill(self, entity) -> int:
        """
        Load each candidate type and attach those that read any field.

        Args:
            entity: ExtensibleEntity to attach to

        Returns:
            Number of extensions attached
        """
        require(entity, "entity")
        namespaces = resolve_namespaces(self.source)
        attached = 0

        for extension_type in self.candidate_types():
            extension = extension_type()
            if extension.load(self.source, namespaces):
                entity.add_extension(extension)
                attached += 1
            else:
                logger.debug(f"{extension_type.__name__} found nothing to load")

        logger.debug(f"Attached {attached} extensions from <{etree.QName(self.source).localname}>")
        return attached

    @staticmethod
    def write_extensions_to(extensions: Iterable[SyndicationExtension], parent: etree._Element) -> None:
        """Write extensions beneath parent in the given order."""
        require(extensions, "extensions")
        writer = ExtensionWriter(require(parent, "parent"))
        for extension in extensions:
            extension.write_to(writer)

    @staticmethod
    def namespace_declarations(types: Iterable[Type[SyndicationExtension]]) -> Dict[str, str]:
        """
        Merged prefix declarations for a set of extension types.

        Pass the result as `nsmap` when creating the parent element.
        """
        require(types, "types")
        declarations: Dict[str, str] = {}
        for extension_type in types:
            declarations.update(extension_type().namespace_declaration())
        return declarations

    @staticmethod
    def fill_extension_types(entity, types: List[Type[SyndicationExtension]]) -> List[Type[SyndicationExtension]]:
        """Append the distinct types attached to entity that are not yet in types."""
        require(entity, "entity")
        require(types, "types")
        for extension in entity.extensions:
            if type(extension) not in types:
                types.append(type(extension))
        return types
