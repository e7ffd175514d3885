"""
Extensible Entities

Holders for the extensions attached to a feed, channel or item.
"""

import logging
from typing import Callable, List, Optional, Type, Union

from lxml import etree

from feedext.adapter import ExtensionAdapter
from feedext.exceptions import ExtensionArgumentError, require
from feedext.extension import SyndicationExtension
from feedext.models import ExtensionLoadSettings

logger = logging.getLogger("feedext.collection")

ExtensionMatch = Union[Type[SyndicationExtension], Callable[[SyndicationExtension], bool]]

ENTITY_KINDS = ("feed", "channel", "item")


def _require_extension(extension) -> SyndicationExtension:
    require(extension, "extension")
    if not isinstance(extension, SyndicationExtension):
        raise ExtensionArgumentError(
            f"{type(extension).__name__} is not a SyndicationExtension", "extension"
        )
    return extension


class ExtensibleEntity:
    """
    Ordered collection of extensions attached to an entity.

    Duplicates are allowed; attachment order is preserved.
    """

    def __init__(self):
        self._extensions: List[SyndicationExtension] = []

    @property
    def extensions(self) -> List[SyndicationExtension]:
        return self._extensions

    @property
    def has_extensions(self) -> bool:
        return bool(self._extensions)

    def add_extension(self, extension: SyndicationExtension) -> bool:
        """Attach an extension. Returns True once attached."""
        self._extensions.append(_require_extension(extension))
        return True

    def remove_extension(self, extension: SyndicationExtension) -> bool:
        """
        Detach the first attached extension equal to the one given.

        Returns:
            True if an extension was removed
        """
        _require_extension(extension)
        for index, attached in enumerate(self._extensions):
            if attached is extension:
                del self._extensions[index]
                return True
        for index, attached in enumerate(self._extensions):
            if attached == extension:
                del self._extensions[index]
                return True
        return False

    def find_extension(self, match: ExtensionMatch) -> Optional[SyndicationExtension]:
        """
        Return the first attached extension satisfying match.

        Args:
            match: Extension class (exact type) or predicate

        Returns:
            The extension, or None if nothing matches
        """
        require(match, "match")
        if isinstance(match, type):
            if not issubclass(match, SyndicationExtension):
                raise ExtensionArgumentError(f"{match.__name__} is not a SyndicationExtension type", "match")
            predicate = match.match_by_type
        elif callable(match):
            predicate = match
        else:
            raise ExtensionArgumentError("match must be an extension type or a predicate", "match")

        for extension in self._extensions:
            if predicate(extension):
                return extension
        return None

    def load_extensions(self, source: etree._Element, registry, settings: ExtensionLoadSettings = None) -> int:
        """
        Attach every registered extension present beneath source.

        Returns:
            Number of extensions attached
        """
        return ExtensionAdapter(source, registry, settings).fill(self)

    def write_extensions(self, parent: etree._Element) -> None:
        """Write every attached extension beneath parent, in attachment order."""
        require(parent, "parent")
        for extension in self._extensions:
            extension.write_to(parent)


class SyndicationEntity(ExtensibleEntity):
    """Named holder for a feed, channel or item's extensions."""

    def __init__(self, kind: str = "item"):
        super().__init__()
        if kind not in ENTITY_KINDS:
            raise ExtensionArgumentError(f"kind must be one of {', '.join(ENTITY_KINDS)}", "kind")
        self.kind = kind

    def __repr__(self):
        return f"<SyndicationEntity {self.kind} extensions={len(self.extensions)}>"
