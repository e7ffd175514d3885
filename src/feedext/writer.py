"""
Extension Writer

Thin writer over lxml used by extensions to emit namespace-qualified
elements beneath a parent element supplied by the feed serializer.
"""

from contextlib import contextmanager
from typing import Dict, Iterator, Mapping, Optional

from lxml import etree

from feedext.exceptions import ExtensionArgumentError, require, require_text
from feedext.namespaces import qualified

# Tag of the detached root used for standalone serialization
FRAGMENT_TAG = "fragment"


class ExtensionWriter:
    """
    Writes elements beneath a parent lxml element.

    Nested elements are written inside `element()` blocks; everything else
    goes through `write_element()`.
    """

    def __init__(self, parent: etree._Element):
        self._stack = [require(parent, "parent")]

    @classmethod
    def fragment(cls, nsmap: Mapping[str, str]) -> "ExtensionWriter":
        """
        Create a writer over a detached root with the given prefixes bound.

        Args:
            nsmap: Prefix to namespace URI declarations

        Returns:
            ExtensionWriter whose root collects the written elements
        """
        return cls(etree.Element(FRAGMENT_TAG, nsmap=dict(nsmap)))

    @property
    def root(self) -> etree._Element:
        return self._stack[0]

    @property
    def current(self) -> etree._Element:
        return self._stack[-1]

    def write_element(
        self,
        local_name: str,
        namespace: str,
        text: Optional[str] = None,
        attributes: Optional[Mapping[str, str]] = None,
        cdata: bool = False,
    ) -> etree._Element:
        """
        Write a single element with optional text and attributes.

        Args:
            local_name: Element local name
            namespace: Element namespace URI
            text: Text content (None for an empty element)
            attributes: Attribute name to value (unqualified or Clark notation)
            cdata: Wrap text in a CDATA section

        Returns:
            The written element
        """
        local_name = require_text(local_name, "local_name")
        namespace = require_text(namespace, "namespace")

        elem = etree.SubElement(self.current, qualified(namespace, local_name))
        for name, value in (attributes or {}).items():
            elem.set(name, value)
        if text is not None:
            elem.text = etree.CDATA(text) if cdata else text
        return elem

    @contextmanager
    def element(
        self,
        local_name: str,
        namespace: str,
        attributes: Optional[Mapping[str, str]] = None,
    ) -> Iterator[etree._Element]:
        """Write an element and make it the parent of writes inside the block."""
        elem = self.write_element(local_name, namespace, attributes=attributes)
        self._stack.append(elem)
        try:
            yield elem
        finally:
            self._stack.pop()

    def write_text(self, text: str) -> None:
        """Set text content on the current element."""
        if self.current is self.root and self.root.tag == FRAGMENT_TAG:
            raise ExtensionArgumentError("Text cannot be written outside an element", "text")
        self.current.text = text

    def children_to_string(self, pretty_print: bool = False) -> str:
        """Serialize the root's children as an XML fragment."""
        parts = [
            etree.tostring(child, encoding="unicode", pretty_print=pretty_print, with_tail=False)
            for child in self.root
        ]
        return "".join(parts)

    def namespaces(self) -> Dict[str, str]:
        """Prefixes declared on the root."""
        return {k: v for k, v in self.root.nsmap.items() if k}
