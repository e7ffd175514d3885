"""
Node Lookups

Namespace-qualified lookups over lxml elements used by extension contexts.
"""

from typing import List, Mapping, Optional

from lxml import etree


def element_value(elem: Optional[etree._Element]) -> str:
    """Concatenated text of an element and its descendants."""
    if elem is None:
        return ""
    return "".join(elem.itertext())


def has_children(elem: etree._Element) -> bool:
    """True if the element has at least one child element."""
    return any(isinstance(child.tag, str) for child in elem)


def find_element(elem: etree._Element, path: str, namespaces: Mapping[str, str]) -> Optional[etree._Element]:
    """Find the first matching child; None if the prefix is unbound or nothing matches."""
    try:
        return elem.find(path, dict(namespaces))
    except SyntaxError:
        # Prefix not present in the namespace table
        return None


def find_all(elem: etree._Element, path: str, namespaces: Mapping[str, str]) -> List[etree._Element]:
    """Find all matching children in document order."""
    try:
        return elem.findall(path, dict(namespaces))
    except SyntaxError:
        return []


def find_text(elem: etree._Element, path: str, namespaces: Mapping[str, str]) -> Optional[str]:
    """Find element and return its value, or None if missing or empty."""
    found = find_element(elem, path, namespaces)
    if found is None:
        return None
    value = element_value(found)
    return value if value else None


def attribute(elem: Optional[etree._Element], name: str) -> Optional[str]:
    """Return an unqualified attribute value, or None if missing or empty."""
    if elem is None:
        return None
    value = elem.get(name)
    return value if value else None
