"""
Namespace Resolution

Builds prefix -> namespace lookup tables from the declarations in scope at a
node, and the per-extension bindings used for namespace-qualified lookups.
"""

import logging
from typing import Dict, Mapping, Optional, Union

from lxml import etree

from feedext.exceptions import ExtensionXMLError, require, require_text

logger = logging.getLogger("feedext.namespaces")

# Reserved namespaces
XML_NS = "http://www.w3.org/XML/1998/namespace"
ATOM_NS = "http://www.w3.org/2005/Atom"

# Secure parser
_parser = etree.XMLParser(
    resolve_entities=False,
    no_network=True,
    remove_comments=True,
    huge_tree=False,
)


def parse_xml(xml_data: Union[bytes, str]) -> etree._Element:
    """
    Parse XML with the hardened parser.

    Args:
        xml_data: Raw XML bytes or text

    Returns:
        Root element

    Raises:
        ExtensionXMLError: If the XML is malformed
    """
    if isinstance(xml_data, str):
        xml_data = xml_data.encode("utf-8")
    try:
        return etree.fromstring(xml_data, _parser)
    except etree.XMLSyntaxError as e:
        raise ExtensionXMLError(f"XML parse error: {e}")


def resolve_namespaces(node: etree._Element) -> Dict[str, str]:
    """
    Collect the namespace declarations in scope at a node.

    Declarations inherited from ancestors are included. The default
    (unprefixed) namespace and the reserved xml prefix are excluded, so an
    undeclared prefix simply has no entry.

    Args:
        node: Element to inspect

    Returns:
        Mapping of prefix to namespace URI
    """
    require(node, "node")
    namespaces = {}
    for prefix, uri in (node.nsmap or {}).items():
        if not prefix or prefix == "xml" or not uri:
            continue
        namespaces[prefix] = uri
    return namespaces


def bind_namespace(namespaces: Optional[Mapping[str, str]], prefix: str, namespace: str) -> Dict[str, str]:
    """
    Build the lookup table an extension uses while loading.

    If the document declares the extension's prefix, the document's URI wins;
    otherwise the prefix is bound to the extension's canonical namespace.

    Args:
        namespaces: In-scope declarations (may be None)
        prefix: Extension prefix
        namespace: Extension canonical namespace

    Returns:
        New mapping with the prefix bound
    """
    prefix = require_text(prefix, "prefix")
    namespace = require_text(namespace, "namespace")

    binding = dict(namespaces or {})
    existing = binding.get(prefix)
    binding[prefix] = existing if existing else namespace
    if existing and existing != namespace:
        logger.debug(f"Prefix '{prefix}' is bound to {existing} in source, expected {namespace}")
    return binding


def declares_namespace(node: etree._Element, prefix: str, namespace: str) -> bool:
    """
    Check whether a namespace (by URI or by prefix) is in scope at a node.

    Args:
        node: Element to inspect
        prefix: Extension prefix
        namespace: Extension namespace URI

    Returns:
        True if either the URI or the prefix is declared
    """
    namespaces = resolve_namespaces(node)
    if namespace in namespaces.values():
        return True
    return prefix in namespaces


def namespace_of(element: etree._Element) -> Optional[str]:
    """Return the namespace URI of an element tag, or None."""
    if not isinstance(element.tag, str):
        # Comments and processing instructions
        return None
    return etree.QName(element).namespace


def qualified(namespace: str, local_name: str) -> str:
    """Build a Clark-notation tag."""
    return "{%s}%s" % (namespace, local_name)
