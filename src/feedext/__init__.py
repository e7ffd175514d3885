"""
feedext

Extension vocabularies for syndication feeds (RSS, Atom): registry,
namespace-aware loading and writing, and value semantics for iTunes,
Dublin Core, Creative Commons and other common modules.
"""

__version__ = "1.0.0"

from feedext.adapter import ExtensionAdapter
from feedext.collection import ExtensibleEntity, SyndicationEntity
from feedext.config import FeedExtConfig, configure_logging, create_sample_config
from feedext.extension import ExtensionContext, SyndicationExtension
from feedext.models import ExtensionDescriptor, ExtensionLoadSettings
from feedext.namespaces import bind_namespace, declares_namespace, parse_xml, resolve_namespaces
from feedext.registry import ExtensionRegistry
from feedext.vocabularies import BUILTIN_EXTENSIONS, create_default_registry
from feedext.writer import ExtensionWriter
from feedext.exceptions import (
    FeedExtensionError,
    ExtensionArgumentError,
    ExtensionTypeMismatchError,
    ExtensionRegistrationError,
    ExtensionXMLError,
    ExtensionConfigError,
)

__all__ = [
    # Core
    "SyndicationExtension",
    "ExtensionContext",
    "ExtensionDescriptor",
    "ExtensionWriter",
    # Registry
    "ExtensionRegistry",
    "BUILTIN_EXTENSIONS",
    "create_default_registry",
    # Attachment
    "ExtensibleEntity",
    "SyndicationEntity",
    "ExtensionAdapter",
    "ExtensionLoadSettings",
    # Namespaces
    "resolve_namespaces",
    "bind_namespace",
    "declares_namespace",
    "parse_xml",
    # Configuration
    "FeedExtConfig",
    "configure_logging",
    "create_sample_config",
    # Exceptions
    "FeedExtensionError",
    "ExtensionArgumentError",
    "ExtensionTypeMismatchError",
    "ExtensionRegistrationError",
    "ExtensionXMLError",
    "ExtensionConfigError",
]
