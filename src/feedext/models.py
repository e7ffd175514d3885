"""
Feed Extension Models

Identity of registered extension types and load settings.
"""

from dataclasses import dataclass, field
from typing import List, Type

from feedext.exceptions import require_text


@dataclass(frozen=True)
class ExtensionDescriptor:
    """Identity of an extension type.

    The namespace is the unique key an extension type is registered under.
    Values are trimmed on construction; prefix, namespace, version and name
    are required.
    """
    prefix: str
    namespace: str
    version: str
    documentation: str
    name: str
    description: str = ""

    def __post_init__(self):
        object.__setattr__(self, "prefix", require_text(self.prefix, "prefix"))
        object.__setattr__(self, "namespace", require_text(self.namespace, "namespace"))
        object.__setattr__(self, "version", require_text(self.version, "version"))
        object.__setattr__(self, "documentation", require_text(self.documentation, "documentation"))
        object.__setattr__(self, "name", require_text(self.name, "name"))
        object.__setattr__(self, "description", (self.description or "").strip())


@dataclass
class ExtensionLoadSettings:
    """Controls which extension types a fill pass attempts."""
    auto_detect_extensions: bool = True
    supported_extensions: List[Type] = field(default_factory=list)
