"""
Feed Extension Configuration

Handles configuration loading: which built-in vocabularies to register,
how fill passes detect extensions, and the logging level.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Union

import yaml

from feedext.exceptions import ExtensionConfigError
from feedext.models import ExtensionLoadSettings
from feedext.registry import ExtensionRegistry
from feedext.vocabularies import BUILTIN_PREFIXES, create_default_registry

logger = logging.getLogger("feedext.config")

# Default config locations
DEFAULT_CONFIG_PATHS = [
    Path.home() / ".feedext" / "config.yaml",
    Path.home() / ".feedext" / "config.yml",
    Path("/etc/feedext/config.yaml"),
    Path("feedext.yaml"),
]

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass
class FeedExtConfig:
    """Complete feedext configuration."""
    vocabularies: Optional[List[str]] = None
    auto_detect_extensions: bool = True
    log_level: str = "WARNING"
    profile: str = "default"

    @classmethod
    def from_dict(cls, data: dict, profile: str = "default") -> "FeedExtConfig":
        """
        Create config from dictionary.

        Args:
            data: Configuration dictionary
            profile: Profile name to use

        Returns:
            FeedExtConfig instance

        Raises:
            ExtensionConfigError: If a value is invalid
        """
        if not isinstance(data, dict):
            raise ExtensionConfigError("Configuration must be a mapping")

        # Get profile-specific config or use root
        if "profiles" in data and profile in (data["profiles"] or {}):
            profile_data = data["profiles"][profile] or {}
        else:
            profile_data = data

        # Extensions
        extensions_data = profile_data.get("extensions") or {}
        vocabularies = extensions_data.get("vocabularies")
        if vocabularies is not None:
            if not isinstance(vocabularies, list):
                raise ExtensionConfigError("extensions.vocabularies must be a list of prefixes")
            unknown = [p for p in vocabularies if p not in BUILTIN_PREFIXES]
            if unknown:
                raise ExtensionConfigError(f"Unknown vocabulary prefix: {', '.join(map(str, unknown))}")
            vocabularies = list(vocabularies)

        auto_detect = extensions_data.get("auto_detect", True)
        if not isinstance(auto_detect, bool):
            raise ExtensionConfigError("extensions.auto_detect must be true or false")

        # Logging
        logging_data = profile_data.get("logging") or {}
        log_level = str(logging_data.get("level", "WARNING")).upper()
        if log_level not in LOG_LEVELS:
            raise ExtensionConfigError(f"Invalid logging level: {log_level}")

        return cls(
            vocabularies=vocabularies,
            auto_detect_extensions=auto_detect,
            log_level=log_level,
            profile=profile,
        )

    @classmethod
    def from_file(cls, path: Union[str, Path], profile: str = "default") -> "FeedExtConfig":
        """
        Load config from YAML file.

        Args:
            path: Path to config file
            profile: Profile name to use

        Returns:
            FeedExtConfig instance
        """
        path = Path(os.path.expandvars(os.path.expanduser(str(path))))
        try:
            with open(path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ExtensionConfigError(f"Invalid YAML in {path}: {e}")

        logger.debug(f"Loaded configuration from {path}")
        return cls.from_dict(data or {}, profile)

    @classmethod
    def find_and_load(cls, profile: str = "default") -> Optional["FeedExtConfig"]:
        """
        Find and load config from default locations.

        Args:
            profile: Profile name to use

        Returns:
            FeedExtConfig instance or None if not found
        """
        for path in DEFAULT_CONFIG_PATHS:
            if path.exists():
                return cls.from_file(path, profile)
        return None

    def build_registry(self) -> ExtensionRegistry:
        """Build a registry holding the configured vocabularies."""
        return create_default_registry(self.vocabularies)

    def load_settings(self) -> ExtensionLoadSettings:
        """Load settings for fill passes."""
        return ExtensionLoadSettings(auto_detect_extensions=self.auto_detect_extensions)


def configure_logging(config: FeedExtConfig) -> None:
    """Apply the configured level to the feedext loggers."""
    logging.basicConfig(
        level=getattr(logging, config.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger("feedext").setLevel(config.log_level)


def create_sample_config(path: Optional[Union[str, Path]] = None) -> str:
    """
    Generate sample configuration YAML.

    Args:
        path: Where to write the sample (not written when None)

    Returns:
        Sample config as YAML string
    """
    sample = """# feedext Configuration
# Copy to ~/.feedext/config.yaml

# Default profile
extensions:
  # Prefixes of the built-in vocabularies to register (all when omitted)
  vocabularies: [itunes, dc, creativeCommons, re, blogChannel, wfw, geo, slash, sy, fh, trackback, pingback]
  # Also try vocabularies whose namespace is declared but not used directly
  auto_detect: true

logging:
  level: WARNING

# Multiple profiles example
profiles:
  podcast:
    extensions:
      vocabularies: [itunes, dc, creativeCommons]
      auto_detect: false
    logging:
      level: INFO

  debug:
    logging:
      level: DEBUG
"""
    if path is not None:
        Path(path).write_text(sample)
    return sample
