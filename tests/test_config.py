"""
Tests for configuration loading.
"""

import logging

import pytest
import yaml

from feedext import config as config_module
from feedext.config import FeedExtConfig, configure_logging, create_sample_config
from feedext.exceptions import ExtensionConfigError
from feedext.vocabularies import (
    BUILTIN_EXTENSIONS,
    CreativeCommonsSyndicationExtension,
    DublinCoreElementSetSyndicationExtension,
    ITunesSyndicationExtension,
)


class TestFromDict:
    """Tests for building configuration from dictionaries."""

    def test_defaults(self):
        """An empty mapping gives the defaults."""
        config = FeedExtConfig.from_dict({})

        assert config.vocabularies is None
        assert config.auto_detect_extensions is True
        assert config.log_level == "WARNING"
        assert config.build_registry().types() == list(BUILTIN_EXTENSIONS)

    def test_vocabulary_selection(self):
        """Configured prefixes select the registered vocabularies."""
        config = FeedExtConfig.from_dict({"extensions": {"vocabularies": ["itunes", "dc"]}})

        assert config.build_registry().types() == [
            ITunesSyndicationExtension,
            DublinCoreElementSetSyndicationExtension,
        ]

    def test_profile(self):
        """A named profile replaces the root settings."""
        data = {
            "extensions": {"auto_detect": True},
            "profiles": {
                "strict": {
                    "extensions": {"auto_detect": False, "vocabularies": ["creativeCommons"]},
                    "logging": {"level": "debug"},
                },
            },
        }

        config = FeedExtConfig.from_dict(data, profile="strict")

        assert config.profile == "strict"
        assert config.auto_detect_extensions is False
        assert config.log_level == "DEBUG"
        assert config.build_registry().types() == [CreativeCommonsSyndicationExtension]
        assert config.load_settings().auto_detect_extensions is False

    def test_missing_profile_uses_root(self):
        """An unknown profile falls back to the root settings."""
        config = FeedExtConfig.from_dict({"logging": {"level": "INFO"}}, profile="absent")
        assert config.log_level == "INFO"

    def test_unknown_prefix(self):
        """Unknown vocabulary prefixes are rejected."""
        with pytest.raises(ExtensionConfigError):
            FeedExtConfig.from_dict({"extensions": {"vocabularies": ["itunes", "media"]}})

    def test_invalid_values(self):
        """Invalid types and levels are rejected."""
        with pytest.raises(ExtensionConfigError):
            FeedExtConfig.from_dict({"extensions": {"vocabularies": "itunes"}})
        with pytest.raises(ExtensionConfigError):
            FeedExtConfig.from_dict({"extensions": {"auto_detect": "yes"}})
        with pytest.raises(ExtensionConfigError):
            FeedExtConfig.from_dict({"logging": {"level": "LOUD"}})
        with pytest.raises(ExtensionConfigError):
            FeedExtConfig.from_dict(["not", "a", "mapping"])


class TestFromFile:
    """Tests for YAML files."""

    def test_from_file(self, tmp_path):
        """Load settings from a YAML file."""
        path = tmp_path / "config.yaml"
        path.write_text("extensions:\n  vocabularies: [dc]\n  auto_detect: false\n")

        config = FeedExtConfig.from_file(path)

        assert config.vocabularies == ["dc"]
        assert config.auto_detect_extensions is False

    def test_empty_file(self, tmp_path):
        """An empty file gives the defaults."""
        path = tmp_path / "config.yaml"
        path.write_text("")
        assert FeedExtConfig.from_file(path).vocabularies is None

    def test_invalid_yaml(self, tmp_path):
        """Malformed YAML is a configuration error."""
        path = tmp_path / "config.yaml"
        path.write_text("extensions: [unclosed\n")
        with pytest.raises(ExtensionConfigError):
            FeedExtConfig.from_file(path)

    def test_find_and_load(self, tmp_path, monkeypatch):
        """The first existing default path is used."""
        missing = tmp_path / "missing.yaml"
        present = tmp_path / "present.yaml"
        present.write_text("logging:\n  level: ERROR\n")
        monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATHS", [missing, present])

        config = FeedExtConfig.find_and_load()

        assert config.log_level == "ERROR"

    def test_find_and_load_none(self, tmp_path, monkeypatch):
        """None when no default path exists."""
        monkeypatch.setattr(config_module, "DEFAULT_CONFIG_PATHS", [tmp_path / "missing.yaml"])
        assert FeedExtConfig.find_and_load() is None


class TestSampleConfig:
    """Tests for the sample configuration."""

    def test_sample_is_valid(self):
        """The sample parses and loads for every profile."""
        data = yaml.safe_load(create_sample_config())

        assert FeedExtConfig.from_dict(data).build_registry().types() == list(BUILTIN_EXTENSIONS)
        podcast = FeedExtConfig.from_dict(data, profile="podcast")
        assert podcast.vocabularies == ["itunes", "dc", "creativeCommons"]
        assert FeedExtConfig.from_dict(data, profile="debug").log_level == "DEBUG"

    def test_sample_written(self, tmp_path):
        """The sample is written when a path is given."""
        path = tmp_path / "feedext.yaml"
        sample = create_sample_config(path)
        assert path.read_text() == sample


class TestConfigureLogging:
    """Tests for applying the logging level."""

    def test_level_applied(self):
        """The feedext logger takes the configured level."""
        logger = logging.getLogger("feedext")
        previous = logger.level
        try:
            configure_logging(FeedExtConfig(log_level="DEBUG"))
            assert logger.level == logging.DEBUG
        finally:
            logger.setLevel(previous)
