"""
evdispatch Config - DispatcherConfig Tests
============================================
Covers:
- Defaults and validation
- Level normalization
- Loading from environment mappings
"""

import dataclasses
import logging

import pytest

from evdispatch.config.settings import DEFAULT_CONFIG, DispatcherConfig


class TestDefaults:
    def test_default_values(self):
        config = DispatcherConfig()
        assert config.name == "default"
        assert config.log_dispatch is False
        assert config.log_level == "DEBUG"
        assert config.level == logging.DEBUG

    def test_default_instance(self):
        assert DEFAULT_CONFIG == DispatcherConfig()

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            DEFAULT_CONFIG.name = "changed"


class TestValidation:
    @pytest.mark.parametrize("name", ["", "   ", None, 7])
    def test_bad_name(self, name):
        with pytest.raises(ValueError, match="name"):
            DispatcherConfig(name=name)

    def test_bad_level(self):
        with pytest.raises(ValueError, match="log_level"):
            DispatcherConfig(log_level="LOUD")

    def test_non_string_level(self):
        with pytest.raises(ValueError, match="log_level"):
            DispatcherConfig(log_level=10)

    def test_level_normalized(self):
        config = DispatcherConfig(log_level=" warning ")
        assert config.log_level == "WARNING"
        assert config.level == logging.WARNING


class TestFromEnv:
    def test_empty_environment_gives_defaults(self):
        assert DispatcherConfig.from_env({}) == DispatcherConfig()

    def test_reads_all_variables(self):
        config = DispatcherConfig.from_env({
            "EVDISPATCH_NAME": "input",
            "EVDISPATCH_LOG_DISPATCH": "yes",
            "EVDISPATCH_LOG_LEVEL": "info",
        })
        assert config.name == "input"
        assert config.log_dispatch is True
        assert config.log_level == "INFO"

    @pytest.mark.parametrize("raw", ["0", "false", "OFF", "no"])
    def test_false_flags(self, raw):
        config = DispatcherConfig.from_env({"EVDISPATCH_LOG_DISPATCH": raw})
        assert config.log_dispatch is False

    def test_invalid_flag(self):
        with pytest.raises(ValueError, match="EVDISPATCH_LOG_DISPATCH"):
            DispatcherConfig.from_env({"EVDISPATCH_LOG_DISPATCH": "maybe"})

    def test_custom_prefix(self):
        config = DispatcherConfig.from_env(
            {"GAME_NAME": "game", "EVDISPATCH_NAME": "ignored"},
            prefix="GAME_",
        )
        assert config.name == "game"

    def test_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("EVDISPATCH_NAME", "from-os")
        assert DispatcherConfig.from_env().name == "from-os"
