"""Tests for LoggingConfig."""

import pytest

from neo_tokens.config.logging_config import LoggingConfig, get_log_level_from_verbosity


@pytest.fixture(autouse=True)
def _clean_logging_env(monkeypatch):
    for name in ("LOG_LEVEL", "LOG_VERBOSITY", "LOG_FORMAT", "ENABLE_TOKEN_LOGGING"):
        monkeypatch.delenv(name, raising=False)


class TestLogLevel:
    """Test cases for level selection."""
    
    @pytest.mark.parametrize("verbosity,level", [
        ("quiet", "ERROR"),
        ("NORMAL", "WARNING"),
        ("verbose", "INFO"),
        ("debug", "DEBUG"),
        ("unknown", "WARNING"),
    ])
    def test_verbosity_mapping(self, verbosity, level):
        assert get_log_level_from_verbosity(verbosity) == level
    
    def test_default_level(self):
        config = LoggingConfig.build_config()
        assert config["root"]["level"] == "WARNING"
        assert config["loggers"]["neo_tokens"]["level"] == "WARNING"
    
    def test_log_level_overrides_verbosity(self, monkeypatch):
        monkeypatch.setenv("LOG_VERBOSITY", "QUIET")
        monkeypatch.setenv("LOG_LEVEL", "info")
        assert LoggingConfig.build_config()["root"]["level"] == "INFO"
    
    def test_invalid_log_level_falls_back(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "LOUD")
        monkeypatch.setenv("LOG_VERBOSITY", "VERBOSE")
        assert LoggingConfig.build_config()["root"]["level"] == "INFO"


class TestTokenModules:
    """Test cases for per-token log suppression."""
    
    def test_token_modules_quiet_by_default(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        config = LoggingConfig.build_config()
        assert config["loggers"]["neo_tokens.features.tokens"]["level"] == "WARNING"
    
    def test_token_modules_follow_debug(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        config = LoggingConfig.build_config()
        assert config["loggers"]["neo_tokens.features.tokens"]["level"] == "DEBUG"
    
    def test_enable_token_logging(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "INFO")
        monkeypatch.setenv("ENABLE_TOKEN_LOGGING", "true")
        assert "neo_tokens.features.tokens" not in LoggingConfig.build_config()["loggers"]


class TestFormat:
    """Test cases for format selection."""
    
    def test_json_format(self, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "json")
        fmt = LoggingConfig.build_config()["formatters"]["default"]["format"]
        assert fmt.startswith("{")
    
    def test_detailed_format(self, monkeypatch):
        monkeypatch.setenv("LOG_FORMAT", "DETAILED")
        fmt = LoggingConfig.build_config()["formatters"]["default"]["format"]
        assert "%(lineno)d" in fmt
    
    def test_simple_format(self):
        fmt = LoggingConfig.build_config()["formatters"]["default"]["format"]
        assert fmt == "%(asctime)s - %(levelname)s - %(message)s"
