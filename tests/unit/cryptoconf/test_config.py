"""Tests for settings and log handler setup."""

from __future__ import annotations

import json
import logging
from pathlib import Path

import pytest
from pydantic import ValidationError

from cryptoconf.config import CryptoconfConfig, get_config, reset_config
from cryptoconf.logging_setup import JsonFormatter, configure_logging


class TestConfig:
    def test_defaults(self):
        config = CryptoconfConfig()
        assert config.log_level == "warning"
        assert config.log_format == "text"
        assert config.catalog_file is None
        assert config.report_format == "text"
        assert config.header_prefix == "MBEDCRYPTO_"
        assert config.env_selection_prefix == "CRYPTOCONF_SET_"
        assert config.get_catalog_path() is None

    def test_environment(self, monkeypatch):
        monkeypatch.setenv("CRYPTOCONF_LOG_LEVEL", "debug")
        monkeypatch.setenv("CRYPTOCONF_REPORT_FORMAT", "json")
        config = CryptoconfConfig()
        assert config.log_level == "debug"
        assert config.report_format == "json"

    def test_invalid_value(self, monkeypatch):
        monkeypatch.setenv("CRYPTOCONF_REPORT_FORMAT", "xml")
        with pytest.raises(ValidationError):
            CryptoconfConfig()

    def test_catalog_path_expanded(self, monkeypatch, tmp_path: Path):
        monkeypatch.setenv("CATALOG_DIR", str(tmp_path))
        config = CryptoconfConfig(catalog_file="$CATALOG_DIR/toolkit.yaml")
        assert config.get_catalog_path() == tmp_path / "toolkit.yaml"

    def test_singleton(self):
        assert get_config() is get_config()

    def test_overrides_replace_singleton(self):
        first = get_config()
        second = get_config(log_level="error")
        assert second is not first
        assert get_config().log_level == "error"

    def test_reset(self):
        first = get_config()
        reset_config()
        assert get_config() is not first


class TestLoggingSetup:
    def test_text_handler(self):
        logger = configure_logging("info", "text")
        assert logger.name == "cryptoconf"
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1
        assert not isinstance(logger.handlers[0].formatter, JsonFormatter)

    def test_reconfigure_replaces_handler(self):
        configure_logging("info", "text")
        logger = configure_logging("debug", "json")
        assert len(logger.handlers) == 1
        assert isinstance(logger.handlers[0].formatter, JsonFormatter)
        assert logger.level == logging.DEBUG

    def test_json_formatter(self):
        record = logging.LogRecord(
            "cryptoconf.validation.validator",
            logging.WARNING,
            __file__,
            1,
            "Configuration rejected: catalog=%s violations=%d",
            ("mbedcrypto", 2),
            None,
        )
        entry = json.loads(JsonFormatter().format(record))
        assert entry["level"] == "warning"
        assert entry["logger"] == "cryptoconf.validation.validator"
        assert entry["message"] == "Configuration rejected: catalog=mbedcrypto violations=2"
        assert "timestamp" in entry
