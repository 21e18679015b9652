import logging

import pytest

from tiny_tasks.errors import MalformedIdError
from tiny_tasks.utils import DEFAULT_PORT, Settings, parse_id, setup_logging


@pytest.mark.parametrize(
    "raw, expected", [("1", 1), ("42", 42), ("-3", -3), ("007", 7), ("1.0", 1), ("2.", 2), (" 5 ", 5), ("+4", 4)]
)
def test_parse_id(raw, expected):
    assert parse_id(raw) == expected


@pytest.mark.parametrize("raw", ["", "abc", "1.5", "2x", "1_0", "\u0661", "1e0", "0x1"])
def test_parse_id_malformed(raw):
    with pytest.raises(MalformedIdError) as exc_info:
        parse_id(raw)
    assert exc_info.value.message == "Invalid id"
    assert exc_info.value.raw_id == raw


def test_settings_defaults(monkeypatch):
    for name in ("HOST", "PORT", "LOG_LEVEL", "CORS_ORIGINS"):
        monkeypatch.delenv(name, raising=False)

    settings = Settings.from_env()
    assert settings == Settings(host="127.0.0.1", port=3000, log_level="INFO", cors_origins=["*"])


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("HOST", "0.0.0.0")
    monkeypatch.setenv("PORT", "8080")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

    settings = Settings.from_env()
    assert settings.host == "0.0.0.0"
    assert settings.port == 8080
    assert settings.log_level == "DEBUG"
    assert settings.cors_origins == ["http://a.test", "http://b.test"]


def test_settings_invalid_port_falls_back(monkeypatch):
    monkeypatch.setenv("PORT", "not-a-port")
    assert Settings.from_env().port == DEFAULT_PORT


def test_setup_logging_replaces_handlers():
    root = logging.getLogger()
    saved_handlers, saved_level = list(root.handlers), root.level
    try:
        setup_logging("DEBUG")
        setup_logging("DEBUG")
        assert len(root.handlers) == 1
        assert root.level == logging.DEBUG
    finally:
        root.handlers[:] = saved_handlers
        root.setLevel(saved_level)
