"""Tests for configuration helpers."""

import logging

import pytest

from session_registry.config import Settings, parse_log_level, parse_registry_urls


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        (0, logging.ERROR),
        (1, logging.WARNING),
        (2, logging.INFO),
        (3, logging.DEBUG),
        (7, logging.INFO),
        (-1, logging.INFO),
    ],
)
def test_parse_log_level(raw: int, expected: int) -> None:
    assert parse_log_level(raw) == expected


def test_parse_registry_urls() -> None:
    assert parse_registry_urls(None) == []
    assert parse_registry_urls("") == []
    assert parse_registry_urls(
        "http://a:12020/, http://b:12020,,http://a:12020"
    ) == ["http://a:12020", "http://b:12020"]


def test_settings_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("REGISTRY_PORT", raising=False)
    monkeypatch.delenv("REGISTRY_SESSION_DIR", raising=False)

    settings = Settings(_env_file=None)

    assert settings.port == 12020
    assert settings.session_dir == "session"


def test_settings_read_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("REGISTRY_PORT", "8000")
    monkeypatch.setenv("REGISTRY_SESSION_DIR", "/tmp/sessions")

    settings = Settings(_env_file=None)

    assert settings.port == 8000
    assert settings.session_dir == "/tmp/sessions"
