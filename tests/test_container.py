"""Tests for container wiring."""

import asyncio
from pathlib import Path

import pytest

from session_registry.adapters.registry_client import HttpxRegistryClient
from session_registry.config import Settings
from session_registry.containers import build_container, build_registry_client
from session_registry.domain.errors import SessionIOError


def test_build_container_creates_session_directory(
    settings: Settings, session_dir: Path
) -> None:
    container = build_container(settings)

    assert session_dir.is_dir()
    assert container.session_service.list_session_ids() == []


def test_build_container_fails_when_directory_cannot_be_created(
    tmp_path: Path,
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("")

    with pytest.raises(SessionIOError):
        build_container(Settings(session_dir=str(blocker / "session")))


def test_build_registry_client_uses_configured_urls() -> None:
    client = build_registry_client(
        Settings(registry_urls="http://a:12020,http://b:12020")
    )

    assert isinstance(client, HttpxRegistryClient)
    assert client.current_url == "http://a:12020"
    asyncio.run(client.close())
