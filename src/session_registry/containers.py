"""Dependency container wiring for the application."""

from dataclasses import dataclass
from pathlib import Path

from session_registry.adapters.file_session_repository import FileSessionRepository
from session_registry.adapters.registry_client import (
    HttpxRegistryClient,
    RegistryClient,
)
from session_registry.config import Settings, parse_registry_urls
from session_registry.services.sessions import SessionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    session_service: SessionService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    The session directory is created here, so a directory that cannot be
    created aborts startup.
    """
    resolved_settings = settings or Settings()
    session_repository = FileSessionRepository(Path(resolved_settings.session_dir))
    session_repository.ensure_directory()
    session_service = SessionService(session_repository)
    return AppContainer(
        settings=resolved_settings,
        session_service=session_service,
    )


def build_registry_client(settings: Settings | None = None) -> RegistryClient:
    """Create a client for the registries listed in the settings."""
    resolved_settings = settings or Settings()
    return HttpxRegistryClient.create(
        parse_registry_urls(resolved_settings.registry_urls)
    )
