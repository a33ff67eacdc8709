"""Shared test fixtures."""

from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

import pytest

from session_registry.config import Settings
from session_registry.containers import AppContainer, build_container
from session_registry.domain.errors import SessionConflictError, SessionNotFoundError
from session_registry.domain.sessions import SessionRecord
from session_registry.services.sessions import SessionRepository


@dataclass
class InMemorySessionRepository(SessionRepository):
    """In-memory session repository for tests."""

    sessions: dict[str, SessionRecord] = field(default_factory=dict)

    def create_session(self, record: SessionRecord) -> None:
        if record.id in self.sessions:
            raise SessionConflictError(record.id)
        self.sessions[record.id] = record

    def get_session(self, session_id: str) -> SessionRecord:
        try:
            return self.sessions[session_id]
        except KeyError:
            raise SessionNotFoundError(session_id) from None

    def list_session_ids(self) -> list[str]:
        return list(self.sessions)

    def list_sessions(self) -> list[SessionRecord]:
        return list(self.sessions.values())

    def update_session(
        self, session_id: str, merge: Callable[[SessionRecord], SessionRecord]
    ) -> SessionRecord:
        updated = merge(self.get_session(session_id))
        self.sessions[session_id] = updated
        return updated


@pytest.fixture
def session_dir(tmp_path: Path) -> Path:
    return tmp_path / "session"


@pytest.fixture
def settings(session_dir: Path) -> Settings:
    return Settings(session_dir=str(session_dir), log_level=3)


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings)
