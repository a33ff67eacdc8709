"""Tests for the session service."""

from collections.abc import Iterator
from ipaddress import ip_address

import pytest

from session_registry.domain.errors import (
    InvalidInputError,
    InvalidSessionIdError,
    SessionConflictError,
    SessionNotFoundError,
)
from session_registry.domain.sessions import SessionDraft, SessionPatch
from session_registry.services.sessions import SessionService
from tests.conftest import InMemorySessionRepository


def _draft(**overrides: object) -> SessionDraft:
    values: dict[str, object] = {
        "host": ip_address("127.0.0.1"),
        "port": 9000,
        "options": ("A", "B"),
    }
    values.update(overrides)
    return SessionDraft(**values)  # type: ignore[arg-type]


def _ids(*values: str) -> Iterator[str]:
    yield from values


def test_create_session_assigns_id_and_persists() -> None:
    repository = InMemorySessionRepository()
    service = SessionService(repository)

    record = service.create_session(_draft())

    assert len(record.id) == 6
    assert repository.sessions[record.id] == record
    assert record.options == ("A", "B")


def test_create_session_allows_empty_options() -> None:
    service = SessionService(InMemorySessionRepository())

    record = service.create_session(_draft(options=()))

    assert record.options == ()


@pytest.mark.parametrize(
    "overrides",
    [{"options": None}, {"host": None}, {"port": 0}],
)
def test_create_session_rejects_incomplete_drafts(overrides: dict[str, object]) -> None:
    repository = InMemorySessionRepository()
    service = SessionService(repository)

    with pytest.raises(InvalidInputError):
        service.create_session(_draft(**overrides))

    assert repository.sessions == {}


def test_create_session_retries_on_id_collision() -> None:
    repository = InMemorySessionRepository()
    ids = _ids("AAAAAA", "AAAAAA", "BBBBBB")
    service = SessionService(repository, id_factory=lambda: next(ids))

    first = service.create_session(_draft())
    second = service.create_session(_draft(port=9001))

    assert first.id == "AAAAAA"
    assert second.id == "BBBBBB"
    assert repository.sessions["AAAAAA"].port == 9000


def test_create_session_gives_up_after_max_attempts() -> None:
    repository = InMemorySessionRepository()
    service = SessionService(repository, id_factory=lambda: "AAAAAA", max_id_attempts=3)
    service.create_session(_draft())

    with pytest.raises(SessionConflictError):
        service.create_session(_draft())


def test_get_session_validates_id() -> None:
    service = SessionService(InMemorySessionRepository())

    with pytest.raises(InvalidSessionIdError):
        service.get_session("../abc")


def test_get_session_missing_raises_not_found() -> None:
    service = SessionService(InMemorySessionRepository())

    with pytest.raises(SessionNotFoundError):
        service.get_session("ZZZZZZ")


def test_update_leader_with_empty_patch_keeps_record() -> None:
    service = SessionService(InMemorySessionRepository())
    record = service.create_session(_draft())

    updated = service.update_leader(record.id, SessionPatch(host=None, port=0))

    assert updated == record


def test_update_leader_changes_only_host() -> None:
    service = SessionService(InMemorySessionRepository())
    record = service.create_session(_draft())

    service.update_leader(record.id, SessionPatch(host=ip_address("10.0.0.2")))

    stored = service.get_session(record.id)
    assert stored.host == ip_address("10.0.0.2")
    assert stored.port == 9000
    assert stored.options == ("A", "B")


def test_update_leader_changes_only_port() -> None:
    service = SessionService(InMemorySessionRepository())
    record = service.create_session(_draft())

    service.update_leader(record.id, SessionPatch(port=9100))

    stored = service.get_session(record.id)
    assert stored.host == ip_address("127.0.0.1")
    assert stored.port == 9100


def test_update_leader_missing_session_raises_not_found() -> None:
    service = SessionService(InMemorySessionRepository())

    with pytest.raises(SessionNotFoundError):
        service.update_leader("ZZZZZZ", SessionPatch(port=1))
