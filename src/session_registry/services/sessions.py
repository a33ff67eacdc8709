"""Session registry business logic."""

import logging
from collections.abc import Callable
from dataclasses import dataclass
from typing import Protocol

from session_registry.domain.errors import InvalidInputError, SessionConflictError
from session_registry.domain.identifiers import generate_id, validate_id
from session_registry.domain.sessions import SessionDraft, SessionPatch, SessionRecord

logger = logging.getLogger(__name__)

MAX_ID_ATTEMPTS = 5


class SessionRepository(Protocol):
    """Persistence interface for session records."""

    def create_session(self, record: SessionRecord) -> None:
        """Persist a new record, raising SessionConflictError if its id exists."""

    def get_session(self, session_id: str) -> SessionRecord:
        """Return the record for an id, raising SessionNotFoundError if absent."""

    def list_session_ids(self) -> list[str]:
        """Return the ids of every stored record."""

    def list_sessions(self) -> list[SessionRecord]:
        """Return every record that can be decoded."""

    def update_session(
        self, session_id: str, merge: Callable[[SessionRecord], SessionRecord]
    ) -> SessionRecord:
        """Apply merge to the stored record under the id's lock and persist it."""


@dataclass
class SessionService:
    """Application service for creating, reading and updating sessions."""

    repository: SessionRepository
    id_factory: Callable[[], str] = generate_id
    max_id_attempts: int = MAX_ID_ATTEMPTS

    def create_session(self, draft: SessionDraft) -> SessionRecord:
        """Assign a fresh id to a complete draft and persist it."""
        if not draft.is_complete():
            logger.error("Incomplete session metadata given: %s", draft)
            raise InvalidInputError("Missing required fields")

        session_id = ""
        for _ in range(self.max_id_attempts):
            session_id = self.id_factory()
            record = SessionRecord(
                id=session_id,
                host=draft.host,  # type: ignore[arg-type]
                port=draft.port,
                options=tuple(draft.options or ()),
            )
            try:
                self.repository.create_session(record)
            except SessionConflictError:
                logger.warning("Generated session id %s already in use", record.id)
                continue
            logger.info("Created session %s", record.id)
            return record

        logger.error("No free session id after %d attempts", self.max_id_attempts)
        raise SessionConflictError(session_id)

    def get_session(self, session_id: str) -> SessionRecord:
        """Return a single session by id."""
        return self.repository.get_session(validate_id(session_id))

    def list_session_ids(self) -> list[str]:
        """Return the ids of all registered sessions."""
        return self.repository.list_session_ids()

    def list_sessions(self) -> list[SessionRecord]:
        """Return every readable session; unreadable ones are skipped."""
        return self.repository.list_sessions()

    def update_leader(self, session_id: str, patch: SessionPatch) -> SessionRecord:
        """Merge a new leader host and/or port into a stored session."""
        updated = self.repository.update_session(validate_id(session_id), patch.apply)
        logger.info("Updated leader for session %s", session_id)
        return updated
