"""Filesystem-backed session repository.

Each session lives in its own ``<ID>.json`` file inside a single directory.
There is no in-memory index: every call re-reads the directory, so the
files on disk are the only source of truth.

Writes go to a hidden temporary file first and are then moved into place,
so a concurrent reader sees either the old record or the new one. New
records are published with ``os.link``, which refuses to replace an
existing file, and updates to the same id are serialized by a per-id lock.
"""

import logging
import os
import tempfile
import threading
import weakref
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path

from session_registry.adapters.session_codec import decode_session, encode_session
from session_registry.domain.errors import (
    SessionConflictError,
    SessionDecodeError,
    SessionIOError,
    SessionNotFoundError,
)
from session_registry.domain.identifiers import filename_for, id_from_filename
from session_registry.domain.sessions import SessionRecord
from session_registry.services.sessions import SessionRepository

logger = logging.getLogger(__name__)

DIRECTORY_MODE = 0o750
FILE_MODE = 0o644


@dataclass
class FileSessionRepository(SessionRepository):
    """Session repository storing one JSON file per session."""

    directory: Path
    # Entries disappear once no update on that id holds the lock.
    _locks: weakref.WeakValueDictionary[str, threading.Lock] = field(
        default_factory=weakref.WeakValueDictionary, init=False, repr=False
    )
    _locks_guard: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False
    )

    def ensure_directory(self) -> None:
        """Create the store directory if it does not exist yet."""
        try:
            self.directory.mkdir(mode=DIRECTORY_MODE, parents=True, exist_ok=True)
        except OSError as exc:
            logger.error('Directory "%s" could not be created', self.directory)
            raise SessionIOError(
                f"Session directory {self.directory} could not be created"
            ) from exc
        logger.debug('Directory "%s" created or found', self.directory)

    def create_session(self, record: SessionRecord) -> None:
        """Write a new record file, refusing to replace an existing one."""
        path = self._path_for(record.id)
        self._write(path, encode_session(record), exclusive=True)
        logger.debug("Saved session %s", record)

    def get_session(self, session_id: str) -> SessionRecord:
        """Read and decode the record stored for an id."""
        return self._read(self._path_for(session_id), session_id)

    def list_session_ids(self) -> list[str]:
        """Return the ids of every record file, in directory order."""
        ids = []
        for name in self._scan():
            session_id = id_from_filename(name)
            if session_id is not None:
                ids.append(session_id)
        return ids

    def list_sessions(self) -> list[SessionRecord]:
        """Return every record that decodes cleanly, skipping the rest."""
        sessions = []
        for session_id in self.list_session_ids():
            try:
                sessions.append(self.get_session(session_id))
            except (SessionNotFoundError, SessionIOError, SessionDecodeError) as exc:
                logger.warning("Skipping session file for %s: %s", session_id, exc)
        return sessions

    def update_session(
        self, session_id: str, merge: Callable[[SessionRecord], SessionRecord]
    ) -> SessionRecord:
        """Read, merge and rewrite a record while holding the id's lock."""
        path = self._path_for(session_id)
        with self._lock_for(session_id):
            current = self._read(path, session_id)
            updated = merge(current)
            self._write(path, encode_session(updated), exclusive=False)
        logger.debug("Updated session %s", updated)
        return updated

    def _path_for(self, session_id: str) -> Path:
        root = self.directory.resolve()
        path = root / filename_for(session_id)
        if path.resolve().parent != root:
            logger.error("Session file for %s escapes the store directory", session_id)
            raise SessionIOError(f"Session file for {session_id} is outside the store")
        return path

    def _lock_for(self, session_id: str) -> threading.Lock:
        with self._locks_guard:
            return self._locks.setdefault(session_id, threading.Lock())

    def _scan(self) -> list[str]:
        try:
            return os.listdir(self.directory)
        except OSError as exc:
            logger.error("Failed to read session directory %s", self.directory)
            raise SessionIOError(
                f"Session directory {self.directory} could not be read"
            ) from exc

    def _read(self, path: Path, session_id: str) -> SessionRecord:
        try:
            with path.open("rb") as handle:
                raw = handle.read()
        except FileNotFoundError as exc:
            logger.debug("Session %s could not be located", session_id)
            raise SessionNotFoundError(session_id) from exc
        except OSError as exc:
            logger.error("Session file %s could not be read", path.name)
            raise SessionIOError(f"Session file {path.name} could not be read") from exc
        try:
            return decode_session(raw, f"Session file {path.name}")
        except SessionDecodeError:
            logger.error("Session file %s could not be decoded", path.name)
            raise

    def _write(self, path: Path, data: bytes, *, exclusive: bool) -> None:
        try:
            handle = tempfile.NamedTemporaryFile(
                dir=self.directory, prefix=".", suffix=".tmp", delete=False
            )
        except OSError as exc:
            logger.error("Session directory %s could not be opened", self.directory)
            raise SessionIOError(
                f"Session directory {self.directory} could not be opened"
            ) from exc

        tmp_path = Path(handle.name)
        try:
            with handle:
                handle.write(data)
                handle.flush()
                os.fsync(handle.fileno())
            os.chmod(tmp_path, FILE_MODE)
            if exclusive:
                os.link(tmp_path, path)
            else:
                os.replace(tmp_path, path)
        except FileExistsError as exc:
            raise SessionConflictError(path.stem) from exc
        except OSError as exc:
            logger.error('Session file "%s" could not be written to', path.name)
            raise SessionIOError(f"Session file {path.name} could not be written") from exc
        finally:
            tmp_path.unlink(missing_ok=True)
