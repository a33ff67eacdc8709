"""Error types raised by the session store."""


class SessionStoreError(Exception):
    """Base class for all session store failures."""


class InvalidInputError(SessionStoreError):
    """Raised when a request carries missing or malformed data."""


class InvalidSessionIdError(InvalidInputError):
    """Raised when a session id is not 6 uppercase alphanumeric characters."""

    def __init__(self, raw: object) -> None:
        super().__init__(
            f"Invalid session id {raw!r}: must be 6 uppercase alphanumeric characters"
        )
        self.raw = raw


class SessionNotFoundError(SessionStoreError):
    """Raised when no record exists for a session id."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id


class SessionIOError(SessionStoreError):
    """Raised when the store directory or a record file cannot be accessed."""


class SessionDecodeError(SessionStoreError):
    """Raised when a record file does not hold a complete session."""


class SessionConflictError(SessionStoreError):
    """Raised when a record file already exists for a newly generated id."""

    def __init__(self, session_id: str) -> None:
        super().__init__(f"Session {session_id} already exists")
        self.session_id = session_id
