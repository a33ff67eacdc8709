"""Session identifier generation and validation."""

import random
import re

from session_registry.domain.errors import InvalidSessionIdError

ID_ALPHABET = "ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789"
ID_LENGTH = 6

SESSION_ID_REGEX = r"^[A-Z0-9]{6}$"
SESSION_FILE_REGEX = r"^[A-Z0-9]{6}\.json$"
SESSION_FILE_SUFFIX = ".json"

SESSION_ID_PATTERN = re.compile(SESSION_ID_REGEX)
SESSION_FILE_PATTERN = re.compile(SESSION_FILE_REGEX)


def generate_id(rng: random.Random | None = None) -> str:
    """Return a random session id.

    Ids are not checked for uniqueness here; the store is responsible for
    refusing to overwrite an existing record.
    """
    source = rng or random
    return "".join(source.choice(ID_ALPHABET) for _ in range(ID_LENGTH))


def is_valid_id(raw: object) -> bool:
    """Return True if raw is a well-formed session id."""
    return isinstance(raw, str) and SESSION_ID_PATTERN.fullmatch(raw) is not None


def validate_id(raw: object) -> str:
    """Return raw unchanged if it is a valid session id, else raise."""
    if not is_valid_id(raw):
        raise InvalidSessionIdError(raw)
    return raw  # type: ignore[return-value]


def id_from_filename(name: str) -> str | None:
    """Return the session id for a record filename, or None for foreign files."""
    if SESSION_FILE_PATTERN.fullmatch(name) is None:
        return None
    return name[: -len(SESSION_FILE_SUFFIX)]


def filename_for(session_id: str) -> str:
    """Return the record filename for a validated session id."""
    return f"{validate_id(session_id)}{SESSION_FILE_SUFFIX}"
