"""JSON codec for session records on disk and on the wire."""

from typing import Annotated

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    IPvAnyAddress,
    StrictInt,
    StrictStr,
    TypeAdapter,
    ValidationError,
)

from session_registry.domain.errors import SessionDecodeError
from session_registry.domain.identifiers import SESSION_ID_REGEX
from session_registry.domain.sessions import SessionRecord


class SessionDocument(BaseModel):
    """JSON shape of a complete session record; unknown keys are rejected."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(pattern=SESSION_ID_REGEX)
    host: IPvAnyAddress
    port: StrictInt
    options: list[StrictStr]

    @classmethod
    def from_record(cls, record: SessionRecord) -> "SessionDocument":
        return cls(
            id=record.id,
            host=record.host,
            port=record.port,
            options=list(record.options),
        )

    def to_record(self) -> SessionRecord:
        return SessionRecord(
            id=self.id,
            host=self.host,
            port=self.port,
            options=tuple(self.options),
        )


_SESSION_LIST = TypeAdapter(list[SessionDocument])


def encode_session(record: SessionRecord) -> bytes:
    """Serialize a record as a single line of JSON."""
    return SessionDocument.from_record(record).model_dump_json().encode() + b"\n"


def decode_session(raw: bytes | str, source: str) -> SessionRecord:
    """Parse a complete record; there is no partial or best-effort decode."""
    try:
        return SessionDocument.model_validate_json(raw).to_record()
    except ValidationError as exc:
        raise SessionDecodeError(f"{source} is not a valid session") from exc


def decode_session_list(raw: bytes | str, source: str) -> list[SessionRecord]:
    """Parse a JSON array of complete records."""
    try:
        documents = _SESSION_LIST.validate_json(raw)
    except ValidationError as exc:
        raise SessionDecodeError(f"{source} is not a valid session list") from exc
    return [document.to_record() for document in documents]


class SessionIdList(BaseModel):
    """JSON shape of the registry's id listing."""

    sessions: list[Annotated[str, Field(pattern=SESSION_ID_REGEX)]]


def decode_session_ids(raw: bytes | str, source: str) -> list[str]:
    """Parse a ``{"sessions": [...]}`` id listing."""
    try:
        return SessionIdList.model_validate_json(raw).sessions
    except ValidationError as exc:
        raise SessionDecodeError(f"{source} is not a valid session id list") from exc
