"""Pydantic models for session registry request payloads."""

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    IPvAnyAddress,
    StrictInt,
    StrictStr,
    field_validator,
)

from session_registry.domain.identifiers import SESSION_ID_REGEX
from session_registry.domain.sessions import SessionDraft, SessionPatch


class SessionPayload(BaseModel):
    """Session metadata sent by a leader node.

    Every field is optional at the wire level so that creation and partial
    updates share one shape; the service decides which fields are required.
    A client-supplied id is validated but never used.
    """

    model_config = ConfigDict(extra="forbid")

    id: str | None = Field(default=None, pattern=SESSION_ID_REGEX)
    host: IPvAnyAddress | None = None
    port: StrictInt = 0
    options: list[StrictStr] | None = None

    @field_validator("host", mode="before")
    @classmethod
    def empty_host_is_absent(cls, value: object) -> object:
        # An empty host means "not given", as for a zero port.
        if value == "":
            return None
        return value

    def to_draft(self) -> SessionDraft:
        return SessionDraft(
            host=self.host,
            port=self.port,
            options=tuple(self.options) if self.options is not None else None,
        )

    def to_patch(self) -> SessionPatch:
        return SessionPatch(host=self.host, port=self.port)
