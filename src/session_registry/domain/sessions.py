"""Domain models for election sessions."""

from dataclasses import dataclass
from ipaddress import IPv4Address, IPv6Address

IPAddress = IPv4Address | IPv6Address


@dataclass(frozen=True)
class SessionRecord:
    """A registered election session and where its leader can be reached."""

    id: str
    host: IPAddress
    port: int
    options: tuple[str, ...]

    def to_dict(self) -> dict[str, object]:
        """Return the record in its persisted JSON shape."""
        return {
            "id": self.id,
            "host": str(self.host),
            "port": self.port,
            "options": list(self.options),
        }


@dataclass(frozen=True)
class SessionDraft:
    """Caller-supplied data for a session that has not been assigned an id."""

    host: IPAddress | None
    port: int = 0
    options: tuple[str, ...] | None = None

    def is_complete(self) -> bool:
        """Return True when every field required for creation is present."""
        return self.host is not None and self.port != 0 and self.options is not None


@dataclass(frozen=True)
class SessionPatch:
    """Partial leader update; None or 0 leaves the stored value untouched."""

    host: IPAddress | None = None
    port: int = 0

    def apply(self, record: SessionRecord) -> SessionRecord:
        """Return record with the provided host and port merged in."""
        return SessionRecord(
            id=record.id,
            host=self.host if self.host is not None else record.host,
            port=self.port if self.port != 0 else record.port,
            options=record.options,
        )
