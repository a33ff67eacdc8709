"""Registry API client adapter used by peer nodes."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

import httpx

from session_registry.adapters.session_codec import (
    decode_session,
    decode_session_ids,
    decode_session_list,
)
from session_registry.domain.identifiers import validate_id
from session_registry.domain.sessions import IPAddress, SessionRecord

logger = logging.getLogger(__name__)


class RegistryClient(Protocol):
    """Interface for talking to a session registry."""

    async def create_session(
        self, host: IPAddress | str, port: int, options: list[str]
    ) -> str:
        """Register a session and return its assigned id."""

    async def get_session(self, session_id: str) -> SessionRecord:
        """Return a single session."""

    async def list_sessions(self) -> list[SessionRecord]:
        """Return every session the registry can read."""

    async def list_session_ids(self) -> list[str]:
        """Return the ids of every registered session."""

    async def update_leader(
        self,
        session_id: str,
        host: IPAddress | str | None = None,
        port: int | None = None,
    ) -> None:
        """Point a session at a new leader host and/or port."""

    async def close(self) -> None:
        """Release any network resources."""


@dataclass
class HttpxRegistryClient:
    """Registry client implemented with httpx.

    Requests go to the current registry and are retried on transport
    errors. Once retries are exhausted the client pings every configured
    registry, switches to the first healthy one and tries one more round.
    """

    registry_urls: list[str]
    http_client: httpx.AsyncClient
    max_retries: int = 3
    timeout: float = 10
    current_url: str = field(init=False)

    def __post_init__(self) -> None:
        if not self.registry_urls:
            raise ValueError("At least one registry URL is required")
        self.current_url = self.registry_urls[0]

    @classmethod
    def create(
        cls, registry_urls: list[str], max_retries: int = 3
    ) -> "HttpxRegistryClient":
        """Create a registry client with a managed httpx session."""
        return cls(
            registry_urls=registry_urls,
            http_client=httpx.AsyncClient(),
            max_retries=max_retries,
        )

    async def create_session(
        self, host: IPAddress | str, port: int, options: list[str]
    ) -> str:
        """Register a session and return its assigned id."""
        payload = {"host": str(host), "port": port, "options": options}
        response = await self._send("POST", "/sessions", json=payload)
        return validate_id(response.json())

    async def get_session(self, session_id: str) -> SessionRecord:
        """Return a single session."""
        response = await self._send("GET", f"/sessions/{validate_id(session_id)}")
        return decode_session(response.content, "Registry response")

    async def list_sessions(self) -> list[SessionRecord]:
        """Return every session the registry can read."""
        response = await self._send("GET", "/sessions")
        return decode_session_list(response.content, "Registry response")

    async def list_session_ids(self) -> list[str]:
        """Return the ids of every registered session."""
        response = await self._send("GET", "/sessions/all")
        return decode_session_ids(response.content, "Registry response")

    async def update_leader(
        self,
        session_id: str,
        host: IPAddress | str | None = None,
        port: int | None = None,
    ) -> None:
        """Point a session at a new leader host and/or port."""
        payload: dict[str, object] = {}
        if host is not None:
            payload["host"] = str(host)
        if port is not None:
            payload["port"] = port
        if not payload:
            raise ValueError("No updates provided")
        await self._send("PATCH", f"/sessions/{validate_id(session_id)}", json=payload)

    async def check_health(self) -> bool:
        """Return True if the current registry answers its ping endpoint."""
        return await self._ping(self.current_url)

    async def choose_registry(self) -> bool:
        """Switch to the first healthy registry; return True if it changed."""
        results = await asyncio.gather(*(self._ping(url) for url in self.registry_urls))
        for url, healthy in zip(self.registry_urls, results, strict=True):
            if healthy:
                if url == self.current_url:
                    return False
                logger.info("Switching registry from %s to %s", self.current_url, url)
                self.current_url = url
                return True
        logger.warning("No healthy registry found")
        return False

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

    async def _ping(self, url: str) -> bool:
        try:
            response = await self.http_client.get(f"{url}/ping", timeout=self.timeout)
        except httpx.TransportError:
            return False
        return response.status_code == httpx.codes.OK

    async def _send(
        self, method: str, path: str, json: object | None = None
    ) -> httpx.Response:
        last_error: httpx.TransportError | None = None
        for round_number in range(2):
            if round_number:
                await self.choose_registry()
            for _ in range(self.max_retries):
                try:
                    response = await self.http_client.request(
                        method,
                        f"{self.current_url}{path}",
                        json=json,
                        timeout=self.timeout,
                    )
                except httpx.TransportError as exc:
                    logger.warning(
                        "Registry %s unreachable: %s", self.current_url, exc
                    )
                    last_error = exc
                    continue
                response.raise_for_status()
                return response
        if last_error is None:
            raise RuntimeError("No registry request was attempted")
        raise last_error
