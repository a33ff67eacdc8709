"""Session registry endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, Response, status

from session_registry.api.models import SessionPayload  # noqa: TC001
from session_registry.domain.identifiers import is_valid_id

if TYPE_CHECKING:
    from session_registry.containers import AppContainer

router = APIRouter(prefix="/sessions", tags=["sessions"])


def _require_session_id(session_id: str) -> str:
    # Ids that do not match behave like an unknown route.
    if not is_valid_id(session_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return session_id


@router.get("")
def list_sessions(request: Request) -> list[dict[str, object]]:
    """Return the full record of every readable session."""
    container: AppContainer = request.app.state.container
    return [s.to_dict() for s in container.session_service.list_sessions()]


@router.get("/all")
def list_session_ids(request: Request) -> dict[str, list[str]]:
    """Return the ids of every registered session.

    Example response: ``{"sessions": ["ABC123", "ABC124"]}``
    """
    container: AppContainer = request.app.state.container
    return {"sessions": container.session_service.list_session_ids()}


@router.get("/{session_id}")
def get_session(session_id: str, request: Request) -> dict[str, object]:
    """Return a single session."""
    container: AppContainer = request.app.state.container
    record = container.session_service.get_session(_require_session_id(session_id))
    return record.to_dict()


@router.post("")
def add_session(payload: SessionPayload, request: Request) -> str:
    """Register a session and return its assigned id as a JSON string."""
    container: AppContainer = request.app.state.container
    return container.session_service.create_session(payload.to_draft()).id


@router.patch("/{session_id}")
def update_session(
    session_id: str, payload: SessionPayload, request: Request
) -> Response:
    """Update the leader host and/or port of a session.

    Only ``host`` and ``port`` are applied; other fields are accepted and
    ignored.
    """
    container: AppContainer = request.app.state.container
    container.session_service.update_leader(
        _require_session_id(session_id), payload.to_patch()
    )
    return Response(status_code=status.HTTP_200_OK)
