"""FastAPI application factory."""

import logging
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from session_registry.api.sessions import router as sessions_router
from session_registry.app_logging import configure_logging
from session_registry.config import parse_log_level
from session_registry.containers import AppContainer
from session_registry.domain.errors import (
    InvalidInputError,
    SessionNotFoundError,
    SessionStoreError,
)


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(parse_log_level(container.settings.log_level))
    logger = logging.getLogger(__name__)

    app = FastAPI(title="Session Registry")
    app.state.container = container

    @app.middleware("http")
    async def strip_trailing_slash(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        path = request.scope["path"]
        if len(path) > 1 and path.endswith("/"):
            request.scope["path"] = path.rstrip("/") or "/"
        return await call_next(request)

    app.include_router(sessions_router)

    @app.get("/ping")
    async def ping() -> dict[str, str]:
        """Health check used by peers to choose a registry."""
        return {"status": "ok"}

    @app.exception_handler(RequestValidationError)
    async def bad_request(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        logger.error("Session metadata could not be decoded: %s", exc.errors())
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": "Bad session metadata given"},
        )

    @app.exception_handler(InvalidInputError)
    async def invalid_input(request: Request, exc: InvalidInputError) -> JSONResponse:
        logger.error("Invalid session request: %s", exc)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST, content={"detail": str(exc)}
        )

    @app.exception_handler(SessionNotFoundError)
    async def not_found(request: Request, exc: SessionNotFoundError) -> JSONResponse:
        logger.debug("Session %s could not be located", exc.session_id)
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": "Session not found"},
        )

    @app.exception_handler(SessionStoreError)
    async def store_failure(request: Request, exc: SessionStoreError) -> JSONResponse:
        logger.error("Session store failure on %s: %s", request.url.path, exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Session could not be processed"},
        )

    return app
