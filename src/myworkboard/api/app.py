"""FastAPI application setup."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from myworkboard import __version__
from myworkboard.aggregator import MissingCredentialError, WorkAggregator
from myworkboard.api.dependencies import (
    close_aggregator,
    close_query_client,
    close_vault,
    init_aggregator,
    init_query_client,
    init_vault,
)
from myworkboard.api.models import APIResponse
from myworkboard.api.routes import credential, my_work
from myworkboard.config import Settings
from myworkboard.logging import get_logger, setup_logging
from myworkboard.tracker import (
    AuthError,
    MalformedResponseError,
    NetworkError,
    SearchFailedError,
)
from myworkboard.vault import CredentialCipher, StorageError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator

logger = get_logger("api")


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan manager."""
    settings: Settings = app.state.settings

    # Startup
    setup_logging(log_dir=settings.log_dir)
    vault = init_vault(
        settings.db_path,
        cipher=CredentialCipher(service=settings.keyring_service),
    )
    client = init_query_client(settings.http_timeout)
    init_aggregator(
        WorkAggregator(
            vault,
            client,
            target_end_field=settings.target_end_field,
            max_results=settings.max_results,
        )
    )
    logger.info("MyWorkBoard API started (db=%s)", settings.db_path)

    yield
    # Shutdown
    close_aggregator()
    await close_query_client()
    close_vault()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=APIResponse[None](data=None, error=message).model_dump(),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Map vault, tracker and aggregator errors to HTTP responses."""

    @app.exception_handler(MissingCredentialError)
    async def missing_credential_handler(
        _request: Request, _exc: MissingCredentialError
    ) -> JSONResponse:
        return _error(status.HTTP_428_PRECONDITION_REQUIRED, "No credential stored")

    @app.exception_handler(AuthError)
    async def auth_error_handler(_request: Request, _exc: AuthError) -> JSONResponse:
        return _error(status.HTTP_401_UNAUTHORIZED, "Tracker rejected the credential")

    @app.exception_handler(NetworkError)
    async def network_error_handler(_request: Request, exc: NetworkError) -> JSONResponse:
        logger.warning("Tracker unreachable: %s", exc)
        return _error(status.HTTP_502_BAD_GATEWAY, "Tracker unreachable")

    @app.exception_handler(MalformedResponseError)
    async def malformed_response_handler(
        _request: Request, exc: MalformedResponseError
    ) -> JSONResponse:
        logger.warning("Malformed tracker response: %s", exc)
        return _error(status.HTTP_502_BAD_GATEWAY, "Malformed tracker response")

    @app.exception_handler(SearchFailedError)
    async def search_failed_handler(_request: Request, exc: SearchFailedError) -> JSONResponse:
        return _error(status.HTTP_502_BAD_GATEWAY, f"Tracker search failed: HTTP {exc.status_code}")

    @app.exception_handler(StorageError)
    async def storage_error_handler(_request: Request, _exc: StorageError) -> JSONResponse:
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "Credential storage failed")


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(
        title="MyWorkBoard API",
        description="My Work kanban board over the issue tracker",
        version=__version__,
        lifespan=lifespan,
    )

    if settings is None:
        settings = Settings.from_env()
    # Store config for lifespan manager
    app.state.settings = settings

    # No origins configured: same-origin only, no CORS headers.
    if settings.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.allowed_origins),
            allow_methods=["GET", "PUT", "DELETE", "POST"],
            allow_headers=["Content-Type"],
        )

    register_exception_handlers(app)

    app.include_router(credential.router, prefix="/api/v1")
    app.include_router(my_work.router, prefix="/api/v1")

    return app
