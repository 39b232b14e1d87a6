"""FastAPI server for CorpSocial daily summaries"""

from __future__ import annotations

import os

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from corpsocial.api.middleware.user_auth import new_token_cache
from corpsocial.api.routes.health import router as health_router
from corpsocial.api.routes.summary import router as summary_router
from corpsocial.backend.interfaces import Backend
from corpsocial.backend.memory import create_memory_backend
from corpsocial.config import APP_VERSION, ENVIRONMENT
from corpsocial.errors import (
    BackendError,
    CorpSocialError,
    NotAuthenticatedError,
    NotFoundError,
    ValidationError,
)
from corpsocial.observability.logging import get_logger
from corpsocial.observability.telemetry import counter
from corpsocial.utils.error_sanitizer import GENERIC_MESSAGES, sanitize_error_message

logger = get_logger(__name__)

_STATUS_BY_ERROR: list[tuple[type[CorpSocialError], int]] = [
    (ValidationError, status.HTTP_400_BAD_REQUEST),
    (NotAuthenticatedError, status.HTTP_401_UNAUTHORIZED),
    (NotFoundError, status.HTTP_404_NOT_FOUND),
    (BackendError, status.HTTP_502_BAD_GATEWAY),
]


def _status_for(exc: CorpSocialError) -> int:
    for error_type, code in _STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """422 naming the invalid fields; submitted values are logged, never echoed."""
    errors = exc.errors()
    fields = list(dict.fromkeys(str(err["loc"][-1]) for err in errors if err.get("loc")))
    logger.warning("Rejected %s: %d invalid field(s) %s", request.url.path, len(errors), fields)
    logger.debug("Validation detail for %s: %s", request.url.path, errors)
    counter("api.validation_errors")
    return JSONResponse(
        status_code=422,
        content={
            "detail": GENERIC_MESSAGES[422],
            "error_count": len(errors),
            "invalid_fields": fields,
        },
    )


async def app_error_handler(request: Request, exc: CorpSocialError) -> JSONResponse:
    code = _status_for(exc)
    logger.error("%s on %s: %s", type(exc).__name__, request.url.path, exc)
    counter(f"api.errors.{code}")
    return JSONResponse(
        status_code=code,
        content={"detail": sanitize_error_message(str(exc), code)},
    )


def _allowed_origins() -> list[str]:
    raw = os.getenv("CORPSOCIAL_ALLOWED_ORIGINS", "")
    origins = [origin.strip() for origin in raw.split(",") if origin.strip()]
    if ENVIRONMENT == "development":
        origins.extend(
            [
                "http://localhost:8081",  # Expo dev server
                "http://localhost:19006",
                "http://127.0.0.1:8081",
            ]
        )
    return origins


def create_app(backend: Backend | None = None) -> FastAPI:
    """
    Build the API around an injected Backend.

    Without one, an in-memory backend is used (local development only).
    """
    if backend is None:
        if ENVIRONMENT == "production":
            raise RuntimeError("A Backend must be injected in production")
        backend = create_memory_backend()

    app = FastAPI(title="CorpSocial API", version=APP_VERSION)
    app.state.backend = backend
    app.state.token_cache = new_token_cache()

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(CorpSocialError, app_error_handler)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=_allowed_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )

    app.include_router(health_router)
    app.include_router(summary_router)
    return app


def main() -> None:
    import uvicorn

    port = int(os.getenv("PORT", "8000"))
    logger.info("Starting CorpSocial API on port %d", port)
    uvicorn.run("corpsocial.api.app:create_app", factory=True, host="0.0.0.0", port=port)
