"""
User authentication for the CorpSocial API.

Bearer tokens are access tokens issued by the backend's auth provider.
Validated tokens are cached per app with a TTL so revoked sessions expire.
"""

from __future__ import annotations

from cachetools import TTLCache
from fastapi import HTTPException, Request, status

from corpsocial.backend.interfaces import Backend, User
from corpsocial.config import AUTH_CACHE_MAX_SIZE, AUTH_CACHE_TTL_SECONDS
from corpsocial.observability.logging import get_logger

logger = get_logger(__name__)


def new_token_cache() -> TTLCache[str, User]:
    return TTLCache(maxsize=AUTH_CACHE_MAX_SIZE, ttl=AUTH_CACHE_TTL_SECONDS)


def get_backend(request: Request) -> Backend:
    """FastAPI dependency returning the Backend injected into the app."""
    return request.app.state.backend


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def _bearer_token(header: str | None) -> str:
    if not header:
        raise _unauthorized("Missing authorization header")
    scheme, _, token = header.strip().partition(" ")
    token = token.strip()
    if scheme.lower() != "bearer" or not token or " " in token:
        raise _unauthorized("Invalid authorization header format. Expected: Bearer <token>")
    return token


async def get_current_user(request: Request) -> User:
    """
    Resolve the bearer token to a backend user.

    Usage:
        @router.get("/api/channels/{channel_id}/summary")
        async def endpoint(user: User = Depends(get_current_user)):
            ...
    """
    token = _bearer_token(request.headers.get("Authorization"))
    cache: TTLCache[str, User] = request.app.state.token_cache
    if token in cache:
        return cache[token]

    user = get_backend(request).auth.get_user(token)
    if user is None:
        logger.warning("Rejected unknown or expired access token")
        raise _unauthorized("Invalid or expired token")

    cache[token] = user
    logger.info("Authenticated user %s (cache size: %d)", user.id, len(cache))
    return user
