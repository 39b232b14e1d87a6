"""
Health and debug endpoints.

- /health - service status and backend wiring
- /debug/stats - in-memory telemetry counters (no PII)
"""

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from fastapi import APIRouter, Depends

from corpsocial.api.middleware.user_auth import get_backend
from corpsocial.backend.interfaces import Backend
from corpsocial.config import APP_VERSION, BACKEND_ANON_KEY, ENVIRONMENT
from corpsocial.observability.telemetry import counters_snapshot, get_latency_stats

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(backend: Backend = Depends(get_backend)) -> dict[str, Any]:
    """Liveness plus which store implementation the app was built with."""
    return {
        "status": "healthy",
        "service": "CorpSocial API",
        "version": APP_VERSION,
        "environment": ENVIRONMENT,
        "timestamp": datetime.now(UTC).isoformat(),
        "backend": {
            "store": type(backend.store).__name__,
            "anon_key": bool(BACKEND_ANON_KEY),
        },
    }


@router.get("/debug/stats")
async def debug_stats() -> dict[str, Any]:
    return {
        "counters": counters_snapshot(),
        "summary_latency_ms": get_latency_stats("api.summary.latency"),
    }
