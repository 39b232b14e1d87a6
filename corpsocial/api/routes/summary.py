"""
Daily summary endpoints.

- POST /api/summary - activity counts for caller-supplied entries
- POST /api/classify - category flags for one snippet
- GET /api/channels/{channel_id}/summary - today's counts for a channel the user can see
"""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query

from corpsocial.api.middleware.user_auth import get_backend, get_current_user
from corpsocial.api.models import (
    ClassifyRequest,
    ClassifyResponse,
    SummaryCounts,
    SummaryRequest,
    SummaryResponse,
)
from corpsocial.backend.interfaces import Backend, User
from corpsocial.observability.logging import get_logger
from corpsocial.observability.telemetry import counter, log_event, time_block
from corpsocial.services.chat import ChatService
from corpsocial.summary import (
    SummaryResult,
    classify_text,
    extract_summary,
    summary_lines,
    summary_title,
)

router = APIRouter(prefix="/api", tags=["summary"])
logger = get_logger(__name__)


def _response(result: SummaryResult, label: str | None) -> SummaryResponse:
    return SummaryResponse(
        summary=SummaryCounts.from_result(result),
        lines=summary_lines(result),
        title=summary_title(label),
    )


@router.post("/summary", response_model=SummaryResponse)
async def summarize_entries(request: SummaryRequest) -> SummaryResponse:
    with time_block("api.summary.latency"):
        result = extract_summary(
            [entry.to_entry() for entry in request.entries],
            reference_day=request.reference_day,
        )
    counter("api.summary.requests")
    log_event("summary.computed", source="api", entries=len(request.entries), **result.as_dict())
    return _response(result, request.label)


@router.post("/classify", response_model=ClassifyResponse)
async def classify(request: ClassifyRequest) -> ClassifyResponse:
    counter("api.classify.requests")
    return ClassifyResponse.from_classification(classify_text(request.text))


@router.get("/channels/{channel_id}/summary", response_model=SummaryResponse)
async def summarize_channel(
    channel_id: str,
    reference_day: str | None = Query(default=None),
    label: str | None = Query(default=None, max_length=100),
    user: User = Depends(get_current_user),
    backend: Backend = Depends(get_backend),
) -> SummaryResponse:
    logger.info("Channel summary for %s requested by %s", channel_id, user.id)
    chat = ChatService(backend)
    chat.visible_channel(channel_id, user.id)
    result = chat.summarize_channel(channel_id, reference_day=reference_day)
    return _response(result, label or user.email)
