"""
Daily activity summary extractor.

Buckets short Romanian/English texts (chat messages, daily notes) into
tasks, meetings, calls and others. Pure and stateless: every count comes from
the entries passed in, and module state is limited to the read-only vocabulary.

Per entry, in order:
1. "<digits> <root>" counts ("3 taskuri") for tasks and meetings
2. "<numeral word> <root>" counts ("două ședințe") for tasks and meetings
3. Keyword hits for every bucket that steps 1-2 did not resolve
4. A flat +1 to others for an "am <verb>" phrase, only when nothing else matched

A bucket resolved numerically skips its keyword pass, so "3 taskuri" counts
3, not 4.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, tzinfo
from typing import Any

from corpsocial.observability.logging import get_logger
from corpsocial.summary.matching import (
    digit_counts,
    keyword_hits,
    normalize_text,
    numeral_word_counts,
    other_phrase_verbs,
    tokenize,
)
from corpsocial.summary.types import SummaryResult, entry_created_at, entry_text
from corpsocial.summary.vocabulary import (
    CALL_KEYWORDS,
    MEETING_COUNT_ROOTS,
    MEETING_KEYWORDS,
    TASK_COUNT_ROOTS,
    TASK_KEYWORDS,
)

logger = get_logger(__name__)


def summarize_text(text: Any) -> SummaryResult:
    """Counts for a single text, without any date filtering."""
    normalized = normalize_text(text)
    if not normalized:
        return SummaryResult()

    tokens = tokenize(normalized)
    reserved = other_phrase_verbs(normalized, tokens)

    task_numbers = digit_counts(normalized, TASK_COUNT_ROOTS)
    task_numbers += numeral_word_counts(normalized, tokens, TASK_COUNT_ROOTS)
    meeting_numbers = digit_counts(normalized, MEETING_COUNT_ROOTS)
    meeting_numbers += numeral_word_counts(normalized, tokens, MEETING_COUNT_ROOTS)

    if task_numbers:
        tasks = sum(task_numbers)
    else:
        tasks = keyword_hits(tokens, TASK_KEYWORDS, skip=reserved)

    if meeting_numbers:
        meetings = sum(meeting_numbers)
    else:
        meetings = keyword_hits(tokens, MEETING_KEYWORDS)

    calls = keyword_hits(tokens, CALL_KEYWORDS)

    # "0 taskuri" is still a task signal and must suppress the others fallback
    matched = bool(task_numbers or meeting_numbers or tasks or meetings or calls)
    others = 1 if not matched and reserved else 0

    return SummaryResult(tasks=tasks, meetings=meetings, calls=calls, others=others)


def extract_summary(
    entries: Iterable[Any] | None,
    *,
    reference_day: datetime | date | str | None = None,
) -> SummaryResult:
    """
    Sum activity counts over the entries created on the reference day.

    Args:
        entries: Entry objects, mappings with "text"/"created_at", or any
                 object exposing those attributes. Missing or non-string text
                 contributes nothing.
        reference_day: Day to keep entries for. Defaults to now. Entries
                       without created_at are always kept; entries with an
                       unparseable created_at are skipped.

    Returns:
        SummaryResult with the four bucket totals.
    """
    ref_day, ref_tz = _resolve_reference(reference_day)

    tasks = meetings = calls = others = 0
    for entry in entries or ():
        created_at = entry_created_at(entry)
        if created_at and not _is_on_day(created_at, ref_day, ref_tz):
            continue
        counts = summarize_text(entry_text(entry))
        tasks += counts.tasks
        meetings += counts.meetings
        calls += counts.calls
        others += counts.others

    return SummaryResult(tasks=tasks, meetings=meetings, calls=calls, others=others)


def parse_moment(value: Any) -> datetime | date | None:
    """Parse an ISO-8601 date or date-time. Returns None when unparseable."""
    if isinstance(value, (datetime, date)):
        return value
    if not isinstance(value, str):
        return None
    raw = value.strip()
    if raw.endswith(("Z", "z")):
        raw = raw[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(raw)
    except ValueError:
        return None


def _calendar_day(moment: datetime | date, tz: tzinfo | None) -> date:
    if isinstance(moment, datetime):
        if moment.tzinfo is None:
            return moment.date()
        # tz=None converts to the local zone
        return moment.astimezone(tz).date()
    return moment


def _resolve_reference(reference_day: datetime | date | str | None) -> tuple[date, tzinfo | None]:
    moment = parse_moment(reference_day) if reference_day is not None else None
    if moment is None:
        if reference_day is not None:
            logger.warning("Unparseable reference day %r, using current time", reference_day)
        moment = datetime.now()
    if isinstance(moment, datetime):
        return moment.date(), moment.tzinfo
    return moment, None


def _is_on_day(created_at: Any, day: date, tz: tzinfo | None) -> bool:
    moment = parse_moment(created_at)
    if moment is None:
        return False
    try:
        return _calendar_day(moment, tz) == day
    except (OverflowError, ValueError):
        # Timestamps at the ends of the date range cannot be shifted into tz
        return False
