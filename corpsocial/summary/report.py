"""Display lines for a daily summary."""

from __future__ import annotations

from corpsocial.summary.types import SummaryResult

DEFAULT_LABEL = "Ziua ta"


def summary_lines(result: SummaryResult) -> list[str]:
    """Tasks and meetings are always listed; calls and others only when present."""
    lines = [
        f"Task-uri: {result.tasks}",
        f"Întâlniri: {result.meetings}",
    ]
    if result.calls > 0:
        lines.append(f"Apeluri: {result.calls}")
    if result.others > 0:
        lines.append(f"Altele: {result.others}")
    return lines


def summary_title(label: str | None = None) -> str:
    return f"{label or DEFAULT_LABEL} - Rezumat"
