"""
Module: types
Purpose: Value types for the daily summary extractor and text classifier.
Dependencies: None

Leaf module so extractor, classifier, report and callers can share types
without import cycles.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass
from datetime import date, datetime
from typing import Any


@dataclass(frozen=True)
class Entry:
    """A dated piece of free text (chat message body or daily note)."""

    text: str = ""
    created_at: str | datetime | date | None = None


@dataclass(frozen=True)
class SummaryResult:
    """Activity counts for one day."""

    tasks: int = 0
    meetings: int = 0
    calls: int = 0
    others: int = 0

    def as_dict(self) -> dict[str, int]:
        return asdict(self)

    @property
    def total(self) -> int:
        return self.tasks + self.meetings + self.calls + self.others


@dataclass(frozen=True)
class TextClassification:
    """Category flags for a single snippet."""

    is_task: bool = False
    is_meeting: bool = False
    is_call: bool = False
    is_other: bool = False

    def as_dict(self) -> dict[str, bool]:
        return asdict(self)


def entry_text(entry: Any) -> str:
    """Text of an Entry, mapping or attribute object; non-strings become ""."""
    if isinstance(entry, Mapping):
        value = entry.get("text")
    else:
        value = getattr(entry, "text", None)
    return value if isinstance(value, str) else ""


def entry_created_at(entry: Any) -> Any:
    if isinstance(entry, Mapping):
        return entry.get("created_at")
    return getattr(entry, "created_at", None)
