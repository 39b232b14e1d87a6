"""
Daily notes - a personal checklist kept per user per day.

Notes are stored under `notes:{email}:{YYYY-MM-DD}` in a key-value store
(in-memory or a JSON file), separate from the managed backend. The notes of
the day can be fed to the summary extractor.
"""

from __future__ import annotations

import json
import os
import threading
from abc import ABC, abstractmethod
from datetime import date, datetime
from typing import Any
from uuid import uuid4

from pydantic import ValidationError as PydanticValidationError

from corpsocial.config import NOTES_DIR
from corpsocial.models import Note
from corpsocial.observability.logging import get_logger
from corpsocial.observability.telemetry import log_event
from corpsocial.summary import Entry, SummaryResult, extract_summary

logger = get_logger(__name__)

_SAFE_KEY_CHARS = frozenset("abcdefghijklmnopqrstuvwxyz0123456789@._-")


def notes_key(user_email: str | None, day: date) -> str:
    """Storage key for a user's notes of a day; unsafe characters become '_'."""
    email = user_email or "guest"
    safe = "".join(ch if ch.lower() in _SAFE_KEY_CHARS else "_" for ch in email)
    return f"notes:{safe}:{day.isoformat()}"


class KeyValueStore(ABC):
    @abstractmethod
    def get(self, key: str) -> str | None:
        raise NotImplementedError

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        raise NotImplementedError


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileKeyValueStore(KeyValueStore):
    """All keys in one JSON object on disk, rewritten on every set."""

    def __init__(self, path: str | None = None) -> None:
        self.path = path or os.path.join(NOTES_DIR, "notes.json")
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            data = self._read()
            data[key] = value
            dir_name = os.path.dirname(self.path)
            if dir_name:
                os.makedirs(dir_name, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as handle:
                json.dump(data, handle, indent=2, ensure_ascii=False)

    def _read(self) -> dict[str, Any]:
        if not os.path.exists(self.path):
            return {}
        with open(self.path, "r", encoding="utf-8") as handle:
            return json.load(handle)


class DailyNotes:
    def __init__(self, store: KeyValueStore, user_email: str | None, today: date | None = None):
        self.store = store
        self.day = today or date.today()
        self.key = notes_key(user_email, self.day)

    def items(self) -> list[Note]:
        raw = self.store.get(self.key)
        if not raw:
            return []
        try:
            payload = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Corrupt notes payload under %s, starting empty", self.key)
            return []
        if not isinstance(payload, list):
            logger.warning("Notes payload under %s is not a list, starting empty", self.key)
            return []
        try:
            return [Note.model_validate(item) for item in payload]
        except PydanticValidationError:
            logger.warning("Malformed note under %s, starting empty", self.key)
            return []

    def add(self, text: str) -> Note | None:
        """Prepend a note. Blank text is ignored and returns None."""
        cleaned = (text or "").strip()
        if not cleaned:
            return None
        note = Note(
            id=uuid4().hex,
            text=cleaned,
            created_at=datetime.combine(self.day, datetime.now().time()).isoformat(),
        )
        self._persist([note, *self.items()])
        return note

    def toggle(self, note_id: str) -> list[Note]:
        notes = [
            n.model_copy(update={"done": not n.done}) if n.id == note_id else n
            for n in self.items()
        ]
        self._persist(notes)
        return notes

    def remove(self, note_id: str) -> list[Note]:
        notes = [n for n in self.items() if n.id != note_id]
        self._persist(notes)
        return notes

    def clear(self) -> None:
        self._persist([])

    def summary_entries(self) -> list[Entry]:
        return [note.to_entry() for note in self.items()]

    def summarize(self) -> SummaryResult:
        entries = self.summary_entries()
        result = extract_summary(entries, reference_day=self.day)
        log_event("summary.computed", source="notes", entries=len(entries), **result.as_dict())
        return result

    def _persist(self, notes: list[Note]) -> None:
        self.store.set(self.key, json.dumps([n.model_dump() for n in notes], ensure_ascii=False))
