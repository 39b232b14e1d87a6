"""Tests for the per-day notes checklist and its key-value stores"""

import json
from datetime import date

from corpsocial.services import DailyNotes, JsonFileKeyValueStore, MemoryKeyValueStore, notes_key
from corpsocial.summary import SummaryResult

DAY = date(2024, 1, 2)


class TestNotesKey:
    def test_unsafe_characters_are_replaced(self):
        assert notes_key("Ana.Pop+x@Example.com", DAY) == "notes:Ana.Pop_x@Example.com:2024-01-02"

    def test_guest_default(self):
        assert notes_key(None, DAY) == "notes:guest:2024-01-02"
        assert notes_key("", DAY) == "notes:guest:2024-01-02"


class TestDailyNotes:
    def test_add_prepends_and_ignores_blank(self):
        notes = DailyNotes(MemoryKeyValueStore(), "ana@example.com", today=DAY)
        first = notes.add("primul")
        second = notes.add("  al doilea  ")

        assert notes.add("   ") is None
        assert [n.text for n in notes.items()] == ["al doilea", "primul"]
        assert first.id != second.id
        assert first.created_at.startswith("2024-01-02T")

    def test_toggle_remove_clear(self):
        notes = DailyNotes(MemoryKeyValueStore(), "ana@example.com", today=DAY)
        a = notes.add("a")
        b = notes.add("b")

        toggled = notes.toggle(a.id)
        assert [n.done for n in toggled] == [False, True]
        assert notes.toggle(a.id)[1].done is False

        assert [n.id for n in notes.remove(b.id)] == [a.id]
        notes.clear()
        assert notes.items() == []

    def test_days_and_users_are_separate(self):
        store = MemoryKeyValueStore()
        DailyNotes(store, "ana@example.com", today=DAY).add("azi")

        assert DailyNotes(store, "ana@example.com", today=date(2024, 1, 3)).items() == []
        assert DailyNotes(store, "ion@example.com", today=DAY).items() == []
        assert len(DailyNotes(store, "ana@example.com", today=DAY).items()) == 1

    def test_corrupt_payload_reads_as_empty(self):
        store = MemoryKeyValueStore()
        store.set(notes_key("ana@example.com", DAY), "{not json")
        assert DailyNotes(store, "ana@example.com", today=DAY).items() == []

    def test_unexpected_payload_shapes_read_as_empty(self):
        store = MemoryKeyValueStore()
        key = notes_key("ana@example.com", DAY)
        for raw in ['{"a": 1}', '"text"', "42", '[{"text": 1}]', '["task"]']:
            store.set(key, raw)
            notes = DailyNotes(store, "ana@example.com", today=DAY)
            assert notes.items() == []
            assert notes.summarize() == SummaryResult()

    def test_summarize_uses_notes_day(self):
        notes = DailyNotes(MemoryKeyValueStore(), "ana@example.com", today=DAY)
        notes.add("3 taskuri")
        notes.add("am avut un call")
        notes.add("am făcut treaba")

        assert notes.summarize() == SummaryResult(tasks=3, calls=1, others=1)
        assert [e.text for e in notes.summary_entries()][0] == "am făcut treaba"


class TestJsonFileKeyValueStore:
    def test_persists_across_instances(self, tmp_path):
        path = tmp_path / "nested" / "notes.json"
        DailyNotes(JsonFileKeyValueStore(str(path)), "ana@example.com", today=DAY).add("ședință")

        reopened = DailyNotes(JsonFileKeyValueStore(str(path)), "ana@example.com", today=DAY)
        assert [n.text for n in reopened.items()] == ["ședință"]

        on_disk = json.loads(path.read_text(encoding="utf-8"))
        assert list(on_disk) == ["notes:ana@example.com:2024-01-02"]

    def test_missing_file(self, tmp_path):
        assert JsonFileKeyValueStore(str(tmp_path / "none.json")).get("k") is None
