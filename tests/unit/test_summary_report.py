"""Tests for summary display lines"""

from corpsocial.summary import SummaryResult, summary_lines, summary_title


def test_lines_always_show_tasks_and_meetings():
    assert summary_lines(SummaryResult(tasks=2, meetings=1)) == [
        "Task-uri: 2",
        "Întâlniri: 1",
    ]


def test_lines_add_calls_and_others_when_present():
    lines = summary_lines(SummaryResult(tasks=0, meetings=0, calls=3, others=1))
    assert lines == ["Task-uri: 0", "Întâlniri: 0", "Apeluri: 3", "Altele: 1"]


def test_title_defaults():
    assert summary_title() == "Ziua ta - Rezumat"
    assert summary_title("") == "Ziua ta - Rezumat"


def test_title_with_label():
    assert summary_title("ana@example.com") == "ana@example.com - Rezumat"
