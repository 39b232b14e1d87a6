"""Tests for in-memory counters, timings and structured events"""

import logging

from corpsocial.observability.telemetry import (
    LATENCY_SAMPLE_LIMIT,
    counter,
    get_counter,
    get_latency_stats,
    log_event,
    reset_telemetry,
    time_block,
)


def test_counter_accumulates():
    assert counter("chat.message_sent") == 1
    assert counter("chat.message_sent", 2) == 3
    assert get_counter("chat.message_sent") == 3
    assert get_counter("never.used") == 0


def test_time_block_records_latency_name():
    with time_block("api.summary.latency"):
        pass
    with time_block("api.summary.latency"):
        pass

    stats = get_latency_stats("api.summary.latency_ms")
    assert stats["count"] == 2
    assert stats["min"] <= stats["p50"] <= stats["max"]


def test_empty_stats():
    assert get_latency_stats("missing")["count"] == 0


def test_reset():
    counter("x")
    with time_block("y"):
        pass
    reset_telemetry()
    assert get_counter("x") == 0
    assert get_latency_stats("y")["count"] == 0


def test_log_event(caplog):
    with caplog.at_level(logging.INFO, logger="corpsocial.telemetry"):
        log_event("summary.computed", source="notes", tasks=2)
    assert "event=summary.computed" in caplog.text
    assert "source=notes tasks=2" in caplog.text


def test_latency_samples_are_bounded():
    for _ in range(LATENCY_SAMPLE_LIMIT + 5):
        with time_block("api.summary.latency"):
            pass
    assert get_latency_stats("api.summary.latency")["count"] == LATENCY_SAMPLE_LIMIT
