"""
In-process telemetry for CorpSocial.

Events go to the log as key=value pairs. Counters and latency samples
(milliseconds) stay in memory so tests can assert instrumentation; nothing is
exported. Keep message bodies and emails out of event fields.
"""

from __future__ import annotations

import contextlib
import logging
import threading
import time
from collections import Counter, defaultdict, deque
from collections.abc import Iterator
from statistics import fmean
from typing import Any

logger = logging.getLogger("corpsocial.telemetry")

# Most recent samples per metric; older ones are dropped
LATENCY_SAMPLE_LIMIT = 1000

_lock = threading.Lock()
_counts: Counter[str] = Counter()
_latencies_ms: defaultdict[str, deque[float]] = defaultdict(
    lambda: deque(maxlen=LATENCY_SAMPLE_LIMIT)
)


def _metric_key(name: str) -> str:
    # "api.summary.latency" and "api.summary.latency_ms" share samples
    return name if name.endswith("_ms") else f"{name}_ms"


def log_event(event_name: str, **fields: Any) -> None:
    """Write one structured event line at info level."""
    rendered = " ".join(f"{key}={value}" for key, value in sorted(fields.items()))
    logger.info("event=%s %s", event_name, rendered)


def counter(name: str, increment: int = 1) -> int:
    """Add to a named counter and return its new value."""
    with _lock:
        _counts[name] += increment
        value = _counts[name]
    logger.debug("counter %s=%d", name, value)
    return value


def get_counter(name: str) -> int:
    with _lock:
        return _counts[name]


def counters_snapshot() -> dict[str, int]:
    with _lock:
        return dict(sorted(_counts.items()))


@contextlib.contextmanager
def time_block(metric_name: str) -> Iterator[None]:
    """Record the wall time of the block, in milliseconds, under metric_name."""
    started = time.perf_counter()
    try:
        yield
    finally:
        elapsed_ms = (time.perf_counter() - started) * 1000
        key = _metric_key(metric_name)
        with _lock:
            _latencies_ms[key].append(elapsed_ms)
        logger.debug("timing %s=%.3fms", key, elapsed_ms)


def _percentile(ordered: list[float], fraction: float) -> float:
    return ordered[min(int(len(ordered) * fraction), len(ordered) - 1)]


def get_latency_stats(metric_name: str) -> dict[str, float]:
    """count/min/max/avg/p50/p95 of the recorded samples, all zero when none."""
    with _lock:
        samples = sorted(_latencies_ms.get(_metric_key(metric_name), ()))
    if not samples:
        return {"count": 0, "min": 0.0, "max": 0.0, "avg": 0.0, "p50": 0.0, "p95": 0.0}
    return {
        "count": len(samples),
        "min": samples[0],
        "max": samples[-1],
        "avg": fmean(samples),
        "p50": _percentile(samples, 0.50),
        "p95": _percentile(samples, 0.95),
    }


def reset_telemetry() -> None:
    """Drop all counters and latency samples."""
    with _lock:
        _counts.clear()
        _latencies_ms.clear()
