"""
Timer behaviour derived from a firing trace.

Answers questions such as: how often did a repeating timer actually run,
how late was each firing relative to its due time, and how evenly were
the firings spaced in virtual time.

Lateness is fire_time - due_at. It is 0 when the host stepped exactly on
a due time and grows when steps are coarser than the timer interval.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np

if TYPE_CHECKING:
    from tickcore.core.trace import TraceRecorder


@dataclass
class TimerStats:
    """Summary of one timer's firings."""

    key: str
    count: int
    first: int  # Virtual time of first firing
    last: int  # Virtual time of last firing
    mean_interval: float  # NaN with fewer than two firings
    mean_lateness: float
    max_lateness: int


def fire_times(trace: "TraceRecorder", key: str) -> np.ndarray:
    """Virtual times at which a timer fired, in order."""
    return np.array([ev.time for ev in trace.select(key, "timer")], dtype=np.int64)


def fire_intervals(trace: "TraceRecorder", key: str) -> np.ndarray:
    """Gaps between consecutive firings of a timer."""
    return np.diff(fire_times(trace, key))


def lateness(trace: "TraceRecorder", key: str) -> np.ndarray:
    """Per-firing delay past the due time."""
    events = trace.select(key, "timer")
    fired = np.array([ev.time for ev in events], dtype=np.int64)
    due = np.array([ev.due_at for ev in events], dtype=np.int64)
    return fired - due


def delivery_counts(trace: "TraceRecorder") -> dict[str, int]:
    """Handler invocations per message type."""
    arrays = trace.as_arrays()
    keys = arrays["key"][arrays["kind"] == "message"]
    types, counts = np.unique(keys.astype(str), return_counts=True)
    return {str(t): int(c) for t, c in zip(types, counts)}


def summarize_timer(trace: "TraceRecorder", key: str) -> TimerStats:
    """
    Stats for one timer.

    Raises:
        ValueError: the timer never fired in this trace
    """
    times = fire_times(trace, key)
    if len(times) == 0:
        raise ValueError(f"Timer {key!r} has no firings in the trace")
    late = lateness(trace, key)
    gaps = np.diff(times)
    return TimerStats(
        key=key,
        count=int(len(times)),
        first=int(times[0]),
        last=int(times[-1]),
        mean_interval=float(gaps.mean()) if len(gaps) else float("nan"),
        mean_lateness=float(late.mean()),
        max_lateness=int(late.max()),
    )


def summarize_timers(trace: "TraceRecorder") -> dict[str, TimerStats]:
    """Stats for every timer that fired, keyed by timer id."""
    return {key: summarize_timer(trace, key) for key in trace.keys("timer")}
