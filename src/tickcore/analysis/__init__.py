"""
Analysis layer: quantities derived from a firing trace.

IMPORTANT: The core never reads these. One-way derivation only.
"""

from tickcore.analysis.timing import (
    TimerStats,
    fire_times,
    fire_intervals,
    lateness,
    delivery_counts,
    summarize_timer,
    summarize_timers,
)

__all__ = [
    "TimerStats",
    "fire_times",
    "fire_intervals",
    "lateness",
    "delivery_counts",
    "summarize_timer",
    "summarize_timers",
]
