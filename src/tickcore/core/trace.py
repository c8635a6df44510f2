"""
Firing trace: a record of every timer firing and message delivery.

Off by default. When enabled through ContextConfig.record_trace, the timer
queue and dispatcher append one TraceEvent per callback invocation, stamped
with the virtual time of the advance that ran it.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, Literal

import numpy as np

EventKind = Literal["timer", "message"]


@dataclass
class TraceEvent:
    """One callback invocation."""

    time: int  # Virtual clock when it ran
    kind: EventKind
    key: str  # Timer id or message type
    due_at: int | None = None  # Timers only


class TraceRecorder:
    """Append-only list of TraceEvents with array views for analysis."""

    def __init__(self):
        self.events: list[TraceEvent] = []

    def __len__(self) -> int:
        return len(self.events)

    def __iter__(self) -> Iterator[TraceEvent]:
        return iter(self.events)

    def record(
        self, time: int, kind: EventKind, key: str, due_at: int | None = None
    ) -> None:
        self.events.append(TraceEvent(time, kind, key, due_at))

    def clear(self) -> None:
        self.events.clear()

    def keys(self, kind: EventKind | None = None) -> list[str]:
        """Distinct keys in first-seen order, optionally for one kind."""
        seen: dict[str, None] = {}
        for ev in self.events:
            if kind is None or ev.kind == kind:
                seen.setdefault(ev.key, None)
        return list(seen)

    def select(self, key: str, kind: EventKind | None = None) -> list[TraceEvent]:
        return [
            ev for ev in self.events
            if ev.key == key and (kind is None or ev.kind == kind)
        ]

    def as_arrays(self) -> dict[str, np.ndarray]:
        """
        Column arrays over all events.

        Returns:
            Dict with "time" (int64), "kind" and "key" (object) and
            "due_at" (float64, NaN for message deliveries)
        """
        n = len(self.events)
        time = np.fromiter((ev.time for ev in self.events), dtype=np.int64, count=n)
        due_at = np.fromiter(
            (np.nan if ev.due_at is None else ev.due_at for ev in self.events),
            dtype=np.float64,
            count=n,
        )
        kind = np.array([ev.kind for ev in self.events], dtype=object)
        key = np.array([ev.key for ev in self.events], dtype=object)
        return {"time": time, "kind": kind, "key": key, "due_at": due_at}
