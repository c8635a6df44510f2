"""
Virtual clock and timer queue.

The queue owns the current virtual time (integer milliseconds since an
epoch the host picks) and every pending one-shot or repeating callback.
Time only moves when advance() is called; nothing here reads the wall
clock, spawns threads or blocks.

Firing rules for one advance(t):
1. The clock is set to t.
2. Every entry that was pending when the pass began and has due_at <= t
   fires exactly once, in insertion order.
3. Entries scheduled by a callback during the pass are not considered
   until the next advance, even when their due_at is already <= t.
4. One-shot entries are dropped after firing; repeating entries are
   re-armed according to the drift policy.

A callback that raises is reported and the pass continues.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Callable, Iterator, Literal, TYPE_CHECKING
import itertools
import logging
import numbers

from tickcore.core.errors import CallbackFailure, ClockRegression, InvalidArgument

if TYPE_CHECKING:
    from tickcore.core.trace import TraceRecorder

logger = logging.getLogger(__name__)

TimerId = str
TimerCallback = Callable[[], None]
FailureReporter = Callable[[CallbackFailure], None]
DriftPolicy = Literal["fixed_rate", "fixed_delay"]

DRIFT_POLICIES = ("fixed_rate", "fixed_delay")

# Shared by every queue in the process so ids never collide across contexts
_timer_ids = itertools.count(1)


def next_timer_id() -> TimerId:
    """Fresh opaque timer token."""
    return str(next(_timer_ids))


@dataclass
class TimerEntry:
    """A pending callback. repeat_interval == 0 means one-shot."""

    id: TimerId
    callback: TimerCallback
    due_at: int
    repeat_interval: int = 0
    cancelled: bool = False

    @property
    def is_repeating(self) -> bool:
        return self.repeat_interval > 0


@dataclass
class FirePass:
    """What one TimerQueue.advance() call did."""

    time: int
    fired: list[TimerId] = field(default_factory=list)
    failures: list[CallbackFailure] = field(default_factory=list)


def _log_failure(failure: CallbackFailure) -> None:
    logger.warning("%s", failure, exc_info=failure.error)


def require_int(name: str, value, minimum: int | None = None) -> int:
    """Validate an integer argument, raising InvalidArgument otherwise."""
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidArgument(f"{name} must be an integer, got {value!r}")
    value = int(value)
    if minimum is not None and value < minimum:
        raise InvalidArgument(f"{name} must be >= {minimum}, got {value}")
    return value


class TimerQueue:
    """
    Pending timers against a virtual clock.

    Args:
        start_time: Initial clock value
        drift_policy: How repeating timers re-arm after firing
            - "fixed_rate": due_at += interval (no accumulated drift)
            - "fixed_delay": due_at = now + interval
        on_failure: Called with a CallbackFailure whenever a callback raises.
            Defaults to a logger warning.
        trace: Optional recorder that sees every firing
    """

    def __init__(
        self,
        start_time: int = 0,
        drift_policy: DriftPolicy = "fixed_rate",
        on_failure: FailureReporter | None = None,
        trace: "TraceRecorder | None" = None,
    ):
        if drift_policy not in DRIFT_POLICIES:
            raise ValueError(f"Unknown drift policy: {drift_policy}")
        self._now = require_int("start_time", start_time, minimum=0)
        self.drift_policy = drift_policy
        self._on_failure = on_failure or _log_failure
        self.trace = trace

        # Insertion ordered; re-armed repeating entries keep their slot
        self._entries: dict[TimerId, TimerEntry] = {}

    @property
    def now(self) -> int:
        """Current virtual time."""
        return self._now

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, timer_id: object) -> bool:
        return timer_id in self._entries

    def __iter__(self) -> Iterator[TimerEntry]:
        return iter(list(self._entries.values()))

    def pending(self) -> int:
        """Number of timers still waiting to fire."""
        return len(self._entries)

    def due_at(self, timer_id: TimerId) -> int | None:
        """Next fire time of a timer, or None if it is not pending."""
        entry = self._entries.get(timer_id)
        return entry.due_at if entry is not None else None

    def schedule_once(self, callback: TimerCallback, delay: int) -> TimerId:
        """Fire callback once, delay ms after the current virtual time."""
        delay = require_int("delay", delay, minimum=0)
        return self._insert(callback, self._now + delay, 0)

    def schedule_repeating(self, callback: TimerCallback, interval: int) -> TimerId:
        """Fire callback every interval ms, first at now + interval."""
        interval = require_int("interval", interval, minimum=1)
        return self._insert(callback, self._now + interval, interval)

    def cancel(self, timer_id: TimerId) -> None:
        """
        Stop a timer from firing again.

        Unknown or already-fired ids are ignored. Safe to call from inside
        any callback, including the timer's own.
        """
        entry = self._entries.pop(timer_id, None)
        if entry is not None:
            entry.cancelled = True

    def clear(self) -> None:
        """Drop every pending timer."""
        for entry in self._entries.values():
            entry.cancelled = True
        self._entries.clear()

    def advance(self, new_time: int) -> FirePass:
        """
        Move the clock to new_time and fire whatever is due.

        Raises:
            ClockRegression: new_time is earlier than the current clock.
                Nothing is changed in that case.
        """
        new_time = require_int("new_time", new_time)
        if new_time < self._now:
            raise ClockRegression(self._now, new_time)
        self._now = new_time

        result = FirePass(time=new_time)
        for entry in list(self._entries.values()):
            if entry.cancelled or entry.due_at > self._now:
                continue
            self._fire(entry, result)
        return result

    def _insert(self, callback: TimerCallback, due_at: int, interval: int) -> TimerId:
        timer_id = next_timer_id()
        self._entries[timer_id] = TimerEntry(timer_id, callback, due_at, interval)
        return timer_id

    def _fire(self, entry: TimerEntry, result: FirePass) -> None:
        if self.trace is not None:
            self.trace.record(self._now, "timer", entry.id, entry.due_at)

        try:
            entry.callback()
        except Exception as exc:
            failure = CallbackFailure("timer", entry.id, exc)
            result.failures.append(failure)
            self._on_failure(failure)
        result.fired.append(entry.id)

        if entry.cancelled:
            return
        if not entry.is_repeating:
            self._entries.pop(entry.id, None)
        elif self.drift_policy == "fixed_rate":
            entry.due_at += entry.repeat_interval
        else:
            entry.due_at = self._now + entry.repeat_interval
