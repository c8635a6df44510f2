"""
ScriptContext: one scripting context and its per-step Advance.

A context bundles the virtual clock / timer queue, the message registry
and the host it reports to. The host drives it by calling advance() once
per step with the new virtual time and the messages gathered since the
previous step.

Advance runs in two phases, always in this order:
1. Deliver the whole message batch, in batch order.
2. Move the clock and fire due timers.

So a handler may schedule or cancel timers that matter for phase 2 of the
same call, but timers never influence delivery within that call. A timer
scheduled by a handler with delay 0 still waits for the next advance
(see TimerQueue).
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Iterable, Literal, Mapping, TYPE_CHECKING
import logging

from tickcore.core.errors import CallbackFailure, ClockRegression
from tickcore.core.messages import Message, MessageDispatcher, MessageHandler, MessageType
from tickcore.core.timers import (
    DRIFT_POLICIES,
    DriftPolicy,
    TimerCallback,
    TimerId,
    TimerQueue,
    require_int,
)
from tickcore.core.trace import TraceRecorder

if TYPE_CHECKING:
    from tickcore.host.bindings import Host

logger = logging.getLogger(__name__)

ClockRegressionPolicy = Literal["clamp", "raise"]


@dataclass
class ContextConfig:
    """Configuration for a script context."""

    drift_policy: DriftPolicy = "fixed_rate"  # Repeating timers: due += interval
    clock_regression: ClockRegressionPolicy = "clamp"  # Keep old clock, report
    start_time: int = 0  # Virtual clock before the first advance (ms)
    record_trace: bool = False  # Record every callback in a TraceRecorder

    def __post_init__(self):
        if self.drift_policy not in DRIFT_POLICIES:
            raise ValueError(f"Unknown drift policy: {self.drift_policy}")
        if self.clock_regression not in ("clamp", "raise"):
            raise ValueError(f"Unknown clock regression policy: {self.clock_regression}")
        require_int("start_time", self.start_time, minimum=0)


@dataclass
class AdvanceResult:
    """Summary of one advance() call."""

    time: int  # Clock after the call
    messages: int  # Messages in the batch
    deliveries: int  # Handler invocations
    timers_fired: list[TimerId] = field(default_factory=list)
    failures: list[CallbackFailure] = field(default_factory=list)
    clock_regressed: bool = False

    @property
    def ok(self) -> bool:
        """True when no callback failed and the clock did not go backwards."""
        return not self.failures and not self.clock_regressed


@dataclass
class ScriptContext:
    """
    Explicit handle for one scripting context.

    Contexts are independent: each has its own clock, timers and
    subscriptions. Every caught callback failure and every clock
    regression is written to host.print_error_line.
    """

    host: "Host"
    config: ContextConfig = field(default_factory=ContextConfig)

    timers: TimerQueue | None = field(default=None, init=False)
    dispatcher: MessageDispatcher | None = field(default=None, init=False)
    trace: TraceRecorder | None = field(default=None, init=False)
    steps: int = field(default=0, init=False)

    def __post_init__(self):
        if self.config.record_trace:
            self.trace = TraceRecorder()
        self.timers = TimerQueue(
            start_time=self.config.start_time,
            drift_policy=self.config.drift_policy,
            on_failure=self._report_failure,
            trace=self.trace,
        )
        self.dispatcher = MessageDispatcher(
            on_failure=self._report_failure,
            trace=self.trace,
        )
        self.dispatcher.now = self.timers.now

    @property
    def now(self) -> int:
        """Current virtual time."""
        return self.timers.now

    def advance(
        self,
        new_time: int,
        messages: Iterable[Message | Mapping[str, Any]] = (),
    ) -> AdvanceResult:
        """
        Deliver messages, then move the clock to new_time and fire timers.

        Messages may be Message objects or wire mappings ({"T": tag, ...}).

        Raises:
            ClockRegression: new_time < now and the policy is "raise".
                Nothing is delivered or fired in that case.
        """
        new_time = require_int("new_time", new_time)
        batch = [_as_message(m) for m in messages]

        regressed = new_time < self.now
        if regressed:
            regression = ClockRegression(self.now, new_time)
            if self.config.clock_regression == "raise":
                raise regression
            self._report_regression(regression)
            new_time = self.now

        self.dispatcher.now = new_time
        delivered = self.dispatcher.dispatch_batch(batch)
        fired = self.timers.advance(new_time)
        self.steps += 1

        return AdvanceResult(
            time=new_time,
            messages=delivered.messages,
            deliveries=delivered.deliveries,
            timers_fired=fired.fired,
            failures=delivered.failures + fired.failures,
            clock_regressed=regressed,
        )

    def schedule_once(self, callback: TimerCallback, delay: int) -> TimerId:
        return self.timers.schedule_once(callback, delay)

    def schedule_repeating(self, callback: TimerCallback, interval: int) -> TimerId:
        return self.timers.schedule_repeating(callback, interval)

    def cancel(self, timer_id: TimerId) -> None:
        self.timers.cancel(timer_id)

    def subscribe(self, msg_type: MessageType, handler: MessageHandler) -> None:
        self.dispatcher.subscribe(msg_type, handler)

    def unsubscribe(self, msg_type: MessageType, handler: MessageHandler) -> None:
        self.dispatcher.unsubscribe(msg_type, handler)

    def clear_subscriptions(self) -> None:
        self.dispatcher.clear_all()

    def teardown(self) -> None:
        """Drop all timers and subscriptions. The clock keeps its value."""
        self.timers.clear()
        self.dispatcher.clear_all()
        logger.debug("context torn down at t=%d after %d steps", self.now, self.steps)

    def _report_failure(self, failure: CallbackFailure) -> None:
        self.host.print_error_line(str(failure))
        logger.debug("%s", failure, exc_info=failure.error)

    def _report_regression(self, regression: ClockRegression) -> None:
        self.host.print_error_line(str(regression))
        logger.warning("%s; keeping t=%d", regression, regression.current)


def _as_message(item: Message | Mapping[str, Any]) -> Message:
    if isinstance(item, Message):
        return item
    return Message.from_mapping(item)


def create_context(host: "Host | None" = None, **config) -> ScriptContext:
    """
    Convenience factory for a context.

    Args:
        host: Host to report to (an InMemoryHost if None)
        **config: ContextConfig fields
    """
    if host is None:
        from tickcore.host.bindings import InMemoryHost

        host = InMemoryHost()
    return ScriptContext(host=host, config=ContextConfig(**config))
