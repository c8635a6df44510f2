"""Unit tests for trace recording and timing analysis."""

import numpy as np
import pytest

from tickcore.analysis import (
    delivery_counts,
    fire_intervals,
    fire_times,
    lateness,
    summarize_timer,
    summarize_timers,
)
from tickcore.core.messages import Message
from tickcore.core.trace import TraceRecorder


class TestTraceRecorder:
    def test_records_timers_and_messages(self, traced_context):
        ctx = traced_context
        ctx.subscribe("M", lambda m: None)
        tid = ctx.schedule_once(lambda: None, 10)

        ctx.advance(10, [Message("M")])
        kinds = [ev.kind for ev in ctx.trace]
        assert kinds == ["message", "timer"]
        assert ctx.trace.events[1].key == tid
        assert ctx.trace.events[1].due_at == 10
        assert ctx.trace.events[0].due_at is None

    def test_trace_off_by_default(self, context):
        assert context.trace is None
        assert context.timers.trace is None

    def test_as_arrays(self):
        trace = TraceRecorder()
        trace.record(5, "timer", "1", due_at=5)
        trace.record(7, "message", "Ping")
        arrays = trace.as_arrays()
        assert arrays["time"].tolist() == [5, 7]
        assert arrays["key"].tolist() == ["1", "Ping"]
        assert arrays["due_at"][0] == 5.0
        assert np.isnan(arrays["due_at"][1])

    def test_empty_arrays(self):
        arrays = TraceRecorder().as_arrays()
        assert len(arrays["time"]) == 0

    def test_keys_first_seen_order(self):
        trace = TraceRecorder()
        trace.record(1, "message", "B")
        trace.record(2, "timer", "9", due_at=2)
        trace.record(3, "message", "A")
        trace.record(4, "message", "B")
        assert trace.keys() == ["B", "9", "A"]
        assert trace.keys("message") == ["B", "A"]


class TestTiming:
    @pytest.fixture
    def stepped(self, traced_context):
        """Repeating 100ms timer driven by 150ms host steps."""
        tid = traced_context.schedule_repeating(lambda: None, 100)
        for t in range(0, 901, 150):
            traced_context.advance(t)
        return traced_context.trace, tid

    def test_fire_times(self, stepped):
        trace, tid = stepped
        # fixed_rate: due 100, 200, ... one firing per step while due
        assert fire_times(trace, tid).tolist() == [150, 300, 450, 600, 750, 900]

    def test_fire_intervals(self, stepped):
        trace, tid = stepped
        assert np.all(fire_intervals(trace, tid) == 150)

    def test_lateness_grows_when_steps_are_coarse(self, stepped):
        trace, tid = stepped
        assert lateness(trace, tid).tolist() == [50, 100, 150, 200, 250, 300]

    def test_summarize_timer(self, stepped):
        trace, tid = stepped
        stats = summarize_timer(trace, tid)
        assert stats.count == 6
        assert stats.first == 150
        assert stats.last == 900
        assert stats.mean_interval == 150.0
        assert stats.max_lateness == 300

    def test_summarize_single_firing(self, traced_context):
        tid = traced_context.schedule_once(lambda: None, 10)
        traced_context.advance(10)
        stats = summarize_timer(traced_context.trace, tid)
        assert stats.count == 1
        assert np.isnan(stats.mean_interval)
        assert stats.mean_lateness == 0.0

    def test_summarize_unknown_timer(self):
        with pytest.raises(ValueError):
            summarize_timer(TraceRecorder(), "nope")

    def test_summarize_timers(self, traced_context):
        a = traced_context.schedule_once(lambda: None, 5)
        b = traced_context.schedule_repeating(lambda: None, 5)
        traced_context.advance(5)
        traced_context.advance(10)
        stats = summarize_timers(traced_context.trace)
        assert set(stats) == {a, b}
        assert stats[b].count == 2

    def test_delivery_counts(self, traced_context):
        traced_context.subscribe("A", lambda m: None)
        traced_context.subscribe("A", lambda m: None)
        traced_context.subscribe("B", lambda m: None)
        traced_context.advance(0, [Message("A"), Message("B"), Message("C")])
        assert delivery_counts(traced_context.trace) == {"A": 2, "B": 1}
