"""Unit tests for ScriptContext and its two-phase advance()."""

import logging

import pytest

from tickcore.core.context import AdvanceResult, ContextConfig, ScriptContext, create_context
from tickcore.core.errors import ClockRegression, InvalidArgument
from tickcore.core.messages import Message
from tickcore.host import InMemoryHost


class TestContextConfig:
    """Tests for ContextConfig."""

    def test_default_config(self):
        cfg = ContextConfig()
        assert cfg.drift_policy == "fixed_rate"
        assert cfg.clock_regression == "clamp"
        assert cfg.start_time == 0
        assert cfg.record_trace is False

    def test_invalid_drift_policy(self):
        with pytest.raises(ValueError):
            ContextConfig(drift_policy="sometimes")

    def test_invalid_regression_policy(self):
        with pytest.raises(ValueError):
            ContextConfig(clock_regression="ignore")

    def test_negative_start_time(self):
        with pytest.raises(InvalidArgument):
            ContextConfig(start_time=-1)

    def test_start_time_applies(self, host):
        ctx = ScriptContext(host=host, config=ContextConfig(start_time=5000))
        tid = ctx.schedule_once(lambda: None, 10)
        assert ctx.now == 5000
        assert ctx.timers.due_at(tid) == 5010


class TestAdvance:
    """The scenarios every host step relies on."""

    def test_ping_subscribe_unsubscribe(self, context, calls):
        def h(msg):
            calls.append(msg.type)

        context.subscribe("Ping", h)
        context.advance(0, [Message("Ping")])
        assert calls == ["Ping"]

        context.unsubscribe("Ping", h)
        context.advance(100, [Message("Ping")])
        assert calls == ["Ping"]

    def test_repeating_counter(self, context):
        counter = []
        context.schedule_repeating(lambda: counter.append(1), 1000)

        context.advance(999, [])
        assert len(counter) == 0
        context.advance(1000, [])
        assert len(counter) == 1
        context.advance(2500, [])
        assert len(counter) == 2

    def test_messages_before_timers(self, context, calls):
        context.schedule_once(lambda: calls.append("timer"), 10)
        context.subscribe("M", lambda m: calls.append("message"))

        context.advance(10, [Message("M")])
        assert calls == ["message", "timer"]

    def test_handler_scheduled_zero_delay_waits(self, context, calls):
        def on_msg(m):
            context.schedule_once(lambda: calls.append("timer"), 0)

        context.subscribe("Go", on_msg)
        context.advance(500, [Message("Go")])
        assert calls == []

        context.advance(500, [])
        assert calls == ["timer"]

    def test_handler_scheduled_timer_already_due_fires_same_call(self, context, calls):
        context.advance(100)

        def on_msg(m):
            context.schedule_once(lambda: calls.append("timer"), 50)

        context.subscribe("Go", on_msg)
        context.advance(200, [Message("Go")])
        assert calls == ["timer"]

    def test_handler_cancels_timer_in_same_call(self, context, calls):
        tid = context.schedule_once(lambda: calls.append("timer"), 10)
        context.subscribe("Stop", lambda m: context.cancel(tid))

        context.advance(10, [Message("Stop")])
        assert calls == []

    def test_timer_cannot_affect_same_call_dispatch(self, context, calls):
        def subscribe_late():
            context.subscribe("M", lambda m: calls.append("late handler"))

        context.schedule_once(subscribe_late, 0)
        context.advance(0, [Message("M")])
        assert calls == []

        context.advance(1, [Message("M")])
        assert calls == ["late handler"]

    def test_wire_mappings_accepted(self, context, calls):
        context.subscribe("BlockBreak", lambda m: calls.append(m["block"]))
        context.advance(0, [{"T": "BlockBreak", "block": 3}])
        assert calls == [3]

    def test_result_summary(self, context):
        context.subscribe("A", lambda m: None)
        context.subscribe("A", lambda m: None)
        tid = context.schedule_once(lambda: None, 5)

        result = context.advance(5, [Message("A"), Message("B")])
        assert isinstance(result, AdvanceResult)
        assert result.time == 5
        assert result.messages == 2
        assert result.deliveries == 2
        assert result.timers_fired == [tid]
        assert result.ok
        assert context.steps == 1


class TestFailureReporting:
    """Caught callback failures go to the host error channel."""

    def test_raising_timer_does_not_stop_sibling(self, context, host, calls):
        def boom():
            raise RuntimeError("kaboom")

        bad = context.schedule_once(boom, 10)
        context.schedule_once(lambda: calls.append("ok"), 10)

        result = context.advance(10)
        assert calls == ["ok"]
        assert not result.ok
        assert len(host.error_lines) == 1
        assert bad in host.error_lines[0]
        assert "kaboom" in host.error_lines[0]

    def test_raising_handler_reported_with_type(self, context, host, calls):
        def bad(m):
            raise ValueError("bad payload")

        context.subscribe("Hit", bad)
        context.subscribe("Hit", lambda m: calls.append("next"))
        context.schedule_once(lambda: calls.append("timer"), 0)

        result = context.advance(0, [Message("Hit")])
        assert calls == ["next", "timer"]
        assert len(result.failures) == 1
        assert "Hit" in host.error_lines[0]

    def test_failure_traceback_logged_at_debug(self, context, caplog):
        context.schedule_once(lambda: [][1], 0)
        with caplog.at_level(logging.DEBUG, logger="tickcore.core.context"):
            context.advance(0)
        assert any(r.exc_info for r in caplog.records)

    def test_unknown_type_emits_nothing(self, context, host):
        context.advance(0, [Message("Nobody")])
        assert host.error_lines == []
        assert host.lines == []

    def test_base_exceptions_propagate(self, context):
        def stop():
            raise KeyboardInterrupt

        context.schedule_once(stop, 0)
        with pytest.raises(KeyboardInterrupt):
            context.advance(0)


class TestClockRegression:
    """Host-supplied time going backwards."""

    def test_clamp_keeps_clock_and_reports(self, context, host, calls):
        context.advance(1000)
        context.subscribe("M", lambda m: calls.append("message"))
        context.schedule_once(lambda: calls.append("timer"), 0)

        result = context.advance(900, [Message("M")])
        assert result.clock_regressed
        assert result.time == 1000
        assert context.now == 1000
        assert calls == ["message", "timer"]
        assert len(host.error_lines) == 1
        assert "900" in host.error_lines[0]

    def test_clamp_negative_time(self, host):
        ctx = create_context(host=host, start_time=0)
        result = ctx.advance(-5)

        assert result.clock_regressed
        assert result.time == 0
        assert ctx.now == 0
        assert len(host.error_lines) == 1
        assert "-5" in host.error_lines[0]

    def test_raise_policy(self, host, calls):
        ctx = ScriptContext(host=host, config=ContextConfig(clock_regression="raise"))
        ctx.advance(1000)
        ctx.subscribe("M", lambda m: calls.append("message"))

        with pytest.raises(ClockRegression):
            ctx.advance(900, [Message("M")])
        assert calls == []
        assert ctx.now == 1000


class TestLifecycle:
    def test_contexts_are_independent(self, calls):
        a = create_context()
        b = create_context()
        a.schedule_once(lambda: calls.append("a"), 10)
        b.subscribe("M", lambda m: calls.append("b"))

        b.advance(10, [Message("M")])
        assert calls == ["b"]

        a.advance(10, [Message("M")])
        assert calls == ["b", "a"]

    def test_teardown_drops_timers_and_handlers(self, context, calls):
        context.schedule_repeating(lambda: calls.append("timer"), 10)
        context.subscribe("M", lambda m: calls.append("message"))

        context.teardown()
        context.advance(100, [Message("M")])
        assert calls == []
        assert len(context.timers) == 0
        assert len(context.dispatcher) == 0

    def test_create_context_config_kwargs(self):
        ctx = create_context(drift_policy="fixed_delay", record_trace=True)
        assert isinstance(ctx.host, InMemoryHost)
        assert ctx.timers.drift_policy == "fixed_delay"
        assert ctx.trace is not None
