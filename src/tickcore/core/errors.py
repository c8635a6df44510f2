"""
Error kinds raised or reported by the event core.

Only InvalidArgument and (optionally) ClockRegression ever reach a caller.
CallbackFailure is built at the fire/dispatch boundary, reported on the
host's error channel, and collected into the AdvanceResult.
"""

from __future__ import annotations


class TickCoreError(Exception):
    """Base class for all event core errors."""


class InvalidArgument(TickCoreError, ValueError):
    """A delay or interval outside its allowed range."""


class ClockRegression(TickCoreError):
    """The host supplied a virtual time earlier than the current one."""

    def __init__(self, current: int, requested: int):
        self.current = current
        self.requested = requested
        super().__init__(
            f"clock regression: requested t={requested} but clock is at t={current}"
        )


class CallbackFailure(TickCoreError):
    """
    A timer or message callback raised while firing.

    Attributes:
        source: "timer" or "message"
        key: Timer id or message type that was being processed
        error: The exception the callback raised
    """

    def __init__(self, source: str, key: str, error: BaseException):
        self.source = source
        self.key = key
        self.error = error
        super().__init__(
            f"{source} callback failed ({key}): {type(error).__name__}: {error}"
        )
