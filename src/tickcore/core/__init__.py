"""
Core event primitives.

This layer knows NOTHING about blocks, sounds or the game world.
It only knows:
- A virtual clock that moves when the host says so
- One-shot and repeating timers against that clock
- Tagged messages and the handlers subscribed to each tag
- The per-step Advance that delivers messages, then fires timers
"""

from tickcore.core.errors import (
    TickCoreError,
    InvalidArgument,
    ClockRegression,
    CallbackFailure,
)
from tickcore.core.vector import vec_new, vec_add, vec_format, as_block_coords, as_position
from tickcore.core.timers import TimerEntry, TimerQueue, FirePass
from tickcore.core.messages import Message, MessageDispatcher, DeliveryPass, decode_batch
from tickcore.core.trace import TraceEvent, TraceRecorder
from tickcore.core.context import ContextConfig, ScriptContext, AdvanceResult, create_context

__all__ = [
    "TickCoreError",
    "InvalidArgument",
    "ClockRegression",
    "CallbackFailure",
    "vec_new",
    "vec_add",
    "vec_format",
    "as_block_coords",
    "as_position",
    "TimerEntry",
    "TimerQueue",
    "FirePass",
    "Message",
    "MessageDispatcher",
    "DeliveryPass",
    "decode_batch",
    "TraceEvent",
    "TraceRecorder",
    "ContextConfig",
    "ScriptContext",
    "AdvanceResult",
    "create_context",
]
