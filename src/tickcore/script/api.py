"""
ScriptAPI: the surface user scripts program against.

Thin wrappers over a ScriptContext and its Host, named after the familiar
browser-style globals (set_timeout, set_interval, console-style log and
error) plus the world, audio and item bindings. World and audio calls convert
positions to host coordinates and forward them without validation.
"""

from __future__ import annotations
from typing import Any, TYPE_CHECKING

from tickcore.core.vector import VecLike, as_block_coords, as_position, vec_format
from tickcore.host.ids import Block, Sfx

if TYPE_CHECKING:
    from tickcore.core.context import ScriptContext
    from tickcore.core.messages import MessageHandler, MessageType
    from tickcore.core.timers import TimerCallback, TimerId
    from tickcore.host.bindings import BlockId, ItemId


class ScriptAPI:
    """
    Script-facing API bound to one context.

    The Sfx and Block id tables are exposed as attributes so scripts can
    write api.sfx.BOMB or api.block.DIRT.
    """

    sfx = Sfx
    block = Block

    def __init__(self, context: "ScriptContext"):
        self.context = context

    @property
    def host(self):
        return self.context.host

    @property
    def now(self) -> int:
        return self.context.now

    # ── timers ──────────────────────────────────────────────────────────

    def set_timeout(self, callback: "TimerCallback", delay: int) -> "TimerId":
        """Run callback once, delay ms of virtual time from now."""
        return self.context.schedule_once(callback, delay)

    def set_interval(self, callback: "TimerCallback", interval: int) -> "TimerId":
        """Run callback every interval ms of virtual time."""
        return self.context.schedule_repeating(callback, interval)

    def set_immediate(self, callback: "TimerCallback") -> "TimerId":
        """Run callback on the next advance."""
        return self.context.schedule_once(callback, 0)

    def clear_timeout(self, timer_id: "TimerId") -> None:
        self.context.cancel(timer_id)

    clear_interval = clear_timeout

    # ── messages ────────────────────────────────────────────────────────

    def add_msg_handler(self, msg_type: "MessageType", handler: "MessageHandler") -> None:
        self.context.subscribe(msg_type, handler)

    def remove_msg_handler(self, msg_type: "MessageType", handler: "MessageHandler") -> None:
        self.context.unsubscribe(msg_type, handler)

    def clear_msg_handler(self) -> None:
        self.context.clear_subscriptions()

    # ── console ─────────────────────────────────────────────────────────

    def log(self, value: Any) -> None:
        """Print a value and append it to the in-game log."""
        text = str(value)
        self.host.print_line(text)
        self.host.game_log(text)

    def error(self, value: Any) -> None:
        """Print a value on the error channel."""
        self.host.print_error_line(str(value))

    def log_vec(self, pos: VecLike) -> None:
        self.log(vec_format(pos))

    # ── world and audio ─────────────────────────────────────────────────

    def get_block(self, pos: VecLike) -> "BlockId | None":
        return self.host.get_block(*as_block_coords(pos))

    def set_block(self, pos: VecLike, block: "BlockId") -> None:
        self.host.set_block(*as_block_coords(pos), block)

    def sfx_play(self, pos: VecLike, volume: float, sfx: int) -> None:
        self.host.play_sound(*as_position(pos), volume, int(sfx))

    # ── items ───────────────────────────────────────────────────────────

    def item_get_icon(self, item_id: "ItemId") -> int | None:
        return self.host.get_item_icon(item_id)

    def item_get_mesh(self, item_id: "ItemId") -> int | None:
        return self.host.get_item_mesh(item_id)

    def item_get_amount(self, item_id: "ItemId") -> int | None:
        return self.host.get_item_amount(item_id)

    def item_set_icon(self, item_id: "ItemId", icon: int) -> None:
        self.host.set_item_icon(item_id, icon)

    def item_set_mesh(self, item_id: "ItemId", mesh: int) -> None:
        self.host.set_item_mesh(item_id, mesh)

    def item_set_amount(self, item_id: "ItemId", amount: int) -> None:
        self.host.set_item_amount(item_id, amount)
