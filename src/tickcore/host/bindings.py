"""
The host surface the core calls into.

Host is the protocol an embedding application implements: text output,
the in-game log, block access, sound playback and scripted item
properties (icon, mesh and stack amount per item id). The core forwards
arguments verbatim and never validates coordinates or ids.

InMemoryHost is a complete host without a game attached: it keeps output
in lists, blocks and items in dicts and queues sound requests for the
caller to drain. StdioHost additionally echoes output to the process streams.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Protocol, TextIO
import sys

from tickcore.host.ids import Sfx

BlockId = int
BlockPos = tuple[int, int, int]
ItemId = int


class Host(Protocol):
    """Protocol for the embedding application."""

    def print_line(self, text: str) -> None:
        """Write one line of ordinary output. text has no trailing newline."""
        ...

    def print_error_line(self, text: str) -> None:
        """Write one line of error output."""
        ...

    def game_log(self, text: str) -> None:
        """Append a line to the in-game log shown to players."""
        ...

    def get_block(self, x: int, y: int, z: int) -> BlockId | None:
        """Block at a position, or None where the world has nothing loaded."""
        ...

    def set_block(self, x: int, y: int, z: int, block: BlockId) -> None:
        ...

    def play_sound(self, x: float, y: float, z: float, volume: float, sfx: int) -> None:
        ...

    def get_item_icon(self, item_id: ItemId) -> int | None:
        """Icon of a scripted item, or None for an unknown id."""
        ...

    def get_item_mesh(self, item_id: ItemId) -> int | None:
        ...

    def get_item_amount(self, item_id: ItemId) -> int | None:
        ...

    def set_item_icon(self, item_id: ItemId, icon: int) -> None:
        ...

    def set_item_mesh(self, item_id: ItemId, mesh: int) -> None:
        ...

    def set_item_amount(self, item_id: ItemId, amount: int) -> None:
        ...


@dataclass
class SoundRequest:
    """A queued sound playback, as the host's audio system receives it."""

    x: float
    y: float
    z: float
    volume: float
    sfx: Sfx


@dataclass
class ScriptedItem:
    """Display properties of one script-defined item."""

    icon: int = 0
    mesh: int = 0
    amount: int = 0


class InMemoryHost:
    """
    Host that keeps everything in memory.

    Args:
        blocks: Initial block contents keyed by (x, y, z)
        items: Scripted items keyed by id. Setters ignore ids not listed here.
    """

    def __init__(
        self,
        blocks: dict[BlockPos, BlockId] | None = None,
        items: dict[ItemId, ScriptedItem] | None = None,
    ):
        self.lines: list[str] = []
        self.error_lines: list[str] = []
        self.log: list[str] = []
        self.blocks: dict[BlockPos, BlockId] = dict(blocks or {})
        self.sounds: list[SoundRequest] = []
        self.items: dict[ItemId, ScriptedItem] = dict(items or {})

    def print_line(self, text: str) -> None:
        self.lines.append(text)

    def print_error_line(self, text: str) -> None:
        self.error_lines.append(text)

    def game_log(self, text: str) -> None:
        self.log.append(text)

    def get_block(self, x: int, y: int, z: int) -> BlockId | None:
        return self.blocks.get((x, y, z))

    def set_block(self, x: int, y: int, z: int, block: BlockId) -> None:
        self.blocks[(x, y, z)] = block

    def play_sound(self, x: float, y: float, z: float, volume: float, sfx: int) -> None:
        self.sounds.append(
            SoundRequest(float(x), float(y), float(z), float(volume), Sfx.coerce(sfx))
        )

    def drain_sounds(self) -> list[SoundRequest]:
        """Return and forget every queued sound request."""
        drained, self.sounds = self.sounds, []
        return drained

    def get_item_icon(self, item_id: ItemId) -> int | None:
        item = self.items.get(item_id)
        return item.icon if item is not None else None

    def get_item_mesh(self, item_id: ItemId) -> int | None:
        item = self.items.get(item_id)
        return item.mesh if item is not None else None

    def get_item_amount(self, item_id: ItemId) -> int | None:
        item = self.items.get(item_id)
        return item.amount if item is not None else None

    def set_item_icon(self, item_id: ItemId, icon: int) -> None:
        if item_id in self.items:
            self.items[item_id].icon = icon

    def set_item_mesh(self, item_id: ItemId, mesh: int) -> None:
        if item_id in self.items:
            self.items[item_id].mesh = mesh

    def set_item_amount(self, item_id: ItemId, amount: int) -> None:
        if item_id in self.items:
            self.items[item_id].amount = amount


class StdioHost(InMemoryHost):
    """InMemoryHost that also writes output lines to stdout / stderr."""

    def __init__(
        self,
        blocks: dict[BlockPos, BlockId] | None = None,
        items: dict[ItemId, ScriptedItem] | None = None,
        out: TextIO | None = None,
        err: TextIO | None = None,
    ):
        super().__init__(blocks, items)
        self._out = out
        self._err = err

    def print_line(self, text: str) -> None:
        super().print_line(text)
        print(text, file=self._out or sys.stdout)

    def print_error_line(self, text: str) -> None:
        super().print_error_line(text)
        print(text, file=self._err or sys.stderr)
