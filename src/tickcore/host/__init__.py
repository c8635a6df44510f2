"""
Host-facing bindings.

The core reaches the outside world only through a Host:
- print_line / print_error_line: console output
- game_log: the in-game message log
- get_block / set_block: world access
- play_sound: audio
- get_item_* / set_item_*: scripted item icon, mesh and amount
"""

from tickcore.host.ids import Sfx, Block
from tickcore.host.bindings import Host, InMemoryHost, StdioHost, SoundRequest, ScriptedItem

__all__ = [
    "Host",
    "InMemoryHost",
    "StdioHost",
    "SoundRequest",
    "ScriptedItem",
    "Sfx",
    "Block",
]
