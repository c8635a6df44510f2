#!/usr/bin/env python3
"""
Demo: Message handlers reacting to world events

Breaking a dirt block plays a bomb sound and, half a second later,
regrows the dirt. Other block types are left alone.
"""

from tickcore.core import create_context
from tickcore.host import Block, Sfx, StdioHost
from tickcore.logging import setup_default_logging
from tickcore.script import ScriptAPI


def main():
    setup_default_logging()

    print("=" * 60)
    print("  BLOCK BREAK HANDLER")
    print("=" * 60)

    host = StdioHost(blocks={(3, 4, 5): Block.AIR, (0, 1, 0): Block.AIR})
    ctx = create_context(host=host)
    api = ScriptAPI(ctx)

    def on_break(msg):
        if msg["block"] != Block.DIRT:
            return
        pos = msg["pos"]
        api.sfx_play(pos, 1.0, Sfx.BOMB)
        api.set_timeout(lambda: api.set_block(pos, Block.DIRT), 500)

    api.add_msg_handler("BlockBreak", on_break)

    print("\n1. Host reports two broken blocks at t=100")
    ctx.advance(100, [
        {"T": "BlockBreak", "block": int(Block.DIRT), "pos": [3, 4, 5]},
        {"T": "BlockBreak", "block": int(Block.STONE), "pos": [0, 1, 0]},
    ])
    for sound in host.drain_sounds():
        print(f"   sound {sound.sfx.name} at ({sound.x}, {sound.y}, {sound.z})")

    print("\n2. Advancing to t=600")
    ctx.advance(600)
    for pos in [(3, 4, 5), (0, 1, 0)]:
        print(f"   block at {pos}: {Block(host.get_block(*pos)).name}")


if __name__ == "__main__":
    main()
