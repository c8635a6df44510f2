#!/usr/bin/env python3
"""
Demo: Interval timer on a virtual clock

A script registers a 1000 ms interval that announces how many seconds
have elapsed. The host steps the clock at an uneven frame rate; the
interval still fires once per due second, never more than once per step.
"""

import numpy as np

from tickcore.core import create_context
from tickcore.host import StdioHost
from tickcore.logging import setup_default_logging
from tickcore.script import ScriptAPI


def main():
    setup_default_logging()

    print("=" * 60)
    print("  SECONDS ELAPSED")
    print("=" * 60)

    ctx = create_context(host=StdioHost())
    api = ScriptAPI(ctx)

    seconds = 0

    def announce():
        nonlocal seconds
        seconds += 1
        s = "s" if seconds > 1 else ""
        api.log(f"{seconds} second{s} have elapsed.")

    api.set_interval(announce, 1000)

    # Frame times with jitter, ~60 fps for five seconds
    rng = np.random.default_rng(seed=7)
    frame_ms = rng.integers(12, 22, size=300)
    t = 0
    for dt in frame_ms:
        t += int(dt)
        ctx.advance(t)

    print(f"\nStepped {ctx.steps} frames up to t={ctx.now} ms")
    print(f"Game log entries: {len(ctx.host.log)}")


if __name__ == "__main__":
    main()
