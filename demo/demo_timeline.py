#!/usr/bin/env python3
"""
Demo: Callback timeline under coarse host steps

Two repeating timers (fixed-rate and fixed-delay) run side by side while
the host steps every 150 ms, slower than the 100 ms interval. The plot
shows when each timer actually fired and how late it was.

Output: output/demo_timeline/timeline.png, output/demo_timeline/lateness.png
"""

from pathlib import Path

from tickcore.analysis import summarize_timer
from tickcore.core import create_context
from tickcore.logging import setup_default_logging
from tickcore.viz import plot_lateness, plot_timeline, save_figure


def main():
    setup_default_logging()
    out_dir = Path("output/demo_timeline")
    out_dir.mkdir(parents=True, exist_ok=True)

    print("=" * 60)
    print("  CALLBACK TIMELINE")
    print("=" * 60)

    rate = create_context(record_trace=True, drift_policy="fixed_rate")
    delay = create_context(record_trace=True, drift_policy="fixed_delay")
    rate_id = rate.schedule_repeating(lambda: None, 100)
    delay_id = delay.schedule_repeating(lambda: None, 100)

    for t in range(0, 3001, 150):
        rate.advance(t)
        delay.advance(t)

    for name, ctx, tid in [("fixed_rate", rate, rate_id), ("fixed_delay", delay, delay_id)]:
        stats = summarize_timer(ctx.trace, tid)
        print(f"\n{name}:")
        print(f"   firings: {stats.count}")
        print(f"   mean interval: {stats.mean_interval:.1f} ms")
        print(f"   max lateness: {stats.max_lateness} ms")

    fig, _ = plot_timeline(rate.trace, labels={rate_id: "fixed_rate 100ms"})
    save_figure(fig, out_dir / "timeline.png")

    fig, _ = plot_lateness(rate.trace, rate_id, title="fixed_rate lateness")
    save_figure(fig, out_dir / "lateness.png")

    print(f"\nSaved plots to {out_dir}/")


if __name__ == "__main__":
    main()
