"""
Visualization utilities.

- Callback timelines (timer firings, message deliveries)
- Timer lateness plots
"""

from tickcore.viz.timeline import plot_timeline, plot_lateness, save_figure

__all__ = [
    "plot_timeline",
    "plot_lateness",
    "save_figure",
]
