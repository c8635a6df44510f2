"""
Timeline plots of a firing trace.

One row per timer id or message type, one tick mark per callback
invocation, virtual time on the x axis.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from tickcore.analysis.timing import fire_times, lateness

if TYPE_CHECKING:
    from tickcore.core.trace import TraceRecorder

KIND_COLORS = {
    "timer": "#2a6f97",
    "message": "#c8553d",
}


def plot_timeline(
    trace: "TraceRecorder",
    keys: Sequence[str] | None = None,
    labels: dict[str, str] | None = None,
    title: str = "Callback Timeline",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (10, 4),
) -> tuple[Figure, Axes]:
    """
    Event raster of every timer firing and message delivery.

    Args:
        trace: Recorded trace
        keys: Rows to show, top to bottom (all keys in first-seen order if None)
        labels: Optional display names per key (e.g. a timer's purpose)
        title: Plot title
        ax: Existing axes (creates new if None)

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    if keys is None:
        keys = trace.keys()
    labels = labels or {}

    arrays = trace.as_arrays()
    for row, key in enumerate(keys):
        mask = arrays["key"] == key
        if not np.any(mask):
            continue
        kind = arrays["kind"][mask][0]
        ax.eventplot(
            arrays["time"][mask],
            lineoffsets=row,
            linelengths=0.7,
            colors=KIND_COLORS.get(kind, "black"),
        )

    ax.set_yticks(range(len(keys)))
    ax.set_yticklabels([labels.get(k, k) for k in keys])
    ax.set_ylim(-0.7, max(len(keys), 1) - 0.3)
    ax.invert_yaxis()
    ax.set_xlabel("virtual time (ms)")
    ax.set_title(title)

    return fig, ax


def plot_lateness(
    trace: "TraceRecorder",
    key: str,
    title: str | None = None,
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 4),
) -> tuple[Figure, Axes]:
    """Lateness (fire time minus due time) of each firing of one timer."""
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    times = fire_times(trace, key)
    late = lateness(trace, key)
    ax.plot(times, late, marker="o", color=KIND_COLORS["timer"])
    ax.axhline(0, color="gray", linestyle="--", linewidth=1)

    ax.set_xlabel("virtual time (ms)")
    ax.set_ylabel("lateness (ms)")
    ax.set_title(title or f"Timer {key} lateness")

    return fig, ax


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file."""
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
