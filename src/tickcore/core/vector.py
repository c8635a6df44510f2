"""
Vec3 helpers for positions handed to the world and audio bindings.

Vectors are plain length-3 numpy arrays. Nothing here keeps state.
"""

from __future__ import annotations
from typing import Sequence, Union

import numpy as np

Vec3 = np.ndarray
VecLike = Union[np.ndarray, Sequence[float]]


def vec_new(x: float, y: float, z: float) -> Vec3:
    """Build a vector from three components."""
    return np.array([x, y, z])


def vec_add(a: VecLike, b: VecLike) -> Vec3:
    """Component-wise sum. Neither input is modified."""
    return np.add(_check(a), _check(b))


def vec_format(pos: VecLike) -> str:
    """Render as "[x, y, z]", integers without a trailing ".0"."""
    return "[" + ", ".join(_fmt(c) for c in _check(pos)) + "]"


def as_block_coords(pos: VecLike) -> tuple[int, int, int]:
    """
    Integer block coordinates for a position.

    Components are truncated toward zero, matching the host's int32
    conversion of script numbers.
    """
    x, y, z = np.trunc(_check(pos)).astype(np.int64)
    return int(x), int(y), int(z)


def as_position(pos: VecLike) -> tuple[float, float, float]:
    """Float coordinates for a position (sound emitters)."""
    x, y, z = _check(pos).astype(np.float64)
    return float(x), float(y), float(z)


def _check(v: VecLike) -> np.ndarray:
    arr = np.asarray(v)
    if arr.shape != (3,):
        raise ValueError(f"Expected a 3-component vector, got shape {arr.shape}")
    return arr


def _fmt(c) -> str:
    c = c.item() if isinstance(c, np.generic) else c
    if isinstance(c, float) and c.is_integer():
        return str(int(c))
    return str(c)
