"""Geometry helpers used throughout the core and the Qt layer."""

import math
from typing import Tuple


def polar_point(
    cx: float, cy: float, radius: float, angle_rad: float
) -> Tuple[float, float]:
    """Point at ``radius`` from ``(cx, cy)`` along ``angle_rad`` in screen space.

    Screen y grows downwards, so positive angles turn counter-clockwise on
    screen.
    """
    return cx + radius * math.cos(angle_rad), cy - radius * math.sin(angle_rad)


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp ``value`` to the inclusive range ``[lo, hi]``."""
    return max(lo, min(hi, value))


def is_finite(*values: float) -> bool:
    """True if every value is a finite float."""
    return all(math.isfinite(v) for v in values)


__all__ = ["polar_point", "clamp", "is_finite"]
