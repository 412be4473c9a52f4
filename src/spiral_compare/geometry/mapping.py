"""Math-space <-> drawing-surface coordinate mapping."""

from __future__ import annotations

import numpy as np

from ..models import FitTransform, Point2D


def to_screen(p: Point2D, fit: FitTransform) -> Point2D:
    """Map a math point to the surface. Math +y is up, screen +y is down."""
    return Point2D(
        fit.origin_screen.x + (p.x - fit.origin_math.x) * fit.scale,
        fit.origin_screen.y - (p.y - fit.origin_math.y) * fit.scale,
    )


def to_math(p: Point2D, fit: FitTransform) -> Point2D:
    """Inverse of :func:`to_screen`."""
    return Point2D(
        fit.origin_math.x + (p.x - fit.origin_screen.x) / fit.scale,
        fit.origin_math.y - (p.y - fit.origin_screen.y) / fit.scale,
    )


def map_points(points: np.ndarray, fit: FitTransform) -> np.ndarray:
    """Vectorised :func:`to_screen` over an ``(n, 2)`` array."""
    pts = np.asarray(points, dtype=np.float64)
    out = np.empty_like(pts)
    out[:, 0] = fit.origin_screen.x + (pts[:, 0] - fit.origin_math.x) * fit.scale
    out[:, 1] = fit.origin_screen.y - (pts[:, 1] - fit.origin_math.y) * fit.scale
    return out


__all__ = ["to_screen", "to_math", "map_points"]
