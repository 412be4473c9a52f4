"""Bounding box and uniform fit-to-surface scale for sampled curves."""

from __future__ import annotations

import logging
import math
from typing import Iterable

import numpy as np

from ..errors import DegenerateGeometryError, InvalidParameterError
from ..models import BoundingBox, CurvePointSeries, FitTransform, SurfaceSize

logger = logging.getLogger(__name__)

DEFAULT_FILL_FRACTION = 0.75
DEFAULT_MARGIN_MAX_PX = 50.0
DEFAULT_MARGIN_FRACTION = 0.08


def default_margin(
    width: float,
    max_px: float = DEFAULT_MARGIN_MAX_PX,
    fraction: float = DEFAULT_MARGIN_FRACTION,
) -> float:
    """Margin used by the viewer: ``min(max_px, fraction * width)``."""
    return min(float(max_px), float(width) * float(fraction))


def bounding_box(series: Iterable[CurvePointSeries]) -> BoundingBox:
    """Axis-aligned bounds over the union of all series points."""
    arrays = [s.points for s in series]
    if not arrays:
        raise InvalidParameterError("bounding_box needs at least one series")
    pts = np.concatenate(arrays, axis=0)
    mins = pts.min(axis=0)
    maxs = pts.max(axis=0)
    return BoundingBox(
        min_x=float(mins[0]),
        max_x=float(maxs[0]),
        min_y=float(mins[1]),
        max_y=float(maxs[1]),
    )


def fit_box(
    box: BoundingBox,
    target: SurfaceSize,
    margin: float,
    fill_fraction: float = DEFAULT_FILL_FRACTION,
) -> FitTransform:
    """Uniform scale mapping ``box`` into ``target`` minus ``margin`` on each side.

    The smaller of the two axis scales is used so the geometry is never
    distorted. Raises :class:`DegenerateGeometryError` for a zero-width,
    zero-height or overflowing box.
    """
    if not (0.0 < fill_fraction <= 1.0):
        raise InvalidParameterError(
            f"fill_fraction must be in (0, 1], got {fill_fraction}"
        )
    if not math.isfinite(margin) or margin < 0.0:
        raise InvalidParameterError(f"margin must be >= 0, got {margin}")
    avail_w = target.width - 2.0 * margin
    avail_h = target.height - 2.0 * margin
    if avail_w <= 0.0 or avail_h <= 0.0:
        raise InvalidParameterError(
            f"target {target.width}x{target.height} leaves no room inside "
            f"a {margin} px margin"
        )
    if not (math.isfinite(box.width) and math.isfinite(box.height)):
        raise DegenerateGeometryError(
            f"geometry extent overflows ({box.width} x {box.height})"
        )
    if box.is_degenerate:
        raise DegenerateGeometryError(
            f"geometry has zero extent ({box.width} x {box.height}); "
            "supply parameters that spread the curves out"
        )

    scale_x = avail_w * fill_fraction / box.width
    scale_y = avail_h * fill_fraction / box.height
    scale = min(scale_x, scale_y)
    logger.debug(
        "fit %.3fx%.3f box into %sx%s: scale_x=%.4f scale_y=%.4f",
        box.width,
        box.height,
        target.width,
        target.height,
        scale_x,
        scale_y,
    )
    return FitTransform(
        scale=scale, origin_math=box.center, origin_screen=target.center
    )


def fit_to_surface(
    series: Iterable[CurvePointSeries],
    target: SurfaceSize,
    margin: float,
    fill_fraction: float = DEFAULT_FILL_FRACTION,
) -> FitTransform:
    """Bounding box over ``series`` followed by :func:`fit_box`."""
    return fit_box(bounding_box(series), target, margin, fill_fraction)


__all__ = [
    "DEFAULT_FILL_FRACTION",
    "DEFAULT_MARGIN_MAX_PX",
    "DEFAULT_MARGIN_FRACTION",
    "default_margin",
    "bounding_box",
    "fit_box",
    "fit_to_surface",
]
