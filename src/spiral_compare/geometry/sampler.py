"""Closed-form sampling of the Archimedean and golden spirals."""

from __future__ import annotations

import math
from typing import Union

import numpy as np

from ..models import CurvePointSeries, Point2D, SpiralParameters, SpiralSeries

ArrayLike = Union[float, np.ndarray]


def golden_growth_rate(growth_ratio: float) -> float:
    """Exponent ``b`` such that the radius multiplies by ``growth_ratio`` per turn."""
    return math.log(growth_ratio) / (2.0 * math.pi)


def archimedean_radius(angle: ArrayLike, scale: float) -> ArrayLike:
    """``r = a * theta``."""
    return scale * angle


def golden_radius(angle: ArrayLike, scale: float, growth_ratio: float) -> ArrayLike:
    """``r = a * (e^(b * theta) - 1)``.

    The ``- 1`` pins the curve to radius 0 at ``theta = 0`` so it leaves the
    same start point as the Archimedean spiral.
    """
    b = golden_growth_rate(growth_ratio)
    return scale * (np.exp(b * np.asarray(angle, dtype=np.float64)) - 1.0)


def sample_angles(sample_count: int, max_angle_radians: float) -> np.ndarray:
    """Angles ``(i / n) * max_angle`` for ``i = 0..n``; a lone 0 when ``n == 0``."""
    if sample_count == 0:
        return np.zeros(1, dtype=np.float64)
    i = np.arange(sample_count + 1, dtype=np.float64)
    return (i / float(sample_count)) * max_angle_radians


def polar_offsets(start: Point2D, radii: np.ndarray, angles: np.ndarray) -> np.ndarray:
    """Rows ``(start_x - r*sin(t), start_y + r*cos(t))``.

    At ``t = 0`` the curve leaves the start point heading in +y.
    """
    xs = start.x - radii * np.sin(angles)
    ys = start.y + radii * np.cos(angles)
    return np.column_stack((xs, ys))


def _series(start: Point2D, radii: np.ndarray, angles: np.ndarray) -> CurvePointSeries:
    points = polar_offsets(start, radii, angles)
    # Index 0 is the shared start point, exactly.
    points[0, 0] = start.x
    points[0, 1] = start.y
    return CurvePointSeries(points, angles)


def sample_spirals(params: SpiralParameters) -> SpiralSeries:
    """Sample both spiral families for ``params``.

    Pure and deterministic: identical parameters give bit-identical series,
    each of length ``sample_count + 1``.
    """
    angles = sample_angles(params.sample_count, params.max_angle_radians)
    r_a = np.asarray(
        archimedean_radius(angles, params.scale_archimedean), dtype=np.float64
    )
    r_g = np.asarray(
        golden_radius(angles, params.scale_golden, params.growth_ratio),
        dtype=np.float64,
    )
    return SpiralSeries(
        archimedean=_series(params.start_point, r_a, angles),
        golden=_series(params.start_point, r_g, angles),
    )


__all__ = [
    "golden_growth_rate",
    "archimedean_radius",
    "golden_radius",
    "sample_angles",
    "polar_offsets",
    "sample_spirals",
]
