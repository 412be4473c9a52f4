"""Static decorations drawn under the curves: grid, axes and the degree wheel.

Everything here is a pure function of the surface size (plus the fitted
start point for the wheel) and is recomputed only when those change.
"""

from __future__ import annotations

import math
from typing import List, NamedTuple, Tuple

from ..models import Point2D, SurfaceSize
from ..utils import polar_point

GRID_STEP_PX = 20
LARGE_GRID_DIVISOR = 40

WHEEL_RADIUS_FRACTION = 0.45
WHEEL_MINOR_STEP_DEG = 10
WHEEL_MAJOR_STEP_DEG = 30
WHEEL_MAJOR_TICK_PX = 15.0
WHEEL_MINOR_TICK_PX = 8.0
WHEEL_LABEL_OFFSET_PX = 15.0
WHEEL_SECTOR_INSET_PX = 25.0
WHEEL_SECTORS_DEG: Tuple[int, ...] = (60, 120, 180)


class Segment(NamedTuple):
    x1: float
    y1: float
    x2: float
    y2: float


class Label(NamedTuple):
    x: float
    y: float
    text: str


class WheelTick(NamedTuple):
    degrees: int
    segment: Segment
    major: bool


class Sector(NamedTuple):
    """Pie slice anchored at ``center``; Qt angle convention (degrees, CCW)."""

    center: Point2D
    radius: float
    start_deg: float
    sweep_deg: float


class AxisLines(NamedTuple):
    x_axis: Segment
    y_axis: Segment
    x_label: Label
    y_label: Label


class DegreeWheel(NamedTuple):
    radius: float
    ticks: Tuple[WheelTick, ...]
    labels: Tuple[Label, ...]
    sectors: Tuple[Sector, ...]


class GridLines(NamedTuple):
    step: float
    horizontal: Tuple[Segment, ...]
    vertical: Tuple[Segment, ...]


def grid_step(surface: SurfaceSize, large: bool = False) -> float:
    if large:
        return float(max(GRID_STEP_PX, math.floor(surface.width / LARGE_GRID_DIVISOR)))
    return float(GRID_STEP_PX)


def grid_lines(surface: SurfaceSize, margin: float, large: bool = False) -> GridLines:
    """Lines every ``step`` px either side of the surface center."""
    step = grid_step(surface, large)
    count = int(math.floor((surface.width / 2.0) / step))
    c = surface.center
    horizontal = tuple(
        Segment(margin, c.y + i * step, surface.width - margin, c.y + i * step)
        for i in range(-count, count + 1)
    )
    vertical = tuple(
        Segment(c.x + i * step, margin, c.x + i * step, surface.height - margin)
        for i in range(-count, count + 1)
    )
    return GridLines(step=step, horizontal=horizontal, vertical=vertical)


def axis_lines(surface: SurfaceSize, margin: float) -> AxisLines:
    c = surface.center
    return AxisLines(
        x_axis=Segment(margin, c.y, surface.width - margin, c.y),
        y_axis=Segment(c.x, surface.height - margin, c.x, margin),
        x_label=Label(surface.width - margin + 5.0, c.y - 10.0, "X"),
        y_label=Label(c.x + 10.0, margin - 5.0, "Y"),
    )


def degree_wheel(
    surface: SurfaceSize, start_screen: Point2D, max_angle_degrees: float
) -> DegreeWheel:
    """Protractor centred on the spiral start point.

    0 degrees points straight up; ticks every 10 degrees, longer and
    labelled every 30, up to ``max_angle_degrees``.
    """
    radius = min(surface.width, surface.height) * WHEEL_RADIUS_FRACTION
    sx, sy = start_screen.x, start_screen.y

    ticks: List[WheelTick] = []
    labels: List[Label] = []
    last = int(math.floor(max_angle_degrees + 1e-9))
    for deg in range(0, last + 1, WHEEL_MINOR_STEP_DEG):
        direction = math.pi / 2.0 - math.radians(deg)
        major = deg % WHEEL_MAJOR_STEP_DEG == 0
        inner = radius - (WHEEL_MAJOR_TICK_PX if major else WHEEL_MINOR_TICK_PX)
        x1, y1 = polar_point(sx, sy, inner, direction)
        x2, y2 = polar_point(sx, sy, radius, direction)
        ticks.append(WheelTick(deg, Segment(x1, y1, x2, y2), major))
        if major:
            lx, ly = polar_point(sx, sy, radius + WHEEL_LABEL_OFFSET_PX, direction)
            labels.append(Label(lx, ly, f"{deg}°"))

    sectors = tuple(
        Sector(
            center=start_screen,
            radius=radius - WHEEL_SECTOR_INSET_PX,
            start_deg=90.0,
            sweep_deg=-float(seg),
        )
        for seg in WHEEL_SECTORS_DEG
    )
    return DegreeWheel(
        radius=radius, ticks=tuple(ticks), labels=tuple(labels), sectors=sectors
    )


__all__ = [
    "Segment",
    "Label",
    "WheelTick",
    "Sector",
    "AxisLines",
    "DegreeWheel",
    "GridLines",
    "grid_step",
    "grid_lines",
    "axis_lines",
    "degree_wheel",
]
