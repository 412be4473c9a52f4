"""Static scene pipeline: sample -> fit -> map, recomputed on input change."""

from __future__ import annotations

from dataclasses import dataclass
import logging
from typing import Optional

import numpy as np

from ..models import (
    BoundingBox,
    FitTransform,
    Point2D,
    SpiralParameters,
    SpiralSeries,
    SurfaceSize,
)
from .bounds import (
    DEFAULT_FILL_FRACTION,
    DEFAULT_MARGIN_FRACTION,
    DEFAULT_MARGIN_MAX_PX,
    bounding_box,
    default_margin,
    fit_box,
)
from .mapping import map_points, to_screen
from .overlays import (
    AxisLines,
    DegreeWheel,
    GridLines,
    axis_lines,
    degree_wheel,
    grid_lines,
)
from .sampler import sample_spirals

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class SceneGeometry:
    """Everything the surface paints before applying the visible rectangle."""

    params: SpiralParameters
    surface: SurfaceSize
    large: bool
    margin: float
    series: SpiralSeries
    bounds: BoundingBox
    fit: FitTransform
    archimedean_path: np.ndarray
    golden_path: np.ndarray
    start_marker: Point2D
    archimedean_end: Point2D
    golden_end: Point2D
    grid: GridLines
    axes: AxisLines
    wheel: DegreeWheel


def build_scene(
    params: SpiralParameters,
    surface: SurfaceSize,
    *,
    large: bool = False,
    fill_fraction: float = DEFAULT_FILL_FRACTION,
    margin: Optional[float] = None,
    margin_max_px: float = DEFAULT_MARGIN_MAX_PX,
    margin_fraction: float = DEFAULT_MARGIN_FRACTION,
) -> SceneGeometry:
    """Run the whole static pipeline, in order, for one parameter set and size.

    Raises :class:`~spiral_compare.errors.DegenerateGeometryError` before
    anything is mapped when the curves have no extent.
    """
    if margin is None:
        margin = default_margin(surface.width, margin_max_px, margin_fraction)

    series = sample_spirals(params)
    bounds = bounding_box(series)
    fit = fit_box(bounds, surface, margin, fill_fraction)

    start = to_screen(params.start_point, fit)
    return SceneGeometry(
        params=params,
        surface=surface,
        large=large,
        margin=margin,
        series=series,
        bounds=bounds,
        fit=fit,
        archimedean_path=map_points(series.archimedean.points, fit),
        golden_path=map_points(series.golden.points, fit),
        start_marker=start,
        archimedean_end=to_screen(series.archimedean.last, fit),
        golden_end=to_screen(series.golden.last, fit),
        grid=grid_lines(surface, margin, large),
        axes=axis_lines(surface, margin),
        wheel=degree_wheel(surface, start, params.max_angle_degrees),
    )


class SpiralScene:
    """Caches the last :class:`SceneGeometry` and rebuilds it only when dirty.

    Inputs are the spiral parameters, the surface size and the large-display
    flag; pan and zoom never invalidate the scene.
    """

    def __init__(
        self,
        params: SpiralParameters,
        surface: SurfaceSize,
        *,
        fill_fraction: float = DEFAULT_FILL_FRACTION,
        margin_max_px: float = DEFAULT_MARGIN_MAX_PX,
        margin_fraction: float = DEFAULT_MARGIN_FRACTION,
    ) -> None:
        self._params = params
        self._surface = surface
        self._large = False
        self._fill_fraction = float(fill_fraction)
        self._margin_max_px = float(margin_max_px)
        self._margin_fraction = float(margin_fraction)
        self._geometry: Optional[SceneGeometry] = None
        self.rebuild_count = 0

    @property
    def params(self) -> SpiralParameters:
        return self._params

    @property
    def surface(self) -> SurfaceSize:
        return self._surface

    @property
    def large(self) -> bool:
        return self._large

    @property
    def dirty(self) -> bool:
        return self._geometry is None

    def set_parameters(self, params: SpiralParameters) -> None:
        if params != self._params:
            self._params = params
            self._geometry = None

    def set_surface_size(self, surface: SurfaceSize) -> bool:
        """Store a new size; returns True if it differs from the current one."""
        if surface == self._surface:
            return False
        self._surface = surface
        self._geometry = None
        return True

    def set_large(self, large: bool) -> None:
        if bool(large) != self._large:
            self._large = bool(large)
            self._geometry = None

    @property
    def geometry(self) -> SceneGeometry:
        if self._geometry is None:
            logger.debug(
                "rebuilding scene: %d samples on %sx%s (large=%s)",
                self._params.sample_count,
                self._surface.width,
                self._surface.height,
                self._large,
            )
            self._geometry = build_scene(
                self._params,
                self._surface,
                large=self._large,
                fill_fraction=self._fill_fraction,
                margin_max_px=self._margin_max_px,
                margin_fraction=self._margin_fraction,
            )
            self.rebuild_count += 1
        return self._geometry


__all__ = ["SceneGeometry", "build_scene", "SpiralScene"]
