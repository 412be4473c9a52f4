"""Spiral geometry: sampling, fitting, mapping and static overlays."""

from .bounds import (
    DEFAULT_FILL_FRACTION,
    bounding_box,
    default_margin,
    fit_box,
    fit_to_surface,
)
from .mapping import map_points, to_math, to_screen
from .overlays import axis_lines, degree_wheel, grid_lines, grid_step
from .sampler import (
    archimedean_radius,
    golden_growth_rate,
    golden_radius,
    sample_spirals,
)
from .scene import SceneGeometry, SpiralScene, build_scene

__all__ = [
    "DEFAULT_FILL_FRACTION",
    "archimedean_radius",
    "golden_growth_rate",
    "golden_radius",
    "sample_spirals",
    "bounding_box",
    "default_margin",
    "fit_box",
    "fit_to_surface",
    "to_screen",
    "to_math",
    "map_points",
    "grid_step",
    "grid_lines",
    "axis_lines",
    "degree_wheel",
    "SceneGeometry",
    "SpiralScene",
    "build_scene",
]
