"""Dataclasses describing spiral parameters, sampled geometry and configuration."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
import json
import math
from typing import Any, Dict, Iterator, NamedTuple, Tuple

import numpy as np

from .errors import InvalidParameterError

GOLDEN_RATIO = (1.0 + math.sqrt(5.0)) / 2.0

ZOOM_MIN = 0.5
ZOOM_MAX = 10.0


# ------------------------------ Plain values ----------------------------------


@dataclass(frozen=True)
class Point2D:
    """A point (or offset) on the plane. Pure value, no identity."""

    x: float
    y: float

    def __add__(self, other: "Point2D") -> "Point2D":
        return Point2D(self.x + other.x, self.y + other.y)

    def __sub__(self, other: "Point2D") -> "Point2D":
        return Point2D(self.x - other.x, self.y - other.y)

    def scaled(self, k: float) -> "Point2D":
        return Point2D(self.x * k, self.y * k)

    def as_tuple(self) -> Tuple[float, float]:
        return (self.x, self.y)


ORIGIN = Point2D(0.0, 0.0)


@dataclass(frozen=True)
class SurfaceSize:
    """Size of the drawing surface in screen pixels."""

    width: float
    height: float

    @property
    def center(self) -> Point2D:
        return Point2D(self.width / 2.0, self.height / 2.0)


@dataclass(frozen=True)
class ViewRect:
    """Visible sub-rectangle of the drawing surface (the painter's window)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def bottom(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Point2D:
        return Point2D(self.x + self.width / 2.0, self.y + self.height / 2.0)


# ----------------------------- Spiral parameters ------------------------------


def _require_finite(name: str, value: float) -> float:
    try:
        v = float(value)
    except (TypeError, ValueError) as exc:
        raise InvalidParameterError(f"{name} must be a number, got {value!r}") from exc
    if not math.isfinite(v):
        raise InvalidParameterError(f"{name} must be finite, got {value!r}")
    return v


@dataclass(frozen=True)
class SpiralParameters:
    """Immutable inputs of the curve sampler.

    Defaults reproduce the reference scene: both spirals start at (-40, 0),
    600 samples over 200 degrees, scale 2.5 and a golden growth ratio.
    Changing any field means building a new instance and resampling.
    """

    start_point: Point2D = Point2D(-40.0, 0.0)
    sample_count: int = 600
    max_angle_radians: float = math.radians(200.0)
    scale_archimedean: float = 2.5
    scale_golden: float = 2.5
    growth_ratio: float = GOLDEN_RATIO

    def __post_init__(self) -> None:
        count = self.sample_count
        if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
            raise InvalidParameterError(
                f"sample_count must be an integer, got {count!r}"
            )
        if count < 0:
            raise InvalidParameterError(f"sample_count must be >= 0, got {count}")
        object.__setattr__(self, "sample_count", int(count))

        max_angle = _require_finite("max_angle_radians", self.max_angle_radians)
        if max_angle <= 0.0:
            raise InvalidParameterError(
                f"max_angle_radians must be > 0, got {max_angle}"
            )
        ratio = _require_finite("growth_ratio", self.growth_ratio)
        if ratio <= 1.0:
            raise InvalidParameterError(f"growth_ratio must be > 1, got {ratio}")

        object.__setattr__(self, "max_angle_radians", max_angle)
        object.__setattr__(self, "growth_ratio", ratio)
        object.__setattr__(
            self,
            "scale_archimedean",
            _require_finite("scale_archimedean", self.scale_archimedean),
        )
        object.__setattr__(
            self, "scale_golden", _require_finite("scale_golden", self.scale_golden)
        )
        start = self.start_point
        if not isinstance(start, Point2D):
            raise InvalidParameterError(
                f"start_point must be a Point2D, got {start!r}"
            )
        object.__setattr__(
            self,
            "start_point",
            Point2D(
                _require_finite("start_point.x", start.x),
                _require_finite("start_point.y", start.y),
            ),
        )
        self._check_sampling()

    def _check_sampling(self) -> None:
        n = self.sample_count
        max_angle = self.max_angle_radians
        if n > 0:
            angles = (np.arange(n + 1, dtype=np.float64) / float(n)) * max_angle
            if not np.all(np.diff(angles) > 0.0):
                raise InvalidParameterError(
                    f"max_angle_radians={max_angle!r} is too small to give "
                    f"{n} distinct sample angles"
                )
        # Both radii grow with the angle, so checking the last one is enough.
        b = math.log(self.growth_ratio) / (2.0 * math.pi)
        with np.errstate(over="ignore", invalid="ignore"):
            r_a = np.float64(self.scale_archimedean) * max_angle
            r_g = np.float64(self.scale_golden) * np.expm1(np.float64(b * max_angle))
        if not (np.isfinite(r_a) and np.isfinite(r_g)):
            raise InvalidParameterError(
                f"spiral radius overflows at max_angle_radians={max_angle!r}"
            )

    @classmethod
    def from_degrees(
        cls,
        max_angle_degrees: float,
        *,
        start_point: Point2D = Point2D(-40.0, 0.0),
        sample_count: int = 600,
        scale_archimedean: float = 2.5,
        scale_golden: float = 2.5,
        growth_ratio: float = GOLDEN_RATIO,
    ) -> "SpiralParameters":
        degrees = _require_finite("max_angle_degrees", max_angle_degrees)
        return cls(
            start_point=start_point,
            sample_count=sample_count,
            max_angle_radians=math.radians(degrees),
            scale_archimedean=scale_archimedean,
            scale_golden=scale_golden,
            growth_ratio=growth_ratio,
        )

    @property
    def max_angle_degrees(self) -> float:
        return math.degrees(self.max_angle_radians)

    def with_changes(self, **changes: Any) -> "SpiralParameters":
        """Return a validated copy with ``changes`` applied."""
        return replace(self, **changes)


# ------------------------------ Sampled curves --------------------------------


class CurvePointSeries:
    """Ordered, read-only sequence of sampled curve points.

    Backed by an ``(n, 2)`` float64 array of ``(x, y)`` rows and the polar
    angle each row was sampled at. Angles strictly increase with the index.
    """

    __slots__ = ("_points", "_angles")

    def __init__(self, points: np.ndarray, angles: np.ndarray) -> None:
        pts = np.array(points, dtype=np.float64)
        ang = np.array(angles, dtype=np.float64)
        if pts.ndim != 2 or pts.shape[1] != 2:
            raise ValueError(f"points must have shape (n, 2), got {pts.shape}")
        if pts.shape[0] == 0:
            raise ValueError("a curve series needs at least one point")
        if ang.shape != (pts.shape[0],):
            raise ValueError(
                f"angles must have shape ({pts.shape[0]},), got {ang.shape}"
            )
        if ang.size > 1 and not bool(np.all(np.diff(ang) > 0.0)):
            raise ValueError("angles must be strictly increasing")
        pts.setflags(write=False)
        ang.setflags(write=False)
        self._points = pts
        self._angles = ang

    def __len__(self) -> int:
        return int(self._points.shape[0])

    def __getitem__(self, index: int) -> Point2D:
        row = self._points[index]
        return Point2D(float(row[0]), float(row[1]))

    def __iter__(self) -> Iterator[Point2D]:
        for x, y in self._points:
            yield Point2D(float(x), float(y))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CurvePointSeries):
            return NotImplemented
        return bool(
            np.array_equal(self._points, other._points)
            and np.array_equal(self._angles, other._angles)
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"CurvePointSeries(n={len(self)}, first={self.first}, last={self.last})"

    @property
    def points(self) -> np.ndarray:
        return self._points

    @property
    def angles(self) -> np.ndarray:
        return self._angles

    @property
    def xs(self) -> np.ndarray:
        return self._points[:, 0]

    @property
    def ys(self) -> np.ndarray:
        return self._points[:, 1]

    @property
    def first(self) -> Point2D:
        return self[0]

    @property
    def last(self) -> Point2D:
        return self[-1]

    def radii(self, origin: Point2D) -> np.ndarray:
        """Distance of every point from ``origin``."""
        return np.hypot(self.xs - origin.x, self.ys - origin.y)


class SpiralSeries(NamedTuple):
    """The two sampled spiral families."""

    archimedean: CurvePointSeries
    golden: CurvePointSeries


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounds over every sampled point."""

    min_x: float
    max_x: float
    min_y: float
    max_y: float

    def __post_init__(self) -> None:
        if self.min_x > self.max_x or self.min_y > self.max_y:
            raise ValueError(f"inverted bounding box: {self}")

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @property
    def center(self) -> Point2D:
        return Point2D((self.min_x + self.max_x) / 2.0, (self.min_y + self.max_y) / 2.0)

    @property
    def is_degenerate(self) -> bool:
        return self.width == 0.0 or self.height == 0.0


@dataclass(frozen=True)
class FitTransform:
    """Uniform scale plus the math/screen origins it maps between."""

    scale: float
    origin_math: Point2D
    origin_screen: Point2D

    def __post_init__(self) -> None:
        if not (math.isfinite(self.scale) and self.scale > 0.0):
            raise InvalidParameterError(
                f"fit scale must be finite and > 0, got {self.scale}"
            )


# ------------------------------ Interactive state -----------------------------


@dataclass(frozen=True)
class ViewportState:
    """Snapshot of the viewport: zoom level and pan offset (viewport space)."""

    zoom: float = 1.0
    pan_offset: Point2D = ORIGIN


@dataclass(frozen=True)
class DragState:
    """Transient drag tracking owned by the interaction controller."""

    active: bool = False
    anchor: Point2D = ORIGIN


# ------------------------------- Configuration --------------------------------


@dataclass
class SpiralSettings:
    """User-editable spiral configuration (angle stored in degrees)."""

    start_x: float = -40.0
    start_y: float = 0.0
    sample_count: int = 600
    max_angle_degrees: float = 200.0
    scale_archimedean: float = 2.5
    scale_golden: float = 2.5
    growth_ratio: float = GOLDEN_RATIO

    def to_parameters(self) -> SpiralParameters:
        return SpiralParameters.from_degrees(
            self.max_angle_degrees,
            start_point=Point2D(self.start_x, self.start_y),
            sample_count=self.sample_count,
            scale_archimedean=self.scale_archimedean,
            scale_golden=self.scale_golden,
            growth_ratio=self.growth_ratio,
        )


@dataclass
class UIState:
    """User-interface level preferences for the viewer."""

    surface_width: int = 600
    surface_height: int = 600
    fill_fraction: float = 0.75
    margin_max_px: float = 50.0
    margin_fraction: float = 0.08
    wheel_zoom_in: float = 1.1
    wheel_zoom_out: float = 0.9
    button_zoom_in: float = 1.2
    button_zoom_out: float = 0.8
    archimedean_color: str = "#FF5733"
    golden_color: str = "#0066FF"
    axis_color: str = "#333333"
    grid_color: str = "#E0E0E0"


@dataclass
class AppConfig:
    """Persisted configuration for the application. Never holds zoom or pan."""

    spiral: SpiralSettings = field(default_factory=SpiralSettings)
    ui: UIState = field(default_factory=UIState)

    def to_json(self) -> str:
        return json.dumps(asdict(self), indent=2)

    @staticmethod
    def from_json(text: str) -> "AppConfig":
        data: Dict = json.loads(text)
        s = data.get("spiral", {})
        u = data.get("ui", {})
        defaults = UIState()
        cfg = AppConfig(
            spiral=SpiralSettings(
                start_x=float(s.get("start_x", -40.0)),
                start_y=float(s.get("start_y", 0.0)),
                sample_count=int(s.get("sample_count", 600)),
                max_angle_degrees=float(s.get("max_angle_degrees", 200.0)),
                scale_archimedean=float(s.get("scale_archimedean", 2.5)),
                scale_golden=float(s.get("scale_golden", 2.5)),
                growth_ratio=float(s.get("growth_ratio", GOLDEN_RATIO)),
            ),
            ui=UIState(
                surface_width=int(u.get("surface_width", defaults.surface_width)),
                surface_height=int(u.get("surface_height", defaults.surface_height)),
                fill_fraction=float(u.get("fill_fraction", defaults.fill_fraction)),
                margin_max_px=float(u.get("margin_max_px", defaults.margin_max_px)),
                margin_fraction=float(
                    u.get("margin_fraction", defaults.margin_fraction)
                ),
                wheel_zoom_in=float(u.get("wheel_zoom_in", defaults.wheel_zoom_in)),
                wheel_zoom_out=float(u.get("wheel_zoom_out", defaults.wheel_zoom_out)),
                button_zoom_in=float(
                    u.get("button_zoom_in", defaults.button_zoom_in)
                ),
                button_zoom_out=float(
                    u.get("button_zoom_out", defaults.button_zoom_out)
                ),
                archimedean_color=str(
                    u.get("archimedean_color", defaults.archimedean_color)
                ),
                golden_color=str(u.get("golden_color", defaults.golden_color)),
                axis_color=str(u.get("axis_color", defaults.axis_color)),
                grid_color=str(u.get("grid_color", defaults.grid_color)),
            ),
        )
        cfg.spiral.to_parameters()  # reject invalid spiral values early
        return cfg


__all__ = [
    "GOLDEN_RATIO",
    "ZOOM_MIN",
    "ZOOM_MAX",
    "ORIGIN",
    "Point2D",
    "SurfaceSize",
    "ViewRect",
    "SpiralParameters",
    "CurvePointSeries",
    "SpiralSeries",
    "BoundingBox",
    "FitTransform",
    "ViewportState",
    "DragState",
    "SpiralSettings",
    "UIState",
    "AppConfig",
]
