"""Bounding box, uniform fit and coordinate mapping."""

from __future__ import annotations

from hypothesis import given, settings
from hypothesis import strategies as st
import numpy as np
from numpy.testing import assert_allclose
import pytest

from spiral_compare.errors import DegenerateGeometryError, InvalidParameterError
from spiral_compare.geometry import (
    bounding_box,
    default_margin,
    fit_box,
    fit_to_surface,
    map_points,
    sample_spirals,
    to_math,
    to_screen,
)
from spiral_compare.models import (
    BoundingBox,
    CurvePointSeries,
    FitTransform,
    Point2D,
    SpiralParameters,
    SurfaceSize,
)


def _series(*xy: tuple[float, float]) -> CurvePointSeries:
    return CurvePointSeries(np.array(xy, dtype=float), np.arange(len(xy), dtype=float))


def test_bounding_box_covers_union_of_series() -> None:
    a = _series((0.0, 0.0), (4.0, -1.0))
    b = _series((-2.0, 3.0), (1.0, 1.0))

    box = bounding_box([a, b])

    assert box == BoundingBox(min_x=-2.0, max_x=4.0, min_y=-1.0, max_y=3.0)
    assert box.center == Point2D(1.0, 1.0)


def test_fit_uses_smaller_axis_scale() -> None:
    box = BoundingBox(0.0, 100.0, 0.0, 50.0)
    fit = fit_box(box, SurfaceSize(600, 600), margin=50.0, fill_fraction=0.75)

    # (600 - 100) * 0.75 = 375 -> x: 3.75, y: 7.5
    assert fit.scale == pytest.approx(3.75)
    assert fit.origin_math == Point2D(50.0, 25.0)
    assert fit.origin_screen == Point2D(300.0, 300.0)


def test_fitted_reference_scene_stays_inside_margins() -> None:
    series = sample_spirals(SpiralParameters())
    size = SurfaceSize(600, 600)
    margin = default_margin(size.width)
    fit = fit_to_surface(series, size, margin, 0.75)

    for s in series:
        mapped = map_points(s.points, fit)
        assert mapped[:, 0].min() >= margin
        assert mapped[:, 0].max() <= size.width - margin
        assert mapped[:, 1].min() >= margin
        assert mapped[:, 1].max() <= size.height - margin


def test_default_margin() -> None:
    assert default_margin(600) == 48.0
    assert default_margin(2000) == 50.0


def test_degenerate_geometry_is_an_error() -> None:
    series = sample_spirals(SpiralParameters(sample_count=0))
    with pytest.raises(DegenerateGeometryError):
        fit_to_surface(series, SurfaceSize(600, 600), 48.0)


def test_flat_geometry_is_an_error() -> None:
    flat = _series((0.0, 1.0), (5.0, 1.0))
    with pytest.raises(DegenerateGeometryError):
        fit_to_surface([flat], SurfaceSize(600, 600), 10.0)


def test_overflowing_geometry_is_an_error() -> None:
    box = BoundingBox(-1e308, 1e308, 0.0, 1.0)
    with pytest.raises(DegenerateGeometryError, match="overflows"):
        fit_box(box, SurfaceSize(600, 600), 10.0)


@pytest.mark.parametrize(
    ("size", "margin", "fill"),
    [
        (SurfaceSize(600, 600), 10.0, 0.0),
        (SurfaceSize(600, 600), 10.0, 1.5),
        (SurfaceSize(600, 600), -1.0, 0.5),
        (SurfaceSize(80, 600), 40.0, 0.5),
    ],
)
def test_invalid_fit_arguments(size: SurfaceSize, margin: float, fill: float) -> None:
    box = BoundingBox(0.0, 1.0, 0.0, 1.0)
    with pytest.raises(InvalidParameterError):
        fit_box(box, size, margin, fill)


def test_to_screen_inverts_y() -> None:
    fit = FitTransform(2.0, Point2D(0.0, 0.0), Point2D(300.0, 300.0))

    assert to_screen(Point2D(10.0, 10.0), fit) == Point2D(320.0, 280.0)
    assert to_screen(Point2D(0.0, 0.0), fit) == Point2D(300.0, 300.0)


coords = st.floats(min_value=-1e4, max_value=1e4, allow_nan=False)
scales = st.floats(min_value=1e-3, max_value=1e3)


@given(
    p=st.builds(Point2D, coords, coords),
    om=st.builds(Point2D, coords, coords),
    os_=st.builds(Point2D, coords, coords),
    scale=scales,
)
@settings(max_examples=200)
def test_mapping_round_trip(
    p: Point2D, om: Point2D, os_: Point2D, scale: float
) -> None:
    fit = FitTransform(scale, om, os_)
    back = to_math(to_screen(p, fit), fit)

    assert back.x == pytest.approx(p.x, abs=1e-6)
    assert back.y == pytest.approx(p.y, abs=1e-6)


def test_map_points_matches_scalar_mapping() -> None:
    series = sample_spirals(SpiralParameters(sample_count=50))
    fit = fit_to_surface(series, SurfaceSize(800, 500), 40.0)

    mapped = map_points(series.golden.points, fit)
    expected = [to_screen(p, fit).as_tuple() for p in series.golden]
    assert_allclose(mapped, expected, rtol=1e-12)
