"""Zoom/pan state machine of the viewport."""

from __future__ import annotations

import math
from typing import List

from hypothesis import given, settings
from hypothesis import strategies as st
import pytest

from spiral_compare.models import (
    ZOOM_MAX,
    ZOOM_MIN,
    Point2D,
    SurfaceSize,
    ViewportState,
    ViewRect,
)
from spiral_compare.view import Viewport

SIZE = SurfaceSize(600, 600)

factors = st.floats(allow_nan=True, allow_infinity=True)
screen = st.floats(min_value=0.0, max_value=600.0)
anchors = st.builds(Point2D, screen, screen)


def test_initial_state() -> None:
    vp = Viewport()
    assert vp.state == ViewportState(zoom=1.0, pan_offset=Point2D(0.0, 0.0))
    assert vp.visible_rect(SIZE) == ViewRect(0.0, 0.0, 600.0, 600.0)


@given(ops=st.lists(st.tuples(factors, anchors), max_size=40))
@settings(max_examples=150)
def test_zoom_always_clamped(ops: List[tuple]) -> None:
    vp = Viewport()
    for factor, anchor in ops:
        vp.zoom_by(factor, anchor, SIZE)
        assert ZOOM_MIN <= vp.zoom <= ZOOM_MAX
        assert math.isfinite(vp.pan_offset.x) and math.isfinite(vp.pan_offset.y)


@given(
    factor=st.floats(min_value=0.6, max_value=1.6),
    anchor=anchors,
    pre_pan=st.builds(Point2D, st.floats(-200, 200), st.floats(-200, 200)),
)
@settings(max_examples=200)
def test_zoom_keeps_point_under_cursor(
    factor: float, anchor: Point2D, pre_pan: Point2D
) -> None:
    vp = Viewport()
    vp.zoom_by(2.0, SIZE.center, SIZE)
    vp.pan_by(pre_pan)
    before = vp.screen_to_view(anchor, SIZE)

    vp.zoom_by(factor, anchor, SIZE)

    after = vp.view_to_screen(before, SIZE)
    assert after.x == pytest.approx(anchor.x, abs=1e-7)
    assert after.y == pytest.approx(anchor.y, abs=1e-7)


@pytest.mark.parametrize("factor", [100.0, 0.001, math.inf, 0.0, -3.0])
def test_zoom_to_cursor_holds_at_limits(factor: float) -> None:
    vp = Viewport()
    vp.zoom_by(3.0, Point2D(100, 420), SIZE)
    anchor = Point2D(510.0, 75.0)
    before = vp.screen_to_view(anchor, SIZE)

    effective = vp.zoom_by(factor, anchor, SIZE)

    assert vp.zoom in (ZOOM_MIN, ZOOM_MAX)
    assert effective == pytest.approx(vp.zoom / 3.0)
    after = vp.view_to_screen(before, SIZE)
    assert after.x == pytest.approx(anchor.x)
    assert after.y == pytest.approx(anchor.y)


def test_zoom_at_limit_is_a_no_op() -> None:
    vp = Viewport()
    vp.zoom_by(50.0, Point2D(0, 0), SIZE)
    pan = vp.pan_offset

    assert vp.zoom_by(1.1, Point2D(600, 600), SIZE) == 1.0
    assert vp.zoom == ZOOM_MAX
    assert vp.pan_offset == pan


def test_zoom_around_center_leaves_pan_alone() -> None:
    vp = Viewport()
    vp.zoom_by(1.2, SIZE.center, SIZE)
    assert vp.zoom == pytest.approx(1.2)
    assert vp.pan_offset == Point2D(0.0, 0.0)


def test_nan_inputs_are_ignored() -> None:
    vp = Viewport()
    vp.zoom_by(math.nan, Point2D(10, 10), SIZE)
    vp.zoom_by(2.0, Point2D(math.nan, 10), SIZE)
    vp.pan_by(Point2D(math.inf, 0))
    assert vp.state == ViewportState()


def test_pan_divides_by_zoom() -> None:
    vp = Viewport()
    vp.zoom_by(2.0, SIZE.center, SIZE)
    vp.pan_by(Point2D(20.0, -10.0))
    assert vp.pan_offset == Point2D(-10.0, 5.0)


def test_overflowing_pan_is_ignored() -> None:
    vp = Viewport()
    vp.zoom_by(0.5, SIZE.center, SIZE)
    assert vp.zoom == 0.5

    vp.pan_by(Point2D(1e308, 0.0))
    assert vp.pan_offset == Point2D(0.0, 0.0)

    assert vp.zoom_by(4.0, Point2D(1.7e308, 300.0), SIZE) == 1.0
    assert vp.state == ViewportState(zoom=0.5, pan_offset=Point2D(0.0, 0.0))

    vp.pan_by(Point2D(100.0, 0.0))
    assert vp.pan_offset == Point2D(-200.0, 0.0)


def test_visible_rect_follows_zoom_and_pan() -> None:
    vp = Viewport()
    vp.zoom_by(2.0, SIZE.center, SIZE)
    vp.pan_by(Point2D(-40.0, 20.0))  # pan += (20, -10)

    rect = vp.visible_rect(SurfaceSize(600, 400))

    assert rect.width == pytest.approx(300.0)
    assert rect.height == pytest.approx(200.0)
    assert rect.center.x == pytest.approx(320.0)
    assert rect.center.y == pytest.approx(190.0)


@given(
    ops=st.lists(
        st.one_of(
            st.tuples(st.just("zoom"), st.floats(0.1, 10.0), anchors),
            st.tuples(
                st.just("pan"),
                st.builds(Point2D, st.floats(-500, 500), st.floats(-500, 500)),
            ),
        ),
        max_size=20,
    )
)
@settings(max_examples=100)
def test_reset_restores_initial_state(ops: list) -> None:
    vp = Viewport()
    for op in ops:
        if op[0] == "zoom":
            vp.zoom_by(op[1], op[2], SIZE)
        else:
            vp.pan_by(op[1])

    vp.reset()
    assert vp.state == ViewportState(zoom=1.0, pan_offset=Point2D(0.0, 0.0))
    vp.reset()
    assert vp.state == ViewportState(zoom=1.0, pan_offset=Point2D(0.0, 0.0))


def test_subscribers_see_every_change_once() -> None:
    vp = Viewport()
    seen: List[ViewportState] = []
    sub = vp.subscribe(seen.append)

    vp.zoom_by(2.0, SIZE.center, SIZE)
    vp.pan_by(Point2D(4.0, 0.0))
    vp.pan_by(Point2D(0.0, 0.0))  # no change, no notification
    vp.reset()
    vp.reset()
    sub.unsubscribe()
    vp.zoom_by(2.0, SIZE.center, SIZE)

    assert [s.zoom for s in seen] == [2.0, 2.0, 1.0]
    assert seen[1].pan_offset == Point2D(-2.0, 0.0)
    assert not sub.active
