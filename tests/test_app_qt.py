"""Smoke tests for the Qt surface, run on the offscreen platform."""

from __future__ import annotations

import os

import numpy as np
import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
QtWidgets = pytest.importorskip("PySide6.QtWidgets")
from PySide6 import QtCore, QtGui  # noqa: E402

from spiral_compare.app import (  # noqa: E402
    QtFullscreenDisplay,
    SpiralCanvas,
    SpiralWindow,
)
from spiral_compare.models import (  # noqa: E402
    Point2D,
    SpiralParameters,
    SurfaceSize,
    UIState,
    ViewRect,
)
from spiral_compare.utils.qt import polyline_path, window_transform  # noqa: E402
from spiral_compare.view import MaximizedLayoutDisplay, ViewerSession  # noqa: E402


@pytest.fixture(scope="module")
def qapp():
    app = QtWidgets.QApplication.instance() or QtWidgets.QApplication([])
    yield app


@pytest.fixture
def canvas(qapp):
    session = ViewerSession(SpiralParameters())
    widget = SpiralCanvas(session, UIState())
    yield widget
    widget.detach()
    session.close()
    widget.deleteLater()


def _mouse(etype, x: float, y: float, button=QtCore.Qt.MouseButton.LeftButton):
    pos = QtCore.QPointF(x, y)
    return QtGui.QMouseEvent(
        etype, pos, pos, button, button, QtCore.Qt.KeyboardModifier.NoModifier
    )


def test_window_transform_maps_visible_rect_to_surface(qapp) -> None:
    t = window_transform(ViewRect(150.0, 150.0, 300.0, 300.0), SurfaceSize(600, 600))
    p = t.map(QtCore.QPointF(150.0, 150.0))
    q = t.map(QtCore.QPointF(450.0, 450.0))
    assert (p.x(), p.y()) == pytest.approx((0.0, 0.0))
    assert (q.x(), q.y()) == pytest.approx((600.0, 600.0))


def test_polyline_path(qapp) -> None:
    path = polyline_path(np.array([[0.0, 0.0], [10.0, 0.0], [10.0, 5.0]]))
    assert path.elementCount() == 3
    assert polyline_path(np.zeros((0, 2))).isEmpty()


def test_canvas_renders(canvas) -> None:
    image = canvas.grab().toImage()
    assert (image.width(), image.height()) == (600, 600)
    # Something other than the white background was painted.
    colors = {image.pixelColor(x, 300).rgb() for x in range(0, 600, 5)}
    assert len(colors) > 1


def test_canvas_renders_error_message(qapp) -> None:
    session = ViewerSession(SpiralParameters(sample_count=0))
    widget = SpiralCanvas(session, UIState())
    assert not widget.grab().isNull()
    widget.detach()
    session.close()


def test_pointer_events_reach_viewport(canvas) -> None:
    session = canvas._session
    send = QtWidgets.QApplication.sendEvent

    send(canvas, _mouse(QtCore.QEvent.Type.MouseButtonPress, 100, 100))
    send(canvas, _mouse(QtCore.QEvent.Type.MouseMove, 130, 100))
    send(canvas, _mouse(QtCore.QEvent.Type.MouseButtonRelease, 130, 100))
    assert session.viewport.pan_offset == Point2D(-30.0, 0.0)

    pos = QtCore.QPointF(300.0, 300.0)
    wheel = QtGui.QWheelEvent(
        pos,
        pos,
        QtCore.QPoint(0, 0),
        QtCore.QPoint(0, 120),
        QtCore.Qt.MouseButton.NoButton,
        QtCore.Qt.KeyboardModifier.NoModifier,
        QtCore.Qt.ScrollPhase.NoScrollPhase,
        False,
    )
    send(canvas, wheel)
    assert session.viewport.zoom == pytest.approx(1.1)


def test_detached_canvas_ignores_pointer(canvas) -> None:
    session = canvas._session
    canvas.detach()
    send = QtWidgets.QApplication.sendEvent
    send(canvas, _mouse(QtCore.QEvent.Type.MouseButtonPress, 0, 0))
    send(canvas, _mouse(QtCore.QEvent.Type.MouseMove, 50, 0))
    assert session.viewport.pan_offset == Point2D(0.0, 0.0)


def test_window_releases_registrations_on_unbind(qapp) -> None:
    window = SpiralWindow(UIState(), "test")
    display = MaximizedLayoutDisplay()
    session = ViewerSession(SpiralParameters(), display=display)
    window.bind(session, QtFullscreenDisplay(window))

    display.request_large_display()
    session.zoom_in()
    assert window.controls.zoom_label.text() == "Zoom: 1.2x"
    assert window.controls.large_btn.text() == "Exit Fullscreen"

    window.unbind()
    display.exit_large_display()
    session.zoom_in()
    session.zoom_in()

    assert session.viewport.zoom == pytest.approx(1.44)
    assert window.controls.zoom_label.text() == "Zoom: 1.2x"
    assert window.controls.large_btn.text() == "Exit Fullscreen"
    session.close()
    window.deleteLater()
