"""Qt helper utilities."""

from PySide6 import QtCore, QtGui
import numpy as np

from ..models import Point2D, SurfaceSize, ViewRect


def to_qpointf(p: Point2D) -> QtCore.QPointF:
    return QtCore.QPointF(float(p.x), float(p.y))


def from_qpointf(p: QtCore.QPointF) -> Point2D:
    return Point2D(float(p.x()), float(p.y()))


def polyline_path(points: np.ndarray) -> QtGui.QPainterPath:
    """Open painter path through the rows of an ``(n, 2)`` array."""
    pts = np.asarray(points, dtype=np.float64)
    path = QtGui.QPainterPath()
    if pts.shape[0] == 0:
        return path
    path.moveTo(float(pts[0, 0]), float(pts[0, 1]))
    for x, y in pts[1:]:
        path.lineTo(float(x), float(y))
    return path


def window_transform(rect: ViewRect, surface: SurfaceSize) -> QtGui.QTransform:
    """Transform showing ``rect`` (viewport space) across the whole surface."""
    sx = surface.width / rect.width if rect.width else 1.0
    sy = surface.height / rect.height if rect.height else 1.0
    return QtGui.QTransform(sx, 0.0, 0.0, sy, -rect.x * sx, -rect.y * sy)


__all__ = ["to_qpointf", "from_qpointf", "polyline_path", "window_transform"]
