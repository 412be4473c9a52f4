"""Translate raw pointer and wheel events into viewport updates."""

from __future__ import annotations

import enum

from ..models import DragState, Point2D, SurfaceSize
from .viewport import Viewport

WHEEL_ZOOM_IN = 1.1
WHEEL_ZOOM_OUT = 0.9


class PointerButton(enum.IntEnum):
    PRIMARY = 0
    MIDDLE = 1
    SECONDARY = 2


class InteractionController:
    """Drag-to-pan and wheel-to-zoom over a :class:`Viewport`.

    Holds nothing but the transient :class:`DragState`; every geometric
    decision is delegated to the viewport. Drag deltas are frame to frame.
    """

    def __init__(
        self,
        viewport: Viewport,
        wheel_zoom_in: float = WHEEL_ZOOM_IN,
        wheel_zoom_out: float = WHEEL_ZOOM_OUT,
    ) -> None:
        self.viewport = viewport
        self.wheel_zoom_in = float(wheel_zoom_in)
        self.wheel_zoom_out = float(wheel_zoom_out)
        self._drag = DragState()

    @property
    def drag(self) -> DragState:
        return self._drag

    @property
    def dragging(self) -> bool:
        return self._drag.active

    def pointer_down(self, point: Point2D, button: int = PointerButton.PRIMARY) -> None:
        if button == PointerButton.PRIMARY:
            self._drag = DragState(active=True, anchor=point)

    def pointer_move(self, point: Point2D) -> None:
        if not self._drag.active:
            return
        self.viewport.pan_by(point - self._drag.anchor)
        self._drag = DragState(active=True, anchor=point)

    def pointer_up(self) -> None:
        self._drag = DragState()

    def pointer_leave(self) -> None:
        self._drag = DragState()

    def wheel(self, delta_y: float, point: Point2D, surface: SurfaceSize) -> None:
        """Positive ``delta_y`` (wheel rolled away from the user) zooms in."""
        if delta_y > 0:
            self.viewport.zoom_by(self.wheel_zoom_in, point, surface)
        elif delta_y < 0:
            self.viewport.zoom_by(self.wheel_zoom_out, point, surface)

    def zoom_step(self, factor: float, surface: SurfaceSize) -> None:
        """Zoom around the surface center, as the zoom buttons do."""
        self.viewport.zoom_by(factor, surface.center, surface)


__all__ = ["PointerButton", "InteractionController", "WHEEL_ZOOM_IN", "WHEEL_ZOOM_OUT"]
