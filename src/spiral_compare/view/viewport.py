"""Zoom/pan state machine producing the visible rectangle of the surface.

Viewport space is the drawing-surface coordinate system before zoom and
pan are applied. The visible rectangle is ``surface / zoom`` in size and is
centred on ``surface / 2 + pan_offset``; a screen point ``p`` therefore sits
over the viewport-space point ``center + (p - surface / 2) / zoom``.
"""

from __future__ import annotations

import logging
import math
from typing import Callable

from ..models import (
    ORIGIN,
    ZOOM_MAX,
    ZOOM_MIN,
    Point2D,
    SurfaceSize,
    ViewportState,
    ViewRect,
)
from ..utils import Listeners, Subscription, clamp, is_finite

logger = logging.getLogger(__name__)


class Viewport:
    """Sole owner of the interactive zoom level and pan offset.

    All inputs are clamped or ignored, never rejected, so the state cannot
    leave ``zoom in [zoom_min, zoom_max]`` with a finite pan offset.
    """

    def __init__(self, zoom_min: float = ZOOM_MIN, zoom_max: float = ZOOM_MAX) -> None:
        self.zoom_min = float(zoom_min)
        self.zoom_max = float(zoom_max)
        self._zoom = 1.0
        self._pan = ORIGIN
        self._listeners: Listeners[ViewportState] = Listeners()

    # ----------------------------- Properties ---------------------------------

    @property
    def zoom(self) -> float:
        return self._zoom

    @property
    def pan_offset(self) -> Point2D:
        return self._pan

    @property
    def state(self) -> ViewportState:
        return ViewportState(zoom=self._zoom, pan_offset=self._pan)

    def subscribe(self, callback: Callable[[ViewportState], None]) -> Subscription:
        """Call ``callback`` with the new state after every change."""
        return self._listeners.add(callback)

    # ----------------------------- Operations ---------------------------------

    def reset(self) -> None:
        self._apply(1.0, ORIGIN)

    def zoom_by(self, factor: float, anchor: Point2D, surface: SurfaceSize) -> float:
        """Multiply the zoom by ``factor`` keeping ``anchor`` fixed on screen.

        The pan correction uses the factor actually applied after clamping,
        so the point under the cursor does not drift at the zoom limits.
        Returns that effective factor.
        """
        if math.isnan(factor) or not is_finite(
            anchor.x, anchor.y, surface.width, surface.height
        ):
            logger.debug("ignoring zoom_by(%r, %r, %r)", factor, anchor, surface)
            return 1.0

        old = self._zoom
        new = clamp(old * factor, self.zoom_min, self.zoom_max)
        effective = new / old
        if effective == 1.0:
            return 1.0

        c = surface.center
        # Anchor offset from the surface center, in pre-zoom viewport space.
        off_x = (anchor.x - c.x) / old
        off_y = (anchor.y - c.y) / old
        k = 1.0 - 1.0 / effective
        pan = Point2D(self._pan.x + off_x * k, self._pan.y + off_y * k)
        if not is_finite(pan.x, pan.y):
            logger.debug(
                "ignoring zoom_by(%r, %r): pan would overflow", factor, anchor
            )
            return 1.0
        self._apply(new, pan)
        return effective

    def pan_by(self, delta: Point2D) -> None:
        """Shift the view by a screen-pixel ``delta`` (converted by ``1 / zoom``)."""
        if not is_finite(delta.x, delta.y):
            logger.debug("ignoring non-finite pan delta %r", delta)
            return
        pan = Point2D(
            self._pan.x - delta.x / self._zoom,
            self._pan.y - delta.y / self._zoom,
        )
        if not is_finite(pan.x, pan.y):
            logger.debug("ignoring pan delta %r: offset would overflow", delta)
            return
        self._apply(self._zoom, pan)

    def visible_rect(self, surface: SurfaceSize) -> ViewRect:
        width = surface.width / self._zoom
        height = surface.height / self._zoom
        cx = surface.width / 2.0 + self._pan.x
        cy = surface.height / 2.0 + self._pan.y
        return ViewRect(cx - width / 2.0, cy - height / 2.0, width, height)

    def screen_to_view(self, p: Point2D, surface: SurfaceSize) -> Point2D:
        """Viewport-space point currently displayed at screen point ``p``."""
        c = surface.center
        return Point2D(
            c.x + self._pan.x + (p.x - c.x) / self._zoom,
            c.y + self._pan.y + (p.y - c.y) / self._zoom,
        )

    def view_to_screen(self, p: Point2D, surface: SurfaceSize) -> Point2D:
        """Inverse of :meth:`screen_to_view`."""
        c = surface.center
        return Point2D(
            c.x + (p.x - c.x - self._pan.x) * self._zoom,
            c.y + (p.y - c.y - self._pan.y) * self._zoom,
        )

    # ------------------------------ Internals ---------------------------------

    def _apply(self, zoom: float, pan: Point2D) -> None:
        if zoom == self._zoom and pan == self._pan:
            return
        self._zoom = zoom
        self._pan = pan
        self._listeners.notify(self.state)


__all__ = ["Viewport"]
