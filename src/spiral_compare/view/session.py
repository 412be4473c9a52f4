"""Wires the scene pipeline, viewport, interaction and display mode together."""

from __future__ import annotations

import logging
from typing import Optional

from ..geometry import SceneGeometry, SpiralScene
from ..models import SpiralParameters, SurfaceSize, UIState, ViewRect
from ..utils import Subscription
from .display import LargeDisplay, MaximizedLayoutDisplay
from .interaction import InteractionController
from .viewport import Viewport

logger = logging.getLogger(__name__)


class ViewerSession:
    """Everything a drawing surface needs, minus the drawing.

    The viewport is reset whenever the large-display mode changes, because
    the pan offset is relative to a surface size that is about to change.
    """

    def __init__(
        self,
        params: SpiralParameters,
        ui: Optional[UIState] = None,
        display: Optional[LargeDisplay] = None,
    ) -> None:
        self.ui = ui or UIState()
        self.scene = SpiralScene(
            params,
            SurfaceSize(self.ui.surface_width, self.ui.surface_height),
            fill_fraction=self.ui.fill_fraction,
            margin_max_px=self.ui.margin_max_px,
            margin_fraction=self.ui.margin_fraction,
        )
        self.viewport = Viewport()
        self.interaction = InteractionController(
            self.viewport,
            wheel_zoom_in=self.ui.wheel_zoom_in,
            wheel_zoom_out=self.ui.wheel_zoom_out,
        )
        self.display: LargeDisplay = display or MaximizedLayoutDisplay()
        self._display_sub: Subscription = self.display.subscribe(
            self._on_display_changed
        )

    # ----------------------------- Queries ------------------------------------

    @property
    def surface(self) -> SurfaceSize:
        return self.scene.surface

    @property
    def geometry(self) -> SceneGeometry:
        return self.scene.geometry

    @property
    def large(self) -> bool:
        return self.display.active

    def visible_rect(self) -> ViewRect:
        return self.viewport.visible_rect(self.scene.surface)

    def zoom_label(self) -> str:
        return f"Zoom: {self.viewport.zoom:.1f}x"

    # ----------------------------- Updates ------------------------------------

    def set_parameters(self, params: SpiralParameters) -> None:
        self.scene.set_parameters(params)

    def set_surface_size(self, surface: SurfaceSize) -> None:
        self.scene.set_surface_size(surface)

    def zoom_in(self) -> None:
        self.interaction.zoom_step(self.ui.button_zoom_in, self.scene.surface)

    def zoom_out(self) -> None:
        self.interaction.zoom_step(self.ui.button_zoom_out, self.scene.surface)

    def reset_view(self) -> None:
        self.viewport.reset()

    def toggle_large_display(self) -> bool:
        return self.display.toggle()

    def close(self) -> None:
        """Detach from the display; the session must not be used afterwards."""
        self._display_sub.unsubscribe()

    def _on_display_changed(self, active: bool) -> None:
        logger.info("large display %s; resetting view", "on" if active else "off")
        self.scene.set_large(active)
        self.interaction.pointer_leave()
        self.viewport.reset()


__all__ = ["ViewerSession"]
