"""Qt application entry point for the spiral_compare viewer."""

from __future__ import annotations

import logging
import math
import os
from pathlib import Path
import sys
from typing import Callable, List, Optional

from PySide6 import QtCore, QtGui, QtWidgets

from . import __version__ as APP_VERSION
from .errors import SpiralCompareError
from .geometry import SceneGeometry
from .geometry.overlays import Segment
from .models import AppConfig, SurfaceSize, UIState
from .utils import Subscription, polar_point
from .utils.qt import from_qpointf, polyline_path, to_qpointf, window_transform
from .view import (
    FallbackLargeDisplay,
    InteractionController,
    LargeDisplay,
    MaximizedLayoutDisplay,
    PointerButton,
    ViewerSession,
)

logger = logging.getLogger(__name__)

LOG_LEVEL_ENV = "SPIRAL_COMPARE_LOG_LEVEL"

_QT_BUTTONS = {
    QtCore.Qt.MouseButton.LeftButton: PointerButton.PRIMARY,
    QtCore.Qt.MouseButton.MiddleButton: PointerButton.MIDDLE,
    QtCore.Qt.MouseButton.RightButton: PointerButton.SECONDARY,
}


# ------------------------------ Pointer Bridge --------------------------------


class PointerBridge(QtCore.QObject):
    """Event filter forwarding a widget's mouse and wheel events to a controller."""

    def __init__(
        self,
        controller: InteractionController,
        surface: Callable[[], SurfaceSize],
        parent: Optional[QtCore.QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._controller = controller
        self._surface = surface

    def eventFilter(self, watched: QtCore.QObject, event: QtCore.QEvent) -> bool:
        etype = event.type()
        if etype == QtCore.QEvent.Type.MouseButtonPress:
            button = _QT_BUTTONS.get(event.button(), -1)
            self._controller.pointer_down(from_qpointf(event.position()), button)
        elif etype == QtCore.QEvent.Type.MouseMove:
            self._controller.pointer_move(from_qpointf(event.position()))
        elif etype == QtCore.QEvent.Type.MouseButtonRelease:
            self._controller.pointer_up()
        elif etype == QtCore.QEvent.Type.Leave:
            self._controller.pointer_leave()
        elif etype == QtCore.QEvent.Type.Wheel:
            self._controller.wheel(
                float(event.angleDelta().y()),
                from_qpointf(event.position()),
                self._surface(),
            )
            event.accept()
            return True
        return False

    @classmethod
    def attach(
        cls,
        widget: QtWidgets.QWidget,
        controller: InteractionController,
        surface: Callable[[], SurfaceSize],
    ) -> Subscription:
        """Install on ``widget``; the returned handle removes the filter again."""
        bridge = cls(controller, surface, widget)
        widget.installEventFilter(bridge)
        alive = True

        def on_destroyed(*_: object) -> None:
            nonlocal alive
            alive = False

        def release() -> None:
            # The bridge is a child of the widget and dies with it.
            if alive:
                widget.removeEventFilter(bridge)
                bridge.deleteLater()

        widget.destroyed.connect(on_destroyed)
        return Subscription(release)


# ------------------------------ Display modes ---------------------------------


class QtFullscreenDisplay(LargeDisplay):
    """Native fullscreen for a top-level window."""

    def __init__(
        self,
        window: QtWidgets.QWidget,
        on_enter: Optional[Callable[[], None]] = None,
        on_leave: Optional[Callable[[], None]] = None,
    ) -> None:
        super().__init__()
        self._window = window
        self._on_enter = on_enter
        self._on_leave = on_leave

    def _enter(self) -> None:
        if self._on_enter is not None:
            self._on_enter()
        self._window.showFullScreen()

    def _leave(self) -> None:
        self._window.showNormal()
        if self._on_leave is not None:
            self._on_leave()

    def sync_from_window(self) -> None:
        """Pick up a fullscreen exit that did not go through this object."""
        if self.active and not self._window.isFullScreen():
            if self._on_leave is not None:
                self._on_leave()
            self._set_active(False)


# ------------------------------- Spiral Canvas --------------------------------


class SpiralCanvas(QtWidgets.QWidget):
    """Paints the static scene through the viewport's visible rectangle."""

    def __init__(
        self,
        session: ViewerSession,
        ui: UIState,
        parent: Optional[QtWidgets.QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self._session = session
        self._ui = ui
        self.setFixedSize(ui.surface_width, ui.surface_height)
        self.setCursor(QtCore.Qt.CursorShape.OpenHandCursor)
        self.setFocusPolicy(QtCore.Qt.FocusPolicy.StrongFocus)

        self._pointer = PointerBridge.attach(
            self, session.interaction, lambda: session.surface
        )
        self._view_sub = session.viewport.subscribe(lambda _state: self.update())

    def detach(self) -> None:
        self._pointer.unsubscribe()
        self._view_sub.unsubscribe()

    def set_expanding(self, expanding: bool) -> None:
        if expanding:
            self.setMinimumSize(200, 200)
            self.setMaximumSize(16777215, 16777215)
            self.setSizePolicy(
                QtWidgets.QSizePolicy.Policy.Expanding,
                QtWidgets.QSizePolicy.Policy.Expanding,
            )
        else:
            self.setFixedSize(self._ui.surface_width, self._ui.surface_height)

    # ----------------------------- Qt overrides --------------------------------

    def resizeEvent(self, e: QtGui.QResizeEvent) -> None:
        size = e.size()
        self._session.set_surface_size(SurfaceSize(size.width(), size.height()))
        super().resizeEvent(e)

    def mousePressEvent(self, e: QtGui.QMouseEvent) -> None:
        if self._session.interaction.dragging:
            self.setCursor(QtCore.Qt.CursorShape.ClosedHandCursor)
        e.accept()

    def mouseReleaseEvent(self, e: QtGui.QMouseEvent) -> None:
        self.setCursor(QtCore.Qt.CursorShape.OpenHandCursor)
        e.accept()

    def paintEvent(self, e: QtGui.QPaintEvent) -> None:
        painter = QtGui.QPainter(self)
        painter.setRenderHint(QtGui.QPainter.RenderHint.Antialiasing, True)
        painter.fillRect(self.rect(), QtGui.QColor(255, 255, 255))

        try:
            geo = self._session.geometry
        except SpiralCompareError as exc:
            painter.setPen(QtGui.QPen(QtGui.QColor(160, 0, 0)))
            painter.drawText(
                self.rect(), QtCore.Qt.AlignmentFlag.AlignCenter, f"{exc}"
            )
            return

        painter.setTransform(
            window_transform(self._session.visible_rect(), self._session.surface)
        )
        large = geo.large
        self._paint_grid(painter, geo)
        self._paint_axes(painter, geo, large)
        self._paint_wheel(painter, geo, large)
        self._paint_curves(painter, geo, large)
        self._paint_markers(painter, geo, large)

        painter.resetTransform()
        painter.setPen(QtGui.QPen(QtGui.QColor(200, 200, 200)))
        painter.setBrush(QtCore.Qt.BrushStyle.NoBrush)
        painter.drawRect(self.rect().adjusted(0, 0, -1, -1))

    # ------------------------------ Painting -----------------------------------

    @staticmethod
    def _line(painter: QtGui.QPainter, s: Segment) -> None:
        painter.drawLine(QtCore.QPointF(s.x1, s.y1), QtCore.QPointF(s.x2, s.y2))

    @staticmethod
    def _text(
        painter: QtGui.QPainter, x: float, y: float, text: str, centered: bool = False
    ) -> None:
        if centered:
            rect = QtCore.QRectF(x - 30.0, y - 10.0, 60.0, 20.0)
            painter.drawText(rect, QtCore.Qt.AlignmentFlag.AlignCenter, text)
        else:
            painter.drawText(QtCore.QPointF(x, y), text)

    def _paint_grid(self, painter: QtGui.QPainter, geo: SceneGeometry) -> None:
        painter.setPen(QtGui.QPen(QtGui.QColor(self._ui.grid_color), 1))
        for s in geo.grid.horizontal:
            self._line(painter, s)
        for s in geo.grid.vertical:
            self._line(painter, s)

    def _paint_axes(
        self, painter: QtGui.QPainter, geo: SceneGeometry, large: bool
    ) -> None:
        axis_color = QtGui.QColor(self._ui.axis_color)
        painter.setPen(QtGui.QPen(axis_color, 2))
        self._line(painter, geo.axes.x_axis)
        self._line(painter, geo.axes.y_axis)

        font = painter.font()
        font.setPointSizeF(16.0 if large else 14.0)
        painter.setFont(font)
        painter.setPen(QtGui.QPen(axis_color))
        for label in (geo.axes.x_label, geo.axes.y_label):
            self._text(painter, label.x, label.y, label.text)

    def _paint_wheel(
        self, painter: QtGui.QPainter, geo: SceneGeometry, large: bool
    ) -> None:
        sector_pen = QtGui.QPen(QtGui.QColor(204, 204, 204), 1)
        sector_pen.setStyle(QtCore.Qt.PenStyle.CustomDashLine)
        sector_pen.setDashPattern([3.0, 3.0])
        painter.setPen(sector_pen)
        painter.setBrush(QtGui.QBrush(QtGui.QColor(200, 200, 200, 26)))
        for sector in geo.wheel.sectors:
            c, r = sector.center, sector.radius
            path = QtGui.QPainterPath()
            path.moveTo(to_qpointf(c))
            path.lineTo(*polar_point(c.x, c.y, r, math.radians(sector.start_deg)))
            path.arcTo(
                QtCore.QRectF(c.x - r, c.y - r, 2.0 * r, 2.0 * r),
                sector.start_deg,
                sector.sweep_deg,
            )
            path.closeSubpath()
            painter.drawPath(path)
        painter.setBrush(QtCore.Qt.BrushStyle.NoBrush)

        major_pen = QtGui.QPen(QtGui.QColor(85, 85, 85), 2)
        minor_pen = QtGui.QPen(QtGui.QColor(153, 153, 153), 1)
        for tick in geo.wheel.ticks:
            painter.setPen(major_pen if tick.major else minor_pen)
            self._line(painter, tick.segment)

        font = painter.font()
        font.setPointSizeF(12.0 if large else 10.0)
        painter.setFont(font)
        painter.setPen(QtGui.QPen(QtGui.QColor(85, 85, 85)))
        for label in geo.wheel.labels:
            self._text(painter, label.x, label.y, label.text, centered=True)

    def _paint_curves(
        self, painter: QtGui.QPainter, geo: SceneGeometry, large: bool
    ) -> None:
        painter.setBrush(QtCore.Qt.BrushStyle.NoBrush)
        for path, color, width in (
            (geo.archimedean_path, self._ui.archimedean_color, 3.0 if large else 2.5),
            (geo.golden_path, self._ui.golden_color, 4.0 if large else 3.5),
        ):
            pen = QtGui.QPen(QtGui.QColor(color), width)
            pen.setCapStyle(QtCore.Qt.PenCapStyle.RoundCap)
            pen.setJoinStyle(QtCore.Qt.PenJoinStyle.RoundJoin)
            painter.setPen(pen)
            painter.drawPath(polyline_path(path))

    def _paint_markers(
        self, painter: QtGui.QPainter, geo: SceneGeometry, large: bool
    ) -> None:
        painter.setPen(QtCore.Qt.PenStyle.NoPen)
        r_start = 6.0 if large else 5.0
        r_end = 5.0 if large else 4.0
        painter.setBrush(QtGui.QBrush(QtGui.QColor(0, 0, 0)))
        painter.drawEllipse(to_qpointf(geo.start_marker), r_start, r_start)
        painter.setBrush(QtGui.QBrush(QtGui.QColor(self._ui.archimedean_color)))
        painter.drawEllipse(to_qpointf(geo.archimedean_end), r_end, r_end)
        painter.setBrush(QtGui.QBrush(QtGui.QColor(self._ui.golden_color)))
        painter.drawEllipse(to_qpointf(geo.golden_end), r_end, r_end)

        font = painter.font()
        font.setPointSizeF(14.0 if large else 12.0)
        painter.setFont(font)
        painter.setPen(QtGui.QPen(QtGui.QColor(self._ui.axis_color)))
        start = geo.start_marker
        self._text(painter, start.x + 10.0, start.y - 10.0, "Start")


# -------------------------------- Control Bar ---------------------------------


class ControlBar(QtWidgets.QWidget):
    zoomInRequested = QtCore.Signal()
    zoomOutRequested = QtCore.Signal()
    resetRequested = QtCore.Signal()
    largeToggleRequested = QtCore.Signal()

    def __init__(self, parent: Optional[QtWidgets.QWidget] = None) -> None:
        super().__init__(parent)
        self.zoom_in_btn = QtWidgets.QPushButton("Zoom In (+)")
        self.zoom_in_btn.clicked.connect(self.zoomInRequested)
        self.zoom_out_btn = QtWidgets.QPushButton("Zoom Out (-)")
        self.zoom_out_btn.clicked.connect(self.zoomOutRequested)
        self.reset_btn = QtWidgets.QPushButton("Reset View")
        self.reset_btn.clicked.connect(self.resetRequested)
        self.large_btn = QtWidgets.QPushButton("Fullscreen Mode")
        self.large_btn.clicked.connect(self.largeToggleRequested)
        self.zoom_label = QtWidgets.QLabel("Zoom: 1.0x")

        row = QtWidgets.QHBoxLayout(self)
        row.addStretch(1)
        for w in (self.zoom_in_btn, self.zoom_out_btn, self.reset_btn, self.large_btn):
            row.addWidget(w)
        row.addWidget(self.zoom_label)
        row.addStretch(1)

    def set_zoom_text(self, text: str) -> None:
        self.zoom_label.setText(text)

    def set_large(self, large: bool) -> None:
        self.large_btn.setText("Exit Fullscreen" if large else "Fullscreen Mode")


# ------------------------------- Main Window ----------------------------------


class SpiralWindow(QtWidgets.QWidget):
    def __init__(self, ui: UIState, app_version: str) -> None:
        super().__init__(None)
        self._ui = ui
        self._app_version = app_version or "unknown"
        self.setWindowTitle(f"spiral_compare {self._app_version}")
        self._fullscreen: Optional[QtFullscreenDisplay] = None
        self.session: Optional[ViewerSession] = None
        self.canvas: Optional[SpiralCanvas] = None
        self._subscriptions: List[Subscription] = []

        self._layout = QtWidgets.QVBoxLayout(self)
        title = QtWidgets.QLabel("Archimedean vs. Golden Spiral (Interactive)")
        font = title.font()
        font.setPointSizeF(font.pointSizeF() * 1.4)
        font.setBold(True)
        title.setFont(font)
        title.setAlignment(QtCore.Qt.AlignmentFlag.AlignCenter)
        self._layout.addWidget(title)

        self.controls = ControlBar(self)
        self._layout.addWidget(self.controls)

    def bind(self, session: ViewerSession, fullscreen: QtFullscreenDisplay) -> None:
        """Attach the session; called once, after the display modes exist."""
        self.session = session
        self._fullscreen = fullscreen
        self.canvas = SpiralCanvas(session, self._ui, self)
        self._layout.addWidget(
            self.canvas, stretch=1, alignment=QtCore.Qt.AlignmentFlag.AlignCenter
        )
        self._layout.addLayout(self._legend())
        help_text = QtWidgets.QLabel(self._help_markdown(), self)
        help_text.setTextFormat(QtCore.Qt.TextFormat.RichText)
        help_text.setWordWrap(True)
        self._layout.addWidget(help_text)

        self.controls.zoomInRequested.connect(session.zoom_in)
        self.controls.zoomOutRequested.connect(session.zoom_out)
        self.controls.resetRequested.connect(session.reset_view)
        self.controls.largeToggleRequested.connect(session.toggle_large_display)
        self._subscriptions = [
            session.viewport.subscribe(
                lambda _state: self.controls.set_zoom_text(session.zoom_label())
            ),
            session.display.subscribe(self.controls.set_large),
        ]

    def set_canvas_expanding(self, expanding: bool) -> None:
        if self.canvas is not None:
            self.canvas.set_expanding(expanding)

    # --- helpers ---
    def _legend(self) -> QtWidgets.QHBoxLayout:
        row = QtWidgets.QHBoxLayout()
        row.addStretch(1)
        for color, text in (
            (self._ui.archimedean_color, "Archimedean Spiral: r = a·θ"),
            (
                self._ui.golden_color,
                "Golden Spiral: r = a·e^(bθ) where b = ln(φ)/(2π)",
            ),
        ):
            swatch = QtWidgets.QLabel(self)
            swatch.setFixedSize(24, 16)
            swatch.setStyleSheet(f"background-color: {color};")
            row.addWidget(swatch)
            row.addWidget(QtWidgets.QLabel(text, self))
            row.addSpacing(24)
        row.addStretch(1)
        return row

    def _help_markdown(self) -> str:
        return (
            "<p><b>Interactive Controls:</b></p>"
            "<ul>"
            "<li>Use the mouse wheel or zoom buttons to zoom in/out</li>"
            "<li>Click and drag to pan around the graph</li>"
            "<li>Toggle fullscreen mode for a larger view</li>"
            "<li>Press <b>Reset View</b> to return to the original view</li>"
            "</ul>"
            "<p><b>Shortcuts:</b> <b>+</b>/<b>-</b> zoom, <b>R</b> reset, "
            "<b>F</b> fullscreen, <b>Esc</b> leave fullscreen</p>"
        )

    # --- Qt overrides ---
    def keyPressEvent(self, e: QtGui.QKeyEvent) -> None:
        session = self.session
        if session is None:
            super().keyPressEvent(e)
            return
        key = e.key()
        if key in (QtCore.Qt.Key.Key_Plus, QtCore.Qt.Key.Key_Equal):
            session.zoom_in()
        elif key in (QtCore.Qt.Key.Key_Minus, QtCore.Qt.Key.Key_Underscore):
            session.zoom_out()
        elif key in (QtCore.Qt.Key.Key_R, QtCore.Qt.Key.Key_0):
            session.reset_view()
        elif key == QtCore.Qt.Key.Key_F:
            session.toggle_large_display()
        elif key == QtCore.Qt.Key.Key_Escape and session.large:
            session.display.exit_large_display()
        else:
            super().keyPressEvent(e)

    def changeEvent(self, e: QtCore.QEvent) -> None:
        if (
            e.type() == QtCore.QEvent.Type.WindowStateChange
            and self._fullscreen is not None
        ):
            self._fullscreen.sync_from_window()
        super().changeEvent(e)

    def closeEvent(self, e: QtGui.QCloseEvent) -> None:
        self.unbind()
        super().closeEvent(e)

    def unbind(self) -> None:
        """Release every registration made by :meth:`bind`."""
        if self.canvas is not None:
            self.canvas.detach()
        for sub in self._subscriptions:
            sub.unsubscribe()
        self._subscriptions = []


# ---------------------------- Main Controller ---------------------------------


class MainController(QtCore.QObject):
    def __init__(self, app: QtWidgets.QApplication) -> None:
        super().__init__(None)
        self.app = app
        self.cfg = self._load_config()
        self._app_version = app.applicationVersion() or APP_VERSION

        self.window = SpiralWindow(self.cfg.ui, self._app_version)
        fullscreen = QtFullscreenDisplay(
            self.window,
            on_enter=lambda: self.window.set_canvas_expanding(True),
            on_leave=lambda: self.window.set_canvas_expanding(False),
        )
        maximized = MaximizedLayoutDisplay(
            on_enter=self._enter_maximized, on_leave=self._leave_maximized
        )
        self.display = FallbackLargeDisplay(fullscreen, maximized)
        self.session = self._make_session()
        self.window.bind(self.session, fullscreen)
        self.window.show()

    def _make_session(self) -> ViewerSession:
        session = ViewerSession(
            self.cfg.spiral.to_parameters(), self.cfg.ui, self.display
        )
        try:
            session.geometry  # noqa: B018 - builds the scene, raises if degenerate
        except SpiralCompareError:
            logger.error(
                "configured spiral cannot be drawn; falling back to defaults",
                exc_info=True,
            )
            session.close()
            self.cfg = AppConfig(ui=self.cfg.ui)
            session = ViewerSession(
                self.cfg.spiral.to_parameters(), self.cfg.ui, self.display
            )
        return session

    def _enter_maximized(self) -> None:
        self.window.set_canvas_expanding(True)
        self.window.showMaximized()

    def _leave_maximized(self) -> None:
        self.window.showNormal()
        self.window.set_canvas_expanding(False)

    # ---------------------------- Config I/O ----------------------------------

    def _config_path(self) -> Path:
        home = Path.home()
        return home / ".spiral_compare_config.json"

    def _load_config(self) -> AppConfig:
        p = self._config_path()
        if p.exists():
            try:
                cfg = AppConfig.from_json(p.read_text(encoding="utf-8"))
                logger.info("loaded config from %s", p)
                return cfg
            except (OSError, ValueError, TypeError, AttributeError):
                logger.warning("ignoring unreadable config %s", p, exc_info=True)
        return AppConfig()

    def _save_config(self) -> None:
        p = self._config_path()
        try:
            p.write_text(self.cfg.to_json(), encoding="utf-8")
            logger.info("saved config to %s", p)
        except OSError:
            logger.warning("could not save config to %s", p, exc_info=True)


# ---------------------------------- Main --------------------------------------


def _configure_logging() -> None:
    level_name = os.environ.get(LOG_LEVEL_ENV, "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    _configure_logging()
    app = QtWidgets.QApplication(sys.argv)
    app.setApplicationName("spiral_compare")
    app.setApplicationVersion(APP_VERSION)

    ctrl = MainController(app)
    ret = app.exec()

    ctrl._save_config()
    sys.exit(ret)


if __name__ == "__main__":
    main()
