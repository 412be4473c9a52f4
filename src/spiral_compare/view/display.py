"""Enlarged presentation capability with an always-available software fallback."""

from __future__ import annotations

import abc
import logging
from typing import Callable, Optional

from ..utils import Listeners, Subscription

logger = logging.getLogger(__name__)


class LargeDisplay(abc.ABC):
    """Enter or leave an enlarged presentation of the drawing surface.

    Implementations report mode changes to subscribers with the new
    ``active`` flag.
    """

    def __init__(self) -> None:
        self._active = False
        self._listeners: Listeners[bool] = Listeners()

    @property
    def active(self) -> bool:
        return self._active

    def subscribe(self, callback: Callable[[bool], None]) -> Subscription:
        return self._listeners.add(callback)

    def request_large_display(self) -> None:
        if self._active:
            return
        self._enter()
        self._set_active(True)

    def exit_large_display(self) -> None:
        if not self._active:
            return
        self._leave()
        self._set_active(False)

    def toggle(self) -> bool:
        """Flip the mode; returns the new ``active`` flag."""
        if self._active:
            self.exit_large_display()
        else:
            self.request_large_display()
        return self._active

    def _set_active(self, active: bool) -> None:
        if active != self._active:
            self._active = active
            logger.info("%s %s", type(self).__name__, "entered" if active else "left")
            self._listeners.notify(active)

    @abc.abstractmethod
    def _enter(self) -> None: ...

    @abc.abstractmethod
    def _leave(self) -> None: ...


class MaximizedLayoutDisplay(LargeDisplay):
    """Software-only "maximized layout": the host just lays itself out larger.

    ``on_enter`` / ``on_leave`` let the host react; both are optional.
    """

    def __init__(
        self,
        on_enter: Optional[Callable[[], None]] = None,
        on_leave: Optional[Callable[[], None]] = None,
    ) -> None:
        super().__init__()
        self._on_enter = on_enter
        self._on_leave = on_leave

    def _enter(self) -> None:
        if self._on_enter is not None:
            self._on_enter()

    def _leave(self) -> None:
        if self._on_leave is not None:
            self._on_leave()


class FallbackLargeDisplay(LargeDisplay):
    """Try ``primary`` first; if it fails, use ``fallback`` instead.

    A failure while entering the primary mode is logged and never reaches the
    caller. Leaving always goes through whichever display was entered.
    """

    def __init__(self, primary: LargeDisplay, fallback: LargeDisplay) -> None:
        super().__init__()
        self.primary = primary
        self.fallback = fallback
        self._engaged: Optional[LargeDisplay] = None
        # Modes can also end from outside (e.g. the window manager).
        primary.subscribe(self._child_changed)
        fallback.subscribe(self._child_changed)

    @property
    def engaged(self) -> Optional[LargeDisplay]:
        return self._engaged

    def _enter(self) -> None:
        try:
            self.primary.request_large_display()
            self._engaged = self.primary
        except Exception:
            logger.exception(
                "large display via %s failed; using %s",
                type(self.primary).__name__,
                type(self.fallback).__name__,
            )
            self.fallback.request_large_display()
            self._engaged = self.fallback

    def _leave(self) -> None:
        engaged, self._engaged = self._engaged, None
        if engaged is not None:
            engaged.exit_large_display()

    def _child_changed(self, active: bool) -> None:
        if not active and self._engaged is not None and not self._engaged.active:
            self._engaged = None
            self._set_active(False)


__all__ = ["LargeDisplay", "MaximizedLayoutDisplay", "FallbackLargeDisplay"]
