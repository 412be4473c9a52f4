"""Interactive viewport, pointer handling and display modes."""

from .display import FallbackLargeDisplay, LargeDisplay, MaximizedLayoutDisplay
from .interaction import InteractionController, PointerButton
from .session import ViewerSession
from .viewport import Viewport

__all__ = [
    "Viewport",
    "InteractionController",
    "PointerButton",
    "LargeDisplay",
    "MaximizedLayoutDisplay",
    "FallbackLargeDisplay",
    "ViewerSession",
]
