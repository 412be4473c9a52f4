"""Small shared helpers."""

from .events import Listeners, Subscription
from .geometry import clamp, is_finite, polar_point

__all__ = ["clamp", "is_finite", "polar_point", "Listeners", "Subscription"]
