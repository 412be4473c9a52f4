"""Exception types raised by the spiral geometry core."""

from __future__ import annotations


class SpiralCompareError(Exception):
    """Base class for all errors raised by spiral_compare."""


class InvalidParameterError(SpiralCompareError, ValueError):
    """A spiral parameter or fit argument is outside its valid range."""


class DegenerateGeometryError(SpiralCompareError, ValueError):
    """The sampled geometry has zero width or height and cannot be fitted."""


__all__ = [
    "SpiralCompareError",
    "InvalidParameterError",
    "DegenerateGeometryError",
]
