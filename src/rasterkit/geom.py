# src/rasterkit/geom.py

"""
This module provides the integer point type used for raster origins and extents.
"""

from dataclasses import dataclass
from numbers import Integral
from typing import Iterator, Tuple, Union

__all__ = [
    "Point",
    "to_point"
]

@dataclass(frozen=True)
class Point:
    """
    A 2D integer value, used both as a pixel coordinate and as a size.

    When used as a size, x is the width and y is the height.

    Args:
        x: Column coordinate or width in pixels.
        y: Row coordinate or height in pixels.
    """
    x: int
    y: int

    @property
    def area(self) -> int:
        """Number of pixels covered when the point is read as a size."""
        return self.x * self.y

    def as_tuple(self) -> Tuple[int, int]:
        return (self.x, self.y)

    def __iter__(self) -> Iterator[int]:
        # Allows `width, height = point`
        yield self.x
        yield self.y

    def __repr__(self) -> str:
        return f"Point({self.x}, {self.y})"

def to_point(value: Union[Point, Tuple[int, int]]) -> Point:
    """
    Normalize a Point or an (x, y) pair into a Point.

    Raises:
        TypeError: If the value is neither a Point nor a pair of integers.
    """
    if isinstance(value, Point):
        return value

    try:
        x, y = value
    except (TypeError, ValueError):
        raise TypeError(f"Expected Point or (x, y) pair, got {value!r}")

    if not all(isinstance(v, Integral) and not isinstance(v, bool) for v in (x, y)):
        raise TypeError(f"Point coordinates must be integers, got {value!r}")

    return Point(int(x), int(y))
