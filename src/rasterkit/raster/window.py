# src/rasterkit/raster/window.py

"""
Argument checks run before windowed I/O reaches the engine.

GDAL does not guard against out-of-range bands or windows, so every check here
turns a would-be engine fault into a RasterValidationError.
"""

import logging
from typing import Tuple

from rasterio.windows import Window

from rasterkit.geom import Point
from rasterkit.exceptions import RasterValidationError

log = logging.getLogger(__name__)

__all__ = [
    "validate_band",
    "validate_window",
    "validate_size",
    "to_window"
]

def validate_band(band: int, count: int) -> None:
    """Bands are 1-indexed."""
    if isinstance(band, bool) or not isinstance(band, int):
        raise RasterValidationError(f"Band index must be an integer, got {band!r}")
    if not 1 <= band <= count:
        raise RasterValidationError(f"Band index {band} out of range (1-{count})")

def validate_size(size: Point, label: str) -> None:
    if size.x <= 0 or size.y <= 0:
        raise RasterValidationError(f"{label} must be positive, got {size.x}x{size.y}")

def validate_window(origin: Point, size: Point, raster_size: Tuple[int, int]) -> None:
    """
    Ensure the window lies entirely inside the raster.

    Args:
        origin: Top-left pixel of the window.
        size: Window extent in pixels.
        raster_size: (width, height) of the dataset.
    """
    validate_size(size, "Window size")

    width, height = raster_size
    if origin.x < 0 or origin.y < 0:
        raise RasterValidationError(f"Window origin must be non-negative, got {origin}")

    if origin.x + size.x > width or origin.y + size.y > height:
        raise RasterValidationError(
            f"Window at {origin} of size {size.x}x{size.y} exceeds "
            f"raster bounds {width}x{height}"
        )

def to_window(origin: Point, size: Point) -> Window:
    """Convert an origin/size pair to a rasterio Window."""
    return Window(col_off=origin.x, row_off=origin.y, width=size.x, height=size.y)
