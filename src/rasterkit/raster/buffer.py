# src/rasterkit/raster/buffer.py

"""
This module defines the ByteBuffer, the unit of data exchanged by windowed reads and writes.
"""

import logging
from typing import Sequence, Tuple, Union

import numpy as np

from rasterkit.geom import Point, to_point
from rasterkit.exceptions import RasterValidationError

log = logging.getLogger(__name__)

__all__ = ["ByteBuffer"]

class ByteBuffer:
    """
    A rectangular grid of unsigned 8-bit samples and its declared size.

    Samples are stored row-major in a flat uint8 array, so the pixel at (x, y)
    lives at index `y * size.x + x`.

    Attributes:
        size (Point): Width (x) and height (y) of the grid.
        data (np.ndarray): Flat uint8 array of length size.x * size.y.
    """

    def __init__(
        self,
        size: Union[Point, Tuple[int, int]],
        data: Union[np.ndarray, Sequence[int], bytes]
    ):
        """
        Initialize a ByteBuffer.

        Args:
            size: Point or (width, height) pair. Both must be non-negative.
            data: Samples in row-major order. Any integer sequence or bytes
                  object is accepted and copied into a uint8 array.

        Raises:
            RasterValidationError: If the length does not match the size or a
                sample falls outside 0..255.
        """
        size = to_point(size)
        if size.x < 0 or size.y < 0:
            raise RasterValidationError(f"Buffer size must be non-negative, got {size}")

        self.size = size
        self.data = self._coerce(data)

        if self.data.size != size.area:
            raise RasterValidationError(
                f"Buffer data length ({self.data.size}) does not match "
                f"size {size.x}x{size.y} ({size.area})"
            )

    @staticmethod
    def _coerce(data) -> np.ndarray:
        if isinstance(data, (bytes, bytearray, memoryview)):
            return np.frombuffer(bytes(data), dtype=np.uint8).copy()

        arr = np.asarray(data)
        if arr.dtype == np.uint8:
            return arr.reshape(-1).copy()

        if arr.size and not np.issubdtype(arr.dtype, np.integer):
            raise RasterValidationError(f"Buffer samples must be integers, got dtype {arr.dtype}")

        if arr.size and (arr.min() < 0 or arr.max() > 255):
            raise RasterValidationError(
                f"Buffer samples must lie in 0..255, got range {arr.min()}..{arr.max()}"
            )
        return arr.astype(np.uint8).reshape(-1)

    @classmethod
    def from_array(cls, array: np.ndarray) -> 'ByteBuffer':
        """
        Build a buffer from a 2D (rows, cols) array.

        Raises:
            RasterValidationError: If the array is not 2D.
        """
        array = np.asarray(array)
        if array.ndim != 2:
            raise RasterValidationError(f"Expected a 2D array, got shape {array.shape}")
        rows, cols = array.shape
        return cls(Point(cols, rows), array)

    @classmethod
    def filled(cls, size: Union[Point, Tuple[int, int]], value: int = 0) -> 'ByteBuffer':
        """Build a buffer of the given size with every sample set to value."""
        size = to_point(size)
        if not 0 <= value <= 255:
            raise RasterValidationError(f"Fill value must lie in 0..255, got {value}")
        return cls(size, np.full(size.area, value, dtype=np.uint8))

    def to_array(self) -> np.ndarray:
        """Returns a (height, width) view of the samples."""
        return self.data.reshape(self.size.y, self.size.x)

    def pixel(self, x: int, y: int) -> int:
        """Returns the sample at column x, row y."""
        if not (0 <= x < self.size.x and 0 <= y < self.size.y):
            raise IndexError(f"Pixel ({x}, {y}) outside buffer of size {self.size}")
        return int(self.data[y * self.size.x + x])

    def __len__(self) -> int:
        return int(self.data.size)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ByteBuffer):
            return NotImplemented
        return self.size == other.size and np.array_equal(self.data, other.data)

    def __repr__(self) -> str:
        return f"<ByteBuffer size={self.size.x}x{self.size.y}>"
