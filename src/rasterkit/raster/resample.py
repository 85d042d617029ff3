# src/rasterkit/raster/resample.py

"""
Nearest-neighbour index mapping shared by windowed reads and writes.

Destination index d maps to source index floor(d * src_len / dst_len). The
mapping is computed here rather than delegated to the engine so that reads
and writes stretch and shrink identically regardless of the GDAL version.
"""

import numpy as np

from rasterkit.geom import Point
from rasterkit.exceptions import RasterValidationError

__all__ = [
    "nearest_indices",
    "resample_nearest"
]

def nearest_indices(src_len: int, dst_len: int) -> np.ndarray:
    """
    Source index for every destination index along one axis.

    Args:
        src_len: Number of source samples (> 0).
        dst_len: Number of destination samples (> 0).

    Returns:
        np.ndarray: int64 array of length dst_len with values in [0, src_len).
    """
    if src_len <= 0 or dst_len <= 0:
        raise RasterValidationError(
            f"Axis lengths must be positive, got src={src_len}, dst={dst_len}"
        )
    # Integer arithmetic keeps the floor exact for large extents
    return (np.arange(dst_len, dtype=np.int64) * src_len) // dst_len

def resample_nearest(array: np.ndarray, out_size: Point) -> np.ndarray:
    """
    Resample a 2D (rows, cols) array to out_size using nearest-neighbour.

    Args:
        array: Source samples.
        out_size: Target size (x = columns, y = rows).

    Returns:
        np.ndarray: New array of shape (out_size.y, out_size.x).
    """
    if array.ndim != 2:
        raise RasterValidationError(f"Expected a 2D array, got shape {array.shape}")

    rows, cols = array.shape
    if (cols, rows) == (out_size.x, out_size.y):
        return array.copy()

    row_idx = nearest_indices(rows, out_size.y)
    col_idx = nearest_indices(cols, out_size.x)
    return array[np.ix_(row_idx, col_idx)]
