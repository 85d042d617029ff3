# src/rasterkit/exceptions.py

"""
Exception hierarchy for rasterkit.

Expected absence (missing file, unknown driver, refused creation) is never
signalled with these classes; those operations return None. The classes below
cover caller-contract violations, engine failures during I/O and access to
released datasets.
"""

from rasterio.errors import RasterioError
# GDAL errors raised through rasterio.shutil.copy and the dataset property
# setters are CPLE_* exceptions, which do not derive from RasterioError and
# have no public base class in rasterio.errors.
from rasterio._err import CPLE_BaseError

__all__ = [
    "RasterError",
    "RasterIOError",
    "RasterValidationError",
    "DatasetClosedError",
    "ENGINE_ERRORS"
]

class RasterError(Exception):
    """Base class for all rasterkit errors. Also raised on broken invariants."""

class RasterIOError(RasterError, IOError):
    """The raster engine failed while reading or writing pixels or metadata."""

class RasterValidationError(RasterError, ValueError):
    """Arguments violate the contract of the operation (bad band, window or buffer)."""

class DatasetClosedError(RasterError):
    """The dataset handle was already released."""

# Exceptions the engine raises when it refuses an operation
ENGINE_ERRORS = (RasterioError, CPLE_BaseError)
