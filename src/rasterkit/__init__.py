# src/rasterkit/__init__.py
#
# Copyright (c) The rasterkit project contributors
# This software is distributed under the Apache-2.0 license.
# See the NOTICE file for more information

"""
rasterkit is a typed access layer over raster imagery.

It opens raster files, exposes their geometry and metadata, and reads or
writes single-band pixel windows with nearest-neighbour resampling between
the window and the caller's buffer.
"""
from .geom import Point

from .config import (
    IOConfig,
    get_default_config,
    set_default_config
)

from .exceptions import (
    RasterError,
    RasterIOError,
    RasterValidationError,
    DatasetClosedError
)

from .raster import (
    ByteBuffer,
    Driver,
    Dataset
)

__all__ = [
    "Point",

    # Config
    "IOConfig",
    "get_default_config",
    "set_default_config",

    # Errors
    "RasterError",
    "RasterIOError",
    "RasterValidationError",
    "DatasetClosedError",

    # Raster
    "ByteBuffer",
    "Driver",
    "Dataset"
]
