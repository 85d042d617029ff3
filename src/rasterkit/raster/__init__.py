# src/rasterkit/raster/__init__.py
#
# Copyright (c) The rasterkit project contributors
# This software is distributed under the Apache-2.0 license.
# See the NOTICE file for more information

"""
The raster subpackage provides the dataset and driver lifecycle model,
windowed I/O with nearest-neighbour resampling, buffer types and
resource checks.
"""
# Core data structures
from .buffer import (
    ByteBuffer
)

from .driver import (
    Driver,
    IN_MEMORY_DRIVERS
)

from .dataset import (
    Dataset
)

# Resampling
from .resample import (
    nearest_indices,
    resample_nearest
)

# Resource management
from .resources import (
    MemoryEstimate,
    estimate_buffer_memory,
    ensure_memory_available
)

# Shared utilities
from .utils import (
    resolve_envi_path,
    memory_path
)

__all__ = [
    # Buffer
    "ByteBuffer",

    # Registry
    "Driver",
    "IN_MEMORY_DRIVERS",

    # Dataset
    "Dataset",

    # Resampling
    "nearest_indices",
    "resample_nearest",

    # Resources
    "MemoryEstimate",
    "estimate_buffer_memory",
    "ensure_memory_available",

    # Utils
    "resolve_envi_path",
    "memory_path"
]
