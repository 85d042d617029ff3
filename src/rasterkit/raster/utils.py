# src/rasterkit/raster/utils.py

"""
This module provides shared path and engine-environment helpers for raster operations.
"""
import logging
import uuid
from pathlib import Path
from typing import Any, Dict, Optional, Union

import rasterio

log = logging.getLogger(__name__)

__all__ = [
    "resolve_envi_path",
    "memory_path",
    "engine_env"
]

VSIMEM_PREFIX = "/vsimem/"

def resolve_envi_path(path: Union[str, Path]) -> Path:
    """
    Resolve ENVI header/binary file confusion.
    If 'image.hdr' is passed, redirects to 'image' (binary).
    """
    path = Path(path)
    if path.suffix.lower() == '.hdr':
        binary_path = path.with_suffix('')
        if binary_path.exists():
            log.debug(f"Redirecting {path.name} to binary file {binary_path.name}")
            return binary_path
    return path

def memory_path(prefix: str = "rasterkit") -> str:
    """
    Unique GDAL virtual path for in-memory datasets.

    The MEM driver ignores the name, but rasterio requires one to open a dataset.
    """
    return f"{VSIMEM_PREFIX}{prefix}-{uuid.uuid4().hex}"

def engine_env(gdal_options: Optional[Dict[str, Any]] = None) -> rasterio.Env:
    """GDAL environment wrapping a single engine call."""
    return rasterio.Env(**(gdal_options or {}))
