# src/rasterkit/raster/driver.py

"""
This module exposes the GDAL driver registry.

Drivers are process-wide singletons owned by GDAL. A Driver here is a borrowed
reference identified by its short name; nothing in this module ever releases
or mutates a driver.
"""

import logging
from numbers import Integral
from pathlib import Path
from typing import TYPE_CHECKING, Dict, List, Optional, Union

import rasterio
from rasterio.drivers import is_blacklisted
from rasterio.io import get_writer_for_driver

from rasterkit.config import IOConfig, get_default_config
from rasterkit.exceptions import ENGINE_ERRORS
from .utils import engine_env, memory_path

if TYPE_CHECKING:
    from .dataset import Dataset

log = logging.getLogger(__name__)

__all__ = [
    "Driver",
    "IN_MEMORY_DRIVERS"
]

# Drivers that allocate datasets in memory when given an empty path
IN_MEMORY_DRIVERS = frozenset({"MEM"})

DEFAULT_DTYPE = "uint8"

def _registered_drivers(config: Optional[IOConfig] = None) -> Dict[str, str]:
    """Mapping of short name to long name for every driver GDAL has registered."""
    config = config or get_default_config()
    with engine_env(config.gdal_options) as env:
        return dict(env.drivers())

class Driver:
    """
    A raster format driver, such as "GTiff", "PNG" or "MEM".

    Two Driver values with the same short name refer to the same GDAL driver
    and compare equal.
    """

    def __init__(self, short_name: str, long_name: str):
        self._short_name = short_name
        self._long_name = long_name

    @classmethod
    def get(cls, short_name: str, config: Optional[IOConfig] = None) -> Optional['Driver']:
        """
        Look up a driver by its short name.

        Matching is exact and case-sensitive ("GTiff" resolves, "gtiff" does not).

        Args:
            short_name: Driver code as registered by GDAL.
            config: Optional IOConfig providing GDAL options.

        Returns:
            Driver or None: None when no driver is registered under that name.
        """
        drivers = _registered_drivers(config)
        long_name = drivers.get(short_name)

        if long_name is None:
            log.debug(f"No driver registered under '{short_name}'")
            return None

        return cls(short_name, long_name)

    @classmethod
    def available(cls, config: Optional[IOConfig] = None) -> List['Driver']:
        """Every registered driver, sorted by short name."""
        drivers = _registered_drivers(config)
        return [cls(short, long) for short, long in sorted(drivers.items())]

    def short_name(self) -> str:
        return self._short_name

    def long_name(self) -> str:
        return self._long_name

    @property
    def can_create(self) -> bool:
        """True if GDAL can allocate new datasets through this driver."""
        if is_blacklisted(self._short_name, "w"):
            return False
        try:
            return get_writer_for_driver(self._short_name) is not None
        except ENGINE_ERRORS as e:
            log.debug(f"Capability query failed for {self._short_name}: {e}")
            return False

    @property
    def supports_in_memory(self) -> bool:
        return self._short_name in IN_MEMORY_DRIVERS

    def create(
        self,
        path: Union[str, Path],
        width: int,
        height: int,
        band_count: int,
        dtype: str = DEFAULT_DTYPE,
        config: Optional[IOConfig] = None
    ) -> Optional['Dataset']:
        """
        Allocate a new raster dataset through this driver.

        Args:
            path: Output path. An empty path allocates the dataset in memory,
                  which only in-memory drivers ("MEM") support.
            width: Raster width in pixels (> 0).
            height: Raster height in pixels (> 0).
            band_count: Number of bands (> 0).
            dtype: Sample type. Windowed I/O always transfers 8-bit samples.
            config: Optional IOConfig attached to the new dataset.

        Returns:
            Dataset or None: None if the dimensions are invalid, the driver
            cannot create datasets, or the engine refuses the path.
        """
        from .dataset import Dataset

        config = config or get_default_config()

        for label, value in (("width", width), ("height", height), ("band_count", band_count)):
            if isinstance(value, bool) or not isinstance(value, Integral) or value <= 0:
                log.warning(f"Cannot create {self._short_name} dataset: invalid {label} {value!r}")
                return None

        # Sizes often arrive as numpy integers taken from array shapes
        width, height, band_count = int(width), int(height), int(band_count)

        if not str(path):
            if not self.supports_in_memory:
                log.warning(
                    f"Driver {self._short_name} cannot allocate in memory; "
                    f"an output path is required"
                )
                return None
            target = memory_path(self._short_name.lower())
        else:
            target = Path(path)

        log.debug(f"Creating {self._short_name} dataset {width}x{height}x{band_count} at {target}")

        try:
            if isinstance(target, Path):
                target.parent.mkdir(parents=True, exist_ok=True)
            with engine_env(config.gdal_options):
                handle = rasterio.open(
                    target,
                    'w+',
                    driver=self._short_name,
                    width=width,
                    height=height,
                    count=band_count,
                    dtype=dtype
                )
        except (*ENGINE_ERRORS, OSError, ValueError) as e:
            log.warning(f"Driver {self._short_name} refused to create {target}: {e}")
            return None

        log.info(f"Created {self._short_name} dataset ({width}x{height}, {band_count} bands)")
        return Dataset(handle, config=config, path=str(path) or None)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Driver):
            return NotImplemented
        return self._short_name == other._short_name

    def __hash__(self) -> int:
        return hash(self._short_name)

    def __repr__(self) -> str:
        return f"<Driver {self._short_name} ({self._long_name})>"
