# src/rasterkit/raster/dataset.py

"""
This module defines the Dataset, the owner of an open raster handle.

A Dataset holds exactly one rasterio dataset and releases it exactly once,
on close(), at the end of a `with` block or when garbage collected. All
metadata queries and windowed I/O go through it; the handle itself is never
handed out.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple, Union

import numpy as np
import rasterio
import rasterio.shutil
from rasterio.crs import CRS
from rasterio.errors import CRSError
from rasterio.transform import Affine

from rasterkit.geom import Point, to_point
from rasterkit.config import IOConfig, get_default_config
from rasterkit.exceptions import (
    ENGINE_ERRORS,
    RasterError,
    RasterIOError,
    RasterValidationError,
    DatasetClosedError
)
from .buffer import ByteBuffer
from .driver import Driver
from .resample import resample_nearest
from .resources import ensure_memory_available
from .utils import engine_env, resolve_envi_path
from .window import to_window, validate_band, validate_size, validate_window

log = logging.getLogger(__name__)

__all__ = ["Dataset"]

GEO_TRANSFORM_LENGTH = 6

PointLike = Union[Point, Tuple[int, int]]

def _engine_path(path: Union[str, Path]) -> Union[str, Path]:
    # GDAL virtual file systems (/vsimem/, /vsizip/, ...) must not go through Path
    if str(path).startswith("/vsi"):
        return str(path)
    return resolve_envi_path(path)

class Dataset:
    """
    An open raster dataset.

    Instances come from Dataset.open(), Driver.create() or
    Dataset.create_copy(); the constructor is not meant to be called directly.

    Usage:
        with Dataset.open("image.tif") as ds:
            width, height = ds.size()
            buf = ds.read_raster(1, Point(0, 0), Point(width, height), Point(64, 64))
    """

    def __init__(
        self,
        handle: Any,
        config: Optional[IOConfig] = None,
        path: Optional[str] = None
    ):
        self._handle = handle
        self._config = config or get_default_config()
        self._path = path

    # Lifecycle

    @classmethod
    def open(
        cls,
        path: Union[str, Path],
        update: bool = False,
        config: Optional[IOConfig] = None
    ) -> Optional['Dataset']:
        """
        Open an existing raster.

        Args:
            path: Path to the raster file. All GDAL formats are accepted.
                  ENVI '.hdr' paths are redirected to their binary file.
            update: Request read/write access. Formats that cannot be updated
                    in place are opened read-only instead.
            config: Optional IOConfig for this dataset.

        Returns:
            Dataset or None: None if the path does not exist or is not a
            recognized raster.
        """
        config = config or get_default_config()
        target = _engine_path(path)

        try:
            with engine_env(config.gdal_options):
                if update:
                    handle = cls._open_for_update(target)
                else:
                    handle = rasterio.open(target, 'r')
        except (*ENGINE_ERRORS, OSError) as e:
            log.debug(f"Could not open raster {path}: {e}")
            return None

        log.debug(f"Opened {handle.driver} raster {target} in mode '{handle.mode}'")
        return cls(handle, config=config, path=str(target))

    @staticmethod
    def _open_for_update(target: Union[str, Path]) -> Any:
        try:
            return rasterio.open(target, 'r+')
        except ENGINE_ERRORS as e:
            log.info(f"Update access refused for {target}, opening read-only: {e}")
            return rasterio.open(target, 'r')

    def create_copy(
        self,
        target_driver: Driver,
        path: Union[str, Path]
    ) -> Optional['Dataset']:
        """
        Duplicate this dataset into a new dataset of another format.

        Size, band count, sample type, pixels, geo-transform and projection
        are all carried over.

        Args:
            target_driver: Driver of the new dataset.
            path: Output path. Empty allocates the copy in memory, which
                  requires an in-memory driver ("MEM").

        Returns:
            Dataset or None: None if the driver cannot produce the copy.
        """
        handle = self._live_handle()

        if not isinstance(target_driver, Driver):
            raise TypeError(f"target_driver must be a Driver, got {type(target_driver).__name__}")

        if not str(path):
            return self._copy_in_memory(handle, target_driver)

        target = Path(path)
        log.info(f"Copying {handle.driver} dataset → {target_driver.short_name()} {target}")

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with engine_env(self._config.gdal_options):
                rasterio.shutil.copy(handle, target, driver=target_driver.short_name())
        except (*ENGINE_ERRORS, OSError, ValueError) as e:
            log.warning(f"Driver {target_driver.short_name()} refused to copy into {target}: {e}")
            return None

        return Dataset.open(target, config=self._config)

    def _copy_in_memory(self, handle: Any, target_driver: Driver) -> Optional['Dataset']:
        """Helper: band-for-band copy into a freshly created in-memory dataset."""
        width, height = handle.width, handle.height

        if self._config.check_memory:
            ensure_memory_available(
                *([Point(width, height)] * handle.count),
                safety_factor=self._config.safety_factor,
                min_free_gb=self._config.min_free_gb
            )

        copy = target_driver.create(
            "", width, height, handle.count,
            dtype=handle.dtypes[0],
            config=self._config
        )
        if copy is None:
            return None

        log.info(f"Copying {handle.driver} dataset → {target_driver.short_name()} (in memory)")
        dst = copy._live_handle()

        try:
            with engine_env(self._config.gdal_options):
                dst.write(handle.read())
                dst.transform = handle.transform
                if handle.crs is not None:
                    dst.crs = handle.crs
                if handle.nodata is not None:
                    dst.nodata = handle.nodata
        except ENGINE_ERRORS as e:
            copy.close()
            log.error(f"In-memory copy failed: {e}")
            raise RasterIOError(f"Failed to copy pixels into {target_driver.short_name()}: {e}") from e

        return copy

    def close(self) -> None:
        """
        Release the underlying handle. Safe to call more than once.

        For formats written through a temporary buffer (e.g. PNG), this is
        when the file is flushed to disk.
        """
        handle, self._handle = self._handle, None
        if handle is None:
            return

        log.debug(f"Releasing dataset {self._path or '<memory>'}")
        try:
            handle.close()
        except ENGINE_ERRORS as e:
            raise RasterIOError(f"Failed to close dataset {self._path}: {e}") from e

    @property
    def closed(self) -> bool:
        return self._handle is None

    def _live_handle(self) -> Any:
        if self._handle is None:
            raise DatasetClosedError(f"Dataset {self._path or '<memory>'} has been closed")
        return self._handle

    def __enter__(self) -> 'Dataset':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __del__(self):
        if getattr(self, "_handle", None) is None:
            return
        try:
            self.close()
        except RasterIOError as e:
            log.warning(f"Dataset released during garbage collection failed to close: {e}")

    # Metadata

    @property
    def path(self) -> Optional[str]:
        """Path the dataset was opened from or created at; None for in-memory datasets."""
        return self._path

    @property
    def writable(self) -> bool:
        return self._live_handle().mode != 'r'

    def size(self) -> Tuple[int, int]:
        """Returns (width, height) in pixels."""
        handle = self._live_handle()
        return (handle.width, handle.height)

    def count(self) -> int:
        """Returns the number of bands."""
        return self._live_handle().count

    def projection(self) -> str:
        """Returns the coordinate reference system as WKT, or an empty string if none is set."""
        crs = self._live_handle().crs
        if not crs:
            return ""
        return crs.to_wkt()

    def set_projection(self, projection: str) -> None:
        """
        Set the coordinate reference system.

        Args:
            projection: Any descriptor the engine understands (WKT, "EPSG:4326", PROJ string).
        """
        handle = self._require_writable("set projection")

        if not projection:
            raise RasterValidationError("Projection descriptor must not be empty")

        try:
            crs = CRS.from_user_input(projection)
        except CRSError as e:
            raise RasterValidationError(f"Unrecognized projection '{projection}': {e}") from e

        try:
            with engine_env(self._config.gdal_options):
                handle.crs = crs
        except ENGINE_ERRORS as e:
            raise RasterIOError(f"Failed to set projection: {e}") from e

    def geo_transform(self) -> List[float]:
        """
        Returns the affine pixel-to-world coefficients in GDAL order:
        [origin_x, pixel_width, row_rotation, origin_y, column_rotation, pixel_height]
        """
        return [float(c) for c in self._live_handle().transform.to_gdal()]

    def set_geo_transform(self, coeffs: Sequence[float]) -> None:
        """
        Set the affine pixel-to-world coefficients (GDAL order, see geo_transform).

        Coefficient values are not validated; only the count is.
        """
        handle = self._require_writable("set geo-transform")

        coeffs = [float(c) for c in coeffs]
        if len(coeffs) != GEO_TRANSFORM_LENGTH:
            raise RasterValidationError(
                f"Geo-transform requires {GEO_TRANSFORM_LENGTH} coefficients, got {len(coeffs)}"
            )

        try:
            with engine_env(self._config.gdal_options):
                handle.transform = Affine.from_gdal(*coeffs)
        except ENGINE_ERRORS as e:
            raise RasterIOError(f"Failed to set geo-transform: {e}") from e

    def driver(self) -> Driver:
        """
        Returns the driver that opened or produced this dataset.

        Raises:
            RasterError: If the engine reports a driver that is not registered,
                which cannot happen for a validly opened dataset.
        """
        short_name = self._live_handle().driver
        driver = Driver.get(short_name, config=self._config)
        if driver is None:
            raise RasterError(f"Dataset reports unregistered driver '{short_name}'")
        return driver

    def info(self) -> Dict[str, Any]:
        """Summary of the dataset metadata in a single dictionary."""
        handle = self._live_handle()
        return {
            'path': self._path,
            'driver': handle.driver,
            'width': handle.width,
            'height': handle.height,
            'count': handle.count,
            'dtypes': list(handle.dtypes),
            'projection': self.projection(),
            'geo_transform': self.geo_transform(),
            'writable': self.writable
        }

    # Windowed I/O

    def read_raster(
        self,
        band: int,
        window_origin: PointLike,
        window_size: PointLike,
        buffer_size: PointLike
    ) -> ByteBuffer:
        """
        Read a pixel window from one band, resampled into a new buffer.

        The window is read at native resolution and mapped onto buffer_size
        with nearest-neighbour resampling: buffer pixel (x, y) takes the window
        pixel (floor(x * window_w / buffer_w), floor(y * window_h / buffer_h)).

        Args:
            band: 1-based band index.
            window_origin: Top-left pixel of the window in the dataset.
            window_size: Window extent in dataset pixels.
            buffer_size: Extent of the returned buffer.

        Returns:
            ByteBuffer: Buffer whose size equals buffer_size.

        Raises:
            RasterValidationError: If the band, window or buffer size is invalid.
            RasterIOError: If the engine fails to read.
            MemoryError: If the buffers would not fit in memory.
        """
        handle = self._live_handle()
        origin = to_point(window_origin)
        wsize = to_point(window_size)
        bsize = to_point(buffer_size)

        if self._config.strict_windows:
            validate_band(band, handle.count)
            validate_window(origin, wsize, (handle.width, handle.height))
            validate_size(bsize, "Buffer size")

        if self._config.check_memory:
            ensure_memory_available(
                wsize, bsize,
                safety_factor=self._config.safety_factor,
                min_free_gb=self._config.min_free_gb
            )

        try:
            with engine_env(self._config.gdal_options):
                window_data = handle.read(band, window=to_window(origin, wsize), out_dtype=np.uint8)
        except ENGINE_ERRORS as e:
            log.error(f"Read of band {band} at {origin} ({wsize.x}x{wsize.y}) failed: {e}")
            raise RasterIOError(f"Failed to read band {band} from {self._path}: {e}") from e

        return ByteBuffer(bsize, resample_nearest(window_data, bsize))

    def write_raster(
        self,
        band: int,
        window_origin: PointLike,
        window_size: PointLike,
        source: ByteBuffer
    ) -> None:
        """
        Write a buffer into a pixel window of one band.

        The buffer is stretched or shrunk to window_size with nearest-neighbour
        resampling: window pixel (x, y) takes the buffer pixel
        (floor(x * buffer_w / window_w), floor(y * buffer_h / window_h)).
        A 2x1 buffer written to a 20x10 window fills the left half with the
        first sample and the right half with the second.

        Args:
            band: 1-based band index.
            window_origin: Top-left pixel of the window in the dataset.
            window_size: Window extent in dataset pixels.
            source: Samples to write.

        Raises:
            RasterValidationError: If the band, window or buffer is invalid.
            RasterIOError: If the dataset is read-only or the engine fails to write.
        """
        handle = self._require_writable("write raster")

        if not isinstance(source, ByteBuffer):
            raise TypeError(f"source must be a ByteBuffer, got {type(source).__name__}")

        origin = to_point(window_origin)
        wsize = to_point(window_size)

        if self._config.strict_windows:
            validate_band(band, handle.count)
            validate_window(origin, wsize, (handle.width, handle.height))
            validate_size(source.size, "Source buffer size")

        data = resample_nearest(source.to_array(), wsize)

        try:
            with engine_env(self._config.gdal_options):
                handle.write(data, band, window=to_window(origin, wsize))
        except ENGINE_ERRORS as e:
            log.error(f"Write of band {band} at {origin} ({wsize.x}x{wsize.y}) failed: {e}")
            raise RasterIOError(f"Failed to write band {band} to {self._path}: {e}") from e

    def _require_writable(self, action: str) -> Any:
        handle = self._live_handle()
        if handle.mode == 'r':
            raise RasterIOError(f"Cannot {action}: dataset {self._path} is open read-only")
        return handle

    def __repr__(self) -> str:
        if self._handle is None:
            return f"<Dataset {self._path or '<memory>'} closed>"
        h = self._handle
        return (f"<Dataset {self._path or '<memory>'} driver={h.driver} "
                f"size={h.width}x{h.height} count={h.count}>")
