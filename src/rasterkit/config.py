# src/rasterkit/config.py

"""
This module holds the runtime configuration shared by drivers and datasets.
"""

import logging
import os
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)

__all__ = [
    "IOConfig",
    "get_default_config",
    "set_default_config"
]

DEFAULT_SAFETY_FACTOR = 3.0
MIN_FREE_GB = 0.0

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off"}

def _env_flag(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default

    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"Invalid boolean for {name}: '{raw}'")

def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return float(raw)
    except ValueError:
        raise ValueError(f"Invalid number for {name}: '{raw}'")

class IOConfig:
    """Configuration object for raster I/O.

    Args:
        strict_windows: Validate bands, windows and buffer sizes before calling
            the engine. When disabled, violations surface as engine errors.
        check_memory: Estimate host memory before allocating read buffers.
        safety_factor: Overhead multiplier applied to buffer sizes. Default=3.0.
        min_free_gb: Memory (GB) that must stay free after an allocation. Default=0.
        gdal_options: GDAL configuration options applied around every engine call
            (e.g. {'GDAL_PAM_ENABLED': False}).
    """
    def __init__(
        self,
        strict_windows: bool = True,
        check_memory: bool = True,
        safety_factor: float = DEFAULT_SAFETY_FACTOR,
        min_free_gb: float = MIN_FREE_GB,
        gdal_options: Optional[Dict[str, Any]] = None
    ):
        if safety_factor < 1.0:
            raise ValueError(f"safety_factor must be >= 1.0, got {safety_factor}")
        if min_free_gb < 0:
            raise ValueError(f"min_free_gb must be >= 0, got {min_free_gb}")

        self.strict_windows = strict_windows
        self.check_memory = check_memory
        self.safety_factor = safety_factor
        self.min_free_gb = min_free_gb
        self.gdal_options = dict(gdal_options or {})

    @classmethod
    def from_env(cls, gdal_options: Optional[Dict[str, Any]] = None) -> 'IOConfig':
        """
        Build a configuration from RASTERKIT_* environment variables.

        Recognized variables:
            RASTERKIT_STRICT_WINDOWS: boolean (1/0, true/false, yes/no, on/off)
            RASTERKIT_CHECK_MEMORY: boolean
            RASTERKIT_SAFETY_FACTOR: float
            RASTERKIT_MIN_FREE_GB: float

        Unset variables keep their defaults.
        """
        return cls(
            strict_windows=_env_flag("RASTERKIT_STRICT_WINDOWS", True),
            check_memory=_env_flag("RASTERKIT_CHECK_MEMORY", True),
            safety_factor=_env_float("RASTERKIT_SAFETY_FACTOR", DEFAULT_SAFETY_FACTOR),
            min_free_gb=_env_float("RASTERKIT_MIN_FREE_GB", MIN_FREE_GB),
            gdal_options=gdal_options
        )

    def __repr__(self) -> str:
        return (f"<IOConfig strict_windows={self.strict_windows} "
                f"check_memory={self.check_memory} safety_factor={self.safety_factor} "
                f"min_free_gb={self.min_free_gb} gdal_options={self.gdal_options}>")

_default_config: Optional[IOConfig] = None

def get_default_config() -> IOConfig:
    """Return the process-wide default, creating it from the environment on first use."""
    global _default_config
    if _default_config is None:
        _default_config = IOConfig.from_env()
        log.debug(f"Initialized default configuration: {_default_config}")
    return _default_config

def set_default_config(config: Optional[IOConfig]) -> None:
    """Replace the process-wide default. Passing None resets it to the environment."""
    global _default_config
    _default_config = config
