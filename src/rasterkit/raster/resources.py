# src/rasterkit/raster/resources.py

"""
This module checks host memory before raster buffers are allocated.

Windowed reads allocate two arrays: the window at native resolution and the
resampled buffer. The estimate below covers both so that oversized requests
fail with a MemoryError instead of exhausting the host.
"""

import logging
from dataclasses import dataclass

import psutil

from rasterkit.geom import Point

log = logging.getLogger(__name__)

__all__ = [
    "MemoryEstimate",
    "estimate_buffer_memory",
    "ensure_memory_available"
]

DEFAULT_SAFETY_FACTOR = 3.0
BYTES_PER_SAMPLE = 1

@dataclass(frozen=True)
class MemoryEstimate:
    """Estimation of memory requirements and safety for a buffer allocation.

    Args:
        total_required_bytes: Bytes required for the allocation (with overhead)
        available_system_bytes: Currently available system memory in bytes
        is_safe: Boolean indicating if the allocation is considered safe
        reason: Explanation for the safety assessment (e.g. "Req: 0.01GB, Avail: 7.80GB")
    """
    total_required_bytes: int
    available_system_bytes: int
    is_safe: bool
    reason: str

def estimate_buffer_memory(
    *sizes: Point,
    safety_factor: float = DEFAULT_SAFETY_FACTOR,
    min_free_gb: float = 0.0
) -> MemoryEstimate:
    """
    Checks if 8-bit buffers of the given sizes fit in RAM.

    Args:
        *sizes: One Point per buffer that will be alive at the same time.
        safety_factor: Multiplier to account for overhead (default 3.0)
        min_free_gb: Minimum free GB to leave available after allocating

    Returns:
        MemoryEstimate: Contains total required bytes, available bytes, safety boolean, and reason.
    """
    raw_bytes = sum(max(size.area, 0) for size in sizes) * BYTES_PER_SAMPLE
    total_required = int(raw_bytes * safety_factor)

    mem = psutil.virtual_memory()
    min_free_bytes = int(min_free_gb * (1024**3))
    is_safe = (total_required + min_free_bytes) <= mem.available

    reason = f"Req: {total_required/1e9:.2f}GB, Avail: {mem.available/1e9:.2f}GB"

    return MemoryEstimate(total_required, mem.available, is_safe, reason)

def ensure_memory_available(
    *sizes: Point,
    safety_factor: float = DEFAULT_SAFETY_FACTOR,
    min_free_gb: float = 0.0
) -> MemoryEstimate:
    """
    Raise MemoryError when estimate_buffer_memory reports an unsafe allocation.

    Returns:
        MemoryEstimate: The estimate, when the allocation is safe.
    """
    estimate = estimate_buffer_memory(*sizes, safety_factor=safety_factor, min_free_gb=min_free_gb)
    if not estimate.is_safe:
        log.error(f"Refusing buffer allocation: {estimate.reason}")
        raise MemoryError(
            f"Insufficient memory for raster buffer. {estimate.reason}\n"
            "Tip: request a smaller buffer_size or read the window in parts."
        )
    log.debug(f"Memory check passed. {estimate.reason}")
    return estimate
