"""Environment-driven runtime configuration for ndkit."""

from __future__ import annotations

import logging
import os
from typing import Final

import jax

_LOGGER = logging.getLogger(__name__)

EPSILON: Final[float] = float(os.environ.get("NDKIT_EPSILON", "1e-10"))
"""Default tolerance for every equality/zero test."""

USE_VECTORIZED_FAST_PATH: Final[bool] = os.environ.get("NDKIT_DISABLE_VECTORIZED_FAST_PATH", "0") != "1"
KERNEL_CACHE_MAX: Final[int] = max(1, int(os.environ.get("NDKIT_KERNEL_CACHE_MAX", "64")))


def x64_enabled() -> bool:
    """Whether the host process runs jax with 64-bit types.

    The setting belongs to the host; ndkit reads it on every call and never
    changes it. Without it, jax kernels would compute ``f64`` cells at
    float32, so the vectorised paths step aside.
    """
    return bool(jax.config.jax_enable_x64)


if not x64_enabled():
    _LOGGER.debug("jax_enable_x64 is off; vectorised kernels fall back to the cell-by-cell path")
