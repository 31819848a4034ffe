# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""LapGauss — Separable fixed-point Laplacian-of-Gaussian filtering.

Decomposes the 2-D LoG kernel into two separable rank-1 paths, quantizes
the 1-D taps to integers with a shared shift, and filters each image
channel through symmetric-extended bordered buffers.
"""

from .buffer import ChannelBuffer
from .config import FilterConfig, PRESETS
from .convolution import (apply_log_filter, combine_partials, filter_channel,
                          filter_image, filter_raster, level_shift,
                          separable_pass)
from .errors import (BorderError, FilterConfigError, KernelOverflowError,
                     LapGaussError, RasterError)
from .kernels import KernelPair, LoGKernels, build_log_kernels, half_width_for

__version__ = "0.1.0"
__author__ = "Vasile Lucian Borbeleac"
__copyright__ = "© 2024-2026 FRAGMERGENT TECHNOLOGY S.R.L."

__all__ = [
    "ChannelBuffer",
    "FilterConfig",
    "PRESETS",
    "KernelPair",
    "LoGKernels",
    "build_log_kernels",
    "half_width_for",
    "apply_log_filter",
    "combine_partials",
    "filter_channel",
    "filter_image",
    "filter_raster",
    "level_shift",
    "separable_pass",
    "LapGaussError",
    "BorderError",
    "FilterConfigError",
    "KernelOverflowError",
    "RasterError",
]
