# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Fixed-point separable LoG convolution engine.

Pipeline per channel:
    1. Level shift (subtract 2^(bits-1)) and refresh the input border
    2. Path 1: horizontal h11 -> extend -> vertical h12 -> partial y1
    3. Path 2: horizontal h21 -> extend -> vertical h22 -> partial y2
    4. out = clamp(round((y1 + y2) * alpha) + 2^(bits-1), 0, 2^bits - 1)

Every stage accumulates integer products in int64 and descales with an
arithmetic right shift by K (truncation toward -inf, not rounding).
"""

import logging
from typing import Optional

import numpy as np

from .buffer import ChannelBuffer
from .config import FilterConfig
from .errors import BorderError, FilterConfigError
from .kernels import KernelPair, LoGKernels, build_log_kernels, round_half_away
from .raster import Raster

logger = logging.getLogger(__name__)


# ============================================================
# PRECONDITIONS
# ============================================================

def _require_border(buf: ChannelBuffer, half_width: int, name: str) -> None:
    if buf.border < half_width:
        raise BorderError(
            f"{name} border {buf.border} is smaller than filter half-width {half_width}"
        )


def _require_shape(buf: ChannelBuffer, shape: tuple, name: str) -> None:
    if buf.shape != shape:
        raise BorderError(f"{name} is {buf.shape[0]}x{buf.shape[1]}, expected "
                          f"{shape[0]}x{shape[1]}")


def _require_alpha(alpha: float) -> None:
    if not np.isfinite(alpha):
        raise FilterConfigError(f"alpha must be finite, got {alpha}")


# ============================================================
# STAGES
# ============================================================

def _horizontal(source: ChannelBuffer, taps: np.ndarray, shift: int,
                dest: ChannelBuffer) -> None:
    """dest[r, c] = (Σ_k source[r, c+k] · taps[k]) >> shift over the interior."""
    H = (len(taps) - 1) // 2
    b, h, w = source.border, source.height, source.width
    rows = source.extended[b:b + h, :].astype(np.int64)
    acc = np.zeros((h, w), dtype=np.int64)
    for i, tap in enumerate(taps):
        start = b + i - H
        acc += rows[:, start:start + w] * int(tap)
    dest.interior[...] = acc >> shift


def _vertical(source: ChannelBuffer, taps: np.ndarray, shift: int,
              dest: ChannelBuffer) -> None:
    """dest[r, c] = (Σ_k source[r+k, c] · taps[k]) >> shift over the interior."""
    H = (len(taps) - 1) // 2
    b, h, w = source.border, source.height, source.width
    cols = source.extended[:, b:b + w].astype(np.int64)
    acc = np.zeros((h, w), dtype=np.int64)
    for i, tap in enumerate(taps):
        start = b + i - H
        acc += cols[start:start + h, :] * int(tap)
    dest.interior[...] = acc >> shift


def separable_pass(source: ChannelBuffer, pair: KernelPair, shift: int,
                   intermediate: ChannelBuffer, partial: ChannelBuffer) -> ChannelBuffer:
    """Run one horizontal -> extend -> vertical path.

    ``source`` must already be boundary-extended. Samples are truncated to
    integers before multiplication.

    Raises:
        BorderError: source or intermediate border < H, or shapes differ.
    """
    H = pair.half_width
    _require_border(source, H, "source")
    _require_border(intermediate, H, "intermediate")
    _require_shape(intermediate, source.shape, "intermediate")
    _require_shape(partial, source.shape, "partial")

    _horizontal(source, pair.horizontal, shift, intermediate)
    intermediate.perform_boundary_extension()
    _vertical(intermediate, pair.vertical, shift, partial)
    return partial


def level_shift(buf: ChannelBuffer, offset: int = 128) -> None:
    """Subtract ``offset`` from every interior sample in place."""
    buf.interior[...] -= offset


def combine_partials(partial1: ChannelBuffer, partial2: ChannelBuffer,
                     alpha: float, out: ChannelBuffer,
                     offset: int = 128, max_value: int = 255) -> ChannelBuffer:
    """out = clamp(round((p1 + p2) · alpha) + offset, 0, max_value).

    Rounds half away from zero and clamps in floating point before any
    conversion to an integer sample type, so out-of-range values saturate.
    """
    _require_alpha(alpha)
    _require_shape(partial2, partial1.shape, "partial2")
    _require_shape(out, partial1.shape, "output")

    total = partial1.interior.astype(np.float64) + partial2.interior
    with np.errstate(over="ignore"):
        scaled = round_half_away(total * alpha) + offset
    out.interior[...] = np.clip(scaled, 0, max_value)
    return out


# ============================================================
# CHANNEL PIPELINE
# ============================================================

def apply_log_filter(inp: ChannelBuffer, out: ChannelBuffer,
                     inter1: ChannelBuffer, inter2: ChannelBuffer,
                     y1: ChannelBuffer, y2: ChannelBuffer,
                     kernels: LoGKernels, alpha: float) -> ChannelBuffer:
    """Filter one channel through both LoG paths into ``out``.

    The input interior is level-shifted in place, so ``inp`` is consumed.

    Args:
        inp: Input samples, border >= H.
        out: Final clamped output (border ignored).
        inter1, inter2: Horizontal-stage intermediates, border >= H.
        y1, y2: Partial outputs of path 1 and path 2.
        kernels: Shared fixed-point kernels.
        alpha: Output scale applied to y1 + y2.

    Returns:
        ``out``.
    """
    _require_alpha(alpha)
    H = kernels.half_width
    _require_border(inp, H, "input")
    _require_border(inter1, H, "intermediate 1")
    _require_border(inter2, H, "intermediate 2")
    for buf, name in ((out, "output"), (inter1, "intermediate 1"),
                      (inter2, "intermediate 2"), (y1, "partial 1"), (y2, "partial 2")):
        _require_shape(buf, inp.shape, name)

    mid = 1 << (kernels.sample_bits - 1)
    level_shift(inp, mid)
    inp.perform_boundary_extension()

    separable_pass(inp, kernels.path1, kernels.shift, inter1, y1)
    separable_pass(inp, kernels.path2, kernels.shift, inter2, y2)

    return combine_partials(y1, y2, alpha, out,
                            offset=mid, max_value=(1 << kernels.sample_bits) - 1)


def _sample_dtype(sample_bits: int):
    return np.uint8 if sample_bits <= 8 else np.uint16


def filter_channel(samples: np.ndarray, kernels: LoGKernels,
                   alpha: float) -> np.ndarray:
    """Allocate the six buffers of one channel and run the LoG filter.

    Args:
        samples: 2-D array of unsigned samples.
        kernels: Kernels from ``build_log_kernels``.
        alpha: Output scale.

    Returns:
        Filtered channel, same shape, uint8 (uint16 above 8 bits).
    """
    samples = np.asarray(samples)
    if samples.ndim != 2:
        raise ValueError(f"Expected a 2-D channel, got shape {samples.shape}")
    h, w = samples.shape
    H = kernels.half_width

    inp = ChannelBuffer.from_array(samples, border=H)
    inp.perform_boundary_extension()
    inter1 = ChannelBuffer.allocate(h, w, H)
    inter2 = ChannelBuffer.allocate(h, w, H)
    y1 = ChannelBuffer.allocate(h, w, 0)
    y2 = ChannelBuffer.allocate(h, w, 0)
    out = ChannelBuffer.allocate(h, w, 0)

    apply_log_filter(inp, out, inter1, inter2, y1, y2, kernels, alpha)
    return out.interior.astype(_sample_dtype(kernels.sample_bits))


def filter_image(samples: np.ndarray, sigma: float, alpha: float,
                 half_width: Optional[int] = None, sample_bits: int = 8,
                 accumulator_bits: int = 32,
                 log: Optional[logging.Logger] = None) -> np.ndarray:
    """Filter a (H, W) or (H, W, C) image; kernels are built once and shared.

    Kernel records go to ``log`` when given, otherwise to the
    ``lapgauss.kernels`` logger.

    Returns:
        Filtered image with the same shape.
    """
    samples = np.asarray(samples)
    if samples.ndim not in (2, 3):
        raise ValueError(f"Expected (H, W) or (H, W, C) samples, got shape {samples.shape}")

    kernels = build_log_kernels(sigma, half_width, sample_bits, accumulator_bits, log=log)

    if samples.ndim == 2:
        return filter_channel(samples, kernels, alpha)

    channel_log = log or logger
    channels = []
    for n in range(samples.shape[2]):
        channel_log.debug("Filtering channel %d (%dx%d, H=%d, K=%d)", n, samples.shape[0],
                          samples.shape[1], kernels.half_width, kernels.shift)
        channels.append(filter_channel(samples[:, :, n], kernels, alpha))
    return np.stack(channels, axis=2)


def filter_raster(raster: Raster, config: FilterConfig,
                  log: Optional[logging.Logger] = None) -> Raster:
    """Filter a ``Raster`` with a ``FilterConfig``; returns a new ``Raster``.

    With ``config.debug`` the package logger (or ``log``) is lowered to DEBUG
    for the duration of the call and restored afterwards.
    """
    target = log or logging.getLogger("lapgauss")
    previous = target.level
    if config.debug:
        target.setLevel(logging.DEBUG)
    try:
        filtered = filter_image(raster.samples, config.sigma, config.alpha,
                                half_width=config.half_width,
                                sample_bits=config.sample_bits,
                                accumulator_bits=config.accumulator_bits,
                                log=log)
    finally:
        target.setLevel(previous)
    return Raster(filtered)
