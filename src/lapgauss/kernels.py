# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Separable LoG kernel generation and fixed-point quantization.

The 2-D Laplacian of Gaussian is approximated by two rank-1 paths:

    LoG ≈ (h11 ⊗ h12) + (h21 ⊗ h22)

where h12 = h21 is the plain Gaussian and h11 = h22 is the
second-derivative-weighted Gaussian. All four taps sets share one
fixed-point shift K, chosen from the BIBO gain of the combined filter and
then checked against the accumulator range of every convolution stage.
"""

import logging
import math
from dataclasses import dataclass
from typing import Optional

import numpy as np

from .errors import FilterConfigError, KernelOverflowError

logger = logging.getLogger(__name__)


def half_width_for(sigma: float) -> int:
    """Filter half-width H = ceil(3σ), covering effectively all the energy."""
    return int(math.ceil(3.0 * sigma))


def log_taps(sigma: float, half_width: int) -> tuple:
    """Float taps of the two 1-D LoG factors over offsets -H..H.

    Returns:
        (derivative, gaussian) float64 arrays of length 2H+1, centred at H.
    """
    x = np.arange(-half_width, half_width + 1, dtype=np.float64)
    s2 = sigma * sigma
    gauss = np.exp(-(x * x) / (2.0 * s2))
    deriv = (x * x - s2) / (2.0 * np.pi * sigma ** 6) * gauss
    return deriv, gauss


def bibo_gain(h11: np.ndarray, h12: np.ndarray,
              h21: np.ndarray, h22: np.ndarray) -> float:
    """Overall BIBO gain A = Σ_{row,col} |h11[col]·h12[row] − h21[col]·h22[row]|."""
    response = np.outer(h12, h11) - np.outer(h22, h21)
    return float(np.abs(response).sum())


def nominal_shift(gain: float, sample_bits: int = 8,
                  accumulator_bits: int = 32) -> int:
    """K = accumulator_bits − sample_bits − floor(log2(A))."""
    if not np.isfinite(gain) or gain <= 0.0:
        raise FilterConfigError(f"BIBO gain must be positive and finite, got {gain}")
    return accumulator_bits - sample_bits - int(math.floor(math.log2(gain)))


def round_half_away(x) -> np.ndarray:
    """Round to nearest, ties away from zero (C ``round`` semantics)."""
    x = np.asarray(x, dtype=np.float64)
    return np.sign(x) * np.floor(np.abs(x) + 0.5)


def quantize(taps: np.ndarray, shift: int) -> np.ndarray:
    """Integer taps round(tap · 2^K) as int64."""
    return round_half_away(np.asarray(taps, dtype=np.float64) * 2.0 ** shift).astype(np.int64)


def _readonly(a: np.ndarray) -> np.ndarray:
    a.setflags(write=False)
    return a


@dataclass(frozen=True, eq=False)
class KernelPair:
    """Integer taps of one separable path.

    ``horizontal`` runs along rows first, ``vertical`` along columns on the
    boundary-extended intermediate.
    """
    horizontal: np.ndarray
    vertical: np.ndarray

    @property
    def half_width(self) -> int:
        return (len(self.horizontal) - 1) // 2

    def stage_peaks(self, shift: int, sample_bits: int = 8) -> tuple:
        """Worst-case |accumulator| of the horizontal and vertical stages.

        Uses Python integers so the bound itself can never overflow.
        """
        in_peak = 1 << (sample_bits - 1)
        h_peak = in_peak * int(np.abs(self.horizontal).sum())
        # descaled intermediate: arithmetic shift floors, so negatives round away
        mid_peak = -((-h_peak) >> shift)
        v_peak = mid_peak * int(np.abs(self.vertical).sum())
        return h_peak, v_peak


@dataclass(frozen=True, eq=False)
class LoGKernels:
    """Float and fixed-point kernels for one (sigma, H) instantiation.

    Shared read-only across every channel of an image.
    """
    sigma: float
    half_width: int
    h11: np.ndarray
    h12: np.ndarray
    h21: np.ndarray
    h22: np.ndarray
    gain: float
    shift: int
    path1: KernelPair
    path2: KernelPair
    sample_bits: int = 8
    accumulator_bits: int = 32
    nominal: int = 0

    @property
    def taps(self) -> int:
        return 2 * self.half_width + 1

    @property
    def pairs(self) -> tuple:
        return (self.path1, self.path2)

    @property
    def integer_kernels(self) -> dict:
        return {
            "h11": self.path1.horizontal,
            "h12": self.path1.vertical,
            "h21": self.path2.horizontal,
            "h22": self.path2.vertical,
        }


def _fits(pairs, shift: int, sample_bits: int, accumulator_bits: int) -> bool:
    limit = (1 << (accumulator_bits - 1)) - 1
    return all(peak <= limit
               for pair in pairs
               for peak in pair.stage_peaks(shift, sample_bits))


def _quantize_pairs(h11, h12, h21, h22, shift: int) -> tuple:
    p1 = KernelPair(_readonly(quantize(h11, shift)), _readonly(quantize(h12, shift)))
    p2 = KernelPair(_readonly(quantize(h21, shift)), _readonly(quantize(h22, shift)))
    return p1, p2


def build_log_kernels(sigma: float,
                      half_width: Optional[int] = None,
                      sample_bits: int = 8,
                      accumulator_bits: int = 32,
                      log: Optional[logging.Logger] = None) -> LoGKernels:
    """Build the four LoG factor kernels and their fixed-point versions.

    Args:
        sigma: Gaussian scale (> 0).
        half_width: Filter half-width H (>= 1). Defaults to ceil(3σ).
        sample_bits: Bit depth of input samples (8 for byte images).
        accumulator_bits: Signed accumulator width the stages must fit in.
        log: Logger receiving tap dumps at DEBUG (defaults to module logger).

    Returns:
        LoGKernels with float taps, BIBO gain A, shift K and integer pairs.

    Raises:
        FilterConfigError: Invalid sigma, half-width or bit widths.
        KernelOverflowError: No shift K >= 1 keeps every stage in range.
    """
    log = log or logger
    if not np.isfinite(sigma) or sigma <= 0:
        raise FilterConfigError(f"sigma must be a positive finite number, got {sigma}")
    if half_width is None:
        half_width = half_width_for(sigma)
    if int(half_width) != half_width or half_width < 1:
        raise FilterConfigError(f"half_width must be an integer >= 1, got {half_width}")
    half_width = int(half_width)
    if not 1 <= sample_bits <= 16:
        raise FilterConfigError(f"sample_bits must be in [1, 16], got {sample_bits}")
    if not sample_bits < accumulator_bits <= 63:
        raise FilterConfigError(
            f"accumulator_bits must be in ({sample_bits}, 63], got {accumulator_bits}")

    deriv, gauss = log_taps(sigma, half_width)
    h11, h12, h21, h22 = deriv, gauss, gauss.copy(), deriv.copy()

    gain = bibo_gain(h11, h12, h21, h22)
    k_nominal = nominal_shift(gain, sample_bits, accumulator_bits)

    log.debug("h11 taps: %s", np.array2string(h11, precision=6))
    log.debug("h12 taps: %s", np.array2string(h12, precision=6))
    log.debug("h21 taps: %s", np.array2string(h21, precision=6))
    log.debug("h22 taps: %s", np.array2string(h22, precision=6))
    log.debug("per-kernel gains: h11=%.6f h12=%.6f h21=%.6f h22=%.6f",
              np.abs(h11).sum(), np.abs(h12).sum(), np.abs(h21).sum(), np.abs(h22).sum())

    shift = min(k_nominal, accumulator_bits - 1)
    while shift >= 1:
        path1, path2 = _quantize_pairs(h11, h12, h21, h22, shift)
        if _fits((path1, path2), shift, sample_bits, accumulator_bits):
            break
        shift -= 1
    else:
        raise KernelOverflowError(
            f"No fixed-point shift fits a {accumulator_bits}-bit accumulator "
            f"for sigma={sigma}, H={half_width} (A={gain:.6g})"
        )

    if shift < k_nominal:
        log.info("Shift lowered from K=%d to K=%d to keep %d-bit stages in range",
                    k_nominal, shift, accumulator_bits)
    log.debug("BIBO A=%.6f K=%d (nominal %d)", gain, shift, k_nominal)
    for name, taps in (("h11", path1.horizontal), ("h12", path1.vertical),
                       ("h21", path2.horizontal), ("h22", path2.vertical)):
        log.debug("%s integers: %s", name, " ".join(str(int(t)) for t in taps))

    return LoGKernels(
        sigma=float(sigma),
        half_width=half_width,
        h11=_readonly(h11), h12=_readonly(h12),
        h21=_readonly(h21), h22=_readonly(h22),
        gain=gain,
        shift=shift,
        path1=path1,
        path2=path2,
        sample_bits=sample_bits,
        accumulator_bits=accumulator_bits,
        nominal=k_nominal,
    )
