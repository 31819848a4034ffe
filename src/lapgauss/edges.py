# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Zero-crossing edge maps from LoG-filtered images.

A LoG response changes sign across an edge. The filter output is centred
on ``level`` (128 for 8-bit images), so edges are the 4-neighbour pixel
pairs whose values sit on opposite sides of that level.
"""

import numpy as np
from scipy.ndimage import binary_closing


def zero_crossings(filtered: np.ndarray,
                   level: float = 128.0,
                   min_amplitude: float = 0.0,
                   closing: bool = False) -> np.ndarray:
    """Mark pixels adjacent to a sign change of ``filtered - level``.

    Pipeline:
        1. Re-centre the response around zero
        2. 4-neighbourhood sign flips (right + down only, both pixels marked)
        3. Amplitude gate: keep flips whose larger |response| >= min_amplitude
        4. Optional morphological closing (connect 1px gaps)

    Args:
        filtered: 2-D filter output.
        level: Value that represents a zero response.
        min_amplitude: Minimum peak-to-level distance across the crossing.
        closing: If True, apply binary closing to the edge map.

    Returns:
        Boolean edge map.
    """
    Z = np.asarray(filtered, dtype=np.float64) - level
    if Z.ndim != 2:
        raise ValueError(f"Expected a 2-D response, got shape {Z.shape}")
    sgn = np.sign(Z)
    amp = np.abs(Z)

    flip_r = (sgn[:, :-1] * sgn[:, 1:]) < 0
    flip_d = (sgn[:-1, :] * sgn[1:, :]) < 0
    if min_amplitude > 0:
        flip_r &= np.maximum(amp[:, :-1], amp[:, 1:]) >= min_amplitude
        flip_d &= np.maximum(amp[:-1, :], amp[1:, :]) >= min_amplitude

    edges = np.zeros(Z.shape, dtype=bool)
    edges[:, :-1] |= flip_r
    edges[:, 1:] |= flip_r
    edges[:-1, :] |= flip_d
    edges[1:, :] |= flip_d

    if closing:
        edges = binary_closing(edges, iterations=1)

    return edges


def edge_map(filtered: np.ndarray, level: float = 128.0,
             min_amplitude: float = 0.0, closing: bool = False) -> np.ndarray:
    """Zero-crossing map of a (H, W) or (H, W, C) output as a 0/255 uint8 image.

    Multi-channel outputs are OR-ed across channels.
    """
    filtered = np.asarray(filtered)
    if filtered.ndim == 2:
        filtered = filtered[:, :, np.newaxis]
    edges = np.zeros(filtered.shape[:2], dtype=bool)
    for n in range(filtered.shape[2]):
        edges |= zero_crossings(filtered[:, :, n], level, min_amplitude, closing)
    return edges.astype(np.uint8) * 255
