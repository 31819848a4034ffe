# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Synthetic 8-bit test rasters.

Flat fields, lines, steps and simple area shapes with known LoG behaviour:
a flat field has zero response everywhere, a line or step produces a
zero-crossing pair symmetric about the feature.
"""

from typing import Optional

import numpy as np


# ============================================================
# PRIMITIVES
# ============================================================

def _make_canvas(size: int = 64, value: int = 128) -> np.ndarray:
    """Create a uniform uint8 canvas."""
    return np.full((size, size), value, dtype=np.uint8)


def _add_circle(img: np.ndarray, cx: int, cy: int, r: int, val: int = 255) -> None:
    """Draw a filled circle."""
    yy, xx = np.indices(img.shape)
    img[(xx - cx) ** 2 + (yy - cy) ** 2 <= r * r] = val


def _add_rect(img: np.ndarray, x0: int, y0: int, x1: int, y1: int,
              val: int = 255) -> None:
    """Draw a filled rectangle."""
    img[y0:y1, x0:x1] = val


# ============================================================
# SHAPE GENERATORS
# ============================================================

def make_flat(s: int = 64, value: int = 128) -> np.ndarray:
    """Constant field: LoG response is zero everywhere."""
    return _make_canvas(s, value)


def make_vertical_line(s: int = 64, col: Optional[int] = None, value: int = 255,
                       background: int = 128, thickness: int = 1) -> np.ndarray:
    """Single bright column on a mid-grey background."""
    img = _make_canvas(s, background)
    col = s // 2 if col is None else col
    img[:, col:col + thickness] = value
    return img


def make_step(s: int = 64, low: int = 64, high: int = 192) -> np.ndarray:
    """Vertical step edge at the centre column."""
    img = _make_canvas(s, low)
    img[:, s // 2:] = high
    return img


def make_circle_square(s: int = 64) -> np.ndarray:
    """Circle + square: basic area features with curved and straight edges."""
    img = _make_canvas(s, 32)
    _add_rect(img, s // 7, s // 7, s // 2, s // 2, val=224)
    _add_circle(img, (5 * s) // 8, (9 * s) // 16, s // 4, val=224)
    return img


def make_color_bars(s: int = 64) -> np.ndarray:
    """Three-channel image with differently placed bars per channel."""
    img = np.full((s, s, 3), 128, dtype=np.uint8)
    img[:, s // 4, 0] = 255
    img[:, s // 2, 1] = 0
    img[s // 2, :, 2] = 255
    return img


SHAPES = {
    "flat": make_flat,
    "line": make_vertical_line,
    "step": make_step,
    "circle_square": make_circle_square,
    "color_bars": make_color_bars,
}
