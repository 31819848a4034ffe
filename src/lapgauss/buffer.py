# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Bordered sample buffers for separable filtering.

Each image channel lives in one contiguous float32 store with a border of
``border`` samples on every side. Logical pixel (r, c) sits at
``store[r + border, c + border]`` so filters can read up to ``border``
samples outside the image without per-pixel bounds logic.
"""

from typing import Optional

import numpy as np


class ChannelBuffer:
    """A single image channel with a symmetric-extension border.

    Attributes:
        height: Interior rows.
        width: Interior columns.
        border: Extension width on each side.
        stride: Row pitch of the underlying store (>= width + 2*border).
    """

    def __init__(self, height: int, width: int, border: int = 0,
                 stride: Optional[int] = None):
        if height < 1 or width < 1:
            raise ValueError(f"Buffer extent must be positive, got {height}x{width}")
        if border < 0:
            raise ValueError(f"Border must be >= 0, got {border}")
        min_stride = width + 2 * border
        if stride is None:
            stride = min_stride
        if stride < min_stride:
            raise ValueError(f"Stride {stride} smaller than width + 2*border = {min_stride}")

        self.height = height
        self.width = width
        self.border = border
        self.stride = stride
        self._store = np.zeros((height + 2 * border, stride), dtype=np.float32)

    @classmethod
    def allocate(cls, height: int, width: int, border: int = 0,
                 stride: Optional[int] = None) -> "ChannelBuffer":
        """Allocate a buffer; samples and border start out undefined (zero)."""
        return cls(height, width, border, stride)

    @classmethod
    def from_array(cls, samples: np.ndarray, border: int = 0) -> "ChannelBuffer":
        """Allocate a buffer sized to a 2-D array and copy it into the interior."""
        samples = np.asarray(samples)
        if samples.ndim != 2:
            raise ValueError(f"Expected a 2-D array, got shape {samples.shape}")
        buf = cls(samples.shape[0], samples.shape[1], border)
        buf.interior[...] = samples
        return buf

    # ------------------------------------------------------------------
    # Views
    # ------------------------------------------------------------------

    @property
    def shape(self) -> tuple:
        return (self.height, self.width)

    @property
    def extended(self) -> np.ndarray:
        """Writable view of interior plus border, shape (h+2b, w+2b)."""
        return self._store[:, :self.width + 2 * self.border]

    @property
    def interior(self) -> np.ndarray:
        """Writable view of the unextended image region."""
        b = self.border
        return self._store[b:b + self.height, b:b + self.width]

    def _index(self, row: int, col: int) -> tuple:
        b = self.border
        if not (-b <= row < self.height + b and -b <= col < self.width + b):
            raise IndexError(
                f"Sample ({row}, {col}) outside extended range "
                f"[{-b}, {self.height + b}) x [{-b}, {self.width + b})"
            )
        return row + b, col + b

    def sample(self, row: int, col: int) -> float:
        return float(self._store[self._index(row, col)])

    def set_sample(self, row: int, col: int, value: float) -> None:
        self._store[self._index(row, col)] = value

    # ------------------------------------------------------------------
    # Boundary extension
    # ------------------------------------------------------------------

    def perform_boundary_extension(self) -> None:
        """Fill the border by symmetric (mirror) extension of the interior.

        Rows are extended first across the interior columns, then every
        row of the extended region is extended left and right, so corner
        samples come from already extended rows. The edge sample is the
        mirror point and is not repeated: row[-k] = row[k].
        """
        b = self.border
        if b == 0:
            return
        h, w = self.height, self.width
        ext = self.extended

        cols = ext[:, b:b + w]
        cols[...] = np.pad(cols[b:b + h], ((b, b), (0, 0)), mode="reflect")

        ext[...] = np.pad(ext[:, b:b + w], ((0, 0), (b, b)), mode="reflect")

    def __repr__(self) -> str:
        return (f"ChannelBuffer(height={self.height}, width={self.width}, "
                f"border={self.border}, stride={self.stride})")
