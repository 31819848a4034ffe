# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Raster container and image file I/O.

Samples are held bottom-to-top: row 0 of ``Raster.samples`` is the bottom
row of the picture, the order in which BMP files store scan lines. Files
are decoded and encoded with OpenCV; the format follows the file extension.
"""

from pathlib import Path

import cv2
import numpy as np

from .errors import RasterError


class Raster:
    """Decoded 8-bit image, shape (height, width, channels), bottom row first."""

    def __init__(self, samples: np.ndarray):
        samples = np.asarray(samples)
        if samples.ndim == 2:
            samples = samples[:, :, np.newaxis]
        if samples.ndim != 3:
            raise ValueError(f"Expected (H, W) or (H, W, C) samples, got shape {samples.shape}")
        self.samples = samples

    @classmethod
    def from_top_down(cls, image: np.ndarray) -> "Raster":
        """Wrap an array in display order (top row first)."""
        return cls(np.flipud(np.asarray(image)).copy())

    def to_top_down(self) -> np.ndarray:
        """Samples in display order; single-channel rasters come back 2-D."""
        image = np.flipud(self.samples)
        if self.channel_count == 1:
            image = image[:, :, 0]
        return np.ascontiguousarray(image)

    @property
    def height(self) -> int:
        return self.samples.shape[0]

    @property
    def width(self) -> int:
        return self.samples.shape[1]

    @property
    def channel_count(self) -> int:
        return self.samples.shape[2]

    def channel(self, n: int) -> np.ndarray:
        return self.samples[:, :, n]

    def __repr__(self) -> str:
        return (f"Raster(width={self.width}, height={self.height}, "
                f"channels={self.channel_count})")


def read_raster(path) -> Raster:
    """Decode an image file into a bottom-to-top ``Raster``.

    Raises:
        RasterError: File missing or undecodable, or not 8 bits per sample.
    """
    path = Path(path)
    if not path.is_file():
        raise RasterError(f"Cannot open supplied input file: {path}")
    image = cv2.imread(str(path), cv2.IMREAD_UNCHANGED)
    if image is None:
        raise RasterError(f"Error encountered while parsing image file header: {path}")
    if image.dtype != np.uint8:
        raise RasterError(
            f"Input uses an unsupported format ({image.dtype}); "
            f"only 8-bit samples are supported: {path}")
    return Raster.from_top_down(image)


def write_raster(path, raster: Raster) -> None:
    """Encode a ``Raster`` to ``path``; the extension selects the format.

    Raises:
        RasterError: Encoder unavailable or file could not be written.
    """
    path = Path(path)
    try:
        ok = cv2.imwrite(str(path), raster.to_top_down())
    except cv2.error as e:
        raise RasterError(f"Cannot write output file {path}: {e}") from e
    if not ok:
        raise RasterError(f"Cannot open supplied output file: {path}")
