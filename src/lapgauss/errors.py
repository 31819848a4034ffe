# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Exception hierarchy for LapGauss.

Engine errors (bad buffers, bad filter parameters) derive from
``LapGaussError``; image I/O failures raise ``RasterError`` so callers can
tell a broken file apart from a broken configuration.
"""


class LapGaussError(Exception):
    """Base class for filtering-engine errors."""


class BorderError(LapGaussError):
    """A buffer is too small (border or extent) for the requested filter."""


class FilterConfigError(LapGaussError, ValueError):
    """Invalid filter parameters (sigma, alpha, half-width, bit widths)."""


class KernelOverflowError(FilterConfigError):
    """No fixed-point shift keeps every stage inside the accumulator range."""


class RasterError(OSError):
    """Raster file could not be read, decoded, encoded or written."""
