# -*- coding: utf-8 -*-
# Copyright (c) 2024-2026 Vasile Lucian Borbeleac / FRAGMERGENT TECHNOLOGY S.R.L.
# Cluj-Napoca, Romania

"""Filter configuration and named presets."""

import math
from dataclasses import dataclass, field
from typing import Dict

from .errors import FilterConfigError
from .kernels import half_width_for


# ---------------------------------------------------------------------------
# Presets
# ---------------------------------------------------------------------------

PRESETS: Dict[str, dict] = {
    "fine": {
        "name": "Fine Detail",
        "description": "Small-scale LoG for thin lines and texture",
        "sigma": 0.5,
        "alpha": 4.0,
    },
    "standard": {
        "name": "Standard",
        "description": "Unit-scale LoG, unity output gain",
        "sigma": 1.0,
        "alpha": 1.0,
    },
    "blob": {
        "name": "Blob Detection",
        "description": "Coarse LoG tuned to blob-sized structures",
        "sigma": 2.0,
        "alpha": 16.0,
    },
}


@dataclass
class FilterConfig:
    """Parameters of one LoG filtering run.

    Attributes:
        sigma: Gaussian scale (> 0).
        alpha: Scale applied to the combined response before the +128 shift.
        sample_bits: Input/output sample depth.
        accumulator_bits: Signed accumulator width the fixed-point stages
            must fit in.
        debug: Log kernel taps, gain and shift at DEBUG level.
        half_width: Derived filter half-width H = ceil(3σ).
    """
    sigma: float
    alpha: float = 1.0
    sample_bits: int = 8
    accumulator_bits: int = 32
    debug: bool = False
    half_width: int = field(init=False)

    def __post_init__(self):
        try:
            self.sigma = float(self.sigma)
            self.alpha = float(self.alpha)
        except (TypeError, ValueError) as e:
            raise FilterConfigError(f"sigma and alpha must be numbers: {e}") from e
        if not math.isfinite(self.sigma) or self.sigma <= 0:
            raise FilterConfigError(f"sigma must be a positive finite number, got {self.sigma}")
        if not math.isfinite(self.alpha):
            raise FilterConfigError(f"alpha must be finite, got {self.alpha}")
        if not 1 <= self.sample_bits <= 16:
            raise FilterConfigError(f"sample_bits must be in [1, 16], got {self.sample_bits}")
        if not self.sample_bits < self.accumulator_bits <= 63:
            raise FilterConfigError(
                f"accumulator_bits must be in ({self.sample_bits}, 63], "
                f"got {self.accumulator_bits}")
        self.half_width = half_width_for(self.sigma)

    @classmethod
    def from_preset(cls, name: str, **overrides) -> "FilterConfig":
        if name not in PRESETS:
            raise FilterConfigError(
                f"Unknown preset {name!r}; choose from {', '.join(PRESETS)}")
        preset = PRESETS[name]
        params = {"sigma": preset["sigma"], "alpha": preset["alpha"]}
        params.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**params)
