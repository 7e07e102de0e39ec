"""
Resampling engine interface and the reference spectral engine.

An engine is any callable

    engine(block, zoom_ratio, filter_spec, decomposition_policy, zoom_strategy, padding) -> ndarray

that synthesizes the padded border of block, resamples it, applies the
filter and returns the block without filter margins.
"""

from typing import Callable

import numpy as np

from ..config.models import DecompositionPolicy, FilterSpec, ZoomRatio, ZoomStrategy
from ..geometry.models import Padding
from .decomposition import periodic_smooth_decomposition
from .spectral import SpectralResampler, fourier_resize, synthesize_padding

# Type alias for engine callables
ResamplingEngine = Callable[
    [np.ndarray, ZoomRatio, FilterSpec, DecompositionPolicy, ZoomStrategy, Padding],
    np.ndarray,
]

# Type alias for per-worker engine constructors
EngineFactory = Callable[[], ResamplingEngine]

__all__ = [
    "ResamplingEngine",
    "EngineFactory",
    "SpectralResampler",
    "fourier_resize",
    "synthesize_padding",
    "periodic_smooth_decomposition",
]
