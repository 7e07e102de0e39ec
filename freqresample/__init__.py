"""
Frequency Resample Package

Tiled frequency-domain image resampling: plans the padded input region of
every output tile, extracts it and delegates the spectral zoom to an engine.
"""

from .errors import FrequencyResampleError, ConfigurationError, GeometryError, EngineError
from .config import (
    DecompositionPolicy,
    FilterSpec,
    PaddingType,
    ResampleConfig,
    ZoomRatio,
    ZoomStrategy,
    build_config,
)
from .geometry import Padding, Region, plan_input_region, remaining_padding, reconcile
from .engine import SpectralResampler
from .processing import TileResampler, extract_block

__version__ = "1.0.0"

__all__ = [
    "FrequencyResampleError",
    "ConfigurationError",
    "GeometryError",
    "EngineError",
    "DecompositionPolicy",
    "FilterSpec",
    "PaddingType",
    "ResampleConfig",
    "ZoomRatio",
    "ZoomStrategy",
    "build_config",
    "Padding",
    "Region",
    "plan_input_region",
    "remaining_padding",
    "reconcile",
    "SpectralResampler",
    "TileResampler",
    "extract_block",
]
