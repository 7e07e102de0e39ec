"""
Configuration objects for a resampling run.
"""

from .models import (
    DEFAULT_HOT_POINT,
    DecompositionPolicy,
    FilterSpec,
    PaddingType,
    ZoomRatio,
    ZoomStrategy,
)
from .resample_config import ResampleConfig, build_config, select_zoom_strategy

__all__ = [
    "DEFAULT_HOT_POINT",
    "DecompositionPolicy",
    "FilterSpec",
    "PaddingType",
    "ZoomRatio",
    "ZoomStrategy",
    "ResampleConfig",
    "build_config",
    "select_zoom_strategy",
]
