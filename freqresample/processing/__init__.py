"""
Per-tile resampling: block extraction and the tile orchestrator.
"""

from .extractor import extract_block
from .orchestrator import TileResampler, ProcessingProgress

__all__ = [
    "extract_block",
    "TileResampler",
    "ProcessingProgress",
]
