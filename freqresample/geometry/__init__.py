"""
Tile geometry: region planning, padding deficits and output reconciliation.
"""

from .models import Padding, Region
from .planner import plan_input_region, output_offset, output_extent, zoomed_size
from .padding import real_region, remaining_padding
from .resizer import reconcile, align_output_region
from .tiler import OutputTiler

__all__ = [
    # Models
    "Padding",
    "Region",
    # Planner
    "plan_input_region",
    "output_offset",
    "output_extent",
    "zoomed_size",
    # Padding
    "real_region",
    "remaining_padding",
    # Resizer
    "reconcile",
    "align_output_region",
    # Tiler
    "OutputTiler",
]
