"""
Output tile size reconciliation.

The engine's output block is the ground truth for which output samples
exist. A tile keeps its declared origin and takes its size from the engine
block, trimmed to the declared extent so neighbouring tiles never overlap.
"""

from typing import Tuple

from ..config.models import ZoomRatio
from ..errors import GeometryError
from .models import Region


def reconcile(
    declared_tile: Region,
    engine_output_size: Tuple[int, int],
    offset: Tuple[int, int] = (0, 0),
) -> Region:
    """
    Final output region covered by an engine block.

    Args:
        declared_tile: Tile requested by the host pipeline
        engine_output_size: (width, height) of the block returned by the engine
        offset: (dx, dy) of the tile origin inside the engine block

    Returns:
        Region on the output grid to write

    Raises:
        GeometryError: If the engine block cannot cover the declared tile
    """
    engine_width, engine_height = engine_output_size
    dx, dy = offset
    width = min(declared_tile.width, engine_width - dx)
    height = min(declared_tile.height, engine_height - dy)

    if width < declared_tile.width or height < declared_tile.height:
        raise GeometryError(
            f"engine block {engine_width}x{engine_height} (offset {dx},{dy}) "
            f"cannot cover tile {declared_tile.width}x{declared_tile.height} "
            f"at ({declared_tile.x}, {declared_tile.y})"
        )

    return Region(declared_tile.x, declared_tile.y, width, height)


def align_output_region(
    region: Region,
    zoom_ratio: ZoomRatio,
    output_bounds: Region,
) -> Region:
    """
    Enlarge a requested output region onto the input-resolution grid.

    Start and end are moved outward to multiples of the input resolution,
    so the region maps to whole input samples, then cropped to the output
    image.
    """
    in_res = zoom_ratio.input_resolution
    x1 = (region.x // in_res) * in_res
    y1 = (region.y // in_res) * in_res
    x2 = -(-region.end_x // in_res) * in_res
    y2 = -(-region.end_y // in_res) * in_res
    return Region(x1, y1, x2 - x1, y2 - y1).crop(output_bounds)
