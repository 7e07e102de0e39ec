"""
Mapping between output tiles and the input regions that produce them.

An output sample o corresponds to input position o * O / I for a zoom ratio
I:O. Input positions that are multiples of O land exactly on output samples
(multiples of I), so planned input regions always start and end on that grid.
"""

from typing import Tuple

from ..config.models import ZoomRatio
from .models import Padding, Region


def _ceil_div(a: int, b: int) -> int:
    return -(-a // b)


def _plan_axis(start: int, end: int, zoom_ratio: ZoomRatio) -> Tuple[int, int]:
    """Outward-rounded input [start, end) covering output [start, end)."""
    in_res = zoom_ratio.input_resolution
    out_res = zoom_ratio.output_resolution
    return (start // in_res) * out_res, _ceil_div(end, in_res) * out_res


def plan_input_region(
    output_tile: Region,
    zoom_ratio: ZoomRatio,
    filter_margin: Padding = Padding(),
) -> Region:
    """
    Input region needed to reconstruct an output tile.

    The tile is mapped back to the input grid with outward rounding, then
    grown by the filter margin. The result may extend past the image; see
    remaining_padding for the part that must be synthesized.

    Args:
        output_tile: Tile on the output grid
        zoom_ratio: Image-wide zoom ratio
        filter_margin: Filter support in input pixels

    Returns:
        Ideal input region (never smaller than required)
    """
    x1, x2 = _plan_axis(output_tile.x, output_tile.end_x, zoom_ratio)
    y1, y2 = _plan_axis(output_tile.y, output_tile.end_y, zoom_ratio)
    return Region(x1, y1, x2 - x1, y2 - y1).expand(filter_margin)


def output_offset(output_tile: Region, zoom_ratio: ZoomRatio) -> Tuple[int, int]:
    """
    Position of the tile origin inside the engine's output block.

    The engine's first output sample sits on the last multiple of the input
    resolution at or before the tile origin.

    Returns:
        (dx, dy) in output pixels
    """
    in_res = zoom_ratio.input_resolution
    return (output_tile.x % in_res, output_tile.y % in_res)


def output_extent(input_region: Region, zoom_ratio: ZoomRatio) -> Region:
    """
    Full output image extent for a full input image extent.

    Each axis is scaled by the ratio and rounded up.
    """
    in_res = zoom_ratio.input_resolution
    out_res = zoom_ratio.output_resolution
    return Region(
        x=0,
        y=0,
        width=_ceil_div(input_region.width * in_res, out_res),
        height=_ceil_div(input_region.height * in_res, out_res),
    )


def zoomed_size(input_size: Tuple[int, int], zoom_ratio: ZoomRatio) -> Tuple[int, int]:
    """
    Exact output (height, width) of a block whose sides are multiples of the
    output resolution.
    """
    height, width = input_size
    in_res = zoom_ratio.input_resolution
    out_res = zoom_ratio.output_resolution
    return (height * in_res // out_res, width * in_res // out_res)
