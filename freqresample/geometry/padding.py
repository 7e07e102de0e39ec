"""
Padding deficit of a planned input region against the real image.
"""

from ..config.models import PaddingType
from .models import Padding, Region


def real_region(ideal_region: Region, image_bounds: Region) -> Region:
    """
    Part of the ideal region backed by real pixels.

    Empty when the ideal region misses the image on an axis.
    """
    return ideal_region.intersect(image_bounds)


def remaining_padding(
    ideal_region: Region,
    image_bounds: Region,
    padding_type: PaddingType = PaddingType.MIRROR,
) -> Padding:
    """
    Rows and columns of the ideal region lying outside the image.

    The engine synthesizes these samples; nothing is fabricated here. For
    every axis, ideal size == padding before + real size + padding after.

    Args:
        ideal_region: Region returned by plan_input_region
        image_bounds: Largest possible region of the input image
        padding_type: Fill mode reported to the engine

    Returns:
        Padding per side, zero where the ideal region is inside the image
    """
    real = real_region(ideal_region, image_bounds)
    return Padding(
        top=real.y - ideal_region.y,
        bottom=ideal_region.end_y - real.end_y,
        left=real.x - ideal_region.x,
        right=ideal_region.end_x - real.end_x,
        padding_type=padding_type,
    )
