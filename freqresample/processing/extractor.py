"""
Copy of real input pixels into dense engine blocks.
"""

from typing import Optional

import numpy as np

from ..errors import GeometryError
from ..geometry.models import Region


def extract_block(
    image: np.ndarray,
    real_region: Region,
    ideal_region: Optional[Region] = None,
) -> np.ndarray:
    """
    Extract the real part of a planned region into a float64 block.

    The block is sized to ideal_region when given; real pixels are placed at
    their offset inside it and the remaining positions are zero placeholders
    for the engine to synthesize. No padding is computed here.

    Args:
        image: 2-D source image
        real_region: In-bounds region to read
        ideal_region: Planned region the block must cover

    Returns:
        Block of shape ideal_region.shape (or real_region.shape)

    Raises:
        GeometryError: If real_region is outside the image or ideal_region
    """
    if image.ndim != 2:
        raise GeometryError(f"expected a 2-D image, got shape {image.shape}")

    target = ideal_region if ideal_region is not None else real_region
    block = np.zeros(target.shape, dtype=np.float64)
    if real_region.is_empty:
        return block

    image_bounds = Region.from_shape(image.shape)
    if not image_bounds.contains(real_region):
        raise GeometryError(
            f"region {real_region.bounds} is outside image bounds {image_bounds.bounds}"
        )
    if not target.contains(real_region):
        raise GeometryError(
            f"region {real_region.bounds} is outside planned region {target.bounds}"
        )

    local = real_region.translate(-target.x, -target.y)
    block[local.to_slices()] = image[real_region.to_slices()]
    return block
