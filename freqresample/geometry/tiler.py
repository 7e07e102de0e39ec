"""
Splitting of the output image into disjoint tiles.
"""

from typing import List, Optional

from ..config.models import ZoomRatio
from ..errors import ConfigurationError
from .models import Region


class OutputTiler:
    """
    Splits an output extent into a grid of disjoint tiles.

    When a zoom ratio is given the tile size is rounded up to a multiple of
    the input resolution, so every interior tile boundary maps to a whole
    input sample.

    Example:
        >>> tiler = OutputTiler(tile_size=256)
        >>> for tile in tiler.split(Region(0, 0, 1000, 600)):
        ...     process(tile)
    """

    def __init__(
        self,
        tile_size: int = 256,
        zoom_ratio: Optional[ZoomRatio] = None,
    ):
        """
        Initialize the tiler.

        Args:
            tile_size: Target tile side in output pixels
            zoom_ratio: Optional ratio used to align tile boundaries

        Raises:
            ConfigurationError: If tile_size < 1
        """
        if tile_size < 1:
            raise ConfigurationError(f"tile_size must be >= 1, got {tile_size}")

        if zoom_ratio is not None:
            in_res = zoom_ratio.input_resolution
            tile_size = -(-tile_size // in_res) * in_res

        self.tile_size = tile_size

    def split(self, extent: Region) -> List[Region]:
        """
        Tiles covering extent, row by row.

        Args:
            extent: Output image extent

        Returns:
            List of regions; edge tiles are cropped to the extent
        """
        tiles = []

        for y in range(extent.y, extent.end_y, self.tile_size):
            for x in range(extent.x, extent.end_x, self.tile_size):
                tile = Region(x, y, self.tile_size, self.tile_size)
                tiles.append(tile.crop(extent))

        return tiles

    def get_tile_count(self, extent: Region) -> int:
        """Number of tiles split would produce."""
        cols = -(-extent.width // self.tile_size)
        rows = -(-extent.height // self.tile_size)
        return cols * rows
