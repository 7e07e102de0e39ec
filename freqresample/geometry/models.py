"""
Geometry value types for tile planning.

Regions are expressed as origin + size over either the input or the output
pixel grid. Padding counts samples on each side of a region, in input pixels.
"""

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from ..config.models import PaddingType


@dataclass(frozen=True)
class Padding:
    """
    Margin amounts on each side of a region.

    Attributes:
        top: Rows above the region
        bottom: Rows below the region
        left: Columns left of the region
        right: Columns right of the region
        padding_type: How the engine fills the margin
    """
    top: int = 0
    bottom: int = 0
    left: int = 0
    right: int = 0
    padding_type: PaddingType = PaddingType.MIRROR

    def __post_init__(self):
        """Validate padding amounts."""
        for side in ("top", "bottom", "left", "right"):
            value = getattr(self, side)
            if value < 0:
                raise ValueError(f"padding {side} must be >= 0, got {value}")

    @property
    def horizontal(self) -> int:
        """Total columns added (left + right)."""
        return self.left + self.right

    @property
    def vertical(self) -> int:
        """Total rows added (top + bottom)."""
        return self.top + self.bottom

    @property
    def is_zero(self) -> bool:
        return self.horizontal == 0 and self.vertical == 0

    def __add__(self, other: "Padding") -> "Padding":
        if not isinstance(other, Padding):
            return NotImplemented
        return Padding(
            top=self.top + other.top,
            bottom=self.bottom + other.bottom,
            left=self.left + other.left,
            right=self.right + other.right,
            padding_type=self.padding_type,
        )

    def scaled(self, numerator: int, denominator: int = 1) -> "Padding":
        """Padding with every side multiplied by numerator / denominator (floor)."""
        return Padding(
            top=self.top * numerator // denominator,
            bottom=self.bottom * numerator // denominator,
            left=self.left * numerator // denominator,
            right=self.right * numerator // denominator,
            padding_type=self.padding_type,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "top": self.top,
            "bottom": self.bottom,
            "left": self.left,
            "right": self.right,
            "padding_type": self.padding_type.value,
        }


@dataclass(frozen=True)
class Region:
    """
    Rectangular area of a pixel grid.

    Attributes:
        x: Column of the top-left sample (may be negative for planned regions)
        y: Row of the top-left sample
        width: Number of columns
        height: Number of rows
    """
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0

    def __post_init__(self):
        """Validate region size."""
        if self.width < 0 or self.height < 0:
            raise ValueError(f"region size must be >= 0, got {self.width}x{self.height}")

    @property
    def end_x(self) -> int:
        """One past the rightmost column."""
        return self.x + self.width

    @property
    def end_y(self) -> int:
        """One past the bottom row."""
        return self.y + self.height

    @property
    def origin(self) -> Tuple[int, int]:
        return (self.x, self.y)

    @property
    def size(self) -> Tuple[int, int]:
        """(width, height)"""
        return (self.width, self.height)

    @property
    def shape(self) -> Tuple[int, int]:
        """(height, width), the numpy shape of a block covering the region."""
        return (self.height, self.width)

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """(x1, y1, x2, y2) corner form."""
        return (self.x, self.y, self.end_x, self.end_y)

    @property
    def area(self) -> int:
        return self.width * self.height

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0

    def contains(self, other: "Region") -> bool:
        """True if other lies entirely inside this region."""
        return (
            self.x <= other.x
            and self.y <= other.y
            and other.end_x <= self.end_x
            and other.end_y <= self.end_y
        )

    def intersect(self, other: "Region") -> "Region":
        """
        Overlap of two regions.

        The result is clamped inside this region, so a disjoint pair yields an
        empty region positioned on this region's nearest edge.
        """
        x1 = min(max(self.x, other.x), self.end_x)
        y1 = min(max(self.y, other.y), self.end_y)
        x2 = max(min(self.end_x, other.end_x), x1)
        y2 = max(min(self.end_y, other.end_y), y1)
        return Region(x1, y1, x2 - x1, y2 - y1)

    def crop(self, bounds: "Region") -> "Region":
        """This region restricted to bounds."""
        return self.intersect(bounds)

    def expand(self, padding: Padding) -> "Region":
        """Grow the region by a padding on every side."""
        return Region(
            x=self.x - padding.left,
            y=self.y - padding.top,
            width=self.width + padding.horizontal,
            height=self.height + padding.vertical,
        )

    def translate(self, dx: int, dy: int) -> "Region":
        return Region(self.x + dx, self.y + dy, self.width, self.height)

    def to_slices(self) -> Tuple[slice, slice]:
        """(rows, cols) slices addressing this region in a numpy array."""
        return (slice(self.y, self.end_y), slice(self.x, self.end_x))

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "x": self.x,
            "y": self.y,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_bounds(cls, bounds: Tuple[int, int, int, int]) -> "Region":
        """Create from (x1, y1, x2, y2)."""
        x1, y1, x2, y2 = bounds
        return cls(x1, y1, x2 - x1, y2 - y1)

    @classmethod
    def from_shape(cls, shape: Tuple[int, ...]) -> "Region":
        """Largest possible region of an array with the given shape."""
        height, width = shape[:2]
        return cls(0, 0, int(width), int(height))
