"""
Value types shared by the whole resampling run.

ZoomRatio, FilterSpec and the policy enums are built once from the front end
and never change afterwards.
"""

import math
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import numpy as np

from ..errors import ConfigurationError


class PaddingType(Enum):
    """How the engine synthesizes samples outside the real image."""
    MIRROR = "mirror"
    ZERO = "zero"


class DecompositionPolicy(Enum):
    """Pre-processing applied to a block before the spectral zoom."""
    REGULAR = "regular"
    PERIODIC_SMOOTH = "periodic_smooth"


class ZoomStrategy(Enum):
    """Spectral method used to realize upsampling."""
    PERIODIZATION = "periodization"
    ZERO_PADDING = "zero_padding"


# Hot point meaning "kernel centre"
DEFAULT_HOT_POINT = (-1, -1)


@dataclass(frozen=True)
class ZoomRatio:
    """
    Rational scale factor, input samples : output samples.

    A ratio of 2:1 doubles each axis; 1:2 halves it. Components are reduced
    by their greatest common divisor.

    Attributes:
        input_resolution: Input side of the ratio (> 0)
        output_resolution: Output side of the ratio (> 0)
    """
    input_resolution: int = 1
    output_resolution: int = 1

    def __post_init__(self):
        """Validate and reduce the ratio."""
        for name in ("input_resolution", "output_resolution"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value <= 0:
                raise ConfigurationError(f"{name} must be > 0, got {value}")

        gcd = math.gcd(int(self.input_resolution), int(self.output_resolution))
        object.__setattr__(self, "input_resolution", int(self.input_resolution) // gcd)
        object.__setattr__(self, "output_resolution", int(self.output_resolution) // gcd)

    @property
    def ratio(self) -> float:
        """Scale factor applied to each axis."""
        return self.input_resolution / self.output_resolution

    @property
    def is_upsampling(self) -> bool:
        return self.input_resolution > self.output_resolution

    def __str__(self) -> str:
        return f"{self.input_resolution}:{self.output_resolution}"

    @classmethod
    def create(cls, text: str) -> "ZoomRatio":
        """
        Parse a ratio string.

        Args:
            text: "I" (equivalent to "I:1") or "I:O"

        Returns:
            ZoomRatio

        Raises:
            ConfigurationError: If the string is not one or two integers
        """
        parts = str(text).strip().split(":")
        if len(parts) not in (1, 2):
            raise ConfigurationError(f"invalid zoom ratio: {text!r}")
        try:
            values = [int(p) for p in parts]
        except ValueError:
            raise ConfigurationError(f"invalid zoom ratio: {text!r}") from None

        if len(values) == 1:
            values.append(1)
        return cls(values[0], values[1])


@dataclass(frozen=True, eq=False)
class FilterSpec:
    """
    Spatial filter applied on the zoomed grid.

    Attributes:
        kernel: 2-D coefficients, or None when no filter is loaded
        hot_point: (x, y) kernel anchor; (-1, -1) selects the centre
        padding_type: Padding used on real image edges
        normalize: Scale coefficients so they sum to one
    """
    kernel: Optional[np.ndarray] = None
    hot_point: Tuple[int, int] = DEFAULT_HOT_POINT
    padding_type: PaddingType = PaddingType.MIRROR
    normalize: bool = False

    def __post_init__(self):
        """Validate the kernel and resolve the hot point."""
        if isinstance(self.padding_type, str):
            object.__setattr__(self, "padding_type", PaddingType(self.padding_type))
        if self.kernel is None:
            return

        kernel = np.asarray(self.kernel, dtype=np.float64)
        if kernel.ndim != 2 or kernel.size == 0:
            raise ConfigurationError(f"filter kernel must be a non-empty 2-D array, got shape {kernel.shape}")

        if self.normalize:
            total = kernel.sum()
            if total == 0:
                raise ConfigurationError("cannot normalize a filter whose coefficients sum to zero")
            kernel = kernel / total
        object.__setattr__(self, "kernel", kernel)

        rows, cols = kernel.shape
        hx, hy = self.hot_point
        if (hx, hy) == DEFAULT_HOT_POINT:
            hx, hy = cols // 2, rows // 2
        if not (0 <= hx < cols and 0 <= hy < rows):
            raise ConfigurationError(
                f"hot point ({hx}, {hy}) is outside the {cols}x{rows} filter kernel"
            )
        object.__setattr__(self, "hot_point", (int(hx), int(hy)))

    @property
    def is_loaded(self) -> bool:
        return self.kernel is not None

    def kernel_extent(self) -> Tuple[int, int, int, int]:
        """
        Kernel support around the hot point on the output grid.

        Returns:
            (top, bottom, left, right) in output pixels
        """
        if self.kernel is None:
            return (0, 0, 0, 0)
        rows, cols = self.kernel.shape
        hx, hy = self.hot_point
        return (hy, rows - 1 - hy, hx, cols - 1 - hx)

    def margin(self, zoom_ratio: ZoomRatio) -> "Padding":
        """
        Input-grid margin needed on each side of a region to apply the kernel.

        Each side is rounded up to a multiple of the output resolution so the
        margin maps to a whole number of output pixels.
        """
        from ..geometry.models import Padding

        def to_input(extent: int) -> int:
            steps = -(-extent // zoom_ratio.input_resolution)
            return steps * zoom_ratio.output_resolution

        top, bottom, left, right = self.kernel_extent()
        return Padding(
            top=to_input(top),
            bottom=to_input(bottom),
            left=to_input(left),
            right=to_input(right),
            padding_type=self.padding_type,
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary (kernel summarized by its shape)."""
        return {
            "loaded": self.is_loaded,
            "kernel_shape": list(self.kernel.shape) if self.kernel is not None else None,
            "hot_point": {"x": self.hot_point[0], "y": self.hot_point[1]},
            "padding_type": self.padding_type.value,
            "normalize": self.normalize,
        }

    @classmethod
    def from_image_path(
        cls,
        path: str,
        hot_point: Tuple[int, int] = DEFAULT_HOT_POINT,
        padding_type: PaddingType = PaddingType.MIRROR,
        normalize: bool = False,
    ) -> "FilterSpec":
        """
        Load a filter kernel stored as a single-band image.

        Raises:
            ConfigurationError: If the file is missing or cannot be decoded
        """
        import cv2

        filter_path = Path(path)
        if not filter_path.exists():
            raise ConfigurationError(f"filter not found: {filter_path}")

        kernel = cv2.imread(str(filter_path), cv2.IMREAD_UNCHANGED)
        if kernel is None:
            raise ConfigurationError(f"could not load filter: {filter_path}")
        if kernel.ndim == 3:
            kernel = kernel[:, :, 0]

        return cls(
            kernel=kernel.astype(np.float64),
            hot_point=hot_point,
            padding_type=padding_type,
            normalize=normalize,
        )
