"""
Run configuration for frequency resampling.

Built once by the front end, then shared read-only by every tile task.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..errors import ConfigurationError
from .models import DecompositionPolicy, FilterSpec, PaddingType, ZoomRatio, ZoomStrategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ResampleConfig:
    """
    Configuration for one resampling run.

    Attributes:
        zoom_ratio: Image-wide zoom ratio
        filter: Filter applied on the zoomed grid (unloaded means no filter)
        decomposition_policy: Pre-processing before the spectral zoom
        zoom_strategy: Upsampling method
    """
    zoom_ratio: ZoomRatio = field(default_factory=ZoomRatio)
    filter: FilterSpec = field(default_factory=FilterSpec)
    decomposition_policy: DecompositionPolicy = DecompositionPolicy.PERIODIC_SMOOTH
    zoom_strategy: ZoomStrategy = ZoomStrategy.ZERO_PADDING

    def __post_init__(self):
        """Validate configuration values."""
        if self.filter is None:
            object.__setattr__(self, "filter", FilterSpec())
        if isinstance(self.decomposition_policy, str):
            object.__setattr__(self, "decomposition_policy", DecompositionPolicy(self.decomposition_policy))
        if isinstance(self.zoom_strategy, str):
            object.__setattr__(self, "zoom_strategy", ZoomStrategy(self.zoom_strategy))
        self._validate()

    def _validate(self):
        """Reject combinations the engine cannot run."""
        if self.zoom_strategy is ZoomStrategy.PERIODIZATION and not self.filter.is_loaded:
            raise ConfigurationError("filter is required with periodization upsampling")

    @property
    def padding_type(self) -> PaddingType:
        return self.filter.padding_type

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "zoom_ratio": str(self.zoom_ratio),
            "filter": self.filter.to_dict(),
            "decomposition_policy": self.decomposition_policy.value,
            "zoom_strategy": self.zoom_strategy.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ResampleConfig":
        """
        Create from dictionary (e.g., from YAML config).

        Accepts the same keys as build_config.
        """
        filter_data = data.get("filter") or {}
        hot_point = filter_data.get("hot_point", {})

        return build_config(
            ratio=str(data.get("ratio", "1:1")),
            filter_path=filter_data.get("path"),
            filter_normalize=filter_data.get("normalize", False),
            zero_pad_real_edges=filter_data.get("zero_pad_real_edges", False),
            hot_point=(hot_point.get("x", -1), hot_point.get("y", -1)),
            no_image_decomposition=data.get("no_image_decomposition", False),
            force_periodization=data.get("periodization", False),
            force_zero_padding=data.get("zero_padding", False),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str) -> "ResampleConfig":
        """
        Load configuration from YAML file.

        Raises:
            ConfigurationError: If the file cannot be read or parsed
        """
        import yaml

        try:
            with open(yaml_path, "r") as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(f"could not read config {yaml_path}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"config {yaml_path} must be a mapping")
        section = data.get("resample", data)
        if not isinstance(section, dict):
            raise ConfigurationError(f"resample section of {yaml_path} must be a mapping")

        return cls.from_dict(section)


def select_zoom_strategy(
    zoom_ratio: ZoomRatio,
    filter_loaded: bool,
    force_periodization: bool = False,
    force_zero_padding: bool = False,
) -> ZoomStrategy:
    """
    Choose the upsampling method.

    Periodization is the default when a filter is loaded, zero padding
    otherwise. The choice only matters for upsampling ratios.

    Raises:
        ConfigurationError: If periodization is forced without a filter
    """
    if force_periodization and force_zero_padding:
        raise ConfigurationError("periodization and zero padding cannot both be forced")

    if force_periodization and not filter_loaded:
        raise ConfigurationError("filter is required with periodization upsampling")

    if not zoom_ratio.is_upsampling:
        return ZoomStrategy.PERIODIZATION if force_periodization else ZoomStrategy.ZERO_PADDING

    if force_zero_padding or not filter_loaded:
        logger.info("upsampling: zero padding")
        if filter_loaded:
            logger.warning("filter will be used with zero padding upsampling")
        return ZoomStrategy.ZERO_PADDING

    logger.info("upsampling: periodization")
    return ZoomStrategy.PERIODIZATION


def build_config(
    ratio: str = "1:1",
    filter_path: Optional[str] = None,
    filter_normalize: bool = False,
    zero_pad_real_edges: bool = False,
    hot_point: tuple = (-1, -1),
    no_image_decomposition: bool = False,
    force_periodization: bool = False,
    force_zero_padding: bool = False,
) -> ResampleConfig:
    """
    Translate front-end options into a validated ResampleConfig.

    Args:
        ratio: Zoom ratio string, "I" or "I:O"
        filter_path: Optional path to a filter image
        filter_normalize: Normalize filter coefficients
        zero_pad_real_edges: Zero padding on real image edges instead of mirror
        hot_point: Filter hot point (x, y), (-1, -1) for the centre
        no_image_decomposition: Skip periodic plus smooth decomposition
        force_periodization: Force periodization upsampling (needs a filter)
        force_zero_padding: Force zero padding upsampling

    Raises:
        ConfigurationError: On any invalid option
    """
    zoom_ratio = ZoomRatio.create(ratio)
    padding_type = PaddingType.ZERO if zero_pad_real_edges else PaddingType.MIRROR

    frequency_filter = FilterSpec(padding_type=padding_type)
    if filter_path:
        logger.info(f"filter path: {filter_path}")
        frequency_filter = FilterSpec.from_image_path(
            filter_path,
            hot_point=tuple(hot_point),
            padding_type=padding_type,
            normalize=filter_normalize,
        )

    if no_image_decomposition:
        logger.info("image decomposition: none")
        decomposition_policy = DecompositionPolicy.REGULAR
    else:
        logger.info("image decomposition: periodic plus smooth")
        decomposition_policy = DecompositionPolicy.PERIODIC_SMOOTH

    zoom_strategy = select_zoom_strategy(
        zoom_ratio,
        frequency_filter.is_loaded,
        force_periodization=force_periodization,
        force_zero_padding=force_zero_padding,
    )

    return ResampleConfig(
        zoom_ratio=zoom_ratio,
        filter=frequency_filter,
        decomposition_policy=decomposition_policy,
        zoom_strategy=zoom_strategy,
    )
