"""Tests for ResampleConfig and front-end option handling."""

import logging

import cv2
import numpy as np
import pytest

from freqresample.config.models import (
    DecompositionPolicy,
    FilterSpec,
    PaddingType,
    ZoomRatio,
    ZoomStrategy,
)
from freqresample.config.resample_config import (
    ResampleConfig,
    build_config,
    select_zoom_strategy,
)
from freqresample.errors import ConfigurationError


@pytest.fixture
def kernel_path(tmp_path):
    """Write a 3x3 filter kernel image."""
    path = tmp_path / "kernel.tif"
    cv2.imwrite(str(path), np.ones((3, 3), dtype=np.float32))
    return str(path)


class TestResampleConfig:
    """Tests for ResampleConfig dataclass."""

    def test_default_config(self):
        """Test default configuration."""
        config = ResampleConfig()
        assert config.zoom_ratio == ZoomRatio(1, 1)
        assert config.filter.is_loaded is False
        assert config.decomposition_policy is DecompositionPolicy.PERIODIC_SMOOTH
        assert config.zoom_strategy is ZoomStrategy.ZERO_PADDING
        assert config.padding_type is PaddingType.MIRROR

    def test_periodization_requires_filter(self):
        """Test periodization without a filter raises error."""
        with pytest.raises(ConfigurationError, match="filter is required"):
            ResampleConfig(
                zoom_ratio=ZoomRatio(3, 2),
                zoom_strategy=ZoomStrategy.PERIODIZATION,
            )

    def test_periodization_with_filter(self):
        """Test periodization with a loaded filter."""
        config = ResampleConfig(
            zoom_ratio=ZoomRatio(2, 1),
            filter=FilterSpec(kernel=np.ones((3, 3))),
            zoom_strategy=ZoomStrategy.PERIODIZATION,
        )
        assert config.zoom_strategy is ZoomStrategy.PERIODIZATION

    def test_enums_from_strings(self):
        """Test policies given by name."""
        config = ResampleConfig(decomposition_policy="regular", zoom_strategy="zero_padding")
        assert config.decomposition_policy is DecompositionPolicy.REGULAR
        assert config.zoom_strategy is ZoomStrategy.ZERO_PADDING

    def test_none_filter_means_unloaded(self):
        """Test that filter=None is replaced by an unloaded filter."""
        assert ResampleConfig(filter=None).filter.is_loaded is False

    def test_immutable(self):
        """Test that the configuration cannot be mutated."""
        config = ResampleConfig()
        with pytest.raises(AttributeError):
            config.zoom_ratio = ZoomRatio(2, 1)

    def test_to_dict(self):
        """Test serialization."""
        d = ResampleConfig(zoom_ratio=ZoomRatio(3, 2)).to_dict()
        assert d["zoom_ratio"] == "3:2"
        assert d["decomposition_policy"] == "periodic_smooth"
        assert d["zoom_strategy"] == "zero_padding"
        assert d["filter"]["loaded"] is False

    def test_from_dict(self):
        """Test creation from dictionary."""
        config = ResampleConfig.from_dict({
            "ratio": "2:1",
            "no_image_decomposition": True,
            "filter": {"zero_pad_real_edges": True},
        })
        assert config.zoom_ratio == ZoomRatio(2, 1)
        assert config.decomposition_policy is DecompositionPolicy.REGULAR
        assert config.padding_type is PaddingType.ZERO

    def test_from_yaml(self, tmp_path, kernel_path):
        """Test loading from a YAML file with a resample section."""
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text(
            "resample:\n"
            "  ratio: '3:2'\n"
            "  filter:\n"
            f"    path: '{kernel_path}'\n"
            "    normalize: true\n"
            "    hot_point: {x: 1, y: 1}\n"
        )
        config = ResampleConfig.from_yaml(str(yaml_path))
        assert config.zoom_ratio == ZoomRatio(3, 2)
        assert config.filter.is_loaded
        assert config.filter.kernel.sum() == pytest.approx(1.0)
        assert config.zoom_strategy is ZoomStrategy.PERIODIZATION

    def test_from_yaml_missing_file(self, tmp_path):
        """Test that a missing YAML file raises a configuration error."""
        with pytest.raises(ConfigurationError, match="could not read config"):
            ResampleConfig.from_yaml(str(tmp_path / "missing.yaml"))

    def test_from_yaml_malformed(self, tmp_path):
        """Test that unparsable YAML raises a configuration error."""
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("resample: [unclosed\n")
        with pytest.raises(ConfigurationError, match="could not read config"):
            ResampleConfig.from_yaml(str(yaml_path))

    def test_from_yaml_not_a_mapping(self, tmp_path):
        """Test that a YAML list raises a configuration error."""
        yaml_path = tmp_path / "config.yaml"
        yaml_path.write_text("- 2:1\n")
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            ResampleConfig.from_yaml(str(yaml_path))


class TestSelectZoomStrategy:
    """Tests for select_zoom_strategy."""

    def test_upsampling_with_filter(self):
        """Test periodization is the default with a filter."""
        assert select_zoom_strategy(ZoomRatio(2, 1), True) is ZoomStrategy.PERIODIZATION

    def test_upsampling_without_filter(self):
        """Test zero padding is the default without a filter."""
        assert select_zoom_strategy(ZoomRatio(2, 1), False) is ZoomStrategy.ZERO_PADDING

    def test_forced_zero_padding_with_filter_warns(self, caplog):
        """Test advisory warning when a filter is used with zero padding."""
        with caplog.at_level(logging.WARNING):
            strategy = select_zoom_strategy(ZoomRatio(2, 1), True, force_zero_padding=True)
        assert strategy is ZoomStrategy.ZERO_PADDING
        assert "filter will be used with zero padding upsampling" in caplog.text

    def test_forced_periodization_without_filter(self):
        """Test forcing periodization without a filter raises error."""
        with pytest.raises(ConfigurationError, match="filter is required"):
            select_zoom_strategy(ZoomRatio(3, 2), False, force_periodization=True)

    def test_both_forced(self):
        """Test conflicting options raise error."""
        with pytest.raises(ConfigurationError, match="cannot both be forced"):
            select_zoom_strategy(ZoomRatio(2, 1), True, True, True)

    def test_downsampling(self):
        """Test strategy for non-upsampling ratios."""
        assert select_zoom_strategy(ZoomRatio(1, 2), True) is ZoomStrategy.ZERO_PADDING
        assert select_zoom_strategy(ZoomRatio(1, 1), False) is ZoomStrategy.ZERO_PADDING


class TestBuildConfig:
    """Tests for build_config."""

    def test_defaults(self):
        """Test default front-end options."""
        config = build_config()
        assert config.zoom_ratio == ZoomRatio(1, 1)
        assert config.decomposition_policy is DecompositionPolicy.PERIODIC_SMOOTH
        assert config.zoom_strategy is ZoomStrategy.ZERO_PADDING

    def test_periodization_without_filter_aborts(self):
        """Test forced periodization at 3:2 without filter aborts."""
        with pytest.raises(ConfigurationError):
            build_config(ratio="3:2", force_periodization=True)

    def test_filter_selects_periodization(self, kernel_path):
        """Test a loaded filter selects periodization when upsampling."""
        config = build_config(ratio="2", filter_path=kernel_path)
        assert config.filter.is_loaded
        assert config.zoom_strategy is ZoomStrategy.PERIODIZATION

    def test_zero_pad_real_edges(self, kernel_path):
        """Test real edge padding option."""
        config = build_config(filter_path=kernel_path, zero_pad_real_edges=True)
        assert config.filter.padding_type is PaddingType.ZERO

    def test_hot_point(self, kernel_path):
        """Test hot point option."""
        config = build_config(filter_path=kernel_path, hot_point=(0, 2))
        assert config.filter.hot_point == (0, 2)

    def test_invalid_ratio(self):
        """Test invalid ratio string."""
        with pytest.raises(ConfigurationError):
            build_config(ratio="0:1")

    def test_logs_choices(self, caplog):
        """Test configuration choices are logged."""
        with caplog.at_level(logging.INFO):
            build_config(ratio="2:1", no_image_decomposition=True)
        assert "image decomposition: none" in caplog.text
        assert "upsampling: zero padding" in caplog.text
