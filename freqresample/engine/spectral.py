"""
Reference frequency resampling engine (numpy FFT + OpenCV).

The engine receives a block sized to the ideal input region. Rows and
columns listed in the padding are placeholders: they are synthesized here by
mirror reflection or zero fill before the zoom. After zooming and filtering,
the filter margins are stripped so the returned block covers exactly the
output samples of the planned core region.
"""

import logging
from typing import Tuple

import cv2
import numpy as np

from ..config.models import DecompositionPolicy, FilterSpec, PaddingType, ZoomRatio, ZoomStrategy
from ..geometry.models import Padding
from ..geometry.planner import zoomed_size
from .decomposition import periodic_smooth_decomposition

logger = logging.getLogger(__name__)


def synthesize_padding(block: np.ndarray, padding: Padding) -> np.ndarray:
    """
    Replace the padded border of a block with synthesized samples.

    Args:
        block: Block sized to the ideal region
        padding: Placeholder rows/columns on each side

    Returns:
        New block of the same shape
    """
    if padding.is_zero:
        return block

    rows, cols = block.shape
    interior = block[padding.top:rows - padding.bottom, padding.left:cols - padding.right]
    pad_width = ((padding.top, padding.bottom), (padding.left, padding.right))

    if interior.size == 0:
        # Nothing real to reflect
        return np.zeros_like(block)

    if padding.padding_type is PaddingType.ZERO:
        return np.pad(interior, pad_width, mode="constant")
    return np.pad(interior, pad_width, mode="reflect")


def fourier_resize(image: np.ndarray, shape: Tuple[int, int]) -> np.ndarray:
    """
    Resize by cropping or zero padding the centred spectrum.

    Sample k of the result sits at input position k * n / m on each axis.
    """
    rows, cols = image.shape
    out_rows, out_cols = shape
    if (rows, cols) == (out_rows, out_cols):
        return image.astype(np.float64, copy=True)

    spectrum = np.fft.fftshift(np.fft.fft2(image))
    resized = np.zeros((out_rows, out_cols), dtype=np.complex128)

    keep_rows = min(rows, out_rows)
    keep_cols = min(cols, out_cols)
    src_y = rows // 2 - keep_rows // 2
    src_x = cols // 2 - keep_cols // 2
    dst_y = out_rows // 2 - keep_rows // 2
    dst_x = out_cols // 2 - keep_cols // 2
    resized[dst_y:dst_y + keep_rows, dst_x:dst_x + keep_cols] = \
        spectrum[src_y:src_y + keep_rows, src_x:src_x + keep_cols]

    scale = (out_rows * out_cols) / (rows * cols)
    return np.real(np.fft.ifft2(np.fft.ifftshift(resized))) * scale


def _resize_smooth(image: np.ndarray, shape: Tuple[int, int]) -> np.ndarray:
    """Bilinear zoom with the same sample alignment as fourier_resize."""
    rows, cols = image.shape
    out_rows, out_cols = shape
    matrix = np.array(
        [[out_cols / cols, 0.0, 0.0], [0.0, out_rows / rows, 0.0]],
        dtype=np.float64,
    )
    return cv2.warpAffine(
        image,
        matrix,
        (out_cols, out_rows),
        flags=cv2.INTER_LINEAR,
        borderMode=cv2.BORDER_REPLICATE,
    )


def _apply_filter(image: np.ndarray, filter_spec: FilterSpec) -> np.ndarray:
    """Correlate with the kernel anchored on its hot point."""
    if filter_spec.kernel is None:
        return image

    border = cv2.BORDER_CONSTANT if filter_spec.padding_type is PaddingType.ZERO else cv2.BORDER_REFLECT_101
    return cv2.filter2D(
        image,
        -1,
        filter_spec.kernel,
        anchor=filter_spec.hot_point,
        borderType=border,
    )


class SpectralResampler:
    """
    Frequency-domain resampler for single-band blocks.

    Stateless: one instance can serve concurrent calls with independent
    blocks.

    Example:
        >>> engine = SpectralResampler()
        >>> out = engine(block, ZoomRatio(2, 1), FilterSpec(),
        ...              DecompositionPolicy.REGULAR, ZoomStrategy.ZERO_PADDING, Padding())
    """

    def __call__(
        self,
        block: np.ndarray,
        zoom_ratio: ZoomRatio,
        filter_spec: FilterSpec,
        decomposition_policy: DecompositionPolicy,
        zoom_strategy: ZoomStrategy,
        padding: Padding,
    ) -> np.ndarray:
        """
        Resample one block.

        Args:
            block: 2-D block sized to the ideal input region
            zoom_ratio: Zoom ratio
            filter_spec: Filter (possibly not loaded)
            decomposition_policy: Regular or periodic plus smooth
            zoom_strategy: Periodization or zero padding
            padding: Placeholder border to synthesize

        Returns:
            Resampled block without filter margins

        Raises:
            ValueError: If the block is not a non-empty 2-D array whose sides
                are multiples of the output resolution
        """
        block = np.asarray(block, dtype=np.float64)
        if block.ndim != 2 or block.size == 0:
            raise ValueError(f"engine expects a non-empty 2-D block, got shape {block.shape}")

        out_res = zoom_ratio.output_resolution
        if block.shape[0] % out_res or block.shape[1] % out_res:
            raise ValueError(
                f"block shape {block.shape} is not a multiple of output resolution {out_res}"
            )

        padded = synthesize_padding(block, padding)

        if zoom_ratio.input_resolution == zoom_ratio.output_resolution:
            zoomed = _apply_filter(padded, filter_spec)
        elif zoom_strategy is ZoomStrategy.PERIODIZATION and zoom_ratio.is_upsampling:
            zoomed = self._periodize(padded, zoom_ratio, filter_spec, decomposition_policy)
        else:
            zoomed = self._zoom(padded, zoom_ratio, decomposition_policy)
            zoomed = _apply_filter(zoomed, filter_spec)

        margin = filter_spec.margin(zoom_ratio).scaled(
            zoom_ratio.input_resolution, zoom_ratio.output_resolution
        )
        rows, cols = zoomed.shape
        return zoomed[margin.top:rows - margin.bottom, margin.left:cols - margin.right]

    def _zoom(
        self,
        image: np.ndarray,
        zoom_ratio: ZoomRatio,
        decomposition_policy: DecompositionPolicy,
    ) -> np.ndarray:
        shape = zoomed_size(image.shape, zoom_ratio)

        if decomposition_policy is DecompositionPolicy.PERIODIC_SMOOTH:
            periodic, smooth = periodic_smooth_decomposition(image)
            return fourier_resize(periodic, shape) + _resize_smooth(smooth, shape)

        return fourier_resize(image, shape)

    def _periodize(
        self,
        image: np.ndarray,
        zoom_ratio: ZoomRatio,
        filter_spec: FilterSpec,
        decomposition_policy: DecompositionPolicy,
    ) -> np.ndarray:
        """Zero insertion (spectrum periodization), filtering, then decimation."""
        in_res = zoom_ratio.input_resolution
        out_res = zoom_ratio.output_resolution
        rows, cols = image.shape

        smooth = None
        if decomposition_policy is DecompositionPolicy.PERIODIC_SMOOTH:
            image, smooth = periodic_smooth_decomposition(image)

        upsampled = np.zeros((rows * in_res, cols * in_res), dtype=np.float64)
        upsampled[::in_res, ::in_res] = image * (in_res * in_res)
        if smooth is not None:
            upsampled += _resize_smooth(smooth, upsampled.shape)

        upsampled = _apply_filter(upsampled, filter_spec)
        return upsampled[::out_res, ::out_res]
