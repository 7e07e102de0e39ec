"""
Command-line interface for frequency resampling.

Usage:
    python -m freqresample <input> <output> [--ratio 2:1] [--filter kernel.tif]
    python -m freqresample --help
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

import cv2
import numpy as np

from .config.models import DEFAULT_HOT_POINT
from .config.resample_config import ResampleConfig, build_config
from .errors import FrequencyResampleError

logger = logging.getLogger(__name__)

VERBOSITY_LEVELS = {
    "trace": logging.DEBUG,
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warn": logging.WARNING,
    "err": logging.ERROR,
    "critical": logging.CRITICAL,
    "off": logging.CRITICAL + 10,
}

FLOAT_EXTENSIONS = {".tif", ".tiff", ".exr"}


def setup_argparse() -> argparse.ArgumentParser:
    """Set up argument parser."""
    parser = argparse.ArgumentParser(
        prog="freqresample",
        description="Resample images in the frequency domain",
    )

    parser.add_argument(
        "input",
        type=str,
        help="Path to the input image",
    )
    parser.add_argument(
        "output",
        type=str,
        help="Path to the output image",
    )
    parser.add_argument(
        "-v",
        "--verbosity",
        choices=list(VERBOSITY_LEVELS),
        default="info",
        help="Verbosity (default: info)",
    )
    parser.add_argument(
        "--config",
        type=str,
        help="YAML configuration file (replaces the resampling and filter options)",
    )

    # resampling
    resampling = parser.add_argument_group("resampling")
    resampling.add_argument(
        "--ratio",
        type=str,
        default="1:1",
        help="Resampling ratio as input:output, allowed format: I (equivalent to I:1), I:O (default: 1:1)",
    )
    resampling.add_argument(
        "--no-image-decomposition",
        action="store_true",
        help="Do not decompose the input image (default: periodic plus smooth decomposition)",
    )
    upsample = resampling.add_mutually_exclusive_group()
    upsample.add_argument(
        "--periodization",
        action="store_true",
        help="Force periodization as upsampling algorithm (default if a filter is provided). Requires a filter",
    )
    upsample.add_argument(
        "--zero-padding",
        action="store_true",
        help="Force zero padding as upsampling algorithm (default if no filter is provided)",
    )

    # filter
    filter_group = parser.add_argument_group("filter")
    filter_group.add_argument(
        "--filter",
        type=str,
        dest="filter_path",
        help="Path to the filter image to apply to the zoomed image",
    )
    filter_group.add_argument(
        "--filter-normalize",
        action="store_true",
        help="Normalize filter coefficients (default: no normalization)",
    )
    filter_group.add_argument(
        "--zero-pad-real-edges",
        action="store_true",
        help="Force zero padding strategy on real input edges (default: mirror padding)",
    )
    filter_group.add_argument(
        "--hot-point-x",
        type=int,
        default=DEFAULT_HOT_POINT[0],
        help="Hot point x coordinate (default: kernel centre)",
    )
    filter_group.add_argument(
        "--hot-point-y",
        type=int,
        default=DEFAULT_HOT_POINT[1],
        help="Hot point y coordinate (default: kernel centre)",
    )

    # processing
    processing = parser.add_argument_group("processing")
    processing.add_argument(
        "--tile-size",
        type=int,
        default=256,
        help="Output tile size in pixels (default: 256)",
    )
    processing.add_argument(
        "-w",
        "--workers",
        type=int,
        default=4,
        help="Number of parallel workers (default: 4)",
    )

    return parser


def config_from_args(args) -> ResampleConfig:
    """Build the run configuration from parsed arguments."""
    if args.config:
        return ResampleConfig.from_yaml(args.config)

    return build_config(
        ratio=args.ratio,
        filter_path=args.filter_path,
        filter_normalize=args.filter_normalize,
        zero_pad_real_edges=args.zero_pad_real_edges,
        hot_point=(args.hot_point_x, args.hot_point_y),
        no_image_decomposition=args.no_image_decomposition,
        force_periodization=args.periodization,
        force_zero_padding=args.zero_padding,
    )


def write_image(path: Path, image: np.ndarray) -> bool:
    """Write a resampled image, keeping floats for TIFF/EXR outputs."""
    if path.suffix.lower() in FLOAT_EXTENSIONS:
        data = image.astype(np.float32)
    else:
        data = np.clip(np.rint(image), 0, 255).astype(np.uint8)
    return cv2.imwrite(str(path), data)


def cmd_resample(args) -> int:
    """Handle a resampling run."""
    from .processing.orchestrator import TileResampler

    # Validate input path
    input_path = Path(args.input)
    if not input_path.exists():
        print(f"Error: Image not found: {input_path}", file=sys.stderr)
        return 1

    # Load image
    image = cv2.imread(str(input_path), cv2.IMREAD_UNCHANGED)
    if image is None:
        print(f"Error: Could not load image: {input_path}", file=sys.stderr)
        return 1

    try:
        config = config_from_args(args)
        resampler = TileResampler(config)
        result = resampler.run(image, tile_size=args.tile_size, max_workers=args.workers)
    except FrequencyResampleError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1

    output_path = Path(args.output)
    if not write_image(output_path, result):
        print(f"Error: Could not write image: {output_path}", file=sys.stderr)
        return 1

    logger.info(f"Resampled image saved to: {output_path}")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point."""
    parser = setup_argparse()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=VERBOSITY_LEVELS[args.verbosity],
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    return cmd_resample(args)


if __name__ == "__main__":
    sys.exit(main())
