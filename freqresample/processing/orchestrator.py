"""
TileResampler: per-tile driver of a frequency resampling run.

For each output tile: plan the input region, measure the padding deficit,
extract the real pixels, call the engine, reconcile the returned block with
the tile and write it into the output buffer.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

import numpy as np

from ..config.resample_config import ResampleConfig
from ..config.models import ZoomStrategy
from ..engine import EngineFactory, ResamplingEngine, SpectralResampler
from ..errors import ConfigurationError, EngineError
from ..geometry.models import Padding, Region
from ..geometry.padding import real_region, remaining_padding
from ..geometry.planner import output_extent, output_offset, plan_input_region
from ..geometry.resizer import reconcile
from ..geometry.tiler import OutputTiler
from .extractor import extract_block

logger = logging.getLogger(__name__)


@dataclass
class ProcessingProgress:
    """Progress information for a resampling run."""
    total_tiles: int
    completed_tiles: int
    current_tile: Optional[Region] = None
    status: str = "pending"  # pending, processing, complete, error
    error_message: Optional[str] = None

    @property
    def progress_percent(self) -> float:
        """Get completion percentage."""
        if self.total_tiles == 0:
            return 100.0
        return (self.completed_tiles / self.total_tiles) * 100

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "total_tiles": self.total_tiles,
            "completed_tiles": self.completed_tiles,
            "current_tile": self.current_tile.to_dict() if self.current_tile else None,
            "status": self.status,
            "progress_percent": self.progress_percent,
            "error_message": self.error_message,
        }


# Called with the real input region before pixels are read from it
MaterializeFn = Callable[[Region], None]


class TileResampler:
    """
    Resamples an image tile by tile through an external engine.

    The configuration is frozen and shared by every worker; tiles never
    overlap, so output writes need no locking.

    Example:
        >>> resampler = TileResampler(build_config(ratio="2:1"))
        >>> zoomed = resampler.run(image, tile_size=256, max_workers=4)
    """

    def __init__(
        self,
        config: ResampleConfig,
        engine: Optional[ResamplingEngine] = None,
        engine_factory: Optional[EngineFactory] = None,
        reentrant: bool = True,
        materialize: Optional[MaterializeFn] = None,
        progress_callback: Optional[Callable[[ProcessingProgress], None]] = None,
    ):
        """
        Initialize the resampler.

        Args:
            config: Validated run configuration
            engine: Engine shared by all workers (default: SpectralResampler)
            engine_factory: Builds engines; used per worker when not reentrant
            reentrant: Whether one engine may serve concurrent calls
            materialize: Optional hook for lazily produced input images
            progress_callback: Optional callback for progress updates

        Raises:
            ConfigurationError: If the configuration cannot be run
        """
        if config.zoom_strategy is ZoomStrategy.PERIODIZATION and not config.filter.is_loaded:
            raise ConfigurationError("filter is required with periodization upsampling")

        self.config = config
        self.filter_margin = config.filter.margin(config.zoom_ratio)
        self.materialize = materialize
        self.progress_callback = progress_callback
        self.reentrant = reentrant

        self._engine_factory = engine_factory
        self._engine = engine
        if self._engine is None and (reentrant or engine_factory is None):
            self._engine = engine_factory() if engine_factory else SpectralResampler()

        self._local = threading.local()
        self._engine_lock = threading.Lock()
        self._progress = ProcessingProgress(total_tiles=0, completed_tiles=0)

        logger.debug(
            f"resampler initialized: ratio {config.zoom_ratio}, "
            f"strategy {config.zoom_strategy.value}, margin {self.filter_margin.to_dict()}"
        )

    def output_region(self, input_region: Region) -> Region:
        """Full output extent for the full input extent."""
        return output_extent(input_region, self.config.zoom_ratio)

    def required_input_region(self, output_region: Region, image_bounds: Region) -> Region:
        """
        Input pixels a host pipeline must provide for an output region.

        This is the planned, margin-expanded region restricted to the image.
        """
        ideal = plan_input_region(output_region, self.config.zoom_ratio, self.filter_margin)
        return real_region(ideal, image_bounds)

    def process_tile(
        self,
        image: np.ndarray,
        output: np.ndarray,
        tile: Region,
        thread_id: Optional[int] = None,
    ) -> Region:
        """
        Produce one output tile.

        Args:
            image: Input image, (H, W) or (H, W, C)
            output: Output buffer covering the full output extent
            tile: Output tile to produce
            thread_id: Worker identifier for logging (default: current thread name)

        Returns:
            Output region actually written

        Raises:
            EngineError: If the engine fails on this tile
            GeometryError: On region/buffer inconsistencies
        """
        zoom_ratio = self.config.zoom_ratio
        image_bounds = Region.from_shape(image.shape)

        ideal = plan_input_region(tile, zoom_ratio, self.filter_margin)
        padding = remaining_padding(ideal, image_bounds, self.config.padding_type)
        real = real_region(ideal, image_bounds)
        offset = output_offset(tile, zoom_ratio)
        worker = thread_id if thread_id is not None else threading.current_thread().name

        logger.debug(
            f"[worker {worker}] tile {tile.bounds}: input {ideal.bounds}, "
            f"real {real.bounds}, padding {padding.to_dict()}"
        )

        if self.materialize is not None:
            self.materialize(real)

        written = tile
        for source, target in self._bands(image, output):
            block = extract_block(source, real, ideal)
            result = self._resample(block, padding)

            written = reconcile(tile, (result.shape[1], result.shape[0]), offset)
            dx, dy = offset
            target[written.to_slices()] = result[dy:dy + written.height, dx:dx + written.width]

        return written

    def run(
        self,
        image: np.ndarray,
        tile_size: int = 256,
        max_workers: int = 4,
        parallel: bool = True,
    ) -> np.ndarray:
        """
        Resample a whole in-memory image.

        Args:
            image: Input image, (H, W) or (H, W, C)
            tile_size: Output tile side in pixels
            max_workers: Thread pool size
            parallel: Whether to process tiles in parallel

        Returns:
            Resampled float64 image

        Raises:
            FrequencyResampleError: On the first failing tile; no partial
                output is returned
        """
        image = np.asarray(image, dtype=np.float64)
        if image.ndim not in (2, 3):
            raise ValueError(f"expected an (H, W) or (H, W, C) image, got shape {image.shape}")
        if max_workers < 1:
            raise ConfigurationError(f"max_workers must be >= 1, got {max_workers}")

        extent = self.output_region(Region.from_shape(image.shape))
        output = np.zeros(extent.shape + image.shape[2:], dtype=np.float64)

        tiles = OutputTiler(tile_size, self.config.zoom_ratio).split(extent)
        logger.info(
            f"resampling {image.shape[1]}x{image.shape[0]} -> {extent.width}x{extent.height} "
            f"(ratio {self.config.zoom_ratio}, {len(tiles)} tiles)"
        )
        self._update_progress(len(tiles), 0, "processing")

        if parallel and len(tiles) > 1:
            self._process_parallel(image, output, tiles, max_workers)
        else:
            self._process_sequential(image, output, tiles)

        self._update_progress(len(tiles), len(tiles), "complete")
        return output

    def _process_sequential(
        self,
        image: np.ndarray,
        output: np.ndarray,
        tiles: List[Region],
    ):
        """Process tiles one after another."""
        for i, tile in enumerate(tiles):
            self._update_progress(len(tiles), i, "processing", tile)
            try:
                self.process_tile(image, output, tile)
            except Exception as e:
                self._update_progress(len(tiles), i, "error", tile, str(e))
                raise

    def _process_parallel(
        self,
        image: np.ndarray,
        output: np.ndarray,
        tiles: List[Region],
        max_workers: int,
    ):
        """Process tiles on a ThreadPoolExecutor, aborting on the first failure."""
        completed = 0

        with ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="resample") as executor:
            future_to_tile = {
                executor.submit(self.process_tile, image, output, tile): tile
                for tile in tiles
            }

            for future in as_completed(future_to_tile):
                tile = future_to_tile[future]
                try:
                    future.result()
                except Exception as e:
                    for pending in future_to_tile:
                        pending.cancel()
                    self._update_progress(len(tiles), completed, "error", tile, str(e))
                    raise

                completed += 1
                self._update_progress(len(tiles), completed, "processing", tile)

    def _bands(
        self,
        image: np.ndarray,
        output: np.ndarray,
    ) -> List[Tuple[np.ndarray, np.ndarray]]:
        """Matching (input, output) single-band views."""
        if image.ndim == 2:
            return [(image, output)]
        return [(image[:, :, c], output[:, :, c]) for c in range(image.shape[2])]

    def _get_engine(self) -> ResamplingEngine:
        """Engine for the calling thread."""
        if self._engine is not None:
            return self._engine

        engine = getattr(self._local, "engine", None)
        if engine is None:
            engine = self._engine_factory()
            self._local.engine = engine
        return engine

    def _resample(self, block: np.ndarray, padding: Padding) -> np.ndarray:
        """Call the engine, turning any failure into EngineError."""
        config = self.config
        engine = self._get_engine()

        args = (
            block,
            config.zoom_ratio,
            config.filter,
            config.decomposition_policy,
            config.zoom_strategy,
            padding,
        )

        try:
            if self.reentrant or self._engine is None:
                result = engine(*args)
            else:
                # Shared engine that is not reentrant: serialize calls
                with self._engine_lock:
                    result = engine(*args)
        except Exception as e:
            raise EngineError(f"engine failed on block {block.shape}: {e}") from e

        if not isinstance(result, np.ndarray) or result.ndim != 2:
            raise EngineError(f"engine returned an invalid block: {type(result).__name__}")
        return result

    def _update_progress(
        self,
        total: int,
        completed: int,
        status: str,
        current_tile: Optional[Region] = None,
        error: Optional[str] = None,
    ):
        """Update progress and notify callback."""
        self._progress = ProcessingProgress(
            total_tiles=total,
            completed_tiles=completed,
            current_tile=current_tile,
            status=status,
            error_message=error,
        )

        if self.progress_callback:
            self.progress_callback(self._progress)

    @property
    def progress(self) -> ProcessingProgress:
        """Get current processing progress."""
        return self._progress
