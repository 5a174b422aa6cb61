"""
Region Segmentation Engine

Turns generated line art into a color-by-number (or color-by-letter) page:
finds enclosed white regions by seeded flood-fill, labels the large ones
at their centroid and appends a colour legend below the image.
"""

import logging
import math
import time
from typing import Iterable, Optional, Sequence

import numpy as np

from ..pixels import ImageLike, flatten_on_white, to_rgba_array
from ..settings import SegmentationConfig
from .factory import create_fill_backend, create_label_strategy
from .grid import ScanGrid
from .labeling import region_adjacency
from .legend import DEFAULT_LEGEND, LabelStyle, LegendEntry
from .render import render_annotations
from .result import Region, SegmentationResult

logger = logging.getLogger(__name__)


class SegmentationEngine:
    """
    Segments one image per process() call.

    The engine holds configuration only; every mask, region list and
    strategy instance is created inside process(), so one engine can be
    shared by concurrent page workers.
    """

    def __init__(
        self,
        config: Optional[SegmentationConfig] = None,
        legend: Sequence[LegendEntry] = DEFAULT_LEGEND,
        label_style: LabelStyle = LabelStyle.NUMBER,
        label_strategy: Optional[str] = None,
        fill_backend: Optional[str] = None,
        seed: Optional[int] = None,
        font_id: str = "helvetica",
        font_dirs: Iterable[str] = (),
    ):
        """
        Initialize the segmentation engine.

        Args:
            config: Segmentation constants (defaults to the reference values)
            legend: Legend entries drawn in the footer
            label_style: Print labels as numbers or letters
            label_strategy: Overrides config.label_strategy
            fill_backend: Overrides config.fill_backend
            seed: Seed for the random label strategy
            font_id: Font style for labels and legend
            font_dirs: Extra font directories
        """
        self.config = config or SegmentationConfig()
        self.legend = tuple(legend)
        self.label_style = LabelStyle(label_style)
        self.label_strategy = label_strategy or self.config.label_strategy
        self.fill_backend = fill_backend or self.config.fill_backend
        self.seed = seed
        self.font_id = font_id
        self.font_dirs = tuple(font_dirs)

        if self.config.label_cycle < 1:
            raise ValueError("label_cycle must be at least 1")
        if self.config.seed_stride < 1:
            raise ValueError("seed_stride must be at least 1")

    def process(self, image: ImageLike) -> SegmentationResult:
        """
        Segment an image and render the annotated page.

        Args:
            image: Line-art image (PIL Image or numpy buffer)

        Returns:
            SegmentationResult with the annotated surface and regions

        Raises:
            ValueError: If the image is not a usable pixel buffer
        """
        start_time = time.perf_counter()
        cfg = self.config

        # Classify pixels as they will print: transparent areas are paper
        rgba = flatten_on_white(to_rgba_array(image))
        grid = ScanGrid(rgba, cfg.white_threshold)
        backend = create_fill_backend(self.fill_backend)
        strategy = create_label_strategy(self.label_strategy, seed=self.seed)

        region_map = None
        if strategy.needs_adjacency:
            region_map = np.zeros((grid.height, grid.width), dtype=np.int32)

        regions, fills = self._scan(grid, backend, region_map)

        neighbours = None
        if region_map is not None:
            neighbours = region_adjacency(region_map, regions, cfg.adjacency_gap)

        for region, label in zip(regions, strategy.assign(regions, cfg.label_cycle, neighbours)):
            region.label_id = label

        annotated = render_annotations(
            rgba, regions, self.legend, self.label_style, cfg,
            font_id=self.font_id, font_dirs=self.font_dirs
        )

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            f"Segmented {grid.width}x{grid.height}: {len(regions)} regions from "
            f"{fills} fills ({self.fill_backend}, {self.label_strategy}) in {elapsed_ms:.1f}ms"
        )

        return SegmentationResult(
            image=annotated,
            regions=regions,
            fills=fills,
            rejected=fills - len(regions),
            visited_pixels=grid.visited.visited_count(),
            processing_time_ms=elapsed_ms
        )

    def _scan(self, grid: ScanGrid, backend, region_map: Optional[np.ndarray]):
        """
        Visit seed points on a fixed stride and flood-fill from white ones.

        Dark seeds are marked visited so they are never tried again.
        Rejected fills stay visited as well.

        Returns:
            Tuple of (accepted regions, number of fills started)
        """
        cfg = self.config
        visited = grid.visited
        margin = cfg.border_margin
        stride = cfg.seed_stride

        regions = []
        fills = 0

        for y in range(margin, grid.height - margin, stride):
            for x in range(margin, grid.width - margin, stride):
                if visited.is_visited(x, y):
                    continue

                if not grid.is_white(x, y):
                    visited.mark(x, y)
                    continue

                fill = backend.fill(grid, x, y)
                fills += 1

                if fill.pixel_count <= cfg.min_region_pixels:
                    continue

                # Concave regions can have their centroid outside the region
                cx, cy = fill.centroid
                if not grid.is_white(math.floor(cx), math.floor(cy)):
                    continue

                regions.append(Region(
                    centroid_x=cx,
                    centroid_y=cy,
                    pixel_count=fill.pixel_count,
                    bbox=fill.bbox
                ))
                if region_map is not None:
                    region_map.flat[fill.indices] = len(regions)

        return regions, fills


def segment_and_annotate(
    image: ImageLike,
    legend: Sequence[LegendEntry] = DEFAULT_LEGEND,
    config: Optional[SegmentationConfig] = None,
    **engine_options
) -> ImageLike:
    """
    Best-effort color-by-number annotation.

    Any failure (unreadable or empty pixel data included) is logged and the
    input is returned unchanged, so a page can always be produced.

    Args:
        image: Line-art image
        legend: Legend entries drawn in the footer
        config: Segmentation constants
        **engine_options: Extra SegmentationEngine arguments

    Returns:
        Annotated RGBA buffer, or the original image on failure
    """
    try:
        engine = SegmentationEngine(config=config, legend=legend, **engine_options)
        return engine.process(image).image
    except Exception as e:
        logger.error(f"Region annotation failed, returning original image: {e}")
        return image
