"""
Page Rendering

Chooses the renderer for each book page from its coloring mode and renders
whole books on a thread pool, one page per task.

Usage:
    from activity_book.pages import BookRenderer, ColoringMode, PageRequest

    renderer = BookRenderer()
    pages = renderer.render_pages([
        PageRequest(ColoringMode.NUMBER, image=line_art),
        PageRequest(ColoringMode.TRACE, characters=["A", "B"]),
    ])
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .pixels import ImageLike
from .segmentation import DEFAULT_LEGEND, LabelStyle, LegendEntry, segment_and_annotate
from .settings import (
    SegmentationConfig,
    WorksheetConfig,
    segmentation_config,
    worksheet_config,
)
from .worksheet import describe_trace_letters, parse_trace_letters, plan_trace_pages, render_worksheet

logger = logging.getLogger(__name__)


class ColoringMode(str, Enum):
    """
    Page modes.

    STANDARD: generated line art used as is
    NUMBER: line art annotated with numbered regions and a legend
    LETTER: line art annotated with lettered regions and a legend
    TRACE: procedurally rendered handwriting worksheet
    """
    STANDARD = "standard"
    NUMBER = "number"
    LETTER = "letter"
    TRACE = "trace"


@dataclass
class PageRequest:
    """One page to render."""
    mode: ColoringMode
    image: Optional[ImageLike] = None       # Line art for standard/number/letter
    characters: List[str] = field(default_factory=list)  # Trace letters
    font_id: str = "helvetica"
    description: str = ""                   # Trace letters fall back to this


@dataclass(frozen=True)
class RenderOptions:
    """Immutable render configuration shared by all pages of a book."""
    segmentation: SegmentationConfig = field(default_factory=SegmentationConfig)
    worksheet: WorksheetConfig = field(default_factory=WorksheetConfig)
    legend: Tuple[LegendEntry, ...] = DEFAULT_LEGEND
    label_strategy: Optional[str] = None
    fill_backend: Optional[str] = None
    seed: Optional[int] = None
    font_dirs: Tuple[str, ...] = ()

    @classmethod
    def from_settings(cls, settings: Dict[str, Any], **overrides: Any) -> "RenderOptions":
        """Build options from a settings dictionary (see settings.load_settings)."""
        options = cls(
            segmentation=segmentation_config(settings),
            worksheet=worksheet_config(settings),
            font_dirs=tuple(settings.get("font_dirs") or ()),
        )
        return replace(options, **overrides)


def _require_image(request: PageRequest) -> ImageLike:
    if request.image is None:
        raise ValueError(f"A {ColoringMode(request.mode).value} page needs an image")
    return request.image


def _render_standard(request: PageRequest, options: RenderOptions) -> ImageLike:
    return _require_image(request)


def _annotate(request: PageRequest, options: RenderOptions, style: LabelStyle) -> ImageLike:
    return segment_and_annotate(
        _require_image(request),
        legend=options.legend,
        config=options.segmentation,
        label_style=style,
        label_strategy=options.label_strategy,
        fill_backend=options.fill_backend,
        seed=options.seed,
        font_dirs=options.font_dirs,
    )


def _render_number(request: PageRequest, options: RenderOptions) -> ImageLike:
    return _annotate(request, options, LabelStyle.NUMBER)


def _render_letter(request: PageRequest, options: RenderOptions) -> ImageLike:
    return _annotate(request, options, LabelStyle.LETTER)


def _render_trace(request: PageRequest, options: RenderOptions) -> np.ndarray:
    characters = request.characters or parse_trace_letters(request.description)
    return render_worksheet(characters, request.font_id, options.worksheet, options.font_dirs)


_RENDERERS: Dict[ColoringMode, Callable[[PageRequest, RenderOptions], ImageLike]] = {
    ColoringMode.STANDARD: _render_standard,
    ColoringMode.NUMBER: _render_number,
    ColoringMode.LETTER: _render_letter,
    ColoringMode.TRACE: _render_trace,
}


def render_page(request: PageRequest, options: Optional[RenderOptions] = None) -> ImageLike:
    """
    Render one page according to its mode.

    Args:
        request: Page to render
        options: Render configuration (reference defaults if None)

    Returns:
        Page image (RGBA buffer, or the input image for standard pages)

    Raises:
        ValueError: Unknown mode, or an image mode without an image
    """
    mode = ColoringMode(request.mode)
    return _RENDERERS[mode](request, options or RenderOptions())


def trace_requests(page_count: int, font_id: str = "helvetica") -> List[PageRequest]:
    """Trace page requests covering A-Z across page_count pages."""
    return [
        PageRequest(ColoringMode.TRACE, characters=letters, font_id=font_id,
                    description=describe_trace_letters(letters))
        for letters in plan_trace_pages(page_count)
    ]


class BookRenderer:
    """
    Renders the pages of a book concurrently.

    Pages share only the immutable RenderOptions; a failing page is logged
    and returned as None without stopping the others.
    """

    def __init__(self, options: Optional[RenderOptions] = None, max_workers: int = 4):
        self.options = options or RenderOptions()
        self.max_workers = max(1, max_workers)

    def render_pages(self, requests: Sequence[PageRequest]) -> List[Optional[ImageLike]]:
        """
        Render pages in parallel.

        Args:
            requests: Pages in book order

        Returns:
            Rendered pages in the same order (None for failed pages)
        """
        if not requests:
            return []

        results: List[Optional[ImageLike]] = []
        workers = min(self.max_workers, len(requests))

        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="page") as pool:
            futures = [pool.submit(render_page, request, self.options) for request in requests]

            for index, future in enumerate(futures):
                try:
                    results.append(future.result())
                except Exception as e:
                    logger.error(f"Page {index + 1} failed: {e}")
                    results.append(None)

        logger.info(f"Rendered {sum(r is not None for r in results)}/{len(requests)} pages")
        return results
