"""
Activity Book - raster post-processing for printable activity books.

Two pure renderers used per page:
    - segmentation: color-by-number / color-by-letter annotation of line art
    - worksheet: procedural handwriting practice pages

Usage:
    from activity_book import segment_and_annotate, render_worksheet

    numbered = segment_and_annotate(line_art)
    worksheet = render_worksheet(["A", "B"], font_id="chewy")
"""

from .segmentation import (
    DEFAULT_LEGEND,
    LabelStyle,
    LegendEntry,
    Region,
    SegmentationEngine,
    SegmentationResult,
    segment_and_annotate,
)
from .worksheet import (
    WorksheetCompositor,
    WorksheetResult,
    WorksheetSpec,
    plan_trace_pages,
    render_worksheet,
)
from .pages import BookRenderer, ColoringMode, PageRequest, RenderOptions, render_page
from .settings import SegmentationConfig, WorksheetConfig, load_settings, save_settings

__version__ = "0.1.0"

__all__ = [
    "DEFAULT_LEGEND",
    "LabelStyle",
    "LegendEntry",
    "Region",
    "SegmentationEngine",
    "SegmentationResult",
    "segment_and_annotate",
    "WorksheetCompositor",
    "WorksheetResult",
    "WorksheetSpec",
    "plan_trace_pages",
    "render_worksheet",
    "BookRenderer",
    "ColoringMode",
    "PageRequest",
    "RenderOptions",
    "render_page",
    "SegmentationConfig",
    "WorksheetConfig",
    "load_settings",
    "save_settings",
]
