"""
Worksheet Module for Activity Book

Procedural handwriting practice pages.

Usage:
    from activity_book.worksheet import render_worksheet, plan_trace_pages

    for letters in plan_trace_pages(page_count=5):
        page = render_worksheet(letters, font_id="chewy")
"""

from .letters import (
    ALPHABET,
    TRACE_PREFIX,
    WorksheetSpec,
    normalize_characters,
    display_pair,
    describe_trace_letters,
    parse_trace_letters,
    plan_trace_pages,
)
from .layout import (
    GuideLineSet,
    RowKind,
    RowLayout,
    WorksheetLayout,
    compute_layout,
    repeat_positions,
)
from .mask import make_dash_tile, apply_dash_mask
from .compositor import WorksheetCompositor, WorksheetResult, render_worksheet

__all__ = [
    # Letters
    "ALPHABET",
    "TRACE_PREFIX",
    "WorksheetSpec",
    "normalize_characters",
    "display_pair",
    "describe_trace_letters",
    "parse_trace_letters",
    "plan_trace_pages",
    # Layout
    "GuideLineSet",
    "RowKind",
    "RowLayout",
    "WorksheetLayout",
    "compute_layout",
    "repeat_positions",
    # Mask
    "make_dash_tile",
    "apply_dash_mask",
    # Compositor
    "WorksheetCompositor",
    "WorksheetResult",
    "render_worksheet",
]
