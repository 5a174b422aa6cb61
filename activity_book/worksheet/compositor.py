"""
Worksheet Compositor

Procedurally renders a handwriting practice page: a name header, three
guide lines per row and dashed tracing glyphs. No external service is
involved; the same letters and font always give the same page.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

import numpy as np
from PIL import Image, ImageDraw

from ..fonts import load_font
from ..pixels import blank_page
from ..settings import WorksheetConfig
from .layout import GuideLineSet, RowKind, WorksheetLayout, compute_layout, repeat_positions
from .letters import WorksheetSpec, display_pair, normalize_characters
from .mask import apply_dash_mask, make_dash_tile

logger = logging.getLogger(__name__)

# Glyphs keep the rounded default face whatever the header font is
GLYPH_FONT_ID = "helvetica"


@dataclass
class WorksheetResult:
    """Rendered worksheet plus the geometry used to draw it."""
    image: np.ndarray
    layout: WorksheetLayout
    glyph_positions: List[List[float]] = field(default_factory=list)  # Per row x positions
    processing_time_ms: float = 0.0


class WorksheetCompositor:
    """
    Renders worksheet pages.

    Guide lines go straight onto the page surface; glyphs go onto a
    separate transparent surface that alone receives the dash mask, so
    the guides are never cut.
    """

    def __init__(self, config: Optional[WorksheetConfig] = None, font_dirs: Iterable[str] = ()):
        self.config = config or WorksheetConfig()
        self.font_dirs = tuple(font_dirs)

    def render(self, spec: WorksheetSpec) -> WorksheetResult:
        """
        Render one worksheet page.

        Args:
            spec: Letters and header font

        Returns:
            WorksheetResult with an RGBA page buffer
        """
        start_time = time.perf_counter()
        cfg = self.config
        characters = normalize_characters(spec.characters)

        page = Image.new("RGBA", (cfg.page_width, cfg.page_height), "white")
        draw = ImageDraw.Draw(page)
        self._draw_header(draw, spec.font_id)

        layout = compute_layout(characters, cfg)
        if layout.overflow:
            logger.warning(
                f"{len(characters)} letters need {len(layout.rows)} rows of "
                f"{layout.row_height}px; rows past the bottom margin are clipped"
            )

        glyph_positions: List[List[float]] = []
        if layout.rows:
            glyphs = Image.new("RGBA", page.size, (0, 0, 0, 0))
            glyph_draw = ImageDraw.Draw(glyphs)
            font = load_font(GLYPH_FONT_ID, layout.font_size, bold=True, font_dirs=self.font_dirs)

            for row in layout.rows:
                self._draw_guides(draw, row.guides)

                pair = display_pair(row.character)
                if row.kind is RowKind.REPEAT:
                    xs = repeat_positions(font.getlength(pair),
                                          font.getlength(pair + cfg.pair_spacing), cfg)
                else:
                    xs = [cfg.margin_x + cfg.glyph_indent]

                for x in xs:
                    glyph_draw.text((x, row.glyph_y), pair, fill=cfg.glyph_color,
                                    font=font, anchor="ls")
                glyph_positions.append(xs)

            tile = make_dash_tile(cfg.mask_tile_size, cfg.mask_stroke_width)
            dashed = apply_dash_mask(np.array(glyphs), tile)
            page.alpha_composite(Image.fromarray(dashed, "RGBA"))

        elapsed_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(f"Worksheet {''.join(characters) or '(header only)'}: "
                     f"{len(layout.rows)} rows in {elapsed_ms:.1f}ms")

        return WorksheetResult(
            image=np.array(page),
            layout=layout,
            glyph_positions=glyph_positions,
            processing_time_ms=elapsed_ms
        )

    def _draw_header(self, draw: ImageDraw.ImageDraw, font_id: str) -> None:
        cfg = self.config
        font = load_font(font_id, cfg.header_font_size, bold=True, font_dirs=self.font_dirs)
        draw.text((cfg.margin_x, cfg.header_y), cfg.header_text,
                  fill=cfg.header_color, font=font, anchor="ls")

    def _draw_guides(self, draw: ImageDraw.ImageDraw, guides: GuideLineSet) -> None:
        """Solid gray top line, dashed blue midline, solid black baseline."""
        cfg = self.config
        x0, x1 = cfg.margin_x, cfg.page_width - cfg.margin_x

        draw.line([(x0, round(guides.top)), (x1, round(guides.top))],
                  fill=cfg.topline_color, width=cfg.guide_width)
        _dashed_hline(draw, x0, x1, round(guides.mid), cfg.midline_dash,
                      cfg.midline_color, cfg.guide_width)
        draw.line([(x0, round(guides.baseline)), (x1, round(guides.baseline))],
                  fill=cfg.baseline_color, width=cfg.guide_width)


def _dashed_hline(draw, x0: int, x1: int, y: int, dash: Sequence[int], fill: str, width: int) -> None:
    """Horizontal line drawn as on/off segments starting with a dash."""
    on, off = dash
    x = x0
    while x < x1:
        draw.line([(x, y), (min(x + on, x1), y)], fill=fill, width=width)
        x += on + off


def render_worksheet(
    characters: Sequence[str],
    font_id: str = "helvetica",
    config: Optional[WorksheetConfig] = None,
    font_dirs: Iterable[str] = (),
) -> np.ndarray:
    """
    Render a worksheet page; never raises.

    An empty character list gives a header-only page. On an internal
    error the failure is logged and a blank page of the configured size
    is returned.

    Args:
        characters: Letters to practise, in order
        font_id: Header font style
        config: Worksheet geometry
        font_dirs: Extra font directories

    Returns:
        RGBA page buffer
    """
    config = config or WorksheetConfig()
    try:
        compositor = WorksheetCompositor(config, font_dirs)
        return compositor.render(WorksheetSpec(list(characters), font_id)).image
    except Exception as e:
        logger.error(f"Worksheet rendering failed, returning blank page: {e}")
        return blank_page(config.page_width, config.page_height)
