"""
Worksheet Layout

Pure geometry of a worksheet page: row heights, baselines and guide lines.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Sequence

from ..settings import WorksheetConfig


class RowKind(str, Enum):
    REPEAT = "repeat"  # Pair tiled across the row
    SINGLE = "single"  # Pair drawn once at the left margin


@dataclass(frozen=True)
class GuideLineSet:
    """Y-coordinates of the three guide lines of one row."""
    top: float
    mid: float
    baseline: float


@dataclass(frozen=True)
class RowLayout:
    character: str
    kind: RowKind
    top: float       # Upper edge of the row slot
    guides: GuideLineSet
    glyph_y: float   # Text baseline of the glyphs (slightly above the guide)


@dataclass
class WorksheetLayout:
    """Row geometry of one worksheet page."""
    row_height: int = 0
    font_size: int = 0
    first_row_top: float = 0.0
    rows: List[RowLayout] = field(default_factory=list)
    overflow: bool = False  # Rows run past the bottom margin

    @property
    def baselines(self) -> List[float]:
        return [row.guides.baseline for row in self.rows]


def row_height_for(count: int, first_row_top: float, config: WorksheetConfig) -> int:
    """Two rows per character, clamped to the configured range."""
    available = config.page_height - first_row_top - config.bottom_margin
    rows_needed = count * 2
    return int(min(config.max_row_height, max(config.min_row_height, available // rows_needed)))


def compute_layout(characters: Sequence[str], config: WorksheetConfig) -> WorksheetLayout:
    """
    Lay out a repeat row and a single row for every character.

    Args:
        characters: Single characters, in page order
        config: Worksheet geometry

    Returns:
        WorksheetLayout (no rows when characters is empty)
    """
    first_row_top = config.header_y + config.header_advance
    layout = WorksheetLayout(first_row_top=first_row_top)
    if not characters:
        return layout

    row_height = row_height_for(len(characters), first_row_top, config)
    font_size = int(row_height * config.font_scale)
    layout.row_height = row_height
    layout.font_size = font_size

    y = first_row_top
    for character in characters:
        for kind in (RowKind.REPEAT, RowKind.SINGLE):
            baseline = y + row_height * config.baseline_ratio
            layout.rows.append(RowLayout(
                character=character,
                kind=kind,
                top=y,
                guides=GuideLineSet(
                    top=baseline - font_size * config.topline_ratio,
                    mid=baseline - font_size * config.midline_ratio,
                    baseline=baseline,
                ),
                glyph_y=baseline - font_size * config.glyph_lift_ratio,
            ))
            y += row_height

    layout.overflow = y > config.page_height - config.bottom_margin
    return layout


def repeat_positions(pair_width: float, step: float, config: WorksheetConfig) -> List[float]:
    """
    X positions of a repeated pair, left to right, while it fits.

    Args:
        pair_width: Rendered width of the pair
        step: Advance between repetitions (pair plus spacing)
        config: Worksheet geometry

    Raises:
        ValueError: If step is not positive
    """
    if step <= 0:
        raise ValueError("step must be positive")

    x = config.margin_x + config.glyph_indent
    limit = config.page_width - config.margin_x
    positions = []
    while x + pair_width < limit:
        positions.append(x)
        x += step
    return positions
