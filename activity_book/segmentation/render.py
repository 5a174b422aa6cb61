"""
Annotation Rendering

Stamps region labels onto the page and draws the legend footer.
"""

from typing import Iterable, Sequence

import numpy as np
from PIL import Image, ImageDraw

from ..fonts import load_font
from ..settings import SegmentationConfig
from .legend import LabelStyle, LegendEntry
from .result import Region


def label_font_size(width: int, config: SegmentationConfig) -> int:
    """Label size scales with the page width."""
    return max(config.min_label_font, width // config.label_font_divisor)


def render_annotations(
    rgba: np.ndarray,
    regions: Sequence[Region],
    legend: Sequence[LegendEntry],
    style: LabelStyle,
    config: SegmentationConfig,
    font_id: str = "helvetica",
    font_dirs: Iterable[str] = (),
) -> np.ndarray:
    """
    Build the annotated surface: image on top, legend footer below.

    Args:
        rgba: Source image buffer (H, W, 4)
        regions: Labelled regions to stamp
        legend: Legend entries drawn in the footer
        style: Number or letter labels
        config: Segmentation constants
        font_id: Font style for labels and legend
        font_dirs: Extra font directories

    Returns:
        RGBA buffer of shape (H + footer_height, W, 4)
    """
    height, width = rgba.shape[:2]
    font_dirs = tuple(font_dirs)

    canvas = Image.new("RGBA", (width, height + config.footer_height), "white")
    canvas.alpha_composite(Image.fromarray(rgba, "RGBA"), (0, 0))
    draw = ImageDraw.Draw(canvas)

    font_size = label_font_size(width, config)
    label_font = load_font(font_id, font_size, bold=True, font_dirs=font_dirs)

    for region in regions:
        if region.label_id is None:
            continue
        draw.text(region.center, style.text(region.label_id),
                  fill=config.label_color, font=label_font, anchor="mm")

    _draw_legend(draw, width, height, legend, style, config, font_size, font_id, font_dirs)

    return np.array(canvas)


def _draw_legend(draw, width, height, legend, style, config, font_size, font_id, font_dirs):
    """Separator line plus one circular swatch per entry, evenly spaced."""
    draw.line([(50, height + 20), (width - 50, height + 20)],
              fill=config.separator_color, width=2)

    if not legend:
        return

    number_font = load_font(font_id, font_size + 4, bold=True, font_dirs=font_dirs)
    name_font = load_font(font_id, int(font_size * 0.8), bold=True, font_dirs=font_dirs)

    legend_y = height + config.footer_height / 2
    item_width = width / (len(legend) + 1)
    start_x = (width - item_width * len(legend)) / 2

    for i, entry in enumerate(legend):
        x = start_x + i * item_width

        draw.ellipse(
            [x - font_size, legend_y - font_size, x + font_size, legend_y + font_size],
            fill="white", outline=entry.color, width=3
        )
        draw.text((x, legend_y + font_size * 0.1), style.text(entry.label_id),
                  fill=config.legend_text_color, font=number_font, anchor="mm")
        draw.text((x, legend_y + font_size * 2.5), entry.name,
                  fill=config.legend_name_color, font=name_font, anchor="mm")
