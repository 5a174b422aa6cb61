"""
Font Selection

Immutable table of the book's selectable font styles and a cached loader
that resolves a font id to a Pillow font at a given pixel size.
"""

import logging
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from PIL import ImageFont

logger = logging.getLogger(__name__)

DEFAULT_FONT_ID = "helvetica"

# Generic faces tried after the style-specific files
_FALLBACK_REGULAR = ("DejaVuSans.ttf", "LiberationSans-Regular.ttf", "arial.ttf", "Arial.ttf")
_FALLBACK_BOLD = ("DejaVuSans-Bold.ttf", "LiberationSans-Bold.ttf", "arialbd.ttf", "Arial Bold.ttf")


@dataclass(frozen=True)
class FontStyle:
    """A selectable font style."""
    font_id: str
    family: str
    regular_files: Tuple[str, ...]
    bold_files: Tuple[str, ...]


FONT_STYLES: Dict[str, FontStyle] = {
    "helvetica": FontStyle(
        "helvetica", "Nunito",
        ("Nunito-Regular.ttf", "Nunito-SemiBold.ttf"),
        ("Nunito-Bold.ttf",),
    ),
    "chewy": FontStyle(
        "chewy", "Chewy",
        ("Chewy-Regular.ttf",),
        ("Chewy-Regular.ttf",),
    ),
    "bangers": FontStyle(
        "bangers", "Bangers",
        ("Bangers-Regular.ttf",),
        ("Bangers-Regular.ttf",),
    ),
    "patrick": FontStyle(
        "patrick", "Patrick Hand",
        ("PatrickHand-Regular.ttf",),
        ("PatrickHand-Regular.ttf",),
    ),
}


def get_font_style(font_id: Optional[str]) -> FontStyle:
    """Resolve a font id, falling back to the default style."""
    style = FONT_STYLES.get(font_id or "")
    if style is None:
        if font_id:
            logger.debug(f"Unknown font '{font_id}', using {DEFAULT_FONT_ID}")
        style = FONT_STYLES[DEFAULT_FONT_ID]
    return style


def available_fonts() -> List[str]:
    """List selectable font ids."""
    return list(FONT_STYLES.keys())


def load_font(
    font_id: Optional[str],
    size: int,
    bold: bool = False,
    font_dirs: Iterable[str] = (),
) -> ImageFont.FreeTypeFont:
    """
    Load a font for the given style and pixel size.

    Style files are searched in font_dirs first, then on the system font
    path. Falls back to generic sans faces and finally Pillow's built-in font.

    Args:
        font_id: Font style id (see FONT_STYLES)
        size: Font size in pixels
        bold: Prefer the bold face
        font_dirs: Extra directories holding .ttf files

    Returns:
        Pillow font object
    """
    style = get_font_style(font_id)
    size = max(1, int(size))
    path = _resolve_font_path(style.font_id, bold, tuple(font_dirs))
    if path is None:
        return ImageFont.load_default(size=size)
    return ImageFont.truetype(path, size)


@lru_cache(maxsize=32)
def _resolve_font_path(font_id: str, bold: bool, font_dirs: Tuple[str, ...]) -> Optional[str]:
    """Find the first loadable font file for a style; None if nothing loads."""
    style = FONT_STYLES[font_id]
    names = (style.bold_files if bold else style.regular_files) + \
        (_FALLBACK_BOLD if bold else _FALLBACK_REGULAR)

    for name in names:
        candidates = [str(Path(d) / name) for d in font_dirs] + [name]
        for candidate in candidates:
            try:
                font = ImageFont.truetype(candidate, 12)
            except OSError:
                continue
            # Pillow resolves bare names against the system font path
            return font.path

    logger.debug(f"No TrueType file for '{font_id}', using built-in font")
    return None
