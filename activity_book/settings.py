"""
Settings Module for Activity Book

Provides persistent storage for user preferences using JSON, plus the
immutable render configurations built from it.
Settings are stored in config.json in the working directory.
"""

import copy
import json
import logging
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

logger = logging.getLogger(__name__)

# Settings file location (working directory)
SETTINGS_FILE = Path("config.json")

# Default settings
DEFAULT_SETTINGS: Dict[str, Any] = {
    "debug_enabled": False,
    "default_font": "helvetica",
    "max_workers": 4,
    "font_dirs": [],
    "segmentation": {},
    "worksheet": {},
}


@dataclass(frozen=True)
class SegmentationConfig:
    """Reference constants for color-by-number segmentation."""
    footer_height: int = 150
    seed_stride: int = 4
    border_margin: int = 10
    white_threshold: int = 200  # All channels must be strictly above
    min_region_pixels: int = 800  # Region must be strictly larger
    label_cycle: int = 5
    label_color: str = "#6B7280"
    min_label_font: int = 14
    label_font_divisor: int = 40  # Label font = width // divisor
    adjacency_gap: int = 12  # Max ink thickness between neighbouring regions
    separator_color: str = "#E5E7EB"
    legend_text_color: str = "#111827"
    legend_name_color: str = "#4B5563"
    fill_backend: str = "opencv"
    label_strategy: str = "random"


@dataclass(frozen=True)
class WorksheetConfig:
    """Reference geometry for handwriting worksheets (A4 at ~150 DPI)."""
    page_width: int = 1240
    page_height: int = 1754
    margin_x: int = 100
    header_y: int = 150
    header_font_size: int = 50
    header_text: str = "Name: __________________________"
    header_color: str = "#1F2937"
    header_advance: int = 120
    bottom_margin: int = 100
    min_row_height: int = 120
    max_row_height: int = 220
    font_scale: float = 0.65
    baseline_ratio: float = 0.75
    midline_ratio: float = 0.55
    topline_ratio: float = 1.05
    glyph_lift_ratio: float = 0.05
    glyph_indent: int = 20
    pair_spacing: str = "    "
    glyph_color: str = "#4B5563"
    topline_color: str = "#9CA3AF"
    midline_color: str = "#60A5FA"
    baseline_color: str = "#000000"
    guide_width: int = 2
    midline_dash: Tuple[int, int] = (15, 15)
    mask_tile_size: int = 16
    mask_stroke_width: int = 4


def _build_config(cls, overrides: Optional[Dict[str, Any]]):
    """Build a frozen config, ignoring unknown keys with a warning."""
    if not overrides:
        return cls()

    known = {f.name for f in fields(cls)}
    kwargs = {}
    for key, value in overrides.items():
        if key not in known:
            logger.warning(f"Ignoring unknown {cls.__name__} setting: {key}")
            continue
        kwargs[key] = tuple(value) if isinstance(value, list) else value
    return cls(**kwargs)


def segmentation_config(settings: Dict[str, Any]) -> SegmentationConfig:
    """Build the segmentation config from a settings dictionary."""
    return _build_config(SegmentationConfig, settings.get("segmentation"))


def worksheet_config(settings: Dict[str, Any]) -> WorksheetConfig:
    """Build the worksheet config from a settings dictionary."""
    return _build_config(WorksheetConfig, settings.get("worksheet"))


def load_settings(path: Optional[Path] = None) -> Dict[str, Any]:
    """
    Load settings from config.json.

    Args:
        path: Optional settings file, defaults to SETTINGS_FILE

    Returns:
        Settings dictionary. Returns defaults if file missing or invalid.
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE

    if not settings_file.exists():
        logger.debug("Settings file not found, using defaults")
        return copy.deepcopy(DEFAULT_SETTINGS)

    try:
        with open(settings_file, 'r', encoding='utf-8') as f:
            settings = json.load(f)

        if not isinstance(settings, dict):
            raise ValueError("settings root must be an object")

        # Merge with defaults to handle missing keys
        result = copy.deepcopy(DEFAULT_SETTINGS)
        result.update(settings)
        logger.debug(f"Settings loaded: {result}")
        return result

    except (json.JSONDecodeError, ValueError, IOError) as e:
        logger.warning(f"Failed to load settings: {e}, using defaults")
        return copy.deepcopy(DEFAULT_SETTINGS)


def save_settings(settings: Dict[str, Any], path: Optional[Path] = None) -> None:
    """
    Save settings to config.json.

    Args:
        settings: Settings dictionary to save
        path: Optional settings file, defaults to SETTINGS_FILE
    """
    settings_file = Path(path) if path is not None else SETTINGS_FILE
    try:
        with open(settings_file, 'w', encoding='utf-8') as f:
            json.dump(settings, f, indent=2)
        logger.debug(f"Settings saved: {settings}")
    except IOError as e:
        logger.error(f"Failed to save settings: {e}")
