"""
Segmentation Debug Utilities

Annotated region images for tuning segmentation, written to ./debug.
"""

import logging
from pathlib import Path
from typing import Optional

from PIL import ImageDraw

from .fonts import load_font
from .pixels import ImageLike, to_image
from .segmentation.result import SegmentationResult

logger = logging.getLogger(__name__)


# Debug settings
DEBUG_DIR = Path("./debug")
MAX_DEBUG_IMAGES = 10

# Regions this many times the minimum size are drawn as "large"
LARGE_REGION_FACTOR = 10


def save_debug_image(
    image: ImageLike,
    result: Optional[SegmentationResult],
    path: str,
    min_region_pixels: int = 800
) -> None:
    """
    Save an annotated debug image showing segmentation results.

    Annotations include:
    - Region bounding boxes (green for large regions, orange otherwise)
    - Centroid markers with the assigned label id
    - Summary line with fill counts and timing

    Args:
        image: Original line-art image
        result: Segmentation result (can be None)
        path: Output file path
        min_region_pixels: Region size threshold used for colouring boxes
    """
    DEBUG_DIR.mkdir(parents=True, exist_ok=True)

    # Draw on a copy, never the caller's image
    debug_img = to_image(image)
    draw = ImageDraw.Draw(debug_img)

    font = load_font("helvetica", 14)
    small_font = load_font("helvetica", 11)

    if result:
        for region in result.regions:
            min_x, min_y, max_x, max_y = region.bbox
            if region.pixel_count >= min_region_pixels * LARGE_REGION_FACTOR:
                color = "green"
            else:
                color = "orange"

            draw.rectangle([min_x, min_y, max_x, max_y], outline=color, width=2)

            cx, cy = region.center
            draw.ellipse([cx - 3, cy - 3, cx + 3, cy + 3], fill="red")
            draw.text((cx + 5, cy - 5), f"{region.label_id} ({region.pixel_count}px)",
                      fill=color, font=small_font)

        summary = f"Regions: {len(result.regions)}, Fills: {result.fills}, " \
                  f"Rejected: {result.rejected}, Visited: {result.visited_pixels}px, " \
                  f"Time: {result.processing_time_ms:.1f}ms"
        draw.text((10, 10), summary, fill="blue", font=font)

    debug_img.save(path, "PNG")
    _cleanup_debug_images()


def _cleanup_debug_images() -> None:
    """Keep the newest MAX_DEBUG_IMAGES region images, delete the rest."""
    if not DEBUG_DIR.is_dir():
        return

    by_age = sorted(DEBUG_DIR.glob("debug_*.png"), key=lambda p: p.stat().st_mtime)
    stale = by_age[:-MAX_DEBUG_IMAGES] if len(by_age) > MAX_DEBUG_IMAGES else []

    for old_file in stale:
        try:
            old_file.unlink()
        except OSError as e:
            logger.debug(f"Could not remove {old_file}: {e}")
