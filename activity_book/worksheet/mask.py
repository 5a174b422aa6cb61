"""
Dash Mask

A small diagonal-stripe tile used as an eraser: tiled over the glyph
surface it cuts solid strokes into tracing dashes.
"""

import cv2
import numpy as np


def make_dash_tile(size: int = 16, stroke_width: int = 4) -> np.ndarray:
    """
    Build a (size, size) alpha tile with one diagonal stripe.

    The stripe is drawn at offsets -size, 0 and +size so it continues
    seamlessly into neighbouring tiles. The tile is deterministic.
    """
    tile = np.zeros((size, size), dtype=np.uint8)
    for offset in (-size, 0, size):
        cv2.line(tile, (offset - size, -size), (offset + 2 * size, 2 * size),
                 255, stroke_width, cv2.LINE_AA)
    return tile


def apply_dash_mask(surface: np.ndarray, tile: np.ndarray) -> np.ndarray:
    """
    Erase the tiled pattern from an RGBA surface ("destination-out").

    Wherever the tile is opaque the surface's alpha is removed:
    alpha_out = alpha * (1 - tile / 255).

    Args:
        surface: (H, W, 4) RGBA buffer
        tile: (th, tw) uint8 alpha tile

    Returns:
        New RGBA buffer with the pattern erased
    """
    height, width = surface.shape[:2]
    tile_h, tile_w = tile.shape
    reps = (-(-height // tile_h), -(-width // tile_w))
    mask = np.tile(tile, reps)[:height, :width].astype(np.uint16)

    out = surface.copy()
    alpha = out[..., 3].astype(np.uint16)
    out[..., 3] = ((alpha * (255 - mask) + 127) // 255).astype(np.uint8)
    return out
