"""
Segmentation Result Dataclasses

Shared data structures for flood-fill and segmentation results.
"""

import math
from dataclasses import dataclass, field
from typing import List, Optional, Tuple

import numpy as np


@dataclass
class FillResult:
    """Statistics of one completed flood-fill."""
    pixel_count: int
    sum_x: int
    sum_y: int
    bbox: Tuple[int, int, int, int]  # (min_x, min_y, max_x, max_y), inclusive
    indices: np.ndarray              # Flat y * width + x indices of the filled pixels

    @property
    def centroid(self) -> Tuple[float, float]:
        return self.sum_x / self.pixel_count, self.sum_y / self.pixel_count


@dataclass
class Region:
    """A colourable region that passed the size and interior checks."""
    centroid_x: float
    centroid_y: float
    pixel_count: int
    bbox: Tuple[int, int, int, int]
    label_id: Optional[int] = None

    @property
    def center(self) -> Tuple[int, int]:
        """Integer pixel of the centroid (floored), where the label is stamped."""
        return math.floor(self.centroid_x), math.floor(self.centroid_y)


@dataclass
class SegmentationResult:
    """Complete result of one segmentation run."""
    image: np.ndarray                  # Annotated RGBA surface (input height + footer)
    regions: List[Region] = field(default_factory=list)
    fills: int = 0                     # Flood-fills started, accepted or not
    rejected: int = 0                  # Fills rejected by size or interior check
    visited_pixels: int = 0
    processing_time_ms: float = 0.0
