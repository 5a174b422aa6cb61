"""
Segmentation Base Interfaces

Abstract base classes for the pluggable pieces of the segmentation engine:
flood-fill backends and label assignment strategies.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Set

import numpy as np

from .grid import ScanGrid
from .result import FillResult, Region


def build_fill_result(xs: np.ndarray, ys: np.ndarray, width: int) -> FillResult:
    """Collect count, coordinate sums and bounding box of filled pixels."""
    xs = xs.astype(np.int64)
    ys = ys.astype(np.int64)
    return FillResult(
        pixel_count=int(xs.size),
        sum_x=int(xs.sum()),
        sum_y=int(ys.sum()),
        bbox=(int(xs.min()), int(ys.min()), int(xs.max()), int(ys.max())),
        indices=ys * width + xs,
    )


class FillBackend(ABC):
    """
    Abstract base class for flood-fill backends.

    A backend fills the 4-connected white component containing a seed,
    marking every filled pixel in the grid's VisitedMask.
    """
    name: str = "base"
    description: str = "Base fill backend"

    @abstractmethod
    def fill(self, grid: ScanGrid, x: int, y: int) -> FillResult:
        """
        Flood-fill from a white, unvisited seed.

        Args:
            grid: Thresholded image with its VisitedMask
            x: Seed column
            y: Seed row

        Returns:
            FillResult for the filled component
        """
        pass


class LabelStrategy(ABC):
    """
    Abstract base class for label assignment strategies.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description
        needs_adjacency: Whether assign() expects region neighbour sets
    """
    name: str = "base"
    description: str = "Base label strategy"
    needs_adjacency: bool = False

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed

    @abstractmethod
    def assign(
        self,
        regions: Sequence[Region],
        cycle: int,
        neighbours: Optional[List[Set[int]]] = None
    ) -> List[int]:
        """
        Pick a label id in 1..cycle for every region.

        Args:
            regions: Accepted regions in discovery order
            cycle: Number of distinct labels
            neighbours: Per-region sets of adjacent region indices
                        (only provided when needs_adjacency is True)

        Returns:
            Label ids, one per region
        """
        pass
