"""
Label Assignment Strategies

Decide which legend label each accepted region receives.
"""

import random
from typing import List, Optional, Sequence, Set

import cv2
import numpy as np

from .base import LabelStrategy
from .factory import register_label_strategy
from .result import Region


@register_label_strategy
class RandomLabels(LabelStrategy):
    """
    Uniform random label per region, independent of position.

    Neighbouring regions may end up with the same label.
    Pass a seed for reproducible pages.
    """
    name = "random"
    description = "Random - uniform pick from the legend"

    def assign(
        self,
        regions: Sequence[Region],
        cycle: int,
        neighbours: Optional[List[Set[int]]] = None
    ) -> List[int]:
        rng = random.Random(self.seed)
        return [rng.randint(1, cycle) for _ in regions]


@register_label_strategy
class RoundRobinLabels(LabelStrategy):
    """Labels 1, 2, ..., cycle, 1, ... in discovery (scan) order."""
    name = "round_robin"
    description = "Round robin - cycle through the legend in scan order"

    def assign(
        self,
        regions: Sequence[Region],
        cycle: int,
        neighbours: Optional[List[Set[int]]] = None
    ) -> List[int]:
        return [i % cycle + 1 for i in range(len(regions))]


@register_label_strategy
class AdjacentDistinctLabels(LabelStrategy):
    """
    Greedy colouring so touching regions get different labels.

    Each region takes the least used label not held by an already
    labelled neighbour. When every label is taken by neighbours it takes
    the one shared with the fewest of them.
    """
    name = "adjacent"
    description = "Adjacent - neighbouring regions get different labels"
    needs_adjacency = True

    def assign(
        self,
        regions: Sequence[Region],
        cycle: int,
        neighbours: Optional[List[Set[int]]] = None
    ) -> List[int]:
        if neighbours is None:
            neighbours = [set() for _ in regions]

        labels: List[int] = [0] * len(regions)
        usage = [0] * (cycle + 1)

        for i in range(len(regions)):
            conflicts = [0] * (cycle + 1)
            for j in neighbours[i]:
                if labels[j]:
                    conflicts[labels[j]] += 1

            label = min(range(1, cycle + 1), key=lambda k: (conflicts[k], usage[k], k))
            labels[i] = label
            usage[label] += 1

        return labels


def region_adjacency(region_map: np.ndarray, regions: Sequence[Region], gap: int) -> List[Set[int]]:
    """
    Find which regions lie within `gap` pixels of each other.

    Args:
        region_map: (H, W) int32 array, region index + 1 per pixel, 0 elsewhere
        regions: Regions in the order used for region_map
        gap: Maximum ink thickness separating neighbouring regions

    Returns:
        Per-region sets of neighbouring region indices
    """
    height, width = region_map.shape
    kernel = np.ones((2 * gap + 1, 2 * gap + 1), dtype=np.uint8)
    neighbours: List[Set[int]] = [set() for _ in regions]

    for i, region in enumerate(regions):
        min_x, min_y, max_x, max_y = region.bbox
        x0, y0 = max(0, min_x - gap), max(0, min_y - gap)
        x1, y1 = min(width, max_x + gap + 1), min(height, max_y + gap + 1)

        window = region_map[y0:y1, x0:x1]
        grown = cv2.dilate((window == i + 1).astype(np.uint8), kernel)
        touched = np.unique(window[grown > 0])

        for value in touched:
            j = int(value) - 1
            if j >= 0 and j != i:
                neighbours[i].add(j)
                neighbours[j].add(i)

    return neighbours
