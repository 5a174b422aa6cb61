"""
Segmentation Module for Activity Book

Color-by-number / color-by-letter annotation of generated line art.

Usage:
    from activity_book.segmentation import segment_and_annotate

    # Best effort: returns the input unchanged if anything goes wrong
    page = segment_and_annotate(line_art)

    # Full result with regions and timing
    engine = SegmentationEngine(label_strategy="adjacent")
    result = engine.process(line_art)
    for region in result.regions:
        print(region.center, region.label_id)
"""

# Public API - Result types
from .result import FillResult, Region, SegmentationResult

# Public API - Legend
from .legend import DEFAULT_LEGEND, LabelStyle, LegendEntry

# Public API - Base classes and grid
from .base import FillBackend, LabelStrategy
from .grid import ScanGrid, VisitedMask

# Public API - Factory functions
from .factory import (
    create_fill_backend,
    create_label_strategy,
    register_fill_backend,
    register_label_strategy,
    available_fill_backends,
    available_label_strategies,
)

# Import implementations to register them
from .flood_fill import QueueFill, OpenCVFill
from .labeling import RandomLabels, RoundRobinLabels, AdjacentDistinctLabels, region_adjacency

# Public API - Engine
from .engine import SegmentationEngine, segment_and_annotate

__all__ = [
    # Result types
    "FillResult",
    "Region",
    "SegmentationResult",
    # Legend
    "DEFAULT_LEGEND",
    "LabelStyle",
    "LegendEntry",
    # Base classes
    "FillBackend",
    "LabelStrategy",
    "ScanGrid",
    "VisitedMask",
    # Factory
    "create_fill_backend",
    "create_label_strategy",
    "register_fill_backend",
    "register_label_strategy",
    "available_fill_backends",
    "available_label_strategies",
    # Implementations
    "QueueFill",
    "OpenCVFill",
    "RandomLabels",
    "RoundRobinLabels",
    "AdjacentDistinctLabels",
    "region_adjacency",
    # Engine
    "SegmentationEngine",
    "segment_and_annotate",
]
