"""
Legend Table

The fixed label -> colour mapping printed under color-by-number pages.
"""

import string
from dataclasses import dataclass
from enum import Enum
from typing import Tuple


@dataclass(frozen=True)
class LegendEntry:
    """One legend swatch."""
    label_id: int
    color: str  # Hex outline colour of the swatch
    name: str   # Colour name printed under the swatch


DEFAULT_LEGEND: Tuple[LegendEntry, ...] = (
    LegendEntry(1, "#EF4444", "Red"),
    LegendEntry(2, "#3B82F6", "Blue"),
    LegendEntry(3, "#22C55E", "Green"),
    LegendEntry(4, "#EAB308", "Yellow"),
    LegendEntry(5, "#A855F7", "Purple"),
)


class LabelStyle(str, Enum):
    """How label ids are printed."""
    NUMBER = "number"
    LETTER = "letter"

    def text(self, label_id: int) -> str:
        """Printed text for a label id (1 -> "1" or "A")."""
        if self is LabelStyle.LETTER:
            return string.ascii_uppercase[(label_id - 1) % 26]
        return str(label_id)
