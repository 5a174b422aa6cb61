"""
Flood-Fill Backends

Two interchangeable 4-connected fills over a ScanGrid. Both are iterative
and mark every filled pixel in the grid's VisitedMask exactly once.
"""

from collections import deque

import cv2
import numpy as np

from .base import FillBackend, build_fill_result
from .factory import register_fill_backend
from .grid import ScanGrid
from .result import FillResult


@register_fill_backend
class QueueFill(FillBackend):
    """
    Breadth-first fill over the flattened, border-padded grid.

    Pure Python; used as the reference implementation.
    """
    name = "queue"
    description = "Breadth-first queue fill (reference)"

    def fill(self, grid: ScanGrid, x: int, y: int) -> FillResult:
        stride = grid.stride
        white = grid.white_bytes
        seen = grid.visited.buffer

        start = grid.visited.index(x, y)
        seen[start] = 1
        queue = deque((start,))
        members = []

        while queue:
            p = queue.popleft()
            members.append(p)
            for n in (p - 1, p + 1, p - stride, p + stride):
                if white[n] and not seen[n]:
                    seen[n] = 1
                    queue.append(n)

        padded = np.array(members, dtype=np.int64)
        return build_fill_result(padded % stride - 1, padded // stride - 1, grid.width)


@register_fill_backend
class OpenCVFill(FillBackend):
    """
    cv2.floodFill in mask-only mode, using the VisitedMask as the fill mask.

    Newly filled pixels are tagged with a temporary mask value so the
    component can be read back from its bounding rectangle.
    """
    name = "opencv"
    description = "OpenCV mask-only flood fill"

    _FILLED = 2
    _FLAGS = 4 | cv2.FLOODFILL_MASK_ONLY | cv2.FLOODFILL_FIXED_RANGE | (_FILLED << 8)

    def fill(self, grid: ScanGrid, x: int, y: int) -> FillResult:
        mask = grid.visited.array
        _, _, _, rect = cv2.floodFill(grid.white_u8, mask, (x, y), 0, 0, 0, self._FLAGS)

        rx, ry, rw, rh = rect
        window = mask[ry + 1:ry + 1 + rh, rx + 1:rx + 1 + rw]
        filled = window == self._FILLED
        ys, xs = np.nonzero(filled)
        window[filled] = 1

        return build_fill_result(xs + rx, ys + ry, grid.width)
