"""
Scan Grid

Per-call pixel classification and visited bookkeeping for segmentation.
Both structures carry a one-pixel sentinel border: border cells are never
white, so a 4-neighbour step off any image edge lands on the border
instead of wrapping into the adjacent row or leaving the buffer.
"""

import numpy as np


class VisitedMask:
    """
    Byte grid parallel to the image, one entry per pixel (0 = unvisited).

    The backing bytearray is shared with a numpy view shaped
    (height + 2, width + 2), the layout OpenCV expects for fill masks.
    Entries only ever change from unvisited to visited.
    """

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.stride = width + 2
        self.buffer = bytearray(self.stride * (height + 2))
        self.array = np.frombuffer(self.buffer, dtype=np.uint8).reshape(height + 2, self.stride)

    def index(self, x: int, y: int) -> int:
        """Flat index of pixel (x, y) in the padded buffer."""
        return (y + 1) * self.stride + x + 1

    def is_visited(self, x: int, y: int) -> bool:
        return self.buffer[self.index(x, y)] != 0

    def mark(self, x: int, y: int) -> None:
        self.buffer[self.index(x, y)] = 1

    @property
    def view(self) -> np.ndarray:
        """(height, width) view without the border."""
        return self.array[1:-1, 1:-1]

    def visited_count(self) -> int:
        return int(np.count_nonzero(self.view))


class ScanGrid:
    """
    Thresholded image: which pixels are white-ish, plus the VisitedMask.

    A pixel is white-ish when all three colour channels exceed the threshold.
    """

    def __init__(self, rgba: np.ndarray, threshold: int):
        self.height, self.width = rgba.shape[:2]
        self.stride = self.width + 2
        self.white = np.all(rgba[..., :3] > threshold, axis=2)
        # Contiguous 0/1 image for cv2.floodFill
        self.white_u8 = self.white.astype(np.uint8)

        padded = np.zeros((self.height + 2, self.stride), dtype=np.uint8)
        padded[1:-1, 1:-1] = self.white_u8
        self.white_bytes = padded.tobytes()

        self.visited = VisitedMask(self.width, self.height)

    def is_white(self, x: int, y: int) -> bool:
        return bool(self.white[y, x])
