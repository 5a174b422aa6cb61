"""
Diagnostic script to analyze region detection on line-art images.
Prints every flood-fill component with its size, centroid and whether it
would be labelled, to tune the white threshold and minimum region size.
"""

import sys
from pathlib import Path

import cv2
import numpy as np
from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from activity_book.pixels import flatten_on_white, to_rgba_array
from activity_book.settings import SegmentationConfig

CONFIG = SegmentationConfig()


def analyze_image(image_path: str):
    """Analyze an image and report every white component."""
    print(f"\n{'='*60}")
    print(f"Analyzing: {image_path}")
    print(f"{'='*60}")

    rgba = flatten_on_white(to_rgba_array(Image.open(image_path)))
    height, width = rgba.shape[:2]
    rgb = rgba[:, :, :3]

    white = np.all(rgb > CONFIG.white_threshold, axis=2).astype(np.uint8)
    print(f"  Size: {width}x{height}, white pixels: {int(white.sum())} "
          f"({100.0 * white.mean():.1f}%)")

    # 4-connected components, same connectivity as the flood fill
    count, labels, stats, centroids = cv2.connectedComponentsWithStats(white, connectivity=4)

    rows = []
    for label in range(1, count):
        x, y, w, h, area = stats[label]
        cx, cy = centroids[label]
        inside = bool(white[int(np.floor(cy)), int(np.floor(cx))])
        accepted = area > CONFIG.min_region_pixels and inside
        rows.append((area, x, y, w, h, cx, cy, inside, accepted))

    rows.sort(reverse=True)

    print(f"\n  {'Area':>8}  {'BBox':>22}  {'Centroid':>16}  {'Inside':>6}  Label")
    print(f"  {'-'*8}  {'-'*22}  {'-'*16}  {'-'*6}  -----")
    for area, x, y, w, h, cx, cy, inside, accepted in rows:
        bbox = f"{x},{y} {w}x{h}"
        print(f"  {area:>8}  {bbox:>22}  {cx:>7.1f},{cy:>7.1f}  "
              f"{'yes' if inside else 'NO':>6}  {'yes' if accepted else ''}")

    accepted = sum(1 for row in rows if row[-1])
    small = sum(1 for row in rows if row[0] <= CONFIG.min_region_pixels)
    outside = sum(1 for row in rows if row[0] > CONFIG.min_region_pixels and not row[-2])
    print(f"\n  Components: {len(rows)}, labelled: {accepted}, "
          f"too small: {small}, centroid outside: {outside}")
    print("  Note: the engine seeds on a grid, so components thinner than "
          f"{CONFIG.seed_stride}px may be missed there.")


def main():
    if len(sys.argv) > 1:
        paths = sys.argv[1:]
    else:
        paths = sorted(str(p) for p in Path("debug").glob("*.png"))

    if not paths:
        print("Usage: python tools/inspect_regions.py IMAGE [IMAGE ...]")
        return

    for path in paths:
        analyze_image(path)


if __name__ == "__main__":
    main()
