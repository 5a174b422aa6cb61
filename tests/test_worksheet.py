"""
Test script for handwriting worksheets

Tests:
1. Row layout geometry
2. Dash mask tile and erasing
3. Trace letter planning and parsing
4. Page rendering (deterministic, header-only, never raises)

Usage:
    python test_worksheet.py
"""

import sys
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from activity_book.settings import WorksheetConfig
from activity_book.worksheet import (
    ALPHABET,
    RowKind,
    WorksheetCompositor,
    WorksheetSpec,
    apply_dash_mask,
    compute_layout,
    describe_trace_letters,
    display_pair,
    make_dash_tile,
    normalize_characters,
    parse_trace_letters,
    plan_trace_pages,
    render_worksheet,
    repeat_positions,
)

import activity_book.worksheet.compositor as compositor_module

CONFIG = WorksheetConfig()


def test_layout_two_letters():
    """Two letters give four rows with the reference geometry."""
    print("\n" + "="*60)
    print("TEST: Layout (A, B)")
    print("="*60)

    layout = compute_layout(["A", "B"], CONFIG)
    print(f"  Row height: {layout.row_height}, font: {layout.font_size}")
    print(f"  Baselines: {layout.baselines}")

    assert len(layout.rows) == 4
    assert [row.kind for row in layout.rows] == [RowKind.REPEAT, RowKind.SINGLE] * 2
    assert [row.character for row in layout.rows] == ["A", "A", "B", "B"]
    assert CONFIG.min_row_height <= layout.row_height <= CONFIG.max_row_height
    assert layout.row_height == 220
    assert layout.font_size == 143
    assert layout.first_row_top == 270
    assert layout.baselines == [435.0, 655.0, 875.0, 1095.0]
    assert not layout.overflow

    for row in layout.rows:
        guides = row.guides
        assert guides.top < guides.mid < guides.baseline
        assert row.glyph_y < guides.baseline

    print("  [PASS] Layout (A, B)")


def test_layout_edges():
    """Empty input, minimum row height and overflow."""
    print("\n" + "="*60)
    print("TEST: Layout Edges")
    print("="*60)

    empty = compute_layout([], CONFIG)
    assert empty.rows == []
    assert not empty.overflow

    full = compute_layout(list(ALPHABET), CONFIG)
    print(f"  26 letters: row height {full.row_height}, overflow {full.overflow}")
    assert full.row_height == CONFIG.min_row_height
    assert len(full.rows) == 52
    assert full.overflow

    baselines = full.baselines
    assert all(a < b for a, b in zip(baselines, baselines[1:]))

    four = compute_layout(list("ABCD"), CONFIG)
    assert four.row_height == 1384 // 8
    print("  [PASS] Layout edges")


def test_repeat_positions():
    """Repeated pairs stay inside the right margin."""
    print("\n" + "="*60)
    print("TEST: Repeat Positions")
    print("="*60)

    xs = repeat_positions(100.0, 160.0, CONFIG)
    print(f"  Positions: {xs}")
    assert xs[0] == CONFIG.margin_x + CONFIG.glyph_indent
    assert all(x + 100.0 < CONFIG.page_width - CONFIG.margin_x for x in xs)
    assert xs == [120, 280, 440, 600, 760, 920]

    assert repeat_positions(2000.0, 2100.0, CONFIG) == []

    try:
        repeat_positions(10.0, 0.0, CONFIG)
        raise AssertionError("Zero step should raise")
    except ValueError:
        pass
    print("  [PASS] Repeat positions")


def test_dash_mask():
    """Tile is deterministic and erases alpha where it is opaque."""
    print("\n" + "="*60)
    print("TEST: Dash Mask")
    print("="*60)

    tile = make_dash_tile(16, 4)
    assert tile.shape == (16, 16)
    assert tile.dtype == np.uint8
    assert np.array_equal(tile, make_dash_tile(16, 4))
    assert tile.max() == 255
    assert tile.min() == 0

    surface = np.zeros((40, 50, 4), dtype=np.uint8)
    surface[..., :3] = 75
    surface[..., 3] = 255
    out = apply_dash_mask(surface, tile)

    assert out.shape == surface.shape
    assert np.array_equal(out[..., :3], surface[..., :3])
    # Fully opaque tile pixels remove all alpha, transparent ones keep it
    full = np.tile(tile, (3, 4))[:40, :50]
    assert np.all(out[..., 3][full == 255] == 0)
    assert np.all(out[..., 3][full == 0] == 255)
    # Input untouched
    assert np.all(surface[..., 3] == 255)

    # Transparent input stays transparent
    clear = np.zeros((16, 16, 4), dtype=np.uint8)
    assert np.all(apply_dash_mask(clear, tile)[..., 3] == 0)
    print("  [PASS] Dash mask")


def test_trace_letters():
    """Page planning over A-Z and description round-trip."""
    print("\n" + "="*60)
    print("TEST: Trace Letters")
    print("="*60)

    pages = plan_trace_pages(5)
    print(f"  5 pages: {[''.join(p) for p in pages]}")
    assert [len(p) for p in pages] == [6, 6, 6, 6, 2]
    assert "".join("".join(p) for p in pages) == ALPHABET

    # 26 / 20 -> 2 per page, alphabet runs out after 13 pages
    assert len(plan_trace_pages(20)) == 13
    assert plan_trace_pages(1) == [list(ALPHABET)]

    try:
        plan_trace_pages(0)
        raise AssertionError("Zero pages should raise")
    except ValueError:
        pass

    description = describe_trace_letters(["A", "B", "C"])
    assert description == "Handwriting practice for letters: A, B, C"
    assert parse_trace_letters(description) == ["A", "B", "C"]
    assert parse_trace_letters("no letters here") == []
    assert parse_trace_letters("Letters: A, BB, , c") == ["A", "c"]

    assert normalize_characters([" a ", "xy", "", "Z"]) == ["a", "Z"]
    assert display_pair("a") == "Aa"
    assert display_pair("Q") == "Qq"
    print("  [PASS] Trace letters")


def test_render_deterministic():
    """Same letters and font always give identical pages."""
    print("\n" + "="*60)
    print("TEST: Deterministic Rendering")
    print("="*60)

    first = render_worksheet(["A", "B"], "helvetica")
    second = render_worksheet(["A", "B"], "helvetica")
    assert first.shape == (CONFIG.page_height, CONFIG.page_width, 4)
    assert np.array_equal(first, second)
    assert np.all(first[..., 3] == 255)

    # Glyph ink lands inside the first repeat row
    layout = compute_layout(["A", "B"], CONFIG)
    top = int(layout.rows[0].guides.top)
    baseline = int(layout.rows[0].guides.baseline)
    row_band = first[top:baseline, CONFIG.margin_x:CONFIG.page_width - CONFIG.margin_x, :3]
    assert np.any(row_band != 255)
    print("  [PASS] Deterministic rendering")


def test_mask_spares_guides():
    """The dash mask cuts glyph strokes only; guide lines stay unbroken."""
    print("\n" + "="*60)
    print("TEST: Mask Spares Guide Lines")
    print("="*60)

    layout = compute_layout(["A", "B"], CONFIG)
    x0, x1 = CONFIG.margin_x + 2, CONFIG.page_width - CONFIG.margin_x - 2

    masked = render_worksheet(["A", "B"], "helvetica")

    # Same page with the erase step switched off
    original_mask = compositor_module.apply_dash_mask
    compositor_module.apply_dash_mask = lambda surface, tile: surface
    try:
        solid = render_worksheet(["A", "B"], "helvetica")
    finally:
        compositor_module.apply_dash_mask = original_mask

    baseline_rgb = [0, 0, 0]
    topline_rgb = [0x9C, 0xA3, 0xAF]
    for row in layout.rows:
        baseline_y = round(row.guides.baseline)
        top_y = round(row.guides.top)
        assert np.all(masked[baseline_y, x0:x1, :3] == baseline_rgb)
        assert np.all(masked[top_y, x0:x1, :3] == topline_rgb)
        assert np.array_equal(masked[baseline_y], solid[baseline_y])
        assert np.array_equal(masked[top_y], solid[top_y])

    # Glyph band of the first repeat row: ink the mask erased back to paper
    row = layout.rows[0]
    band = (slice(round(row.guides.top) + 3, round(row.glyph_y)), slice(x0, x1))
    erased = np.all(masked[band][..., :3] == 255, axis=-1) & np.any(solid[band][..., :3] != 255, axis=-1)
    print(f"  Erased glyph pixels in first row: {int(erased.sum())}")
    assert erased.sum() > 0
    print("  [PASS] Mask spares guide lines")


def test_render_header_only():
    """An empty letter list gives the header and nothing below it."""
    print("\n" + "="*60)
    print("TEST: Header-Only Page")
    print("="*60)

    page = render_worksheet([], "chewy")
    header = page[:CONFIG.header_y + 20]
    below = page[CONFIG.header_y + CONFIG.header_advance:]

    assert np.any(header[..., :3] != 255)
    assert np.all(below[..., :3] == 255)
    print("  [PASS] Header-only page")


def test_render_result_details():
    """Compositor result carries layout, positions and the overflow flag."""
    print("\n" + "="*60)
    print("TEST: Compositor Result")
    print("="*60)

    compositor = WorksheetCompositor()
    result = compositor.render(WorksheetSpec(["A"], "bangers"))
    print(f"  Positions: {result.glyph_positions}, {result.processing_time_ms:.1f}ms")

    assert len(result.layout.rows) == 2
    assert len(result.glyph_positions) == 2
    assert len(result.glyph_positions[0]) >= 1
    assert result.glyph_positions[1] == [CONFIG.margin_x + CONFIG.glyph_indent]

    crowded = compositor.render(WorksheetSpec(list(ALPHABET)))
    assert crowded.layout.overflow
    assert crowded.image.shape == (CONFIG.page_height, CONFIG.page_width, 4)
    print("  [PASS] Compositor result")


def test_render_never_raises():
    """Bad geometry falls back to a blank page of the configured size."""
    print("\n" + "="*60)
    print("TEST: Render Never Raises")
    print("="*60)

    bad = WorksheetConfig(page_width=400, page_height=300, mask_tile_size=0)
    page = render_worksheet(["A"], "helvetica", bad)
    assert page.shape == (300, 400, 4)
    assert np.all(page[..., :3] == 255)

    # Unknown font ids fall back to the default style
    page = render_worksheet(["A"], "no-such-font")
    assert page.shape == (CONFIG.page_height, CONFIG.page_width, 4)
    print("  [PASS] Render never raises")


def main():
    """Run all tests."""
    print("="*60)
    print("WORKSHEET TEST SUITE")
    print("="*60)

    tests = [
        ("Layout (A, B)", test_layout_two_letters),
        ("Layout Edges", test_layout_edges),
        ("Repeat Positions", test_repeat_positions),
        ("Dash Mask", test_dash_mask),
        ("Trace Letters", test_trace_letters),
        ("Deterministic Rendering", test_render_deterministic),
        ("Mask Spares Guide Lines", test_mask_spares_guides),
        ("Header-Only Page", test_render_header_only),
        ("Compositor Result", test_render_result_details),
        ("Render Never Raises", test_render_never_raises),
    ]

    results = []
    for name, test_func in tests:
        try:
            test_func()
            results.append((name, True))
        except Exception as e:
            print(f"  [ERROR] {e}")
            import traceback
            traceback.print_exc()
            results.append((name, False))

    # Summary
    print("\n" + "="*60)
    print("SUMMARY")
    print("="*60)

    passed = sum(1 for _, r in results if r)
    total = len(results)

    for name, result in results:
        status = "PASS" if result else "FAIL"
        print(f"  [{status}] {name}")

    print(f"\n  {passed}/{total} tests passed")
    return passed == total


if __name__ == "__main__":
    success = main()
    sys.exit(0 if success else 1)
