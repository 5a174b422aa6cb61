"""
Test script for page dispatch and book rendering

Tests:
1. Mode dispatch for single pages
2. Trace page requests
3. Concurrent book rendering (order, failed pages)

Usage:
    python test_pages.py
"""

import sys
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from activity_book.pages import (
    BookRenderer,
    ColoringMode,
    PageRequest,
    RenderOptions,
    render_page,
    trace_requests,
)
from activity_book.settings import SegmentationConfig, WorksheetConfig

# Small pages keep the worksheet tests quick
SMALL_WORKSHEET = WorksheetConfig(page_width=400, page_height=600)


def line_art(width: int = 200, height: int = 200) -> np.ndarray:
    """White box on black ink."""
    image = np.zeros((height, width, 3), dtype=np.uint8)
    image[30:170, 30:170] = 255
    return image


def test_mode_dispatch():
    """Each mode reaches its renderer."""
    print("\n" + "="*60)
    print("TEST: Mode Dispatch")
    print("="*60)

    options = RenderOptions(worksheet=SMALL_WORKSHEET, seed=1)
    image = line_art()

    standard = render_page(PageRequest(ColoringMode.STANDARD, image=image), options)
    assert standard is image

    footer = SegmentationConfig().footer_height
    for mode in (ColoringMode.NUMBER, ColoringMode.LETTER):
        page = render_page(PageRequest(mode, image=image), options)
        print(f"  {mode.value}: {page.shape}")
        assert page.shape == (200 + footer, 200, 4)

    # Plain strings are accepted as modes
    page = render_page(PageRequest("number", image=image), options)
    assert page.shape == (200 + footer, 200, 4)

    trace = render_page(PageRequest(ColoringMode.TRACE, characters=["A"]), options)
    print(f"  trace: {trace.shape}")
    assert trace.shape == (600, 400, 4)

    print("  [PASS] Mode dispatch")


def test_dispatch_errors():
    """Missing images and unknown modes raise ValueError."""
    print("\n" + "="*60)
    print("TEST: Dispatch Errors")
    print("="*60)

    for mode in (ColoringMode.STANDARD, ColoringMode.NUMBER, ColoringMode.LETTER):
        try:
            render_page(PageRequest(mode))
            raise AssertionError(f"{mode.value} without image should raise")
        except ValueError as e:
            print(f"  {mode.value}: {e}")

    try:
        render_page(PageRequest("watercolor", image=line_art()))
        raise AssertionError("Unknown mode should raise")
    except ValueError:
        pass

    print("  [PASS] Dispatch errors")


def test_trace_from_description():
    """Trace pages fall back to the letters in their description."""
    print("\n" + "="*60)
    print("TEST: Trace From Description")
    print("="*60)

    options = RenderOptions(worksheet=SMALL_WORKSHEET)
    from_description = render_page(
        PageRequest(ColoringMode.TRACE, description="Handwriting practice for letters: A, B"),
        options,
    )
    from_letters = render_page(PageRequest(ColoringMode.TRACE, characters=["A", "B"]), options)
    assert np.array_equal(from_description, from_letters)

    requests = trace_requests(5, font_id="patrick")
    print(f"  Requests: {[r.description for r in requests]}")
    assert len(requests) == 5
    assert all(r.mode is ColoringMode.TRACE for r in requests)
    assert all(r.font_id == "patrick" for r in requests)
    assert requests[0].characters == list("ABCDEF")
    assert requests[-1].description == "Handwriting practice for letters: Y, Z"
    print("  [PASS] Trace from description")


def test_book_renderer():
    """Pages come back in book order; a failed page is None."""
    print("\n" + "="*60)
    print("TEST: Book Renderer")
    print("="*60)

    options = RenderOptions(worksheet=SMALL_WORKSHEET, seed=3)
    renderer = BookRenderer(options, max_workers=3)
    image = line_art()

    requests = [
        PageRequest(ColoringMode.STANDARD, image=image),
        PageRequest(ColoringMode.NUMBER),  # No image: fails
        PageRequest(ColoringMode.TRACE, characters=["Q"]),
        PageRequest(ColoringMode.NUMBER, image=image),
        PageRequest(ColoringMode.LETTER, image=image),
    ]
    pages = renderer.render_pages(requests)

    print(f"  Results: {[None if p is None else p.shape for p in pages]}")
    assert len(pages) == 5
    assert pages[0] is image
    assert pages[1] is None
    assert pages[2].shape == (600, 400, 4)
    assert pages[3].shape[0] > 200
    assert pages[4].shape[0] > 200

    # Same seed, same book
    again = renderer.render_pages(requests)
    assert np.array_equal(pages[3], again[3])

    assert renderer.render_pages([]) == []
    assert BookRenderer(max_workers=0).max_workers == 1
    print("  [PASS] Book renderer")


def test_options_from_settings():
    """Render options pick up settings and explicit overrides."""
    print("\n" + "="*60)
    print("TEST: Options From Settings")
    print("="*60)

    settings = {
        "segmentation": {"label_cycle": 3, "fill_backend": "queue"},
        "worksheet": {"page_width": 800},
        "font_dirs": ["fonts"],
    }
    options = RenderOptions.from_settings(settings, label_strategy="round_robin", seed=9)

    assert options.segmentation.label_cycle == 3
    assert options.segmentation.fill_backend == "queue"
    assert options.worksheet.page_width == 800
    assert options.font_dirs == ("fonts",)
    assert options.label_strategy == "round_robin"
    assert options.seed == 9

    defaults = RenderOptions.from_settings({})
    assert defaults.segmentation == SegmentationConfig()
    assert defaults.label_strategy is None
    print("  [PASS] Options from settings")


def main():
    """Run all tests."""
    print("="*60)
    print("PAGES TEST SUITE")
    print("="*60)

    tests = [
        ("Mode Dispatch", test_mode_dispatch),
        ("Dispatch Errors", test_dispatch_errors),
        ("Trace From Description", test_trace_from_description),
        ("Book Renderer", test_book_renderer),
        ("Options From Settings", test_options_from_settings),
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
