"""
Activity Book - Entry Point

Command line front end for the page renderers.

Example:
    python main.py segment line_art.png page.png
    python main.py segment line_art.png page.png --labels letter --assign adjacent
    python main.py worksheet trace.png --letters A,B,C --font chewy
    python main.py trace-book ./book --pages 5
"""

import sys
import time
import logging
import argparse
from pathlib import Path

from PIL import Image

from activity_book.debug import DEBUG_DIR, save_debug_image
from activity_book.fonts import available_fonts
from activity_book.pages import BookRenderer, RenderOptions, trace_requests
from activity_book.pixels import to_image
from activity_book.segmentation import (
    LabelStyle,
    SegmentationEngine,
    available_fill_backends,
    available_label_strategies,
)
from activity_book.settings import load_settings
from activity_book.worksheet import render_worksheet


# Configure logging - output to both console and file
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%H:%M:%S",
    handlers=[
        logging.StreamHandler(),  # Console output
        logging.FileHandler("activity_book.log", mode='w', encoding='utf-8')  # File output
    ]
)
logger = logging.getLogger(__name__)


def cmd_segment(args, settings, options: RenderOptions, debug_mode: bool) -> int:
    """Annotate one line-art image with numbered or lettered regions."""
    try:
        image = Image.open(args.input)
        image.load()
    except OSError as e:
        logger.error(f"Cannot read {args.input}: {e}")
        return 1

    engine = SegmentationEngine(
        config=options.segmentation,
        legend=options.legend,
        label_style=LabelStyle(args.labels),
        label_strategy=options.label_strategy,
        fill_backend=options.fill_backend,
        seed=options.seed,
        font_id=args.font or settings.get("default_font", "helvetica"),
        font_dirs=options.font_dirs,
    )

    try:
        result = engine.process(image)
    except ValueError as e:
        logger.error(f"Cannot segment {args.input}: {e}")
        return 1

    to_image(result.image).save(args.output, "PNG")
    logger.info(
        f"{args.output}: {len(result.regions)} regions "
        f"({result.rejected} rejected) in {result.processing_time_ms:.1f}ms"
    )

    if debug_mode:
        path = DEBUG_DIR / f"debug_{int(time.time() * 1000)}.png"
        save_debug_image(image, result, str(path), options.segmentation.min_region_pixels)
        logger.info(f"Debug image saved: {path}")

    return 0


def cmd_worksheet(args, settings, options: RenderOptions, debug_mode: bool) -> int:
    """Render one handwriting worksheet."""
    letters = [item for item in args.letters.split(",") if item.strip()]
    font_id = args.font or settings.get("default_font", "helvetica")

    page = render_worksheet(letters, font_id, options.worksheet, options.font_dirs)
    to_image(page).save(args.output, "PNG")
    logger.info(f"{args.output}: worksheet for {', '.join(letters) or '(no letters)'}")
    return 0


def cmd_trace_book(args, settings, options: RenderOptions, debug_mode: bool) -> int:
    """Render the A-Z trace pages of a book into a directory."""
    font_id = args.font or settings.get("default_font", "helvetica")
    try:
        requests = trace_requests(args.pages, font_id)
    except ValueError as e:
        logger.error(str(e))
        return 1

    out_dir = Path(args.out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    renderer = BookRenderer(options, max_workers=settings.get("max_workers", 4))
    pages = renderer.render_pages(requests)

    failed = 0
    for number, (request, page) in enumerate(zip(requests, pages), start=1):
        if page is None:
            failed += 1
            continue
        path = out_dir / f"page_{number:02d}.png"
        to_image(page).save(path, "PNG")
        logger.info(f"{path}: {request.description}")

    return 1 if failed else 0


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Activity Book - color-by-number pages and handwriting worksheets"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug mode (verbose logging, save annotated region images)"
    )
    parser.add_argument(
        "--config", "-c",
        type=Path,
        default=None,
        help="Settings file (default: config.json)"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    segment = subparsers.add_parser("segment", help="Annotate line art with labelled regions")
    segment.add_argument("input", help="Line-art image")
    segment.add_argument("output", help="Output PNG")
    segment.add_argument(
        "--labels",
        choices=[style.value for style in LabelStyle],
        default=LabelStyle.NUMBER.value,
        help="Print region labels as numbers or letters (default: number)"
    )
    segment.add_argument(
        "--assign",
        choices=available_label_strategies(),
        default=None,
        help="Label assignment strategy (default: from settings)"
    )
    segment.add_argument(
        "--backend",
        choices=available_fill_backends(),
        default=None,
        help="Flood-fill backend (default: from settings)"
    )
    segment.add_argument("--seed", type=int, default=None, help="Seed for random labels")
    segment.add_argument("--font", choices=available_fonts(), default=None, help="Label font")
    segment.set_defaults(handler=cmd_segment)

    worksheet = subparsers.add_parser("worksheet", help="Render a handwriting worksheet")
    worksheet.add_argument("output", help="Output PNG")
    worksheet.add_argument("--letters", "-l", default="", help="Comma separated letters, e.g. A,B,C")
    worksheet.add_argument("--font", choices=available_fonts(), default=None, help="Header font")
    worksheet.set_defaults(handler=cmd_worksheet)

    trace_book = subparsers.add_parser("trace-book", help="Render A-Z trace pages")
    trace_book.add_argument("out_dir", help="Output directory")
    trace_book.add_argument("--pages", "-n", type=int, default=5, help="Number of pages (default: 5)")
    trace_book.add_argument("--font", choices=available_fonts(), default=None, help="Header font")
    trace_book.set_defaults(handler=cmd_trace_book)

    return parser.parse_args(argv)


def main(argv=None) -> int:
    """Run the selected command."""
    args = parse_args(argv)
    settings = load_settings(args.config)

    # CLI flag overrides saved setting
    debug_mode = args.debug or settings.get("debug_enabled", False)
    if debug_mode:
        logging.getLogger().setLevel(logging.DEBUG)

    options = RenderOptions.from_settings(
        settings,
        label_strategy=getattr(args, "assign", None),
        fill_backend=getattr(args, "backend", None),
        seed=getattr(args, "seed", None),
    )

    return args.handler(args, settings, options, debug_mode)


if __name__ == "__main__":
    sys.exit(main())
