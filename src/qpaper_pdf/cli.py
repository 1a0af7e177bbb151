"""
Command-line entry point.

Usage:
    # Render with default margins into ./question-papers
    qpaper-pdf paper.json

    # Custom output location, public URL and margins
    qpaper-pdf paper.json --output-dir /srv/papers --base-url https://example.com/papers \
        --filename class-9-math --margin-left 20

    # Embed a Bengali font for body text
    qpaper-pdf paper.json --font fonts/NotoSansBengali-Regular.ttf \
        --bold-font fonts/NotoSansBengali-Bold.ttf
"""
from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Sequence

from .controller import GenerationError, generate_pdf
from .renderer.config import OutputConfig
from .renderer.fonts import CoreFontStrategy, FontStrategy, TrueTypeFontStrategy

logger = logging.getLogger(__name__)

EXIT_GENERATION_FAILED = 1
EXIT_BAD_INPUT = 2


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="qpaper-pdf",
        description="Render question paper JSON to a board-styled PDF",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
The JSON file holds the question paper ({"header"|"setup": ..., "questions": [...]}).
It may instead hold {"questionPaper": ..., "pageSettings": ..., "filename": ...};
command-line options override values from the file.
        """,
    )
    parser.add_argument("paper", type=Path, help="Question paper JSON file")
    parser.add_argument(
        "--output-dir",
        type=Path,
        default=Path("question-papers"),
        help="Directory for generated PDFs (default: ./question-papers)",
    )
    parser.add_argument("--base-url", default="", help="Public URL prefix of the output directory")
    parser.add_argument("--filename", default=None, help="Base name for the PDF (default: question-paper)")
    for side in ("left", "top", "right", "bottom"):
        parser.add_argument(
            f"--margin-{side}",
            type=int,
            default=None,
            help=f"{side.capitalize()} margin in mm (default: 15)",
        )
    parser.add_argument("--font", type=Path, default=None, help="TrueType font for body text")
    parser.add_argument("--bold-font", type=Path, default=None, help="TrueType font for bold text")
    parser.add_argument("--italic-font", type=Path, default=None, help="TrueType font for italic text")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    return parser


def _load_request(path: Path) -> dict:
    """Read the input file, unwrapping a request envelope if present."""
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict) and "questionPaper" in data:
        return data
    return {"questionPaper": data}


def _font_strategy(args: argparse.Namespace) -> FontStrategy:
    if args.font is None:
        return CoreFontStrategy()
    return TrueTypeFontStrategy(args.font, bold=args.bold_font, italic=args.italic_font)


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s | %(levelname)s | %(message)s",
    )

    try:
        request = _load_request(args.paper)
    except (OSError, ValueError) as e:
        logger.error(f"Cannot read {args.paper}: {e}")
        return EXIT_BAD_INPUT

    page_settings = request.get("pageSettings")
    page_settings = dict(page_settings) if isinstance(page_settings, dict) else {}
    for side in ("left", "top", "right", "bottom"):
        value = getattr(args, f"margin_{side}")
        if value is not None:
            page_settings[f"margin{side.capitalize()}"] = value

    try:
        generated = generate_pdf(
            request["questionPaper"],
            page_settings,
            args.filename or request.get("filename"),
            output=OutputConfig(output_dir=args.output_dir, base_url=args.base_url),
            fonts=_font_strategy(args),
        )
    except GenerationError as e:
        logger.error(f"{e} (status {e.status})")
        return EXIT_GENERATION_FAILED

    print(json.dumps(generated.to_dict(), ensure_ascii=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
