"""
Module: renderer.assembler

Purpose:
    Assemble a complete question paper PDF: page setup, board header, the
    question sequence and final serialisation. A document missing its
    header or question list yields a single "Invalid data" page instead.

Key Functions:
    - render_document(): Raw JSON → RenderResult (validates first)
    - render_paper(): Typed QuestionPaper → RenderResult

Key Classes:
    - RenderResult: PDF bytes plus layout summary

Dependencies:
    - core.models / core.validation: Input model and root checks
    - renderer.canvas, renderer.fonts, renderer.layout

Used By:
    - controller: Generation pipeline
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Optional

from qpaper_pdf.core.models.paper import PaperHeader, QuestionPaper
from qpaper_pdf.core.validation import InvalidPaperError, validate_paper

from .canvas import PdfCanvas
from .config import PageSettings
from .fonts import CoreFontStrategy, FontStrategy, SANS
from .layout import QUESTION_FONT_SIZE, render_question

logger = logging.getLogger(__name__)

DOCUMENT_TITLE = "Question Paper"
DOCUMENT_AUTHOR = "Question Paper Generator"
DOCUMENT_CREATOR = "Question Paper PDF Generator"
INVALID_DATA_TEXT = "Invalid data"

LOGO_WIDTH = 15
QUESTION_SPACING = 4
HEADER_TRAILING_SPACE = 5
# Gap between the full-marks and time labels on the summary line
MARKS_TIME_GAP = " " * 16

CLASS_LABEL = "শ্রেণি"
SUBJECT_LABEL = "বিষয়"
TOTAL_MARKS_LABEL = "পূর্ণমান"
TIME_LABEL = "সময়"

CanvasFactory = Callable[[PageSettings, FontStrategy], PdfCanvas]


@dataclass(frozen=True)
class RenderResult:
    """
    Rendered document (immutable).

    Attributes:
        pdf_bytes: Complete PDF file contents
        page_count: Number of pages
        question_count: Number of questions rendered
        valid: False when the input was replaced by the invalid-data page
    """
    pdf_bytes: bytes
    page_count: int
    question_count: int
    valid: bool = True


def _new_canvas(
    settings: PageSettings,
    fonts: FontStrategy,
    canvas_factory: CanvasFactory,
) -> PdfCanvas:
    canvas = canvas_factory(settings, fonts)
    canvas.set_metadata(title=DOCUMENT_TITLE, author=DOCUMENT_AUTHOR, creator=DOCUMENT_CREATOR)
    canvas.set_font(SANS, "", QUESTION_FONT_SIZE)
    canvas.add_page()
    return canvas


def render_header(canvas: PdfCanvas, header: PaperHeader) -> None:
    """
    Draw the board header block.

    Lines with no value are omitted; the rule, the marks/time line and the
    trailing space are always drawn.
    """
    if header.logo and Path(header.logo).is_file():
        try:
            canvas.image(header.logo, w=LOGO_WIDTH)
            canvas.ln(2)
        except (OSError, ValueError) as e:
            logger.warning(f"Skipping unreadable logo {header.logo}: {e}")

    if header.board_name:
        canvas.set_font(SANS, "B", 13)
        canvas.cell(0, 6, header.board_name, 0, 1, "C")

    if header.title:
        canvas.set_font(SANS, "B", 12)
        canvas.cell(0, 6, header.title, 0, 1, "C")

    canvas.set_font(SANS, "", 10)
    if header.class_name:
        canvas.cell(0, 5, f"{CLASS_LABEL}: {header.class_name}", 0, 1, "C")
    if header.subject:
        canvas.cell(0, 5, f"{SUBJECT_LABEL}: {header.subject}", 0, 1, "C")

    canvas.ln(2)
    canvas.cell(0, 0, "", "T")
    canvas.ln(1)

    parts = []
    if header.total_marks:
        parts.append(f"{TOTAL_MARKS_LABEL}: {header.total_marks}")
    if header.duration_label:
        parts.append(f"{TIME_LABEL}: {header.duration_label}")
    canvas.cell(0, 6, MARKS_TIME_GAP.join(parts), 0, 1, "C")
    canvas.ln(HEADER_TRAILING_SPACE)


def render_paper(
    paper: QuestionPaper,
    settings: Optional[PageSettings] = None,
    fonts: Optional[FontStrategy] = None,
    *,
    canvas_factory: CanvasFactory = PdfCanvas,
) -> RenderResult:
    """
    Render a typed question paper to PDF.

    Args:
        paper: Question paper tree
        settings: Page margins (default 15mm each side)
        fonts: Font strategy (default core fonts, text passthrough)
        canvas_factory: Builds the drawing surface for this render

    Returns:
        RenderResult with the PDF bytes

    Example:
        >>> result = render_paper(QuestionPaper.from_dict(data))
        >>> result.page_count
        1
    """
    settings = settings or PageSettings()
    fonts = fonts or CoreFontStrategy()
    canvas = _new_canvas(settings, fonts, canvas_factory)

    render_header(canvas, paper.header)

    canvas.set_font(SANS, "", QUESTION_FONT_SIZE)
    for question in paper.questions:
        render_question(canvas, question)
        canvas.ln(QUESTION_SPACING)

    pdf_bytes = canvas.output()
    logger.info(f"Rendered {paper.question_count} questions onto {canvas.page_count} pages")
    return RenderResult(
        pdf_bytes=pdf_bytes,
        page_count=canvas.page_count,
        question_count=paper.question_count,
    )


def render_invalid(
    settings: Optional[PageSettings] = None,
    fonts: Optional[FontStrategy] = None,
    *,
    canvas_factory: CanvasFactory = PdfCanvas,
) -> RenderResult:
    """Render the single "Invalid data" page."""
    canvas = _new_canvas(settings or PageSettings(), fonts or CoreFontStrategy(), canvas_factory)
    canvas.cell(0, 6, INVALID_DATA_TEXT, 0, 1)
    return RenderResult(
        pdf_bytes=canvas.output(),
        page_count=canvas.page_count,
        question_count=0,
        valid=False,
    )


def render_document(
    data: Any,
    settings: Optional[PageSettings] = None,
    fonts: Optional[FontStrategy] = None,
    *,
    canvas_factory: CanvasFactory = PdfCanvas,
) -> RenderResult:
    """
    Validate raw paper JSON and render it.

    A document missing ``header``/``setup`` or ``questions`` renders the
    invalid-data page rather than raising.
    """
    try:
        validate_paper(data)
    except InvalidPaperError as e:
        logger.warning(f"Rendering invalid-data page: {e}")
        return render_invalid(settings, fonts, canvas_factory=canvas_factory)
    return render_paper(
        QuestionPaper.from_dict(data), settings, fonts, canvas_factory=canvas_factory
    )
