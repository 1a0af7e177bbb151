"""
Module: renderer

Purpose:
    Turn a question paper tree into PDF pages.
    Block rendering, question layout and document assembly over a
    ReportLab-backed cell canvas.

Key Functions:
    - render_document(): Validate raw JSON and render
    - render_paper(): Render a typed QuestionPaper
    - render_question(): Lay out one question
    - render_block(): Draw one content block

Key Classes:
    - PdfCanvas: Drawing surface
    - PageSettings: Page margins
    - FontStrategy: Font/script handling

Dependencies:
    - reportlab: PDF generation
    - requests: Remote images

Used By:
    - qpaper_pdf.controller
"""

from .config import OutputConfig, PageSettings
from .fonts import CoreFontStrategy, FontStrategy, TrueTypeFontStrategy
from .canvas import PdfCanvas
from .blocks import render_block, render_blocks
from .layout import render_question
from .assembler import RenderResult, render_document, render_paper

__all__ = [
    # Config
    "OutputConfig",
    "PageSettings",
    # Fonts
    "CoreFontStrategy",
    "FontStrategy",
    "TrueTypeFontStrategy",
    # Canvas
    "PdfCanvas",
    # Functions
    "render_block",
    "render_blocks",
    "render_question",
    "render_document",
    "render_paper",
    "RenderResult",
]
