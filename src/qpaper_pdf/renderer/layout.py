"""
Module: renderer.layout

Purpose:
    Lay out one question: bold number/marks header, the question's own
    blocks, then indented sub-questions (ক, খ, গ, ঘ ...).

Key Functions:
    - render_question(): Draw a question at the cursor
    - question_heading(): Header line text

Algorithm:
    1. "{number}." in bold, with " [{marks} নম্বর]" when marks are set
    2. Question blocks at body size, with trailing spacing
    3. Sub-questions, each shifted SUB_INDENT from the left margin:
       bold label cell, then inline blocks starting at the content column.
       Marks go right-aligned on the label row when there are no blocks,
       otherwise on their own line. A bare label still takes one line.

Dependencies:
    - renderer.blocks: Block rendering
    - renderer.canvas: Drawing surface

Used By:
    - renderer.assembler: Document loop
"""

from __future__ import annotations

from qpaper_pdf.core.models.paper import Question, SubQuestion

from .blocks import render_blocks
from .canvas import PdfCanvas
from .fonts import SANS

MARKS_LABEL = "নম্বর"

QUESTION_FONT_SIZE = 11
QUESTION_HEADING_HEIGHT = 6

SUB_FONT_SIZE = 10
SUB_INDENT = 10
SUB_LABEL_WIDTH = 10
SUB_LINE_HEIGHT = 5
SUB_SECTION_GAP = 2


def question_heading(question: Question) -> str:
    """
    Example:
        >>> question_heading(Question(number="1", marks="5"))
        '1. [5 নম্বর]'
    """
    heading = f"{question.number}."
    if question.marks:
        heading += f" [{question.marks} {MARKS_LABEL}]"
    return heading


def _render_sub_question(canvas: PdfCanvas, sub: SubQuestion) -> None:
    canvas.set_x(canvas.l_margin + SUB_INDENT)
    canvas.set_font(SANS, "B", SUB_FONT_SIZE)
    canvas.cell(SUB_LABEL_WIDTH, SUB_LINE_HEIGHT, sub.label, 0, 0)
    content_x = canvas.get_x()
    canvas.set_font(SANS, "", SUB_FONT_SIZE)

    if sub.blocks:
        render_blocks(canvas, sub.blocks, inline=True, indent_x=content_x)
    # Without blocks the marks cell finishes the label row
    if sub.marks:
        canvas.cell(0, SUB_LINE_HEIGHT, f"[{sub.marks}]", 0, 1, "R")
    elif not sub.blocks:
        canvas.ln()


def render_question(canvas: PdfCanvas, question: Question) -> None:
    """
    Draw one question starting at the cursor.

    Spacing after the question is left to the caller.

    Args:
        canvas: Drawing surface
        question: Question to draw
    """
    canvas.set_font(SANS, "B", QUESTION_FONT_SIZE)
    canvas.cell(0, QUESTION_HEADING_HEIGHT, question_heading(question), 0, 1)

    if question.blocks:
        canvas.set_font(SANS, "", QUESTION_FONT_SIZE)
        render_blocks(canvas, question.blocks)

    if question.sub_questions:
        canvas.ln(SUB_SECTION_GAP)
        for sub in question.sub_questions:
            _render_sub_question(canvas, sub)
