"""
Module: renderer.blocks

Purpose:
    Render one typed content block onto the canvas. Each block type has a
    fixed drawing policy; afterwards the cursor sits directly below the
    block's content (plus the type's own trailing spacing).

Key Functions:
    - render_block(): Draw a single block
    - render_blocks(): Draw a sequence of blocks in order

Dependencies:
    - core.models.blocks: Block types
    - renderer.canvas: Drawing surface
    - renderer.images: Image source resolution

Used By:
    - renderer.layout: Question and sub-question content
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable

from qpaper_pdf.core.models.blocks import (
    BlankBlock,
    ContentBlock,
    DiagramBlock,
    FormulaBlock,
    ImageBlock,
    ListBlock,
    TableBlock,
    TextBlock,
)

from .canvas import PX_TO_MM, PdfCanvas
from .fonts import MONO, SANS
from .images import ImageSourceError, placeholder_name, resolved_image

logger = logging.getLogger(__name__)

LINE_HEIGHT = 5
BLOCK_SPACING = 1

FORMULA_FONT_SIZE = 10
FORMULA_HEIGHT = 6

CAPTION_FONT_SIZE = 9

TABLE_FONT_SIZE = 10
TABLE_ROW_HEIGHT = 7
# Horizontal allowance subtracted from the page width when sizing columns
TABLE_WIDTH_ALLOWANCE = 30
TABLE_HEADER_FILL = (241, 245, 249)

DIAGRAM_WIDTH = 80
DIAGRAM_HEIGHT = 40
DIAGRAM_FILL = (249, 249, 249)
DIAGRAM_BORDER = (153, 153, 153)
DIAGRAM_DEFAULT_LABEL = "চিত্র"

LIST_BULLET = "-"
LIST_BULLET_WIDTH = 5

BLANK_LINE_ADVANCE = 6


def _render_text(canvas: PdfCanvas, block: TextBlock, inline: bool) -> None:
    canvas.multi_cell(0, LINE_HEIGHT, block.text, 0, "L")
    if not inline:
        canvas.ln(BLOCK_SPACING)


def _render_formula(canvas: PdfCanvas, block: FormulaBlock, inline: bool) -> None:
    # No LaTeX engine: the source is shown verbatim in a monospace face
    previous = canvas.font
    canvas.set_font(MONO, "", FORMULA_FONT_SIZE)
    canvas.cell(0, FORMULA_HEIGHT, block.latex, 0, 1, "C")
    canvas.set_font(*previous)
    canvas.ln(BLOCK_SPACING)


def _render_image(canvas: PdfCanvas, block: ImageBlock, inline: bool) -> None:
    width = block.width * PX_TO_MM if block.width else 0
    height = block.height * PX_TO_MM if block.height else 0
    try:
        with resolved_image(block.url) as path:
            canvas.image(path, w=width, h=height)
    except (ImageSourceError, OSError, ValueError) as e:
        logger.warning(f"Image placeholder for {placeholder_name(block.url)}: {e}")
        canvas.cell(0, 6, f"[Image: {placeholder_name(block.url)}]", 0, 1)
        return

    canvas.ln(2)
    if block.caption:
        previous = canvas.font
        canvas.set_font(SANS, "I", CAPTION_FONT_SIZE)
        canvas.cell(0, LINE_HEIGHT, block.caption, 0, 1, "C")
        canvas.set_font(*previous)
        canvas.ln(BLOCK_SPACING)


def _render_table(canvas: PdfCanvas, block: TableBlock, inline: bool) -> None:
    columns = block.column_count
    if not block.rows or columns == 0:
        return

    col_width = (canvas.page_width - canvas.get_x() - TABLE_WIDTH_ALLOWANCE) / columns
    previous = canvas.font

    if block.has_header_row:
        canvas.set_fill_color(*TABLE_HEADER_FILL)
        canvas.set_font(SANS, "B", TABLE_FONT_SIZE)
        for header in block.headers:
            canvas.cell(col_width, TABLE_ROW_HEIGHT, header, 1, 0, "C", True)
        canvas.ln()

    canvas.set_font(SANS, "", TABLE_FONT_SIZE)
    for row in block.rows:
        for value in row:
            canvas.cell(col_width, TABLE_ROW_HEIGHT, value, 1, 0, "L")
        canvas.ln(TABLE_ROW_HEIGHT)

    canvas.set_font(*previous)
    canvas.ln(2)


def _render_diagram(canvas: PdfCanvas, block: DiagramBlock, inline: bool) -> None:
    canvas.ensure_space(DIAGRAM_HEIGHT)
    x, top = canvas.get_x(), canvas.get_y()
    canvas.set_fill_color(*DIAGRAM_FILL)
    canvas.set_draw_color(*DIAGRAM_BORDER)
    canvas.rect(x, top, DIAGRAM_WIDTH, DIAGRAM_HEIGHT, "DF")
    canvas.set_draw_color(0, 0, 0)

    label = block.description or DIAGRAM_DEFAULT_LABEL
    canvas.set_y(top + (DIAGRAM_HEIGHT - 6) / 2)
    canvas.set_x(x)
    canvas.cell(DIAGRAM_WIDTH, 6, f"[{label}]", 0, 1, "C")
    canvas.set_y(top + DIAGRAM_HEIGHT)
    canvas.ln(2)


def _render_list(canvas: PdfCanvas, block: ListBlock, inline: bool) -> None:
    items = [item for item in block.items if item]
    if not items:
        return
    start_x = canvas.get_x()
    for item in items:
        canvas.set_x(start_x)
        canvas.cell(LIST_BULLET_WIDTH, LINE_HEIGHT, LIST_BULLET, 0, 0)
        canvas.multi_cell(0, LINE_HEIGHT, item, 0, "L")
    canvas.ln(BLOCK_SPACING)


def _max_blank_lines(canvas: PdfCanvas) -> int:
    usable = canvas.page_height - canvas.t_margin - canvas.b_margin
    return max(1, int(usable // BLANK_LINE_ADVANCE))


def _render_blank(canvas: PdfCanvas, block: BlankBlock, inline: bool) -> None:
    # At most one page of answer lines
    lines = max(1, block.lines)
    limit = _max_blank_lines(canvas)
    if lines > limit:
        logger.debug(f"Capping {lines} blank lines at {limit}")
        lines = limit
    start_x = canvas.get_x()
    for _ in range(lines):
        canvas.set_x(start_x)
        canvas.cell(0, 0, "", "B")
        canvas.ln(BLANK_LINE_ADVANCE)


_RENDERERS: dict[type, Callable[[PdfCanvas, ContentBlock, bool], None]] = {
    TextBlock: _render_text,
    FormulaBlock: _render_formula,
    ImageBlock: _render_image,
    TableBlock: _render_table,
    DiagramBlock: _render_diagram,
    ListBlock: _render_list,
    BlankBlock: _render_blank,
}


def render_block(canvas: PdfCanvas, block: ContentBlock, inline: bool = False) -> None:
    """
    Draw one content block at the cursor.

    Args:
        canvas: Drawing surface
        block: Typed block; anything else is ignored
        inline: True inside a sub-question, which drops the trailing
            spacing after text
    """
    renderer = _RENDERERS.get(type(block))
    if renderer is None:
        logger.debug(f"No renderer for {type(block).__name__}, skipping")
        return
    renderer(canvas, block, inline)


def render_blocks(
    canvas: PdfCanvas,
    blocks: Iterable[ContentBlock],
    inline: bool = False,
    indent_x: float | None = None,
) -> None:
    """
    Draw blocks in order.

    Args:
        indent_x: If given, each block starts at this x (sub-question column)
    """
    for block in blocks:
        if indent_x is not None:
            canvas.set_x(indent_x)
        render_block(canvas, block, inline)
