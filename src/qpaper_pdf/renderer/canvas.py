"""
Module: renderer.canvas

Purpose:
    Cell-based drawing surface over a ReportLab canvas. Coordinates are in
    millimetres measured from the top-left corner, with a text cursor that
    advances as cells are placed and an automatic page break at the bottom
    margin.

Key Classes:
    - PdfCanvas: Cell/text/image/rect primitives, cursor and pagination

Dependencies:
    - reportlab: PDF generation
    - PIL: Image decoding
    - renderer.fonts: Logical font resolution
    - renderer.config: Page margins

Used By:
    - renderer.blocks, renderer.layout, renderer.assembler
"""

from __future__ import annotations

import io
import logging
from pathlib import Path
from typing import Optional, Union

from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import ImageReader, simpleSplit
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfgen import canvas

from .config import PageSettings
from .fonts import CoreFontStrategy, FontStrategy, SANS, normalize_style

logger = logging.getLogger(__name__)

# Conversion for image sizes given in CSS pixels (96 DPI)
PX_TO_MM = 0.264583

# Horizontal padding inside a cell
CELL_MARGIN_MM = 1.0
LINE_WIDTH_MM = 0.2

Border = Union[int, str]
Color = tuple[int, int, int]


def _pil_to_reader(img: Image.Image) -> ImageReader:
    """Re-encode a decoded image as PNG for ReportLab."""
    buf = io.BytesIO()
    img.save(buf, format="PNG")
    buf.seek(0)
    return ImageReader(buf)


def _rgb(color: Color) -> tuple[float, float, float]:
    return (color[0] / 255.0, color[1] / 255.0, color[2] / 255.0)


class PdfCanvas:
    """
    A4 drawing surface with a flowing cursor.

    Cells are rectangles of a given width and height that optionally carry
    one line of text, a border and a background. After a cell the cursor
    either moves right (``ln=0``), to the start of the next line (``ln=1``)
    or straight down (``ln=2``). A width of 0 extends the cell to the right
    margin.

    Example:
        >>> c = PdfCanvas(PageSettings())
        >>> c.add_page()
        >>> c.set_font("sans", "B", 12)
        >>> c.cell(0, 6, "Heading", ln=1, align="C")
        >>> data = c.output()
    """

    def __init__(self, settings: PageSettings, fonts: Optional[FontStrategy] = None):
        self.settings = settings
        self.fonts = fonts or CoreFontStrategy()
        self.page_width, self.page_height = A4[0] / mm, A4[1] / mm
        self.l_margin = settings.margin_left
        self.t_margin = settings.margin_top
        self.r_margin = settings.margin_right
        self.b_margin = settings.margin_bottom
        self.auto_page_break = True
        self.page_break_trigger = self.page_height - self.b_margin

        self.page = 0
        self.x = self.l_margin
        self.y = self.t_margin
        self.last_h = 0.0

        self._family = SANS
        self._style = ""
        self._size = 11.0
        self._fill_color: Color = (255, 255, 255)
        self._draw_color: Color = (0, 0, 0)

        self._buffer = io.BytesIO()
        self._pdf = canvas.Canvas(self._buffer, pagesize=A4)
        self._closed = False

    # ─────────────────────────────────────────────────────────────────────────
    # Document and page state
    # ─────────────────────────────────────────────────────────────────────────

    def set_metadata(self, *, title: str = "", author: str = "", creator: str = "") -> None:
        if title:
            self._pdf.setTitle(title)
        if author:
            self._pdf.setAuthor(author)
        if creator:
            self._pdf.setCreator(creator)

    @property
    def page_count(self) -> int:
        return self.page

    def add_page(self) -> None:
        """Finish the current page (if any) and move the cursor to the top of a new one."""
        if self.page > 0:
            self._pdf.showPage()
        self.page += 1
        self.x = self.l_margin
        self.y = self.t_margin

    def _break_if_needed(self, h: float) -> bool:
        if not self.auto_page_break or self.page == 0:
            return False
        if self.y + h <= self.page_break_trigger:
            return False
        x = self.x
        self.add_page()
        self.x = x
        return True

    def ensure_space(self, h: float) -> bool:
        """Start a new page if ``h`` millimetres would cross the break threshold."""
        return self._break_if_needed(h)

    def output(self) -> bytes:
        """
        Finish the document and return the PDF bytes.

        A document with no pages gets one blank page.
        """
        if not self._closed:
            if self.page == 0:
                self.add_page()
            self._pdf.showPage()
            self._pdf.save()
            self._closed = True
        return self._buffer.getvalue()

    # ─────────────────────────────────────────────────────────────────────────
    # Cursor
    # ─────────────────────────────────────────────────────────────────────────

    def get_x(self) -> float:
        return self.x

    def get_y(self) -> float:
        return self.y

    def set_x(self, x: float) -> None:
        self.x = x

    def set_y(self, y: float) -> None:
        """Move the cursor to ``y`` and back to the left margin."""
        self.x = self.l_margin
        self.y = y

    def ln(self, h: Optional[float] = None) -> None:
        """Line break: back to the left margin, down by ``h`` (default: last cell height)."""
        self.x = self.l_margin
        self.y += self.last_h if h is None else h

    # ─────────────────────────────────────────────────────────────────────────
    # Style
    # ─────────────────────────────────────────────────────────────────────────

    @property
    def font(self) -> tuple[str, str, float]:
        """Current logical font as (family, style, size)."""
        return (self._family, self._style, self._size)

    def set_font(self, family: str, style: str = "", size: Optional[float] = None) -> None:
        self._family = family
        self._style = normalize_style(style)
        if size is not None:
            self._size = float(size)

    @property
    def font_name(self) -> str:
        return self.fonts.font_name(self._family, self._style)

    @property
    def font_size_mm(self) -> float:
        return self._size / mm

    def set_fill_color(self, r: int, g: Optional[int] = None, b: Optional[int] = None) -> None:
        self._fill_color = (r, r, r) if g is None or b is None else (r, g, b)

    def set_draw_color(self, r: int, g: Optional[int] = None, b: Optional[int] = None) -> None:
        self._draw_color = (r, r, r) if g is None or b is None else (r, g, b)

    def get_string_width(self, text: str) -> float:
        return pdfmetrics.stringWidth(text, self.font_name, self._size) / mm

    # ─────────────────────────────────────────────────────────────────────────
    # Drawing primitives
    # ─────────────────────────────────────────────────────────────────────────

    def _apply_colors(self) -> None:
        self._pdf.setFillColorRGB(*_rgb(self._fill_color))
        self._pdf.setStrokeColorRGB(*_rgb(self._draw_color))
        self._pdf.setLineWidth(LINE_WIDTH_MM * mm)

    def _line(self, x1: float, y1: float, x2: float, y2: float) -> None:
        self._pdf.line(
            x1 * mm, (self.page_height - y1) * mm,
            x2 * mm, (self.page_height - y2) * mm,
        )

    def rect(self, x: float, y: float, w: float, h: float, style: str = "D") -> None:
        """Draw a rectangle; style "D" outlines, "F" fills, "DF" does both."""
        style = style.upper()
        fill = "F" in style
        stroke = "D" in style or not fill
        self._pdf.saveState()
        self._apply_colors()
        self._pdf.rect(
            x * mm, (self.page_height - y - h) * mm, w * mm, h * mm,
            stroke=int(stroke), fill=int(fill),
        )
        self._pdf.restoreState()

    def cell(
        self,
        w: float,
        h: float = 0,
        txt: str = "",
        border: Border = 0,
        ln: int = 0,
        align: str = "",
        fill: bool = False,
    ) -> None:
        """
        Place a single-line cell at the cursor.

        Args:
            w: Width in mm (0 = up to the right margin)
            h: Height in mm
            txt: Text, drawn on one line and vertically centred
            border: 0, 1 (frame) or any of "LTRB" for individual edges
            ln: Cursor after the cell: 0 right, 1 next line, 2 below
            align: "L", "C" or "R"
            fill: Paint the background with the fill colour
        """
        txt = self.fonts.convert(str(txt)) if txt else ""
        self._break_if_needed(h)
        if w == 0:
            w = self.page_width - self.r_margin - self.x

        if fill or border == 1:
            self.rect(self.x, self.y, w, h, "DF" if fill and border == 1 else ("F" if fill else "D"))
        if isinstance(border, str) and border:
            self._pdf.saveState()
            self._apply_colors()
            edges = border.upper()
            if "L" in edges:
                self._line(self.x, self.y, self.x, self.y + h)
            if "T" in edges:
                self._line(self.x, self.y, self.x + w, self.y)
            if "R" in edges:
                self._line(self.x + w, self.y, self.x + w, self.y + h)
            if "B" in edges:
                self._line(self.x, self.y + h, self.x + w, self.y + h)
            self._pdf.restoreState()

        if txt:
            align = (align or "L").upper()
            if align == "R":
                dx = w - CELL_MARGIN_MM - self.get_string_width(txt)
            elif align == "C":
                dx = (w - self.get_string_width(txt)) / 2
            else:
                dx = CELL_MARGIN_MM
            baseline = self.y + 0.5 * h + 0.3 * self.font_size_mm
            self._pdf.setFillColorRGB(0, 0, 0)
            self._pdf.setFont(self.font_name, self._size)
            self._pdf.drawString((self.x + dx) * mm, (self.page_height - baseline) * mm, txt)

        self.last_h = h
        if ln > 0:
            self.y += h
            if ln == 1:
                self.x = self.l_margin
        else:
            self.x += w

    def wrap_text(self, txt: str, width: float) -> list[str]:
        """Split text into lines no wider than ``width`` mm, honouring newlines."""
        lines: list[str] = []
        for paragraph in txt.replace("\r\n", "\n").split("\n"):
            lines.extend(simpleSplit(paragraph, self.font_name, self._size, width * mm) or [""])
        return lines

    def multi_cell(
        self,
        w: float,
        h: float,
        txt: str,
        border: Border = 0,
        align: str = "L",
        fill: bool = False,
    ) -> None:
        """
        Place word-wrapped text as a stack of cells.

        Every line starts at the cursor's current x; afterwards the cursor
        sits at the left margin below the last line. Empty text still
        produces one line.
        """
        if w == 0:
            w = self.page_width - self.r_margin - self.x
        start_x = self.x
        text = self.fonts.convert(str(txt)) if txt else ""
        for line in self.wrap_text(text, w - 2 * CELL_MARGIN_MM):
            self.x = start_x
            self.cell(w, h, line, border, 2, align, fill)
        self.x = self.l_margin

    def image(
        self,
        path: Union[str, Path],
        x: Optional[float] = None,
        y: Optional[float] = None,
        w: float = 0,
        h: float = 0,
    ) -> tuple[float, float]:
        """
        Place an image file.

        Missing dimensions come from the image's pixel size (96 DPI), or
        from its aspect ratio when one dimension is given. With ``y`` left
        as None the image flows at the cursor, breaking the page if needed,
        and the cursor moves below it.

        Returns:
            (width, height) placed, in mm

        Raises:
            OSError: If the file cannot be opened or decoded as an image,
                or its pixel count exceeds Pillow's decompression bomb limit
        """
        try:
            with Image.open(path) as img:
                img.load()
                if img.mode not in ("RGB", "RGBA", "L"):
                    img = img.convert("RGBA")
                iw, ih = img.size
                reader = _pil_to_reader(img)
        except Image.DecompressionBombError as e:
            raise OSError(f"Image too large: {e}") from e
        if not w and not h:
            w, h = iw * PX_TO_MM, ih * PX_TO_MM
        elif not w:
            w = h * iw / ih
        elif not h:
            h = w * ih / iw

        if y is None:
            self._break_if_needed(h)
            y = self.y
            self.y += h
        if x is None:
            x = self.x

        self._pdf.drawImage(
            reader,
            x * mm,
            (self.page_height - y - h) * mm,
            width=w * mm,
            height=h * mm,
            mask="auto",
        )
        return (w, h)
