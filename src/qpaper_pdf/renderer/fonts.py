"""
Module: renderer.fonts

Purpose:
    Pluggable font and script handling for the canvas. The assembler picks
    a strategy; the canvas asks it which ReportLab font to use for a
    logical family/style and passes every string through `convert()`.

Key Classes:
    - FontStrategy: Base strategy (core PDF fonts, text passthrough)
    - CoreFontStrategy: Helvetica/Courier, no embedding
    - TrueTypeFontStrategy: Embeds TTF files (e.g. a Bengali font) for the
      sans family

Dependencies:
    - reportlab: font registry

Used By:
    - renderer.canvas: Font resolution
    - renderer.assembler / controller / cli: Strategy selection

Notes:
    ReportLab places glyphs without complex-script shaping, so Bengali
    conjuncts render as separate glyphs even with an embedded font. Core
    fonts cannot encode Bengali at all; those characters come out as
    missing-glyph boxes rather than raising.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont

logger = logging.getLogger(__name__)

# Logical families used by the renderer
SANS = "sans"
MONO = "mono"

_CORE_FONTS: dict[tuple[str, str], str] = {
    (SANS, ""): "Helvetica",
    (SANS, "B"): "Helvetica-Bold",
    (SANS, "I"): "Helvetica-Oblique",
    (SANS, "BI"): "Helvetica-BoldOblique",
    (MONO, ""): "Courier",
    (MONO, "B"): "Courier-Bold",
    (MONO, "I"): "Courier-Oblique",
    (MONO, "BI"): "Courier-BoldOblique",
}


def normalize_style(style: str) -> str:
    """Canonical style key: "", "B", "I" or "BI" (underline is ignored)."""
    style = (style or "").upper()
    return ("B" if "B" in style else "") + ("I" if "I" in style else "")


class FontStrategy:
    """Maps logical fonts to registered ReportLab font names."""

    def font_name(self, family: str, style: str = "") -> str:
        key = (family if family in (SANS, MONO) else SANS, normalize_style(style))
        return _CORE_FONTS[key]

    def convert(self, text: str) -> str:
        """Prepare text for drawing. The base strategy returns it unchanged."""
        return text


class CoreFontStrategy(FontStrategy):
    """Standard PDF fonts only; nothing is embedded."""


def register_ttf_font(font_name: str, font_path: Path) -> bool:
    """
    Register a TrueType font with ReportLab once per process.

    Returns:
        True if the font is (now) registered, False if loading failed
    """
    if font_name in pdfmetrics.getRegisteredFontNames():
        return True
    try:
        pdfmetrics.registerFont(TTFont(font_name, str(font_path)))
        return True
    except Exception as exc:
        logger.warning(f"Failed to register PDF font {font_name} from {font_path}: {exc}")
        return False


class TrueTypeFontStrategy(FontStrategy):
    """
    Embed TrueType fonts for the sans family.

    Styles without their own file reuse the regular face. The mono family
    keeps Courier, which only ever draws LaTeX source. If the regular face
    cannot be loaded, the strategy behaves like CoreFontStrategy.

    Example:
        >>> fonts = TrueTypeFontStrategy(Path("fonts/NotoSansBengali-Regular.ttf"))
        >>> fonts.font_name("sans", "B")
        'NotoSansBengali-Regular'
    """

    def __init__(
        self,
        regular: Path,
        bold: Optional[Path] = None,
        italic: Optional[Path] = None,
    ):
        self._faces: dict[str, str] = {}
        regular = Path(regular)
        regular_name = regular.stem
        if not register_ttf_font(regular_name, regular):
            return
        self._faces[""] = regular_name
        for style, path in (("B", bold), ("I", italic)):
            if path is not None and register_ttf_font(Path(path).stem, Path(path)):
                self._faces[style] = Path(path).stem
        logger.info(f"Using embedded font {regular_name} for body text")

    @property
    def embedded(self) -> bool:
        return bool(self._faces)

    def font_name(self, family: str, style: str = "") -> str:
        if family == MONO or not self._faces:
            return super().font_name(family, style)
        style = normalize_style(style)
        return self._faces.get(style) or self._faces.get(style[:1]) or self._faces[""]
