"""
Unit tests for font strategies.
"""

from pathlib import Path

import fitz
import pytest
import reportlab

from qpaper_pdf.renderer.canvas import PdfCanvas
from qpaper_pdf.renderer.config import PageSettings
from qpaper_pdf.renderer.fonts import (
    CoreFontStrategy,
    TrueTypeFontStrategy,
    normalize_style,
)

# ReportLab ships the Bitstream Vera family
VERA_DIR = Path(reportlab.__file__).resolve().parent / "fonts"


@pytest.mark.parametrize("style, expected", [
    ("", ""),
    ("b", "B"),
    ("IB", "BI"),
    ("U", ""),
    (None, ""),
])
def test_normalize_style(style, expected):
    assert normalize_style(style) == expected


class TestCoreFontStrategy:

    def test_font_name_when_sans_bold_then_helvetica_bold(self):
        assert CoreFontStrategy().font_name("sans", "B") == "Helvetica-Bold"

    def test_font_name_when_mono_then_courier(self):
        assert CoreFontStrategy().font_name("mono") == "Courier"

    def test_font_name_when_unknown_family_then_sans(self):
        assert CoreFontStrategy().font_name("serif", "I") == "Helvetica-Oblique"

    def test_convert_when_bangla_then_passthrough(self):
        assert CoreFontStrategy().convert("বিষয়") == "বিষয়"

    def test_cell_when_bangla_with_core_font_then_does_not_raise(self):
        c = PdfCanvas(PageSettings())
        c.add_page()
        c.cell(0, 6, "পূর্ণমান: ১০০", 0, 1)
        assert c.output().startswith(b"%PDF")


class TestTrueTypeFontStrategy:

    def test_init_when_font_missing_then_falls_back_to_core(self, tmp_path):
        fonts = TrueTypeFontStrategy(tmp_path / "missing.ttf")
        assert fonts.embedded is False
        assert fonts.font_name("sans", "B") == "Helvetica-Bold"

    def test_font_name_when_regular_only_then_reused_for_bold(self):
        fonts = TrueTypeFontStrategy(VERA_DIR / "Vera.ttf")
        assert fonts.embedded is True
        assert fonts.font_name("sans", "B") == "Vera"
        assert fonts.font_name("mono") == "Courier"

    def test_font_name_when_bold_file_then_bold_face(self):
        fonts = TrueTypeFontStrategy(VERA_DIR / "Vera.ttf", bold=VERA_DIR / "VeraBd.ttf")
        assert fonts.font_name("sans", "B") == "VeraBd"
        assert fonts.font_name("sans", "BI") == "VeraBd"
        assert fonts.font_name("sans", "I") == "Vera"

    def test_output_when_ttf_strategy_then_font_embedded(self):
        # Arrange
        c = PdfCanvas(PageSettings(), TrueTypeFontStrategy(VERA_DIR / "Vera.ttf"))
        c.set_font("sans", "", 11)
        c.add_page()

        # Act
        c.cell(0, 6, "Embedded", 0, 1)

        # Assert
        with fitz.open(stream=c.output(), filetype="pdf") as doc:
            names = [font[3] for font in doc.get_page_fonts(0)]
        assert any("Vera" in name for name in names)
