import base64
import io
import struct
import sys
import zlib
from pathlib import Path

import pytest
from PIL import Image

# Add src to sys.path so we can import qpaper_pdf
SRC_PATH = Path(__file__).resolve().parent.parent / "src"
if SRC_PATH.as_posix() not in sys.path:
    sys.path.insert(0, SRC_PATH.as_posix())

from qpaper_pdf.renderer.canvas import PdfCanvas  # noqa: E402
from qpaper_pdf.renderer.config import PageSettings  # noqa: E402


class RecordingCanvas(PdfCanvas):
    """PdfCanvas that also records every drawing call with the cursor before it."""

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.ops: list[tuple] = []

    def _record(self, name, *args):
        self.ops.append((name, self.page, round(self.x, 3), round(self.y, 3)) + args)

    def add_page(self):
        super().add_page()
        self._record("add_page")

    def set_font(self, family, style="", size=None):
        super().set_font(family, style, size)
        self._record("set_font", family, style, size)

    def cell(self, w, h=0, txt="", border=0, ln=0, align="", fill=False):
        self._record("cell", w, h, txt, border, ln, align, fill)
        super().cell(w, h, txt, border, ln, align, fill)

    def multi_cell(self, w, h, txt, border=0, align="L", fill=False):
        self._record("multi_cell", w, h, txt)
        super().multi_cell(w, h, txt, border, align, fill)

    def image(self, path, x=None, y=None, w=0, h=0):
        self._record("image", str(path), w, h, Path(path).exists())
        return super().image(path, x, y, w, h)

    def rect(self, x, y, w, h, style="D"):
        self._record("rect", x, y, w, h, style)
        super().rect(x, y, w, h, style)

    def ops_named(self, name):
        return [op for op in self.ops if op[0] == name]

    def texts(self):
        return [op[6] for op in self.ops if op[0] == "cell" and op[6]]


@pytest.fixture
def recorder():
    """Canvas factory that keeps every canvas it builds in `.created`."""
    created: list[RecordingCanvas] = []

    def factory(settings, fonts):
        c = RecordingCanvas(settings, fonts)
        created.append(c)
        return c

    factory.created = created
    return factory


@pytest.fixture
def canvas():
    """Recording canvas with one page open and 11pt body font."""
    c = RecordingCanvas(PageSettings())
    c.set_font("sans", "", 11)
    c.add_page()
    c.ops.clear()
    return c


@pytest.fixture
def sample_image(tmp_path: Path):
    """Create a simple test image."""
    img = Image.new("RGB", (200, 100), color="white")
    img_path = tmp_path / "sample.png"
    img.save(img_path)
    return img_path


@pytest.fixture
def png_data_uri():
    """Small PNG as a base64 data URI."""
    buf = io.BytesIO()
    Image.new("RGB", (40, 20), color="red").save(buf, format="PNG")
    return "data:image/png;base64," + base64.b64encode(buf.getvalue()).decode("ascii")


@pytest.fixture
def minimal_paper():
    return {
        "setup": {"subject": "Math"},
        "questions": [
            {"number": 1, "blocks": [{"type": "text", "content": {"text": "2+2=?"}}]},
        ],
    }


@pytest.fixture
def oversized_png():
    """1x1 PNG whose header claims 20000x20000 pixels (over Pillow's bomb limit)."""
    buf = io.BytesIO()
    Image.new("RGB", (1, 1), color="white").save(buf, format="PNG")
    data = bytearray(buf.getvalue())
    # IHDR chunk: length at 8, type at 12, width/height at 16-24, CRC at 29
    data[16:24] = struct.pack(">II", 20000, 20000)
    data[29:33] = struct.pack(">I", zlib.crc32(bytes(data[12:29])) & 0xFFFFFFFF)
    return bytes(data)
