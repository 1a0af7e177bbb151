"""
Module: blocks

Purpose:
    Typed content blocks - the units of question content. Each block type
    carries only the fields its renderer needs, already defaulted, so the
    renderer never has to inspect raw JSON.

Key Functions:
    - parse_block(data): Build a block from a JSON object (None if unusable)
    - parse_blocks(items): Build an ordered tuple, dropping unusable entries

Dependencies:
    - dataclasses (std)

Used By:
    - core.models.paper: Question, SubQuestion
    - renderer.blocks: per-type drawing

Notes:
    A missing field or unknown type is dealt with once at ingestion: the
    entry is dropped and rendering never sees it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

logger = logging.getLogger(__name__)


def display_text(value: Any) -> str:
    """
    Convert a loosely typed JSON scalar to display text.

    Whole floats lose their trailing ".0" so `5.0` marks print as "5".
    None becomes the empty string.

    Example:
        >>> display_text(5.0)
        '5'
        >>> display_text(None)
        ''
    """
    if value is None:
        return ""
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value).strip()


def _as_list(value: Any) -> list:
    return value if isinstance(value, list) else []


def _as_int(value: Any) -> Optional[int]:
    """Lenient integer conversion: numeric strings and floats truncate, anything else is None."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if not math.isfinite(number):
        return None
    return int(number)


def _as_size(value: Any) -> Optional[int]:
    """Pixel size; zero, negative and unusable values mean "derive from the image"."""
    size = _as_int(value)
    return size if size is not None and size > 0 else None


@dataclass(frozen=True)
class TextBlock:
    text: str


@dataclass(frozen=True)
class FormulaBlock:
    """LaTeX source shown verbatim (no typesetting)."""
    latex: str


@dataclass(frozen=True)
class ImageBlock:
    """
    Image reference.

    Attributes:
        url: http(s) URL, local path, or `data:image/...;base64,...` URI
        width: Width in pixels (None = derive from the image)
        height: Height in pixels (None = derive from the image)
        caption: Optional caption drawn below the image
    """
    url: str
    width: Optional[int] = None
    height: Optional[int] = None
    caption: str = ""


@dataclass(frozen=True)
class TableBlock:
    headers: tuple[str, ...]
    rows: tuple[tuple[str, ...], ...]

    @property
    def column_count(self) -> int:
        """Header count, falling back to the width of the first row."""
        if self.headers:
            return len(self.headers)
        return len(self.rows[0]) if self.rows else 0

    @property
    def has_header_row(self) -> bool:
        return any(self.headers)


@dataclass(frozen=True)
class DiagramBlock:
    description: str = ""


@dataclass(frozen=True)
class ListBlock:
    items: tuple[str, ...]


@dataclass(frozen=True)
class BlankBlock:
    """Ruled answer space."""
    lines: int = 1

    def __post_init__(self) -> None:
        if self.lines < 1:
            object.__setattr__(self, "lines", 1)


ContentBlock = Union[
    TextBlock,
    FormulaBlock,
    ImageBlock,
    TableBlock,
    DiagramBlock,
    ListBlock,
    BlankBlock,
]


# ─────────────────────────────────────────────────────────────────────────────
# Parsing
# ─────────────────────────────────────────────────────────────────────────────

def _parse_text(content: dict) -> Optional[TextBlock]:
    text = content.get("text")
    if text is None:
        return None
    return TextBlock(text=display_text(text))


def _parse_formula(content: dict) -> Optional[FormulaBlock]:
    latex = content.get("latex")
    if latex is None:
        return None
    return FormulaBlock(latex=str(latex))


def _parse_image(content: dict) -> Optional[ImageBlock]:
    url = display_text(content.get("url"))
    if not url:
        return None
    return ImageBlock(
        url=url,
        width=_as_size(content.get("width")),
        height=_as_size(content.get("height")),
        caption=display_text(content.get("caption")),
    )


def _parse_table(content: dict) -> Optional[TableBlock]:
    headers = tuple(display_text(h) for h in _as_list(content.get("headers")))
    # Rows that are not lists are dropped
    rows = tuple(
        tuple(display_text(cell) for cell in row)
        for row in _as_list(content.get("data"))
        if isinstance(row, list)
    )
    return TableBlock(headers=headers, rows=rows)


def _parse_diagram(content: dict) -> DiagramBlock:
    return DiagramBlock(description=display_text(content.get("description")))


def _parse_list(content: dict) -> ListBlock:
    return ListBlock(items=tuple(display_text(i) for i in _as_list(content.get("items"))))


def _parse_blank(content: dict) -> BlankBlock:
    lines = _as_int(content.get("lines"))
    return BlankBlock(lines=lines if lines is not None else 1)


_PARSERS: dict[str, Callable[[dict], Optional[ContentBlock]]] = {
    "text": _parse_text,
    "formula": _parse_formula,
    "image": _parse_image,
    "table": _parse_table,
    "diagram": _parse_diagram,
    "list": _parse_list,
    "blank": _parse_blank,
}

BLOCK_TYPES = frozenset(_PARSERS)


def parse_block(data: Any) -> Optional[ContentBlock]:
    """
    Build a typed block from a JSON object.

    Args:
        data: Object shaped like `{"type": ..., "content": {...}}`

    Returns:
        The typed block, or None when the type is unknown or a required
        content field is missing.
    """
    if not isinstance(data, dict):
        return None
    parser = _PARSERS.get(data.get("type"))
    if parser is None:
        logger.debug(f"Skipping block with unknown type: {data.get('type')!r}")
        return None
    content = data.get("content")
    block = parser(content if isinstance(content, dict) else {})
    if block is None:
        logger.debug(f"Skipping {data['type']} block with missing content")
    return block


def parse_blocks(items: Any) -> tuple[ContentBlock, ...]:
    """Parse a block list, keeping order and dropping unusable entries."""
    blocks = (parse_block(item) for item in _as_list(items))
    return tuple(b for b in blocks if b is not None)
