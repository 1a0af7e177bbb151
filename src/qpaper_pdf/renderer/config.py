"""
Module: renderer.config

Purpose:
    Configuration for page rendering and output storage.
    Defines the fixed A4 page, margins and where generated files go.

Key Classes:
    - PageSettings: Immutable page margin configuration
    - OutputConfig: Output directory and public URL prefix

Dependencies:
    - dataclasses (std)
    - reportlab: point/millimetre conversion

Used By:
    - renderer.assembler: Page setup
    - output.storage: File placement
    - controller: Pipeline orchestration
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping

from reportlab.lib.units import mm

# A4 portrait in millimetres
PAGE_WIDTH_MM = 210.0
PAGE_HEIGHT_MM = 297.0

DEFAULT_MARGIN_MM = 15
# Client-side documents use one uniform margin in points
DEFAULT_PAGE_MARGIN_PT = 40


def _int_setting(settings: Mapping[str, Any], key: str, default: int) -> int:
    value = settings.get(key)
    if value is None or value == "":
        return default
    try:
        return int(float(value))
    except (TypeError, ValueError):
        raise ValueError(f"{key} must be a number: {value!r}") from None


@dataclass(frozen=True)
class PageSettings:
    """
    Page margins in millimetres (immutable).

    The page itself is always A4 portrait; only margins vary. The bottom
    margin doubles as the auto page-break threshold.

    Attributes:
        margin_left: Left margin (mm)
        margin_top: Top margin (mm)
        margin_right: Right margin (mm)
        margin_bottom: Bottom margin and page-break threshold (mm)

    Example:
        >>> settings = PageSettings()
        >>> settings.available_width
        180.0
    """

    margin_left: float = DEFAULT_MARGIN_MM
    margin_top: float = DEFAULT_MARGIN_MM
    margin_right: float = DEFAULT_MARGIN_MM
    margin_bottom: float = DEFAULT_MARGIN_MM

    def __post_init__(self) -> None:
        """Validate configuration on construction."""
        for name in ("margin_left", "margin_top", "margin_right", "margin_bottom"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be non-negative: {getattr(self, name)}")
        if self.available_width <= 0:
            raise ValueError("Margins exceed page width")
        if self.available_height <= 0:
            raise ValueError("Margins exceed page height")

    @property
    def page_width(self) -> float:
        return PAGE_WIDTH_MM

    @property
    def page_height(self) -> float:
        return PAGE_HEIGHT_MM

    @property
    def available_width(self) -> float:
        """Width available for content (excluding margins)."""
        return PAGE_WIDTH_MM - self.margin_left - self.margin_right

    @property
    def available_height(self) -> float:
        """Height available for content (excluding margins)."""
        return PAGE_HEIGHT_MM - self.margin_top - self.margin_bottom

    @classmethod
    def uniform(cls, margin: float) -> PageSettings:
        return cls(margin, margin, margin, margin)

    @classmethod
    def from_dict(cls, settings: Mapping[str, Any] | None) -> PageSettings:
        """
        Build settings from request options.

        Accepts the per-side keys ``marginLeft``, ``marginTop``,
        ``marginRight`` and ``marginBottom`` (integer millimetres, default 15).
        When none of those is given but ``pageMargin`` is, that single value
        is read as PDF points and applied to every side.

        Raises:
            ValueError: If a margin is not numeric or margins leave no room
        """
        settings = settings or {}
        side_keys = ("marginLeft", "marginTop", "marginRight", "marginBottom")
        if "pageMargin" in settings and not any(k in settings for k in side_keys):
            points = _int_setting(settings, "pageMargin", DEFAULT_PAGE_MARGIN_PT)
            return cls.uniform(round(points / mm, 2))
        return cls(
            margin_left=_int_setting(settings, "marginLeft", DEFAULT_MARGIN_MM),
            margin_top=_int_setting(settings, "marginTop", DEFAULT_MARGIN_MM),
            margin_right=_int_setting(settings, "marginRight", DEFAULT_MARGIN_MM),
            margin_bottom=_int_setting(settings, "marginBottom", DEFAULT_MARGIN_MM),
        )


@dataclass(frozen=True)
class OutputConfig:
    """
    Where generated PDFs are written and how they are addressed.

    Attributes:
        output_dir: Directory receiving the PDF files (created on demand)
        base_url: Public URL prefix of ``output_dir``; empty for none
    """

    output_dir: Path = Path("question-papers")
    base_url: str = ""

    def url_for(self, filename: str) -> str:
        """Public URL of a generated file, or "" when no base URL is set."""
        if not self.base_url:
            return ""
        return f"{self.base_url.rstrip('/')}/{filename}"
