"""
Root Document Checks

Best-effort absence checks run once at ingestion.

Only the two top-level sections are required. Everything below them is
optional and defaulted by the models, so a paper that passes here always
renders.
"""

from __future__ import annotations

from typing import Any

from .models.paper import header_section

REQUIRED_SECTIONS = ("header", "questions")


class InvalidPaperError(ValueError):
    """Raised when a paper document lacks a required top-level section."""

    def __init__(self, message: str, missing: list[str] | None = None):
        super().__init__(message)
        self.missing = missing or []


def validate_paper(data: Any) -> None:
    """
    Check that a paper document has its required sections.

    The header may be supplied as ``header`` or ``setup``.

    Args:
        data: Decoded JSON document

    Raises:
        InvalidPaperError: If the document is not an object, or the header or
            question list is absent
    """
    if not isinstance(data, dict):
        raise InvalidPaperError(
            f"Paper must be a JSON object, got {type(data).__name__}",
            missing=list(REQUIRED_SECTIONS),
        )

    missing = []
    if not isinstance(header_section(data), dict):
        missing.append("header")
    if not isinstance(data.get("questions"), list):
        missing.append("questions")

    if missing:
        raise InvalidPaperError(f"Missing required sections: {missing}", missing=missing)
