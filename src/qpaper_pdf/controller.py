"""
Module: controller

Purpose:
    Orchestrate PDF generation for one request.
    Settings → Validate → Render → Save

Key Functions:
    - generate_pdf(): Main entry point, returns the stored file's location

Key Classes:
    - GenerationError: The single error reported to callers

Dependencies:
    - renderer: Document rendering
    - output.storage: File persistence

Used By:
    - qpaper_pdf.cli: Command line
"""

from __future__ import annotations

import logging
import time
from typing import Any, Mapping, Optional

from .output.storage import GeneratedPdf, save_pdf
from .renderer.assembler import render_document
from .renderer.config import OutputConfig, PageSettings
from .renderer.fonts import FontStrategy

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "PDF generation failed"
SERVER_ERROR_STATUS = 500


class GenerationError(Exception):
    """
    Whole-document failure.

    Attributes:
        status: HTTP-style status for transports that report one
    """

    def __init__(self, message: str = GENERIC_ERROR_MESSAGE, status: int = SERVER_ERROR_STATUS):
        super().__init__(message)
        self.status = status


def generate_pdf(
    paper: Any,
    page_settings: Optional[Mapping[str, Any]] = None,
    filename: Optional[str] = "question-paper",
    *,
    output: Optional[OutputConfig] = None,
    fonts: Optional[FontStrategy] = None,
) -> GeneratedPdf:
    """
    Render a question paper and store it as a PDF file.

    Pipeline:
    1. Build page settings from the request options
    2. Validate and render (invalid documents become the invalid-data page)
    3. Write the file under a unique name

    Args:
        paper: Decoded question paper JSON
        page_settings: ``marginLeft`` ... ``marginBottom`` or ``pageMargin``
        filename: Requested base name for the file
        output: Output directory and URL prefix
        fonts: Font strategy (default core fonts)

    Returns:
        GeneratedPdf with path, url and filename

    Raises:
        GenerationError: If anything prevents a complete file from being
            written; no partial file is left behind

    Example:
        >>> result = generate_pdf(data, {"marginLeft": 20}, "class-9-math",
        ...                       output=OutputConfig(Path("out"), "https://example.com/qp"))
        >>> result.url
        'https://example.com/qp/class-9-math-1760000000.pdf'
    """
    start_time = time.perf_counter()
    output = output or OutputConfig()

    try:
        settings = PageSettings.from_dict(page_settings)
        result = render_document(paper, settings, fonts)
        generated = save_pdf(result.pdf_bytes, filename, output)
    except Exception as e:
        logger.error(f"{GENERIC_ERROR_MESSAGE}: {e}", exc_info=True)
        raise GenerationError() from e

    elapsed = time.perf_counter() - start_time
    logger.info(
        f"Generated {generated.filename} ({result.page_count} pages) in {elapsed:.2f}s"
    )
    return generated
