"""
Module: output.storage

Purpose:
    Write rendered PDFs into the output directory under collision-free
    names of the form ``{slug}-{unix_timestamp}.pdf`` and describe the
    result as path, public URL and filename.

Key Functions:
    - sanitize_filename(): Slug for the requested base name
    - save_pdf(): Exclusive-create write with partial-file cleanup

Dependencies:
    - renderer.config: OutputConfig

Used By:
    - controller: Generation pipeline
"""

from __future__ import annotations

import logging
import re
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from qpaper_pdf.renderer.config import OutputConfig

logger = logging.getLogger(__name__)

DEFAULT_BASENAME = "question-paper"


@dataclass(frozen=True)
class GeneratedPdf:
    """
    A PDF written to storage.

    Attributes:
        path: Absolute or output-dir-relative file path
        url: Public URL ("" when no base URL is configured)
        filename: File name inside the output directory
    """
    path: Path
    url: str
    filename: str

    def to_dict(self) -> dict[str, str]:
        return {"path": str(self.path), "url": self.url, "filename": self.filename}


def sanitize_filename(name: Optional[str]) -> str:
    """
    Convert a requested base name to a safe slug.

    Example:
        >>> sanitize_filename("Class 9 / Math (Final).pdf")
        'class-9-math-final'
    """
    name = re.sub(r"\.pdf$", "", (name or "").strip(), flags=re.IGNORECASE)
    slug = re.sub(r"[^A-Za-z0-9_]+", "-", name).strip("-_")
    return slug.lower() or DEFAULT_BASENAME


def _candidate_names(base: str, timestamp: int):
    stem = f"{base}-{timestamp}"
    yield f"{stem}.pdf"
    counter = 1
    while True:
        yield f"{stem}({counter}).pdf"
        counter += 1


def save_pdf(
    data: bytes,
    base_name: Optional[str],
    config: OutputConfig,
    *,
    timestamp: Optional[int] = None,
) -> GeneratedPdf:
    """
    Write PDF bytes to a new file in the output directory.

    Names are claimed with exclusive creation, so concurrent renders never
    share a file. If writing fails, the partial file is removed.

    Args:
        data: PDF contents
        base_name: Requested name (sanitised; default "question-paper")
        config: Output directory and URL prefix
        timestamp: Uniqueness token (default: current Unix time)

    Returns:
        GeneratedPdf describing the written file

    Raises:
        OSError: If the directory or file cannot be written
    """
    output_dir = Path(config.output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)

    base = sanitize_filename(base_name)
    token = int(time.time()) if timestamp is None else timestamp

    for filename in _candidate_names(base, token):
        path = output_dir / filename
        try:
            handle = open(path, "xb")
        except FileExistsError:
            continue
        try:
            with handle:
                handle.write(data)
        except OSError:
            path.unlink(missing_ok=True)
            raise
        break

    logger.info(f"Wrote {len(data)} bytes to {path}")
    return GeneratedPdf(path=path, url=config.url_for(filename), filename=filename)
