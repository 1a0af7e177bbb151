"""
Module: output

Purpose:
    Persist rendered PDFs and report where they went.

Key Functions:
    - save_pdf(): Write bytes under a unique name
    - sanitize_filename(): Filesystem/URL-safe base name

Key Classes:
    - GeneratedPdf: path / url / filename of a written file
"""

from .storage import GeneratedPdf, sanitize_filename, save_pdf

__all__ = [
    "GeneratedPdf",
    "sanitize_filename",
    "save_pdf",
]
