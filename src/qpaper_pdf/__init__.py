"""Top-level package for the question paper PDF renderer.

Provides subpackages:
- qpaper_pdf.core – question paper data model and root checks
- qpaper_pdf.renderer – canvas, block rendering, question layout, assembly
- qpaper_pdf.output – PDF file storage
- qpaper_pdf.controller / qpaper_pdf.cli – generation pipeline and command line
"""


def _get_version() -> str:
    """Get version from pyproject.toml (dev) or importlib.metadata (installed)."""
    from importlib.metadata import PackageNotFoundError, version as pkg_version
    from pathlib import Path

    pyproject = Path(__file__).resolve().parent.parent.parent / "pyproject.toml"
    if pyproject.exists():
        for line in pyproject.read_text(encoding="utf-8").splitlines():
            if line.strip().startswith("version"):
                # Parse: version = "1.0.0"
                return line.split("=")[1].strip().strip('"').strip("'")

    try:
        return pkg_version("qpaper-pdf")
    except PackageNotFoundError:
        return "0.0.0"


__version__ = _get_version()
__all__: list[str] = ["__version__"]
