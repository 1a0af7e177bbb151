"""
Module: renderer.images

Purpose:
    Resolve an image block's ``url`` to a local file for the canvas.
    Base64 data URIs and remote URLs are materialised as uniquely named
    temporary files that are removed when the context exits, whether
    placement succeeded or not.

Key Functions:
    - resolved_image(): Context manager yielding a local image path
    - placeholder_name(): Short name shown when an image cannot be placed

Dependencies:
    - requests: Remote image download
    - tempfile (std): Scoped temporary files

Used By:
    - renderer.blocks: Image blocks
"""

from __future__ import annotations

import base64
import binascii
import logging
import re
import tempfile
from contextlib import contextmanager
from pathlib import Path, PurePosixPath
from typing import Iterator, Optional
from urllib.parse import urlparse

import requests

logger = logging.getLogger(__name__)

DATA_URI_PATTERN = re.compile(r"data:image/(\w+);base64,(.*)", re.DOTALL)
TEMP_PREFIX = "qp_img_"
DOWNLOAD_TIMEOUT_S = 10.0


class ImageSourceError(Exception):
    """Raised when an image source cannot be turned into a local file."""


def is_data_uri(url: str) -> bool:
    return url.startswith("data:image")


def is_remote_url(url: str) -> bool:
    parsed = urlparse(url)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _is_local_file(url: str) -> bool:
    try:
        return Path(url).is_file()
    except (OSError, ValueError):
        # Data that merely looks like a path (too long, NUL bytes)
        return False


def placeholder_name(url: str) -> str:
    """
    Basename used in the ``[Image: ...]`` placeholder.

    Example:
        >>> placeholder_name("https://example.com/img/graph.png?v=2")
        'graph.png'
    """
    if is_data_uri(url):
        return "image"
    name = PurePosixPath(urlparse(url).path).name if is_remote_url(url) else Path(url).name
    return name or url


def _write_temp(data: bytes, suffix: str, temp_dir: Optional[Path]) -> Path:
    with tempfile.NamedTemporaryFile(
        prefix=TEMP_PREFIX, suffix=suffix, dir=temp_dir, delete=False
    ) as handle:
        handle.write(data)
    return Path(handle.name)


@contextmanager
def _temporary_file(data: bytes, suffix: str, temp_dir: Optional[Path]) -> Iterator[Path]:
    path = _write_temp(data, suffix, temp_dir)
    try:
        yield path
    finally:
        path.unlink(missing_ok=True)


def decode_data_uri(url: str) -> tuple[str, bytes]:
    """
    Split a ``data:image/<ext>;base64,<payload>`` URI.

    Returns:
        (extension, decoded bytes)

    Raises:
        ImageSourceError: If the URI is malformed or the payload is not base64
    """
    match = DATA_URI_PATTERN.match(url)
    if match is None:
        raise ImageSourceError("Malformed image data URI")
    ext, payload = match.groups()
    try:
        return ext, base64.b64decode(payload)
    except (binascii.Error, ValueError) as e:
        raise ImageSourceError(f"Invalid base64 image payload: {e}") from e


def download_image(url: str, timeout: float = DOWNLOAD_TIMEOUT_S) -> bytes:
    """
    Fetch a remote image.

    Raises:
        ImageSourceError: On connection errors or non-2xx responses
    """
    try:
        resp = requests.get(url, timeout=timeout)
        resp.raise_for_status()
    except requests.exceptions.RequestException as e:
        raise ImageSourceError(f"Failed to download {url}: {e}") from e
    return resp.content


@contextmanager
def resolved_image(
    url: str,
    *,
    temp_dir: Optional[Path] = None,
    timeout: float = DOWNLOAD_TIMEOUT_S,
) -> Iterator[Path]:
    """
    Yield a local file for an image source.

    Resolution order:
    1. ``data:image/...;base64,...`` → decoded temp file
    2. Existing local path → used in place
    3. http(s) URL → downloaded temp file

    Temp files are deleted when the block exits, including on errors.

    Args:
        url: Image source from the block
        temp_dir: Directory for temp files (default: system temp dir)
        timeout: Download timeout in seconds

    Raises:
        ImageSourceError: If the source matches none of the above or
            cannot be decoded/downloaded

    Example:
        >>> with resolved_image(block.url) as path:
        ...     canvas.image(path)
    """
    if is_data_uri(url):
        ext, data = decode_data_uri(url)
        with _temporary_file(data, f".{ext}", temp_dir) as path:
            logger.debug(f"Decoded inline {ext} image to {path}")
            yield path
        return

    if _is_local_file(url):
        yield Path(url)
        return

    if is_remote_url(url):
        data = download_image(url, timeout)
        suffix = PurePosixPath(urlparse(url).path).suffix
        with _temporary_file(data, suffix, temp_dir) as path:
            yield path
        return

    raise ImageSourceError(f"Image source not found: {placeholder_name(url)}")
