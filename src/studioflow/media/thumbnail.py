"""Thumbnail image output."""

import logging
import mimetypes
from pathlib import Path
from typing import Optional

from ..models import Thumbnail

logger = logging.getLogger(__name__)

THUMBNAIL_STEM = "generated_thumbnail"


def thumbnail_filename(thumbnail: Thumbnail) -> str:
    """Return the download filename, with an extension matching the MIME type."""
    extension = mimetypes.guess_extension(thumbnail.mime_type) or ".png"
    if extension == ".jpe":
        extension = ".jpg"
    return f"{THUMBNAIL_STEM}{extension}"


def save_thumbnail(
    thumbnail: Thumbnail,
    directory: Path,
    filename: Optional[str] = None,
) -> Path:
    """Write a thumbnail image to ``directory`` and return its path."""
    directory.mkdir(parents=True, exist_ok=True)
    path = directory / (filename or thumbnail_filename(thumbnail))
    path.write_bytes(thumbnail.image)
    logger.info(f"Saved thumbnail to {path}")
    return path
