"""Loader for the front-end carousel images.

The images live in a local JSON file shaped ``{"albums": [{"id", "name",
"photo"}, ...]}``.  A missing, unreadable or malformed file yields an
empty list and a warning, never an error: the carousel is decoration.
"""

from __future__ import annotations

import asyncio
import json
from pathlib import Path

from pydantic import ValidationError

from src.models.catalog import AlbumImage
from src.utils.logging import get_logger

_logger = get_logger(__name__)


def load_album_images(path: str | Path) -> list[AlbumImage]:
    """Read and validate the album images file at *path*."""
    source = Path(path)
    try:
        with open(source, encoding="utf-8") as f:
            payload = json.load(f)
    except FileNotFoundError:
        _logger.warning("album_images_missing", path=str(source))
        return []
    except (OSError, ValueError) as exc:
        _logger.warning("album_images_unreadable", path=str(source), error=str(exc))
        return []

    albums = payload.get("albums") if isinstance(payload, dict) else None
    if not isinstance(albums, list):
        _logger.warning("album_images_malformed", path=str(source), reason="no 'albums' list")
        return []

    images: list[AlbumImage] = []
    for raw in albums:
        try:
            images.append(AlbumImage.model_validate(raw))
        except ValidationError as exc:
            _logger.warning("album_image_skipped", path=str(source), error=str(exc))
    return images


async def read_album_images(path: str | Path) -> list[AlbumImage]:
    """Run :func:`load_album_images` in a worker thread, off the event loop."""
    return await asyncio.to_thread(load_album_images, path)
