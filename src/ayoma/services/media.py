"""Storage for uploaded media files.

Uploads are written next to each other in one directory that the app serves
statically. A stored file is not part of any record transaction, so a failed
post or profile update can leave an orphaned file behind.
"""
from __future__ import annotations

import logging
import re
import shutil
import time
from functools import lru_cache
from pathlib import Path, PurePath

from fastapi import UploadFile

from ayoma.core.settings import settings

__all__ = ["MediaStorage", "get_media_storage", "has_file"]

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def _safe_filename(filename: str | None) -> str:
    name = PurePath(filename or "").name
    name = _UNSAFE_CHARS.sub("_", name).strip("._")
    return name or "upload"


class MediaStorage:
    """Writes uploads to ``upload_dir`` and addresses them under ``url_prefix``."""

    def __init__(self, upload_dir: Path | str, url_prefix: str = "/uploads") -> None:
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")

    def save(self, upload: UploadFile) -> str:
        """Store ``upload`` and return its public URL path."""
        filename = f"{int(time.time() * 1000)}-{_safe_filename(upload.filename)}"
        self.upload_dir.mkdir(parents=True, exist_ok=True)
        destination = self.upload_dir / filename
        with destination.open("wb") as out:
            shutil.copyfileobj(upload.file, out)

        logger.info("Stored upload %s", destination)
        return f"{self.url_prefix}/{filename}"


def has_file(upload: UploadFile | None) -> bool:
    """Return True if a multipart field actually carried a file."""
    return upload is not None and bool(upload.filename)


@lru_cache(maxsize=1)
def get_media_storage() -> MediaStorage:
    """Return the media storage configured from settings."""
    return MediaStorage(settings.upload_dir, settings.upload_url_prefix)
