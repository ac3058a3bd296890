"""
Media file storage on the local filesystem.

Files live under UPLOAD_DIR as `<property_id>/<timestamp>-<token><ext>` and are
served by the static mount at MEDIA_URL_PATH.
"""

import logging
import os
import re
import time
from dataclasses import dataclass
from pathlib import Path

from starlette.concurrency import run_in_threadpool

from app.utils.exceptions import StorageError
from app.utils.security import generate_file_token

logger = logging.getLogger(__name__)

CONTENT_TYPE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "application/pdf": ".pdf",
}


def safe_extension(filename: str | None, content_type: str | None) -> str:
    """Pick a file extension from the client filename, falling back to the content type."""
    ext = os.path.splitext((filename or "").strip())[1].lower()
    if ext and len(ext) <= 12 and re.match(r"^\.[a-z0-9]+$", ext):
        return ext
    return CONTENT_TYPE_EXTENSIONS.get((content_type or "").lower().strip(), ".bin")


@dataclass(frozen=True)
class StoredFile:
    """A file written to the media store."""

    path: str  # Relative to the upload directory
    url: str
    size: int


class LocalMediaStorage:
    """Stores uploaded media on disk and builds public URLs for them."""

    def __init__(self, upload_dir: str, base_url: str, url_path: str = "/uploads"):
        self.root = Path(upload_dir)
        self.base_url = base_url.rstrip("/")
        self.url_path = "/" + url_path.strip("/")

    def build_path(self, property_id: int, filename: str | None, content_type: str | None) -> str:
        """Generate a unique relative path for a new upload."""
        unique = f"{int(time.time() * 1000)}-{generate_file_token()}"
        return f"{property_id}/{unique}{safe_extension(filename, content_type)}"

    def url_for(self, relative_path: str) -> str:
        return f"{self.base_url}{self.url_path}/{relative_path}"

    def _resolve(self, relative_path: str) -> Path:
        root = self.root.resolve()
        target = (root / relative_path).resolve()
        if root not in target.parents:
            raise StorageError("Invalid storage path", details={"path": relative_path})
        return target

    def _write(self, target: Path, data: bytes) -> None:
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_bytes(data)

    async def save(self, relative_path: str, data: bytes) -> StoredFile:
        """Write bytes to the store."""
        target = self._resolve(relative_path)
        try:
            await run_in_threadpool(self._write, target, data)
        except OSError as e:
            raise StorageError("Failed to save upload", details={"path": relative_path}) from e

        logger.debug("Stored media file", extra={"path": relative_path, "size": len(data)})
        return StoredFile(path=relative_path, url=self.url_for(relative_path), size=len(data))

    async def delete(self, relative_path: str) -> None:
        """Remove a file from the store. A file that is already gone is not an error."""
        target = self._resolve(relative_path)
        try:
            await run_in_threadpool(target.unlink, missing_ok=True)
        except OSError as e:
            raise StorageError("Failed to delete file", details={"path": relative_path}) from e

        logger.debug("Deleted media file", extra={"path": relative_path})

    async def delete_many(self, relative_paths: list[str]) -> list[str]:
        """
        Remove several files, logging failures instead of raising.

        Used after the owning rows are already deleted. Returns the paths
        that could not be removed.
        """
        failed = []
        for path in relative_paths:
            try:
                await self.delete(path)
            except StorageError:
                logger.error("Failed to delete media file", extra={"path": path}, exc_info=True)
                failed.append(path)
        return failed
