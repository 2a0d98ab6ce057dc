"""Local image uploads served back from the public directory."""

from __future__ import annotations

import asyncio
import logging
import mimetypes
import uuid
from pathlib import Path, PurePath

from portfolio_builder.errors import UploadError

logger = logging.getLogger(__name__)

MAX_UPLOAD_BYTES = 5 * 1024 * 1024


class ImageUploader:
    """Validate image uploads and store them under ``upload_dir``.

    Content type and size are checked before anything touches the disk.
    """

    def __init__(
        self,
        upload_dir: Path,
        *,
        url_prefix: str = "/uploads",
        max_bytes: int = MAX_UPLOAD_BYTES,
    ) -> None:
        self._upload_dir = upload_dir
        self._url_prefix = url_prefix.rstrip("/")
        self._max_bytes = max_bytes

    @property
    def upload_dir(self) -> Path:
        return self._upload_dir

    @property
    def max_bytes(self) -> int:
        return self._max_bytes

    def validate(self, content_type: str | None, size: int) -> None:
        if not content_type or not content_type.startswith("image/"):
            raise UploadError("Please select an image file")
        if size > self._max_bytes:
            limit_mb = self._max_bytes / (1024 * 1024)
            raise UploadError(f"Image size should be less than {limit_mb:g}MB")
        if size == 0:
            raise UploadError("The uploaded image is empty")

    async def upload(self, data: bytes, content_type: str | None, filename: str = "") -> str:
        """Store ``data`` and return the URL it is served from."""
        self.validate(content_type, len(data))
        name = f"{uuid.uuid4().hex}{self._extension(content_type or '', filename)}"
        path = self._upload_dir / name
        try:
            await asyncio.to_thread(self._write, path, data)
        except OSError as exc:
            logger.exception("Image upload failed - path=%s", path)
            raise UploadError("Failed to upload image") from exc
        logger.info("Image uploaded - name=%s bytes=%d", name, len(data))
        return f"{self._url_prefix}/{name}"

    @staticmethod
    def _extension(content_type: str, filename: str) -> str:
        suffix = PurePath(filename).suffix.lower()
        if suffix and mimetypes.types_map.get(suffix, "").startswith("image/"):
            return suffix
        return mimetypes.guess_extension(content_type) or ".img"

    def _write(self, path: Path, data: bytes) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(data)
