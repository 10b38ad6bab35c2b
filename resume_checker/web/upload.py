"""Upload intake: size-limited reads and request-scoped temporary files."""

from __future__ import annotations

import asyncio
import logging
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from fastapi import UploadFile

from ..domain.extractor import normalize_media_type
from .errors import UPLOAD_TOO_LARGE, APIError

logger = logging.getLogger(__name__)

_KEPT_SUFFIXES = {".pdf", ".docx"}


async def read_upload_with_limit(file: UploadFile, max_bytes: int) -> bytes:
    """Read an upload stream with hard byte limit.

    This prevents loading arbitrarily large payloads into memory before validation.
    """
    chunks: list[bytes] = []
    total = 0
    chunk_size = 64 * 1024

    while True:
        chunk = await file.read(chunk_size)
        if not chunk:
            break
        total += len(chunk)
        if total > max_bytes:
            raise APIError(
                400,
                "UPLOAD_TOO_LARGE",
                UPLOAD_TOO_LARGE,
                {"max_upload_bytes": max_bytes},
            )
        chunks.append(chunk)

    return b"".join(chunks)


@dataclass
class UploadedDocument:
    """An uploaded resume persisted for the duration of one request."""

    path: Path
    media_type: str
    filename: str
    size: int


class TemporaryUpload:
    """Async context manager owning one request's temporary upload file.

    The file is removed exactly once when the block exits, whatever the
    outcome. Removal checks for existence first, so a file that was never
    written, or is already gone, is not an error.
    """

    def __init__(
        self,
        file: UploadFile,
        upload_dir: Union[str, Path],
        max_bytes: int,
    ) -> None:
        self.file = file
        self.upload_dir = Path(upload_dir)
        self.max_bytes = max_bytes
        self.path: Optional[Path] = None

    async def __aenter__(self) -> UploadedDocument:
        content = await read_upload_with_limit(self.file, self.max_bytes)
        filename = self.file.filename or ""
        suffix = Path(filename).suffix.lower()

        self.upload_dir.mkdir(parents=True, exist_ok=True)
        self.path = self.upload_dir / f"{uuid.uuid4().hex}{suffix if suffix in _KEPT_SUFFIXES else ''}"
        try:
            await asyncio.to_thread(self.path.write_bytes, content)
        except BaseException:
            self.cleanup()
            raise

        return UploadedDocument(
            path=self.path,
            media_type=normalize_media_type(self.file.content_type),
            filename=filename,
            size=len(content),
        )

    async def __aexit__(self, exc_type, exc, tb) -> bool:
        self.cleanup()
        return False

    def cleanup(self) -> bool:
        """Remove the temporary file if present. Returns True if a file was removed."""
        path, self.path = self.path, None
        if path is None or not path.exists():
            return False
        path.unlink(missing_ok=True)
        logger.info("Temporary file deleted: %s", path)
        return True
