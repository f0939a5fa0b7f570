"""Storage for campaign image uploads."""

from datetime import datetime
from pathlib import Path
from typing import Optional

from fastapi import UploadFile

from adfluence.config import settings
from adfluence.errors import ValidationError
from adfluence.services.logging_service import logger


class UploadStore:
    """
    Saves uploaded files under the upload directory.

    Files are named "<epoch millis>-<original name>" and addressed by their
    path relative to the working directory, which the /uploads mount serves.
    """

    chunk_size = 1024 * 1024

    def __init__(self, base_dir: Optional[str] = None, max_size: Optional[int] = None):
        self._base_dir = base_dir
        self._max_size = max_size

    @property
    def base_dir(self) -> Path:
        return Path(self._base_dir or settings.UPLOAD_DIR)

    @property
    def max_size(self) -> int:
        return self._max_size or settings.MAX_UPLOAD_SIZE

    def save_image(self, upload: UploadFile) -> str:
        """
        Persist an image upload.

        Returns:
            Storage reference of the saved file

        Raises:
            ValidationError: not an image, or larger than the size limit
        """
        if not (upload.content_type or "").startswith("image/"):
            raise ValidationError("Campaign image must be an image file")

        original = Path(upload.filename or "image").name
        millis = int(datetime.utcnow().timestamp() * 1000)
        self.base_dir.mkdir(parents=True, exist_ok=True)
        destination = self.base_dir / f"{millis}-{original}"

        written = 0
        with destination.open("wb") as out:
            while True:
                chunk = upload.file.read(self.chunk_size)
                if not chunk:
                    break
                written += len(chunk)
                if written > self.max_size:
                    out.close()
                    destination.unlink(missing_ok=True)
                    raise ValidationError(f"Campaign image exceeds {self.max_size} bytes")
                out.write(chunk)

        logger.info("Upload stored", path=str(destination), size=written)
        return destination.as_posix()

    def discard(self, reference: str) -> None:
        """Remove a stored file whose campaign was never created."""
        Path(reference).unlink(missing_ok=True)
        logger.info("Upload discarded", path=reference)


upload_store = UploadStore()
