# server/core/assets.py

import logging
import mimetypes
import os
import secrets
import time
from pathlib import Path
from fastapi import UploadFile
from core.errors import ValidationError


logger = logging.getLogger(__name__)


class AssetStore:
    """
    Filesystem storage for uploaded category images.
    Files are addressed by a generated name and served under `url_prefix`.
    """

    def __init__(self, upload_dir: str | Path, url_prefix: str = "/uploads", max_bytes: int = 5 * 1024 * 1024):
        self.upload_dir = Path(upload_dir)
        self.url_prefix = url_prefix.rstrip("/")
        self.max_bytes = max_bytes
        os.makedirs(self.upload_dir, exist_ok=True)

    def generate_filename(self, original_name: str, field_name: str = "image") -> str:
        ext = Path(original_name or "").suffix.lower()
        unique_suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
        return f"{field_name}-{unique_suffix}{ext}"

    def validate(self, data: bytes, original_name: str, content_type: str | None):
        content_type = content_type or mimetypes.guess_type(original_name or "")[0] or ""
        if not content_type.startswith("image/"):
            raise ValidationError("Not an image! Please upload only images.")
        if len(data) > self.max_bytes:
            raise ValidationError(f"File too large. Maximum size is {self.max_bytes // (1024 * 1024)}MB.")

    def store(self, data: bytes, original_name: str, content_type: str | None = None, field_name: str = "image") -> str:
        self.validate(data, original_name, content_type)

        filename = self.generate_filename(original_name, field_name)
        path = self.upload_dir / filename
        with path.open("wb") as buffer:
            buffer.write(data)

        logger.info("Stored asset %s (%d bytes)", filename, len(data))
        return filename

    def save_upload(self, upload: UploadFile, field_name: str = "image") -> str:
        # One byte past the ceiling is enough to reject an oversize file
        data = upload.file.read(self.max_bytes + 1)
        return self.store(data, upload.filename, upload.content_type, field_name)

    def path_for(self, filename: str) -> Path:
        return self.upload_dir / Path(filename).name

    def delete(self, filename: str | None):
        if not filename:
            return
        path = self.path_for(filename)
        if path.exists():
            os.remove(path)
            logger.info("Deleted asset %s", filename)

    def resolve(self, filename: str | None) -> str | None:
        if not filename:
            return None
        return f"{self.url_prefix}/{filename}"
