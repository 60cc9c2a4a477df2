"""Disk storage for course thumbnails and video files."""
from __future__ import annotations

import os
import secrets
import time
from typing import Dict, Optional, Tuple

from werkzeug.datastructures import FileStorage
from werkzeug.utils import secure_filename

from src.core.config import UPLOAD_DIR, UPLOAD_FIELDS, UPLOAD_URL_PREFIX
from src.core.errors import UploadError
from src.core.logging import get_logger

logger = get_logger("uploads")


class UploadManager:
    def __init__(
        self,
        root: str = UPLOAD_DIR,
        fields: Optional[Dict[str, Tuple[str, str]]] = None,
        url_prefix: str = UPLOAD_URL_PREFIX,
    ):
        self.root = os.path.abspath(root)
        self.fields = fields or UPLOAD_FIELDS
        self.url_prefix = url_prefix.rstrip("/")

    def ensure_directories(self) -> None:
        os.makedirs(self.root, exist_ok=True)
        for subdir, _ in self.fields.values():
            os.makedirs(os.path.join(self.root, subdir), exist_ok=True)

    def accept(self, file: Optional[FileStorage], field: str) -> Optional[FileStorage]:
        """Return ``file`` if it is a usable upload for ``field``, else None.

        Raises UploadError when a file was sent with the wrong MIME type.
        """
        if file is None or not file.filename:
            return None
        _, mime_prefix = self.fields[field]
        if not (file.mimetype or "").startswith(mime_prefix):
            kind = mime_prefix.rstrip("/")
            raise UploadError(f"Only {kind} files are allowed")
        return file

    def _unique_name(self, field: str, original: str) -> str:
        _, ext = os.path.splitext(secure_filename(original) or "")
        suffix = f"{int(time.time() * 1000)}-{secrets.randbelow(10**9)}"
        return f"{field}-{suffix}{ext.lower()}"

    def save(self, file: FileStorage, field: str) -> str:
        """Write ``file`` under the field's directory and return its public path."""
        subdir, _ = self.fields[field]
        filename = self._unique_name(field, file.filename or "")
        directory = os.path.join(self.root, subdir)
        os.makedirs(directory, exist_ok=True)
        file.save(os.path.join(directory, filename))
        logger.info(
            "Stored upload", extra={"field": field, "stored_as": filename}
        )
        return f"{self.url_prefix}/{subdir}/{filename}"

    def discard(self, public_path: str) -> None:
        """Remove a file previously returned by ``save``."""
        relative = public_path[len(self.url_prefix):].lstrip("/")
        target = os.path.abspath(os.path.join(self.root, relative))
        if os.path.commonpath([self.root, target]) != self.root:
            return
        try:
            os.remove(target)
        except FileNotFoundError:
            pass
