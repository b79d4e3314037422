"""Raw resume storage in a Supabase Storage bucket.

The pipeline keeps a reference to the uploaded file even when no text can be
extracted from it, so unsupported formats are stored like any other.
"""

from __future__ import annotations

import logging
import re
import time

from supabase import Client

from hiring_intake.core.errors import PersistenceError
from hiring_intake.models.intake import StoredResume

logger = logging.getLogger(__name__)

_UNSAFE_NAME_CHARS = re.compile(r"[^A-Za-z0-9._-]+")


def build_object_path(org_id: str, candidate_id: str, filename: str | None) -> str:
    """Return ``{org}/{candidate}/{millis}-{safe filename}``."""
    name = _UNSAFE_NAME_CHARS.sub("-", filename or "resume").strip("-.") or "resume"
    return f"{org_id}/{candidate_id}/{int(time.time() * 1000)}-{name}"


class ResumeFileStore:
    """Uploads raw resume files into one bucket."""

    def __init__(self, client: Client, bucket: str) -> None:
        self._client = client
        self.bucket = bucket

    def store(
        self,
        org_id: str,
        candidate_id: str,
        data: bytes,
        filename: str | None = None,
        content_type: str | None = None,
    ) -> StoredResume:
        path = build_object_path(org_id, candidate_id, filename)
        bucket = self._client.storage.from_(self.bucket)
        try:
            bucket.upload(
                path,
                data,
                file_options={
                    "content-type": content_type or "application/octet-stream",
                    "upsert": "false",
                },
            )
        except Exception as exc:
            logger.error(
                "resume_upload_failed",
                extra={
                    "bucket": self.bucket,
                    "path": path,
                    "error_message": str(exc),
                },
            )
            raise PersistenceError(f"Failed to store resume file: {exc}") from exc

        public_url = bucket.get_public_url(path)
        logger.info(
            "resume_stored",
            extra={"bucket": self.bucket, "path": path, "size_bytes": len(data)},
        )
        return StoredResume(path=path, public_url=public_url or None)

    def remove(self, path: str) -> bool:
        """Delete a stored object; False (logged) when the delete fails."""
        try:
            self._client.storage.from_(self.bucket).remove([path])
        except Exception as exc:
            logger.warning(
                "resume_orphaned",
                extra={
                    "bucket": self.bucket,
                    "path": path,
                    "error_message": str(exc),
                },
            )
            return False
        logger.info("resume_removed", extra={"bucket": self.bucket, "path": path})
        return True
