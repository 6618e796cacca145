# =============================================================================
# core/services/storage_service.py - Supabase Storage Operations
# =============================================================================
# Reads and writes the properties collection document:
#   bucket "properties", object "properties.json"
#
# The document is always replaced in full. There is no locking, so two
# concurrent updates race and the last upload wins.
# =============================================================================

import json
import logging
from typing import Any

from supabase import Client

from app.exceptions import StorageReadError, StorageUploadError, error_message
from core.services.property_service import loads_strict

logger = logging.getLogger(__name__)

# Storage location of the collection document
BUCKET_NAME = "properties"
FILE_NAME = "properties.json"


def _error_payload(error: Exception) -> dict[str, Any]:
    """Error body attached to a storage exception, if any."""
    if error.args and isinstance(error.args[0], dict):
        return error.args[0]
    return {}


def storage_error_message(error: Exception) -> str:
    """
    Human readable message for a Storage failure.

    storage3 raises StorageException(dict) with a "message" key; anything
    else falls back to str().
    """
    message = getattr(error, "message", None) or _error_payload(error).get("message")
    if isinstance(message, str) and message:
        return message
    return error_message(error)


def is_not_found(error: Exception) -> bool:
    """
    True if a Storage error means the object does not exist.

    Supabase reports this as HTTP 404, or as HTTP 400 with
    {"statusCode": "404", "error": "not_found"} in the body.
    """
    payload = _error_payload(error)
    statuses = [
        payload.get("statusCode"),
        payload.get("status"),
        getattr(error, "status", None),
        getattr(error, "status_code", None),
    ]
    if 404 in statuses or "404" in statuses:
        return True
    return str(payload.get("error", "")).lower() in ("not_found", "not found")


class StorageService:
    """
    Service for the properties collection document in Supabase Storage.

    Bound to a privileged (service_role) client.
    """

    def __init__(self, client: Client, bucket: str = BUCKET_NAME, filename: str = FILE_NAME):
        self.client = client
        self.bucket = bucket
        self.filename = filename

    def download_collection(self) -> list[Any]:
        """
        Download and parse the collection document.

        Returns:
            List of properties. A missing or empty file yields [].

        Raises:
            StorageReadError: If the download fails for any other reason
            ValueError: If the file is not a JSON array
        """
        try:
            content = self.client.storage.from_(self.bucket).download(self.filename)
        except Exception as e:
            if is_not_found(e):
                logger.info(f"{self.bucket}/{self.filename} not found, starting empty")
                return []
            logger.error(f"Storage download failed: {e}")
            raise StorageReadError(self.filename, storage_error_message(e))

        text = content.decode("utf-8") if isinstance(content, bytes) else (content or "")
        if not text:
            return []

        collection = loads_strict(text)
        if not isinstance(collection, list):
            raise ValueError(f"{self.filename} does not contain a JSON array")

        logger.info(f"Downloaded {self.bucket}/{self.filename} ({len(collection)} properties)")
        return collection

    def upload_collection(self, collection: list[Any]) -> str:
        """
        Serialize the collection and overwrite the stored document.

        Args:
            collection: Full list of properties

        Returns:
            Storage path that was written

        Raises:
            StorageUploadError: If upload fails
            ValueError: If the collection holds NaN or Infinity
        """
        payload = json.dumps(collection, indent=2, ensure_ascii=False, allow_nan=False).encode("utf-8")

        try:
            self.client.storage.from_(self.bucket).upload(
                path=self.filename,
                file=payload,
                file_options={"content-type": "application/json", "upsert": "true"}
            )
        except Exception as e:
            logger.error(f"Storage upload failed: {e}")
            raise StorageUploadError(storage_error_message(e))

        logger.info(f"Uploaded {self.bucket}/{self.filename} ({len(collection)} properties)")
        return f"{self.bucket}/{self.filename}"

    def check_bucket(self) -> None:
        """Raise if the bucket cannot be reached with this client."""
        self.client.storage.get_bucket(self.bucket)
