# =============================================================================
# core/services/storage_service.py - Playspace Image Storage
# =============================================================================
# Handles image validation, upload and cleanup against Supabase Storage.
# =============================================================================

import logging
import os
import time

from lib.supabase_client import SupabaseClient, SupabaseClientError
from app.config import settings
from app.exceptions import InvalidFileTypeError, FileTooLargeError, StorageUploadError
from core.models.playspace import ImageUpload

logger = logging.getLogger(__name__)

# Prefix for every stored playspace image
IMAGE_KEY_PREFIX = "playspace-"


class StorageService:
    """
    Service for playspace image storage.

    Objects live in the configured bucket under keys of the form
    `playspace-<unix millis><original extension>`.
    """

    @staticmethod
    def validate_image(content_type: str | None, size_bytes: int | None) -> None:
        """
        Check an attachment against the allowed types and size ceiling.

        Args:
            content_type: Declared MIME type of the attachment
            size_bytes: Attachment size, if known

        Raises:
            InvalidFileTypeError: If the content type is not allowed
            FileTooLargeError: If the attachment exceeds MAX_UPLOAD_SIZE_MB
        """
        allowed = settings.allowed_image_types_list
        if (content_type or "").lower() not in allowed:
            raise InvalidFileTypeError(content_type, allowed)

        if size_bytes is not None and size_bytes > settings.max_upload_size_bytes:
            raise FileTooLargeError(size_bytes / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)

    @staticmethod
    def build_image_key(filename: str | None, timestamp_ms: int | None = None) -> str:
        """
        Derive the storage key for an uploaded image.

        Example:
            build_image_key("yard.png", 1700000000000) -> "playspace-1700000000000.png"
        """
        if timestamp_ms is None:
            timestamp_ms = int(time.time() * 1000)
        extension = os.path.splitext(filename or "")[1]
        return f"{IMAGE_KEY_PREFIX}{timestamp_ms}{extension}"

    @staticmethod
    def upload_image(
        image: ImageUpload,
        supabase: type[SupabaseClient] = SupabaseClient,
    ) -> tuple[str, str]:
        """
        Upload an image and resolve its public URL.

        The upload never overwrites: an existing object with the same key
        makes it fail.

        Returns:
            (storage path, public URL)

        Raises:
            StorageUploadError: If the upload or URL resolution fails
        """
        path = StorageService.build_image_key(image.filename)

        try:
            supabase.upload_object(path, image.content, image.content_type)
            public_url = supabase.get_public_url(path)
        except SupabaseClientError as e:
            raise StorageUploadError(e.message, path=path) from e

        logger.info(f"Stored playspace image: {path}")
        return path, public_url

    @staticmethod
    def delete_image(
        path: str,
        supabase: type[SupabaseClient] = SupabaseClient,
    ) -> bool:
        """
        Remove a stored image.

        Returns:
            True if removed, False if removal failed (failure is logged)
        """
        try:
            supabase.remove_object(path)
            return True
        except SupabaseClientError as e:
            logger.error(f"Failed to remove image {path}: {e}")
            return False
