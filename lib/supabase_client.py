# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides a typed wrapper for Supabase operations.
# It implements the singleton pattern to reuse a single client connection
# and provides methods for:
# - Reading and inserting playspace rows
# - Uploading, resolving and removing objects in Storage
#
# Usage:
#   from lib.supabase_client import SupabaseClient
#   rows = SupabaseClient.fetch_playspaces()
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(Exception):
    """
    Error during Supabase operations.

    `message` keeps the underlying client error text so it can be passed
    through to API responses unchanged.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.suggestion = suggestion
        self.details = details or {}

    def __str__(self) -> str:
        result = f"[{self.code}] {self.message}"
        if self.suggestion:
            result += f" Suggestion: {self.suggestion}"
        return result


class SupabaseClient:
    """
    Typed wrapper for Supabase database and storage operations.

    Implements singleton pattern - one client instance is shared across
    the application and never mutated after creation. All methods are
    class methods for easy access without instantiation.

    Example:
        rows = SupabaseClient.fetch_playspaces()
        row = SupabaseClient.insert_playspace({"name": "Backyard", ...})
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.supabase_key,
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                    suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
                ) from e
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Drop the cached client (used by tests and on settings reload)."""
        cls._instance = None

    # -------------------------------------------------------------------------
    # Playspace Rows
    # -------------------------------------------------------------------------

    @classmethod
    def fetch_playspaces(cls) -> list[dict[str, Any]]:
        """
        Fetch every row of the playspaces table.

        No filtering, ordering or pagination is applied; rows are returned
        exactly as stored.

        Raises:
            SupabaseClientError: If the query fails
        """
        client = cls.get_client()

        try:
            response = (
                client.table(settings.PLAYSPACES_TABLE)
                .select("*")
                .execute()
            )
            rows = response.data or []
            logger.debug(f"Fetched {len(rows)} playspaces")
            return rows

        except Exception as e:
            raise SupabaseClientError(
                message=str(e),
                code="FETCH_PLAYSPACES_FAILED",
                details={"table": settings.PLAYSPACES_TABLE},
            ) from e

    @classmethod
    def insert_playspace(cls, data: dict[str, Any]) -> dict[str, Any]:
        """
        Insert a single playspace row and return it as stored.

        Args:
            data: Normalized playspace record

        Returns:
            The inserted row (first element of the insert result)

        Raises:
            SupabaseClientError: If the insert fails or returns nothing
        """
        client = cls.get_client()

        try:
            response = (
                client.table(settings.PLAYSPACES_TABLE)
                .insert([data])
                .execute()
            )
        except Exception as e:
            raise SupabaseClientError(
                message=str(e),
                code="INSERT_PLAYSPACE_FAILED",
                details={"table": settings.PLAYSPACES_TABLE},
            ) from e

        if not response.data:
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                suggestion="Check that the table's row level security allows returning inserted rows",
            )
        return response.data[0]

    # -------------------------------------------------------------------------
    # Storage Objects
    # -------------------------------------------------------------------------

    @classmethod
    def upload_object(
        cls,
        path: str,
        content: bytes,
        content_type: str,
        bucket: str | None = None,
    ) -> str:
        """
        Upload bytes to storage without overwriting an existing object.

        Returns:
            The storage path that was written

        Raises:
            SupabaseClientError: If the upload fails (including key collisions)
        """
        client = cls.get_client()
        bucket = bucket or settings.STORAGE_BUCKET

        try:
            client.storage.from_(bucket).upload(
                path=path,
                file=content,
                file_options={"content-type": content_type, "upsert": "false"},
            )
            logger.info(f"Uploaded {len(content)} bytes to {bucket}/{path}")
            return path

        except Exception as e:
            raise SupabaseClientError(
                message=str(e),
                code="UPLOAD_FAILED",
                details={"bucket": bucket, "path": path},
            ) from e

    @classmethod
    def get_public_url(cls, path: str, bucket: str | None = None) -> str:
        """Resolve the public URL of a stored object."""
        client = cls.get_client()
        bucket = bucket or settings.STORAGE_BUCKET

        try:
            return client.storage.from_(bucket).get_public_url(path)
        except Exception as e:
            raise SupabaseClientError(
                message=str(e),
                code="PUBLIC_URL_FAILED",
                details={"bucket": bucket, "path": path},
            ) from e

    @classmethod
    def remove_object(cls, path: str, bucket: str | None = None) -> None:
        """
        Remove a stored object.

        Raises:
            SupabaseClientError: If removal fails
        """
        client = cls.get_client()
        bucket = bucket or settings.STORAGE_BUCKET

        try:
            client.storage.from_(bucket).remove([path])
            logger.info(f"Removed {bucket}/{path}")
        except Exception as e:
            raise SupabaseClientError(
                message=str(e),
                code="REMOVE_FAILED",
                details={"bucket": bucket, "path": path},
            ) from e

    # -------------------------------------------------------------------------
    # Connectivity
    # -------------------------------------------------------------------------

    @classmethod
    def ping_database(cls) -> None:
        """Run a one-row query against the playspaces table."""
        client = cls.get_client()
        client.table(settings.PLAYSPACES_TABLE).select("id").limit(1).execute()

    @classmethod
    def ping_storage(cls) -> None:
        """List buckets to confirm storage is reachable."""
        client = cls.get_client()
        client.storage.list_buckets()
