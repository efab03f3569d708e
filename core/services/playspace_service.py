# =============================================================================
# core/services/playspace_service.py - Playspace Business Logic
# =============================================================================
# Handles listing and creating playspaces.
# Separates HTTP concerns from database/storage logic.
#
# Create flow:
#   validate required fields -> normalize fields -> (optional) upload image
#   -> insert row -> (on insert failure) remove uploaded image
# =============================================================================

import json
import logging
import math
from typing import Any

from pydantic import ValidationError

from lib.supabase_client import SupabaseClient, SupabaseClientError
from app.exceptions import (
    DatabaseError,
    FieldDecodeError,
    InvalidFieldError,
    MissingFieldError,
)
from core.models.playspace import Location, PlayspaceCreate, PlayspaceSubmission
from core.services.storage_service import StorageService

logger = logging.getLogger(__name__)

# Checked in this order; the first missing one is reported
REQUIRED_FIELDS = ("name", "description", "location")


# =============================================================================
# Field Helpers
# =============================================================================

def _is_missing(value: Any) -> bool:
    """Absent, null and empty-string values count as missing."""
    return value is None or value == ""


def decode_json_field(field: str, value: str) -> Any:
    """
    Decode a JSON-encoded form field.

    Raises:
        FieldDecodeError: If the text is not valid JSON
    """
    try:
        return json.loads(value)
    except (TypeError, ValueError) as e:
        raise FieldDecodeError(field, str(e)) from e


def normalize_location(value: Any) -> Location:
    """
    Turn a structured or JSON-encoded location into a Location.

    Raises:
        FieldDecodeError: If the text is malformed or does not describe an object
    """
    data = decode_json_field("location", value) if isinstance(value, str) else value

    if not isinstance(data, dict):
        raise FieldDecodeError("location", "expected an object with address and coordinates")

    try:
        return Location.model_validate(data)
    except ValidationError as e:
        raise FieldDecodeError("location", str(e)) from e


def normalize_amenities(value: Any) -> list[str]:
    """
    Turn a list, JSON-encoded list or nothing into a list of amenity tags.

    Raises:
        FieldDecodeError: If encoded text is malformed, is not a list, or
            holds anything other than strings
    """
    if _is_missing(value):
        return []

    data = decode_json_field("amenities", value) if isinstance(value, str) else value
    if not isinstance(data, (list, tuple)):
        raise FieldDecodeError("amenities", "expected a list of amenity names")
    if not all(isinstance(item, str) for item in data):
        raise FieldDecodeError("amenities", "every amenity must be a string")
    return list(data)


def normalize_price(value: Any) -> int | float:
    """
    Coerce the submitted price to a finite number; missing means 0.

    Integral prices come back as int so integer price columns accept them.

    Raises:
        InvalidFieldError: If the value is not a finite number
    """
    if _is_missing(value):
        return 0
    if isinstance(value, bool):
        raise InvalidFieldError("price", "Price must be a number")
    if isinstance(value, int):
        return value

    try:
        price = float(value)
    except (TypeError, ValueError):
        raise InvalidFieldError("price", "Price must be a number")

    if not math.isfinite(price):
        raise InvalidFieldError("price", "Price must be a number")
    return int(price) if price.is_integer() else price


# =============================================================================
# Service
# =============================================================================

class PlayspaceService:
    """
    Service for playspace operations.

    Provides a clean interface between API routes and Supabase.
    """

    @staticmethod
    def list_playspaces(
        supabase: type[SupabaseClient] = SupabaseClient,
    ) -> list[dict[str, Any]]:
        """
        Return every stored playspace, verbatim.

        Raises:
            DatabaseError: If the select fails
        """
        try:
            return supabase.fetch_playspaces()
        except SupabaseClientError as e:
            raise DatabaseError(e.message, operation="select") from e

    @staticmethod
    def validate_required(submission: PlayspaceSubmission) -> None:
        """
        Check required fields in order.

        Raises:
            MissingFieldError: For the first missing field
        """
        for field in REQUIRED_FIELDS:
            if _is_missing(getattr(submission, field)):
                raise MissingFieldError(field)

    @staticmethod
    def build_record(
        submission: PlayspaceSubmission,
        image_url: str | None = None,
    ) -> PlayspaceCreate:
        """
        Assemble the normalized record from a validated submission.

        Raises:
            FieldDecodeError: If location or amenities cannot be decoded
            InvalidFieldError: If price is not numeric
        """
        location = normalize_location(submission.location)
        amenities = normalize_amenities(submission.amenities)
        price = normalize_price(submission.price)

        try:
            return PlayspaceCreate(
                name=str(submission.name),
                description=str(submission.description),
                price=price,
                image=image_url,
                location=location,
                amenities=amenities,
            )
        except ValidationError as e:
            raise InvalidFieldError("playspace", str(e)) from e

    @staticmethod
    def create_playspace(
        submission: PlayspaceSubmission,
        supabase: type[SupabaseClient] = SupabaseClient,
    ) -> dict[str, Any]:
        """
        Validate, store the optional image, and insert one playspace row.

        Fields are normalized before the image is uploaded, so a malformed
        location never leaves an uploaded object behind. If the insert
        fails after an upload, the uploaded object is removed.

        Returns:
            The inserted row as stored

        Raises:
            MissingFieldError, InvalidFieldError: Bad input (no side effects)
            FieldDecodeError: Malformed encoded location/amenities (no side effects)
            StorageUploadError: Image upload or URL resolution failed
            DatabaseError: Insert failed
        """
        PlayspaceService.validate_required(submission)
        record = PlayspaceService.build_record(submission)

        image_path = None
        if submission.image is not None:
            image_path, image_url = StorageService.upload_image(submission.image, supabase=supabase)
            record = record.model_copy(update={"image": image_url})

        try:
            row = supabase.insert_playspace(record.to_row())
        except SupabaseClientError as e:
            if image_path:
                removed = StorageService.delete_image(image_path, supabase=supabase)
                logger.warning(
                    f"Insert failed after upload; cleanup of {image_path} "
                    f"{'succeeded' if removed else 'failed'}"
                )
            raise DatabaseError(e.message, operation="insert") from e

        logger.info(f"Created playspace: {row.get('id', record.name)}")
        return row
