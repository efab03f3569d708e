# =============================================================================
# app/routers/playspaces.py - Playspace Endpoints
# =============================================================================
# Lists playspaces and creates new ones, with an optional image upload.
# POST accepts multipart/form-data (image under the "image" field) or a
# JSON body with structured location and amenities.
# =============================================================================

import logging
from typing import Annotated, Any

from fastapi import APIRouter, Depends, Request
from starlette.datastructures import UploadFile
from starlette.types import Message

from app.config import settings
from app.dependencies import SupabaseDep
from app.exceptions import FileTooLargeError, InvalidFieldError
from core.models.playspace import ImageUpload, PlayspaceSubmission
from core.services.playspace_service import PlayspaceService
from core.services.storage_service import StorageService

logger = logging.getLogger(__name__)

router = APIRouter()

# Form field carrying the optional image
IMAGE_FIELD = "image"

# Room for the text fields and part headers around the image
MULTIPART_ALLOWANCE_BYTES = 1024 * 1024


# =============================================================================
# Request Parsing
# =============================================================================

async def _read_image(form_files: list[UploadFile]) -> ImageUpload | None:
    """Validate and read the single optional image attachment."""
    # Browsers send an empty part for an untouched file input
    files = [f for f in form_files if f.filename]
    if not files:
        return None
    if len(files) > 1:
        raise InvalidFieldError(IMAGE_FIELD, "Only one image may be uploaded")

    upload = files[0]
    StorageService.validate_image(upload.content_type, upload.size)

    content = await upload.read()
    StorageService.validate_image(upload.content_type, len(content))

    return ImageUpload(
        filename=upload.filename,
        content_type=upload.content_type,
        content=content,
    )


def _form_value(values: list[Any]) -> Any:
    """Single form values stay as text; repeated ones become a list."""
    if not values:
        return None
    if len(values) == 1:
        return values[0]
    return list(values)


def _limit_body(request: Request) -> Request:
    """
    Cap the request body before it is parsed.

    A declared Content-Length over the ceiling is rejected at once; bodies
    without one (chunked) are counted as they stream in.
    """
    limit = settings.max_upload_size_bytes + MULTIPART_ALLOWANCE_BYTES

    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > limit:
        raise FileTooLargeError(int(declared) / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)

    received = 0
    receive = request.receive

    async def limited_receive() -> Message:
        nonlocal received
        message = await receive()
        if message["type"] == "http.request":
            received += len(message.get("body", b""))
            if received > limit:
                raise FileTooLargeError(received / (1024 * 1024), settings.MAX_UPLOAD_SIZE_MB)
        return message

    return Request(request.scope, receive=limited_receive)


async def read_submission(request: Request) -> PlayspaceSubmission:
    """
    Parse a create request into a PlayspaceSubmission.

    Runs as a dependency, so body size and attachment type are rejected
    before any field validation happens.
    """
    content_type = request.headers.get("content-type", "").lower()
    request = _limit_body(request)

    if content_type.startswith("application/json"):
        try:
            body = await request.json()
        except ValueError:
            raise InvalidFieldError("body", "Request body must be valid JSON")
        if not isinstance(body, dict):
            raise InvalidFieldError("body", "Request body must be a JSON object")

        return PlayspaceSubmission(
            name=body.get("name"),
            description=body.get("description"),
            price=body.get("price"),
            location=body.get("location"),
            amenities=body.get("amenities"),
        )

    form = await request.form()
    try:
        files = [v for v in form.getlist(IMAGE_FIELD) if isinstance(v, UploadFile)]
        image = await _read_image(files)

        def text(name: str) -> Any:
            return _form_value([v for v in form.getlist(name) if isinstance(v, str)])

        return PlayspaceSubmission(
            name=text("name"),
            description=text("description"),
            price=text("price"),
            location=text("location"),
            amenities=text("amenities"),
            image=image,
        )
    finally:
        await form.close()


# =============================================================================
# Endpoints
# =============================================================================

@router.get("")
async def list_playspaces(supabase: SupabaseDep):
    """
    List all playspaces.

    Returns rows exactly as stored, with no filtering or pagination.
    """
    return PlayspaceService.list_playspaces(supabase=supabase)


@router.post("", status_code=201)
async def create_playspace(
    submission: Annotated[PlayspaceSubmission, Depends(read_submission)],
    supabase: SupabaseDep,
):
    """
    Create a playspace.

    This endpoint:
    1. Rejects attachments that are not JPEG/PNG or exceed the size limit
    2. Requires name, description and location (in that order)
    3. Decodes JSON-encoded location and amenities
    4. Uploads the image, if any, and records its public URL
    5. Inserts the row and returns it
    """
    logger.debug(f"Creating playspace: {submission.name!r} (image: {submission.image is not None})")
    return PlayspaceService.create_playspace(submission, supabase=supabase)
