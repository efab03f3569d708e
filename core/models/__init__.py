# =============================================================================
# core/models/ - Data Models
# =============================================================================
# - playspace.py: Playspace record schemas and raw request input
# =============================================================================

from .playspace import (
    Coordinates,
    ImageUpload,
    Location,
    PlayspaceCreate,
    PlayspaceSubmission,
)

__all__ = [
    "Coordinates",
    "ImageUpload",
    "Location",
    "PlayspaceCreate",
    "PlayspaceSubmission",
]
