# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .playspace_service import PlayspaceService
from .storage_service import StorageService

__all__ = [
    "PlayspaceService",
    "StorageService",
]
