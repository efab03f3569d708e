# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the playspace business logic:
# - models/: Pydantic schemas for playspace records
# - services/: Listing, creation and image storage
#
# =============================================================================
