# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Playspaces API:
# - test_models.py: Unit tests for playspace model validation
# - test_playspace_service.py: Create/list business logic with a fake Supabase
# - test_storage_service.py: Image validation, key derivation, upload/cleanup
# - test_supabase_client.py: Wrapper calls against a mocked supabase client
# - test_playspaces_api.py: HTTP surface through FastAPI's TestClient
# - test_config.py: Settings parsing
#
# Run tests with: pytest
# =============================================================================
