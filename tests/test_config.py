# =============================================================================
# tests/test_config.py - Settings Tests
# =============================================================================

import pytest
from pydantic import ValidationError

from app.config import Settings

REQUIRED = {
    "SUPABASE_URL": "https://test-project.supabase.co",
    "SUPABASE_ANON_KEY": "anon",
}


class TestSettings:
    """Tests for Settings parsing and computed properties."""

    def test_defaults(self):
        settings = Settings(**REQUIRED)

        assert settings.PLAYSPACES_TABLE == "playspaces"
        assert settings.STORAGE_BUCKET == "playspace-images"
        assert settings.API_PORT == 3001
        assert settings.max_upload_size_bytes == 5 * 1024 * 1024

    def test_cors_origins_list(self):
        settings = Settings(**REQUIRED, CORS_ORIGINS="http://localhost:3000, https://app.example.com,")

        assert settings.cors_origins_list == ["http://localhost:3000", "https://app.example.com"]

    def test_allowed_image_types_list(self):
        settings = Settings(**REQUIRED, ALLOWED_IMAGE_TYPES="image/PNG, image/jpeg")

        assert settings.allowed_image_types_list == ["image/png", "image/jpeg"]

    def test_service_key_preferred(self):
        assert Settings(**REQUIRED, SUPABASE_SERVICE_KEY=None).supabase_key == "anon"
        assert Settings(**REQUIRED, SUPABASE_SERVICE_KEY="service").supabase_key == "service"

    def test_upload_limit_bounds(self):
        with pytest.raises(ValidationError):
            Settings(**REQUIRED, MAX_UPLOAD_SIZE_MB=0)
