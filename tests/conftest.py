# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides a fake Supabase wrapper and a TestClient wired to it
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_ANON_KEY", "test-anon-key")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_supabase_client
from app.main import app

PUBLIC_URL_BASE = "https://test-project.supabase.co/storage/v1/object/public/playspace-images/"


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def fake_supabase():
    """
    Stand-in for the SupabaseClient wrapper.

    Inserts echo the row back with an id; uploads succeed and resolve to a
    public URL under the test project.
    """
    fake = MagicMock()
    fake.fetch_playspaces.return_value = []
    fake.insert_playspace.side_effect = lambda row: {"id": 1, **row}
    fake.upload_object.side_effect = lambda path, content, content_type: path
    fake.get_public_url.side_effect = lambda path: PUBLIC_URL_BASE + path
    return fake


@pytest.fixture
def client(fake_supabase):
    """TestClient whose routes see the fake Supabase wrapper."""
    app.dependency_overrides[get_supabase_client] = lambda: fake_supabase
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
def backyard_form():
    """Minimal valid multipart/form fields for a create request."""
    return {
        "name": "Backyard",
        "description": "Quiet yard",
        "location": '{"address":"A","coordinates":{"lat":10,"lng":20}}',
    }


@pytest.fixture
def png_bytes():
    """A tiny PNG-looking payload."""
    return b"\x89PNG\r\n\x1a\n" + b"\x00" * 64
