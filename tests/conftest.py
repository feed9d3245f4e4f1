# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Provides an in-memory UserStore and a TestClient wired to it
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

import pytest

from core.models.user import AuthRecord, UserCreatePayload, UserRecord
from lib.supabase_client import SupabaseClientError


# =============================================================================
# Fake User Store
# =============================================================================

class FakeUserStore:
    """
    In-memory UserStore.

    Records every call so tests can assert on what reached the user service.
    Set `error` to make the next create/authenticate call fail.
    """

    def __init__(self, record: dict | None = None):
        self.record = record
        self.error: SupabaseClientError | None = None
        self.created: list[UserCreatePayload] = []
        self.authenticated: list[tuple[str, str]] = []
        self.verifications: list[str] = []
        self.session_cleared = 0

    @property
    def calls(self) -> int:
        return len(self.created) + len(self.authenticated)

    def create_user(self, payload: UserCreatePayload) -> UserRecord:
        self.created.append(payload)
        if self.error:
            raise self.error
        data = dict(self.record or {})
        data.update({
            "username": payload.username,
            "name": payload.name,
            "email": payload.email,
            "is_banned": payload.is_banned,
            "remember_token": payload.remember_token,
            "email_visibility": payload.email_visibility,
        })
        return UserRecord.model_validate(data)

    def authenticate_with_password(self, email: str, password: str) -> AuthRecord:
        self.authenticated.append((email, password))
        if self.error:
            raise self.error
        return AuthRecord(
            record=UserRecord.model_validate(self.record),
            token="access-token-123",
        )

    def clear_session(self) -> None:
        self.session_cleared += 1

    def request_verification(self, email: str) -> None:
        self.verifications.append(email)


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def sample_user_record():
    """A user record as returned by the user service, with extra fields."""
    return {
        "id": "8f6c1d0e-2b1a-4c1e-9d5f-2f0e6b7a1c33",
        "username": "jane-doe-48213377",
        "name": "Jane Doe",
        "email": "jane@example.com",
        "avatar": None,
        "is_banned": False,
        "remember_token": None,
        "created": "2024-01-15T10:30:00+00:00",
        "updated": "2024-01-15T10:30:00+00:00",
        "email_visibility": True,
        "password_hash": "$2a$10$abcdefghijklmnopqrstuv",
    }


@pytest.fixture
def sample_registration():
    """A valid registration body."""
    return {
        "email": "jane@example.com",
        "first_name": "Jane",
        "last_name": "Doe",
        "password": "s3cret-pass",
    }


@pytest.fixture
def fake_store(sample_user_record):
    """In-memory user store seeded with sample_user_record."""
    return FakeUserStore(record=sample_user_record)


@pytest.fixture
def api_client(fake_store):
    """TestClient whose requests use fake_store as the user store."""
    from fastapi.testclient import TestClient

    from app.dependencies import get_user_store
    from app.main import app

    app.dependency_overrides[get_user_store] = lambda: fake_store
    with TestClient(app) as client:
        yield client
    app.dependency_overrides.clear()
