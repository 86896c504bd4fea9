# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - Runs the real app against a throwaway SQLite database (aiosqlite)
# - Replaces the Supabase-backed Identity Verifier with a token map
# =============================================================================

import os

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ.setdefault("DB_CREATE_TABLES", "true")
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient

from app.auth import IdentityVerifier, get_identity_verifier
from app.config import settings
from app.main import app


# =============================================================================
# Test Doubles
# =============================================================================

ALICE = "user-alice"
BOB = "user-bob"

TOKENS = {
    "alice-token": ALICE,
    "bob-token": BOB,
}


class FakeIdentityVerifier(IdentityVerifier):
    """Resolves tokens from a fixed map and records every lookup."""

    def __init__(self, tokens: dict[str, str]):
        self.tokens = tokens
        self.calls: list[str | None] = []

    def verify(self, token: str | None) -> str | None:
        self.calls.append(token)
        if not token:
            return None
        return self.tokens.get(token)


def auth(token: str) -> dict[str, str]:
    """Authorization header for a token."""
    return {"Authorization": f"Bearer {token}"}


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def verifier():
    """The fake verifier installed for the current test."""
    return FakeIdentityVerifier(TOKENS)


@pytest.fixture
def client(tmp_path, monkeypatch, verifier):
    """
    TestClient bound to a fresh SQLite database.

    Entering the client runs the lifespan, which creates the engine and
    the tables; leaving it disposes the engine.
    """
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'showcase.db'}")
    monkeypatch.setattr(settings, "DB_CREATE_TABLES", True)
    app.dependency_overrides[get_identity_verifier] = lambda: verifier

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def create_project(client):
    """Factory: create a project as the given token's owner and return its JSON."""

    def _create(token: str = "alice-token", **fields):
        body = {"title": "Pixel Garden", "short_desc": "Grow pixels", **fields}
        response = client.post("/api/projects", json=body, headers=auth(token))
        assert response.status_code == 200, response.text
        return response.json()

    return _create


@pytest.fixture
def sample_user_payload():
    """Identity payload as sent by the frontend after sign-in."""
    return {
        "id": ALICE,
        "email": "alice@example.com",
        "name": "Alice",
    }
