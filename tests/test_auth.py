# =============================================================================
# tests/test_auth.py - Authentication Tests
# =============================================================================
# Tests for:
# - IdentityVerifier (Supabase mocked)
# - get_current_user / get_current_user_optional guards
# =============================================================================

from unittest.mock import MagicMock, patch

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from app.auth import (
    AnonymousUser,
    AuthUser,
    IdentityVerifier,
    get_current_user,
    get_current_user_optional,
    viewer_id,
)
from app.exceptions import UnauthenticatedError
from lib.supabase_client import SupabaseClient, SupabaseClientError
from tests.conftest import TOKENS, FakeIdentityVerifier


def bearer(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


# =============================================================================
# Identity Verifier
# =============================================================================

class TestIdentityVerifier:
    """Tests for IdentityVerifier.verify()."""

    @pytest.fixture
    def mock_supabase(self):
        with patch("app.auth.verifier.SupabaseClient") as mock:
            yield mock

    def test_returns_user_id(self, mock_supabase):
        mock_supabase.fetch_user_id_for_token.return_value = "user-123"

        assert IdentityVerifier().verify("good-token") == "user-123"
        mock_supabase.fetch_user_id_for_token.assert_called_once_with("good-token")

    def test_rejected_token_returns_none(self, mock_supabase):
        mock_supabase.fetch_user_id_for_token.side_effect = SupabaseClientError(
            "bad token", code="TOKEN_REJECTED"
        )

        assert IdentityVerifier().verify("bad-token") is None

    @pytest.mark.parametrize("token", [None, ""])
    def test_empty_token_skips_lookup(self, mock_supabase, token):
        assert IdentityVerifier().verify(token) is None
        mock_supabase.fetch_user_id_for_token.assert_not_called()


class TestFetchUserIdForToken:
    """Tests for SupabaseClient.fetch_user_id_for_token()."""

    @pytest.fixture
    def mock_client(self):
        client = MagicMock()
        with patch.object(SupabaseClient, "get_client", return_value=client):
            yield client

    def test_returns_id(self, mock_client):
        mock_client.auth.get_user.return_value = MagicMock(user=MagicMock(id="abc"))

        assert SupabaseClient.fetch_user_id_for_token("tok") == "abc"
        mock_client.auth.get_user.assert_called_once_with("tok")

    def test_upstream_error_wrapped(self, mock_client):
        mock_client.auth.get_user.side_effect = RuntimeError("network down")

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseClient.fetch_user_id_for_token("tok")

        assert exc_info.value.code == "TOKEN_REJECTED"

    def test_missing_user_rejected(self, mock_client):
        mock_client.auth.get_user.return_value = MagicMock(user=None)

        with pytest.raises(SupabaseClientError):
            SupabaseClient.fetch_user_id_for_token("tok")


# =============================================================================
# Guards
# =============================================================================

class TestGetCurrentUser:
    """Tests for the mandatory guard."""

    def test_missing_credentials_skip_verifier(self):
        verifier = FakeIdentityVerifier(TOKENS)

        with pytest.raises(UnauthenticatedError) as exc_info:
            get_current_user(credentials=None, verifier=verifier)

        assert exc_info.value.status_code == 401
        assert verifier.calls == []

    def test_invalid_token(self):
        with pytest.raises(UnauthenticatedError):
            get_current_user(credentials=bearer("nope"), verifier=FakeIdentityVerifier(TOKENS))

    def test_valid_token(self):
        user = get_current_user(credentials=bearer("alice-token"), verifier=FakeIdentityVerifier(TOKENS))
        assert user == AuthUser(id="user-alice")


class TestGetCurrentUserOptional:
    """Tests for the optional guard."""

    def test_missing_credentials_is_anonymous(self):
        viewer = get_current_user_optional(credentials=None, verifier=FakeIdentityVerifier(TOKENS))
        assert isinstance(viewer, AnonymousUser)
        assert viewer_id(viewer) is None

    def test_invalid_token_is_anonymous(self):
        viewer = get_current_user_optional(credentials=bearer("nope"), verifier=FakeIdentityVerifier(TOKENS))
        assert isinstance(viewer, AnonymousUser)

    def test_valid_token(self):
        viewer = get_current_user_optional(credentials=bearer("bob-token"), verifier=FakeIdentityVerifier(TOKENS))
        assert viewer_id(viewer) == "user-bob"


class TestGuardsOverHttp:
    """Header parsing through the real app."""

    def test_non_bearer_scheme_rejected(self, client, verifier):
        response = client.get("/api/projects/me", headers={"Authorization": "Basic abc"})

        assert response.status_code == 401
        assert verifier.calls == []

    def test_bearer_without_token_rejected(self, client):
        response = client.get("/api/projects/me", headers={"Authorization": "Bearer"})
        assert response.status_code == 401

    def test_optional_route_ignores_malformed_header(self, client):
        response = client.get("/api/projects", headers={"Authorization": "garbage"})
        assert response.status_code == 200
