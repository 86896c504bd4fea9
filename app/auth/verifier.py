# =============================================================================
# app/auth/verifier.py - Identity Verifier
# =============================================================================
# Resolves a bearer token to a user id by asking Supabase Auth.
#
# Every failure (empty token, rejected token, Supabase unreachable) comes
# back as None; nothing raises past verify().
# =============================================================================

import logging

from lib.supabase_client import SupabaseClient, SupabaseClientError

logger = logging.getLogger(__name__)


class IdentityVerifier:
    """Token-to-user-id lookup against the external identity service."""

    def verify(self, token: str | None) -> str | None:
        """
        Verify a bearer token.

        Args:
            token: Raw token string, possibly empty

        Returns:
            The user id the token was issued for, or None if it can't be verified
        """
        if not token:
            return None

        try:
            user_id = SupabaseClient.fetch_user_id_for_token(token)
        except SupabaseClientError as e:
            logger.warning(f"Token verification failed: {e.code}")
            return None

        logger.debug(f"Verified token for user: {user_id}")
        return user_id


identity_verifier = IdentityVerifier()
