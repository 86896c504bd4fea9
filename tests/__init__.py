# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Showcase API:
# - test_models.py: Pydantic model validation
# - test_utils.py: Input normalization helpers
# - test_auth.py: Identity Verifier and auth guards
# - test_aggregator.py: Like/comment counting and liked-state
# - test_projects.py / test_comments.py / test_users.py: API endpoints
# - test_upload.py / test_storage_service.py: Image uploads (Supabase mocked)
# - test_health.py: Health and root endpoints
#
# Run tests with: pytest
# =============================================================================
