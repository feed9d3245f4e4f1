# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Storefront API:
# - test_models.py: User model validation and projection
# - test_auth_service.py: Registration/login business logic
# - test_auth_routes.py: /auth endpoints through TestClient
# - test_errors.py: Human-readable error message extraction
# - test_supabase_client.py: Supabase user store with a mocked SDK
#
# Run tests with: poetry run pytest
# =============================================================================
