# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the registration/login business logic:
# - models/: Pydantic schemas for user records and responses
# - services/: AuthService (validation, derived fields, projection)
#
# Code in this package talks to the user service only through the
# UserStore protocol. This keeps the logic testable without Supabase.
# =============================================================================
