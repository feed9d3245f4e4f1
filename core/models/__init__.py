# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - user.py: user service records, the public UserData shape and the
#   registration payload
#
# These models define the "contract" between API and clients.
# =============================================================================

from .user import (
    AuthRecord,
    UserCreatePayload,
    UserData,
    UserRecord,
)

__all__ = [
    "AuthRecord",
    "UserCreatePayload",
    "UserData",
    "UserRecord",
]
