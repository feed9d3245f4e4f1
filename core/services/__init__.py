# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .auth_service import AuthService, UserStore

__all__ = [
    "AuthService",
    "UserStore",
]
