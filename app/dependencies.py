# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# =============================================================================

from typing import Annotated

from fastapi import Depends

from core.services.auth_service import UserStore
from lib.supabase_client import SupabaseUserStore


def get_user_store() -> UserStore:
    """
    Get a user store for the current request.

    A new store (and Supabase client) is created per request, so the
    auth session of one request is never visible to another.
    """
    return SupabaseUserStore.from_settings()


# Type alias for dependency injection
UserStoreDep = Annotated[UserStore, Depends(get_user_store)]
