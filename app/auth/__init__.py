# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Registration and login backed by the user service (Supabase Auth).
#
# Usage:
#   from app.auth import routes as auth_routes
#   app.include_router(auth_routes.router, prefix="/auth")
# =============================================================================

from app.auth import routes

__all__ = [
    "routes",
]
