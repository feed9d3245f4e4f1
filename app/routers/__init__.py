# =============================================================================
# app/routers/ - API Route Definitions
# =============================================================================
# This package contains FastAPI routers organized by feature:
# - health.py: Health check endpoints
#
# Auth routes live in app/auth/routes.py.
# Each router is mounted in main.py.
# =============================================================================

from . import health

__all__ = [
    "health",
]
