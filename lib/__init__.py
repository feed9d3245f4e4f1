# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - supabase_client.py: Supabase Auth implementation of the UserStore
# - errors.py: Human-readable messages from arbitrary error values
# - utils.py: Shared error base class
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.errors import (
    ErrorShape,
    classify_error,
    get_error_message,
    handle_generic_error,
    handle_http_error,
)
from lib.utils import ApplicationError

__all__ = [
    # Errors
    "ErrorShape",
    "classify_error",
    "get_error_message",
    "handle_generic_error",
    "handle_http_error",
    # Utils
    "ApplicationError",
]
