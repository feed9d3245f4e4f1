# =============================================================================
# tests/test_errors.py - Error Message Extraction Tests
# =============================================================================
# Tests for lib/errors.py:
# - Messages found in httpx errors, nested dicts, lists and exceptions
# - Status code reason phrase fallbacks
# - Cyclic and very deep structures terminate
# - Generic fallbacks for primitives
# =============================================================================

import httpx
import pytest

from lib.errors import (
    GENERIC_ERROR_MESSAGE,
    MAX_SEARCH_DEPTH,
    UNKNOWN_ERROR_MESSAGE,
    ErrorShape,
    classify_error,
    get_error_message,
    handle_generic_error,
    handle_http_error,
)
from lib.supabase_client import SupabaseClientError


def make_status_error(status_code: int, **response_kwargs) -> httpx.HTTPStatusError:
    """Build an HTTPStatusError the way raise_for_status() does."""
    request = httpx.Request("POST", "http://127.0.0.1:8787/auth")
    response = httpx.Response(status_code, request=request, **response_kwargs)
    return httpx.HTTPStatusError("error", request=request, response=response)


# =============================================================================
# Classification Tests
# =============================================================================

class TestClassifyError:
    """Test classify_error()."""

    def test_transport(self):
        assert classify_error(make_status_error(500, json={})) is ErrorShape.TRANSPORT

    @pytest.mark.parametrize("value", [{}, [], {"status": 404}, ValueError("boom")])
    def test_structured(self, value):
        assert classify_error(value) is ErrorShape.STRUCTURED

    @pytest.mark.parametrize("value", [None, 42, 3.5, "boom", b"boom", ValueError()])
    def test_opaque(self, value):
        assert classify_error(value) is ErrorShape.OPAQUE


# =============================================================================
# Transport Error Tests
# =============================================================================

class TestTransportErrors:
    """Test handle_http_error() with httpx.HTTPStatusError."""

    def test_message_from_api_error_body(self):
        err = make_status_error(400, json={
            "error": {
                "message": "Email is required and must be a string",
                "code": "VALIDATION_ERROR",
            }
        })

        assert handle_http_error(err) == "Email is required and must be a string"

    def test_status_phrase_when_body_has_no_message(self):
        err = make_status_error(503, json={"error": {"code": "DOWN"}})

        assert handle_http_error(err) == "Service Unavailable"

    def test_non_json_body(self):
        err = make_status_error(502, text="<html>Bad gateway</html>")

        assert handle_http_error(err) == "Bad Gateway"

    def test_empty_body(self):
        assert handle_http_error(make_status_error(404)) == "Not Found"


# =============================================================================
# Structured Error Tests
# =============================================================================

class TestStructuredErrors:
    """Test handle_http_error() with dicts, lists, exceptions and objects."""

    def test_nested_response_message(self):
        assert handle_http_error({"response": {"data": {"message": "bad"}}}) == "bad"

    def test_direct_message(self):
        assert handle_http_error({"message": "top level"}) == "top level"

    def test_status_phrase_fallback(self):
        assert handle_http_error({"status": 404}) == "Not Found"

    def test_status_code_key(self):
        assert handle_http_error({"status_code": 401, "detail": None}) == "Unauthorized"

    def test_unknown_status_code(self):
        assert handle_http_error({"status": 799}) == UNKNOWN_ERROR_MESSAGE

    def test_no_message_no_status(self):
        assert handle_http_error({}) == UNKNOWN_ERROR_MESSAGE
        assert handle_http_error({"code": "X"}) == UNKNOWN_ERROR_MESSAGE

    def test_later_siblings_are_searched(self):
        err = {"meta": {"code": "X"}, "errors": [{"field": "email"}, {"message": "second"}]}

        assert handle_http_error(err) == "second"

    def test_empty_message_is_skipped(self):
        assert handle_http_error({"message": "", "inner": {"message": "inner"}}) == "inner"

    def test_non_string_message_is_skipped(self):
        assert handle_http_error({"message": 42, "status": 500}) == "Internal Server Error"

    def test_exception_message(self):
        assert handle_http_error(ValueError("boom")) == "boom"

    def test_application_error_message(self):
        err = SupabaseClientError("Invalid login credentials", status=400)

        assert handle_http_error(err) == "Invalid login credentials"

    def test_connect_error(self):
        err = httpx.ConnectError("All connection attempts failed")

        assert handle_http_error(err) == "All connection attempts failed"

    def test_object_with_attributes(self):
        class Failure:
            def __init__(self):
                self.status = 409
                self.body = {"data": {"message": "Duplicate email"}}

        assert handle_http_error(Failure()) == "Duplicate email"

    def test_object_response_attribute(self):
        request = httpx.Request("GET", "http://127.0.0.1:8787/auth")

        class Failure:
            def __init__(self):
                self.response = httpx.Response(
                    403, request=request, json={"error": {"message": "Banned"}}
                )

        assert handle_http_error(Failure()) == "Banned"

    def test_status_from_response_object(self):
        request = httpx.Request("GET", "http://127.0.0.1:8787/auth")
        err = {"response": httpx.Response(429, request=request, json={})}

        assert handle_http_error(err) == "Too Many Requests"


# =============================================================================
# Cycle and Depth Tests
# =============================================================================

class TestBoundedSearch:
    """The search terminates on cyclic and very deep structures."""

    def test_self_referential_dict(self):
        err = {"status": 404}
        err["self"] = err

        assert handle_http_error(err) == "Not Found"

    def test_mutual_cycle_with_message_elsewhere(self):
        a = {}
        b = {"a": a}
        a["b"] = b
        a["z"] = {"message": "found"}

        assert handle_http_error(a) == "found"

    def test_self_referential_object(self):
        class Node:
            pass

        node = Node()
        node.self = node

        assert handle_http_error(node) == UNKNOWN_ERROR_MESSAGE

    def test_message_beyond_depth_limit_is_ignored(self):
        err = {"message": "too deep"}
        for _ in range(MAX_SEARCH_DEPTH + 5):
            err = {"inner": err}

        assert get_error_message(err, 500) == "Internal Server Error"

    def test_message_within_depth_limit(self):
        err = {"message": "deep enough"}
        for _ in range(MAX_SEARCH_DEPTH - 1):
            err = {"inner": err}

        assert get_error_message(err) == "deep enough"


# =============================================================================
# Generic Fallback Tests
# =============================================================================

class TestGenericFallback:
    """Test fallbacks for values without structure."""

    @pytest.mark.parametrize("value", [None, 42, 0, 3.5, "boom", b"boom", True])
    def test_primitives(self, value):
        assert handle_http_error(value) == GENERIC_ERROR_MESSAGE

    def test_empty_exception(self):
        assert handle_http_error(RuntimeError()) == GENERIC_ERROR_MESSAGE

    def test_handle_generic_error_reads_message(self):
        class Failure:
            message = "class level message"

        assert handle_generic_error(Failure()) == "class level message"

    def test_get_error_message_none(self):
        assert get_error_message(None) == UNKNOWN_ERROR_MESSAGE
        assert get_error_message(None, 404) == "Not Found"

    def test_never_raises_on_hostile_objects(self):
        class Hostile:
            def __init__(self):
                self.payload = {}

            def __getattribute__(self, name):
                if name == "__dict__":
                    raise RuntimeError("no inspection")
                return object.__getattribute__(self, name)

        assert handle_http_error(Hostile()) == GENERIC_ERROR_MESSAGE
