# =============================================================================
# lib/errors.py - Human-Readable Error Messages
# =============================================================================
# Turns any failure value into a message that can be shown to a user:
# - httpx.HTTPStatusError: searches the decoded response body
# - mappings, lists, exceptions, objects: searches their fields
# - anything else: generic fallback
#
# The search is depth-first, looks for a string "message" field, and
# falls back to the HTTP reason phrase of a known status code.
# It tracks visited objects and is depth limited, so cyclic error
# objects are safe.
#
# Usage:
#   from lib.errors import handle_http_error
#   try:
#       response.raise_for_status()
#   except httpx.HTTPStatusError as e:
#       print(handle_http_error(e))
# =============================================================================

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from http import HTTPStatus
from typing import Any

import httpx

logger = logging.getLogger(__name__)

GENERIC_ERROR_MESSAGE = "An unexpected error occurred. Please try again later."
UNKNOWN_ERROR_MESSAGE = "Unknown Error"

# Deeper structures are treated as having no message
MAX_SEARCH_DEPTH = 32


class ErrorShape(str, Enum):
    """
    Kinds of error values handle_http_error() knows how to read.

    - transport: httpx.HTTPStatusError with a response attached
    - structured: anything with fields to search (dict, list, exception, object)
    - opaque: primitives and empty exceptions
    """
    TRANSPORT = "transport"
    STRUCTURED = "structured"
    OPAQUE = "opaque"


# =============================================================================
# Field Access
# =============================================================================

def _decode_body(response: httpx.Response) -> Any:
    """Response body as JSON, else as text, else None if it was never read."""
    try:
        return response.json()
    except ValueError:
        return response.text
    except httpx.StreamError:
        return None


def _fields(value: Any) -> Mapping[Any, Any] | None:
    """
    Searchable fields of a composite value, or None for primitives.

    Exceptions expose their first string argument as "message" unless
    they define a message attribute themselves. Private attributes
    (leading underscore) are not searched.
    """
    if value is None or isinstance(value, (str, bytes, bytearray, int, float, complex)):
        return None
    if isinstance(value, httpx.Response):
        return _fields(_decode_body(value))
    if isinstance(value, Mapping):
        return value
    if isinstance(value, (list, tuple)):
        return dict(enumerate(value))
    if isinstance(value, type) or not hasattr(value, "__dict__"):
        return None

    fields = {k: v for k, v in vars(value).items() if not k.startswith("_")}
    if isinstance(value, BaseException):
        if "message" not in fields and value.args and isinstance(value.args[0], str):
            fields = {"message": value.args[0], **fields}
        if not fields:
            return None
    return fields


def _status_of(value: Any) -> int | None:
    """Best guess at an HTTP status code carried by value."""
    if isinstance(value, httpx.Response):
        return value.status_code
    if isinstance(value, Mapping):
        candidates = (value.get("status"), value.get("status_code"))
    else:
        candidates = (getattr(value, "status", None), getattr(value, "status_code", None))

    for candidate in candidates:
        if isinstance(candidate, int) and not isinstance(candidate, bool):
            return candidate
    return None


def _reason_phrase(status_code: int | None) -> str | None:
    if not status_code:
        return None
    try:
        return HTTPStatus(status_code).phrase
    except ValueError:
        return None


# =============================================================================
# Search
# =============================================================================

def _search(value: Any, depth: int, seen: set[int]) -> str | None:
    if depth > MAX_SEARCH_DEPTH or id(value) in seen:
        return None

    fields = _fields(value)
    if fields is None:
        return None
    seen.add(id(value))

    message = fields.get("message")
    if isinstance(message, str) and message:
        return message

    for child in fields.values():
        found = _search(child, depth + 1, seen)
        if found:
            return found
    return None


def get_error_message(obj: Any, status_code: int | None = None) -> str:
    """
    Scrape an error object for its message.

    The first non-empty string under a "message" key wins. An empty string
    counts as no message, so the search moves on to the remaining fields.
    If no message is found anywhere in the structure, returns the reason
    phrase for status_code (e.g. 404 -> "Not Found"), or "Unknown Error"
    when no usable status code is given.

    Args:
        obj: Error body or object to search
        status_code: Optional HTTP status used as fallback

    Returns:
        The error message
    """
    if obj is not None:
        found = _search(obj, 0, set())
        if found:
            return found

    return _reason_phrase(status_code) or UNKNOWN_ERROR_MESSAGE


# =============================================================================
# Public API
# =============================================================================

def classify_error(err: Any) -> ErrorShape:
    """Decide how handle_http_error() should read err."""
    if isinstance(err, httpx.HTTPStatusError):
        return ErrorShape.TRANSPORT
    if _fields(err) is not None:
        return ErrorShape.STRUCTURED
    return ErrorShape.OPAQUE


def handle_http_error(err: Any) -> str:
    """
    Get a human-readable message from any error value.

    Never raises; always returns a non-empty string.

    Example:
        >>> handle_http_error({"response": {"data": {"message": "bad"}}})
        'bad'
        >>> handle_http_error({"status": 404})
        'Not Found'
        >>> handle_http_error(None)
        'An unexpected error occurred. Please try again later.'
    """
    try:
        shape = classify_error(err)

        if shape is ErrorShape.TRANSPORT:
            response = err.response
            return get_error_message(_decode_body(response), response.status_code)

        if shape is ErrorShape.STRUCTURED:
            fields = _fields(err)
            target = fields.get("response") or err
            status_code = _status_of(err) or _status_of(target)
            return get_error_message(target, status_code)

    except Exception as e:
        logger.debug(f"Could not inspect error value {type(err).__name__}: {e}")

    return handle_generic_error(err)


def handle_generic_error(err: Any) -> str:
    """
    Handle a plain error value.

    Returns its message attribute when it is a non-empty string,
    otherwise a generic message.
    """
    message = getattr(err, "message", None)
    if isinstance(message, str) and message:
        return message
    return GENERIC_ERROR_MESSAGE
