# =============================================================================
# lib/supabase_client.py - Supabase User Store
# =============================================================================
# This module implements the UserStore used by AuthService on top of
# Supabase Auth:
# - create_user: auth.sign_up, with the profile fields kept in user metadata
# - authenticate_with_password: auth.sign_in_with_password
# - clear_session: auth.sign_out (local scope)
# - request_verification: auth.resend (signup confirmation)
#
# Unlike a shared singleton, every SupabaseUserStore owns its own client,
# so the auth session of one request can never leak into another.
#
# Usage:
#   from lib.supabase_client import SupabaseUserStore
#   store = SupabaseUserStore.from_settings()
#   record = store.create_user(payload)
# =============================================================================

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any

from supabase import Client, ClientOptions, create_client

from app.config import settings
from core.models.user import AuthRecord, UserCreatePayload, UserRecord
from lib.utils import ApplicationError

# Set up logging for this module
logger = logging.getLogger(__name__)


class SupabaseClientError(ApplicationError):
    """
    Error during Supabase operations.

    `status` carries the HTTP status Supabase answered with, when known.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        suggestion: str | None = None,
        details: dict[str, Any] | None = None,
        status: int | None = None,
    ):
        super().__init__(
            message,
            code=code,
            suggestion=suggestion,
            details=details,
            status=status,
        )

    @classmethod
    def wrap(cls, error: Exception, code: str, suggestion: str | None = None) -> "SupabaseClientError":
        """Build a SupabaseClientError from an exception raised by the SDK."""
        message = getattr(error, "message", None) or str(error) or error.__class__.__name__
        status = getattr(error, "status", None)
        return cls(
            message=message,
            code=code,
            suggestion=suggestion,
            status=status if isinstance(status, int) else None,
        )


def _timestamp(value: datetime | str | None) -> str:
    if value is None:
        return ""
    if isinstance(value, datetime):
        return value.isoformat()
    return str(value)


def is_banned(user: Any) -> bool:
    """
    Read a user's ban status from server-controlled fields only.

    An active ban is a `banned_until` in the future. A service-side flag in
    app_metadata also counts.
    """
    banned_until = getattr(user, "banned_until", None)
    if banned_until:
        if isinstance(banned_until, str):
            try:
                banned_until = datetime.fromisoformat(banned_until.replace("Z", "+00:00"))
            except ValueError:
                logger.warning(f"Unreadable banned_until for user {user.id}: {banned_until!r}")
                return True
        if banned_until.tzinfo is None:
            banned_until = banned_until.replace(tzinfo=timezone.utc)
        if banned_until > datetime.now(timezone.utc):
            return True

    app_metadata = getattr(user, "app_metadata", None) or {}
    return bool(app_metadata.get("is_banned", False))


def record_from_user(user: Any) -> UserRecord:
    """
    Flatten a Supabase auth user into a UserRecord.

    Profile fields live in user_metadata; anything else found there is
    kept as an extra field on the record. Ban status never comes from
    user_metadata, which users can edit themselves.
    """
    metadata = dict(user.user_metadata or {})
    metadata.pop("is_banned", None)
    created = _timestamp(user.created_at)

    return UserRecord.model_validate({
        **metadata,
        "id": str(user.id),
        "username": metadata.get("username", ""),
        "name": metadata.get("name", ""),
        "email": user.email or metadata.get("email", ""),
        "avatar": metadata.get("avatar"),
        "is_banned": is_banned(user),
        "remember_token": metadata.get("remember_token"),
        "created": created,
        "updated": _timestamp(user.updated_at) or created,
    })


class SupabaseUserStore:
    """
    Request-scoped user store backed by Supabase Auth.

    Example:
        store = SupabaseUserStore.from_settings()
        auth = store.authenticate_with_password("jane@example.com", "secret")
        store.clear_session()
    """

    def __init__(self, client: Client):
        self.client = client

    @classmethod
    def from_settings(cls) -> "SupabaseUserStore":
        """
        Create a store with a fresh Supabase client.

        The client keeps its session in memory only and never refreshes
        it, so nothing outlives the request.

        Raises:
            SupabaseClientError: If client creation fails
        """
        try:
            client = create_client(
                settings.SUPABASE_URL,
                settings.SUPABASE_ANON_KEY,
                options=ClientOptions(auto_refresh_token=False, persist_session=False),
            )
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to create Supabase client: {e}",
                code="CLIENT_INIT_FAILED",
                suggestion="Check SUPABASE_URL and SUPABASE_ANON_KEY in your .env file"
            )
        return cls(client)

    # -------------------------------------------------------------------------
    # Registration
    # -------------------------------------------------------------------------

    def create_user(self, payload: UserCreatePayload) -> UserRecord:
        """
        Create a user with email and password.

        Args:
            payload: Registration payload; profile fields go into user metadata

        Returns:
            The created user as a UserRecord

        Raises:
            SupabaseClientError: If the passwords differ or sign up fails
        """
        if payload.password != payload.password_confirm:
            raise SupabaseClientError(
                message="Password confirmation does not match",
                code="PASSWORD_MISMATCH",
                status=400,
            )

        try:
            response = self.client.auth.sign_up({
                "email": payload.email,
                "password": payload.password,
                "options": {"data": payload.profile_fields()},
            })
        except Exception as e:
            raise SupabaseClientError.wrap(
                e,
                code="SIGN_UP_FAILED",
                suggestion="The email may already be registered or the password too weak",
            )

        if response.user is None:
            raise SupabaseClientError(
                message="Sign up returned no user",
                code="SIGN_UP_NO_USER",
            )

        logger.debug(f"Supabase sign up succeeded for {payload.email}")
        return record_from_user(response.user)

    def request_verification(self, email: str) -> None:
        """
        Send (or re-send) the signup confirmation email.

        Raises:
            SupabaseClientError: If the request fails
        """
        try:
            self.client.auth.resend({"type": "signup", "email": email})
        except Exception as e:
            raise SupabaseClientError.wrap(e, code="VERIFICATION_FAILED")

    # -------------------------------------------------------------------------
    # Authentication
    # -------------------------------------------------------------------------

    def authenticate_with_password(self, email: str, password: str) -> AuthRecord:
        """
        Sign in with email and password.

        Returns:
            AuthRecord with the user's record and the session access token

        Raises:
            SupabaseClientError: If the credentials are rejected or the
                request fails
        """
        try:
            response = self.client.auth.sign_in_with_password({
                "email": email,
                "password": password,
            })
        except Exception as e:
            raise SupabaseClientError.wrap(
                e,
                code="SIGN_IN_FAILED",
                suggestion="Check the email and password",
            )

        if response.user is None:
            raise SupabaseClientError(
                message="Sign in returned no user",
                code="SIGN_IN_NO_USER",
            )

        token = response.session.access_token if response.session else None
        return AuthRecord(record=record_from_user(response.user), token=token)

    def clear_session(self) -> None:
        """
        Drop the session held by this store's client.

        If the remote sign out fails, the session is still removed from the
        client so nothing is left behind for a later caller.
        """
        try:
            self.client.auth.sign_out({"scope": "local"})
        except Exception as e:
            logger.warning(f"Supabase sign out failed, dropping local session: {e}")
            self.client.auth._remove_session()
