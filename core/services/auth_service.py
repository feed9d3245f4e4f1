# =============================================================================
# core/services/auth_service.py - Registration & Login Business Logic
# =============================================================================
# Validates raw request input, derives the display name and username,
# talks to the user service through a UserStore, and projects the
# returned record into UserData.
# Separates HTTP concerns from user service calls.
# =============================================================================

import logging
import random
import re
from typing import Any, Protocol

from app.exceptions import (
    FieldValidationError,
    InvalidRequestBodyError,
    UpstreamServiceError,
)
from core.models.user import AuthRecord, UserCreatePayload, UserData, UserRecord
from lib.utils import ApplicationError

logger = logging.getLogger(__name__)

USERNAME_SUFFIX_MIN = 10_000_000
USERNAME_SUFFIX_MAX = 99_999_999

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9-]")


class UserStore(Protocol):
    """
    The external user service as seen by AuthService.

    One instance serves exactly one request; clear_session() only
    affects that instance.
    """

    def create_user(self, payload: UserCreatePayload) -> UserRecord: ...

    def authenticate_with_password(self, email: str, password: str) -> AuthRecord: ...

    def clear_session(self) -> None: ...

    def request_verification(self, email: str) -> None: ...


class AuthService:
    """
    Service for registration and login.

    Stateless: every method receives the UserStore it should use.
    """

    # -------------------------------------------------------------------------
    # Validation
    # -------------------------------------------------------------------------

    @staticmethod
    def validate_required_string(value: Any, field_name: str) -> str:
        """
        Ensure value is a non-empty string.

        Args:
            value: Raw value from the request
            field_name: Human-readable name used in the error message

        Returns:
            The validated string

        Raises:
            FieldValidationError: "<field_name> is required and must be a string"
        """
        if not isinstance(value, str) or not value:
            raise FieldValidationError(field_name)
        return value

    # -------------------------------------------------------------------------
    # Derived Fields
    # -------------------------------------------------------------------------

    @staticmethod
    def build_display_name(first_name: str, last_name: Any = None) -> str:
        """
        Join first and last name with a single space.

        A missing or empty last name is rendered as the literal "null",
        so "Jane" with no last name becomes "Jane null".
        """
        return f"{first_name} {last_name if last_name else 'null'}"

    @staticmethod
    def slugify(name: str) -> str:
        """Lowercase, spaces to hyphens, then drop anything but [a-z0-9-]."""
        return _NON_SLUG_CHARS.sub("", name.lower().replace(" ", "-"))

    @staticmethod
    def build_username(name: str, rng: random.Random | None = None) -> str:
        """
        Build "<slug>-<8 digits>" from a display name.

        The numeric suffix is random and not checked for collisions.
        """
        rng = rng or random
        suffix = rng.randint(USERNAME_SUFFIX_MIN, USERNAME_SUFFIX_MAX)
        return f"{AuthService.slugify(name)}-{suffix}"

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    @staticmethod
    def register(
        body: Any,
        store: UserStore,
        send_verification: bool = False,
    ) -> UserData:
        """
        Register a new user.

        Args:
            body: Decoded JSON body with email, first_name, last_name?, password
            store: User store for this request
            send_verification: Ask the user service to email a verification link

        Returns:
            UserData for the created user

        Raises:
            InvalidRequestBodyError: If body is not a JSON object
            FieldValidationError: If email, first_name or password is invalid
            UpstreamServiceError: If the user service rejects the request
        """
        if not isinstance(body, dict):
            raise InvalidRequestBodyError()

        email = AuthService.validate_required_string(body.get("email"), "Email")
        first_name = AuthService.validate_required_string(body.get("first_name"), "First name")
        password = AuthService.validate_required_string(body.get("password"), "Password")

        name = AuthService.build_display_name(first_name, body.get("last_name"))
        payload = UserCreatePayload(
            username=AuthService.build_username(name),
            email=email,
            email_visibility=True,
            password=password,
            password_confirm=password,
            name=name,
            is_banned=False,
            remember_token=None,
        )

        try:
            record = store.create_user(payload)
        except ApplicationError as e:
            logger.warning(f"Registration rejected for {email}: {e.message}")
            raise UpstreamServiceError("register", e.message, upstream_status=e.status)
        finally:
            # sign up may leave the new user signed in on the client
            store.clear_session()

        user = UserData.from_record(record)
        logger.info(f"Registered user: {user.id} ({user.username})")

        if send_verification:
            try:
                store.request_verification(email)
            except ApplicationError as e:
                logger.error(f"Could not send verification email to {email}: {e.message}")

        return user

    @staticmethod
    def login(email: Any, password: Any, store: UserStore) -> UserData:
        """
        Log a user in with email and password.

        The session created by the sign-in is cleared before returning;
        the caller only receives the user's public data.

        Raises:
            FieldValidationError: If email or password is invalid
            UpstreamServiceError: If the credentials are rejected or the
                user service is unreachable
        """
        email = AuthService.validate_required_string(email, "Email")
        password = AuthService.validate_required_string(password, "Password")

        try:
            auth = store.authenticate_with_password(email, password)
        except ApplicationError as e:
            logger.warning(f"Login failed for {email}: {e.message}")
            raise UpstreamServiceError("login", e.message, upstream_status=e.status)

        try:
            user = UserData.from_record(auth.record)
        finally:
            store.clear_session()

        logger.info(f"User logged in: {user.id}")
        return user
