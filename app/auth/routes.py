# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for registration and login:
# - POST /auth: create a user from a JSON body
# - GET  /auth: log in with email and password query parameters
#
# Both return UserData. Errors are raised as StorefrontException
# subclasses and rendered as {"error": {...}} by the handlers in main.py.
# =============================================================================

import json
import logging
from typing import Annotated

from fastapi import APIRouter, Query, Request

from app.config import settings
from app.dependencies import UserStoreDep
from app.exceptions import InvalidRequestBodyError
from core.models.user import UserData
from core.services.auth_service import AuthService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=UserData)
async def register(request: Request, store: UserStoreDep) -> UserData:
    """
    Register a new user.

    Body:
        {"email": str, "first_name": str, "last_name": str | null, "password": str}

    Returns:
        UserData: The created user

    Raises:
        400: If the body is not a JSON object or a required field is missing
        500: If the user service rejects the registration
    """
    try:
        body = await request.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise InvalidRequestBodyError("Request body must be valid JSON")

    return AuthService.register(
        body,
        store,
        send_verification=settings.SEND_VERIFICATION_EMAIL,
    )


@router.get("", response_model=UserData)
async def login(
    store: UserStoreDep,
    email: Annotated[str | None, Query(description="Account email")] = None,
    password: Annotated[str | None, Query(description="Account password")] = None,
) -> UserData:
    """
    Log in with email and password.

    The session opened by the user service is cleared before responding;
    only the user's public data is returned.

    Raises:
        400: If email or password is missing
        500: If the credentials are rejected or the user service fails
    """
    return AuthService.login(email, password, store)
