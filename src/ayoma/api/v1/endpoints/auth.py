# src/ayoma/api/v1/endpoints/auth.py
"""Authentication endpoints for the Ayoma API."""

from __future__ import annotations

import logging

from fastapi import APIRouter, status

from ayoma.api.v1.dependencies import AccountServiceDep, CurrentClaimsDep
from ayoma.schemas.common import MessageResponse
from ayoma.schemas.user import AuthResponse, LoginRequest, RegisterRequest, UserPublic

router = APIRouter(prefix="/auth", tags=["authentication"])

logger = logging.getLogger(__name__)


@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(payload: RegisterRequest, accounts: AccountServiceDep) -> AuthResponse:
    """Create an account and sign it in immediately.

    Raises:
        DuplicateError: If the username or email is taken (409)
    """
    user, token = accounts.register(payload.username, payload.email, payload.password)
    return AuthResponse(
        message="Registration successful",
        token=token,
        user=UserPublic.model_validate(user.model_dump()),
    )


@router.post("/login", response_model=AuthResponse)
def login(payload: LoginRequest, accounts: AccountServiceDep) -> AuthResponse:
    """Sign in with a username or email and a password.

    Raises:
        NotFoundError: If no account matches the identifier (404)
        InvalidCredentialsError: If the password is wrong (401)
    """
    user, token = accounts.authenticate(payload.identifier, payload.password)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserPublic.model_validate(user.model_dump()),
    )


@router.post("/logout", response_model=MessageResponse)
def logout(claims: CurrentClaimsDep) -> MessageResponse:
    """Acknowledge a logout; tokens are stateless so the client discards its copy."""
    logger.info("User %s logged out", claims.username)
    return MessageResponse(message="Logout successful")
