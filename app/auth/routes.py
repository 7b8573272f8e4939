# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# API endpoints for obtaining and checking access tokens.
# =============================================================================

import logging

from fastapi import APIRouter, Depends

from app.auth.dependencies import create_access_token, get_current_user, verify_credentials
from app.auth.models import AuthUser, LoginRequest, TokenResponse
from app.exceptions import InvalidCredentialsError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/token", response_model=TokenResponse)
async def login(request: LoginRequest) -> TokenResponse:
    """
    Exchange username and password for an access token.

    Raises:
        401: If the credentials are wrong
    """
    if not verify_credentials(request.username, request.password):
        logger.warning(f"Failed login for user: {request.username}")
        raise InvalidCredentialsError()

    token, expires_in = create_access_token(request.username)
    logger.info(f"Issued token for user: {request.username}")
    return TokenResponse(access_token=token, expires_in=expires_in)


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Raises:
        401: If token is invalid or expired
    """
    return {
        "valid": True,
        "username": user.username,
    }
