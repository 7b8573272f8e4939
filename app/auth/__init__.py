# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides HS256 JWT authentication for the endpoints that modify the catalog.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.post("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"username": user.username}
# =============================================================================

from app.auth.dependencies import (
    create_access_token,
    get_current_user,
    verify_credentials,
)
from app.auth.models import AuthUser, LoginRequest, TokenResponse

__all__ = [
    "create_access_token",
    "get_current_user",
    "verify_credentials",
    "AuthUser",
    "LoginRequest",
    "TokenResponse",
]
