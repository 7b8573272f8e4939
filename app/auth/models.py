# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from pydantic import BaseModel, Field


class AuthUser(BaseModel):
    """
    Authenticated user extracted from the access token.

    This is the minimal user info available from the token itself.
    """
    username: str

    model_config = {"frozen": True}


class LoginRequest(BaseModel):
    """Credentials exchanged for an access token."""
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=200)


class TokenResponse(BaseModel):
    """Access token returned by POST /auth/token."""
    access_token: str
    token_type: str = "bearer"
    expires_in: int = Field(..., gt=0, description="Lifetime in seconds")
