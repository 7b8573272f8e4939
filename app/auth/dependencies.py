# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Issues and verifies HS256 access tokens signed with settings.SECRET_KEY.
#
# In the Express version of the article this is a `requireAuth(req, res, next)`
# middleware built on jsonwebtoken; here it is a dependency that route
# handlers declare in their signature.
#
# Usage:
#   from app.auth import get_current_user, AuthUser
#
#   @router.post("/protected")
#   async def protected(user: AuthUser = Depends(get_current_user)):
#       return {"username": user.username}
# =============================================================================

import hmac
import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import ExpiredSignatureError, JWTError, jwt

from app.auth.models import AuthUser
from app.config import settings

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# HTTP Bearer token extractor
security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def verify_credentials(username: str, password: str) -> bool:
    """
    Check a username/password pair against the configured admin account.

    Uses constant-time comparison for both values.
    """
    username_ok = hmac.compare_digest(username.encode(), settings.ADMIN_USERNAME.encode())
    password_ok = hmac.compare_digest(password.encode(), settings.ADMIN_PASSWORD.encode())
    return username_ok and password_ok


def create_access_token(
    subject: str,
    expires_delta: timedelta | None = None,
) -> tuple[str, int]:
    """
    Create a signed access token.

    Args:
        subject: Username stored in the `sub` claim
        expires_delta: Token lifetime (defaults to ACCESS_TOKEN_EXPIRE_MINUTES)

    Returns:
        Tuple of (encoded token, lifetime in seconds)
    """
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    issued_at = datetime.now(timezone.utc)
    payload = {
        "sub": subject,
        "iat": int(issued_at.timestamp()),
        "exp": int((issued_at + expires_delta).timestamp()),
    }
    token = jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)
    return token, int(expires_delta.total_seconds())


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthUser:
    """
    Extract and validate the user from a Bearer token.

    This dependency:
    1. Extracts the Bearer token from the Authorization header
    2. Verifies the HS256 signature and expiry
    3. Returns an AuthUser with the username from `sub`

    Raises:
        HTTPException: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")

    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.SECRET_KEY,
            algorithms=[ALGORITHM],
        )
    except ExpiredSignatureError:
        logger.warning("Access token has expired")
        raise _unauthorized("Token has expired")
    except JWTError as e:
        logger.warning(f"Token validation failed: {e}")
        raise _unauthorized(f"Invalid token: {str(e)}")

    username = payload.get("sub")
    if not username:
        logger.warning("Access token missing 'sub' claim")
        raise _unauthorized("Invalid token: missing subject")

    logger.debug(f"Authenticated user: {username}")
    return AuthUser(username=username)
