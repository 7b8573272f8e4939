# =============================================================================
# tests/test_auth.py - Access Token Tests
# =============================================================================

from datetime import timedelta

from jose import jwt

from app.auth import create_access_token, verify_credentials
from app.auth.dependencies import ALGORITHM
from app.config import settings

TOKEN_URL = "/api/v1/auth/token"
VERIFY_URL = "/api/v1/auth/verify"


class TestCredentials:
    """Tests for credential checking and token creation."""

    def test_verify_credentials(self):
        assert verify_credentials(settings.ADMIN_USERNAME, settings.ADMIN_PASSWORD)
        assert not verify_credentials(settings.ADMIN_USERNAME, "wrong")
        assert not verify_credentials("someone-else", settings.ADMIN_PASSWORD)

    def test_token_claims(self):
        token, expires_in = create_access_token("admin", timedelta(minutes=5))
        payload = jwt.decode(token, settings.SECRET_KEY, algorithms=[ALGORITHM])

        assert payload["sub"] == "admin"
        assert payload["exp"] - payload["iat"] == 300
        assert expires_in == 300

    def test_default_lifetime(self):
        _, expires_in = create_access_token("admin")
        assert expires_in == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60


class TestTokenEndpoint:
    """Tests for POST /auth/token."""

    def test_login(self, client):
        response = client.post(
            TOKEN_URL,
            json={"username": settings.ADMIN_USERNAME, "password": settings.ADMIN_PASSWORD},
        )

        assert response.status_code == 200
        body = response.json()
        assert body["token_type"] == "bearer"
        assert body["expires_in"] == settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60

        verify = client.get(VERIFY_URL, headers={"Authorization": f"Bearer {body['access_token']}"})
        assert verify.json() == {"valid": True, "username": settings.ADMIN_USERNAME}

    def test_wrong_password(self, client):
        response = client.post(
            TOKEN_URL,
            json={"username": settings.ADMIN_USERNAME, "password": "nope"},
        )

        assert response.status_code == 401
        assert response.json()["code"] == "INVALID_CREDENTIALS"
        assert response.headers["www-authenticate"] == "Bearer"

    def test_missing_fields(self, client):
        response = client.post(TOKEN_URL, json={"username": "admin"})

        assert response.status_code == 422
        assert response.json()["errors"][0]["field"] == "password"


class TestVerifyEndpoint:
    """Tests for token validation on protected routes."""

    def test_no_token(self, client):
        response = client.get(VERIFY_URL)

        assert response.status_code == 401
        assert response.json()["detail"] == "Not authenticated"

    def test_non_bearer_scheme(self, client):
        response = client.get(VERIFY_URL, headers={"Authorization": "Basic YWRtaW46YWRtaW4="})

        assert response.status_code == 401

    def test_expired_token(self, client):
        token, _ = create_access_token("admin", timedelta(seconds=-30))
        response = client.get(VERIFY_URL, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Token has expired"

    def test_token_signed_with_other_key(self, client):
        token = jwt.encode({"sub": "admin", "exp": 9999999999}, "another-secret-key-123", algorithm=ALGORITHM)
        response = client.get(VERIFY_URL, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"].startswith("Invalid token")

    def test_token_without_subject(self, client):
        token = jwt.encode({"exp": 9999999999}, settings.SECRET_KEY, algorithm=ALGORITHM)
        response = client.get(VERIFY_URL, headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401
        assert response.json()["detail"] == "Invalid token: missing subject"
