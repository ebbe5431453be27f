"""Tests for authentication API endpoints"""

import pytest
from httpx import AsyncClient
from fastapi import status

from scafflow.config import settings
from scafflow.models import User
from scafflow.services.auth_service import AuthService


SIGNUP = {
    "name": "New Engineer",
    "email": "new.engineer@example.com",
    "password": "StrongPass1",
}


@pytest.mark.asyncio
class TestSignupEndpoint:
    """Test signup endpoint functionality"""

    async def test_signup_success(self, async_client: AsyncClient):
        """Signup returns tokens and defaults to the site_engineer role"""
        response = await async_client.post("/api/v1/auth/signup", json=SIGNUP)

        assert response.status_code == status.HTTP_201_CREATED
        data = response.json()
        assert "access_token" in data
        assert "refresh_token" in data
        assert data["user"]["email"] == "new.engineer@example.com"
        assert data["user"]["role"] == "site_engineer"

    async def test_signup_with_owner_role(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/auth/signup", json={**SIGNUP, "role": "vendor"}
        )

        assert response.status_code == status.HTTP_201_CREATED
        assert response.json()["user"]["role"] == "vendor"

    async def test_signup_cannot_claim_admin(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/auth/signup", json={**SIGNUP, "role": "admin"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["errors"][0]["field"] == "role"

    async def test_signup_duplicate_email(self, async_client: AsyncClient, owner_user: User):
        response = await async_client.post(
            "/api/v1/auth/signup", json={**SIGNUP, "email": "OWNER@example.com"}
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.json()["status"] == 409

    @pytest.mark.parametrize("password", ["short1A", "alllowercase1", "ALLUPPERCASE1", "NoDigitsHere"])
    async def test_signup_weak_password(self, async_client: AsyncClient, password: str):
        response = await async_client.post(
            "/api/v1/auth/signup", json={**SIGNUP, "password": password}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_signup_invalid_email_format(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/auth/signup", json={**SIGNUP, "email": "not-an-email"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST


@pytest.mark.asyncio
class TestLoginEndpoint:
    """Test login endpoint functionality"""

    async def test_login_success(self, async_client: AsyncClient, owner_user: User, mock_redis):
        """Test successful login with valid credentials"""
        response = await async_client.post(
            "/api/v1/auth/login",
            json={"email": "owner@example.com", "password": "TestPassword123"}
        )

        assert response.status_code == status.HTTP_200_OK
        data = response.json()

        assert data["token_type"] == "Bearer"
        assert data["expires_in"] == 86400  # 24 hours
        assert data["user"]["email"] == "owner@example.com"
        assert data["user"]["role"] == "site_engineer"
        mock_redis["clear_failed_logins"].assert_awaited_once()

    async def test_login_invalid_password(
        self, async_client: AsyncClient, owner_user: User, mock_redis
    ):
        """Test login with incorrect password"""
        response = await async_client.post(
            "/api/v1/auth/login",
            json={"email": "owner@example.com", "password": "WrongPassword1"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        data = response.json()
        assert data["status"] == 401
        assert "invalid email or password" in data["detail"].lower()
        mock_redis["record_failed_login"].assert_awaited_once()

    async def test_login_invalid_email(self, async_client: AsyncClient):
        """Test login with non-existent email"""
        response = await async_client.post(
            "/api/v1/auth/login",
            json={"email": "nobody@example.com", "password": "SomePassword1"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_login_missing_password(self, async_client: AsyncClient):
        response = await async_client.post(
            "/api/v1/auth/login", json={"email": "owner@example.com"}
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST

    async def test_login_throttled(self, async_client: AsyncClient, owner_user: User, mock_redis):
        """Too many failed attempts from one IP blocks even correct credentials"""
        mock_redis["is_login_throttled"].return_value = True

        response = await async_client.post(
            "/api/v1/auth/login",
            json={"email": "owner@example.com", "password": "TestPassword123"}
        )

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        assert response.json()["status"] == 429

    @pytest.mark.redis_client
    async def test_throttle_uses_stored_failure_count(
        self, async_client: AsyncClient, owner_user: User, mock_redis
    ):
        """The configured limit of stored failures for the client IP blocks login"""
        mock_redis["client"].get.return_value = str(settings.login_attempt_limit)

        response = await async_client.post(
            "/api/v1/auth/login",
            json={"email": "owner@example.com", "password": "TestPassword123"}
        )

        assert response.status_code == status.HTTP_429_TOO_MANY_REQUESTS
        key = mock_redis["client"].get.await_args.args[0]
        assert key.startswith("scafflow:failed_logins:")
        mock_redis["client"].delete.assert_not_awaited()


@pytest.mark.asyncio
class TestTokenRefreshEndpoint:
    """Test token refresh"""

    async def test_refresh_token_success(self, async_client: AsyncClient, owner_user: User):
        refresh = AuthService.create_refresh_token(str(owner_user.id))

        response = await async_client.post(
            "/api/v1/auth/refresh", headers={"Authorization": f"Bearer {refresh}"}
        )

        assert response.status_code == status.HTTP_200_OK
        payload = AuthService.validate_token(response.json()["access_token"], "access")
        assert payload["sub"] == str(owner_user.id)
        assert payload["role"] == "site_engineer"

    async def test_refresh_with_access_token_fails(
        self, async_client: AsyncClient, owner_headers: dict
    ):
        response = await async_client.post("/api/v1/auth/refresh", headers=owner_headers)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_refresh_without_token(self, async_client: AsyncClient):
        response = await async_client.post("/api/v1/auth/refresh")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


@pytest.mark.asyncio
class TestLogoutEndpoint:
    """Test logout"""

    async def test_logout_revokes_token(
        self, async_client: AsyncClient, owner_headers: dict, mock_redis
    ):
        response = await async_client.post("/api/v1/auth/logout", headers=owner_headers)

        assert response.status_code == status.HTTP_204_NO_CONTENT
        mock_redis["revoke_token"].assert_awaited_once()

    async def test_logout_invalid_token_is_idempotent(self, async_client: AsyncClient, mock_redis):
        response = await async_client.post(
            "/api/v1/auth/logout", headers={"Authorization": "Bearer not.a.token"}
        )

        assert response.status_code == status.HTTP_204_NO_CONTENT
        mock_redis["revoke_token"].assert_not_awaited()


@pytest.mark.asyncio
class TestAuthGate:
    """Test bearer token handling on protected endpoints"""

    async def test_me(self, async_client: AsyncClient, owner_headers: dict):
        response = await async_client.get("/api/v1/auth/me", headers=owner_headers)

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["name"] == "Olivia Owner"

    async def test_missing_header(self, async_client: AsyncClient):
        response = await async_client.get("/api/v1/auth/me")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.headers["WWW-Authenticate"] == "Bearer"

    async def test_malformed_header(self, async_client: AsyncClient):
        response = await async_client.get(
            "/api/v1/auth/me", headers={"Authorization": "Token abc"}
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    async def test_revoked_token(self, async_client: AsyncClient, owner_headers: dict, mock_redis):
        mock_redis["is_token_revoked"].return_value = True

        response = await async_client.get("/api/v1/auth/me", headers=owner_headers)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.json()["detail"] == "Token has been revoked"

    async def test_token_for_deleted_user(self, async_client: AsyncClient, db_session, owner_user: User):
        headers = {
            "Authorization": "Bearer " + AuthService.create_access_token(
                str(owner_user.id), owner_user.email, owner_user.role
            )
        }
        await db_session.delete(owner_user)
        await db_session.commit()

        response = await async_client.get("/api/v1/auth/me", headers=headers)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
