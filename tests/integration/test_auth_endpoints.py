"""Integration tests for auth endpoints."""
import pytest


@pytest.mark.asyncio
class TestAuthRegister:
    """Tests for POST /auth/register endpoint."""

    async def test_register_success(self, app_client):
        """Test successful user registration."""
        response = await app_client.post(
            "/auth/register",
            json={"email": "newgolfer@example.com", "password": "birdie123", "name": "New Golfer"},
        )

        assert response.status_code == 201
        data = response.json()
        assert data["email"] == "newgolfer@example.com"
        assert "id" in data
        assert "hashed_password" not in data

    async def test_register_duplicate_email(self, app_client):
        """Test registration with duplicate email returns 400."""
        payload = {"email": "dup@example.com", "password": "birdie123"}
        await app_client.post("/auth/register", json=payload)

        response = await app_client.post("/auth/register", json=payload)

        assert response.status_code == 400
        assert "already registered" in response.json()["detail"].lower()

    async def test_register_invalid_email(self, app_client):
        """Test registration with invalid email returns 422."""
        response = await app_client.post(
            "/auth/register",
            json={"email": "not-an-email", "password": "birdie123"},
        )

        assert response.status_code == 422


@pytest.mark.asyncio
class TestAuthLogin:
    """Tests for POST /auth/login and GET /auth/me."""

    async def test_login_and_me(self, app_client, auth_headers):
        """Test the issued token identifies the user."""
        response = await app_client.get("/auth/me", headers=auth_headers)

        assert response.status_code == 200
        assert response.json()["email"] == "golfer@example.com"

    async def test_login_wrong_password(self, app_client, auth_headers):
        """Test bad credentials return 401."""
        response = await app_client.post(
            "/auth/login",
            json={"email": "golfer@example.com", "password": "wrong-password"},
        )

        assert response.status_code == 401

    async def test_me_without_token(self, app_client):
        """Test protected endpoints require a token."""
        response = await app_client.get("/auth/me")

        assert response.status_code == 401

    async def test_me_with_bad_token(self, app_client):
        """Test a forged token is rejected."""
        response = await app_client.get(
            "/auth/me", headers={"Authorization": "Bearer not.a.token"}
        )

        assert response.status_code == 401
