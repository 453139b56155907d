"""Tests for Users API routes."""

import pytest


@pytest.mark.api
class TestUsersAPI:
    """Test cases for the current user's endpoints."""

    @pytest.mark.asyncio
    async def test_me_requires_auth(self, client):
        """Test that the profile needs credentials."""
        response = await client.get("/api/v1/users/me")
        assert response.status_code == 401

    @pytest.mark.asyncio
    async def test_me_creates_user(self, client):
        """Test that the first authenticated request creates the user."""
        response = await client.get(
            "/api/v1/users/me", headers={"Authorization": "Bearer token-newcomer"}
        )

        assert response.status_code == 200
        data = response.json()
        assert data["id"] == "newcomer"
        assert data["email"] == "newcomer@example.com"
        assert data["username"] is None

    @pytest.mark.asyncio
    async def test_update_me(self, client, alice_headers):
        """Test changing the username."""
        response = await client.patch(
            "/api/v1/users/me", json={"username": "alicia"}, headers=alice_headers
        )

        assert response.status_code == 200
        assert response.json()["username"] == "alicia"

    @pytest.mark.asyncio
    async def test_settings(self, client, alice_headers, test_settings):
        """Test reading and changing settings."""
        response = await client.get("/api/v1/users/me/settings", headers=alice_headers)
        assert response.status_code == 200
        assert response.json()["storage_limit_bytes"] == test_settings.default_storage_limit_bytes

        response = await client.put(
            "/api/v1/users/me/settings",
            json={"storage_limit_bytes": 2048, "preferences": {"theme": "dark"}},
            headers=alice_headers,
        )
        assert response.status_code == 200
        assert response.json() == {"storage_limit_bytes": 2048, "preferences": {"theme": "dark"}}

    @pytest.mark.asyncio
    async def test_invalid_storage_limit(self, client, alice_headers):
        """Test that the storage limit must be positive."""
        response = await client.put(
            "/api/v1/users/me/settings", json={"storage_limit_bytes": 0}, headers=alice_headers
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_storage_usage(self, client, small_quota_user, make_file):
        """Test the storage usage summary."""
        await make_file(small_quota_user, content=b"x" * 40)

        response = await client.get(
            "/api/v1/users/me/storage",
            headers={"Authorization": f"Bearer token-{small_quota_user.id}"},
        )

        assert response.status_code == 200
        assert response.json() == {
            "used_bytes": 40,
            "limit_bytes": 100,
            "available_bytes": 60,
            "percent_used": 40.0,
        }
