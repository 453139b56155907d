"""Tests for Categories API routes."""

import pytest


@pytest.mark.api
class TestCategoriesAPI:
    """Test cases for category endpoints."""

    @pytest.mark.asyncio
    async def test_create_and_list(self, client, alice_headers):
        """Test creating categories and listing them with file counts."""
        response = await client.post(
            "/api/v1/categories", json={"name": "Docs", "color": "#112233"}, headers=alice_headers
        )
        assert response.status_code == 201
        assert response.json()["file_count"] == 0

        response = await client.get("/api/v1/categories", headers=alice_headers)

        assert response.status_code == 200
        categories = response.json()["categories"]
        assert [c["name"] for c in categories] == ["Docs"]
        assert categories[0]["color"] == "#112233"

    @pytest.mark.asyncio
    async def test_create_duplicate(self, client, alice_headers):
        """Test that duplicate names conflict."""
        await client.post("/api/v1/categories", json={"name": "Docs"}, headers=alice_headers)

        response = await client.post(
            "/api/v1/categories", json={"name": "Docs"}, headers=alice_headers
        )

        assert response.status_code == 409
        assert response.json()["kind"] == "conflict"

    @pytest.mark.asyncio
    async def test_invalid_color(self, client, alice_headers):
        """Test that colors must be hex codes."""
        response = await client.post(
            "/api/v1/categories", json={"name": "Docs", "color": "red"}, headers=alice_headers
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_update_and_delete(self, client, alice_headers):
        """Test renaming and deleting a category."""
        response = await client.post(
            "/api/v1/categories", json={"name": "Docs"}, headers=alice_headers
        )
        category_id = response.json()["id"]

        response = await client.put(
            f"/api/v1/categories/{category_id}", json={"name": "Papers"}, headers=alice_headers
        )
        assert response.status_code == 200
        assert response.json()["name"] == "Papers"

        response = await client.delete(f"/api/v1/categories/{category_id}", headers=alice_headers)
        assert response.status_code == 204

        response = await client.get(f"/api/v1/categories/{category_id}", headers=alice_headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_foreign_category(self, client, alice_headers, bob_headers):
        """Test that categories are private to their owner."""
        response = await client.post(
            "/api/v1/categories", json={"name": "Docs"}, headers=alice_headers
        )
        category_id = response.json()["id"]

        response = await client.get(f"/api/v1/categories/{category_id}", headers=bob_headers)
        assert response.status_code == 404
