"""Tests for share link API routes."""

import pytest


async def create_share(client, file_id, headers, **options):
    response = await client.post(
        f"/api/v1/files/{file_id}/share", json=options or None, headers=headers
    )
    assert response.status_code == 201
    return response.json()


@pytest.mark.api
class TestOwnerShareAPI:
    """Test cases for the owner's share endpoints."""

    @pytest.mark.asyncio
    async def test_create_share_without_body(self, client, alice_headers, sample_file):
        """Test sharing with default options."""
        response = await client.post(
            f"/api/v1/files/{sample_file.id}/share", headers=alice_headers
        )

        assert response.status_code == 201
        data = response.json()
        assert data["share_url"] == f"http://frontend.test/share/{data['share_token']}"
        assert data["has_password"] is False
        assert data["downloads"] == 0
        assert "password" not in data
        assert "share_password_hash" not in data

    @pytest.mark.asyncio
    async def test_create_share_with_options(self, client, alice_headers, sample_file):
        """Test sharing with a password, expiry and ceiling."""
        data = await create_share(
            client,
            sample_file.id,
            alice_headers,
            password="secret",
            expires_in_seconds=3600,
            max_downloads=5,
        )

        assert data["has_password"] is True
        assert data["max_downloads"] == 5
        assert data["expires_at"] is not None

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "options",
        [{"max_downloads": 0}, {"expires_in_seconds": 0}, {"password": ""}],
    )
    async def test_create_share_invalid_options(
        self, client, alice_headers, sample_file, options
    ):
        """Test that invalid share options are rejected."""
        response = await client.post(
            f"/api/v1/files/{sample_file.id}/share", json=options, headers=alice_headers
        )
        assert response.status_code == 422

    @pytest.mark.asyncio
    async def test_create_share_foreign_file(self, client, bob_headers, sample_file):
        """Test that users cannot share files they do not own."""
        response = await client.post(f"/api/v1/files/{sample_file.id}/share", headers=bob_headers)
        assert response.status_code == 404

    @pytest.mark.asyncio
    async def test_share_status(self, client, alice_headers, sample_file):
        """Test reading the share state before and after sharing."""
        url = f"/api/v1/files/{sample_file.id}/share"

        response = await client.get(url, headers=alice_headers)
        assert response.json() == {"shared": False, "share": None}

        share = await create_share(client, sample_file.id, alice_headers)
        response = await client.get(url, headers=alice_headers)
        assert response.json()["shared"] is True
        assert response.json()["share"]["share_token"] == share["share_token"]

    @pytest.mark.asyncio
    async def test_revoke_share(self, client, alice_headers, sample_file):
        """Test revoking a link, twice."""
        share = await create_share(client, sample_file.id, alice_headers)
        url = f"/api/v1/files/{sample_file.id}/share"

        assert (await client.delete(url, headers=alice_headers)).status_code == 204
        assert (await client.delete(url, headers=alice_headers)).status_code == 204

        response = await client.get(f"/api/v1/share/{share['share_token']}")
        assert response.status_code == 404


@pytest.mark.api
class TestPublicShareAPI:
    """Test cases for the anonymous share endpoints."""

    @pytest.mark.asyncio
    async def test_metadata(self, client, alice_headers, sample_file):
        """Test public metadata needs no credentials or password."""
        share = await create_share(client, sample_file.id, alice_headers, password="secret")

        response = await client.get(f"/api/v1/share/{share['share_token']}")

        assert response.status_code == 200
        data = response.json()
        assert data["filename"] == sample_file.filename
        assert data["has_password"] is True
        assert data["owner_username"] == "alice"

    @pytest.mark.asyncio
    async def test_unknown_token(self, client):
        """Test that an unknown token is a 404."""
        response = await client.get("/api/v1/share/never-issued")

        assert response.status_code == 404
        assert response.json() == {"detail": "Share link not found", "kind": "not_found"}

    @pytest.mark.asyncio
    async def test_download(self, client, alice_headers, sample_file):
        """Test downloading a shared file anonymously."""
        share = await create_share(client, sample_file.id, alice_headers)

        response = await client.get(f"/api/v1/share/{share['share_token']}/download")

        assert response.status_code == 200
        assert response.content == b"sample content"
        assert "attachment" in response.headers["content-disposition"]

    @pytest.mark.asyncio
    async def test_download_password_query(self, client, alice_headers, sample_file):
        """Test password-protected downloads through the query string."""
        share = await create_share(client, sample_file.id, alice_headers, password="secret")
        url = f"/api/v1/share/{share['share_token']}/download"

        response = await client.get(url)
        assert response.status_code == 401
        assert response.json()["kind"] == "bad_password"
        assert "www-authenticate" not in response.headers

        response = await client.get(url, params={"password": "wrong"})
        assert response.status_code == 401

        response = await client.get(url, params={"password": "secret"})
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_download_password_body(self, client, alice_headers, sample_file):
        """Test password-protected downloads through the request body."""
        share = await create_share(client, sample_file.id, alice_headers, password="secret")
        url = f"/api/v1/share/{share['share_token']}/download"

        response = await client.post(url, json={"password": "wrong"})
        assert response.status_code == 401

        response = await client.post(url, json={"password": "secret"})
        assert response.status_code == 200
        assert response.content == b"sample content"

    @pytest.mark.asyncio
    async def test_download_limit(self, client, alice_headers, sample_file):
        """Test that a link with max_downloads=2 serves exactly two downloads."""
        share = await create_share(client, sample_file.id, alice_headers, max_downloads=2)
        url = f"/api/v1/share/{share['share_token']}/download"

        assert (await client.get(url)).status_code == 200
        assert (await client.get(url)).status_code == 200

        response = await client.get(url)
        assert response.status_code == 410
        assert response.json()["kind"] == "download_limit_reached"

        response = await client.get(f"/api/v1/share/{share['share_token']}")
        assert response.status_code == 410

    @pytest.mark.asyncio
    async def test_signed_url(self, client, alice_headers, sample_file):
        """Test minting a signed URL through a share link."""
        share = await create_share(client, sample_file.id, alice_headers, max_downloads=1)
        url = f"/api/v1/share/{share['share_token']}/url"

        response = await client.get(url, params={"expires_in": 60})
        assert response.status_code == 200
        assert response.json()["expires_in"] == 60

        response = await client.get(url)
        assert response.status_code == 410

    @pytest.mark.asyncio
    async def test_public_listing(
        self, client, alice_headers, sample_file, make_file, sample_user
    ):
        """Test that password-protected links stay out of the listing."""
        protected = await make_file(sample_user, content=b"protected")
        share = await create_share(client, sample_file.id, alice_headers)
        await create_share(client, protected.id, alice_headers, password="secret")

        response = await client.get("/api/v1/public/files")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["files"][0]["share_token"] == share["share_token"]
        assert data["files"][0]["has_password"] is False
