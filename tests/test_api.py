"""Tests for the dispatcher HTTP API."""

import pytest
import respx
from httpx import ASGITransport, AsyncClient, Response

from vc_dispatcher.main import create_app

from conftest import JHARSEVA_URL


class TestHealth:
    """Tests for the health endpoint."""

    @pytest.mark.asyncio
    async def test_health(self, client: AsyncClient):
        """Test health check returns ok."""
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json() == {"status": "ok"}


class TestIssuers:
    """Tests for the issuer catalog endpoints."""

    @pytest.mark.asyncio
    async def test_list_all(self, client: AsyncClient):
        """Test listing returns online then offline issuers."""
        response = await client.get("/issuers")
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["count"] == 4
        assert [i["id"] for i in data["data"]] == ["dhiway", "acme", "broken", "sunbird-rc"]
        assert [i["type"] for i in data["data"]] == ["online", "online", "online", "offline"]

    @pytest.mark.asyncio
    async def test_filter_online(self, client: AsyncClient):
        """Test that type=online returns only online issuers."""
        response = await client.get("/issuers", params={"type": "online"})
        data = response.json()
        assert data["count"] == 3
        assert all(i["type"] == "online" for i in data["data"])

    @pytest.mark.asyncio
    async def test_filter_offline(self, client: AsyncClient):
        """Test that type=offline returns only offline issuers."""
        response = await client.get("/issuers", params={"type": "offline"})
        data = response.json()
        assert data["count"] == 1
        assert data["data"][0] == {
            "id": "sunbird-rc",
            "name": "sunbird-rc",
            "title": "sunbird-rc",
            "type": "offline",
            "description": "sunbird-rc credential verification",
        }

    @pytest.mark.asyncio
    async def test_get_issuer(self, client: AsyncClient):
        """Test fetching a single issuer."""
        response = await client.get("/issuers/acme")
        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Acme Trust Services"

    @pytest.mark.asyncio
    async def test_get_issuer_not_found(self, client: AsyncClient):
        """Test fetching an unknown issuer."""
        response = await client.get("/issuers/nobody")
        assert response.status_code == 404
        assert response.json() == {"error": "Issuer not found: nobody"}


class TestVerification:
    """Tests for POST /verification."""

    @pytest.mark.asyncio
    async def test_online_success(self, client: AsyncClient, credential):
        """Test a successful online verification."""
        response = await client.post(
            "/verification",
            json={"credential": credential, "config": {"method": "online", "issuerName": "Dhiway"}},
        )
        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "message": "Credential verified successfully.",
        }

    @pytest.mark.asyncio
    async def test_online_failure(self, client: AsyncClient, credential):
        """Test that a failed verification is still a 200 with errors."""
        response = await client.post(
            "/verification",
            json={"credential": credential, "config": {"method": "online", "issuerName": "acme"}},
        )
        assert response.status_code == 200
        data = response.json()
        assert data["success"] is False
        assert data["errors"] == [{"error": "Rejected by Acme.", "raw": "REJECTED"}]

    @pytest.mark.asyncio
    async def test_offline(self, client: AsyncClient, credential):
        """Test offline verification."""
        response = await client.post(
            "/verification",
            json={"credential": credential, "config": {"method": "offline"}},
        )
        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "message": "Credential verification using signature failed.",
        }

    @pytest.mark.asyncio
    async def test_missing_credential(self, client: AsyncClient):
        """Test that a missing credential is a client error."""
        response = await client.post(
            "/verification",
            json={"config": {"method": "offline"}},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "credential is required"}

    @pytest.mark.asyncio
    async def test_missing_issuer_name(self, client: AsyncClient, credential):
        """Test that online verification without issuer is a client error."""
        response = await client.post(
            "/verification",
            json={"credential": credential, "config": {"method": "online"}},
        )
        assert response.status_code == 400
        assert "issuerName is required" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_unknown_method(self, client: AsyncClient, credential):
        """Test that an unknown method is a client error."""
        response = await client.post(
            "/verification",
            json={"credential": credential, "config": {"method": "telepathy"}},
        )
        assert response.status_code == 400
        assert response.json() == {"error": "Unknown verification method: telepathy"}

    @pytest.mark.asyncio
    async def test_unknown_issuer(self, client: AsyncClient, credential):
        """Test that an unknown issuer is distinguished from a bad request."""
        response = await client.post(
            "/verification",
            json={"credential": credential, "config": {"method": "online", "issuerName": "doesnotexist"}},
        )
        assert response.status_code == 404
        assert response.json() == {"error": "Unknown online verifier: doesnotexist"}

    @pytest.mark.asyncio
    async def test_unconfigured_issuer(self, client: AsyncClient, credential):
        """Test that a misconfigured issuer is a service error."""
        response = await client.post(
            "/verification",
            json={"credential": credential, "config": {"method": "online", "issuerName": "broken"}},
        )
        assert response.status_code == 503
        assert "not configured" in response.json()["error"]

    @pytest.mark.asyncio
    async def test_malformed_body(self, client: AsyncClient):
        """Test that a non-JSON body gets an error envelope."""
        response = await client.post(
            "/verification",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )
        assert response.status_code == 400
        assert "error" in response.json()


class TestDefaultApp:
    """Tests against the application built from the default registrations."""

    @pytest.fixture
    async def default_client(self, jharseva_env):
        app = create_app()
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as async_client:
            yield async_client

    @pytest.mark.asyncio
    async def test_issuers(self, default_client: AsyncClient):
        """Test the built-in issuer catalog."""
        response = await default_client.get("/issuers")
        assert [i["id"] for i in response.json()["data"]] == ["jharseva", "sunbird-rc"]

    @respx.mock
    @pytest.mark.asyncio
    async def test_jharseva_verification(self, default_client: AsyncClient, credential):
        """Test end-to-end verification through the JharSeva API."""
        respx.post(JHARSEVA_URL).mock(
            return_value=Response(200, json={"error": [{"message": "Invalid credential"}]})
        )

        response = await default_client.post(
            "/verification",
            json={"credential": credential, "config": {"method": "online", "issuerName": "jharseva"}},
        )

        assert response.status_code == 200
        assert response.json() == {
            "success": False,
            "message": "Credential verification failed.",
            "errors": [
                {
                    "error": "The credential format is invalid or incomplete.",
                    "raw": "Invalid credential",
                }
            ],
        }
