"""Shared fixtures for VC Dispatcher tests."""

from __future__ import annotations

from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from vc_dispatcher.exceptions import ConfigurationError
from vc_dispatcher.factory import VerifierFactory
from vc_dispatcher.main import create_app
from vc_dispatcher.registry import IssuerCatalog, IssuerRegistry
from vc_dispatcher.service import VerificationService
from vc_dispatcher.verifiers import SignatureVerifier
from vc_dispatcher.verifiers.base import (
    BaseVerifier,
    VerificationError,
    VerificationResult,
    VerifierRegistration,
    VerifierType,
)

JHARSEVA_URL = "https://jharseva.example.com/api/verify"
JHARSEVA_TOKEN = "test-bearer-token"


class DhiwayVerifier(BaseVerifier):
    """Test verifier that accepts everything."""

    async def verify(self, credential: dict[str, Any]) -> VerificationResult:
        return VerificationResult.succeeded("Credential verified successfully.")


class AcmeVerifier(BaseVerifier):
    """Test verifier with a custom title that rejects everything."""

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        super().__init__(config)
        self.set_title("Acme Trust Services")

    async def verify(self, credential: dict[str, Any]) -> VerificationResult:
        return VerificationResult.failed(
            "Credential verification failed.",
            [VerificationError(error="Rejected by Acme.", raw="REJECTED")],
        )


class BrokenVerifier(BaseVerifier):
    """Test verifier that cannot be constructed."""

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        raise ConfigurationError("BROKEN_API environment variable is not set.")


def helper_factory(config=None):
    return DhiwayVerifier(config)


TEST_REGISTRATIONS = (
    VerifierRegistration("DhiwayVerifier", VerifierType.ONLINE, DhiwayVerifier),
    VerifierRegistration("AcmeVerifier", VerifierType.ONLINE, AcmeVerifier),
    VerifierRegistration(
        "BrokenVerifier", VerifierType.ONLINE, BrokenVerifier, static_title="Broken Issuer"
    ),
    # Neither listed nor selectable: name lacks the Verifier suffix
    VerifierRegistration("Helper", VerifierType.ONLINE, helper_factory),
    VerifierRegistration(
        "SignatureVerifier", VerifierType.OFFLINE, SignatureVerifier, static_title="sunbird-rc"
    ),
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Remove issuer settings so tests don't depend on the host environment."""
    for name in (
        "JHARSEVA_VERIFICATION_API",
        "JHARSEVA_VERIFICATION_API_TOKEN",
        "JHARSEVA_EXPIRY_FIELD",
        "JHARSEVA_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def jharseva_env(monkeypatch):
    """Configure the JharSeva verifier."""
    monkeypatch.setenv("JHARSEVA_VERIFICATION_API", JHARSEVA_URL)
    monkeypatch.setenv("JHARSEVA_VERIFICATION_API_TOKEN", JHARSEVA_TOKEN)


@pytest.fixture
def registrations():
    return TEST_REGISTRATIONS


@pytest.fixture
def registry(registrations) -> IssuerRegistry:
    return IssuerRegistry(registrations)


@pytest.fixture
def factory(registrations) -> VerifierFactory:
    return VerifierFactory(registrations)


@pytest.fixture
def credential() -> dict[str, Any]:
    """A credential without an expiry field."""
    return {
        "@context": ["https://www.w3.org/ns/credentials/v2"],
        "id": "urn:uuid:test-123",
        "type": ["VerifiableCredential"],
        "issuer": "did:web:example.com",
        "credentialSubject": {"id": "did:example:holder", "name": "Test User"},
    }


@pytest.fixture
async def client(registry, factory):
    """API client backed by the test registration table."""
    app = create_app(
        catalog=IssuerCatalog(registry),
        service=VerificationService(factory),
    )
    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as async_client:
        yield async_client
