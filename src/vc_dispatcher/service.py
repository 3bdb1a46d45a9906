"""
Verification dispatch.

Validates a verification request, selects the verifier and returns its
result unchanged.
"""

from __future__ import annotations

import logging
from typing import Any

from vc_dispatcher.exceptions import InvalidRequestError
from vc_dispatcher.factory import VerifierFactory
from vc_dispatcher.verifiers.base import VerificationResult

log = logging.getLogger(__name__)


class VerificationService:
    """Entry point for credential verification requests."""

    def __init__(self, factory: VerifierFactory | None = None) -> None:
        self.factory = factory or VerifierFactory()

    async def verify(
        self,
        credential: dict[str, Any] | None,
        config: dict[str, Any] | None = None,
    ) -> VerificationResult:
        """Verify a credential with the verifier named by ``config``.

        Args:
            credential: The credential document.
            config: Verification config; missing means online with no issuer.

        Returns:
            The verifier's VerificationResult.

        Raises:
            InvalidRequestError: If the credential is missing or empty, or the
                config is malformed.
            UnknownVerifierError: If no verifier matches the issuer.
            ConfigurationError: If the matching verifier is missing settings.
        """
        if not credential:
            raise InvalidRequestError("credential is required")
        if not isinstance(credential, dict):
            raise InvalidRequestError("credential must be a JSON object")
        if config is not None and not isinstance(config, dict):
            raise InvalidRequestError("config must be a JSON object")

        verifier = self.factory.get_verifier(config or {})
        result = await verifier.verify(credential)

        log.info(
            f"verification_complete verifier={type(verifier).__name__} "
            f"success={result.success}"
        )
        return result


async def verify_credential(
    credential: dict[str, Any] | None,
    config: dict[str, Any] | None = None,
) -> VerificationResult:
    """Convenience function to verify a credential with the default verifiers.

    Args:
        credential: The credential document.
        config: Verification config with ``method`` and ``issuerName``.

    Returns:
        VerificationResult from the selected verifier.
    """
    return await VerificationService().verify(credential, config)
