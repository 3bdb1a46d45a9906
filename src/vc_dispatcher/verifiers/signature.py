"""Offline signature verifier.

Placeholder until signature verification is implemented: every credential
is reported as failing verification.
"""

from __future__ import annotations

from typing import Any

from vc_dispatcher.verifiers.base import BaseVerifier, VerificationResult

TITLE = "sunbird-rc"


class SignatureVerifier(BaseVerifier):
    """Verifies credentials offline by their embedded signature."""

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        super().__init__(config)
        self.set_title(TITLE)

    async def verify(self, credential: dict[str, Any]) -> VerificationResult:
        # TODO: check the proof against the issuer key once key resolution is available
        is_valid = False

        if is_valid:
            return VerificationResult.succeeded("Credential verified using signature.")
        return VerificationResult.failed("Credential verification using signature failed.")
