"""
JharSeva online verifier.

Checks credentials against the JharSeva verification API.

Environment:
- JHARSEVA_VERIFICATION_API: API endpoint URL (required)
- JHARSEVA_VERIFICATION_API_TOKEN: Bearer token (required)
- JHARSEVA_EXPIRY_FIELD: Credential field holding the expiry date
  (default "validUntil")
- JHARSEVA_TIMEOUT: Request timeout in seconds
  (default VC_DISPATCHER_HTTP_TIMEOUT)
"""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Any

import httpx

from vc_dispatcher.config import VC_DISPATCHER_HTTP_TIMEOUT
from vc_dispatcher.exceptions import ConfigurationError
from vc_dispatcher.verifiers.base import (
    BaseVerifier,
    VerificationError,
    VerificationResult,
)

log = logging.getLogger(__name__)

DEFAULT_EXPIRY_FIELD = "validUntil"

UNKNOWN_ERROR = "An unknown error occurred during verification."

# Technical API messages mapped to user-facing descriptions
ERROR_TRANSLATIONS: dict[str, str] = {
    "Invalid credential": "The credential format is invalid or incomplete.",
    "Verification failed": (
        "The credential could not be verified. "
        "Please ensure it is valid and not expired."
    ),
    "Service unavailable": (
        "The JharSeva verification service is temporarily unavailable. "
        "Please try again later."
    ),
    "Invalid signature": "The credential's signature is invalid or has been tampered with.",
    "Expired credential": "The credential has expired and is no longer valid.",
}


def parse_expiry(value: Any) -> datetime:
    """Parse an expiry value into an aware datetime.

    Accepts ISO-8601 strings (a trailing "Z" is read as UTC) and
    epoch timestamps in milliseconds. Naive values are taken as UTC.

    Raises:
        ValueError: If the value is not a recognisable date.
    """
    if isinstance(value, bool):
        raise ValueError(f"Not a date: {value!r}")

    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
        except (OverflowError, OSError) as e:
            raise ValueError(f"Timestamp out of range: {value!r}") from e

    if not isinstance(value, str):
        raise ValueError(f"Not a date: {value!r}")

    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class JharSevaVerifier(BaseVerifier):
    """Online verifier for JharSeva credentials."""

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        super().__init__(config)
        self.api_endpoint = os.getenv("JHARSEVA_VERIFICATION_API")
        self.api_token = os.getenv("JHARSEVA_VERIFICATION_API_TOKEN")
        self.expiry_field = os.getenv("JHARSEVA_EXPIRY_FIELD") or DEFAULT_EXPIRY_FIELD

        if not self.api_endpoint:
            raise ConfigurationError(
                "JHARSEVA_VERIFICATION_API environment variable is not set."
            )
        if not self.api_token:
            raise ConfigurationError(
                "JHARSEVA_VERIFICATION_API_TOKEN environment variable is not set."
            )

        try:
            url = httpx.URL(self.api_endpoint)
        except httpx.InvalidURL as e:
            raise ConfigurationError(
                f"Invalid JHARSEVA_VERIFICATION_API: {self.api_endpoint}"
            ) from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigurationError(
                f"Invalid JHARSEVA_VERIFICATION_API: {self.api_endpoint}"
            )

        timeout = os.getenv("JHARSEVA_TIMEOUT")
        try:
            self.timeout = float(timeout) if timeout else VC_DISPATCHER_HTTP_TIMEOUT
        except ValueError as e:
            raise ConfigurationError(f"Invalid JHARSEVA_TIMEOUT: {timeout}") from e

    def check_expiry(self, credential: Any) -> str | None:
        """Check whether the credential has expired.

        Args:
            credential: The credential to check.

        Returns:
            An error message, or None if the credential is not expired
            or carries no expiry field.
        """
        if not credential or not isinstance(credential, dict):
            return "Invalid credential structure: missing credential data"

        valid_until = credential.get(self.expiry_field)
        if not valid_until:
            return None

        try:
            expiry_date = parse_expiry(valid_until)
        except ValueError:
            return "Invalid expiry date format"

        if datetime.now(timezone.utc) > expiry_date:
            return "The credential has expired and is no longer valid."

        return None

    def translate_error(self, entry: Any) -> VerificationError:
        """Translate one API error entry into a VerificationError."""
        message = entry.get("message") if isinstance(entry, dict) else entry
        if not isinstance(message, str):
            message = None

        return VerificationError(
            error=ERROR_TRANSLATIONS.get(message, UNKNOWN_ERROR) if message else UNKNOWN_ERROR,
            raw=message or "An unknown error occurred",
        )

    def translate_response(self, data: Any) -> VerificationResult:
        """Translate the API response body to a VerificationResult.

        The body's ``error`` field may hold a single entry or a list of
        entries; each is passed through the error dictionary while its
        original message is kept as ``raw``.
        """
        error = data.get("error") if isinstance(data, dict) else None

        if not error:
            entries: list[Any] = []
        elif isinstance(error, list):
            entries = error
        else:
            entries = [error]

        errors = [self.translate_error(entry) for entry in entries]
        if errors:
            return VerificationResult.failed("Credential verification failed.", errors)

        return VerificationResult.succeeded("Credential verified successfully.")

    async def verify(self, credential: dict[str, Any]) -> VerificationResult:
        """Verify a credential using the JharSeva verification API.

        Performs:
        1. Local expiry check (no network call if it fails)
        2. Authenticated POST of the credential to the API
        3. Translation of the API response

        Args:
            credential: The credential to verify.

        Returns:
            VerificationResult; transport failures are reported as a
            failed result rather than raised.
        """
        expiry_error = self.check_expiry(credential)
        if expiry_error:
            return VerificationResult.failed(
                "Credential verification failed.",
                [
                    VerificationError(
                        error=expiry_error,
                        raw="Credential expiration check failed",
                    )
                ],
            )

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    self.api_endpoint,
                    json=credential,
                    headers={
                        "Authorization": f"Bearer {self.api_token}",
                        "Content-Type": "application/json",
                    },
                )
                response.raise_for_status()
                data = response.json()

        except (httpx.HTTPError, httpx.InvalidURL) as e:
            log.warning(f"JharSeva verification request failed: {e!r}")
            return self._api_error(str(e) or type(e).__name__)
        except ValueError as e:
            log.warning(f"JharSeva returned invalid JSON: {e}")
            return self._api_error(f"Invalid JSON in verification response: {e}")

        return self.translate_response(data)

    def _api_error(self, message: str) -> VerificationResult:
        return VerificationResult.failed(
            "Verification API error",
            [VerificationError(error=message, raw=message)],
        )
