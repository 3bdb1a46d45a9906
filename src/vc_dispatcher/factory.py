"""
Verifier selection.

Resolves a verification config ({"method": ..., "issuerName": ...}) to a
fresh verifier instance.
"""

from __future__ import annotations

import logging
import re
from typing import Any, Iterable

from vc_dispatcher import config as settings
from vc_dispatcher.exceptions import (
    ConfigurationError,
    InvalidRequestError,
    UnknownVerifierError,
)
from vc_dispatcher.verifiers import DEFAULT_OFFLINE_VERIFIER, DEFAULT_REGISTRATIONS
from vc_dispatcher.verifiers.base import (
    VERIFIER_SUFFIX,
    Verifier,
    VerifierRegistration,
    VerifierType,
    issuer_id_from_name,
)

log = logging.getLogger(__name__)

ISSUER_NAME_RE = re.compile(r"^[a-zA-Z]+$")


class VerifierFactory:
    """Builds the verifier matching a verification config."""

    def __init__(
        self,
        registrations: Iterable[VerifierRegistration] | None = None,
    ) -> None:
        self.registrations = (
            tuple(registrations) if registrations is not None else DEFAULT_REGISTRATIONS
        )

    def get_verifier(self, config: dict[str, Any] | None = None) -> Verifier:
        """Return the verifier for the requested method and issuer.

        Args:
            config: Verification config; ``method`` defaults to "online".

        Returns:
            A new verifier instance built with the full config.

        Raises:
            InvalidRequestError: Missing or malformed issuer name, or unknown method.
            UnknownVerifierError: No online verifier registered for the issuer.
            ConfigurationError: The matching verifier is missing settings.
        """
        config = config or {}
        method = config.get("method")
        if method is None:
            method = VerifierType.ONLINE.value

        if method == VerifierType.ONLINE.value:
            return self._get_online_verifier(config)
        if method == VerifierType.OFFLINE.value:
            # Single offline verifier for now; issuerName is ignored
            return DEFAULT_OFFLINE_VERIFIER(config)

        raise InvalidRequestError(f"Unknown verification method: {method}")

    def find_registration(self, issuer_name: str) -> VerifierRegistration | None:
        """Find the online registration whose derived id matches the issuer name.

        Only names ending in ``Verifier`` are selectable, the same set the
        issuer catalog lists.
        """
        normalized = issuer_name.lower()
        for registration in self.registrations:
            if registration.type is not VerifierType.ONLINE:
                continue
            if not registration.name.endswith(VERIFIER_SUFFIX):
                continue
            if issuer_id_from_name(registration.name) == normalized:
                return registration
        return None

    def _get_online_verifier(self, config: dict[str, Any]) -> Verifier:
        issuer_name = config.get("issuerName")
        if not issuer_name:
            raise InvalidRequestError("issuerName is required for online verification")
        if not isinstance(issuer_name, str) or not ISSUER_NAME_RE.match(issuer_name):
            raise InvalidRequestError("Invalid verifier name format")

        try:
            registration = self.find_registration(issuer_name)
        except Exception as e:
            self._log_lookup_error(f"Error loading verifier: {e}")
            raise UnknownVerifierError(f"Unknown online verifier: {issuer_name}") from e

        if registration is None:
            self._log_lookup_error(f"No verifier registered for issuer: {issuer_name}")
            raise UnknownVerifierError(f"Unknown online verifier: {issuer_name}")

        try:
            return registration.factory(config)
        except ConfigurationError as e:
            log.error(f"Verifier {registration.name} is misconfigured: {e}")
            raise ConfigurationError(
                f"Verifier for issuer {issuer_name} is not configured"
            ) from e

    def _log_lookup_error(self, message: str) -> None:
        if not settings.is_production():
            log.error(message)


def get_verifier(config: dict[str, Any] | None = None) -> Verifier:
    """Convenience function to select a verifier from the default table.

    Args:
        config: Verification config with ``method`` and ``issuerName``.

    Returns:
        A new verifier instance.
    """
    return VerifierFactory().get_verifier(config)
