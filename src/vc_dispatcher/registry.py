"""
Issuer registry.

Builds the issuer catalog from the verifier registration table. Each
registered verifier is instantiated to read its title; a verifier that
cannot be constructed (e.g. missing settings) falls back to its static
title so one misconfigured issuer never hides the others.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Iterable

from vc_dispatcher.verifiers import DEFAULT_REGISTRATIONS
from vc_dispatcher.verifiers.base import (
    VERIFIER_SUFFIX,
    VerifierRegistration,
    VerifierType,
    display_name_from_name,
    issuer_id_from_name,
)

log = logging.getLogger(__name__)

__all__ = [
    "IssuerCatalog",
    "IssuerDescriptor",
    "IssuerRegistry",
    "display_name_from_name",
    "issuer_id_from_name",
]


@dataclass
class IssuerDescriptor:
    """Catalog entry describing one verifier."""

    id: str
    name: str
    title: str
    type: VerifierType
    description: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "title": self.title,
            "type": self.type.value,
            "description": self.description,
        }


def _parse_type(verifier_type: str | VerifierType | None) -> VerifierType | None:
    """Map a type filter to a VerifierType; anything unknown means all types."""
    if isinstance(verifier_type, VerifierType):
        return verifier_type
    try:
        return VerifierType(verifier_type)
    except ValueError:
        return None


class IssuerRegistry:
    """Discovers issuers from a verifier registration table."""

    def __init__(
        self,
        registrations: Iterable[VerifierRegistration] | None = None,
    ) -> None:
        """Initialize the registry.

        Args:
            registrations: Registration table. DEFAULT_REGISTRATIONS if not provided.
        """
        self.registrations = (
            tuple(registrations) if registrations is not None else DEFAULT_REGISTRATIONS
        )

    def discover(self, verifier_type: VerifierType) -> list[IssuerDescriptor]:
        """Discover all issuers of one type, in registration order.

        Args:
            verifier_type: Online or offline.

        Returns:
            Issuer descriptors (empty if the table cannot be enumerated).
        """
        try:
            registrations = [
                r
                for r in self.registrations
                if r.type is verifier_type and r.name.endswith(VERIFIER_SUFFIX)
            ]
        except Exception as e:
            log.error(f"Error discovering {verifier_type.value} verifiers: {e}")
            return []

        return [self._describe(r) for r in registrations]

    def _resolve_title(self, registration: VerifierRegistration) -> str:
        """Instantiate the verifier to read its title, falling back to the static title."""
        try:
            return registration.factory(None).get_title()
        except Exception as e:
            log.warning(
                f"Could not instantiate verifier {registration.name}, "
                f"using static title: {e}"
            )
            return registration.static_title or display_name_from_name(registration.name)

    def _describe(self, registration: VerifierRegistration) -> IssuerDescriptor:
        # A custom title becomes the display name; otherwise both are the
        # name derived from the registration name.
        title = self._resolve_title(registration)
        name = title

        if registration.type is VerifierType.OFFLINE:
            # Offline ids follow the resolved name, online ids the registration name
            issuer_id = name.lower()
        else:
            issuer_id = issuer_id_from_name(registration.name)

        return IssuerDescriptor(
            id=issuer_id,
            name=name,
            title=title,
            type=registration.type,
            description=f"{title} credential verification",
        )

    def list_issuers(
        self, verifier_type: str | VerifierType | None = None
    ) -> list[IssuerDescriptor]:
        """List issuers of one type, or online then offline issuers.

        Args:
            verifier_type: "online", "offline", or anything else for all.
        """
        parsed = _parse_type(verifier_type)
        if parsed is not None:
            return self.discover(parsed)
        return self.discover(VerifierType.ONLINE) + self.discover(VerifierType.OFFLINE)

    def get_issuer(self, issuer_id: str) -> IssuerDescriptor | None:
        """Get an issuer by id."""
        for issuer in self.list_issuers():
            if issuer.id == issuer_id:
                return issuer
        return None


class IssuerCatalog:
    """Issuer listing served from a discovery snapshot.

    With ``cache`` disabled every call re-runs discovery.
    """

    def __init__(
        self,
        registry: IssuerRegistry | None = None,
        cache: bool = True,
    ) -> None:
        self.registry = registry or IssuerRegistry()
        self.cache = cache
        self._issuers: list[IssuerDescriptor] | None = None

    def refresh(self) -> list[IssuerDescriptor]:
        """Re-run discovery and replace the snapshot."""
        self._issuers = self.registry.list_issuers()
        log.info(f"Issuer catalog built with {len(self._issuers)} issuers")
        return self._issuers

    def _all(self) -> list[IssuerDescriptor]:
        if not self.cache:
            return self.registry.list_issuers()
        if self._issuers is None:
            return self.refresh()
        return self._issuers

    def list_issuers(
        self, verifier_type: str | VerifierType | None = None
    ) -> list[IssuerDescriptor]:
        """List issuers of one type, or all issuers (online first)."""
        issuers = self._all()
        parsed = _parse_type(verifier_type)
        if parsed is None:
            return list(issuers)
        return [i for i in issuers if i.type is parsed]

    def get_issuer(self, issuer_id: str) -> IssuerDescriptor | None:
        """Get an issuer by id."""
        for issuer in self._all():
            if issuer.id == issuer_id:
                return issuer
        return None
