"""
Verifier capability and result types.

Every verifier exposes ``verify(credential)`` returning a normalised
VerificationResult, and ``get_title()`` returning a human-readable title.
Verifiers are registered explicitly through VerifierRegistration entries;
their registration name (conventionally the class name, ending in
``Verifier``) is the source of issuer ids and display names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Protocol

VERIFIER_SUFFIX = "Verifier"

_EXTENSION_RE = re.compile(r"\.py$", re.IGNORECASE)
_SUFFIX_RE = re.compile(rf"{VERIFIER_SUFFIX}$")


class VerifierType(Enum):
    """Verification method a verifier implements."""

    ONLINE = "online"
    OFFLINE = "offline"


@dataclass
class VerificationError:
    """A single translated verification error."""

    error: str
    raw: str

    def to_dict(self) -> dict[str, str]:
        return {"error": self.error, "raw": self.raw}


@dataclass
class VerificationResult:
    """Normalised outcome of a verification.

    ``errors`` is None on success and on failures that carry no detail;
    it is omitted from the serialised form in that case.
    """

    success: bool
    message: str
    errors: list[VerificationError] | None = None

    @classmethod
    def succeeded(cls, message: str) -> VerificationResult:
        return cls(success=True, message=message)

    @classmethod
    def failed(
        cls,
        message: str,
        errors: list[VerificationError] | None = None,
    ) -> VerificationResult:
        return cls(success=False, message=message, errors=errors or None)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the JSON envelope returned to callers."""
        data: dict[str, Any] = {"success": self.success, "message": self.message}
        if self.errors:
            data["errors"] = [e.to_dict() for e in self.errors]
        return data


def display_name_from_name(name: str) -> str:
    """Strip extension marker and ``Verifier`` suffix, keeping case.

    Example: "DhiwayVerifier" -> "Dhiway"
    """
    return _SUFFIX_RE.sub("", _EXTENSION_RE.sub("", name))


def issuer_id_from_name(name: str) -> str:
    """Derive the issuer id from a registration name.

    Example: "DhiwayVerifier" -> "dhiway"
    """
    return display_name_from_name(name).lower()


class Verifier(Protocol):
    """Capability every verifier implements."""

    async def verify(self, credential: dict[str, Any]) -> VerificationResult:
        ...

    def get_title(self) -> str:
        ...


class BaseVerifier:
    """Shared title handling for verifiers.

    Subclasses set ``registration_name`` when it differs from the class
    name, and override ``verify``.
    """

    registration_name: str | None = None

    def __init__(self, config: dict[str, Any] | None = None) -> None:
        self.config = config or {}
        self._title: str | None = None

    def get_title(self) -> str:
        """Return the custom title, or the name derived from the registration name."""
        if self._title:
            return self._title
        return display_name_from_name(self.registration_name or type(self).__name__)

    def set_title(self, title: str) -> None:
        self._title = title

    async def verify(self, credential: dict[str, Any]) -> VerificationResult:
        """Verify a credential.

        Returns on success:
            VerificationResult(success=True, message="Credential verified successfully.")
        On failure:
            VerificationResult(success=False, message=..., errors=[VerificationError(...)])
        """
        raise NotImplementedError("verify() must be implemented by subclass")


VerifierConstructor = Callable[[dict[str, Any] | None], Verifier]


@dataclass(frozen=True)
class VerifierRegistration:
    """Entry of the verifier registration table.

    Attributes:
        name: Registration name, conventionally ending in ``Verifier``.
        type: Verification method the verifier implements.
        factory: Builds a verifier from an optional config mapping.
        static_title: Title used when the verifier cannot be constructed
            during discovery (e.g. missing settings).
    """

    name: str
    type: VerifierType
    factory: VerifierConstructor = field(compare=False)
    static_title: str | None = None
