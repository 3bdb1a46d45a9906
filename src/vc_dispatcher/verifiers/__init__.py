"""
Verifier implementations and the registration table.

A new verifier is made available by adding a VerifierRegistration entry
to DEFAULT_REGISTRATIONS. Registration names must end in ``Verifier``;
the issuer id is the name with that suffix stripped, lowercased.
"""

from vc_dispatcher.verifiers.base import (
    BaseVerifier,
    VerificationError,
    VerificationResult,
    Verifier,
    VerifierRegistration,
    VerifierType,
)
from vc_dispatcher.verifiers.jharseva import JharSevaVerifier
from vc_dispatcher.verifiers.signature import TITLE as SIGNATURE_TITLE, SignatureVerifier

DEFAULT_REGISTRATIONS: tuple[VerifierRegistration, ...] = (
    VerifierRegistration(
        name="JharSevaVerifier",
        type=VerifierType.ONLINE,
        factory=JharSevaVerifier,
    ),
    VerifierRegistration(
        name="SignatureVerifier",
        type=VerifierType.OFFLINE,
        factory=SignatureVerifier,
        static_title=SIGNATURE_TITLE,
    ),
)

# Used for method "offline" regardless of issuer name
DEFAULT_OFFLINE_VERIFIER = SignatureVerifier

__all__ = [
    "BaseVerifier",
    "DEFAULT_OFFLINE_VERIFIER",
    "DEFAULT_REGISTRATIONS",
    "JharSevaVerifier",
    "SignatureVerifier",
    "VerificationError",
    "VerificationResult",
    "Verifier",
    "VerifierRegistration",
    "VerifierType",
]
