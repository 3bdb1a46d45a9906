"""
VC Dispatcher - Credential verification dispatcher.

Supports:
- Issuer catalog built from an explicit verifier registration table
- Verifier selection by method ("online" / "offline") and issuer name
- Normalised success/failure verification results
- HTTP API (FastAPI) and command-line interface
"""

from vc_dispatcher.exceptions import (
    ConfigurationError,
    DispatchError,
    InvalidRequestError,
    UnknownVerifierError,
)
from vc_dispatcher.factory import VerifierFactory, get_verifier
from vc_dispatcher.registry import (
    IssuerCatalog,
    IssuerDescriptor,
    IssuerRegistry,
)
from vc_dispatcher.service import VerificationService, verify_credential
from vc_dispatcher.verifiers import (
    VerificationError,
    VerificationResult,
    VerifierRegistration,
    VerifierType,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigurationError",
    "DispatchError",
    "InvalidRequestError",
    "IssuerCatalog",
    "IssuerDescriptor",
    "IssuerRegistry",
    "UnknownVerifierError",
    "VerificationError",
    "VerificationResult",
    "VerificationService",
    "VerifierFactory",
    "VerifierRegistration",
    "VerifierType",
    "get_verifier",
    "verify_credential",
]
