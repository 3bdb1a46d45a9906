"""Exceptions raised while selecting a verifier.

A failed verification is not an exception: it is returned as a
VerificationResult with ``success=False``. These types cover the cases
where no verifier could be run at all.
"""


class DispatchError(Exception):
    """Base class for dispatcher errors."""


class ConfigurationError(DispatchError):
    """Raised when a verifier is missing a required setting."""


class InvalidRequestError(DispatchError):
    """Raised when a verification request is malformed.

    Covers a missing credential, a missing or badly formatted issuer name,
    and an unknown verification method.
    """


class UnknownVerifierError(DispatchError):
    """Raised when no registered verifier matches the requested issuer."""
