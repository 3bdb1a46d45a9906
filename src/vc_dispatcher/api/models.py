"""Request models for the dispatcher API."""

from typing import Any

from pydantic import BaseModel, Field


class VerificationRequest(BaseModel):
    """Body of POST /verification.

    Both fields are typed loosely; their shape is checked by the
    verification service so that malformed requests get a single
    ``{"error": ...}`` response format.
    """

    credential: Any | None = None
    verification_config: Any | None = Field(default=None, alias="config")
