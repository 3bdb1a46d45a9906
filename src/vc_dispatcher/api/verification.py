"""Credential verification endpoint."""

from fastapi import APIRouter, Request

from vc_dispatcher.api.models import VerificationRequest
from vc_dispatcher.service import VerificationService

router = APIRouter(tags=["verification"])


@router.post("/verification")
async def verify(request: Request, body: VerificationRequest):
    """Verify a credential with the verifier named in ``config``.

    Returns the verifier's result envelope. Dispatch errors are turned
    into ``{"error": ...}`` responses by the application's exception
    handlers.
    """
    service: VerificationService = request.app.state.service
    result = await service.verify(body.credential, body.verification_config)
    return result.to_dict()
