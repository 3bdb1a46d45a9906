"""Issuer catalog endpoints."""

from fastapi import APIRouter, Query, Request
from fastapi.responses import JSONResponse

from vc_dispatcher.registry import IssuerCatalog

router = APIRouter(prefix="/issuers", tags=["issuers"])


def _catalog(request: Request) -> IssuerCatalog:
    return request.app.state.catalog


@router.get("")
async def list_issuers(
    request: Request,
    issuer_type: str | None = Query(
        None, alias="type", description="Filter by type: online or offline"
    ),
):
    """List available issuers, online issuers first."""
    issuers = _catalog(request).list_issuers(issuer_type)
    return {
        "success": True,
        "count": len(issuers),
        "data": [issuer.to_dict() for issuer in issuers],
    }


@router.get("/{issuer_id}")
async def get_issuer(request: Request, issuer_id: str):
    """Get a single issuer by id."""
    issuer = _catalog(request).get_issuer(issuer_id)
    if issuer is None:
        return JSONResponse(
            status_code=404,
            content={"error": f"Issuer not found: {issuer_id}"},
        )
    return {"success": True, "data": issuer.to_dict()}
