"""Credential verification dispatcher FastAPI application.

Exposes the issuer catalog, credential verification and a health check.
Run with ``vc-dispatch serve`` or ``uvicorn vc_dispatcher.main:app``.
"""

from __future__ import annotations

import logging
import time
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from vc_dispatcher import __version__, config
from vc_dispatcher.api import health, issuers, verification
from vc_dispatcher.exceptions import (
    ConfigurationError,
    InvalidRequestError,
    UnknownVerifierError,
)
from vc_dispatcher.factory import VerifierFactory
from vc_dispatcher.logging_config import configure_logging
from vc_dispatcher.registry import IssuerCatalog, IssuerRegistry
from vc_dispatcher.service import VerificationService

configure_logging()
log = logging.getLogger("vc-dispatcher")


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def create_app(
    catalog: IssuerCatalog | None = None,
    service: VerificationService | None = None,
) -> FastAPI:
    """Build the dispatcher application.

    Args:
        catalog: Issuer catalog. Built from the default registrations if not provided.
        service: Verification service. Built from the default registrations if not provided.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Build the issuer catalog once at startup."""
        log.info("Starting credential verification dispatcher...")
        if app.state.catalog.cache:
            app.state.catalog.refresh()
        yield
        log.info("Credential verification dispatcher stopped")

    app = FastAPI(
        title="VC Dispatcher",
        version=__version__,
        description="Credential verification dispatcher",
        lifespan=lifespan,
    )
    app.state.catalog = catalog or IssuerCatalog(
        IssuerRegistry(), cache=config.VC_DISPATCHER_CACHE_CATALOG
    )
    app.state.service = service or VerificationService(VerifierFactory())

    # -------------------------------------------------------------------------
    # Error Handlers
    # -------------------------------------------------------------------------

    @app.exception_handler(InvalidRequestError)
    async def invalid_request_handler(request: Request, exc: InvalidRequestError):
        return _error_response(400, str(exc))

    @app.exception_handler(UnknownVerifierError)
    async def unknown_verifier_handler(request: Request, exc: UnknownVerifierError):
        return _error_response(404, str(exc))

    @app.exception_handler(ConfigurationError)
    async def configuration_error_handler(request: Request, exc: ConfigurationError):
        return _error_response(503, str(exc))

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        detail = errors[0].get("msg") if errors else "malformed body"
        return _error_response(400, f"Invalid request: {detail}")

    # -------------------------------------------------------------------------
    # Request Logging Middleware
    # -------------------------------------------------------------------------

    @app.middleware("http")
    async def request_logging(request: Request, call_next):
        """Log all requests with timing."""
        start = time.time()
        response = await call_next(request)
        duration_ms = int((time.time() - start) * 1000)

        log.info(
            f"request_complete status={response.status_code} duration_ms={duration_ms}",
            extra={
                "route": request.url.path,
                "method": request.method,
                "status": response.status_code,
            },
        )
        return response

    app.include_router(health.router)
    app.include_router(issuers.router)
    app.include_router(verification.router)

    return app


app = create_app()
