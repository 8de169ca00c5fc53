"""Exception handlers mapping engine errors onto HTTP responses.

Tenant binding violations redirect to the caller's real tenant, invalid or
expired sessions redirect to login, and every other engine error becomes a
JSON error body with its mapped status code.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse, RedirectResponse

from ...config.settings import get_settings
from ...core.exceptions import (
    AuthenticationError,
    TenantBindingMismatch,
    TenantGateError,
    create_error_response,
    get_http_status_code,
)

logger = logging.getLogger(__name__)


def _login_path(request: Request) -> str:
    gate = getattr(request.app.state, "tenant_gate", None)
    settings = gate.settings if gate is not None else get_settings()
    return settings.login_path


def register_exception_handlers(app: FastAPI) -> None:
    """Register the engine's exception handlers on ``app``."""

    @app.exception_handler(TenantBindingMismatch)
    async def tenant_binding_handler(request: Request, exc: TenantBindingMismatch):
        """Send the caller to the tenant their session is bound to."""
        return RedirectResponse(exc.redirect_path, status_code=status.HTTP_302_FOUND)

    @app.exception_handler(AuthenticationError)
    async def authentication_handler(request: Request, exc: AuthenticationError):
        """Send callers without a live session to login."""
        return RedirectResponse(_login_path(request), status_code=status.HTTP_302_FOUND)

    @app.exception_handler(TenantGateError)
    async def tenant_gate_error_handler(request: Request, exc: TenantGateError):
        status_code = get_http_status_code(exc)
        if status_code >= 500:
            logger.error(f"{exc.__class__.__name__} while handling {request.url.path}: {exc.message}")
        return JSONResponse(status_code=status_code, content=create_error_response(exc))
