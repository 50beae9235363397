"""Centralized exception handlers for the FastAPI app.

Register with register_exception_handlers(app). Maps domain and framework
exceptions to HTTP responses. Requests under /api get JSON; server-rendered
pages get a redirect to the login page (401) or a plain-text 403.
"""

import logging
import traceback
from typing import Any

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse, RedirectResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import get_settings
from app.domain.exceptions import PortalException

logger = logging.getLogger(__name__)

API_PREFIX = "/api"

# Map domain error_code to HTTP status when applicable
_ERROR_CODE_STATUS: dict[str, int] = {
    "VALIDATION_ERROR": 400,
    "CONFLICT": 400,
    "PASSWORD_NOT_SET": 400,
    "INVALID_TOKEN": 400,
    "TOKEN_ALREADY_USED": 400,
    "AUTHENTICATION_ERROR": 401,
    "PERMISSION_DENIED": 403,
    "RESOURCE_NOT_FOUND": 404,
    "OWNERSHIP_CHECK_ERROR": 500,
    "SERVICE_UNAVAILABLE": 503,
}


def is_api_request(request: Request) -> bool:
    """True for JSON API paths (/api and below)."""
    path = request.url.path
    return path == API_PREFIX or path.startswith(API_PREFIX + "/")


def status_for(exc: PortalException) -> int:
    """HTTP status for a domain exception (400 when the code is unmapped)."""
    return _ERROR_CODE_STATUS.get(exc.error_code, 400)


def _portal_exception_handler(request: Request, exc: PortalException) -> Response:
    """Return JSON from PortalException.to_dict(); pages redirect on 401 and get text on 403."""
    status = status_for(exc)
    if not is_api_request(request):
        if status == 401:
            return RedirectResponse(get_settings().login_page_path, status_code=303)
        if status == 403:
            return PlainTextResponse("Access denied", status_code=403)
    if status >= 500:
        logger.error("%s on %s: %s", exc.error_code, request.url.path, exc.message)
    return JSONResponse(status_code=status, content=exc.to_dict())


def _validation_exception_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Return 422 with validation error details."""
    return JSONResponse(
        status_code=422,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Request validation failed",
            "details": exc.errors(),
        },
    )


def _http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    """Return JSON for Starlette HTTP exceptions (status + detail)."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": "HTTP_ERROR", "message": exc.detail},
        headers=getattr(exc, "headers", None),
    )


def _generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return 500; message and traceback only outside production."""
    logger.exception("Unhandled exception: %s", exc)
    settings = get_settings()
    content: dict[str, Any] = {"error": "INTERNAL_ERROR"}
    if settings.is_production:
        content["message"] = "Internal server error"
    else:
        content["message"] = str(exc) or exc.__class__.__name__
        content["traceback"] = traceback.format_exception(exc)
    return JSONResponse(status_code=500, content=content)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all exception handlers on the FastAPI app.

    Call once after creating the app. Handlers: PortalException (and
    subclasses), RequestValidationError, StarletteHTTPException, generic Exception.
    """
    app.add_exception_handler(PortalException, _portal_exception_handler)
    app.add_exception_handler(RequestValidationError, _validation_exception_handler)
    app.add_exception_handler(StarletteHTTPException, _http_exception_handler)
    app.add_exception_handler(Exception, _generic_exception_handler)
