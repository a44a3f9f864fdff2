"""
API-level errors and the handlers that render every error as
{"error", "message", "details"?}.
"""

import logging
from typing import Any, Dict, Optional

from fastapi import HTTPException, Request
from fastapi.responses import JSONResponse

from tvcatalog.errors import CatalogError

logger = logging.getLogger("api.errors")


class APIError(HTTPException):
    """Error raised by the HTTP layer itself (not by the catalog)."""

    def __init__(
        self,
        status_code: int,
        error: str,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        headers: Optional[Dict[str, str]] = None,
    ):
        self.error = error
        self.message = message
        self.details = details
        super().__init__(status_code=status_code, detail=message, headers=headers)


class UnauthorizedError(APIError):
    """Missing or wrong x-api-token."""

    def __init__(self, message: str = "Missing or invalid API token"):
        super().__init__(status_code=401, error="unauthorized", message=message)


def _error_body(error: str, message: str, details: Optional[Dict[str, Any]]) -> dict:
    content = {
        "error": error,
        "message": message,
    }
    if details:
        content["details"] = details
    return content


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    """Handle APIError exceptions and return structured JSON response."""
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(exc.error, exc.message, exc.details),
        headers=exc.headers,
    )


async def catalog_error_handler(request: Request, exc: CatalogError) -> JSONResponse:
    """Map domain errors to their HTTP status."""
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle unexpected exceptions."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    return JSONResponse(
        status_code=500,
        content=_error_body("internal_error", "An unexpected error occurred", None),
    )
