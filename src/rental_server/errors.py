"""Global exception handlers — map SDK and repository exceptions to HTTP codes.

Validation errors from the SDK subclass ``ValueError``; rather than catching
them in every route, global handlers pick the status code.  The raw message
is logged server-side; clients receive a generic description.
"""

import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from rental_questionnaire.errors import ValidationError

logger = logging.getLogger(__name__)

# Keyword patterns in ValueError messages; first match wins.
_VALUE_ERROR_PATTERNS: list[tuple[str, int]] = [
    ("already exists", 409),
    ("not found", 404),
]

_SAFE_MESSAGES: dict[int, str] = {
    404: "Resource not found",
    409: "Resource already exists",
    400: "Invalid request",
}


async def value_error_handler(request: Request, exc: ValueError) -> JSONResponse:
    """Map ``ValueError`` to 404 / 409 / 400.

    SDK :class:`ValidationError` always maps to 400 and keeps its message,
    which describes the rejected input rather than internal state.
    """
    msg = str(exc)
    if isinstance(exc, ValidationError):
        logger.info("Validation failed at %s: %s", request.url, msg)
        return JSONResponse(status_code=400, content={"detail": msg})

    status = 400
    for pattern, code in _VALUE_ERROR_PATTERNS:
        if pattern in msg.lower():
            status = code
            break

    logger.warning("ValueError [%d] at %s: %s", status, request.url, msg)
    safe_detail = _SAFE_MESSAGES.get(status, "Invalid request")
    return JSONResponse(status_code=status, content={"detail": safe_detail})


async def key_error_handler(request: Request, exc: KeyError) -> JSONResponse:
    logger.warning("KeyError at %s: %s", request.url, exc)
    return JSONResponse(status_code=404, content={"detail": "Resource not found"})


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all for unhandled exceptions — log full traceback, return 500."""
    logger.exception("Unhandled exception at %s", request.url)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )
