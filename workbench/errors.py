from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import structlog

logger = structlog.get_logger(__name__)

INVALID_INPUT = "Invalid input."
INTERNAL_ERROR = "Internal error."


async def _validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info(
        "request.invalid",
        path=request.url.path,
        errors=len(exc.errors()),
    )
    return JSONResponse({"error": INVALID_INPUT}, status_code=400)


async def _unhandled_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("request.failed", path=request.url.path)
    return JSONResponse({"error": INTERNAL_ERROR}, status_code=500)


def install_error_handlers(app: FastAPI) -> FastAPI:
    """Normalize 422 validation errors to 400 and unexpected failures to 500.

    Tool apps are mounted as separate ASGI apps, so each one installs the
    handlers itself.
    """
    app.add_exception_handler(RequestValidationError, _validation_handler)
    app.add_exception_handler(Exception, _unhandled_handler)
    return app
