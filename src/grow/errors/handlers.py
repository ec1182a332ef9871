"""Convert GrowError exceptions into ErrorResponse bodies."""

import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from grow.errors.exceptions import ConflictError, GrowError
from grow.models.common import ErrorResponse

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    """Register all custom exception handlers on the FastAPI app."""

    @app.exception_handler(GrowError)
    async def grow_error_handler(request: Request, exc: GrowError):
        trace_id = getattr(request.state, "trace_id", "unknown")
        if isinstance(exc, ConflictError):
            user = getattr(request.state, "user", {}) or {}
            logger.warning(
                "Rejected %s %s: %s (%s) for %s",
                request.method,
                request.url.path,
                exc.message,
                exc.code,
                user.get("sub", "anonymous"),
            )
        elif exc.status_code >= 500:
            logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.code)

        body = ErrorResponse.from_error(exc, trace_id)
        return JSONResponse(
            status_code=exc.status_code,
            content=body.model_dump(mode="json", exclude_none=True),
        )
