"""Per-request trace id, shared by log lines, error bodies and the response header."""

import re
import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from grow.logging_config import bind_request_context, clear_request_context

TRACE_HEADER = "X-Trace-Id"

# Incoming ids end up in logs; anything else is replaced
_VALID_TRACE_ID = re.compile(r"^[A-Za-z0-9._:\-]{8,128}$")


def new_trace_id() -> str:
    return f"trc_{uuid.uuid4().hex[:16]}"


def resolve_trace_id(header_value: str | None) -> str:
    if header_value and _VALID_TRACE_ID.match(header_value):
        return header_value
    return new_trace_id()


class TraceIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        trace_id = resolve_trace_id(request.headers.get(TRACE_HEADER))
        request.state.trace_id = trace_id

        bind_request_context(trace_id)
        try:
            response = await call_next(request)
        finally:
            clear_request_context()
        response.headers[TRACE_HEADER] = trace_id
        return response
