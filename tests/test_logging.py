"""Request logging context tests."""

import structlog

from grow.logging_config import bind_caller, bind_request_context, clear_request_context


def test_request_context_binding():
    clear_request_context()
    bind_request_context("trc_abc")
    bind_caller("user-1")
    assert structlog.contextvars.get_contextvars() == {"trace_id": "trc_abc", "user_id": "user-1"}

    clear_request_context()
    assert structlog.contextvars.get_contextvars() == {}
