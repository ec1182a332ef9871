"""Response envelopes shared by every route: errors and health."""

from datetime import datetime, timezone
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from grow.errors.exceptions import GrowError


class ErrorDetail(BaseModel):
    model_config = ConfigDict(extra="forbid")

    code: str
    message: str
    details: dict[str, Any] | list[Any] | str | None = None
    trace_id: str
    timestamp: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))


class ErrorResponse(BaseModel):
    """Body of every non-2xx response.

    ``error.code`` is machine-readable: ``VALIDATION_ERROR``, ``NOT_FOUND``,
    or a conflict reason such as ``CAPACITY_REACHED``.
    """

    model_config = ConfigDict(extra="forbid")

    error: ErrorDetail

    @classmethod
    def from_error(cls, exc: GrowError, trace_id: str) -> "ErrorResponse":
        return cls(
            error=ErrorDetail(
                code=exc.code,
                message=exc.message,
                details=exc.details,
                trace_id=trace_id,
            )
        )


class HealthStatus(BaseModel):
    status: Literal["healthy"] = "healthy"
    service: str
    version: str


class ReadinessReport(BaseModel):
    status: Literal["ready", "not_ready"]
    checks: dict[str, str]
