"""Exception classes raised by the Grow core and mapped to API errors."""


class GrowError(Exception):
    """Base exception for Grow."""

    def __init__(self, code: str, message: str, details=None, status_code: int = 500):
        self.code = code
        self.message = message
        self.details = details
        self.status_code = status_code
        super().__init__(message)


class ValidationError(GrowError):
    """Bad input shape; rejected before any I/O."""

    def __init__(self, message: str, details=None):
        super().__init__("VALIDATION_ERROR", message, details, status_code=400)


class NotFoundError(GrowError):
    """Record absent, or present but soft-deleted."""

    def __init__(self, resource: str, resource_id: str):
        super().__init__(
            "NOT_FOUND",
            f"{resource} '{resource_id}' not found",
            status_code=404,
        )


class AuthenticationError(GrowError):
    """Authentication required or token invalid."""

    def __init__(self, message: str = "Authentication required"):
        super().__init__("AUTHENTICATION_ERROR", message, status_code=401)


class ConflictError(GrowError):
    """Business rule violation (capacity, duplicate join, closed project...)."""

    def __init__(self, message: str, code: str = "CONFLICT", details=None):
        super().__init__(code, message, details, status_code=409)


class ConcurrencyConflict(Exception):
    """Conditional write lost against a concurrent writer (stale etag).

    Raised by the repository layer; the workflow re-reads and retries, and only
    converts it into a ConflictError when retries run out.
    """


class SearchServiceError(GrowError):
    """Search backend failed on the primary read path."""

    def __init__(self, message: str, details=None):
        super().__init__("SEARCH_SERVICE_ERROR", message, details, status_code=502)


class PaginationLimitError(GrowError):
    """Continuation chain exceeded the configured page bound."""

    def __init__(self, max_pages: int):
        super().__init__(
            "PAGINATION_LIMIT",
            f"Search results exceeded {max_pages} continuation pages",
            {"max_pages": max_pages},
            status_code=502,
        )


class SearchTimeoutError(GrowError):
    """Discovery request ran past its deadline; no partial result is returned."""

    def __init__(self, timeout: float):
        super().__init__(
            "SEARCH_TIMEOUT",
            f"Search did not complete within {timeout:g}s",
            status_code=504,
        )
