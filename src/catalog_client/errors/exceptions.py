"""Structured exceptions for catalog client errors."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    import httpx

    from catalog_client.errors.models import ProblemDetail


class CatalogClientError(Exception):
    """Base exception for every error raised by the client."""

    pass


class ConfigError(CatalogClientError):
    """Required configuration is missing or malformed."""

    pass


class SchemaError(CatalogClientError):
    """An action descriptor or catalog breaks its own invariants."""

    pass


class ValidationError(CatalogClientError):
    """Caller input was rejected before any request was sent.

    Attributes:
        errors: One entry per offending field, each a dict with ``field``,
            ``message`` and ``schema`` keys.
    """

    def __init__(self, message: str, errors: list[dict[str, Any]] | None = None):
        super().__init__(message)
        self.errors = errors if errors is not None else []

    @property
    def fields(self) -> list[str]:
        return [error["field"] for error in self.errors]


class NetworkError(CatalogClientError):
    """The transport could not complete the request."""

    def __init__(self, message: str, reason: BaseException | None = None):
        super().__init__(message)
        self.reason = reason


class RateLimitError(CatalogClientError):
    """429 Too Many Requests."""

    def __init__(
        self,
        message: str,
        limit_reset: int | float | None = None,
        status_code: int = 429,
        response: "httpx.Response | None" = None,
    ):
        super().__init__(message)
        self.limit_reset = limit_reset
        self.status_code = status_code
        self.response = response


class APIError(CatalogClientError):
    """Base exception for non-2xx responses other than rate limiting."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        response: "httpx.Response | None" = None,
        problem_detail: "ProblemDetail | None" = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.response = response
        self.problem_detail = problem_detail

    @property
    def status(self) -> int | None:
        return self.status_code


class ClientError(APIError):
    """4xx client errors."""

    pass


class BadRequestError(ClientError):
    """400 Bad Request."""

    pass


class UnauthorizedError(ClientError):
    """401 Unauthorized."""

    pass


class ForbiddenError(ClientError):
    """403 Forbidden."""

    pass


class NotFoundError(ClientError):
    """404 Not Found."""

    pass


class ConflictError(ClientError):
    """409 Conflict."""

    pass


class UnprocessableEntityError(ClientError):
    """422 Unprocessable Entity."""

    def __init__(self, message: str, validation_errors: list[dict] | None = None, **kwargs):
        super().__init__(message, **kwargs)
        self.validation_errors = validation_errors if validation_errors is not None else []


class ServerError(APIError):
    """5xx server errors."""

    pass
