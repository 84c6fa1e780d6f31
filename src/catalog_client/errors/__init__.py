"""Error taxonomy and RFC 7807 support for the catalog client."""

from catalog_client.errors.exceptions import (
    APIError,
    BadRequestError,
    CatalogClientError,
    ClientError,
    ConfigError,
    ConflictError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    RateLimitError,
    SchemaError,
    ServerError,
    UnauthorizedError,
    UnprocessableEntityError,
    ValidationError,
)
from catalog_client.errors.handler import detect_null_fields, raise_for_outcome
from catalog_client.errors.models import ProblemDetail

__all__ = [
    "APIError",
    "BadRequestError",
    "CatalogClientError",
    "ClientError",
    "ConfigError",
    "ConflictError",
    "ForbiddenError",
    "NetworkError",
    "NotFoundError",
    "ProblemDetail",
    "RateLimitError",
    "SchemaError",
    "ServerError",
    "UnauthorizedError",
    "UnprocessableEntityError",
    "ValidationError",
    "detect_null_fields",
    "raise_for_outcome",
]
