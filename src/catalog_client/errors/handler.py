"""Error handling utilities for classified responses."""

from typing import TYPE_CHECKING, Any

from catalog_client.errors.exceptions import (
    APIError,
    BadRequestError,
    ClientError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    RateLimitError,
    ServerError,
    UnauthorizedError,
    UnprocessableEntityError,
)
from catalog_client.outcomes import ApiFailure, Created, Outcome, ParsedSuccess, RateLimited

if TYPE_CHECKING:
    import httpx

EXCEPTION_MAP: dict[int, type[APIError]] = {
    400: BadRequestError,
    401: UnauthorizedError,
    403: ForbiddenError,
    404: NotFoundError,
    409: ConflictError,
    422: UnprocessableEntityError,
}


def exception_class_for(status_code: int) -> type[APIError]:
    """Pick the APIError subclass for an HTTP status code."""
    if status_code in EXCEPTION_MAP:
        return EXCEPTION_MAP[status_code]
    if 400 <= status_code < 500:
        return ClientError
    if 500 <= status_code < 600:
        return ServerError
    return APIError


def raise_for_outcome(outcome: Outcome, response: "httpx.Response | None" = None) -> Any:
    """Turn a classified outcome into the value an action resolves with.

    Args:
        outcome: Result of ``classify``
        response: The HTTP response the outcome came from, attached to errors

    Returns:
        ``{"id": ...}`` for ``Created``, the parsed body for ``ParsedSuccess``

    Raises:
        RateLimitError: For ``RateLimited``
        APIError subclass based on status code: For ``ApiFailure``
    """
    if isinstance(outcome, Created):
        return {"id": outcome.id}

    if isinstance(outcome, ParsedSuccess):
        return outcome.value

    if isinstance(outcome, RateLimited):
        message = "Rate limit exceeded"
        if outcome.limit_reset is not None:
            message += f" (resets at {outcome.limit_reset})"
        raise RateLimitError(message, limit_reset=outcome.limit_reset, response=response)

    if isinstance(outcome, ApiFailure):
        exc_class = exception_class_for(outcome.status)

        if exc_class is UnprocessableEntityError:
            validation_errors = None
            extensions = outcome.problem_detail.extensions if outcome.problem_detail else None
            if extensions:
                # Explicit key check so an empty "errors" list is kept
                if "errors" in extensions:
                    validation_errors = extensions.get("errors")
                else:
                    validation_errors = extensions.get("validation_errors")
            raise exc_class(
                outcome.message,
                validation_errors=validation_errors,
                status_code=outcome.status,
                response=response,
                problem_detail=outcome.problem_detail,
            )

        raise exc_class(
            outcome.message,
            status_code=outcome.status,
            response=response,
            problem_detail=outcome.problem_detail,
        )

    raise TypeError(f"Unknown outcome: {outcome!r}")


def detect_null_fields(data: dict[str, Any] | list, path: str = "") -> list[str]:
    """Detect null fields in API response data.

    Recursively scans response data for null values and returns paths.

    Args:
        data: Response data (dict or list)
        path: Current path (for recursion)

    Returns:
        List of field paths that contain null values
    """
    null_paths = []

    if isinstance(data, dict):
        for key, value in data.items():
            current_path = f"{path}.{key}" if path else key

            if value is None:
                null_paths.append(current_path)
            elif isinstance(value, (dict, list)):
                null_paths.extend(detect_null_fields(value, current_path))

    elif isinstance(data, list):
        for index, item in enumerate(data):
            current_path = f"{path}[{index}]"

            if item is None:
                null_paths.append(current_path)
            elif isinstance(item, (dict, list)):
                null_paths.extend(detect_null_fields(item, current_path))

    return null_paths
