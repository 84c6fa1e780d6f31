"""Tests for structured client exceptions."""

import pytest
from httpx import Response

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
from catalog_client.errors.models import ProblemDetail


@pytest.mark.unit
def test_api_error_instantiation():
    """Test APIError can be instantiated with all attributes."""
    response = Response(status_code=500)
    problem = ProblemDetail(title="Error", status=500)

    error = APIError(
        message="Test error",
        status_code=500,
        response=response,
        problem_detail=problem,
    )

    assert str(error) == "Test error"
    assert error.status_code == 500
    assert error.status == 500
    assert error.response == response
    assert error.problem_detail == problem


@pytest.mark.unit
def test_exception_inheritance():
    """Test exception inheritance chain."""
    for exc_class in (ConfigError, SchemaError, ValidationError, NetworkError, RateLimitError, APIError):
        assert issubclass(exc_class, CatalogClientError)

    assert issubclass(ClientError, APIError)
    for exc_class in (BadRequestError, UnauthorizedError, ForbiddenError, NotFoundError, ConflictError):
        assert issubclass(exc_class, ClientError)
    assert issubclass(UnprocessableEntityError, ClientError)
    assert issubclass(ServerError, APIError)


@pytest.mark.unit
def test_failure_kinds_are_disjoint():
    """Test that rate limits, API errors and network errors never overlap."""
    assert not issubclass(RateLimitError, APIError)
    assert not issubclass(NetworkError, APIError)
    assert not issubclass(NetworkError, RateLimitError)
    assert not issubclass(APIError, RateLimitError)


@pytest.mark.unit
def test_validation_error_lists_fields():
    """Test ValidationError stores per-field errors."""
    errors = [
        {"field": "email", "message": "Invalid email", "schema": "NewUser (body)"},
        {"field": "name", "message": "Field required", "schema": "NewUser (body)"},
    ]

    error = ValidationError("Validation failed", errors=errors)

    assert str(error) == "Validation failed"
    assert error.errors == errors
    assert error.fields == ["email", "name"]


@pytest.mark.unit
def test_validation_error_without_errors():
    """Test ValidationError without an errors list."""
    error = ValidationError("Validation failed")

    assert error.errors == []
    assert error.fields == []


@pytest.mark.unit
def test_rate_limit_error_with_limit_reset():
    """Test RateLimitError stores the reset value."""
    error = RateLimitError("Too many requests", limit_reset=1000)

    assert str(error) == "Too many requests"
    assert error.limit_reset == 1000
    assert error.status_code == 429


@pytest.mark.unit
def test_rate_limit_error_without_limit_reset():
    """Test RateLimitError without a reset value."""
    assert RateLimitError("Too many requests").limit_reset is None


@pytest.mark.unit
def test_network_error_keeps_reason():
    """Test NetworkError carries the transport failure."""
    reason = OSError("Connection refused")

    error = NetworkError("GET http://fakeserver failed", reason=reason)

    assert error.reason is reason


@pytest.mark.unit
def test_unprocessable_entity_error():
    """Test UnprocessableEntityError stores server-side validation errors."""
    error = UnprocessableEntityError("Unprocessable", validation_errors=[{"field": "name"}], status_code=422)

    assert error.status_code == 422
    assert error.validation_errors == [{"field": "name"}]
    assert UnprocessableEntityError("Unprocessable").validation_errors == []
