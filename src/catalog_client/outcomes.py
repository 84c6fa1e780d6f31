"""Classified results of a single HTTP response."""

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from catalog_client.errors.models import ProblemDetail


class _Empty:
    """Marker for a successful response without a body."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "EMPTY"


EMPTY = _Empty()


@dataclass(frozen=True)
class Created:
    """201 with a Location header; ``id`` is the Location's last path segment."""

    id: str


@dataclass(frozen=True)
class ParsedSuccess:
    """Any other 2xx; ``value`` is the decoded body or ``EMPTY``."""

    value: Any


@dataclass(frozen=True)
class RateLimited:
    """429 Too Many Requests."""

    limit_reset: int | float | None


@dataclass(frozen=True)
class ApiFailure:
    """Any other status the server reported as a failure."""

    status: int
    message: str
    problem_detail: "ProblemDetail | None" = None


Outcome = Created | ParsedSuccess | RateLimited | ApiFailure
