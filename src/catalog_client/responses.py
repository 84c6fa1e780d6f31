"""Classification of raw HTTP responses into outcomes.

``classify`` never raises for an HTTP status: it reports what the server said
and leaves the decision of raising to ``errors.raise_for_outcome``. Transport
failures never get here because no status exists for them.
"""

import json
from collections.abc import Mapping
from urllib.parse import urlsplit

import httpx

from catalog_client.errors.models import ProblemDetail
from catalog_client.outcomes import EMPTY, ApiFailure, Created, Outcome, ParsedSuccess, RateLimited

DEFAULT_RATE_LIMIT_RESET_HEADER = "X-RateLimit-Reset"


def classify(
    status: int,
    headers: Mapping[str, str],
    raw_body: bytes | None,
    *,
    rate_limit_reset_header: str = DEFAULT_RATE_LIMIT_RESET_HEADER,
) -> Outcome:
    """Classify one HTTP response.

    Args:
        status: HTTP status code
        headers: Response headers (looked up case-insensitively)
        raw_body: Raw response body, if any
        rate_limit_reset_header: Header carrying the rate limit reset value

    Returns:
        ``Created``, ``ParsedSuccess``, ``RateLimited`` or ``ApiFailure``
    """
    if not isinstance(headers, httpx.Headers):
        headers = httpx.Headers({str(key): str(value) for key, value in headers.items()})

    if status == 201 and headers.get("location"):
        return Created(id=location_id(headers["location"]))

    if 200 <= status < 300:
        return ParsedSuccess(value=parse_body(raw_body))

    if status == 429:
        return RateLimited(limit_reset=parse_number(headers.get(rate_limit_reset_header)))

    problem_detail = ProblemDetail.from_body(headers.get("content-type"), raw_body)
    if problem_detail:
        message = problem_detail.to_exception_message()
    else:
        text = _decode(raw_body)[:200]
        message = f"HTTP {status}: {text}" if text else f"HTTP {status}"

    return ApiFailure(status=status, message=message, problem_detail=problem_detail)


def location_id(location: str) -> str:
    """Return the last non-empty path segment of a Location URL."""
    path = urlsplit(location).path
    segments = [segment for segment in path.split("/") if segment]
    return segments[-1] if segments else ""


def parse_body(raw_body: bytes | None):
    """Decode a success body as JSON, falling back to text."""
    if not raw_body or not raw_body.strip():
        return EMPTY
    try:
        return json.loads(raw_body)
    except ValueError:
        return _decode(raw_body)


def parse_number(value: str | None) -> int | float | None:
    """Parse a header value as int or float; None when absent or malformed."""
    if value is None:
        return None
    value = value.strip()
    try:
        return int(value)
    except ValueError:
        pass
    try:
        return float(value)
    except ValueError:
        return None


def _decode(raw_body: bytes | None) -> str:
    if not raw_body:
        return ""
    return raw_body.decode("utf-8", errors="replace")
