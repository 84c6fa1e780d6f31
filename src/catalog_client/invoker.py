"""Binding action descriptors to awaitable callables.

Each bound action validates its input, sends one request, classifies the
response and either returns the result or raises from the client's error
taxonomy. Nothing is retried here.
"""

import logging
from collections.abc import Awaitable, Callable, Mapping
from functools import partial
from typing import Any

import httpx

from catalog_client.config import ApiConfig
from catalog_client.errors.exceptions import NetworkError, ValidationError
from catalog_client.errors.handler import raise_for_outcome
from catalog_client.outcomes import Outcome, ParsedSuccess
from catalog_client.pagination import LinkSet, PageSequence, parse_link_header
from catalog_client.request import base_headers, build_request
from catalog_client.responses import classify
from catalog_client.schema import ActionSpec

logger = logging.getLogger(__name__)

Action = Callable[..., Awaitable[Any]]


async def send(client: httpx.AsyncClient, request: httpx.Request) -> httpx.Response:
    """Send a request, turning transport failures into ``NetworkError``."""
    try:
        return await client.send(request)
    except httpx.TransportError as e:
        raise NetworkError(f"{request.method} {request.url} failed: {e!r}", reason=e) from e


def classify_response(response: httpx.Response, config: ApiConfig) -> Outcome:
    return classify(
        response.status_code,
        response.headers,
        response.content,
        rate_limit_reset_header=config.rate_limit_reset_header,
    )


def response_links(response: httpx.Response, url: str) -> LinkSet:
    return parse_link_header(response.headers.get("link"), base_url=url)


def should_paginate(spec: ActionSpec, outcome: Outcome, links: LinkSet) -> bool:
    """Whether a result is handed out as a ``PageSequence``."""
    if spec.paginated is False or not links or not isinstance(outcome, ParsedSuccess):
        return False
    if spec.paginated:
        return True
    return isinstance(outcome.value, list)


async def fetch_page(client: httpx.AsyncClient, config: ApiConfig, url: str) -> tuple[Any, LinkSet]:
    """GET one page of a paginated listing.

    Returns:
        The page's decoded body and its Link relations
    """
    request = httpx.Request("GET", url, headers=base_headers(config))
    response = await send(client, request)
    outcome = classify_response(response, config)
    items = raise_for_outcome(outcome, response=response)
    return items, response_links(response, url)


def bind_action(
    resource_name: str,
    action_name: str,
    spec: ActionSpec,
    config: ApiConfig,
    client: httpx.AsyncClient,
) -> Action:
    """Create the coroutine function exposed as ``api.<resource>.<action>``.

    The returned function accepts the call input as a mapping, as keyword
    arguments, or both (keywords win). It resolves with ``{"id": ...}`` for a
    201 carrying a Location header, a ``PageSequence`` for paginated listings,
    or the decoded body otherwise.

    Raises (when awaited):
        ValidationError: Input rejected; no request was sent
        NetworkError: The transport failed
        RateLimitError: 429 response
        APIError: Any other error response
    """
    qualified_name = f"{resource_name}.{action_name}"

    async def action(call_input: Mapping[str, Any] | None = None, /, **kwargs: Any) -> Any:
        if call_input is not None and not isinstance(call_input, Mapping):
            raise ValidationError(
                f"{qualified_name} expects a mapping of input fields, got {type(call_input).__name__}"
            )
        merged = {**(call_input or {}), **kwargs}

        descriptor = build_request(spec, merged, config)
        logger.debug(f"Calling {qualified_name}: {descriptor.method} {descriptor.url}")

        response = await send(client, descriptor.to_httpx())
        outcome = classify_response(response, config)
        value = raise_for_outcome(outcome, response=response)

        links = response_links(response, descriptor.url)
        if should_paginate(spec, outcome, links):
            logger.debug(f"{qualified_name} returned a paginated listing with relations {sorted(links)}")
            return PageSequence(value, links, partial(fetch_page, client, config), url=descriptor.url)

        return value

    action.__name__ = action_name
    action.__qualname__ = qualified_name
    action.__doc__ = f"{spec.method} {spec.path}"
    action.spec = spec
    return action
