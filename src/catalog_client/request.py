"""Turning an action call into a concrete HTTP request.

Nothing here performs I/O: ``build_request`` only validates the caller's input
and lays it out as method, URL, headers and body.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from catalog_client import __version__
from catalog_client.auth.basic import basic_auth_header
from catalog_client.config import ApiConfig
from catalog_client.errors.exceptions import ValidationError
from catalog_client.schema import ActionSpec, Validator

USER_AGENT = f"catalog-client/{__version__}"

_NO_BODY = object()


@dataclass(frozen=True)
class RequestDescriptor:
    """Everything needed to send one request."""

    method: str
    url: str
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = _NO_BODY

    @property
    def has_body(self) -> bool:
        return self.body is not _NO_BODY

    @property
    def content(self) -> bytes | None:
        if not self.has_body:
            return None
        return json.dumps(self.body).encode("utf-8")

    def to_httpx(self) -> httpx.Request:
        return httpx.Request(self.method, self.url, headers=self.headers, content=self.content)


def base_headers(config: ApiConfig) -> dict[str, str]:
    """Headers sent with every request, including Basic auth."""
    return {
        "Authorization": basic_auth_header(config.api_token, config.api_secret),
        "Accept": "application/json",
        "User-Agent": USER_AGENT,
    }


def split_input(spec: ActionSpec, call_input: Mapping[str, Any]) -> tuple[dict, dict, dict]:
    """Split caller input into ``(path_part, body_part, query_part)``.

    Each part keeps the insertion order of ``call_input``.
    """
    placeholders = spec.placeholders
    path_part, body_part, query_part = {}, {}, {}
    for key, value in call_input.items():
        if key in placeholders:
            path_part[key] = value
        elif key in spec.body_keys:
            body_part[key] = value
        else:
            query_part[key] = value
    return path_part, body_part, query_part


def validate(schema: Validator, data: Mapping[str, Any], part: str) -> tuple[BaseModel | None, list[dict[str, Any]]]:
    """Check ``data`` against ``schema``.

    Returns:
        The validated model (``None`` without a schema or on failure) and one
        error entry per bad field
    """
    if schema is None:
        return None, []
    try:
        return schema.model_validate(dict(data)), []
    except PydanticValidationError as e:
        return None, [
            {
                "field": ".".join(str(loc) for loc in error["loc"]) or part,
                "message": error["msg"],
                "schema": f"{schema.__name__} ({part})",
            }
            for error in e.errors()
        ]


def serialize_body(spec: ActionSpec, validated: BaseModel | None, body_part: Mapping[str, Any]) -> Any:
    """JSON-ready body: the fields the caller set, dumped through pydantic.

    Raises:
        ValidationError: If a value has no JSON representation.
    """
    try:
        if validated is not None:
            return validated.model_dump(mode="json", by_alias=True, exclude_unset=True)
        return to_jsonable_python(dict(body_part))
    except PydanticSerializationError as e:
        raise ValidationError(
            f"Invalid input for {spec.method} {spec.path}: body is not JSON serializable: {e}",
            errors=[{"field": "body", "message": str(e), "schema": "JSON"}],
        ) from e


def encode_query_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def build_url(config: ApiConfig, path: str, query: Mapping[str, Any]) -> str:
    """``base_url + path``, with ``query`` encoded in insertion order."""
    url = httpx.URL(config.base_url + path)
    params = []
    for key, value in query.items():
        if value is None:
            continue
        if isinstance(value, (list, tuple)):
            params.extend((key, encode_query_value(item)) for item in value)
        else:
            params.append((key, encode_query_value(value)))
    if params:
        url = url.copy_merge_params(params)
    return str(url)


def build_request(spec: ActionSpec, call_input: Mapping[str, Any] | None, config: ApiConfig) -> RequestDescriptor:
    """Validate ``call_input`` and lay it out as a request for ``spec``.

    Raises:
        ValidationError: If a path placeholder is missing or either part of
            the input fails its schema. No request is built in that case.
    """
    call_input = call_input or {}
    path_part, body_part, query_part = split_input(spec, call_input)

    errors = [
        {"field": name, "message": "Field required", "schema": f"path {spec.path}"}
        for name in sorted(spec.placeholders - path_part.keys())
    ]
    validated_body, body_errors = validate(spec.body_schema, body_part, "body")
    _, query_errors = validate(spec.query_schema, query_part, "query")
    errors += body_errors + query_errors
    if errors:
        details = "; ".join(f"{error['field']}: {error['message']} [{error['schema']}]" for error in errors)
        raise ValidationError(f"Invalid input for {spec.method} {spec.path}: {details}", errors=errors)

    headers = base_headers(config)
    body = _NO_BODY
    if spec.has_body:
        body = serialize_body(spec, validated_body, body_part)
        headers["Content-Type"] = "application/json"

    return RequestDescriptor(
        method=spec.method,
        url=build_url(config, spec.expand_path(path_part), query_part),
        headers=headers,
        body=body,
    )
