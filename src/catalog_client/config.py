"""Client configuration."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass, fields
from typing import Any

import httpx

from catalog_client.auth.credentials import DEFAULT_ENV_PREFIX, CredentialResolver
from catalog_client.errors.exceptions import ConfigError
from catalog_client.responses import DEFAULT_RATE_LIMIT_RESET_HEADER

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://api.example.com/v1"
DEFAULT_TIMEOUT = 30.0

# camelCase spellings accepted by from_mapping
_KEY_ALIASES = {
    "baseUrl": "base_url",
    "apiToken": "api_token",
    "apiSecret": "api_secret",
    "rateLimitResetHeader": "rate_limit_reset_header",
}


@dataclass(frozen=True)
class ApiConfig:
    """Immutable settings shared by every action of one client.

    Raises:
        ConfigError: If ``api_token`` or ``api_secret`` is missing or empty,
            or ``base_url`` is not an absolute http(s) URL.
    """

    api_token: str
    api_secret: str
    base_url: str = DEFAULT_BASE_URL
    rate_limit_reset_header: str = DEFAULT_RATE_LIMIT_RESET_HEADER
    timeout: float | None = DEFAULT_TIMEOUT

    def __post_init__(self):
        for name in ("api_token", "api_secret"):
            value = getattr(self, name)
            if not isinstance(value, str) or not value:
                raise ConfigError(f"Missing required configuration: {name}")

        base_url = self.base_url or DEFAULT_BASE_URL
        try:
            url = httpx.URL(base_url)
        except httpx.InvalidURL as e:
            raise ConfigError(f"Invalid base_url {base_url!r}: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigError(f"base_url must be an absolute http(s) URL: {base_url!r}")
        object.__setattr__(self, "base_url", base_url.rstrip("/"))

        if not self.rate_limit_reset_header:
            raise ConfigError("rate_limit_reset_header cannot be empty")

    def __repr__(self) -> str:
        return f"ApiConfig(base_url={self.base_url!r}, api_token='***', api_secret='***')"

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "ApiConfig":
        """Build a config from a mapping with snake_case or camelCase keys.

        Unknown keys are ignored; ``None`` values count as absent.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in (data or {}).items():
            key = _KEY_ALIASES.get(key, key)
            if key in known and value is not None:
                kwargs[key] = value

        for name in ("api_token", "api_secret"):
            if name not in kwargs:
                raise ConfigError(f"Missing required configuration: {name}")

        return cls(**kwargs)

    @classmethod
    def from_env(cls, resolver: CredentialResolver | None = None, prefix: str = DEFAULT_ENV_PREFIX) -> "ApiConfig":
        """Build a config from ``<prefix>TOKEN``, ``<prefix>SECRET`` and friends."""
        resolver = resolver or CredentialResolver()
        settings = resolver.resolve_api_settings(prefix)
        logger.debug(f"Loaded API configuration from environment ({prefix}*)")
        return cls(**settings)
