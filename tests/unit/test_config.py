"""Tests for client configuration."""

import dataclasses

import pytest

from catalog_client.auth import CredentialResolver
from catalog_client.auth.exceptions import CredentialNotFoundError
from catalog_client.config import DEFAULT_BASE_URL, ApiConfig
from catalog_client.errors import ConfigError


class TestApiConfig:
    """Test ApiConfig construction and validation."""

    @pytest.mark.unit
    def test_defaults(self):
        """Test that only the credentials are required."""
        config = ApiConfig(api_token="token", api_secret="secret")

        assert config.base_url == DEFAULT_BASE_URL
        assert config.rate_limit_reset_header == "X-RateLimit-Reset"
        assert config.timeout == 30.0

    @pytest.mark.unit
    def test_trailing_slash_is_stripped(self):
        """Test base URL normalization."""
        config = ApiConfig(api_token="token", api_secret="secret", base_url="http://fakeserver/v2/")

        assert config.base_url == "http://fakeserver/v2"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "kwargs",
        [
            {"api_token": "", "api_secret": "secret"},
            {"api_token": "token", "api_secret": ""},
            {"api_token": None, "api_secret": "secret"},
        ],
    )
    def test_missing_credentials_raise(self, kwargs):
        """Test that empty or missing credentials are rejected."""
        with pytest.raises(ConfigError):
            ApiConfig(**kwargs)

    @pytest.mark.unit
    @pytest.mark.parametrize("base_url", ["ftp://fakeserver", "fakeserver/v1", "/v1"])
    def test_invalid_base_url_raises(self, base_url):
        """Test that the base URL must be an absolute http(s) URL."""
        with pytest.raises(ConfigError, match="base_url"):
            ApiConfig(api_token="token", api_secret="secret", base_url=base_url)

    @pytest.mark.unit
    def test_empty_rate_limit_header_raises(self):
        """Test that the reset header name cannot be blank."""
        with pytest.raises(ConfigError):
            ApiConfig(api_token="token", api_secret="secret", rate_limit_reset_header="")

    @pytest.mark.unit
    def test_is_immutable(self):
        """Test that a config cannot be changed after construction."""
        config = ApiConfig(api_token="token", api_secret="secret")

        with pytest.raises(dataclasses.FrozenInstanceError):
            config.api_token = "other"

    @pytest.mark.unit
    def test_repr_masks_credentials(self):
        """Test that credentials never show up in repr."""
        config = ApiConfig(api_token="tok-123", api_secret="sec-456")

        assert "tok-123" not in repr(config)
        assert "sec-456" not in repr(config)
        assert "***" in repr(config)


class TestFromMapping:
    """Test building a config from a plain mapping."""

    @pytest.mark.unit
    def test_camel_case_keys(self):
        """Test that camelCase spellings are accepted."""
        config = ApiConfig.from_mapping(
            {"baseUrl": "http://fakeserver", "apiToken": "token", "apiSecret": "secret", "rateLimitResetHeader": "RL"}
        )

        assert config.base_url == "http://fakeserver"
        assert config.api_token == "token"
        assert config.rate_limit_reset_header == "RL"

    @pytest.mark.unit
    def test_none_values_use_defaults_and_unknown_keys_are_ignored(self):
        """Test that None counts as absent and extra keys are dropped."""
        config = ApiConfig.from_mapping({"api_token": "token", "api_secret": "secret", "base_url": None, "other": 1})

        assert config.base_url == DEFAULT_BASE_URL

    @pytest.mark.unit
    @pytest.mark.parametrize("data", [None, {}, {"api_token": "token"}, {"apiSecret": "secret"}])
    def test_missing_credentials_raise(self, data):
        """Test that missing credentials are reported by name."""
        with pytest.raises(ConfigError, match="Missing required configuration"):
            ApiConfig.from_mapping(data)


class TestFromEnv:
    """Test building a config from environment variables."""

    @pytest.mark.unit
    def test_reads_prefixed_variables(self, monkeypatch):
        """Test the CATALOG_API_* variables."""
        monkeypatch.setenv("CATALOG_API_TOKEN", "env-token")
        monkeypatch.setenv("CATALOG_API_SECRET", "env-secret")
        monkeypatch.setenv("CATALOG_API_BASE_URL", "http://fakeserver")

        config = ApiConfig.from_env(CredentialResolver(load_dotenv=False))

        assert config.api_token == "env-token"
        assert config.api_secret == "env-secret"
        assert config.base_url == "http://fakeserver"

    @pytest.mark.unit
    def test_custom_prefix(self, monkeypatch):
        """Test reading variables under another prefix."""
        monkeypatch.setenv("TEST_TOKEN", "t")
        monkeypatch.setenv("TEST_SECRET", "s")

        config = ApiConfig.from_env(CredentialResolver(load_dotenv=False), prefix="TEST_")

        assert config.api_token == "t"
        assert config.base_url == DEFAULT_BASE_URL

    @pytest.mark.unit
    def test_missing_token_raises_config_error(self):
        """Test that a missing token surfaces as a ConfigError subclass."""
        with pytest.raises(CredentialNotFoundError) as exc_info:
            ApiConfig.from_env(CredentialResolver(load_dotenv=False))

        assert isinstance(exc_info.value, ConfigError)
        assert exc_info.value.env_var_name == "CATALOG_API_TOKEN"
