"""Exceptions for credential resolution.

Both are ``ConfigError`` subclasses, so a client factory that fails to find
its credentials reports it the same way as one given an incomplete config.

Example:
    ```python
    from catalog_client.auth.exceptions import CredentialNotFoundError

    if not api_token:
        raise CredentialNotFoundError("API token not found", env_var_name="CATALOG_API_TOKEN")
    ```
"""

from catalog_client.errors.exceptions import ConfigError


class CredentialNotFoundError(ConfigError):
    """Raised when a required credential cannot be resolved.

    Attributes:
        env_var_name: The environment variable name that was checked (if any).
    """

    def __init__(self, message: str, env_var_name: str | None = None):
        super().__init__(message)
        self.env_var_name = env_var_name


class CredentialFileError(ConfigError):
    """Raised when a credential file cannot be read."""

    pass
