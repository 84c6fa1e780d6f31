"""Credential resolution for the catalog client.

API token and secret can come from several places. Resolution order (highest
to lowest priority):

1. Explicitly provided value
2. Environment variable
3. .env file (python-dotenv, loaded into the environment)
4. Default value

Example:
    ```python
    from catalog_client.auth import CredentialResolver

    resolver = CredentialResolver()
    token = resolver.resolve(env_var_name="CATALOG_API_TOKEN", required=True)
    secret = resolver.resolve_from_file(file_path="~/.config/catalog/secret")
    ```

Credentials are never logged; only the source they came from is.
"""

import logging
import os
from pathlib import Path
from threading import Lock

from dotenv import load_dotenv

from catalog_client.auth.exceptions import CredentialFileError, CredentialNotFoundError

logger = logging.getLogger(__name__)

DEFAULT_ENV_PREFIX = "CATALOG_API_"


class CredentialResolver:
    """Resolve credentials from explicit values, the environment, .env files and defaults.

    Args:
        dotenv_path: Path to a .env file. If None, python-dotenv searches
            parent directories.
        load_dotenv: Whether to load the .env file at all.
    """

    def __init__(self, dotenv_path: str | None = None, load_dotenv: bool = True):
        self._dotenv_loaded = False
        self._dotenv_lock = Lock()
        self._dotenv_path = dotenv_path
        self._load_dotenv_enabled = load_dotenv

        if self._load_dotenv_enabled:
            self._ensure_dotenv_loaded()

    def _ensure_dotenv_loaded(self) -> None:
        if self._dotenv_loaded:
            return

        with self._dotenv_lock:
            if self._dotenv_loaded:
                return

            try:
                load_dotenv(dotenv_path=self._dotenv_path)
                logger.debug("Loaded .env file for credential resolution")
            except OSError as e:
                logger.warning(f"Failed to load .env file: {e}")
            # Only ever attempted once
            self._dotenv_loaded = True

    def resolve(
        self,
        *,
        value: str | None = None,
        env_var_name: str | None = None,
        default: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Resolve a credential from the first source that has it.

        Empty strings count as missing, so an exported-but-blank variable does
        not shadow a default.

        Raises:
            CredentialNotFoundError: If required=True and no source has a value.
        """
        result = None
        source = None

        if value:
            result = value
            source = "explicit parameter"
        elif env_var_name and os.environ.get(env_var_name):
            result = os.environ[env_var_name]
            source = f"environment variable '{env_var_name}'"
        elif default:
            result = default
            source = "default value"

        if result is not None:
            logger.debug(f"Resolved credential from {source}: ***")

        if required and result is None:
            error_msg = "Required credential not found"
            if env_var_name:
                error_msg += f" (checked env var: {env_var_name})"
            raise CredentialNotFoundError(error_msg, env_var_name=env_var_name)

        return result

    def resolve_from_file(
        self,
        *,
        file_path: str | Path | None = None,
        env_var_name: str | None = None,
        required: bool = False,
    ) -> str | None:
        """Read a credential from a file, whose path may come from an env var.

        Supports ``~`` and ``$VAR`` expansion; surrounding whitespace is stripped.

        Raises:
            CredentialFileError: If required=True and the file cannot be read.
        """
        path_to_use = None

        if file_path is not None:
            path_to_use = str(file_path)
        elif env_var_name:
            path_to_use = self.resolve(env_var_name=env_var_name)

        if path_to_use is None:
            if required:
                error_msg = "No file path provided for credential resolution"
                if env_var_name:
                    error_msg += f" (env var '{env_var_name}' not set)"
                raise CredentialFileError(error_msg)
            return None

        path_obj = Path(os.path.expanduser(os.path.expandvars(path_to_use)))

        try:
            content = path_obj.read_text().strip()
        except FileNotFoundError:
            error_msg = f"Credential file not found: {path_obj}"
            if required:
                raise CredentialFileError(error_msg) from None
            logger.debug(error_msg)
            return None
        except PermissionError:
            error_msg = f"Permission denied reading credential file: {path_obj}"
            if required:
                raise CredentialFileError(error_msg) from None
            logger.warning(error_msg)
            return None
        except OSError as e:
            error_msg = f"Error reading credential file {path_obj}: {e}"
            if required:
                raise CredentialFileError(error_msg) from e
            logger.warning(error_msg)
            return None

        logger.debug(f"Resolved credential from file: {path_obj} (***)")
        return content

    def resolve_api_settings(self, prefix: str = DEFAULT_ENV_PREFIX) -> dict[str, str]:
        """Collect client settings from ``<prefix>*`` variables.

        Token and secret are required; base URL and the rate limit reset
        header name are included only when set. ``<prefix>SECRET_FILE`` is
        consulted when ``<prefix>SECRET`` is absent.
        """
        token = self.resolve(env_var_name=f"{prefix}TOKEN", required=True)

        secret = self.resolve(env_var_name=f"{prefix}SECRET") or self.resolve_from_file(
            env_var_name=f"{prefix}SECRET_FILE"
        )
        if secret is None:
            raise CredentialNotFoundError(
                f"Required credential not found (checked env var: {prefix}SECRET)",
                env_var_name=f"{prefix}SECRET",
            )

        settings = {"api_token": token, "api_secret": secret}

        for key, suffix in (("base_url", "BASE_URL"), ("rate_limit_reset_header", "RATE_LIMIT_RESET_HEADER")):
            found = self.resolve(env_var_name=f"{prefix}{suffix}")
            if found is not None:
                settings[key] = found

        return settings
