"""Authentication components for the catalog client.

- Credential resolution (value → env → .env → default, or a file)
- HTTP Basic ``Authorization`` header construction

Example:
    ```python
    from catalog_client.auth import CredentialResolver, basic_auth_header

    resolver = CredentialResolver()
    settings = resolver.resolve_api_settings()
    headers = {"Authorization": basic_auth_header(settings["api_token"], settings["api_secret"])}
    ```
"""

from catalog_client.auth.basic import basic_auth_header
from catalog_client.auth.credentials import CredentialResolver
from catalog_client.auth.exceptions import CredentialFileError, CredentialNotFoundError

__all__ = [
    "CredentialFileError",
    "CredentialNotFoundError",
    "CredentialResolver",
    "basic_auth_header",
]
