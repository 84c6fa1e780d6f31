"""HTTP Basic authentication."""

from base64 import b64encode


def basic_auth_header(username: str, password: str) -> str:
    """Build an ``Authorization`` header value for HTTP Basic auth."""
    userpass = f"{username}:{password}".encode("utf-8")
    return "Basic " + b64encode(userpass).decode("ascii")
