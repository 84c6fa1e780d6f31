"""Test basic package functionality."""

import catalog_client
from catalog_client.request import USER_AGENT


def test_version():
    """Test that package version is defined."""
    assert hasattr(catalog_client, "__version__")
    assert catalog_client.__version__ == "0.1.0"


def test_user_agent_carries_version():
    """Test that requests identify the client version."""
    assert USER_AGENT == "catalog-client/0.1.0"
