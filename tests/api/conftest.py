"""API test configuration."""

import pytest

import nubian.services.auth_service as auth_service_module


def pytest_collection_modifyitems(items):
    """Mark everything under tests/api as an api test."""
    for item in items:
        if "/api/" in str(item.fspath):
            item.add_marker(pytest.mark.api)


@pytest.fixture(autouse=True)
def reset_auth_service():
    """Rebuild the token verifier from current settings for every test."""
    auth_service_module._auth_service = None
    yield
    auth_service_module._auth_service = None
