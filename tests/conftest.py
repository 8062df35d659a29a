"""Shared fixtures for the registry tests."""

from typing import Generator
from unittest.mock import MagicMock

import pytest
import requests

from llm_endpoint_registry.access import AccessStore
from llm_endpoint_registry.client_config import ENV_BUILD_MODE, ENV_IS_APP, ENV_REQUEST_TIMEOUT, ENV_SERVER_URL
from llm_endpoint_registry.config_paths import ENV_STORE_DIR
from llm_endpoint_registry.constants import ServiceProvider
from llm_endpoint_registry.models import Endpoint


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """Clear LER_* variables and the default store singleton around each test."""
    for name in (ENV_STORE_DIR, ENV_BUILD_MODE, ENV_IS_APP, ENV_SERVER_URL, ENV_REQUEST_TIMEOUT):
        monkeypatch.delenv(name, raising=False)
    AccessStore.cleanup()
    yield
    AccessStore.cleanup()


@pytest.fixture
def store() -> AccessStore:
    """An access store backed by memory."""
    return AccessStore()


def make_endpoint(
    endpoint_id: str,
    provider: ServiceProvider = ServiceProvider.OPENAI,
    api_key: str = "",
    **kwargs: object,
) -> Endpoint:
    """Build a user endpoint with sensible defaults."""
    fields = {
        "name": f"endpoint {endpoint_id}",
        "api_url": "https://api.example.com",
        "api_version": "v1",
    }
    fields.update(kwargs)
    return Endpoint(id=endpoint_id, provider=provider, api_key=api_key, **fields)  # type: ignore[arg-type]


def make_response(payload: object, status_code: int = 200) -> MagicMock:
    """Build a mock ``requests`` response returning ``payload`` as JSON."""
    response = MagicMock()
    response.status_code = status_code
    response.json.return_value = payload
    if status_code >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Error", response=response)
    return response
