"""Shared fixtures for Subsonic client tests.

All HTTP calls are mocked - no real server requests are made.
"""

import json
from pathlib import Path
from typing import Any, Dict, List, Tuple

import httpx
import pytest
from pytest_mock import MockerFixture

from subsonic_remote.client import SubsonicClient
from subsonic_remote.models import SubsonicConfig


@pytest.fixture
def fixtures() -> Dict[str, Any]:
    """Load Subsonic API response fixtures from JSON file."""
    fixtures_path = Path(__file__).parent / "fixtures" / "subsonic_responses.json"
    with open(fixtures_path, "r", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def config() -> SubsonicConfig:
    return SubsonicConfig(
        url="https://music.example.com",
        username="testuser",
        password="testpass",
        client_name="subsonic-remote-test",
        api_version="1.16.1",
    )


@pytest.fixture
def client(config: SubsonicConfig, mocker: MockerFixture) -> SubsonicClient:
    """Create a SubsonicClient whose httpx.Client is a mock."""
    mock_client = mocker.MagicMock(spec=httpx.Client)
    mocker.patch("httpx.Client", return_value=mock_client)

    return SubsonicClient(config)


def mock_response(status_code: int, json_data: Any) -> httpx.Response:
    """Create a real httpx.Response carrying ``json_data``."""
    return httpx.Response(
        status_code=status_code,
        json=json_data,
        request=httpx.Request("GET", "https://music.example.com/rest/ping"),
    )


@pytest.fixture
def respond(client: SubsonicClient, mocker: MockerFixture):
    """Make the mocked transport answer every GET with ``json_data``."""

    def _respond(json_data: Any, status_code: int = 200):
        client.client.get = mocker.MagicMock(
            return_value=mock_response(status_code, json_data)
        )
        return client.client.get

    return _respond


AUTH_KEYS = {"u", "t", "s", "k", "v", "c", "f"}


@pytest.fixture
def sent_params(client: SubsonicClient):
    """Return the query pairs of the last request, minus auth/version params."""

    def _sent_params() -> List[Tuple[str, str]]:
        params = client.client.get.call_args.kwargs["params"]
        return [(k, v) for k, v in params if k not in AUTH_KEYS]

    return _sent_params


@pytest.fixture
def sent_url(client: SubsonicClient):
    """Return the URL of the last request."""

    def _sent_url() -> str:
        return client.client.get.call_args.args[0]

    return _sent_url
