"""Tests for core/profiles.py."""

# pylint: disable=missing-function-docstring,redefined-outer-name

import asyncio
import json
from unittest.mock import AsyncMock

import aiohttp
import pytest
from aiohttp import ClientResponse, ClientSession

from likerid_gateway.core.config import Settings
from likerid_gateway.core.profiles import (
    LikerIdClient,
    ProfileFetchFailed,
    ProfileFound,
    ProfileNotFound,
)
from likerid_gateway.utils.exceptions import ProfileFetchError


def make_session(status: int = 200, body=None):
    """Mock session whose GET yields a response with the given status and JSON body."""
    mock_session = AsyncMock(spec=ClientSession)
    mock_response = AsyncMock(spec=ClientResponse)
    mock_response.status = status
    mock_response.json.return_value = body

    mock_session.get.return_value.__aenter__.return_value = mock_response

    return mock_session, mock_response


@pytest.fixture
def mainnet_settings():
    return Settings(development=False, _env_file=None)


class TestProfileUrl:
    """Tests for the identity API URL."""

    def test_mainnet(self, mainnet_settings):
        client = LikerIdClient(settings=mainnet_settings)
        assert client.profile_url("alice") == "https://api.like.co/users/id/alice/min"

    def test_testnet(self):
        client = LikerIdClient(settings=Settings(development=True, _env_file=None))
        assert (
            client.profile_url("alice")
            == "https://api.rinkeby.like.co/users/id/alice/min"
        )


class TestFetchProfile:
    """Tests for LikerIdClient.fetch_profile."""

    async def test_success_returns_found(self, mainnet_settings):
        session, _ = make_session(200, {"evmWallet": "0xabc", "displayName": "Alice"})
        client = LikerIdClient(settings=mainnet_settings, session=session)

        result = await client.fetch_profile("alice")

        assert result == ProfileFound({"evmWallet": "0xabc", "displayName": "Alice"})
        session.get.assert_called_once_with("https://api.like.co/users/id/alice/min")

    async def test_not_found(self, mainnet_settings):
        session, _ = make_session(404)
        client = LikerIdClient(settings=mainnet_settings, session=session)

        assert await client.fetch_profile("ghost") == ProfileNotFound()

    async def test_server_error_fails(self, mainnet_settings):
        session, _ = make_session(500)
        client = LikerIdClient(settings=mainnet_settings, session=session)

        result = await client.fetch_profile("alice")

        assert isinstance(result, ProfileFetchFailed)
        assert isinstance(result.error, ProfileFetchError)
        assert "500" in str(result.error)

    async def test_null_body_is_empty_profile(self, mainnet_settings):
        session, _ = make_session(200, None)
        client = LikerIdClient(settings=mainnet_settings, session=session)

        assert await client.fetch_profile("alice") == ProfileFound({})

    async def test_non_object_body_fails(self, mainnet_settings):
        session, _ = make_session(200, ["not", "an", "object"])
        client = LikerIdClient(settings=mainnet_settings, session=session)

        assert isinstance(await client.fetch_profile("alice"), ProfileFetchFailed)

    async def test_invalid_json_fails(self, mainnet_settings):
        session, response = make_session(200)
        response.json.side_effect = json.JSONDecodeError("Expecting value", "<", 0)
        client = LikerIdClient(settings=mainnet_settings, session=session)

        result = await client.fetch_profile("alice")

        assert isinstance(result, ProfileFetchFailed)
        assert "Invalid JSON" in str(result.error)

    async def test_connection_error_fails(self, mainnet_settings):
        session = AsyncMock(spec=ClientSession)
        session.get.side_effect = aiohttp.ClientConnectionError("connection refused")
        client = LikerIdClient(settings=mainnet_settings, session=session)

        result = await client.fetch_profile("alice")

        assert isinstance(result, ProfileFetchFailed)
        assert "connection refused" in str(result.error)

    async def test_timeout_fails(self, mainnet_settings):
        session = AsyncMock(spec=ClientSession)
        session.get.side_effect = asyncio.TimeoutError()
        client = LikerIdClient(settings=mainnet_settings, session=session)

        result = await client.fetch_profile("alice")

        assert isinstance(result, ProfileFetchFailed)
        assert "TimeoutError" in str(result.error)
