"""LikerID identity API client."""

import asyncio
from dataclasses import dataclass, field
from typing import Optional, Union

import aiohttp

from likerid_gateway.core.config import Settings, get_settings
from likerid_gateway.utils.exceptions import ProfileFetchError


@dataclass(frozen=True)
class ProfileFound:
    """The identity API returned a profile."""

    data: dict


@dataclass(frozen=True)
class ProfileNotFound:
    """The identity API has no such LikerID (HTTP 404)."""


@dataclass(frozen=True)
class ProfileFetchFailed:
    """The request failed for any other reason."""

    error: Exception


ProfileLookup = Union[ProfileFound, ProfileNotFound, ProfileFetchFailed]


@dataclass
class LikerIdClient:
    """
    Fetches minimal LikerID profiles from the like.co API.

    Uses the given session when set, otherwise opens one per request.
    """

    settings: Settings = field(default_factory=get_settings)
    session: Optional[aiohttp.ClientSession] = None

    def profile_url(self, liker_id: str) -> str:
        return f"{self.settings.api_base_url}/users/id/{liker_id}/min"

    async def fetch_profile(self, liker_id: str) -> ProfileLookup:
        """Fetch the profile for a LikerID. Never raises."""
        url = self.profile_url(liker_id)

        try:
            if self.session is not None:
                return await self._get(self.session, url)

            timeout = aiohttp.ClientTimeout(total=self.settings.upstream_timeout)
            async with aiohttp.ClientSession(timeout=timeout) as session:
                return await self._get(session, url)

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            return ProfileFetchFailed(ProfileFetchError(str(e) or type(e).__name__))

    @staticmethod
    async def _get(session: aiohttp.ClientSession, url: str) -> ProfileLookup:
        async with session.get(url) as resp:
            if resp.status == 404:
                return ProfileNotFound()

            if not 200 <= resp.status < 300:
                return ProfileFetchFailed(
                    ProfileFetchError(f"Request failed with status code {resp.status}")
                )

            try:
                data = await resp.json(content_type=None)
            except ValueError as e:
                return ProfileFetchFailed(ProfileFetchError(f"Invalid JSON body: {e}"))

        if data is None:
            data = {}

        if not isinstance(data, dict):
            return ProfileFetchFailed(
                ProfileFetchError(f"Unexpected body type {type(data).__name__}")
            )

        return ProfileFound(data)
