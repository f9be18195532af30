"""Pytest configuration and fixtures."""

# pylint: disable=redefined-outer-name

import os
from dataclasses import dataclass, field
from typing import Optional

import pytest

from likerid_gateway.core.config import Settings
from likerid_gateway.core.profiles import ProfileLookup, ProfileNotFound
from likerid_gateway.core.resolver import LikerIdResolver
from likerid_gateway.core.signer import ResponseSigner

# Well-known development key (first Hardhat account)
TEST_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
TEST_SIGNER_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"

# Set test environment variables before importing application code
os.environ.setdefault("PRIVATE_KEY", TEST_PRIVATE_KEY)


@dataclass
class FakeProfileSource:
    """Fake identity API returning predefined lookups and recording calls."""

    lookups: dict[str, ProfileLookup] = field(default_factory=dict)
    calls: list[str] = field(default_factory=list)

    async def fetch_profile(self, liker_id: str) -> ProfileLookup:
        self.calls.append(liker_id)
        return self.lookups.get(liker_id, ProfileNotFound())


@pytest.fixture
def test_settings():
    """Provide test settings with predictable values."""
    return Settings(
        private_key=TEST_PRIVATE_KEY,
        ttl=300,
        development=False,
        sentry_dsn=None,
        _env_file=None,
    )


@pytest.fixture
def fake_source():
    """Create a fake profile source."""
    return FakeProfileSource()


@pytest.fixture
def resolver(test_settings, fake_source):
    """Resolver backed by the fake profile source."""
    return LikerIdResolver(settings=test_settings, source=fake_source)


@pytest.fixture
def signer():
    """Signer using the test key."""
    return ResponseSigner.from_key(bytes.fromhex(TEST_PRIVATE_KEY[2:]))


def profile_data(**fields: Optional[str]) -> dict:
    """Build an identity API payload, dropping unset fields."""
    return {key: value for key, value in fields.items() if value is not None}
