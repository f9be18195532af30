"""Record resolution for LikerID ENS names."""

from dataclasses import dataclass, field
from operator import attrgetter
from typing import Callable, Optional, Protocol

from likerid_gateway.core.config import Settings, get_settings
from likerid_gateway.core.models import (
    EMPTY_CONTENT_HASH,
    EMPTY_TEXT,
    ZERO_ADDRESS,
    Profile,
    Query,
    RecordType,
    ResolutionResult,
)
from likerid_gateway.core.profiles import (
    LikerIdClient,
    ProfileFetchFailed,
    ProfileFound,
    ProfileLookup,
)
from likerid_gateway.ens.names import match_liker_id
from likerid_gateway.utils.exceptions import ProfileFetchError, capture_exception

ETH_COIN_TYPE = 60
COSMOS_COIN_TYPE = 118
# ENSIP-11: EVM chain coin types are 0x80000000 | chain id
EVM_COIN_TYPE_THRESHOLD = 0x80000000

ProfileAccessor = Callable[[Profile], Optional[str]]

EVM_WALLET: ProfileAccessor = attrgetter("evm_wallet")
COSMOS_WALLET: ProfileAccessor = attrgetter("cosmos_wallet")

TEXT_KEY_ACCESSORS: dict[str, ProfileAccessor] = {
    "display": attrgetter("display_name"),
    "avatar": attrgetter("avatar"),
    "email": attrgetter("email"),
    "description": attrgetter("description"),
    "addr.likecoin": attrgetter("likecoin_wallet"),
    "url": attrgetter("url"),
}


def coin_type_accessor(coin_type: int) -> Optional[ProfileAccessor]:
    """Return the wallet accessor for a coin type, or None if unsupported."""
    if coin_type == ETH_COIN_TYPE or coin_type > EVM_COIN_TYPE_THRESHOLD:
        return EVM_WALLET

    if coin_type == COSMOS_COIN_TYPE:
        return COSMOS_WALLET

    return None


class ProfileSource(Protocol):
    """Protocol for profile lookups."""

    async def fetch_profile(self, liker_id: str) -> ProfileLookup: ...


@dataclass
class LikerIdResolver:
    """Resolves addr, text and contenthash records for LikerID names."""

    settings: Settings = field(default_factory=get_settings)
    source: Optional[ProfileSource] = None

    def __post_init__(self):
        if self.source is None:
            self.source = LikerIdClient(settings=self.settings)

    @property
    def ttl(self) -> int:
        return self.settings.ttl

    async def resolve(self, query: Query) -> ResolutionResult:
        """Resolve a query. Every outcome carries the configured TTL."""
        if query.record_type is RecordType.ADDR:
            return await self.addr(query.name, query.coin_type or 0)

        if query.record_type is RecordType.TEXT:
            return await self.text(query.name, query.key or "")

        return await self.contenthash(query.name)

    async def addr(self, name: str, coin_type: int) -> ResolutionResult:
        accessor = coin_type_accessor(coin_type)

        if accessor is None:
            return ResolutionResult(ZERO_ADDRESS, self.ttl)

        profile = await self.find_profile(name)

        if profile is None or not accessor(profile):
            return ResolutionResult(ZERO_ADDRESS, self.ttl)

        return ResolutionResult(accessor(profile), self.ttl)

    async def text(self, name: str, key: str) -> ResolutionResult:
        accessor = TEXT_KEY_ACCESSORS.get(key)

        if accessor is None:
            return ResolutionResult(EMPTY_TEXT, self.ttl)

        profile = await self.find_profile(name)

        if profile is None or not accessor(profile):
            return ResolutionResult(EMPTY_TEXT, self.ttl)

        return ResolutionResult(accessor(profile), self.ttl)

    async def contenthash(self, name: str) -> ResolutionResult:  # pylint: disable=unused-argument
        return ResolutionResult(EMPTY_CONTENT_HASH, self.ttl)

    async def find_profile(self, name: str) -> Optional[Profile]:
        """
        Look up the profile behind a LikerID name.

        Returns None for names outside the LikerID patterns, unknown ids and
        failed requests. Failures other than 404 are logged with the name.
        """
        match = match_liker_id(name)

        if match is None:
            return None

        lookup = await self.source.fetch_profile(match.liker_id)

        if isinstance(lookup, ProfileFetchFailed):
            self._report_failure(name, lookup.error)
            return None

        if not isinstance(lookup, ProfileFound):
            return None

        url = f"{self.settings.profile_base_url(match.suffix)}/{match.liker_id}"

        # Fields from the API win over the synthesized url
        return Profile.model_validate({"url": url, **lookup.data})

    @staticmethod
    def _report_failure(name: str, error: Exception) -> None:
        capture_exception(
            ProfileFetchError(f"Failed to resolve liker id for {name}: {error}"),
            {"name": name},
        )
