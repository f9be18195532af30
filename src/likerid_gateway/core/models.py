"""Domain types shared by the resolver, signer and wire codec."""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Sentinels returned on any miss
ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"
EMPTY_TEXT = ""
EMPTY_CONTENT_HASH = b""


class RecordType(str, Enum):
    """Record kinds served by the gateway."""

    ADDR = "addr"
    TEXT = "text"
    CONTENTHASH = "contenthash"


@dataclass(frozen=True)
class Query:
    """A single resolution request."""

    name: str
    record_type: RecordType
    coin_type: Optional[int] = None
    key: Optional[str] = None


@dataclass(frozen=True)
class ResolutionResult:
    """Record value plus the TTL advertised to callers."""

    value: Union[str, bytes]
    ttl: int


@dataclass(frozen=True)
class SignedResponse:
    """Signed payload relayed back to the caller."""

    data: bytes
    signature: bytes
    expires: int


class Profile(BaseModel):
    """LikerID profile as returned by the identity API."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    url: Optional[str] = None
    evm_wallet: Optional[str] = Field(default=None, alias="evmWallet")
    cosmos_wallet: Optional[str] = Field(default=None, alias="cosmosWallet")
    display_name: Optional[str] = Field(default=None, alias="displayName")
    avatar: Optional[str] = None
    email: Optional[str] = None
    description: Optional[str] = None
    likecoin_wallet: Optional[str] = Field(default=None, alias="likecoinWallet")

    @field_validator("*", mode="before")
    @classmethod
    def drop_non_strings(cls, value):
        """A field of the wrong type reads as missing without affecting the rest."""
        return value if isinstance(value, str) else None
