"""Signing of CCIP-Read gateway responses."""

import time
from dataclasses import dataclass
from typing import Optional

from eth_abi.packed import encode_packed
from eth_account import Account
from eth_account.signers.local import LocalAccount
from eth_keys import keys
from eth_utils import keccak, to_checksum_address

from likerid_gateway.core.config import Settings
from likerid_gateway.core.models import SignedResponse
from likerid_gateway.ens.codec import encode_resolve_response

# EIP-191 version 0x00: data signed on behalf of a validator contract
SIGNATURE_PREFIX = b"\x19\x00"


def response_digest(sender: str, request: bytes, result: bytes, expires: int) -> bytes:
    """
    Compute the digest the resolver contract verifies.

    keccak256(abi.encodePacked(
        0x1900, sender, uint64 expires, keccak256(request), keccak256(result)
    ))
    """
    return keccak(
        encode_packed(
            ["bytes2", "address", "uint64", "bytes32", "bytes32"],
            [
                SIGNATURE_PREFIX,
                to_checksum_address(sender),
                expires,
                keccak(request),
                keccak(result),
            ],
        )
    )


@dataclass(frozen=True)
class ResponseSigner:
    """Signs resolution results with the gateway key."""

    account: LocalAccount

    @classmethod
    def from_key(cls, private_key: bytes) -> "ResponseSigner":
        return cls(Account.from_key(private_key))

    @classmethod
    def from_settings(cls, settings: Settings) -> "ResponseSigner":
        """Build the signer from configuration. Raises ConfigurationError."""
        return cls.from_key(settings.signing_key)

    @property
    def address(self) -> str:
        """Checksummed address clients use to verify responses."""
        return self.account.address

    def sign_digest(self, digest: bytes) -> bytes:
        """Sign a raw digest, returning the 65-byte r || s || v signature."""
        # Not the 64-byte EIP-2098 compact form; ECDSA.recover accepts both
        return bytes(self.account.unsafe_sign_hash(digest).signature)

    def sign(
        self,
        sender: str,
        request: bytes,
        result: bytes,
        ttl: int,
        now: Optional[int] = None,
    ) -> SignedResponse:
        """
        Sign an encoded resolution result for a request.

        Args:
            sender: Resolver contract address that issued the lookup
            request: The full call data the gateway was asked to answer
            result: ABI-encoded record result
            ttl: Seconds the signature stays valid
            now: Unix time to count the TTL from (defaults to the current time)
        """
        if now is None:
            now = int(time.time())

        expires = now + ttl
        signature = self.sign_digest(response_digest(sender, request, result, expires))

        return SignedResponse(
            data=encode_resolve_response(result, expires, signature),
            signature=signature,
            expires=expires,
        )

    @staticmethod
    def recover(digest: bytes, signature: bytes) -> str:
        """Recover the checksummed address that produced a signature."""
        v = signature[64]

        if v >= 27:
            v -= 27

        sig = keys.Signature(signature_bytes=signature[:64] + bytes([v]))

        return sig.recover_public_key_from_msg_hash(digest).to_checksum_address()
