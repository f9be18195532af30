"""ABI codec for CCIP-Read resolver calls and responses."""

from dataclasses import dataclass
from typing import Callable, Union

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from eth_utils import (
    decode_hex,
    function_signature_to_4byte_selector,
    is_0x_prefixed,
    is_hex,
    is_hex_address,
    to_canonical_address,
)

from likerid_gateway.core.models import ZERO_ADDRESS, Query, RecordType
from likerid_gateway.core.resolver import ETH_COIN_TYPE
from likerid_gateway.ens.names import decode_dns_name
from likerid_gateway.utils.exceptions import (
    RequestDecodeError,
    UnsupportedFunctionError,
)

RESOLVE_SIGNATURE = "resolve(bytes,bytes)"
RESOLVE_SELECTOR = function_signature_to_4byte_selector(RESOLVE_SIGNATURE)

# Return types of resolve(bytes,bytes) on the gateway side
RESPONSE_TYPES = ["bytes", "uint64", "bytes"]


def _address_value(value: str) -> str:
    if is_hex_address(value):
        return value.lower()
    return ZERO_ADDRESS


def _address_bytes(value: str) -> bytes:
    if is_hex_address(value):
        return to_canonical_address(value)
    if is_0x_prefixed(value) and is_hex(value):
        return decode_hex(value)
    return value.encode("utf-8")


def _query_addr(name: str, _args: tuple) -> Query:
    return Query(name=name, record_type=RecordType.ADDR, coin_type=ETH_COIN_TYPE)


def _query_addr_multicoin(name: str, args: tuple) -> Query:
    return Query(name=name, record_type=RecordType.ADDR, coin_type=args[0])


def _query_text(name: str, args: tuple) -> Query:
    return Query(name=name, record_type=RecordType.TEXT, key=args[0])


def _query_contenthash(name: str, _args: tuple) -> Query:
    return Query(name=name, record_type=RecordType.CONTENTHASH)


@dataclass(frozen=True)
class ResolverFunction:
    """A resolver function the gateway answers on behalf of the contract."""

    signature: str
    arg_types: tuple[str, ...]
    result_type: str
    build_query: Callable[[str, tuple], Query]
    convert_result: Callable[[Union[str, bytes]], Union[str, bytes]]

    @property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.signature)

    def decode_query(self, name: str, data: bytes) -> Query:
        """Decode the call arguments (node hash first) into a Query."""
        try:
            args = decode(list(self.arg_types), data[4:])
        except (DecodingError, ValueError) as e:
            raise RequestDecodeError(f"Invalid {self.signature} call: {e}") from e

        return self.build_query(name, tuple(args[1:]))

    def encode_result(self, value: Union[str, bytes]) -> bytes:
        """ABI-encode a record value as this function's return value."""
        return encode([self.result_type], [self.convert_result(value)])


RESOLVER_FUNCTIONS = (
    ResolverFunction(
        "addr(bytes32)", ("bytes32",), "address", _query_addr, _address_value
    ),
    ResolverFunction(
        "addr(bytes32,uint256)",
        ("bytes32", "uint256"),
        "bytes",
        _query_addr_multicoin,
        _address_bytes,
    ),
    ResolverFunction(
        "text(bytes32,string)", ("bytes32", "string"), "string", _query_text, str
    ),
    ResolverFunction(
        "contenthash(bytes32)", ("bytes32",), "bytes", _query_contenthash, bytes
    ),
)

_FUNCTIONS_BY_SELECTOR = {function.selector: function for function in RESOLVER_FUNCTIONS}


def decode_resolve_call(calldata: bytes) -> tuple[str, bytes]:
    """
    Decode a resolve(bytes name, bytes data) call.

    Returns the dotted name and the inner resolver call data.
    """
    if calldata[:4] != RESOLVE_SELECTOR:
        raise RequestDecodeError(f"Call data is not a {RESOLVE_SIGNATURE} call")

    try:
        name_wire, data = decode(["bytes", "bytes"], calldata[4:])
    except (DecodingError, ValueError) as e:
        raise RequestDecodeError(f"Invalid {RESOLVE_SIGNATURE} call: {e}") from e

    return decode_dns_name(name_wire), data


def lookup_function(data: bytes) -> ResolverFunction:
    """Find the resolver function targeted by inner call data."""
    function = _FUNCTIONS_BY_SELECTOR.get(data[:4])

    if function is None:
        raise UnsupportedFunctionError(
            f"Resolver function 0x{data[:4].hex()} is not supported"
        )

    return function


def encode_resolve_response(result: bytes, expires: int, signature: bytes) -> bytes:
    """ABI-encode the (result, expires, sig) tuple returned to the caller."""
    return encode(RESPONSE_TYPES, [result, expires, signature])
