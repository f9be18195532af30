"""CCIP-Read gateway routes."""

from dataclasses import dataclass, field
from typing import Optional

from eth_utils import decode_hex, is_address, to_hex
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from likerid_gateway.api.models import ErrorResponse, GatewayRequest, GatewayResponse
from likerid_gateway.core.config import Settings, get_settings
from likerid_gateway.core.resolver import LikerIdResolver
from likerid_gateway.core.signer import ResponseSigner
from likerid_gateway.ens.codec import decode_resolve_call, lookup_function
from likerid_gateway.utils.decorators import sentry_exception_catcher
from likerid_gateway.utils.exceptions import (
    RequestDecodeError,
    UnsupportedFunctionError,
)

router = APIRouter(
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
    }
)


def _default_signer() -> ResponseSigner:
    return ResponseSigner.from_settings(get_settings())


@dataclass
class RouteDependencies:
    """Dependencies for route handlers."""

    settings: Settings = field(default_factory=get_settings)
    signer: ResponseSigner = field(default_factory=_default_signer)
    resolver: Optional[LikerIdResolver] = None

    def __post_init__(self):
        if self.resolver is None:
            self.resolver = LikerIdResolver(settings=self.settings)


# Global dependencies instance (set at startup, can be overridden for testing)
_dependencies: Optional[RouteDependencies] = None


def get_dependencies() -> RouteDependencies:
    """Get the current route dependencies."""
    global _dependencies  # pylint: disable=global-statement
    if _dependencies is None:
        _dependencies = RouteDependencies()
    return _dependencies


def set_dependencies(deps: RouteDependencies) -> None:
    """Set custom dependencies."""
    global _dependencies  # pylint: disable=global-statement
    _dependencies = deps


def reset_dependencies() -> None:
    """Reset dependencies to default (useful for testing)."""
    global _dependencies  # pylint: disable=global-statement
    _dependencies = None


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"message": message})


async def handle_call(sender: str, calldata: bytes, deps: RouteDependencies) -> bytes:
    """
    Answer one resolve(bytes,bytes) call.

    Returns the ABI-encoded, signed (result, expires, sig) tuple.
    """
    name, data = decode_resolve_call(calldata)
    function = lookup_function(data)
    query = function.decode_query(name, data)

    resolution = await deps.resolver.resolve(query)
    result = function.encode_result(resolution.value)

    signed = deps.signer.sign(sender, calldata, result, resolution.ttl)

    return signed.data


async def _respond(sender: str, data: str, deps: RouteDependencies):
    if not is_address(sender):
        return _error(400, f"Invalid sender address {sender}")

    try:
        calldata = decode_hex(data)
    except ValueError:
        return _error(400, "Call data is not valid hex")

    try:
        response = await handle_call(sender, calldata, deps)
    except RequestDecodeError as e:
        return _error(400, str(e))
    except UnsupportedFunctionError as e:
        return _error(404, str(e))

    return GatewayResponse(data=to_hex(response))


@router.get("/{sender}/{data}.json", response_model=GatewayResponse)
@sentry_exception_catcher
async def lookup_get(
    sender: str,
    data: str,
    deps: RouteDependencies = Depends(get_dependencies),
):
    """CCIP-Read GET endpoint."""
    return await _respond(sender, data, deps)


@router.post("/", response_model=GatewayResponse)
@sentry_exception_catcher
async def lookup_post(
    body: GatewayRequest,
    deps: RouteDependencies = Depends(get_dependencies),
):
    """CCIP-Read POST endpoint."""
    return await _respond(body.sender, body.data, deps)
