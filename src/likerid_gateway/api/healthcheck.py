"""Health check API endpoint."""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from likerid_gateway.api.routes import RouteDependencies, get_dependencies

router = APIRouter(tags=["health"])


class HealthResponse(BaseModel):
    """Response model for health check."""

    status: str
    signer_address: str
    network: str
    ttl: int


@router.get("/healthcheck", response_model=HealthResponse)
async def health_check(
    deps: RouteDependencies = Depends(get_dependencies),
) -> HealthResponse:
    """
    Health check endpoint (no auth required).

    Returns the signing address clients should trust and the active network.
    """
    return HealthResponse(
        status="ok",
        signer_address=deps.signer.address,
        network="testnet" if deps.settings.development else "mainnet",
        ttl=deps.settings.ttl,
    )
