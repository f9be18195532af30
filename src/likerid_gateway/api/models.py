"""Pydantic models for API request/response schemas."""

from pydantic import BaseModel


class GatewayRequest(BaseModel):
    """CCIP-Read POST body."""

    sender: str
    data: str


class GatewayResponse(BaseModel):
    """Signed ABI-encoded response."""

    data: str


class ErrorResponse(BaseModel):
    """Error body returned to CCIP-Read clients."""

    message: str
