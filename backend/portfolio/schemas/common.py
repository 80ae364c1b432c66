"""
Portfolio API — Shared Response Schemas
========================================

What:  Small response bodies shared across routes (messages, errors,
       signatures, health).
"""

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    message: str


class SuccessResponse(BaseModel):
    success: bool = True


class ErrorResponse(BaseModel):
    """
    Error body used by every failure path.

    Example:
        {"error": "Route /nope not found"}
    """
    error: str = Field(description="Error description")


class UploadSignatureResponse(BaseModel):
    """Signed parameters the admin UI posts to the media host upload API."""
    signature: str = Field(description="Hex SHA-1 of the signed parameters plus API secret")
    timestamp: int = Field(description="Unix seconds the signature was issued at")
    cloud_name: str
    api_key: str
    folder: str
    resource_type: str = Field(description="image or video")


class HealthResponse(BaseModel):
    status: str = Field(description="healthy or unhealthy")
    version: str
    database: str = Field(description="connected or disconnected")
    uptime_seconds: float
