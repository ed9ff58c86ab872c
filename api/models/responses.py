"""
API Response Models

Pydantic models for API response serialization. Proof responses use the
wire schemas in core.schemas.proof.
"""

from typing import Any

from pydantic import BaseModel, Field

from core.schemas.proof import HashInt


class HealthResponse(BaseModel):
    """Response for GET /health endpoint."""

    ok: bool = True
    service: str = "merkle-file-server"
    version: str = "v1"


class UploadResponse(BaseModel):
    """Response for POST /upload endpoint."""

    ok: bool = Field(default=True)
    root: HashInt = Field(..., description="Merkle root over all stored files")
    files: list[str] = Field(default_factory=list, description="Stored filenames, in leaf order")


class RootResponse(BaseModel):
    """Response for GET /root endpoint."""

    root: HashInt = Field(..., description="Current Merkle root")
    num_files: int = Field(..., description="Number of committed files")


class ErrorDetail(BaseModel):
    """Detailed error information."""

    code: str = Field(..., description="Error code")
    message: str = Field(..., description="Human-readable error message")
    details: dict[str, Any] = Field(default_factory=dict)


class ErrorResponse(BaseModel):
    """Standard error response."""

    ok: bool = False
    error: ErrorDetail = Field(..., description="Error details")
