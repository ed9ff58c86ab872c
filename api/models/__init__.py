"""API request and response models."""

from api.models.requests import MultiProofRequest
from api.models.responses import (
    ErrorDetail,
    ErrorResponse,
    HealthResponse,
    RootResponse,
    UploadResponse,
)

__all__ = [
    "MultiProofRequest",
    "ErrorDetail",
    "ErrorResponse",
    "HealthResponse",
    "RootResponse",
    "UploadResponse",
]
