"""
API Error Handling

Maps APIError, MerkleException and unexpected failures onto the
shared ErrorResponse body.
"""

from typing import Any

from fastapi import Request
from fastapi.responses import JSONResponse

from api.models.responses import ErrorResponse, ErrorDetail
from core.schemas.errors import MerkleException


class APIError(Exception):
    """Base API error with structured response."""

    def __init__(
        self,
        code: str,
        message: str,
        status_code: int = 400,
        details: dict[str, Any] | None = None,
    ):
        self.code = code
        self.message = message
        self.status_code = status_code
        self.details = details or {}
        super().__init__(message)


class InvalidRequestError(APIError):
    """Invalid request parameters."""

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(
            code="INVALID_REQUEST",
            message=message,
            status_code=400,
            details=details,
        )


class UnknownFileError(APIError):
    """Requested file is not stored."""

    def __init__(self, filename: str):
        super().__init__(
            code="FILE_NOT_FOUND",
            message=f"File not found: {filename}",
            status_code=404,
            details={"filename": filename},
        )


class EmptyStoreError(APIError):
    """No files have been uploaded, so there is no root."""

    def __init__(self, message: str = "No files uploaded yet"):
        super().__init__(
            code="EMPTY_STORE",
            message=message,
            status_code=404,
        )


def error_json(
    status_code: int,
    code: str,
    message: str,
    details: dict[str, Any] | None = None,
) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details or {}))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
    return error_json(exc.status_code, exc.code, exc.message, exc.details)


async def merkle_error_handler(request: Request, exc: MerkleException) -> JSONResponse:
    """Contract violations from core.merkle (bad or duplicate indices) are client errors."""
    return error_json(400, exc.code, exc.message, exc.details)


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    return error_json(500, "INTERNAL_ERROR", "An unexpected error occurred", {"type": type(exc).__name__})
