"""
Module 01 - Schemas
File: errors.py

Purpose: Standard error taxonomy for the Merkle commitment library.
Defines both Pydantic models for structured error communication
and Python exceptions for control flow.

Two classes of failure exist:
- Contract violations by the caller (bad index, duplicate index, unknown
  hasher) raise one of the exceptions below.
- Verification of an untrusted proof never raises; it returns False.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes."""

    # Contract Errors
    LEAF_INDEX_OUT_OF_RANGE = "LEAF_INDEX_OUT_OF_RANGE"
    DUPLICATE_LEAF_INDEX = "DUPLICATE_LEAF_INDEX"
    UNKNOWN_HASHER = "UNKNOWN_HASHER"

    # Merkle & Commitment Errors
    MERKLE_PROOF_INVALID = "MERKLE_PROOF_INVALID"
    ROOT_MISMATCH = "ROOT_MISMATCH"

    # Schema Errors
    SCHEMA_VALIDATION_ERROR = "SCHEMA_VALIDATION_ERROR"


# =============================================================================
# Pydantic Error Models (Structured Communication)
# =============================================================================

class MerkleError(BaseModel):
    """
    Base error model for structured error communication.

    Used by the API and the CLI's JSON output to report errors without
    exceptions.
    """

    model_config = ConfigDict(
        extra="forbid",
        frozen=False,
        validate_assignment=True,
    )

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.LEAF_INDEX_OUT_OF_RANGE],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )

    def to_exception(self) -> "MerkleException":
        """Convert this error model to a raised exception."""
        return MerkleException(
            code=self.code,
            message=self.message,
            details=self.details,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class MerkleException(Exception):
    """
    Base exception for all Merkle library errors.

    Carries structured error information and can be converted to a
    MerkleError model.
    """

    def __init__(
        self,
        message: str,
        code: str = "MERKLE_ERROR",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def to_error_model(self) -> MerkleError:
        """Convert this exception to a MerkleError model."""
        return MerkleError(
            code=self.code,
            message=self.message,
            details=self.details,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class LeafIndexOutOfRangeException(MerkleException, IndexError):
    """Raised when a requested leaf index is outside the padded leaf layer."""

    def __init__(
        self,
        index: int,
        num_leaves: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["index"] = index
        full_details["num_leaves"] = num_leaves
        super().__init__(
            message=f"Leaf index {index} out of range for {num_leaves} leaves",
            code=ErrorCodes.LEAF_INDEX_OUT_OF_RANGE,
            details=full_details,
        )


class DuplicateLeafIndexException(MerkleException, ValueError):
    """Raised when a multiproof request names the same leaf twice."""

    def __init__(
        self,
        duplicates: list[int],
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        full_details["duplicates"] = duplicates
        super().__init__(
            message=f"Duplicate leaf indices in request: {duplicates}",
            code=ErrorCodes.DUPLICATE_LEAF_INDEX,
            details=full_details,
        )


class UnknownHasherException(MerkleException, ValueError):
    """Raised when a hasher name is not registered."""

    def __init__(self, name: str, available: list[str]) -> None:
        super().__init__(
            message=f"Unknown hasher {name!r}; available: {', '.join(available)}",
            code=ErrorCodes.UNKNOWN_HASHER,
            details={"name": name, "available": available},
        )
