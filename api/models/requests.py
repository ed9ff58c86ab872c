"""
API Request Models

Pydantic models for API request validation.
"""

from pydantic import BaseModel, Field


class MultiProofRequest(BaseModel):
    """Request body for POST /multiproof endpoint."""

    filenames: list[str] = Field(
        ...,
        min_length=1,
        description="Files to prove, in the order their leaves should be returned",
    )
