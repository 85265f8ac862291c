"""
Pydantic schemas for review documents.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, Any

from restate.schemas.document import DocumentBase


class ReviewCreate(BaseModel):
    """Review fields written to the reviews collection."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Reviewer 42"])
    avatar: Optional[str] = None
    review: str = Field(..., min_length=1, max_length=2000)
    rating: int = Field(..., ge=1, le=5)
    property: str = Field(..., description="Id of the reviewed property")


class ReviewResponse(DocumentBase):
    """Review document as returned by the API."""

    name: Optional[str] = None
    avatar: Optional[str] = None
    review: Optional[str] = None
    rating: Optional[float] = None
    property: Optional[str] = None

    @field_validator("property", mode="before")
    @classmethod
    def reference_to_id(cls, v: Any) -> Any:
        """Relationship attributes come back expanded; keep only the id."""
        if isinstance(v, dict):
            return v.get("$id") or v.get("id")
        return v
