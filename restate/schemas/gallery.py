"""
Pydantic schemas for gallery documents.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, Any

from restate.schemas.document import DocumentBase


class GalleryCreate(BaseModel):
    image: str = Field(..., min_length=1, description="Image URL")


class GalleryResponse(DocumentBase):
    """Gallery document; `property` is only present when the schema defines it."""

    image: Optional[str] = None
    property: Optional[str] = None

    @field_validator("property", mode="before")
    @classmethod
    def reference_to_id(cls, v: Any) -> Any:
        if isinstance(v, dict):
            return v.get("$id") or v.get("id")
        return v
