"""
Pydantic schemas for property documents, search parameters and detail views.
"""

from pydantic import BaseModel, Field, AliasChoices, field_validator
from typing import Optional, List, Union, Dict, Any

from restate.models.property import (
    PropertyType,
    Facility,
    ALL_CATEGORIES,
    TYPE_ATTRIBUTE,
    FACILITIES_ATTRIBUTE,
    category_names,
)
from restate.schemas.document import DocumentBase
from restate.schemas.agent import AgentResponse
from restate.schemas.review import ReviewResponse
from restate.schemas.gallery import GalleryResponse


class PropertyCreate(BaseModel):
    """Property fields written to the properties collection."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Property 1"])
    type: PropertyType = Field(..., description="Property type", examples=["House"])
    description: str = Field(..., min_length=1, max_length=5000)
    address: str = Field(..., min_length=1, max_length=255)
    geolocation: str = Field(..., description="Free-form \"lat, lng\" string")
    price: int = Field(..., gt=0)
    area: int = Field(..., gt=0, description="Area in square feet")
    bedrooms: int = Field(..., ge=0, le=50)
    bathrooms: int = Field(..., ge=0, le=50)
    rating: int = Field(..., ge=1, le=5)
    facilities: List[Facility] = Field(default_factory=list)
    image: str = Field(..., description="Cover image URL")
    agent: str = Field(..., description="Id of the listing agent")

    @field_validator("name", "description", "address")
    @classmethod
    def strip_text(cls, v):
        if not v.strip():
            raise ValueError("Value cannot be empty")
        return v.strip()

    def to_document(self) -> Dict[str, Any]:
        """Attribute payload using the collection's attribute names."""
        data = self.model_dump(mode="json")
        data[TYPE_ATTRIBUTE] = data.pop("type")
        data[FACILITIES_ATTRIBUTE] = data.pop("facilities")
        return data


class PropertyResponse(DocumentBase):
    """Property document as returned by the API."""

    name: Optional[str] = None
    type: Optional[str] = Field(None, validation_alias=AliasChoices(TYPE_ATTRIBUTE, "type"))
    description: Optional[str] = None
    address: Optional[str] = None
    geolocation: Optional[str] = None
    price: Optional[float] = None
    area: Optional[float] = None
    bedrooms: Optional[float] = None
    bathrooms: Optional[float] = None
    rating: Optional[float] = None
    facilities: List[str] = Field(
        default_factory=list,
        validation_alias=AliasChoices(FACILITIES_ATTRIBUTE, "facilities")
    )
    image: Optional[str] = None
    agent: Optional[Union[AgentResponse, str]] = None

    @field_validator("facilities", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return v or []


class PropertyDetailResponse(PropertyResponse):
    """Property with its reviews and gallery attached."""

    reviews: List[ReviewResponse] = Field(default_factory=list)
    gallery: List[GalleryResponse] = Field(default_factory=list)


class PropertySearchParams(BaseModel):
    """Search parameters for the property listing."""

    filter: str = Field(ALL_CATEGORIES, description="Property type or \"All\"")
    query: Optional[str] = Field(None, max_length=255, description="Substring of the property name")
    limit: Optional[int] = Field(None, ge=1, le=100)

    @field_validator("filter")
    @classmethod
    def validate_filter(cls, v):
        if v not in category_names():
            raise ValueError(f"Filter must be one of: {category_names()}")
        return v

    @field_validator("query")
    @classmethod
    def blank_query_to_none(cls, v):
        if v is None or not v.strip():
            return None
        return v.strip()
