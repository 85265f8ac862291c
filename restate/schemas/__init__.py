"""
Pydantic schemas for request/response validation.
"""

from .document import DocumentBase
from .agent import AgentBase, AgentCreate, AgentResponse
from .review import ReviewCreate, ReviewResponse
from .gallery import GalleryCreate, GalleryResponse
from .property import (
    PropertyCreate,
    PropertyResponse,
    PropertyDetailResponse,
    PropertySearchParams
)
from .auth import CurrentUserResponse, SessionResponse, LogoutResponse
from .seed import SeedReport

__all__ = [
    "DocumentBase",

    # Agent
    "AgentBase",
    "AgentCreate",
    "AgentResponse",

    # Review and gallery
    "ReviewCreate",
    "ReviewResponse",
    "GalleryCreate",
    "GalleryResponse",

    # Property
    "PropertyCreate",
    "PropertyResponse",
    "PropertyDetailResponse",
    "PropertySearchParams",

    # Auth
    "CurrentUserResponse",
    "SessionResponse",
    "LogoutResponse",

    "SeedReport"
]
