"""
Repository layer for document access.
One repository per Appwrite collection.
"""

from restate.repositories.base import BaseRepository
from restate.repositories.property import PropertyRepository
from restate.repositories.agent import AgentRepository
from restate.repositories.review import ReviewRepository
from restate.repositories.gallery import GalleryRepository

__all__ = [
    "BaseRepository",
    "PropertyRepository",
    "AgentRepository",
    "ReviewRepository",
    "GalleryRepository"
]
