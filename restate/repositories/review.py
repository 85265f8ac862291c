"""
Review repository: per-property listing and an unfiltered page for client-side filtering.
"""

from typing import List, Dict, Any

from restate.appwrite import AppwriteClient, Query
from restate.repositories.base import BaseRepository
from restate.models.property import PROPERTY_REFERENCE_ATTRIBUTE, CREATED_AT_ATTRIBUTE

# Upper bound of reviews fetched when filtering on the client
FALLBACK_PAGE_SIZE = 1000


class ReviewRepository(BaseRepository):
    """Repository for the reviews collection."""

    resource_name = "Review"

    def __init__(self, client: AppwriteClient, database_id: str, collection_id: str):
        super().__init__(client, database_id, collection_id)

    async def list_for_property(self, property_id: str) -> List[Dict[str, Any]]:
        """Reviews referencing the property, newest first."""
        return await self.get_multi([
            Query.equal(PROPERTY_REFERENCE_ATTRIBUTE, property_id),
            Query.order_desc(CREATED_AT_ATTRIBUTE),
        ])

    async def list_page(self, limit: int = FALLBACK_PAGE_SIZE) -> List[Dict[str, Any]]:
        return await self.get_multi([Query.limit(limit)])
