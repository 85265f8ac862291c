"""
Gallery repository.
"""

from typing import List, Dict, Any

from restate.appwrite import AppwriteClient, Query
from restate.repositories.base import BaseRepository
from restate.models.property import PROPERTY_REFERENCE_ATTRIBUTE, CREATED_AT_ATTRIBUTE


class GalleryRepository(BaseRepository):
    """Repository for the galleries collection."""

    resource_name = "Gallery"

    def __init__(self, client: AppwriteClient, database_id: str, collection_id: str):
        super().__init__(client, database_id, collection_id)

    async def list_for_property(self, property_id: str) -> List[Dict[str, Any]]:
        """
        Galleries referencing the property, newest first.
        Fails with a query error when the collection has no `property` attribute.
        """
        return await self.get_multi([
            Query.equal(PROPERTY_REFERENCE_ATTRIBUTE, property_id),
            Query.order_desc(CREATED_AT_ATTRIBUTE),
        ])
