"""
Property repository with listing and search queries.
"""

from typing import Optional, List, Dict, Any
import logging

from restate.appwrite import AppwriteClient, Query
from restate.repositories.base import BaseRepository
from restate.models.property import (
    ALL_CATEGORIES,
    TYPE_ATTRIBUTE,
    NAME_ATTRIBUTE,
    CREATED_AT_ATTRIBUTE,
)

logger = logging.getLogger(__name__)

LATEST_LIMIT = 5


class PropertyRepository(BaseRepository):
    """Repository for the properties collection."""

    resource_name = "Property"

    def __init__(self, client: AppwriteClient, database_id: str, collection_id: str):
        super().__init__(client, database_id, collection_id)

    async def get_latest(self, limit: int = LATEST_LIMIT) -> List[Dict[str, Any]]:
        """Oldest-first page of properties, as shown in the featured row."""
        return await self.get_multi([Query.order_asc(CREATED_AT_ATTRIBUTE), Query.limit(limit)])

    @staticmethod
    def build_search_queries(
        filter: Optional[str] = None,
        query: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[str]:
        """
        Build the query list for a property search.

        Args:
            filter: Property type, or "All"/None for every type
            query: Substring the property name must contain
            limit: Maximum number of documents

        Returns:
            Appwrite query strings, newest first
        """
        queries = [Query.order_desc(CREATED_AT_ATTRIBUTE)]

        if filter and filter != ALL_CATEGORIES:
            queries.append(Query.equal(TYPE_ATTRIBUTE, filter))

        if query:
            queries.append(Query.contains(NAME_ATTRIBUTE, query))

        if limit:
            queries.append(Query.limit(limit))

        return queries

    async def search(
        self,
        filter: Optional[str] = None,
        query: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[Dict[str, Any]]:
        queries = self.build_search_queries(filter, query, limit)
        logger.debug(f"Searching properties with filter={filter!r} query={query!r} limit={limit}")
        return await self.get_multi(queries)
