"""
Base repository class with common document operations against one Appwrite collection.
Provides generic operations that are extended by collection-specific repositories.
"""

from typing import Optional, List, Dict, Any
import logging

from restate.appwrite import AppwriteClient, Databases, Query, ID

logger = logging.getLogger(__name__)


class BaseRepository:
    """
    Base repository bound to a single collection.
    Remote failures are logged and re-raised as AppwriteException.
    """

    resource_name = "Document"

    def __init__(self, client: AppwriteClient, database_id: str, collection_id: str):
        """
        Initialize repository with a client and collection coordinates.

        Args:
            client: Appwrite client
            database_id: Appwrite database id
            collection_id: Appwrite collection id
        """
        self.client = client
        self.databases = Databases(client)
        self.database_id = database_id
        self.collection_id = collection_id

    async def create(self, data: Dict[str, Any], document_id: Optional[str] = None) -> Dict[str, Any]:
        """
        Create a new document.

        Args:
            data: Attribute values for the new document
            document_id: Explicit id, or None to let the server generate one

        Returns:
            Created document
        """
        try:
            document = await self.databases.create_document(
                self.database_id,
                self.collection_id,
                document_id or ID.unique(),
                data,
            )
            logger.debug(f"Created {self.resource_name} with id: {document.get('$id')}")
            return document
        except Exception as e:
            logger.error(f"Failed to create {self.resource_name}: {e}")
            raise

    async def get_by_id(self, document_id: str) -> Dict[str, Any]:
        """
        Get a document by its id.

        Raises:
            AppwriteException: If the document does not exist or the call fails
        """
        try:
            document = await self.databases.get_document(self.database_id, self.collection_id, document_id)
            logger.debug(f"Retrieved {self.resource_name} with id: {document_id}")
            return document
        except Exception as e:
            logger.error(f"Failed to get {self.resource_name} by id {document_id}: {e}")
            raise

    async def get_multi(self, queries: Optional[List[str]] = None) -> List[Dict[str, Any]]:
        """
        List documents matching the given queries.

        Args:
            queries: Appwrite query strings (see restate.appwrite.Query)

        Returns:
            List of documents in server order
        """
        try:
            result = await self.databases.list_documents(self.database_id, self.collection_id, queries)
            documents = result.get("documents", [])
            logger.debug(f"Retrieved {len(documents)} {self.resource_name} documents")
            return documents
        except Exception as e:
            logger.error(f"Failed to list {self.resource_name} documents: {e}")
            raise

    async def delete(self, document_id: str) -> None:
        try:
            await self.databases.delete_document(self.database_id, self.collection_id, document_id)
            logger.debug(f"Deleted {self.resource_name} with id: {document_id}")
        except Exception as e:
            logger.error(f"Failed to delete {self.resource_name} {document_id}: {e}")
            raise

    async def delete_all(self, page_size: int = 100) -> int:
        """
        Delete every document in the collection, page by page.

        Returns:
            Number of documents deleted
        """
        deleted = 0
        while True:
            documents = await self.get_multi([Query.limit(page_size)])
            if not documents:
                break
            for document in documents:
                await self.delete(document["$id"])
                deleted += 1
        logger.debug(f"Deleted {deleted} {self.resource_name} documents")
        return deleted
