"""
Agent repository.
"""

from restate.appwrite import AppwriteClient
from restate.repositories.base import BaseRepository


class AgentRepository(BaseRepository):
    """Repository for the agents collection."""

    resource_name = "Agent"

    def __init__(self, client: AppwriteClient, database_id: str, collection_id: str):
        super().__init__(client, database_id, collection_id)
