"""
Property service: read access to properties, agents, reviews and galleries.
Remote failures degrade to empty results instead of propagating.
"""

from typing import Optional, List, Dict, Any, Type, TypeVar
import logging

from pydantic import BaseModel, ValidationError

from restate.appwrite import AppwriteClient, AppwriteException
from restate.config import Settings, settings as default_settings
from restate.models.property import ALL_CATEGORIES, PROPERTY_REFERENCE_ATTRIBUTE
from restate.repositories import (
    PropertyRepository,
    AgentRepository,
    ReviewRepository,
    GalleryRepository
)
from restate.schemas.agent import AgentResponse
from restate.schemas.gallery import GalleryResponse
from restate.schemas.property import PropertyResponse, PropertyDetailResponse
from restate.schemas.review import ReviewResponse

logger = logging.getLogger(__name__)

MISSING_ATTRIBUTE_ERROR_TYPE = "general_query_invalid"

ModelT = TypeVar("ModelT", bound=BaseModel)


def is_missing_attribute_error(error: Exception) -> bool:
    """True when a query failed because the collection lacks the queried attribute."""
    if not isinstance(error, AppwriteException):
        return False
    return error.type == MISSING_ATTRIBUTE_ERROR_TYPE or "Attribute not found" in (error.message or "")


def reference_id(value: Any) -> Optional[str]:
    """Id of a reference attribute, whether stored as a plain id or expanded."""
    if isinstance(value, dict):
        return value.get("$id")
    return value


def validate_documents(model: Type[ModelT], documents: List[Any]) -> List[ModelT]:
    """
    Validate remote documents one by one.

    Documents that do not fit the schema are logged and skipped so one
    malformed document does not hide the rest of a successful read.
    """
    results = []
    for document in documents:
        if not isinstance(document, dict):
            continue
        try:
            results.append(model.model_validate(document))
        except ValidationError as e:
            logger.warning(
                f"Skipping malformed {model.__name__} document {document.get('$id')}: {e.error_count()} errors",
                extra={"document_id": document.get("$id"), "errors": e.errors(include_url=False)}
            )
    return results


class PropertyService:
    """
    Read-side service used by the API and the CLI.
    Each operation maps to a single screen of the listing app.
    """

    def __init__(self, client: AppwriteClient, config: Optional[Settings] = None):
        config = config or default_settings
        database_id = config.appwrite_database_id
        self.property_repo = PropertyRepository(client, database_id, config.appwrite_properties_collection_id)
        self.agent_repo = AgentRepository(client, database_id, config.appwrite_agents_collection_id)
        self.review_repo = ReviewRepository(client, database_id, config.appwrite_reviews_collection_id)
        self.gallery_repo = GalleryRepository(client, database_id, config.appwrite_galleries_collection_id)

    async def get_latest_properties(self) -> List[PropertyResponse]:
        """Featured properties; empty on failure."""
        try:
            documents = await self.property_repo.get_latest()
        except Exception as e:
            logger.error(f"get_latest_properties error: {e}")
            return []
        return validate_documents(PropertyResponse, documents)

    async def get_properties(
        self,
        filter: str = ALL_CATEGORIES,
        query: Optional[str] = None,
        limit: Optional[int] = None
    ) -> List[PropertyResponse]:
        """
        Search properties by type and name, newest first.

        Args:
            filter: Property type, or "All" for no type filter
            query: Substring of the property name
            limit: Maximum number of results

        Returns:
            Matching properties, or an empty list if the remote call fails
        """
        try:
            documents = await self.property_repo.search(filter=filter, query=query, limit=limit)
        except Exception as e:
            logger.error(f"get_properties error: {e}")
            return []
        return validate_documents(PropertyResponse, documents)

    async def get_property_by_id(self, property_id: str) -> Optional[PropertyDetailResponse]:
        """
        Get a property with its reviews and gallery.

        Related documents are queried by their `property` attribute. When that
        query fails, reviews are filtered on the client from an unfiltered page
        and the gallery falls back to whatever the property document carries.

        Args:
            property_id: Id of the property

        Returns:
            Property detail, the bare property if even the fallback fails, or
            None if the property itself cannot be fetched
        """
        try:
            document = await self.property_repo.get_by_id(property_id)
        except Exception as e:
            logger.error(f"get_property_by_id error for {property_id}: {e}")
            return None

        reviews, gallery = await self._get_related(property_id, document)
        return self._to_detail(document, reviews, gallery)

    async def _get_related(self, property_id: str, document: Dict[str, Any]) -> tuple:
        """Reviews and gallery of a property; (None, None) when nothing could be fetched."""
        try:
            reviews = await self.review_repo.list_for_property(property_id)
            gallery = await self.gallery_repo.list_for_property(property_id)
            return reviews, gallery
        except Exception as e:
            if is_missing_attribute_error(e):
                logger.warning(
                    "Appwrite: collection schema missing attribute "
                    f"'{PROPERTY_REFERENCE_ATTRIBUTE}' - falling back to client-side filtering"
                )
            else:
                logger.error(
                    f"Error fetching related documents for property {property_id}: {e}",
                    extra={
                        "error_message": getattr(e, "message", str(e)),
                        "error_code": getattr(e, "code", None),
                        "error_response": getattr(e, "response", None),
                    }
                )

        try:
            all_reviews = await self.review_repo.list_page()
        except Exception as fallback_error:
            logger.error(f"Fallback fetching related documents failed: {fallback_error}")
            return None, None

        reviews = [
            review for review in all_reviews
            if isinstance(review, dict)
            and reference_id(review.get(PROPERTY_REFERENCE_ATTRIBUTE)) == property_id
        ]
        return reviews, document.get("gallery") or []

    @staticmethod
    def _to_detail(
        document: Dict[str, Any],
        reviews: Optional[List[Dict[str, Any]]] = None,
        gallery: Optional[List[Any]] = None
    ) -> Optional[PropertyDetailResponse]:
        if gallery is None:
            gallery = document.get("gallery") or []
        data = {key: value for key, value in document.items() if key not in ("reviews", "gallery")}
        try:
            detail = PropertyDetailResponse.model_validate(data)
        except ValidationError as e:
            logger.error(f"Property document {document.get('$id')} does not match the schema: {e}")
            return None

        detail.reviews = validate_documents(ReviewResponse, reviews if reviews is not None else document.get("reviews") or [])
        # Gallery relationships that were not expanded come back as bare ids
        detail.gallery = validate_documents(GalleryResponse, gallery)
        return detail

    async def get_agent_by_id(self, agent_id: str) -> Optional[AgentResponse]:
        try:
            document = await self.agent_repo.get_by_id(agent_id)
        except Exception as e:
            logger.error(f"get_agent_by_id error for {agent_id}: {e}")
            return None
        agents = validate_documents(AgentResponse, [document])
        return agents[0] if agents else None
