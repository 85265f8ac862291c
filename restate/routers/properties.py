"""
Property browsing endpoints: featured listings, search by type and name, and detail view.
"""

from fastapi import APIRouter, Depends, status, Query, Path
from typing import Optional, List

from restate.models.property import ALL_CATEGORIES
from restate.services.property import PropertyService
from restate.schemas.property import (
    PropertyResponse,
    PropertyDetailResponse,
    PropertySearchParams
)
from restate.utils.dependencies import get_property_service
from restate.utils.exceptions import PropertyNotFoundError
from restate.schemas.error import get_read_error_responses, get_error_responses


router = APIRouter(prefix="/properties", tags=["Properties"])


@router.get(
    "/latest",
    response_model=List[PropertyResponse],
    status_code=status.HTTP_200_OK,
    summary="Featured properties",
    description="The five earliest listed properties. Empty when the backend is unreachable."
)
async def get_latest_properties(
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    return await property_service.get_latest_properties()


@router.get(
    "",
    response_model=List[PropertyResponse],
    status_code=status.HTTP_200_OK,
    summary="Search properties",
    description="Newest first, optionally narrowed by property type and a name substring",
    responses=get_error_responses(422)
)
async def list_properties(
    filter: str = Query(ALL_CATEGORIES, description="Property type, or \"All\""),
    query: Optional[str] = Query(None, description="Substring of the property name"),
    limit: Optional[int] = Query(None, ge=1, le=100, description="Maximum number of properties"),
    property_service: PropertyService = Depends(get_property_service)
) -> List[PropertyResponse]:
    """
    Search properties.

    Args:
        filter: Property type filter
        query: Name search text
        limit: Page size
        property_service: Property service instance

    Returns:
        Matching properties; an empty list when the backend call fails
    """
    params = PropertySearchParams(filter=filter, query=query, limit=limit)
    return await property_service.get_properties(
        filter=params.filter,
        query=params.query,
        limit=params.limit
    )


@router.get(
    "/{property_id}",
    response_model=PropertyDetailResponse,
    status_code=status.HTTP_200_OK,
    summary="Get property details",
    description="Property with its reviews and gallery images",
    responses=get_read_error_responses()
)
async def get_property(
    property_id: str = Path(..., min_length=1, description="Property ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> PropertyDetailResponse:
    """
    Get a single property with related documents.

    Raises:
        PropertyNotFoundError: If the property cannot be fetched
    """
    property_obj = await property_service.get_property_by_id(property_id)
    if property_obj is None:
        raise PropertyNotFoundError(property_id)
    return property_obj
