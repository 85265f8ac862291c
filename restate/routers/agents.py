"""
Agent endpoints.
"""

from fastapi import APIRouter, Depends, Path, status

from restate.services.property import PropertyService
from restate.schemas.agent import AgentResponse
from restate.utils.dependencies import get_property_service
from restate.utils.exceptions import AgentNotFoundError
from restate.schemas.error import get_read_error_responses


router = APIRouter(prefix="/agents", tags=["Agents"])


@router.get(
    "/{agent_id}",
    response_model=AgentResponse,
    status_code=status.HTTP_200_OK,
    summary="Get agent",
    responses=get_read_error_responses()
)
async def get_agent(
    agent_id: str = Path(..., min_length=1, description="Agent ID"),
    property_service: PropertyService = Depends(get_property_service)
) -> AgentResponse:
    agent = await property_service.get_agent_by_id(agent_id)
    if agent is None:
        raise AgentNotFoundError(agent_id)
    return agent
