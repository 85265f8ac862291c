"""
Pydantic schemas for agent documents.
"""

from pydantic import BaseModel, Field, EmailStr
from typing import Optional

from restate.schemas.document import DocumentBase


class AgentBase(BaseModel):
    """Agent fields written to the agents collection."""

    name: str = Field(..., min_length=1, max_length=255, examples=["Agent 1"])
    email: EmailStr = Field(..., examples=["agent1@example.com"])
    avatar: Optional[str] = Field(None, description="Avatar image URL")


class AgentCreate(AgentBase):
    pass


class AgentResponse(DocumentBase):
    """Agent document as returned by the API."""

    name: str
    email: Optional[str] = None
    avatar: Optional[str] = None
