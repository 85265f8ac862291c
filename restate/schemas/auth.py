"""
Pydantic schemas for OAuth sessions and the signed-in user.
"""

from pydantic import BaseModel, Field, AliasChoices, ConfigDict
from typing import Optional
from datetime import datetime


class CurrentUserResponse(BaseModel):
    """User materialized from the account response."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., validation_alias=AliasChoices("$id", "id"))
    name: str = ""
    email: str = ""
    avatar: Optional[str] = Field(None, description="Initials avatar URL")


class SessionResponse(BaseModel):
    """Session created from an OAuth token exchange."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(..., validation_alias=AliasChoices("$id", "id"))
    user_id: str = Field(..., validation_alias=AliasChoices("userId", "user_id"))
    provider: Optional[str] = None
    expire: Optional[datetime] = None
    secret: Optional[str] = Field(
        None,
        description="Session secret; send it back as the X-Appwrite-Session header"
    )


class LogoutResponse(BaseModel):
    success: bool
