"""
Base schema for Appwrite documents.
Maps the `$`-prefixed system attributes onto plain field names.
"""

from pydantic import BaseModel, ConfigDict, Field, AliasChoices
from typing import Optional
from datetime import datetime


class DocumentBase(BaseModel):
    """Common system attributes carried by every remote document."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(
        ...,
        validation_alias=AliasChoices("$id", "id"),
        description="Document identifier"
    )

    created_at: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("$createdAt", "created_at"),
        description="Creation timestamp"
    )

    updated_at: Optional[datetime] = Field(
        None,
        validation_alias=AliasChoices("$updatedAt", "updated_at"),
        description="Last update timestamp"
    )
