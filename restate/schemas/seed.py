"""
Schemas describing the outcome of a seeding run.
"""

from pydantic import BaseModel, Field
from typing import Dict, List


class SeedReport(BaseModel):
    """Counts and ids produced by one seeding run."""

    agents: List[str] = Field(default_factory=list)
    galleries: List[str] = Field(default_factory=list)
    properties: List[str] = Field(default_factory=list)
    reviews: List[str] = Field(default_factory=list)
    # property id -> gallery ids; kept locally, never written to the backend
    property_galleries: Dict[str, List[str]] = Field(default_factory=dict)

    def summary(self) -> Dict[str, int]:
        return {
            "agents": len(self.agents),
            "galleries": len(self.galleries),
            "properties": len(self.properties),
            "reviews": len(self.reviews),
        }
