"""Validation schema for favorites read back from storage."""
from typing import List

from pydantic import BaseModel, ConfigDict, Field

from tinysparks.domain.activity.models import Activity


class StoredActivity(BaseModel):
    """One entry of the stored favorites array (camelCase, as written by Activity.to_dict)."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1)
    title: str = Field(min_length=1)
    category: str = Field(min_length=1)
    description: str = ""
    materials: List[str] = []
    duration: str = ""
    safety_tip: str = Field(default="", alias="safetyTip")
    tags: List[str] = []

    def to_activity(self) -> Activity:
        return Activity(
            id=self.id,
            title=self.title,
            category=self.category,
            description=self.description,
            duration=self.duration,
            safety_tip=self.safety_tip,
            materials=list(self.materials),
            tags=list(self.tags),
        )
