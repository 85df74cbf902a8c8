"""Validation schema for activities returned by the completion service (before ids are assigned)."""
from pydantic import BaseModel, ConfigDict, Field

from tinysparks.domain.activity.models import Activity, ActivityCategory


class GeneratedActivity(BaseModel):
    """One item of the model's JSON array. Unknown keys are ignored; a model-supplied id is never trusted."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str = Field(min_length=1)
    category: ActivityCategory
    description: str
    materials: list[str]
    duration: str
    safety_tip: str = Field(alias="safetyTip")
    tags: list[str]

    def to_activity(self, activity_id: str) -> Activity:
        return Activity(
            id=activity_id,
            title=self.title,
            category=self.category.value,
            description=self.description,
            duration=self.duration,
            safety_tip=self.safety_tip,
            materials=list(self.materials),
            tags=list(self.tags),
        )
