"""Request/response models shared by the activity routes. JSON uses camelCase (same shape the web client stores)."""
from typing import List, Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from tinysparks.domain.activity.models import Activity, split_sections


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ActivityOut(CamelModel):
    """Activity card."""
    id: str
    title: str
    category: str
    description: str
    materials: List[str] = []
    duration: str
    safety_tip: str
    tags: List[str] = []

    @classmethod
    def from_domain(cls, activity: Activity) -> "ActivityOut":
        return cls(
            id=activity.id,
            title=activity.title,
            category=activity.category,
            description=activity.description,
            materials=list(activity.materials),
            duration=activity.duration,
            safety_tip=activity.safety_tip,
            tags=list(activity.tags),
        )

    def to_domain(self) -> Activity:
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


class SectionsOut(CamelModel):
    """Activities grouped for display: developmental milestones vs. sensory play."""
    developmental: List[ActivityOut]
    sensory: List[ActivityOut]

    @classmethod
    def from_activities(cls, activities: List[Activity]) -> "SectionsOut":
        developmental, sensory = split_sections(activities)
        return cls(
            developmental=[ActivityOut.from_domain(a) for a in developmental],
            sensory=[ActivityOut.from_domain(a) for a in sensory],
        )


class PlanResponse(CamelModel):
    activities: List[ActivityOut]
    sections: SectionsOut


class PlanStatusResponse(CamelModel):
    state: str  # idle | in_flight | succeeded | failed
    activities: List[ActivityOut]
    sections: SectionsOut
    error: Optional[str] = None


class FavoritesResponse(CamelModel):
    count: int
    activities: List[ActivityOut]
    sections: SectionsOut


class ToggleFavoriteResponse(CamelModel):
    is_favorite: bool
    count: int
    activities: List[ActivityOut]


class FavoriteStatusResponse(CamelModel):
    activity_id: str
    is_favorite: bool
    activity: Optional[ActivityOut] = None
