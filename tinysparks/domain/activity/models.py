"""Activity domain models and enums."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional


class AgeGroup(str, Enum):
    """Age bands a plan can be requested for."""
    INFANT_YOUNG = "Infant (0-6 months)"
    INFANT_OLDER = "Infant (6-12 months)"
    TODDLER_YOUNG = "Toddler (1-2 years)"
    TODDLER_OLDER = "Toddler (2-3 years)"
    PRESCHOOL = "Preschooler (3-5 years)"


class ActivityCategory(str, Enum):
    """Skill an activity targets."""
    FINE_MOTOR = "Fine Motor"
    GROSS_MOTOR = "Gross Motor"
    LANGUAGE = "Language"
    COGNITIVE = "Cognitive"
    SENSORY_PLAY = "Sensory Play"


class PlanRequestState(str, Enum):
    """Lifecycle of a plan request."""
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


# One activity for each of these, in this order, then SENSORY_ACTIVITY_COUNT sensory ones
DEVELOPMENTAL_CATEGORIES = (
    ActivityCategory.FINE_MOTOR,
    ActivityCategory.GROSS_MOTOR,
    ActivityCategory.LANGUAGE,
    ActivityCategory.COGNITIVE,
)
SENSORY_ACTIVITY_COUNT = 5
PLAN_SIZE = len(DEVELOPMENTAL_CATEGORIES) + SENSORY_ACTIVITY_COUNT


@dataclass
class ActivityRequest:
    """Filters for one plan submission."""
    age_group: AgeGroup
    child_interests: Optional[str] = None
    materials_available: Optional[str] = None

    def __post_init__(self) -> None:
        # Blank text is treated as "not provided"
        self.child_interests = (self.child_interests or "").strip() or None
        self.materials_available = (self.materials_available or "").strip() or None


@dataclass
class Activity:
    """One generated play idea."""
    id: str
    title: str
    category: str
    description: str
    duration: str
    safety_tip: str
    materials: List[str] = field(default_factory=list)
    tags: List[str] = field(default_factory=list)

    @property
    def is_sensory(self) -> bool:
        return self.category == ActivityCategory.SENSORY_PLAY.value

    def to_dict(self) -> dict[str, Any]:
        """Serialize with the camelCase keys used in storage and over HTTP."""
        return {
            "id": self.id,
            "title": self.title,
            "category": self.category,
            "description": self.description,
            "materials": list(self.materials),
            "duration": self.duration,
            "safetyTip": self.safety_tip,
            "tags": list(self.tags),
        }


def split_sections(activities: List[Activity]) -> tuple[List[Activity], List[Activity]]:
    """Split into (developmental, sensory), keeping order. Anything not Sensory Play is developmental."""
    developmental = [a for a in activities if not a.is_sensory]
    sensory = [a for a in activities if a.is_sensory]
    return developmental, sensory
