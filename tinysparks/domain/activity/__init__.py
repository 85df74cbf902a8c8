"""Activity domain: plan generation (Gemini) and request tracking."""
from tinysparks.domain.activity.models import (
    Activity,
    ActivityCategory,
    ActivityRequest,
    AgeGroup,
    PlanRequestState,
    split_sections,
)
from tinysparks.domain.activity.services import (
    ActivityPlanService,
    PlanRequestTracker,
    parse_activity_plan,
    validate_plan_composition,
)

__all__ = [
    "Activity",
    "ActivityCategory",
    "ActivityRequest",
    "AgeGroup",
    "PlanRequestState",
    "split_sections",
    "ActivityPlanService",
    "PlanRequestTracker",
    "parse_activity_plan",
    "validate_plan_composition",
]
