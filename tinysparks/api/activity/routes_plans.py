"""Activity plan API: age groups, generate a plan, latest plan status."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends

from tinysparks.api.activity.schemas import (
    ActivityOut,
    CamelModel,
    PlanResponse,
    PlanStatusResponse,
    SectionsOut,
)
from tinysparks.api.deps import get_activity_plan_service, get_favorites_store, get_plan_tracker
from tinysparks.domain.activity.models import ActivityRequest, AgeGroup
from tinysparks.domain.activity.services import ActivityPlanService, PlanRequestTracker
from tinysparks.domain.favorites.services import FavoritesStore

logger = logging.getLogger(__name__)

router = APIRouter()


class PlanRequestBody(CamelModel):
    """Form input: age group (required), interests and materials on hand (optional free text)."""
    age_group: AgeGroup
    child_interests: Optional[str] = None
    materials_available: Optional[str] = None


@router.get("/age-groups", response_model=List[str])
async def list_age_groups():
    """Age bands accepted by POST /plans."""
    return [group.value for group in AgeGroup]


@router.post("/plans", response_model=PlanResponse)
async def generate_plan(
    body: PlanRequestBody,
    service: ActivityPlanService = Depends(get_activity_plan_service),
    tracker: PlanRequestTracker = Depends(get_plan_tracker),
    favorites: FavoritesStore = Depends(get_favorites_store),
):
    """
    Generate a 9-activity plan (4 developmental + 5 sensory).
    409 while another plan is being generated, 503 when the API key is missing, 502 when generation fails.
    """
    request = ActivityRequest(
        age_group=body.age_group,
        child_interests=body.child_interests,
        materials_available=body.materials_available,
    )
    activities = await tracker.run(
        lambda: service.generate(request, reserved_ids=favorites.ids())
    )
    return PlanResponse(
        activities=[ActivityOut.from_domain(a) for a in activities],
        sections=SectionsOut.from_activities(activities),
    )


@router.get("/plans/latest", response_model=PlanStatusResponse)
async def latest_plan(tracker: PlanRequestTracker = Depends(get_plan_tracker)):
    """State of the last submission and the most recent successful plan."""
    snap = tracker.snapshot()
    activities = snap["activities"]
    return PlanStatusResponse(
        state=snap["state"],
        activities=[ActivityOut.from_domain(a) for a in activities],
        sections=SectionsOut.from_activities(activities),
        error=snap["error"],
    )
