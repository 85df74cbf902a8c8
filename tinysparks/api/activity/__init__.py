"""Activity API: plans and favorites."""
from fastapi import APIRouter

from tinysparks.api.activity import routes_favorites, routes_plans

router = APIRouter()

router.include_router(routes_plans.router, tags=["activity-plans"])
router.include_router(routes_favorites.router, prefix="/favorites", tags=["activity-favorites"])
