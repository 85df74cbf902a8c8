"""API dependencies."""
from fastapi import Depends, Request

from tinysparks.domain.activity.services import ActivityPlanService, PlanRequestTracker
from tinysparks.domain.favorites.services import FavoritesStore
from tinysparks.infra.storage.kv_storage import build_storage
from tinysparks.services.llm_service import LLMService
from tinysparks.settings import settings


def get_llm_service() -> LLMService:
    """Build LLM service from settings."""
    return LLMService(
        gemini_api_key=settings.gemini_api_key or None,
        default_text_model=settings.llm_default_text_model or None,
        backup_text_model=settings.llm_backup_text_model or None,
    )


def get_activity_plan_service(
    llm_service: LLMService = Depends(get_llm_service),
) -> ActivityPlanService:
    return ActivityPlanService(llm_service, model=settings.llm_default_text_model or None)


def build_favorites_store() -> FavoritesStore:
    """Create and load the process-wide favorites store from settings."""
    storage = build_storage(settings.favorites_storage_backend, settings.favorites_storage_path)
    store = FavoritesStore(storage, key=settings.favorites_storage_key)
    store.load()
    return store


def get_favorites_store(request: Request) -> FavoritesStore:
    """Favorites store owned by the app (created in lifespan; created here if lifespan did not run)."""
    store = getattr(request.app.state, "favorites_store", None)
    if store is None:
        store = build_favorites_store()
        request.app.state.favorites_store = store
    return store


def get_plan_tracker(request: Request) -> PlanRequestTracker:
    """Plan request tracker owned by the app."""
    tracker = getattr(request.app.state, "plan_tracker", None)
    if tracker is None:
        tracker = PlanRequestTracker()
        request.app.state.plan_tracker = tracker
    return tracker
