"""Pytest configuration and shared fixtures."""
import json
import sys
from pathlib import Path
from typing import Any, Optional

project_dir = Path(__file__).parent.parent
if str(project_dir) not in sys.path:
    sys.path.insert(0, str(project_dir))

import pytest

from tinysparks.domain.activity.models import Activity
from tinysparks.domain.favorites.services import FavoritesStore
from tinysparks.infra.storage.kv_storage import InMemoryStorage


SAMPLE_PLAN_ITEMS = [
    {
        "title": "Pom-Pom Tong Transfer",
        "category": "Fine Motor",
        "description": "Use kitchen tongs to move pom-poms between two bowls. Count each one as it lands.",
        "materials": ["kitchen tongs", "pom-poms", "2 bowls"],
        "duration": "10-15 mins",
        "safetyTip": "Pom-poms are a choking hazard; supervise closely.",
        "tags": ["Quiet", "Indoor"],
    },
    {
        "title": "Pillow Mountain Climb",
        "category": "Gross Motor",
        "description": "Stack couch cushions into a soft mountain and let your toddler climb over it.",
        "materials": ["couch cushions", "pillows"],
        "duration": "15-20 mins",
        "safetyTip": "Keep the area clear of hard furniture edges.",
        "tags": ["Active", "Indoor"],
    },
    {
        "title": "Animal Sound Book Walk",
        "category": "Language",
        "description": "Flip through a picture book and make the sound of each animal together.",
        "materials": ["picture book"],
        "duration": "10 mins",
        "safetyTip": "Choose board books without small detachable parts.",
        "tags": ["Quiet", "Reading"],
    },
    {
        "title": "Cup Stack Hide and Seek",
        "category": "Cognitive",
        "description": "Hide a toy under one of three cups and shuffle slowly. Ask where it went.",
        "materials": ["3 plastic cups", "small toy"],
        "duration": "10 mins",
        "safetyTip": "Use a toy larger than a toilet-paper tube opening.",
        "tags": ["Puzzle", "Indoor"],
    },
    {
        "title": "Jelly Squish Bag",
        "category": "Sensory Play",
        "description": "Seal hair gel and beads in a zip bag and tape it to the floor to squish.",
        "materials": ["zip bag", "hair gel", "beads", "tape"],
        "duration": "15 mins",
        "safetyTip": "Double-seal the bag and check for leaks.",
        "tags": ["Touch", "Messy"],
    },
    {
        "title": "Flashlight Color Show",
        "category": "Sensory Play",
        "description": "Cover a flashlight with colored tissue paper and shine it on the ceiling.",
        "materials": ["flashlight", "tissue paper", "rubber band"],
        "duration": "10 mins",
        "safetyTip": "Never shine the light directly into eyes.",
        "tags": ["Sight", "Calm"],
    },
    {
        "title": "Pots and Pans Band",
        "category": "Sensory Play",
        "description": "Set out pots and wooden spoons and make loud and soft music together.",
        "materials": ["pots", "wooden spoons"],
        "duration": "10-15 mins",
        "safetyTip": "Keep volume moderate to protect little ears.",
        "tags": ["Sound", "Loud"],
    },
    {
        "title": "Spice Sniff Jars",
        "category": "Sensory Play",
        "description": "Put cinnamon, vanilla and lemon peel in covered jars with holes to smell.",
        "materials": ["small jars", "cinnamon", "vanilla", "lemon peel"],
        "duration": "10 mins",
        "safetyTip": "Keep lids secured so powders are not inhaled.",
        "tags": ["Smell", "Quiet"],
    },
    {
        "title": "Fruit Taste Rainbow",
        "category": "Sensory Play",
        "description": "Offer soft fruit pieces in different colors and talk about each taste.",
        "materials": ["banana", "berries", "melon"],
        "duration": "15 mins",
        "safetyTip": "Cut fruit into pieces smaller than a fingertip to prevent choking.",
        "tags": ["Taste", "Snack"],
    },
]


class FakeLLMService:
    """Stands in for LLMService at the completion-service boundary and records every call."""

    def __init__(
        self,
        response: Optional[str] = None,
        *,
        configured: bool = True,
        error: Optional[Exception] = None,
    ):
        self.response = response
        self.configured = configured
        self.error = error
        self.calls: list[dict[str, Any]] = []

    @property
    def has_text_provider(self) -> bool:
        return self.configured

    async def generate_text_async(self, prompt, model=None, *, system_instruction=None, response_schema=None):
        self.calls.append({
            "prompt": prompt,
            "model": model,
            "system_instruction": system_instruction,
            "response_schema": response_schema,
        })
        if self.error is not None:
            raise self.error
        return self.response


def make_activity(activity_id: str = "fav-1", **overrides) -> Activity:
    fields = {
        "id": activity_id,
        "title": "Pom-Pom Tong Transfer",
        "category": "Fine Motor",
        "description": "Move pom-poms with tongs.",
        "duration": "10 mins",
        "safety_tip": "Supervise closely.",
        "materials": ["tongs", "pom-poms"],
        "tags": ["Quiet"],
    }
    fields.update(overrides)
    return Activity(**fields)


@pytest.fixture
def plan_items() -> list[dict]:
    return [dict(item) for item in SAMPLE_PLAN_ITEMS]


@pytest.fixture
def plan_json(plan_items) -> str:
    return json.dumps(plan_items)


@pytest.fixture
def fake_llm(plan_json) -> FakeLLMService:
    return FakeLLMService(plan_json)


@pytest.fixture
def storage() -> InMemoryStorage:
    return InMemoryStorage()


@pytest.fixture
def favorites_store(storage) -> FavoritesStore:
    store = FavoritesStore(storage)
    store.load()
    return store
