"""Activity domain: plan generation pipeline (prompt -> Gemini -> validated activities) and the request tracker."""
import asyncio
import json
import logging
import re
from collections import Counter
from typing import Any, Awaitable, Callable, Iterable, List, Optional

from pydantic import ValidationError as PydanticValidationError

from tinysparks.domain.activity.models import (
    Activity,
    ActivityCategory,
    ActivityRequest,
    DEVELOPMENTAL_CATEGORIES,
    PLAN_SIZE,
    PlanRequestState,
    SENSORY_ACTIVITY_COUNT,
)
from tinysparks.domain.activity.prompts import (
    ACTIVITY_PLAN_SCHEMA,
    SYSTEM_INSTRUCTION,
    build_activity_prompt,
)
from tinysparks.domain.activity.schemas import GeneratedActivity
from tinysparks.domain.common.errors import (
    ConfigurationError,
    DomainError,
    GenerationError,
    GenerationInProgressError,
)
from tinysparks.domain.common.types import generate_activity_id

logger = logging.getLogger(__name__)

_OPENING_FENCE = re.compile(r"^```[A-Za-z]*[ \t]*\n?")


def _strip_code_fence(text: str) -> str:
    """Remove a leading ```json (or ```) fence and a trailing ``` fence. Backticks inside the payload are kept."""
    text = text.strip()
    if text.startswith("```"):
        text = _OPENING_FENCE.sub("", text, count=1)
        if text.endswith("```"):
            text = text[:-3]
        text = text.strip()
    return text


def parse_activity_plan(text: Optional[str]) -> List[GeneratedActivity]:
    """Parse raw model output into validated items. Raises GenerationError on empty or malformed output."""
    if not text or not text.strip():
        raise GenerationError("No content generated from AI.")
    try:
        data = json.loads(_strip_code_fence(text))
    except json.JSONDecodeError as e:
        raise GenerationError(f"Response is not valid JSON: {e}") from e
    if not isinstance(data, list):
        raise GenerationError(f"Expected a JSON array, got {type(data).__name__}")
    items: List[GeneratedActivity] = []
    for index, raw in enumerate(data):
        try:
            items.append(GeneratedActivity.model_validate(raw))
        except PydanticValidationError as e:
            raise GenerationError(f"Activity {index} failed validation: {e}") from e
    return items


def validate_plan_composition(items: List[GeneratedActivity]) -> None:
    """Require exactly one activity per developmental category plus SENSORY_ACTIVITY_COUNT sensory ones."""
    if len(items) != PLAN_SIZE:
        raise GenerationError(f"Expected {PLAN_SIZE} activities, got {len(items)}")
    counts = Counter(item.category for item in items)
    for category in DEVELOPMENTAL_CATEGORIES:
        if counts[category] != 1:
            raise GenerationError(f"Expected exactly 1 {category.value!r} activity, got {counts[category]}")
    if counts[ActivityCategory.SENSORY_PLAY] != SENSORY_ACTIVITY_COUNT:
        raise GenerationError(
            f"Expected {SENSORY_ACTIVITY_COUNT} 'Sensory Play' activities, "
            f"got {counts[ActivityCategory.SENSORY_PLAY]}"
        )


class ActivityPlanService:
    """
    Generate a plan of activities via the LLM service.
    The LLM service is the only I/O boundary; everything else here is pure.
    """

    def __init__(
        self,
        llm_service: Any,
        model: Optional[str] = None,
        id_factory: Callable[[int], str] = generate_activity_id,
    ):
        self.llm_service = llm_service
        self.model = model
        self._id_factory = id_factory

    def _assign_ids(self, items: List[GeneratedActivity], reserved_ids: Iterable[str]) -> List[Activity]:
        taken = set(reserved_ids)
        out: List[Activity] = []
        for index, item in enumerate(items):
            activity_id = self._id_factory(index)
            while activity_id in taken:
                activity_id = self._id_factory(index)
            taken.add(activity_id)
            out.append(item.to_activity(activity_id))
        return out

    async def generate(
        self,
        request: ActivityRequest,
        reserved_ids: Iterable[str] = (),
    ) -> List[Activity]:
        """
        Build the prompt, call the completion service and return validated activities with fresh ids.
        reserved_ids: ids already in use (e.g. favorites); new ids never collide with them.
        Raises ConfigurationError before any network call when no API key is configured,
        GenerationError when the call fails or the output is unusable.
        """
        if not self.llm_service.has_text_provider:
            raise ConfigurationError()

        prompt = build_activity_prompt(request)
        logger.info(
            "Generating activity plan: age_group=%r interests=%s materials=%s",
            request.age_group.value,
            bool(request.child_interests),
            bool(request.materials_available),
        )
        try:
            text = await self.llm_service.generate_text_async(
                prompt,
                model=self.model,
                system_instruction=SYSTEM_INSTRUCTION,
                response_schema=ACTIVITY_PLAN_SCHEMA,
            )
        except Exception as e:
            logger.error("Error generating activities: %s", e, exc_info=True)
            raise GenerationError(str(e)) from e

        try:
            items = parse_activity_plan(text)
            validate_plan_composition(items)
        except GenerationError as e:
            logger.error("Error generating activities: %s", e.reason)
            raise

        activities = self._assign_ids(items, reserved_ids)
        logger.info("Generated %s activities", len(activities))
        return activities


class PlanRequestTracker:
    """
    Request-state machine for plan submissions: idle -> in_flight -> succeeded | failed.
    A submission while in_flight is rejected. The last successful plan is kept after later failures.
    """

    def __init__(self) -> None:
        self.state = PlanRequestState.IDLE
        self.activities: List[Activity] = []
        self.error: Optional[str] = None

    @property
    def in_flight(self) -> bool:
        return self.state is PlanRequestState.IN_FLIGHT

    async def run(self, generate: Callable[[], Awaitable[List[Activity]]]) -> List[Activity]:
        """Run one submission. The in-flight check and state change happen before the first await."""
        if self.in_flight:
            raise GenerationInProgressError()
        self.state = PlanRequestState.IN_FLIGHT
        self.error = None
        try:
            activities = await generate()
        except asyncio.CancelledError:
            self.state = PlanRequestState.FAILED
            self.error = "Request was cancelled."
            raise
        except DomainError as e:
            self.state = PlanRequestState.FAILED
            self.error = getattr(e, "message", None) or str(e)
            raise
        except Exception:
            self.state = PlanRequestState.FAILED
            self.error = GenerationError().message
            raise
        self.state = PlanRequestState.SUCCEEDED
        self.activities = list(activities)
        return activities

    def snapshot(self) -> dict[str, Any]:
        return {
            "state": self.state.value,
            "activities": list(self.activities),
            "error": self.error,
        }
