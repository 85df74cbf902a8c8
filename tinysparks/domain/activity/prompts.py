"""Prompt text and response schema for activity plan generation."""
from typing import Any

from tinysparks.domain.activity.models import (
    ActivityCategory,
    ActivityRequest,
    DEVELOPMENTAL_CATEGORIES,
    PLAN_SIZE,
    SENSORY_ACTIVITY_COUNT,
)

DEFAULT_MATERIALS_LINE = "- Materials: Common household items only"

SYSTEM_INSTRUCTION = (
    "You are a warm, helpful, and expert parenting consultant. You specialize in child development "
    "and Montessori-inspired home activities. Always prioritize safety."
)

REQUIRED_ACTIVITY_FIELDS = ["title", "category", "description", "materials", "duration", "safetyTip", "tags"]

# Passed to Gemini as response_schema (google.genai accepts the dict form of types.Schema)
ACTIVITY_PLAN_SCHEMA: dict[str, Any] = {
    "type": "ARRAY",
    "items": {
        "type": "OBJECT",
        "properties": {
            "title": {"type": "STRING", "description": "A catchy, fun title for the activity"},
            "category": {
                "type": "STRING",
                "description": "The category: 'Fine Motor', 'Gross Motor', 'Language', 'Cognitive', or 'Sensory Play'",
            },
            "description": {"type": "STRING", "description": "Clear, step-by-step instructions (2-3 sentences max)"},
            "materials": {
                "type": "ARRAY",
                "items": {"type": "STRING"},
                "description": "List of items needed",
            },
            "duration": {"type": "STRING", "description": "Estimated time (e.g., '15-20 mins')"},
            "safetyTip": {"type": "STRING", "description": "Crucial safety warning or supervision advice"},
            "tags": {
                "type": "ARRAY",
                "items": {"type": "STRING"},
                "description": "2-3 keywords describing the activity type (e.g., 'Messy', 'Quiet', 'Outdoor')",
            },
        },
        "required": REQUIRED_ACTIVITY_FIELDS,
    },
}


def _profile_lines(request: ActivityRequest) -> list[str]:
    lines = [f"- Age Group: {request.age_group.value}"]
    if request.child_interests:
        lines.append(f"- Interests/Themes: {request.child_interests}")
    if request.materials_available:
        lines.append(f"- Available Materials at Home: {request.materials_available}")
    else:
        lines.append(DEFAULT_MATERIALS_LINE)
    return lines


def build_activity_prompt(request: ActivityRequest) -> str:
    """Build the plan prompt: child profile, then the two sections the model must fill."""
    profile = "\n".join(_profile_lines(request))
    developmental = "\n".join(
        f"{i}. {category.value}" for i, category in enumerate(DEVELOPMENTAL_CATEGORIES, start=1)
    )
    sensory = ActivityCategory.SENSORY_PLAY.value
    return f"""I need a comprehensive activity plan for a child.

Child Profile:
{profile}

Please generate exactly {PLAN_SIZE} distinct activities organized into two main sections:

SECTION 1: Developmental Milestones ({len(DEVELOPMENTAL_CATEGORIES)} activities)
Generate one activity for each of these specific categories:
{developmental}

SECTION 2: Sensory Play Special ({SENSORY_ACTIVITY_COUNT} activities)
Generate {SENSORY_ACTIVITY_COUNT} distinct Sensory Play activities focusing on different senses (touch, sight, sound, smell, taste).
The category for all of these should be "{sensory}".

Requirements:
- Focus on low-prep, high-engagement ideas suitable for the home.
- Include specific safety tips relevant to the age group.
- Ensure the "category" field matches the specific skill (e.g., "Fine Motor") or "{sensory}".

Return the response as a JSON array of objects."""
