import json
import re
from typing import Any, Dict, Optional

# (temperature, max_tokens) presets for the convenience operations
TASK_SUGGESTIONS_PRESET = (0.8, 200)
SCHEDULE_PRESET = (0.7, 300)
HEALTH_PRESET = (0.6, 250)
UI_RECOMMENDATIONS_PRESET = (0.7, 500)

INSIGHTS_PROMPT = "Generate dashboard insights"
INSIGHTS_CONTEXT = {"view": "insights", "dataType": "analytics"}

UI_RECOMMENDATIONS_PROMPT = (
    "Given a personal life management dashboard, provide specific UI/UX recommendations for:\n"
    "1. Minimalistic design principles\n"
    "2. Dynamic content loading patterns\n"
    "3. Progressive disclosure of features\n"
    "4. Color scheme and typography\n"
    "5. Layout and spacing\n"
    "6. Interactive elements\n"
    "Focus on creating a clean, uncluttered interface that reveals functionality as needed."
)

_UI_UPDATE_RE = re.compile(r"UI_UPDATE:(.*?)END_UPDATE", re.DOTALL)


def _dump(data: Any) -> str:
    return json.dumps(data, ensure_ascii=False, default=str)


def build_task_suggestions_prompt(context: Any) -> str:
    return f"Based on the following context, suggest 3 relevant tasks:\n{_dump(context)}"


def build_schedule_prompt(schedule: Any) -> str:
    return f"Optimize the following schedule for better productivity:\n{_dump(schedule)}"


def build_health_prompt(health_data: Any) -> str:
    return f"Based on the following health data, provide personalized recommendations:\n{_dump(health_data)}"


def parse_ui_changes(text: str) -> Optional[Dict[str, Any]]:
    """Pull the JSON object out of a UI_UPDATE:...END_UPDATE directive, if any."""
    match = _UI_UPDATE_RE.search(text or "")
    if not match:
        return None
    try:
        changes = json.loads(match.group(1))
    except json.JSONDecodeError:
        return None
    return changes if isinstance(changes, dict) else None
