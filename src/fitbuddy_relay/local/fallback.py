"""Rule-based FitBuddy replies used when Gemini is unconfigured or failing."""
from __future__ import annotations
import re

WORKOUT_REPLY = (
    "Sample full-body routine (local fallback):\n"
    "- Squats 3x10\n"
    "- Push-ups 3x8-12\n"
    "- Rows 3x8-12\n"
    "- Plank 3x30s\n"
    "Do this 3x/week. (This is the local fallback - enable Gemini API for richer replies.)"
)
DIET_REPLY = (
    "Local diet tip: prioritize protein (1.6-2.2 g/kg), eat whole foods, "
    "and reduce processed sugars."
)
GREETING_REPLY = "Hey — I'm FitBuddy. Ask me for workout plans, diet tips, or motivation."
UNMATCHED_REPLY = (
    "I didn't understand. Try asking \"Give me a 30 minute full-body home workout\" "
    "or \"How many calories should I eat to lose weight?\""
)

# Checked in order; first match wins.
_RULES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\b(workout|exercise|plan|routine)\b"), WORKOUT_REPLY),
    (re.compile(r"\b(diet|calorie|protein|meal)\b"), DIET_REPLY),
    (re.compile(r"\b(hi|hello|hey)\b"), GREETING_REPLY),
)

def local_fallback(message: str | None) -> str:
    """Return the canned reply for the first keyword category ``message`` hits."""
    msg = (message or "").lower()
    for pattern, reply in _RULES:
        if pattern.search(msg):
            return reply
    return UNMATCHED_REPLY
