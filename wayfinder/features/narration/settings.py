from __future__ import annotations

"""Default pacing and wording for turn-by-turn narration."""

STEP_INTERVAL_S = 4.0  # seconds between announcements
TURN_THRESHOLD_DEG = 45.0

# Category families that are always announced when passed
IMPORTANT_CATEGORY_FAMILIES = ("Staircase", "Gateway", "Toilet")

ARRIVAL_TEMPLATE = "You have arrived at {name}"
