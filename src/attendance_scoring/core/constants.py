"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

MIN_PERCENTAGE = 0.0
MAX_PERCENTAGE = 100.0
SKIP_PERCENTAGE = 100.0

DEFAULT_SUBMISSION_WINDOW_DAYS = 3
DEFAULT_MINIMUM_MINUTES_PER_WEEK = 240

STEP_MINUTES = 5
STEP_PERCENT = 5
