"""Planning business rules.

Fixed constants shared by the breakdown, the validators and the wizard.
"""
from __future__ import annotations

DEFAULT_SHOT_COUNT: int = 12
MAX_STORY_STEPS: int = 4

MIN_SHOT_SEQUENCES: int = 4
MAX_SHOT_SEQUENCES: int = 30

# Seconds
MIN_SHOT_DURATION: int = 1
MAX_SHOT_DURATION: int = 60
DEFAULT_ACT_DURATION: int = 30

MAX_TITLE_LENGTH: int = 100
MAX_LOGLINE_LENGTH: int = 500

# Act durations further apart than this ratio trigger an "uneven" warning
UNEVEN_DURATION_RATIO: int = 3

SESSION_RESTORE_TIMEOUT_SEC: int = 24 * 60 * 60
