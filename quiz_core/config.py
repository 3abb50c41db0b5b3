from __future__ import annotations
import os


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw.strip())
    except ValueError:
        return default


SKILL_MIN: int = 1
SKILL_MAX: int = 10

# dominant score at or above this earns the advanced badge
ADVANCED_THRESHOLD: int = 7
# max skill at or above this adds the leadership learning paths
PATHS_ADVANCED_THRESHOLD: int = 8
MAX_RECOMMENDED_PATHS: int = 5

PREDICT_LIMIT: int = 10
MIN_ANSWERS_PARTIAL: int = 3

ROOT_QUESTION: str = "q1"
TIME_QUESTION: str = "q4-time"
LEARNING_QUESTION: str = "q5-learning"
GOAL_QUESTION: str = "q6-goals"

DEFAULT_TIME: str = "medium"
DEFAULT_LEARNING: str = "interactive"
DEFAULT_GOAL: str = "personal"

MIRROR_ENABLED: bool = False

# idle API sessions older than this are dropped on the next /quiz/start
SESSION_TTL_MINUTES: int = 120

# deployment overrides
ADVANCED_THRESHOLD = _env_int("ADVANCED_THRESHOLD", ADVANCED_THRESHOLD)
PATHS_ADVANCED_THRESHOLD = _env_int("PATHS_ADVANCED_THRESHOLD", PATHS_ADVANCED_THRESHOLD)
MAX_RECOMMENDED_PATHS = _env_int("MAX_RECOMMENDED_PATHS", MAX_RECOMMENDED_PATHS)
PREDICT_LIMIT = _env_int("PREDICT_LIMIT", PREDICT_LIMIT)
MIN_ANSWERS_PARTIAL = _env_int("MIN_ANSWERS_PARTIAL", MIN_ANSWERS_PARTIAL)
SESSION_TTL_MINUTES = _env_int("SESSION_TTL_MINUTES", SESSION_TTL_MINUTES)
MIRROR_ENABLED = _env_bool("MIRROR_ENABLED", bool(os.getenv("MIRROR_DATA_DIR")))
