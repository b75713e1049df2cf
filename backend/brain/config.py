"""Engine configuration: env vars, default policies, logging.

DEPLOYMENT:
  Put overrides in a .env file at the project root.
  Policy toggles only change which day-fitting rules the planner applies.
"""

import logging
import os
from dotenv import load_dotenv

BASE_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))  # backend/
PROJECT_DIR = os.path.dirname(BASE_DIR)  # project root

load_dotenv(os.path.join(PROJECT_DIR, ".env"), override=True)


def _env_flag(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


# ─── Plan defaults ───────────────────────────────────────────
DEFAULT_DAILY_HOURS = int(os.environ.get("STUDY_DAILY_HOURS", 2))
DEFAULT_PACE = os.environ.get("STUDY_DEFAULT_PACE", "Medium")

# ─── Placement policies ──────────────────────────────────────
# Slow learners get at most one Hard topic per calendar day.
SLOW_PACE_SINGLE_HARD = _env_flag("SLOW_PACE_SINGLE_HARD", "1")
# Generic revision slot every 7 elapsed days. Off unless asked for.
WEEKLY_REVISION_BUFFER = _env_flag("WEEKLY_REVISION_BUFFER", "0")

# ─── Logging ─────────────────────────────────────────────────
LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()


def default_policies() -> list:
    from brain.policies import SingleHardTopicPerDay, WeeklyRevisionBuffer

    policies = []
    if SLOW_PACE_SINGLE_HARD:
        policies.append(SingleHardTopicPerDay())
    if WEEKLY_REVISION_BUFFER:
        policies.append(WeeklyRevisionBuffer())
    return policies


def configure_logging(level: str | None = None) -> None:
    logging.basicConfig(
        level=level or LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
