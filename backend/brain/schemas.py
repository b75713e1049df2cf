"""Study plan records: topics, schedule tasks, schedule parameters."""

from datetime import date
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Pace(str, Enum):
    SLOW = "Slow"
    MEDIUM = "Medium"
    FAST = "Fast"


# ─── Topics ───────────────────────────────────────────────

class Topic(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: Optional[int] = None  # assigned by persistence, absent on fresh extractor output
    subject: str = "General"
    name: str
    subtopics: list[str] = Field(default_factory=list)
    difficulty: Difficulty = Difficulty.MEDIUM
    order: int = Field(ge=1)


# ─── Schedule ─────────────────────────────────────────────

class ScheduleTask(BaseModel):
    model_config = ConfigDict(frozen=True)

    day_date: date
    description: str
    duration_minutes: int = Field(gt=0)
    topic_id: Optional[int] = None
    is_revision: bool = False
    part_number: int = 1
    total_parts: int = 1


class ScheduleParams(BaseModel):
    start_date: date
    exam_date: date
    daily_hours: int = Field(gt=0)
    pace: Pace = Pace.MEDIUM

    @property
    def daily_minutes(self) -> int:
        return self.daily_hours * 60
