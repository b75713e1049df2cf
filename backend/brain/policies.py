"""
Day-fitting constraints consulted by the planner before it places work.
Each policy is independent; the planner applies whichever ones it is given.
"""
from __future__ import annotations

from datetime import date
from brain.schemas import Difficulty, Pace, ScheduleTask, Topic

WEEKLY_REVISION_MINUTES = 30


class PlanContext:
    """Fixed inputs of one planner run, shared read-only with the policies."""

    def __init__(self, start_date: date, exam_date: date, daily_minutes: int, pace: Pace):
        self.start_date = start_date
        self.exam_date = exam_date
        self.daily_minutes = daily_minutes
        self.pace = pace

    def __repr__(self):
        return (f"PlanContext({self.start_date}..{self.exam_date}, "
                f"{self.daily_minutes}m/day, {self.pace.value})")


class PlacementPolicy:
    """Base constraint. Subclasses override the hooks they care about."""

    name = "policy"

    def blocks_start(self, topic: Topic, cursor, ctx: PlanContext) -> bool:
        """Return True to push the topic's first chunk to the next day."""
        return False

    def opening_tasks(self, cursor, ctx: PlanContext) -> list[ScheduleTask]:
        """Tasks reserved at the start of a day, before any study is placed."""
        return []

    def __repr__(self):
        return f"{type(self).__name__}()"


class SingleHardTopicPerDay(PlacementPolicy):
    """Slow-pace plans never start a Hard topic on a day already holding Hard work."""

    name = "slow_single_hard"

    def blocks_start(self, topic: Topic, cursor, ctx: PlanContext) -> bool:
        return (
            ctx.pace is Pace.SLOW
            and topic.difficulty is Difficulty.HARD
            and cursor.has_hard
        )


class WeeklyRevisionBuffer(PlacementPolicy):
    """Opens every `every_days`-th day of the plan with a generic revision slot."""

    name = "weekly_revision"

    def __init__(self, every_days: int = 7, minutes: int = WEEKLY_REVISION_MINUTES):
        if every_days <= 0 or minutes <= 0:
            raise ValueError("every_days and minutes must be positive")
        self.every_days = every_days
        self.minutes = minutes

    def opening_tasks(self, cursor, ctx: PlanContext) -> list[ScheduleTask]:
        offset = (cursor.day - ctx.start_date).days
        if offset <= 0 or offset % self.every_days or cursor.day >= ctx.exam_date:
            return []
        return [ScheduleTask(
            day_date=cursor.day,
            description="Weekly revision",
            duration_minutes=min(self.minutes, ctx.daily_minutes),
            topic_id=None,
            is_revision=True,
        )]

    def __repr__(self):
        return f"WeeklyRevisionBuffer(every_days={self.every_days}, minutes={self.minutes})"
