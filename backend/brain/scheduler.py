"""
Study Plan Scheduler with Deterministic Greedy-Fill.
Pours topic effort into day-sized buckets from the start date onward.
"""
from __future__ import annotations

import logging
from collections import defaultdict
from datetime import date, timedelta
from typing import NamedTuple, Optional, Sequence

from brain.config import default_policies
from brain.policies import PlacementPolicy, PlanContext
from brain.schemas import Difficulty, Pace, ScheduleParams, ScheduleTask, Topic

logger = logging.getLogger(__name__)

BASE_MINUTES = {
    Difficulty.EASY: 60,
    Difficulty.MEDIUM: 120,
    Difficulty.HARD: 180,
}

PACE_MULTIPLIERS = {
    Pace.SLOW: 1.5,    # more time per topic
    Pace.MEDIUM: 1.0,
    Pace.FAST: 0.75,   # faster mastery
}

REVISION_MINUTES = 30


class DayCursor(NamedTuple):
    day: date
    used: int = 0
    has_hard: bool = False  # Hard study or revision already placed today
    opened: bool = False    # opening policies already ran for this day

    def free(self, budget: int) -> int:
        return budget - self.used

    def spend(self, minutes: int, hard: bool = False) -> DayCursor:
        return self._replace(used=self.used + minutes, has_hard=self.has_hard or hard)

    def next_day(self) -> DayCursor:
        return DayCursor(day=self.day + timedelta(days=1))


def effective_minutes(difficulty: Difficulty, pace: Pace) -> int:
    """Whole minutes of study a topic needs at the given pace."""
    return int(round(BASE_MINUTES[Difficulty(difficulty)] * PACE_MULTIPLIERS[Pace(pace)]))


def generate_schedule(
    topics: Sequence[Topic],
    start_date: date,
    exam_date: date,
    daily_minutes: int,
    pace: Pace | str,
    policies: Optional[Sequence[PlacementPolicy]] = None,
) -> list[ScheduleTask]:
    """
    Generates a plan by 'pouring' topics, in syllabus order, into days of
    `daily_minutes` each. The day cursor carries over between topics.
    Hard topics are followed by a 30-minute revision.

    Returns [] when the exam is not after the start date or there are no topics.
    `policies=None` uses the configured defaults; pass [] for the bare packer.
    """
    if daily_minutes <= 0:
        raise ValueError(f"daily_minutes must be positive, got {daily_minutes}")
    pace = Pace(pace)

    if (exam_date - start_date).days <= 0:
        logger.info("Impossible window: exam %s is not after start %s", exam_date, start_date)
        return []
    if not topics:
        return []

    if policies is None:
        policies = default_policies()
    ctx = PlanContext(start_date, exam_date, daily_minutes, pace)

    schedule: list[ScheduleTask] = []
    cursor = DayCursor(day=start_date)
    for topic in sorted(topics, key=lambda t: t.order):
        cursor = _place_topic(topic, cursor, ctx, policies, schedule)

    total = sum(t.duration_minutes for t in schedule)
    last_day = schedule[-1].day_date
    logger.info(
        "Scheduled %d topics as %d tasks (%d min) from %s to %s, pace=%s, policies=%s",
        len(topics), len(schedule), total, start_date, last_day, pace.value, list(policies),
    )
    if last_day >= exam_date:
        logger.warning("Plan runs to %s, on or past the exam on %s", last_day, exam_date)
    return schedule


def generate_plan(
    topics: Sequence[Topic],
    params: ScheduleParams,
    policies: Optional[Sequence[PlacementPolicy]] = None,
) -> list[ScheduleTask]:
    """Run the scheduler from stored plan parameters (hours per day)."""
    return generate_schedule(
        topics, params.start_date, params.exam_date, params.daily_minutes, params.pace, policies
    )


def daily_totals(tasks: Sequence[ScheduleTask]) -> dict[date, int]:
    totals: dict[date, int] = defaultdict(int)
    for t in tasks:
        totals[t.day_date] += t.duration_minutes
    return dict(totals)


def _open_day(cursor: DayCursor, ctx: PlanContext, policies, schedule: list) -> DayCursor:
    """Let policies reserve the start of a day the first time work lands on it."""
    if cursor.opened:
        return cursor
    for policy in policies:
        for task in policy.opening_tasks(cursor, ctx):
            minutes = min(task.duration_minutes, cursor.free(ctx.daily_minutes))
            if minutes <= 0:
                continue
            if minutes != task.duration_minutes:
                task = task.model_copy(update={"duration_minutes": minutes})
            schedule.append(task)
            cursor = cursor.spend(minutes)
            logger.debug("%s reserved %d min on %s", policy.name, minutes, cursor.day)
    return cursor._replace(opened=True)


def _place_topic(
    topic: Topic,
    cursor: DayCursor,
    ctx: PlanContext,
    policies,
    schedule: list[ScheduleTask],
) -> DayCursor:
    difficulty = Difficulty(topic.difficulty)
    is_hard = difficulty is Difficulty.HARD
    remaining = effective_minutes(difficulty, ctx.pace)
    part_indexes: list[int] = []

    while remaining > 0:
        cursor = _open_day(cursor, ctx, policies, schedule)
        if cursor.free(ctx.daily_minutes) <= 0:
            cursor = cursor.next_day()
            continue

        if not part_indexes and any(p.blocks_start(topic, cursor, ctx) for p in policies):
            logger.debug("Deferring start of %r from %s", topic.name, cursor.day)
            cursor = cursor.next_day()
            continue

        chunk = min(cursor.free(ctx.daily_minutes), remaining)
        part_indexes.append(len(schedule))
        schedule.append(ScheduleTask(
            day_date=cursor.day,
            description=f"Study {topic.name} ({difficulty.value}) - Part",
            duration_minutes=chunk,
            topic_id=topic.id,
            is_revision=False,
        ))
        logger.debug("Placed %d min of %r on %s", chunk, topic.name, cursor.day)

        remaining -= chunk
        cursor = cursor.spend(chunk, hard=is_hard)
        if cursor.free(ctx.daily_minutes) <= 0:
            cursor = cursor.next_day()

    total_parts = len(part_indexes)
    if total_parts > 1:
        for number, idx in enumerate(part_indexes, start=1):
            schedule[idx] = schedule[idx].model_copy(
                update={"part_number": number, "total_parts": total_parts}
            )

    if is_hard:
        cursor = _place_revision(topic, cursor, ctx, policies, schedule)
    return cursor


def _place_revision(
    topic: Topic,
    cursor: DayCursor,
    ctx: PlanContext,
    policies,
    schedule: list[ScheduleTask],
) -> DayCursor:
    # Capped at the budget so a short day can still hold it.
    minutes = min(REVISION_MINUTES, ctx.daily_minutes)
    cursor = _open_day(cursor, ctx, policies, schedule)
    while cursor.free(ctx.daily_minutes) < minutes:
        cursor = _open_day(cursor.next_day(), ctx, policies, schedule)

    schedule.append(ScheduleTask(
        day_date=cursor.day,
        description=f"Revision: {topic.name}",
        duration_minutes=minutes,
        topic_id=topic.id,
        is_revision=True,
    ))
    logger.debug("Placed revision of %r on %s", topic.name, cursor.day)
    return cursor.spend(minutes, hard=True)
