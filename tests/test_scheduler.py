"""Tests for brain.scheduler greedy day packing."""

import logging
from collections import defaultdict
from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from brain.policies import SingleHardTopicPerDay, WeeklyRevisionBuffer
from brain.scheduler import (
    daily_totals,
    effective_minutes,
    generate_plan,
    generate_schedule,
)
from brain.schemas import Difficulty, Pace, ScheduleParams, Topic

D0 = date(2026, 3, 2)


def _topic(topic_id, name, difficulty, order=None):
    return Topic(id=topic_id, name=name, difficulty=difficulty, order=order or topic_id)


def _day(n):
    return D0 + timedelta(days=n)


def _mixed_topics():
    return [
        _topic(1, "Sets", "Easy"),
        _topic(2, "Graphs", "Hard"),
        _topic(3, "Trees", "Medium"),
        _topic(4, "Flows", "Hard"),
        _topic(5, "Logic", "Easy"),
    ]


def test_intro_then_algorithms_packs_across_three_days():
    topics = [_topic(1, "Intro", "Easy"), _topic(2, "Algorithms", "Hard")]

    tasks = generate_schedule(topics, D0, _day(10), 120, Pace.MEDIUM, policies=[])

    assert [(t.day_date, t.duration_minutes, t.topic_id, t.is_revision) for t in tasks] == [
        (_day(0), 60, 1, False),
        (_day(0), 60, 2, False),
        (_day(1), 120, 2, False),
        (_day(2), 30, 2, True),
    ]
    assert tasks[0].description == "Study Intro (Easy) - Part"
    assert tasks[1].description == "Study Algorithms (Hard) - Part"
    assert tasks[3].description == "Revision: Algorithms"
    assert sum(t.duration_minutes for t in tasks) == 270


def test_split_topic_gets_part_numbers():
    topics = [_topic(1, "Intro", "Easy"), _topic(2, "Algorithms", "Hard")]

    tasks = generate_schedule(topics, D0, _day(10), 120, "Medium", policies=[])

    assert (tasks[0].part_number, tasks[0].total_parts) == (1, 1)
    assert (tasks[1].part_number, tasks[1].total_parts) == (1, 2)
    assert (tasks[2].part_number, tasks[2].total_parts) == (2, 2)
    assert (tasks[3].part_number, tasks[3].total_parts) == (1, 1)


@pytest.mark.parametrize("exam_offset", [0, -1, -30])
def test_non_positive_window_returns_empty(exam_offset):
    assert generate_schedule(_mixed_topics(), D0, _day(exam_offset), 120, Pace.MEDIUM) == []


def test_empty_topics_returns_empty():
    assert generate_schedule([], D0, _day(10), 120, Pace.SLOW) == []


@pytest.mark.parametrize("budget", [0, -60])
def test_non_positive_budget_fails_fast(budget):
    with pytest.raises(ValueError):
        generate_schedule(_mixed_topics(), D0, _day(10), budget, Pace.MEDIUM)


def test_unknown_pace_is_rejected():
    with pytest.raises(ValueError):
        generate_schedule(_mixed_topics(), D0, _day(10), 120, "Turbo")


@pytest.mark.parametrize(
    "difficulty, pace, expected",
    [
        (Difficulty.EASY, Pace.SLOW, 90),
        (Difficulty.MEDIUM, Pace.SLOW, 180),
        (Difficulty.HARD, Pace.SLOW, 270),
        (Difficulty.EASY, Pace.MEDIUM, 60),
        (Difficulty.HARD, Pace.MEDIUM, 180),
        (Difficulty.EASY, Pace.FAST, 45),
        (Difficulty.MEDIUM, Pace.FAST, 90),
        (Difficulty.HARD, Pace.FAST, 135),
    ],
)
def test_effective_minutes(difficulty, pace, expected):
    assert effective_minutes(difficulty, pace) == expected


@pytest.mark.parametrize("pace", list(Pace))
@pytest.mark.parametrize("budget", [25, 45, 120, 240])
def test_study_minutes_per_topic_match_effort(pace, budget):
    topics = _mixed_topics()

    tasks = generate_schedule(topics, D0, _day(60), budget, pace, policies=[])

    studied = defaultdict(int)
    for t in tasks:
        if not t.is_revision:
            studied[t.topic_id] += t.duration_minutes
    for topic in topics:
        assert studied[topic.id] == effective_minutes(topic.difficulty, pace)


@pytest.mark.parametrize("pace", list(Pace))
@pytest.mark.parametrize("budget", [20, 45, 100, 180])
@pytest.mark.parametrize("with_policies", [False, True])
def test_no_day_exceeds_budget(pace, budget, with_policies):
    policies = [SingleHardTopicPerDay(), WeeklyRevisionBuffer()] if with_policies else []

    tasks = generate_schedule(_mixed_topics(), D0, _day(90), budget, pace, policies=policies)

    assert tasks
    assert all(minutes <= budget for minutes in daily_totals(tasks).values())
    assert all(t.duration_minutes > 0 for t in tasks)


def test_each_hard_topic_is_followed_by_one_revision():
    topics = _mixed_topics()

    tasks = generate_schedule(topics, D0, _day(30), 90, Pace.MEDIUM, policies=[])

    for topic in topics:
        revisions = [t for t in tasks if t.is_revision and t.topic_id == topic.id]
        if topic.difficulty is not Difficulty.HARD:
            assert revisions == []
            continue
        assert len(revisions) == 1
        assert revisions[0].duration_minutes == 30
        last_study = max(i for i, t in enumerate(tasks) if t.topic_id == topic.id and not t.is_revision)
        assert tasks[last_study + 1] == revisions[0]


def test_revision_rolls_to_next_day_when_less_than_30_minutes_left():
    tasks = generate_schedule([_topic(1, "Compilers", "Hard")], D0, _day(5), 200, Pace.MEDIUM, policies=[])

    assert [(t.day_date, t.duration_minutes, t.is_revision) for t in tasks] == [
        (_day(0), 180, False),
        (_day(1), 30, True),
    ]


def test_revision_is_capped_by_a_short_day():
    tasks = generate_schedule([_topic(1, "Compilers", "Hard")], D0, _day(30), 20, Pace.MEDIUM, policies=[])

    study = [t for t in tasks if not t.is_revision]
    assert len(study) == 9
    assert tasks[-1].is_revision
    assert tasks[-1].duration_minutes == 20
    assert tasks[-1].day_date == _day(9)


def test_cursor_carries_over_between_topics():
    topics = [_topic(1, "A", "Easy"), _topic(2, "B", "Easy"), _topic(3, "C", "Easy")]

    tasks = generate_schedule(topics, D0, _day(10), 90, Pace.MEDIUM, policies=[])

    assert [(t.day_date, t.duration_minutes, t.topic_id) for t in tasks] == [
        (_day(0), 60, 1),
        (_day(0), 30, 2),
        (_day(1), 30, 2),
        (_day(1), 60, 3),
    ]


def test_topics_are_processed_by_order_not_list_position():
    topics = [_topic(2, "Second", "Easy", order=2), _topic(1, "First", "Easy", order=1)]

    tasks = generate_schedule(topics, D0, _day(10), 120, Pace.MEDIUM, policies=[])

    assert [t.topic_id for t in tasks] == [1, 2]


def test_topics_without_ids_produce_unlinked_tasks():
    topics = [Topic(name="Loose", difficulty="Medium", order=1)]

    tasks = generate_schedule(topics, D0, _day(3), 120, Pace.MEDIUM, policies=[])

    assert len(tasks) == 1
    assert tasks[0].topic_id is None


def test_tasks_are_immutable():
    tasks = generate_schedule([_topic(1, "A", "Easy")], D0, _day(3), 120, Pace.MEDIUM, policies=[])

    with pytest.raises(ValidationError):
        tasks[0].duration_minutes = 5


def test_overflow_past_exam_is_logged(caplog):
    with caplog.at_level(logging.WARNING, logger="brain.scheduler"):
        tasks = generate_schedule([_topic(1, "A", "Medium")], D0, _day(1), 60, Pace.MEDIUM, policies=[])

    assert [t.day_date for t in tasks] == [_day(0), _day(1)]
    assert "past the exam" in caplog.text


def test_generate_plan_converts_hours_to_minutes():
    topics = _mixed_topics()
    params = ScheduleParams(start_date=D0, exam_date=_day(20), daily_hours=2, pace="Fast")

    assert generate_plan(topics, params, policies=[]) == generate_schedule(
        topics, D0, _day(20), 120, Pace.FAST, policies=[]
    )


def test_schedule_params_reject_non_positive_hours():
    with pytest.raises(ValidationError):
        ScheduleParams(start_date=D0, exam_date=_day(5), daily_hours=0)


def test_daily_totals_groups_by_day():
    topics = [_topic(1, "Intro", "Easy"), _topic(2, "Algorithms", "Hard")]
    tasks = generate_schedule(topics, D0, _day(10), 120, Pace.MEDIUM, policies=[])

    assert daily_totals(tasks) == {_day(0): 120, _day(1): 120, _day(2): 30}
