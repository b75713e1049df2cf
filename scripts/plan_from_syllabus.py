"""Build a study calendar from a syllabus text file and print it day by day.

Usage (after `pip install -e .`):
  python scripts/plan_from_syllabus.py syllabus.txt --exam 2026-12-01 --hours 2 --pace Slow
"""

import argparse
import logging
import sys
from datetime import date
from itertools import groupby

from brain.config import DEFAULT_DAILY_HOURS, DEFAULT_PACE, configure_logging
from brain.schemas import ScheduleParams
from brain.scheduler import daily_totals, generate_plan
from brain.syllabus_parser import parse_syllabus_text

logger = logging.getLogger("plan_from_syllabus")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("syllabus", help="path to the extracted syllabus text")
    parser.add_argument("--start", type=date.fromisoformat, default=date.today())
    parser.add_argument("--exam", type=date.fromisoformat, required=True)
    parser.add_argument("--hours", type=int, default=DEFAULT_DAILY_HOURS)
    parser.add_argument("--pace", choices=["Slow", "Medium", "Fast"], default=DEFAULT_PACE)
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    configure_logging(args.log_level)

    with open(args.syllabus, "r", encoding="utf-8") as f:
        text = f.read()
    logger.info("Read %d characters from %s", len(text), args.syllabus)

    # Persistence would assign ids; number them in syllabus order here.
    topics = [t.model_copy(update={"id": t.order}) for t in parse_syllabus_text(text)]
    for t in topics:
        print(f"  [{t.order}] {t.name} ({t.difficulty.value}, {len(t.subtopics)} subtopics)")

    params = ScheduleParams(start_date=args.start, exam_date=args.exam, daily_hours=args.hours, pace=args.pace)
    tasks = generate_plan(topics, params)
    if not tasks:
        print("No schedule: the exam date must be after the start date.")
        return 1

    totals = daily_totals(tasks)
    for day, day_tasks in groupby(tasks, key=lambda t: t.day_date):
        print(f"\n{day.isoformat()}  ({totals[day]} min)")
        for t in day_tasks:
            part = f" {t.part_number}/{t.total_parts}" if t.total_parts > 1 else ""
            print(f"  - {t.description}{part}: {t.duration_minutes} min")
    return 0


if __name__ == "__main__":
    sys.exit(main())
