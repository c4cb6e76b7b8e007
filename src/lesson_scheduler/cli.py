"""
Lesson scheduler command-line interface.

Usage:
    lesson-scheduler allocate --students students.json --instructors instructors.json [--seed N]
    lesson-scheduler layout --schedule schedule.json --date YYYY-MM-DD

Examples:
    # Allocate weekly slots for every student, reproducibly
    lesson-scheduler allocate --students data/students.json \\
        --instructors data/instructors.json --seed 42 --start-date 2026-10-19

    # Show the lane layout of one day from a saved schedule
    lesson-scheduler layout --schedule output/reports/schedule.json --date 2026-10-21
"""

import argparse
import logging
import random
import sys
from datetime import date
from pathlib import Path
from typing import List, Optional

from .exceptions import ConfigurationError
from .models.lesson import Instructor, Student
from .models.placement import PlacedLesson
from .models.report import AllocationReport, SkipReason
from .scheduling.scheduler import Scheduler
from .utils.config import Config
from .utils.file_utils import (
    generate_filename,
    lessons_to_dataframe,
    load_roster,
    load_schedule,
    save_csv,
    save_json,
    save_schedule,
)
from .utils.logger import setup_logger
from .utils.time_utils import to_hhmm
from .validation.roster_validator import InstructorValidator, StudentValidator


logger = logging.getLogger(__name__)


def parse_date(value: str) -> date:
    """argparse type for YYYY-MM-DD dates."""
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}' (expected YYYY-MM-DD)")


def parse_arguments(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """
    Parse command-line arguments.

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog="lesson-scheduler",
        description="Allocate and lay out recurring music lessons",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Logging level (default: LOG_LEVEL or INFO)"
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    allocate_parser = subparsers.add_parser("allocate", help="Run the initial slot allocation")
    allocate_parser.add_argument("--students", type=Path, required=True, help="Students JSON file")
    allocate_parser.add_argument("--instructors", type=Path, required=True, help="Instructors JSON file")
    allocate_parser.add_argument("--seed", type=int, help="Seed for a reproducible allocation")
    allocate_parser.add_argument(
        "--start-date", type=parse_date, help="First day of the horizon (default: today)"
    )
    allocate_parser.add_argument("--output-dir", type=Path, help="Output directory (default: OUTPUT_DIR)")

    layout_parser = subparsers.add_parser("layout", help="Print the lane layout of one day")
    layout_parser.add_argument("--schedule", type=Path, required=True, help="Schedule snapshot JSON")
    layout_parser.add_argument("--date", type=parse_date, required=True, help="Day to lay out")

    return parser.parse_args(argv)


def display_allocation_summary(report: AllocationReport):
    """Print the allocation outcome, listing every unscheduled student."""
    print("\n" + "=" * 60)
    print("ALLOCATION SUMMARY")
    print("=" * 60)
    print(f"Status:                   {report.status.value}")
    print(f"Students:                 {len(report.students)}")
    print(f"Scheduled:                {len(report.scheduled_student_ids)}")
    print(f"Unscheduled:              {len(report.skipped)}")
    print(f"Lessons generated:        {len(report.lessons)}")
    print("=" * 60)

    if report.skipped:
        print("\nStudents without a weekly slot:")
        print("-" * 60)
        for idx, item in enumerate(report.skipped, 1):
            print(f"{idx:2d}. {item.subject_id:20s} | {item.reason.value:18s} | {item.message}")
        print("-" * 60)


def display_layout(day: date, placed: List[PlacedLesson]):
    """Print one day's lane assignments."""
    print(f"\nLayout for {day.isoformat()} ({len(placed)} lessons)")
    print("-" * 60)
    for p in placed:
        print(
            f"{to_hhmm(p.start)}-{to_hhmm(p.end)} | lane {p.lane + 1}/{p.lane_count} | "
            f"{p.lesson.id} | room {p.lesson.room_id} | {p.lesson.instructor_id}"
        )
    print("-" * 60)


def run_allocate(args: argparse.Namespace, config: Config) -> int:
    """Allocate weekly slots and save the schedule, report and lesson table."""
    scheduler_config = config.to_scheduler_config()

    students_result = load_roster(args.students, StudentValidator(), Student.from_dict, "students")
    if students_result.is_failure:
        logger.error(f"Invalid students file: {students_result.message}")
        print(f"ERROR: {students_result.message}")
        return 1

    instructors_result = load_roster(
        args.instructors, InstructorValidator(), Instructor.from_dict, "instructors"
    )
    if instructors_result.is_failure:
        logger.error(f"Invalid instructors file: {instructors_result.message}")
        print(f"ERROR: {instructors_result.message}")
        return 1

    seed = args.seed if args.seed is not None else config.seed
    rng = random.Random(seed)
    if seed is not None:
        logger.info(f"Using allocation seed {seed}")

    scheduler = Scheduler.create(
        students_result.value, instructors_result.value, config=scheduler_config
    )
    scheduler, report = scheduler.allocate(rng=rng, start_date=args.start_date)

    display_allocation_summary(report)

    output_dir = (args.output_dir or config.output_dir) / "reports"
    schedule_path = output_dir / generate_filename("schedule", "json")
    report_path = output_dir / generate_filename("allocation_report", "json")
    lessons_path = output_dir / generate_filename("lessons", "csv")

    saved = [
        ("Schedule", schedule_path, save_schedule(scheduler, schedule_path)),
        ("Report", report_path, save_json(report.to_dict(), report_path)),
        ("Lessons", lessons_path, save_csv(lessons_to_dataframe(scheduler.lessons), lessons_path)),
    ]

    print()
    for label, path, ok in saved:
        if ok:
            print(f"{label} saved to: {path}")
        else:
            logger.error(f"Failed to write {label.lower()} file: {path}")
            print(f"ERROR: Could not write {path}")

    if not all(ok for _, _, ok in saved):
        return 1

    unplaced = [
        item for item in report.skipped
        if item.reason in (SkipReason.NO_SLOT, SkipReason.NO_INSTRUCTOR)
    ]
    return 1 if unplaced else 0


def run_layout(args: argparse.Namespace, config: Config) -> int:
    """Print the lane layout of one day of a saved schedule."""
    result = load_schedule(args.schedule, config.to_scheduler_config())
    if result.is_failure:
        logger.error(f"Could not load schedule: {result.message}")
        print(f"ERROR: {result.message}")
        return 1

    display_layout(args.date, result.value.layout_day(args.date))
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main execution function."""
    args = parse_arguments(argv)
    config = Config()

    setup_logger(
        "lesson_scheduler",
        level=getattr(logging, args.log_level or config.log_level, logging.INFO)
    )

    try:
        if args.command == "allocate":
            return run_allocate(args, config)
        return run_layout(args, config)

    except ConfigurationError as e:
        logger.error(f"Invalid configuration: {e}")
        print(f"ERROR: {e}")
        return 2

    except KeyboardInterrupt:
        print("\n\nInterrupted by user")
        logger.info("Interrupted by user")
        return 130


if __name__ == "__main__":
    sys.exit(main())
