"""
File operation utilities.

This module saves and loads rosters, schedule snapshots and reports as
JSON, and lesson tables as CSV.
"""

import json
import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

import pandas as pd

from ..models.lesson import Instructor, Lesson, Student
from ..models.result import Result
from ..models.schema_version import CURRENT_SCHEMA_VERSION, SchemaVersion, VersionedData
from ..scheduling.scheduler import Scheduler
from ..scheduling.settings import SchedulerConfig
from ..validation.lesson_validator import LessonValidator
from ..validation.roster_validator import InstructorValidator, StudentValidator
from ..validation.validators import ValidationResult, Validator


logger = logging.getLogger(__name__)

T = TypeVar('T')

LESSON_COLUMNS = [
    "id", "date", "time", "end_time", "student_id", "instructor_id",
    "room_id", "status", "notes",
]


def save_json(data: Any, filepath: Path) -> bool:
    """
    Save data to JSON file.

    Args:
        data: JSON-serializable data to save
        filepath: Path to save the JSON file

    Returns:
        True if save successful, False otherwise
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)

        with open(filepath, 'w', encoding='utf-8') as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

        logger.debug(f"Saved JSON file: {filepath}")
        return True

    except (OSError, TypeError) as e:
        logger.error(f"Failed to save JSON file {filepath}: {e}", exc_info=True)
        return False


def load_json(filepath: Path) -> Optional[Any]:
    """
    Load data from JSON file.

    Returns:
        Loaded data, or None if load failed
    """
    try:
        if not filepath.exists():
            logger.warning(f"JSON file not found: {filepath}")
            return None

        with open(filepath, 'r', encoding='utf-8') as f:
            data = json.load(f)

        logger.debug(f"Loaded JSON file: {filepath}")
        return data

    except json.JSONDecodeError as e:
        logger.error(f"Invalid JSON in file {filepath}: {e}")
        return None

    except OSError as e:
        logger.error(f"Failed to load JSON file {filepath}: {e}", exc_info=True)
        return None


def save_csv(df: pd.DataFrame, filepath: Path) -> bool:
    """
    Save DataFrame to CSV file.

    Returns:
        True if save successful, False otherwise
    """
    try:
        filepath.parent.mkdir(parents=True, exist_ok=True)
        df.to_csv(filepath, index=False, encoding='utf-8')

        logger.debug(f"Saved CSV file: {filepath}")
        return True

    except OSError as e:
        logger.error(f"Failed to save CSV file {filepath}: {e}", exc_info=True)
        return False


def load_csv(filepath: Path) -> Optional[pd.DataFrame]:
    """
    Load DataFrame from CSV file.

    Empty cells load as empty strings so lesson notes survive a round trip.

    Returns:
        Loaded DataFrame, or None if load failed

    Examples:
        >>> df = load_csv(Path("output/reports/lessons_20261019_103045.csv"))
        >>> if df is not None:
        ...     print(df[df["status"] == "scheduled"].head())
    """
    try:
        if not filepath.exists():
            logger.warning(f"CSV file not found: {filepath}")
            return None

        df = pd.read_csv(filepath, encoding='utf-8', keep_default_na=False)

        logger.debug(f"Loaded CSV file: {filepath}")
        return df

    except (OSError, pd.errors.ParserError, pd.errors.EmptyDataError) as e:
        logger.error(f"Failed to load CSV file {filepath}: {e}", exc_info=True)
        return None


def lessons_to_dataframe(lessons: Iterable[Lesson]) -> pd.DataFrame:
    """
    Tabulate lessons, sorted by date, time and room.

    Examples:
        >>> df = lessons_to_dataframe(scheduler.active_lessons())
        >>> df.groupby("instructor_id").size()
    """
    df = pd.DataFrame([lesson.to_dict() for lesson in lessons], columns=LESSON_COLUMNS)
    if df.empty:
        return df
    return df.sort_values(["date", "time", "room_id"], kind="stable").reset_index(drop=True)


def generate_filename(prefix: str, extension: str) -> str:
    """
    Generate timestamped filename.

    Examples:
        >>> generate_filename("allocation_report", "json")
        'allocation_report_20261019_103045.json'
    """
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    return f"{prefix}_{timestamp}.{extension}"


def save_schedule(scheduler: Scheduler, filepath: Path) -> bool:
    """
    Save a versioned snapshot of students, instructors and lessons.

    Returns:
        True if save successful, False otherwise
    """
    snapshot = VersionedData(
        schema_version=CURRENT_SCHEMA_VERSION.value,
        data={
            "students": [s.to_dict() for s in scheduler.students],
            "instructors": [i.to_dict() for i in scheduler.instructors],
            "lessons": [lesson.to_dict() for lesson in scheduler.lessons],
        },
    )
    return save_json(snapshot.to_dict(), filepath)


def _parse_records(
    records: Any,
    validator: Validator,
    factory: Callable[[Dict[str, Any]], T],
    label: str,
    validation: ValidationResult
) -> List[T]:
    if not isinstance(records, list):
        validation.add_error(f"{label} must be a list")
        return []

    parsed = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            validation.add_error(f"{label}[{index}]: expected an object")
            continue
        result = validator.validate(record)
        validation.merge(result, prefix=f"{label}[{index}]: ")
        if result.is_valid:
            parsed.append(factory(record))
    return parsed


def load_schedule(
    filepath: Path,
    config: Optional[SchedulerConfig] = None
) -> Result[Scheduler]:
    """
    Load a schedule snapshot written by ``save_schedule``.

    Every record is validated; any error rejects the whole file.

    Returns:
        Result with the Scheduler, or a failure listing the problems
    """
    config = config or SchedulerConfig()
    raw = load_json(filepath)
    if raw is None:
        return Result.failure(f"Could not read schedule file: {filepath}")

    versioned = VersionedData.from_dict(raw if isinstance(raw, dict) else {"data": {"lessons": raw}})
    try:
        SchemaVersion(versioned.schema_version)
    except ValueError as e:
        return Result.failure(f"Unsupported schedule version: {versioned.schema_version}", error=e)

    validation = ValidationResult(is_valid=True)
    students = _parse_records(
        versioned.section("students"), StudentValidator(), Student.from_dict, "students", validation
    )
    instructors = _parse_records(
        versioned.section("instructors"), InstructorValidator(), Instructor.from_dict,
        "instructors", validation
    )
    lessons = _parse_records(
        versioned.section("lessons"), LessonValidator(config.room_count), Lesson.from_dict,
        "lessons", validation
    )

    for warning in validation.warnings:
        logger.warning(f"{filepath}: {warning}")

    if not validation.is_valid:
        return Result.failure(validation.get_summary())

    return Result.success(Scheduler.create(students, instructors, lessons, config))


def load_roster(
    filepath: Path,
    validator: Validator,
    factory: Callable[[Dict[str, Any]], T],
    label: str
) -> Result[List[T]]:
    """
    Load a JSON list of students or instructors.

    Examples:
        >>> result = load_roster(Path("students.json"), StudentValidator(), Student.from_dict, "students")
        >>> students = result.unwrap()
    """
    raw = load_json(filepath)
    if raw is None:
        return Result.failure(f"Could not read {label} file: {filepath}")

    validation = ValidationResult(is_valid=True)
    records = _parse_records(raw, validator, factory, label, validation)

    for warning in validation.warnings:
        logger.warning(f"{filepath}: {warning}")

    if not validation.is_valid:
        return Result.failure(validation.get_summary())

    return Result.success(records)
