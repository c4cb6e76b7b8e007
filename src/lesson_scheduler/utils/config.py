"""
Configuration management with environment variables.

This module loads the scheduling constants (time grid, lunch break, room
count, horizons) from the environment, or a ``.env`` file, validates them
and turns them into the immutable SchedulerConfig used by the core.
"""

import os
from pathlib import Path
from typing import List, Optional, Tuple

from dotenv import load_dotenv

from ..exceptions import ConfigurationError
from ..scheduling.settings import SchedulerConfig
from ..scheduling.time_grid import (
    DEFAULT_LUNCH_BREAK,
    DEFAULT_TIME_SLOTS,
    DEFAULT_WEEKDAYS,
    TimeGrid,
)
from .time_utils import is_valid_time


WEEKDAY_NAMES = ("mon", "tue", "wed", "thu", "fri", "sat", "sun")


class Config:
    """
    Application configuration manager.

    Loads configuration from environment variables and provides
    validated access to configuration values.

    Attributes:
        room_count: Number of rooms (SCHEDULER_ROOM_COUNT)
        time_slots: Ordered slot start times (SCHEDULER_TIME_SLOTS, comma list)
        lunch_break: Lunch-break instant (SCHEDULER_LUNCH_BREAK)
        weekdays: Teaching days (SCHEDULER_WEEKDAYS, e.g. "mon,tue,wed")
        allocation_weeks: Initial allocation horizon (SCHEDULER_ALLOCATION_WEEKS)
        max_repeat_weeks: Weekly repeat clamp (SCHEDULER_MAX_REPEAT_WEEKS)
        lesson_duration: Default lesson length in minutes (SCHEDULER_LESSON_DURATION)
        seed: Optional allocation seed (SCHEDULER_SEED)
        output_dir: Output directory for reports and logs
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Examples:
        >>> config = Config()
        >>> if config.validate():
        ...     scheduler_config = config.to_scheduler_config()
    """

    def __init__(self):
        """Initialize configuration by loading environment variables."""
        # Load .env file if it exists
        load_dotenv()

        self._errors: List[str] = []

        self._room_count = self._int_env("SCHEDULER_ROOM_COUNT", 4)
        self._allocation_weeks = self._int_env("SCHEDULER_ALLOCATION_WEEKS", 12)
        self._max_repeat_weeks = self._int_env("SCHEDULER_MAX_REPEAT_WEEKS", 52)
        self._lesson_duration = self._int_env("SCHEDULER_LESSON_DURATION", 60)

        seed = os.getenv("SCHEDULER_SEED")
        self._seed = self._int_env("SCHEDULER_SEED", 0) if seed else None

        slots = os.getenv("SCHEDULER_TIME_SLOTS")
        self._time_slots = (
            tuple(s.strip() for s in slots.split(",") if s.strip())
            if slots else DEFAULT_TIME_SLOTS
        )
        self._lunch_break = os.getenv("SCHEDULER_LUNCH_BREAK", DEFAULT_LUNCH_BREAK).strip()
        self._weekdays = self._parse_weekdays(os.getenv("SCHEDULER_WEEKDAYS"))

        # Output settings
        self._output_dir = Path(os.getenv("OUTPUT_DIR", "output"))
        self._log_level = os.getenv("LOG_LEVEL", "INFO").upper()

    def _int_env(self, name: str, default: int) -> int:
        raw = os.getenv(name)
        if raw is None or raw.strip() == "":
            return default
        try:
            return int(raw)
        except ValueError:
            self._errors.append(f"{name} must be an integer, got: {raw!r}")
            return default

    def _parse_weekdays(self, raw: Optional[str]) -> Tuple[int, ...]:
        if not raw:
            return DEFAULT_WEEKDAYS

        weekdays = []
        for token in raw.split(","):
            token = token.strip().lower()[:3]
            if token not in WEEKDAY_NAMES:
                self._errors.append(f"SCHEDULER_WEEKDAYS has unknown day: {token!r}")
                continue
            weekdays.append(WEEKDAY_NAMES.index(token))
        return tuple(weekdays)

    @property
    def room_count(self) -> int:
        return self._room_count

    @property
    def time_slots(self) -> Tuple[str, ...]:
        return self._time_slots

    @property
    def lunch_break(self) -> str:
        return self._lunch_break

    @property
    def weekdays(self) -> Tuple[int, ...]:
        return self._weekdays

    @property
    def allocation_weeks(self) -> int:
        return self._allocation_weeks

    @property
    def max_repeat_weeks(self) -> int:
        return self._max_repeat_weeks

    @property
    def lesson_duration(self) -> int:
        """Get default lesson duration in minutes."""
        return self._lesson_duration

    @property
    def seed(self) -> Optional[int]:
        """Get allocation seed, or None for true randomness."""
        return self._seed

    @property
    def output_dir(self) -> Path:
        """Get output directory path."""
        return self._output_dir

    @property
    def log_level(self) -> str:
        """Get logging level."""
        return self._log_level

    def validate(self) -> bool:
        """
        Validate configuration values.

        Returns:
            True if all configuration is valid

        Raises:
            ConfigurationError: If validation fails (lists every problem)
        """
        errors = list(self._errors)

        for name, value in (
            ("SCHEDULER_ROOM_COUNT", self._room_count),
            ("SCHEDULER_ALLOCATION_WEEKS", self._allocation_weeks),
            ("SCHEDULER_MAX_REPEAT_WEEKS", self._max_repeat_weeks),
            ("SCHEDULER_LESSON_DURATION", self._lesson_duration),
        ):
            if value <= 0:
                errors.append(f"{name} must be positive")

        if not self._time_slots:
            errors.append("SCHEDULER_TIME_SLOTS must list at least one slot")

        invalid_slots = [s for s in self._time_slots if not is_valid_time(s)]
        if invalid_slots:
            errors.append(f"SCHEDULER_TIME_SLOTS has invalid times: {', '.join(invalid_slots)}")

        if not is_valid_time(self._lunch_break):
            errors.append(f"SCHEDULER_LUNCH_BREAK must be HH:MM, got: {self._lunch_break}")

        if not self._weekdays:
            errors.append("SCHEDULER_WEEKDAYS must list at least one day")

        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if self._log_level not in valid_levels:
            errors.append(f"LOG_LEVEL must be one of: {', '.join(valid_levels)}")

        if errors:
            error_msg = "Configuration validation failed:\n  - " + "\n  - ".join(errors)
            raise ConfigurationError(error_msg)

        return True

    def to_scheduler_config(self) -> SchedulerConfig:
        """
        Build the immutable scheduling constants.

        Raises:
            ConfigurationError: If the configuration is invalid
        """
        self.validate()
        return SchedulerConfig(
            grid=TimeGrid(
                slots=self._time_slots,
                lunch_break=self._lunch_break,
                weekdays=self._weekdays,
            ),
            room_count=self._room_count,
            allocation_weeks=self._allocation_weeks,
            max_repeat_weeks=self._max_repeat_weeks,
            lesson_duration=self._lesson_duration,
        )

    def create_output_directories(self):
        """Create output directories if they don't exist."""
        for directory in (self.output_dir / "logs", self.output_dir / "reports"):
            directory.mkdir(parents=True, exist_ok=True)
