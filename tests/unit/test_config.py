"""
Unit tests for environment configuration.
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from lesson_scheduler.exceptions import ConfigurationError
from lesson_scheduler.utils.config import Config


ENV_VARS = [
    "SCHEDULER_ROOM_COUNT",
    "SCHEDULER_TIME_SLOTS",
    "SCHEDULER_LUNCH_BREAK",
    "SCHEDULER_WEEKDAYS",
    "SCHEDULER_ALLOCATION_WEEKS",
    "SCHEDULER_MAX_REPEAT_WEEKS",
    "SCHEDULER_LESSON_DURATION",
    "SCHEDULER_SEED",
    "OUTPUT_DIR",
    "LOG_LEVEL",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    """Run every test without scheduler variables set."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


class TestConfig:
    """Test cases for Config."""

    def test_defaults(self):
        """Test values when nothing is set."""
        config = Config()

        assert config.room_count == 4
        assert config.time_slots[0] == "08:00"
        assert config.lunch_break == "12:00"
        assert config.weekdays == (0, 1, 2, 3, 4, 5)
        assert config.allocation_weeks == 12
        assert config.max_repeat_weeks == 52
        assert config.lesson_duration == 60
        assert config.seed is None
        assert config.output_dir == Path("output")
        assert config.log_level == "INFO"
        assert config.validate()

    def test_environment_overrides(self, monkeypatch):
        """Test every variable is read."""
        monkeypatch.setenv("SCHEDULER_ROOM_COUNT", "2")
        monkeypatch.setenv("SCHEDULER_TIME_SLOTS", "09:00, 10:00,11:00")
        monkeypatch.setenv("SCHEDULER_LUNCH_BREAK", "13:00")
        monkeypatch.setenv("SCHEDULER_WEEKDAYS", "mon,Wednesday,fri")
        monkeypatch.setenv("SCHEDULER_SEED", "42")
        monkeypatch.setenv("LOG_LEVEL", "debug")

        config = Config()
        scheduler_config = config.to_scheduler_config()

        assert scheduler_config.room_count == 2
        assert scheduler_config.grid.slots == ("09:00", "10:00", "11:00")
        assert scheduler_config.grid.lunch_break == "13:00"
        assert scheduler_config.grid.weekdays == (0, 2, 4)
        assert config.seed == 42
        assert config.log_level == "DEBUG"

    def test_validate_collects_every_problem(self, monkeypatch):
        """Test a single error lists all invalid settings."""
        monkeypatch.setenv("SCHEDULER_ROOM_COUNT", "four")
        monkeypatch.setenv("SCHEDULER_ALLOCATION_WEEKS", "0")
        monkeypatch.setenv("SCHEDULER_TIME_SLOTS", "09:00,9am")
        monkeypatch.setenv("SCHEDULER_WEEKDAYS", "someday")
        monkeypatch.setenv("LOG_LEVEL", "LOUD")

        with pytest.raises(ConfigurationError) as exc_info:
            Config().validate()

        message = str(exc_info.value)
        assert message.startswith("Configuration validation failed:")
        assert "SCHEDULER_ROOM_COUNT must be an integer" in message
        assert "SCHEDULER_ALLOCATION_WEEKS must be positive" in message
        assert "9am" in message
        assert "unknown day" in message
        assert "LOG_LEVEL" in message

    def test_to_scheduler_config_validates(self, monkeypatch):
        """Test invalid settings never reach the core."""
        monkeypatch.setenv("SCHEDULER_LUNCH_BREAK", "noon")

        with pytest.raises(ConfigurationError):
            Config().to_scheduler_config()

    def test_create_output_directories(self, monkeypatch, tmp_path):
        """Test logs and reports directories are created."""
        monkeypatch.setenv("OUTPUT_DIR", str(tmp_path / "out"))

        Config().create_output_directories()

        assert (tmp_path / "out" / "logs").is_dir()
        assert (tmp_path / "out" / "reports").is_dir()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
