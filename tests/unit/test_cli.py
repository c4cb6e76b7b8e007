"""
Unit tests for the command-line interface.
"""

import pytest
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from lesson_scheduler.cli import main, parse_arguments
from lesson_scheduler.utils.file_utils import load_json, save_json


@pytest.fixture
def roster_files(tmp_path):
    """Write a small roster to disk."""
    students = tmp_path / "students.json"
    instructors = tmp_path / "instructors.json"
    save_json([{"id": f"s{n}", "name": f"Student {n}"} for n in range(1, 5)], students)
    save_json([{"id": "i1", "name": "Maria"}, {"id": "i2", "name": "Jon"}], instructors)
    return students, instructors


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("SCHEDULER_ROOM_COUNT", "SCHEDULER_SEED", "LOG_LEVEL", "OUTPUT_DIR"):
        monkeypatch.delenv(name, raising=False)


class TestParseArguments:
    """Test cases for argument parsing."""

    def test_allocate_arguments(self):
        """Test the allocate subcommand."""
        args = parse_arguments([
            "allocate", "--students", "s.json", "--instructors", "i.json",
            "--seed", "7", "--start-date", "2026-10-19",
        ])

        assert args.command == "allocate"
        assert args.seed == 7
        assert args.start_date.isoformat() == "2026-10-19"

    def test_invalid_date(self):
        """Test malformed dates exit with a usage error."""
        with pytest.raises(SystemExit):
            parse_arguments(["layout", "--schedule", "x.json", "--date", "19/10/2026"])


class TestMain:
    """End-to-end runs of the CLI."""

    def test_allocate_then_layout(self, roster_files, tmp_path, capsys):
        """Test allocation output files and the layout of the first day."""
        students, instructors = roster_files
        out = tmp_path / "out"

        code = main([
            "--log-level", "WARNING",
            "allocate",
            "--students", str(students),
            "--instructors", str(instructors),
            "--seed", "42",
            "--start-date", "2026-10-19",
            "--output-dir", str(out),
        ])

        assert code == 0
        assert "ALLOCATION SUMMARY" in capsys.readouterr().out

        schedules = list((out / "reports").glob("schedule_*.json"))
        reports = list((out / "reports").glob("allocation_report_*.json"))
        assert len(schedules) == 1
        assert len(list((out / "reports").glob("lessons_*.csv"))) == 1
        assert load_json(reports[0])["total_lessons"] == 4 * 12

        code = main(["layout", "--schedule", str(schedules[0]), "--date", "2026-10-19"])

        assert code == 0
        assert "Layout for 2026-10-19" in capsys.readouterr().out

    def test_unscheduled_students_return_one(self, tmp_path, monkeypatch, capsys):
        """Test a partial allocation signals failure through the exit code."""
        monkeypatch.setenv("SCHEDULER_TIME_SLOTS", "09:00")
        monkeypatch.setenv("SCHEDULER_WEEKDAYS", "mon")
        monkeypatch.setenv("SCHEDULER_ROOM_COUNT", "1")
        students = tmp_path / "students.json"
        instructors = tmp_path / "instructors.json"
        save_json([{"id": "s1"}, {"id": "s2"}], students)
        save_json([{"id": "i1"}], instructors)

        code = main([
            "allocate", "--students", str(students), "--instructors", str(instructors),
            "--seed", "1", "--output-dir", str(tmp_path / "out"),
        ])

        assert code == 1
        assert "Students without a weekly slot" in capsys.readouterr().out

    def test_inactive_students_do_not_fail_the_run(self, tmp_path):
        """Test skipping a withdrawn student still exits with 0."""
        students = tmp_path / "students.json"
        instructors = tmp_path / "instructors.json"
        save_json([{"id": "s1"}, {"id": "s2", "status": "inactive"}], students)
        save_json([{"id": "i1"}], instructors)

        code = main([
            "allocate", "--students", str(students), "--instructors", str(instructors),
            "--seed", "1", "--start-date", "2026-10-19",
            "--output-dir", str(tmp_path / "out"),
        ])

        assert code == 0
        report = next((tmp_path / "out" / "reports").glob("allocation_report_*.json"))
        assert load_json(report)["skipped"][0]["reason"] == "inactive_student"

    def test_failed_write_returns_one(self, roster_files, tmp_path, monkeypatch, capsys):
        """Test an unwritten report is reported and never announced as saved."""
        monkeypatch.setattr("lesson_scheduler.cli.save_json", lambda *args, **kwargs: False)
        students, instructors = roster_files

        code = main([
            "allocate", "--students", str(students), "--instructors", str(instructors),
            "--seed", "1", "--output-dir", str(tmp_path / "out"),
        ])

        out = capsys.readouterr().out
        assert code == 1
        assert "Report saved to" not in out
        assert "ERROR: Could not write" in out
        assert "Schedule saved to" in out

    def test_invalid_roster(self, tmp_path, capsys):
        """Test a roster with validation errors."""
        students = tmp_path / "students.json"
        instructors = tmp_path / "instructors.json"
        save_json([{"name": "no id"}], students)
        save_json([{"id": "i1"}], instructors)

        code = main([
            "allocate", "--students", str(students), "--instructors", str(instructors),
            "--output-dir", str(tmp_path / "out"),
        ])

        assert code == 1
        assert "Missing required field: id" in capsys.readouterr().out

    def test_invalid_configuration(self, roster_files, tmp_path, monkeypatch):
        """Test configuration errors exit with code 2."""
        monkeypatch.setenv("SCHEDULER_ROOM_COUNT", "zero")
        students, instructors = roster_files

        code = main([
            "allocate", "--students", str(students), "--instructors", str(instructors),
            "--output-dir", str(tmp_path / "out"),
        ])

        assert code == 2

    def test_layout_missing_schedule(self, tmp_path):
        """Test a missing schedule file."""
        code = main(["layout", "--schedule", str(tmp_path / "none.json"), "--date", "2026-10-19"])

        assert code == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
