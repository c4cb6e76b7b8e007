#!/usr/bin/env python3
"""
Lesson scheduler entry script.

Usage:
    python run_scheduler.py allocate --students students.json --instructors instructors.json --seed 42
    python run_scheduler.py layout --schedule output/reports/schedule.json --date 2026-10-21
"""

import sys

from lesson_scheduler.cli import main


if __name__ == "__main__":
    sys.exit(main())
