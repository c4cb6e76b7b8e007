"""
Unit tests for the overlap layout engine.
"""

import pytest
import random
import sys
from datetime import date, timedelta
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent.parent / "src"))

from lesson_scheduler.models.lesson import Lesson, LessonStatus
from lesson_scheduler.scheduling.layout import layout_day, layout_week
from lesson_scheduler.utils.time_utils import to_hhmm


DAY = date(2026, 10, 19)


def make_lesson(lesson_id, time, end_time, day=DAY, status=LessonStatus.SCHEDULED):
    return Lesson(
        id=lesson_id,
        student_id=f"s-{lesson_id}",
        instructor_id=f"i-{lesson_id}",
        room_id=1,
        date=day,
        time=time,
        end_time=end_time,
        status=status,
    )


def max_concurrency(placed):
    """Brute-force maximum number of intervals covering one instant."""
    points = {p.start for p in placed}
    return max((sum(1 for p in placed if p.start <= t < p.end) for t in points), default=0)


class TestLayoutDay:
    """Test cases for layout_day."""

    def test_three_lessons_two_lanes(self):
        """Test A 09:00-10:00, B 09:30-10:30, C 10:00-11:00."""
        lessons = [
            make_lesson("A", "09:00", "10:00"),
            make_lesson("B", "09:30", "10:30"),
            make_lesson("C", "10:00", "11:00"),
        ]

        placed = layout_day(lessons, "08:00", "20:00")

        assert [(p.lesson.id, p.lane, p.lane_count) for p in placed] == [
            ("A", 0, 2),
            ("B", 1, 2),
            ("C", 0, 2),
        ]

    def test_separate_clusters_have_independent_lane_counts(self):
        """Test a lone lesson after a busy cluster gets full width."""
        lessons = [
            make_lesson("A", "09:00", "10:00"),
            make_lesson("B", "09:00", "10:00"),
            make_lesson("C", "14:00", "15:00"),
        ]

        placed = {p.lesson.id: p for p in layout_day(lessons, "08:00", "20:00")}

        assert placed["A"].lane_count == 2
        assert placed["B"].lane_count == 2
        assert placed["C"].lane_count == 1
        assert placed["C"].lane == 0
        assert placed["C"].width == 1.0

    def test_touching_lessons_share_a_lane(self):
        """Test back-to-back lessons do not overlap."""
        lessons = [
            make_lesson("A", "09:00", "10:00"),
            make_lesson("B", "10:00", "11:00"),
        ]

        placed = layout_day(lessons, "08:00", "20:00")

        assert [(p.lane, p.lane_count) for p in placed] == [(0, 1), (0, 1)]

    def test_transitive_cluster(self):
        """Test A overlaps B, B overlaps C, A and C disjoint: one cluster."""
        lessons = [
            make_lesson("A", "09:00", "10:00"),
            make_lesson("B", "09:45", "11:15"),
            make_lesson("C", "11:00", "12:00"),
        ]

        placed = layout_day(lessons, "08:00", "20:00")

        assert all(p.lane_count == 2 for p in placed)
        assert [p.lane for p in placed] == [0, 1, 0]

    def test_lane_count_equals_max_concurrency(self):
        """Test lane counts are minimal over random inputs."""
        rng = random.Random(1234)

        for _ in range(50):
            lessons = []
            for n in range(rng.randint(1, 15)):
                start = rng.randrange(8 * 60, 19 * 60, 15)
                length = rng.choice([15, 30, 45, 60, 90, 120])
                lessons.append(make_lesson(f"L{n}", to_hhmm(start), to_hhmm(start + length)))

            placed = layout_day(lessons, "08:00", "21:00")

            overall = max(p.lane_count for p in placed)
            assert overall == max_concurrency(placed)

            for p in placed:
                assert 0 <= p.lane < p.lane_count
                for q in placed:
                    if p is not q and p.start < q.end and q.start < p.end:
                        assert p.lane != q.lane
                        assert p.lane_count == q.lane_count

    def test_deterministic(self):
        """Test identical input yields identical layout."""
        lessons = [
            make_lesson("A", "09:00", "10:00"),
            make_lesson("B", "09:00", "10:00"),
            make_lesson("C", "09:30", "11:00"),
        ]

        assert layout_day(lessons, "08:00", "20:00") == layout_day(lessons, "08:00", "20:00")

    def test_equal_starts_keep_input_order(self):
        """Test ties on start are broken by input order."""
        lessons = [
            make_lesson("second", "09:00", "10:00"),
            make_lesson("first", "09:00", "09:30"),
        ]

        placed = layout_day(lessons, "08:00", "20:00")

        assert [(p.lesson.id, p.lane) for p in placed] == [("second", 0), ("first", 1)]

    def test_coordinates(self):
        """Test fractional top, height, left and width."""
        lessons = [
            make_lesson("A", "09:00", "10:00"),
            make_lesson("B", "09:00", "10:00"),
        ]

        placed = layout_day(lessons, "08:00", "12:00")

        assert placed[0].top == pytest.approx(0.25)
        assert placed[0].height == pytest.approx(0.25)
        assert placed[0].left == 0.0
        assert placed[1].left == 0.5
        assert placed[1].width == 0.5

    def test_lessons_are_clipped_to_window(self):
        """Test partial overlap with the window is clipped."""
        lessons = [make_lesson("A", "07:30", "08:30")]

        placed = layout_day(lessons, "08:00", "12:00")

        assert placed[0].start == 8 * 60
        assert placed[0].end == 8 * 60 + 30
        assert placed[0].top == 0.0

    def test_excluded_lessons(self):
        """Test outside-window, zero-length, inverted and deleted lessons are dropped."""
        lessons = [
            make_lesson("before", "06:00", "07:00"),
            make_lesson("after", "21:00", "22:00"),
            make_lesson("zero", "09:00", "09:00"),
            make_lesson("inverted", "10:00", "09:00"),
            make_lesson("trashed", "09:00", "10:00", status=LessonStatus.DELETED),
            make_lesson("kept", "09:00", "10:00"),
        ]

        placed = layout_day(lessons, "08:00", "20:00")

        assert [p.lesson.id for p in placed] == ["kept"]
        assert placed[0].lane_count == 1

    def test_empty_input(self):
        """Test no lessons yields no placements."""
        assert layout_day([], "08:00", "20:00") == []

    def test_empty_window_raises(self):
        """Test window_end must be after window_start."""
        with pytest.raises(ValueError, match="Empty day window"):
            layout_day([], "10:00", "10:00")

    def test_to_dict(self):
        """Test placement serialization."""
        placed = layout_day([make_lesson("A", "09:00", "10:00")], "08:00", "20:00")

        data = placed[0].to_dict()

        assert data["lesson_id"] == "A"
        assert data["lane"] == 0
        assert data["lane_count"] == 1


class TestLayoutWeek:
    """Test cases for layout_week."""

    def test_each_day_is_laid_out_independently(self):
        """Test lessons on different days never share a cluster."""
        tuesday = DAY + timedelta(days=1)
        lessons = [
            make_lesson("mon-a", "09:00", "10:00"),
            make_lesson("mon-b", "09:30", "10:30"),
            make_lesson("tue-a", "09:00", "10:00", day=tuesday),
        ]
        week = [DAY + timedelta(days=n) for n in range(7)]

        result = layout_week(lessons, week, "08:00", "20:00")

        assert list(result) == week
        assert [p.lane_count for p in result[DAY]] == [2, 2]
        assert [(p.lesson.id, p.lane_count) for p in result[tuesday]] == [("tue-a", 1)]
        assert result[DAY + timedelta(days=2)] == []

    def test_matches_layout_day(self):
        """Test the week view is the day view applied per date."""
        lessons = [
            make_lesson("A", "09:00", "10:00"),
            make_lesson("B", "09:30", "10:30"),
        ]

        result = layout_week(lessons, [DAY], "08:00", "20:00")

        assert result[DAY] == layout_day(lessons, "08:00", "20:00")


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
