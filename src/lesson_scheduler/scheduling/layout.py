"""
Overlap Layout Engine.

Lays out one day's lessons into side-by-side lanes so overlapping lessons
never share a column. This is interval-graph greedy coloring: lessons are
sorted by start, split into clusters of transitively overlapping intervals,
and within a cluster each lesson reuses the lowest lane that is already free
at its start. The lane count of a cluster equals its maximum number of
simultaneously running lessons.

Day and week views share this engine; ``layout_week`` simply runs
``layout_day`` once per date.
"""

import logging
from collections import defaultdict
from dataclasses import dataclass
from datetime import date
from typing import Dict, Iterable, Iterator, List, Sequence

from ..models.lesson import Lesson
from ..models.placement import PlacedLesson
from ..utils.time_utils import to_minutes


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Interval:
    start: int
    end: int
    lesson: Lesson


def _clip(lessons: Iterable[Lesson], window_start: int, window_end: int) -> List[_Interval]:
    """Clip active lessons to the window, dropping empty or inverted intervals."""
    intervals = []

    for lesson in lessons:
        if not lesson.is_active:
            continue

        start, end = lesson.start_minutes, lesson.end_minutes
        if end <= start:
            logger.debug(f"Excluding lesson {lesson.id} with non-positive duration")
            continue

        start, end = max(start, window_start), min(end, window_end)
        if end <= start:
            continue

        intervals.append(_Interval(start, end, lesson))

    return intervals


def _clusters(intervals: Sequence[_Interval]) -> Iterator[List[_Interval]]:
    """Split start-sorted intervals into maximal transitively overlapping clusters."""
    cluster: List[_Interval] = []
    watermark = 0

    for interval in intervals:
        if cluster and interval.start >= watermark:
            yield cluster
            cluster = []
        if not cluster:
            watermark = interval.end
        cluster.append(interval)
        watermark = max(watermark, interval.end)

    if cluster:
        yield cluster


def _assign_lanes(cluster: Sequence[_Interval]) -> List[int]:
    """Greedy lane assignment; returns one lane index per interval."""
    lane_ends: List[int] = []
    lanes = []

    for interval in cluster:
        for lane, end in enumerate(lane_ends):
            if end <= interval.start:
                lane_ends[lane] = interval.end
                lanes.append(lane)
                break
        else:
            lane_ends.append(interval.end)
            lanes.append(len(lane_ends) - 1)

    return lanes


def layout_day(
    lessons: Iterable[Lesson],
    window_start: str,
    window_end: str
) -> List[PlacedLesson]:
    """
    Assign lanes and fractional coordinates to one day's lessons.

    Args:
        lessons: Lessons visible on the day; deleted lessons, lessons with
            ``end_time <= time`` and lessons entirely outside the window
            are excluded
        window_start: Start of the visible day window ("HH:MM")
        window_end: End of the visible day window ("HH:MM")

    Returns:
        PlacedLesson list ordered by clipped start time (ties keep input order)

    Raises:
        ValueError: If the window is empty

    Examples:
        >>> placed = layout_day(lessons, "08:00", "20:00")
        >>> [(p.lesson.id, p.lane, p.lane_count) for p in placed]
        [('a', 0, 2), ('b', 1, 2), ('c', 0, 2)]
    """
    start_minutes, end_minutes = to_minutes(window_start), to_minutes(window_end)
    span = end_minutes - start_minutes
    if span <= 0:
        raise ValueError(f"Empty day window: {window_start}-{window_end}")

    intervals = sorted(_clip(lessons, start_minutes, end_minutes), key=lambda i: i.start)

    placed: List[PlacedLesson] = []
    for cluster in _clusters(intervals):
        lanes = _assign_lanes(cluster)
        lane_count = max(lanes) + 1

        for interval, lane in zip(cluster, lanes):
            placed.append(PlacedLesson(
                lesson=interval.lesson,
                lane=lane,
                lane_count=lane_count,
                start=interval.start,
                end=interval.end,
                top=(interval.start - start_minutes) / span,
                height=(interval.end - interval.start) / span,
                left=lane / lane_count,
                width=1 / lane_count,
            ))

    return placed


def layout_week(
    lessons: Iterable[Lesson],
    dates: Sequence[date],
    window_start: str,
    window_end: str
) -> Dict[date, List[PlacedLesson]]:
    """
    Lay out several days at once.

    Returns:
        Mapping of each requested date to its placed lessons (empty list
        for days without lessons)
    """
    by_date: Dict[date, List[Lesson]] = defaultdict(list)
    for lesson in lessons:
        by_date[lesson.date].append(lesson)

    return {
        day: layout_day(by_date.get(day, []), window_start, window_end)
        for day in dates
    }
