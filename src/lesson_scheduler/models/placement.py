"""
Layout-only lesson placement.

A PlacedLesson is derived on every layout pass and never persisted.
"""

from dataclasses import dataclass
from typing import Any, Dict

from .lesson import Lesson


@dataclass(frozen=True)
class PlacedLesson:
    """
    Lesson annotated with its render lane and fractional coordinates.

    Coordinates are ratios of the day window, independent of any rendering
    technology: ``top``/``height`` along the time axis, ``left``/``width``
    across the lane axis.

    Attributes:
        lesson: The lesson being placed
        lane: Zero-based lane index within its cluster
        lane_count: Number of lanes in the lesson's cluster
        start: Clipped start, minutes from midnight
        end: Clipped end, minutes from midnight
        top: Offset from window start as a fraction of the window
        height: Clipped duration as a fraction of the window
        left: lane / lane_count
        width: 1 / lane_count
    """

    lesson: Lesson
    lane: int
    lane_count: int
    start: int
    end: int
    top: float
    height: float
    left: float
    width: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "lesson_id": self.lesson.id,
            "lane": self.lane,
            "lane_count": self.lane_count,
            "start": self.start,
            "end": self.end,
            "top": self.top,
            "height": self.height,
            "left": self.left,
            "width": self.width,
        }
