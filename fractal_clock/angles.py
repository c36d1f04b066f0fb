"""
Time Angle Calculator - Converts a wall-clock instant into hand angles
Angles are radians, 12 o'clock points up and positive is clockwise
"""

import math
from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Angles:
    """Hour, minute and second hand angles for a single frame"""
    hour: float
    minute: float
    second: float

    def to_dict(self) -> dict:
        return {"hour": self.hour, "minute": self.minute, "second": self.second}


def ratio_to_radians(ratio: float) -> float:
    """Map a fraction of a full turn to radians, shifting zero from 3 o'clock to 12 o'clock"""
    return ratio * 2 * math.pi - math.pi / 2


def compute_angles(instant: datetime) -> Angles:
    """Compute the three hand angles for the given local instant"""
    seconds = instant.second + instant.microsecond / 1_000_000
    minutes = instant.minute + seconds / 60
    hours = (instant.hour % 12) + minutes / 60

    return Angles(
        hour=ratio_to_radians(hours / 12),
        minute=ratio_to_radians(minutes / 60),
        second=ratio_to_radians(seconds / 60),
    )
