from datetime import date, time
from typing import List

from pydantic import BaseModel, Field


class TimeWindow(BaseModel):
    """An open interval of the office day, both ends bookable."""

    start: time
    end: time


class DailySchedule(BaseModel):
    windows: List[TimeWindow] = Field(
        default_factory=lambda: [
            TimeWindow(start=time(8, 10), end=time(11, 10)),
            TimeWindow(start=time(14, 10), end=time(17, 10)),
        ]
    )
    tick_minutes: int = Field(20, gt=0)


class DayOccupancy(BaseModel):
    day: date
    daily_limit: int
    occupied: List[str] = Field(default_factory=list)
    free: List[str] = Field(default_factory=list)
    occupied_count: int = 0
    remaining: int = 0
