import uuid
from datetime import date, datetime
from enum import Enum
from typing import FrozenSet, Optional

from pydantic import BaseModel, Field

HOME_CITY = "Buritis"
# "Local" is how the first version of the office app stored the home city
HOME_CITY_ALIASES: FrozenSet[str] = frozenset({HOME_CITY, "Local"})


def is_home_city(city: Optional[str]) -> bool:
    return city in HOME_CITY_ALIASES


class AppointmentStatus(str, Enum):
    """
    Appointment lifecycle status.

    Flow: waiting → confirmed → archived
                ↖ (revert) ↙
          archived → waiting (postpone)
    """

    WAITING = "waiting"
    CONFIRMED = "confirmed"
    ARCHIVED = "archived"


class AttendanceStatus(str, Enum):
    """Outcome recorded once an appointment is archived."""

    DONE = "done"
    NOT_DONE = "not_done"
    NO_SHOW = "no_show"


# Value Object
class AppointmentIntake(BaseModel):
    full_name: Optional[str] = None
    primary_contact: Optional[str] = None
    secondary_contact: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = HOME_CITY
    notes: Optional[str] = None
    is_priority: bool = False


# Aggregate Root
class Appointment(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    full_name: str
    primary_contact: str
    secondary_contact: Optional[str] = None
    address: str
    city: str = HOME_CITY
    notes: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.now)
    is_priority: bool = False
    status: AppointmentStatus = AppointmentStatus.WAITING
    scheduled_at: Optional[datetime] = None
    attendance: Optional[AttendanceStatus] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    updated_at: Optional[datetime] = None

    @property
    def is_home_city(self) -> bool:
        return is_home_city(self.city)

    def scheduled_on(self, day: date) -> bool:
        return self.scheduled_at is not None and self.scheduled_at.date() == day

    class Config:
        json_schema_extra = {
            "example": {
                "full_name": "Maria Souza",
                "primary_contact": "99999-2222",
                "address": "Av Central, 500",
                "city": "Buritis",
                "is_priority": True,
            }
        }
