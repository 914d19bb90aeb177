from datetime import datetime
from typing import Iterable, List

from pydantic import BaseModel

from app.Domains.Appointment.Models.appointment import Appointment, AppointmentStatus

LIST_VALIDITY_DAYS = 30
EXPIRY_WARNING_DAYS = 25
SECONDS_PER_DAY = 24 * 60 * 60


class ExpiryInfo(BaseModel):
    days_waiting: int
    days_until_expiry: int
    expiring_soon: bool
    expired: bool


def expiry(appointment: Appointment, now: datetime) -> ExpiryInfo:
    """Age of a waiting-list entry. Purely informational, nothing is removed."""
    days_waiting = int((now - appointment.created_at).total_seconds() // SECONDS_PER_DAY)
    days_until_expiry = LIST_VALIDITY_DAYS - days_waiting
    return ExpiryInfo(
        days_waiting=days_waiting,
        days_until_expiry=days_until_expiry,
        expiring_soon=days_waiting >= EXPIRY_WARNING_DAYS,
        expired=days_until_expiry <= 0,
    )


def waiting_list(appointments: Iterable[Appointment]) -> List[Appointment]:
    """Home-city waiting entries: priority first, then oldest first, then by id."""
    pending = [
        a for a in appointments if a.status == AppointmentStatus.WAITING and a.is_home_city
    ]
    return sorted(pending, key=lambda a: (not a.is_priority, a.created_at, a.id))
