from datetime import date, datetime, timedelta
from typing import List, Optional

from app.Domains.Appointment.Models.appointment import AppointmentStatus
from app.Domains.Appointment.Repositories.appointment_repository import AppointmentRepository
from app.Domains.Scheduling.Models.schedule import DailySchedule, DayOccupancy

SLOT_FORMAT = "%H:%M"


def format_slot(moment: datetime) -> str:
    return moment.strftime(SLOT_FORMAT)


class SlotCalendar:
    """
    The recurring set of bookable time-of-day slots.

    Labels are generated once from the schedule and are the same for every
    date. Occupancy is computed from the repository on every call.
    """

    def __init__(self, repository: AppointmentRepository, schedule: Optional[DailySchedule] = None):
        self.repository = repository
        self.schedule = schedule or DailySchedule()
        self._labels = self._generate_labels()

    def _generate_labels(self) -> List[str]:
        labels: List[str] = []
        step = timedelta(minutes=self.schedule.tick_minutes)
        anchor = date(2000, 1, 1)
        for window in self.schedule.windows:
            current = datetime.combine(anchor, window.start)
            end = datetime.combine(anchor, window.end)
            while current <= end:
                label = format_slot(current)
                if label not in labels:
                    labels.append(label)
                current += step
        return labels

    def labels(self) -> List[str]:
        return list(self._labels)

    def is_slot(self, label: str) -> bool:
        return label in self._labels

    def occupancy(self, day: date, daily_limit: int) -> DayOccupancy:
        confirmed = self.repository.find(
            lambda a: a.status == AppointmentStatus.CONFIRMED and a.scheduled_on(day)
        )
        occupied = sorted({format_slot(a.scheduled_at) for a in confirmed})
        return DayOccupancy(
            day=day,
            daily_limit=daily_limit,
            occupied=occupied,
            free=[label for label in self._labels if label not in occupied],
            occupied_count=len(confirmed),
            remaining=max(0, daily_limit - len(confirmed)),
        )
