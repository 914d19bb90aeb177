from datetime import date, datetime, time
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Sequence

from pydantic import BaseModel

from app.Domains.Appointment.Models.appointment import Appointment, AppointmentStatus
from app.Domains.Appointment.Repositories.appointment_repository import AppointmentRepository
from app.Domains.Appointment.Services.waiting_list import ExpiryInfo, expiry, waiting_list


class AuditField(str, Enum):
    NAME = "name"
    ADDRESS = "address"
    CONTACT = "contact"
    DATE = "date"
    NOTES = "notes"


class WaitingEntry(BaseModel):
    appointment: Appointment
    expiry: ExpiryInfo


class ListingService:
    """Read-only projections over the appointment collection. Nothing here is persisted."""

    def __init__(self, repository: AppointmentRepository, clock: Callable[[], datetime] = datetime.now):
        self.repository = repository
        self.clock = clock

    def by_status(self, status: Optional[AppointmentStatus] = None) -> List[Appointment]:
        if status is None:
            return self.repository.list_all()
        return self.repository.find(lambda a: a.status == status)

    def waiting_list(self) -> List[WaitingEntry]:
        now = self.clock()
        return [
            WaitingEntry(appointment=a, expiry=expiry(a, now))
            for a in waiting_list(self.repository.list_all())
        ]

    def confirmed(self) -> List[Appointment]:
        confirmed = self.by_status(AppointmentStatus.CONFIRMED)
        return sorted(confirmed, key=lambda a: (a.scheduled_at or datetime.min, a.id))

    def archived(self) -> List[Appointment]:
        return self.by_status(AppointmentStatus.ARCHIVED)

    def other_cities(self) -> Dict[str, List[Appointment]]:
        groups: Dict[str, List[Appointment]] = {}
        for appointment in self.repository.list_all():
            if appointment.status == AppointmentStatus.ARCHIVED or appointment.is_home_city:
                continue
            groups.setdefault(appointment.city, []).append(appointment)
        return groups

    def search(self, term: str) -> List[Appointment]:
        lowered = (term or "").strip().lower()
        if not lowered:
            return self.repository.list_all()
        return self.repository.find(
            lambda a: lowered in a.full_name.lower()
            or lowered in a.address.lower()
            or lowered in a.primary_contact
        )

    def audit(
        self,
        status: Optional[AppointmentStatus] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
        fields: Optional[Sequence[AuditField]] = None,
    ) -> List[Dict[str, Any]]:
        """
        Filtered, field-projected rows for the export collaborator.

        The period applies to the scheduled time when there is one and to the
        creation time otherwise. Both period ends are inclusive and only
        applied when both are given.
        """
        data = self.by_status(status)
        if start and end:
            lower = datetime.combine(start, time.min)
            upper = datetime.combine(end, time.max)
            data = [a for a in data if lower <= (a.scheduled_at or a.created_at) <= upper]

        selected = list(fields) if fields else list(AuditField)
        return [self._project(a, selected) for a in data]

    @staticmethod
    def _project(appointment: Appointment, fields: Sequence[AuditField]) -> Dict[str, Any]:
        row: Dict[str, Any] = {"id": appointment.id}
        for field in fields:
            if field == AuditField.NAME:
                row["name"] = appointment.full_name
            elif field == AuditField.ADDRESS:
                row["address"] = f"{appointment.address} - {appointment.city}"
            elif field == AuditField.CONTACT:
                contact = appointment.primary_contact
                if appointment.secondary_contact:
                    contact = f"{contact} / {appointment.secondary_contact}"
                row["contact"] = contact
            elif field == AuditField.DATE:
                row["date"] = appointment.scheduled_at.isoformat() if appointment.scheduled_at else None
            elif field == AuditField.NOTES:
                row["notes"] = appointment.notes
        return row
