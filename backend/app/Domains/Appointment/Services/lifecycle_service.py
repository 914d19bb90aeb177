import re
from datetime import date, datetime, time
from typing import Callable, Optional

from loguru import logger

from app.Core.Exceptions.errors import (
    CapacityExceeded,
    InvalidTransition,
    NotFound,
    SlotTaken,
    ValidationError,
)
from app.Domains.Appointment.Models.appointment import (
    HOME_CITY,
    Appointment,
    AppointmentIntake,
    AppointmentStatus,
    AttendanceStatus,
)
from app.Domains.Appointment.Repositories.appointment_repository import AppointmentRepository
from app.Domains.Scheduling.Services.slot_calendar import SlotCalendar
from app.Domains.Session.Models.session import SessionContext, actor_label
from app.Domains.Settings.Services.settings_service import SettingsService

REQUIRED_FIELDS = ("full_name", "primary_contact", "address")
SLOT_PATTERN = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")

Clock = Callable[[], datetime]


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


class LifecycleService:
    """
    State machine for appointments: waiting → confirmed → archived.

    Each operation loads the record from the repository, checks that the
    move is legal for the current status, applies it and writes it back
    before returning. Nothing is written when a check fails.
    """

    def __init__(
        self,
        repository: AppointmentRepository,
        calendar: SlotCalendar,
        settings_service: SettingsService,
        clock: Clock = datetime.now,
    ):
        self.repository = repository
        self.calendar = calendar
        self.settings_service = settings_service
        self.clock = clock

    # --- helpers ---

    def _require(self, appointment_id: str) -> Appointment:
        appointment = self.repository.get(appointment_id)
        if not appointment:
            raise NotFound(f"Appointment {appointment_id} not found", {"id": appointment_id})
        return appointment

    def _require_status(self, appointment: Appointment, operation: str, *allowed: AppointmentStatus):
        if appointment.status not in allowed:
            raise InvalidTransition(
                f"Cannot {operation} an appointment that is {appointment.status.value}",
                {
                    "id": appointment.id,
                    "status": appointment.status.value,
                    "operation": operation,
                },
            )

    def _validated_fields(self, intake: AppointmentIntake) -> dict:
        fields = {
            "full_name": _clean(intake.full_name),
            "primary_contact": _clean(intake.primary_contact),
            "secondary_contact": _clean(intake.secondary_contact),
            "address": _clean(intake.address),
            "city": _clean(intake.city) or HOME_CITY,
            "notes": _clean(intake.notes),
        }
        missing = [name for name in REQUIRED_FIELDS if not fields[name]]
        if missing:
            raise ValidationError(
                f"Missing required fields: {', '.join(missing)}", {"missing": missing}
            )
        return fields

    def _touch(self, appointment: Appointment, actor: Optional[SessionContext]) -> Appointment:
        appointment.updated_at = self.clock()
        appointment.updated_by = actor.user_id if actor else None
        logger.debug(f"Appointment {appointment.id} updated by {actor_label(actor)}")
        return self.repository.save(appointment)

    def _scheduled_at(self, day: date, slot: str) -> datetime:
        match = SLOT_PATTERN.match(slot or "")
        if not match:
            raise ValidationError(f"Time '{slot}' is not in HH:MM format", {"time": slot})
        if not self.calendar.is_slot(slot):
            raise ValidationError(
                f"Time '{slot}' is not a bookable slot", {"time": slot, "slots": self.calendar.labels()}
            )
        return datetime.combine(day, time(int(match.group(1)), int(match.group(2))))

    # --- operations ---

    def get(self, appointment_id: str) -> Appointment:
        return self._require(appointment_id)

    def create(self, intake: AppointmentIntake, actor: Optional[SessionContext] = None) -> Appointment:
        fields = self._validated_fields(intake)
        appointment = Appointment(
            **fields,
            is_priority=intake.is_priority,
            created_at=self.clock(),
            status=AppointmentStatus.WAITING,
            scheduled_at=None,
            attendance=None,
            created_by=actor.user_id if actor else None,
        )
        self.repository.save(appointment)
        logger.info(
            f"Appointment {appointment.id} created by {actor_label(actor)} (priority={appointment.is_priority})"
        )
        return appointment

    def update(
        self, appointment_id: str, intake: AppointmentIntake, actor: Optional[SessionContext] = None
    ) -> Appointment:
        """Edit the contact details; identity, status and timestamps are preserved."""
        appointment = self._require(appointment_id)
        fields = self._validated_fields(intake)
        for name, value in fields.items():
            setattr(appointment, name, value)
        appointment.is_priority = intake.is_priority
        logger.info(f"Appointment {appointment.id} edited")
        return self._touch(appointment, actor)

    def confirm(
        self,
        appointment_id: str,
        day: date,
        slot: str,
        daily_limit: Optional[int] = None,
        actor: Optional[SessionContext] = None,
    ) -> Appointment:
        appointment = self._require(appointment_id)
        self._require_status(appointment, "confirm", AppointmentStatus.WAITING)
        scheduled_at = self._scheduled_at(day, slot)

        limit = daily_limit if daily_limit is not None else self.settings_service.daily_limit()
        if limit < 0:
            raise ValidationError("daily_limit must be zero or greater", {"daily_limit": limit})

        # Both checks run against what the repository holds right now
        confirmed_on_day = self.repository.find(
            lambda a: a.status == AppointmentStatus.CONFIRMED and a.scheduled_on(day)
        )
        if any(a.scheduled_at == scheduled_at for a in confirmed_on_day):
            raise SlotTaken(
                f"Slot {day.isoformat()} {slot} is already taken",
                {"date": day.isoformat(), "time": slot},
            )
        if len(confirmed_on_day) >= limit:
            raise CapacityExceeded(
                f"Daily limit of {limit} reached for {day.isoformat()}",
                {"date": day.isoformat(), "daily_limit": limit, "confirmed": len(confirmed_on_day)},
            )

        appointment.status = AppointmentStatus.CONFIRMED
        appointment.scheduled_at = scheduled_at
        appointment.attendance = None
        logger.info(f"Appointment {appointment.id} confirmed for {scheduled_at.isoformat()}")
        return self._touch(appointment, actor)

    def revert_to_waiting(self, appointment_id: str, actor: Optional[SessionContext] = None) -> Appointment:
        appointment = self._require(appointment_id)
        self._require_status(appointment, "revert", AppointmentStatus.CONFIRMED)
        appointment.status = AppointmentStatus.WAITING
        appointment.scheduled_at = None
        appointment.attendance = None
        logger.info(f"Appointment {appointment.id} returned to the waiting list")
        return self._touch(appointment, actor)

    def archive(self, appointment_id: str, actor: Optional[SessionContext] = None) -> Appointment:
        appointment = self._require(appointment_id)
        self._require_status(
            appointment, "archive", AppointmentStatus.WAITING, AppointmentStatus.CONFIRMED
        )
        appointment.status = AppointmentStatus.ARCHIVED
        logger.info(f"Appointment {appointment.id} archived")
        return self._touch(appointment, actor)

    def set_attendance(
        self,
        appointment_id: str,
        value: AttendanceStatus,
        actor: Optional[SessionContext] = None,
    ) -> Appointment:
        appointment = self._require(appointment_id)
        self._require_status(appointment, "record attendance for", AppointmentStatus.ARCHIVED)
        appointment.attendance = AttendanceStatus(value)
        logger.info(f"Appointment {appointment.id} attendance set to {appointment.attendance.value}")
        return self._touch(appointment, actor)

    def postpone(self, appointment_id: str, actor: Optional[SessionContext] = None) -> Appointment:
        """Pull an archived appointment back into the waiting list."""
        appointment = self._require(appointment_id)
        self._require_status(appointment, "postpone", AppointmentStatus.ARCHIVED)
        appointment.status = AppointmentStatus.WAITING
        appointment.scheduled_at = None
        appointment.attendance = None
        logger.info(f"Appointment {appointment.id} postponed back to the waiting list")
        return self._touch(appointment, actor)

    def toggle_priority(self, appointment_id: str, actor: Optional[SessionContext] = None) -> Appointment:
        appointment = self._require(appointment_id)
        appointment.is_priority = not appointment.is_priority
        logger.info(f"Appointment {appointment.id} priority set to {appointment.is_priority}")
        return self._touch(appointment, actor)

    def delete(self, appointment_id: str, actor: Optional[SessionContext] = None) -> None:
        if not self.repository.delete(appointment_id):
            raise NotFound(f"Appointment {appointment_id} not found", {"id": appointment_id})
        logger.info(f"Appointment {appointment_id} deleted by {actor_label(actor)}")
