from typing import Dict, List, Optional

from app.Domains.Appointment.Models.appointment import Appointment
from app.Domains.Appointment.Repositories.appointment_repository import AppointmentRepository


class InMemoryAppointmentRepository(AppointmentRepository):
    """Dict-backed repository for tests and throwaway runs."""

    def __init__(self, appointments: Optional[List[Appointment]] = None):
        self._items: Dict[str, Appointment] = {}
        self.write_count = 0
        for appointment in appointments or []:
            self._items[appointment.id] = appointment.model_copy(deep=True)

    # Copies in and out so callers never mutate stored state by reference
    def get(self, appointment_id: str) -> Optional[Appointment]:
        appointment = self._items.get(appointment_id)
        return appointment.model_copy(deep=True) if appointment else None

    def list_all(self) -> List[Appointment]:
        return [a.model_copy(deep=True) for a in self._items.values()]

    def save(self, appointment: Appointment) -> Appointment:
        self._items[appointment.id] = appointment.model_copy(deep=True)
        self.write_count += 1
        return appointment

    def save_all(self, appointments: List[Appointment]) -> None:
        self._items = {a.id: a.model_copy(deep=True) for a in appointments}
        self.write_count += 1

    def delete(self, appointment_id: str) -> bool:
        if appointment_id not in self._items:
            return False
        del self._items[appointment_id]
        self.write_count += 1
        return True
