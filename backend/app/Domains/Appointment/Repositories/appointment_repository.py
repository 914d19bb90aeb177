from abc import ABC, abstractmethod
from datetime import date
from typing import Callable, List, Optional

from app.Domains.Appointment.Models.appointment import Appointment


class AppointmentRepository(ABC):
    @abstractmethod
    def get(self, appointment_id: str) -> Optional[Appointment]:
        pass

    @abstractmethod
    def list_all(self) -> List[Appointment]:
        """All appointments in insertion order."""
        pass

    @abstractmethod
    def save(self, appointment: Appointment) -> Appointment:
        """Insert or replace a single appointment by id."""
        pass

    @abstractmethod
    def save_all(self, appointments: List[Appointment]) -> None:
        """Overwrite the whole collection in one write."""
        pass

    @abstractmethod
    def delete(self, appointment_id: str) -> bool:
        pass

    def find(self, predicate: Callable[[Appointment], bool]) -> List[Appointment]:
        return [a for a in self.list_all() if predicate(a)]

    def list_by_date(self, day: date) -> List[Appointment]:
        return self.find(lambda a: a.scheduled_on(day))
