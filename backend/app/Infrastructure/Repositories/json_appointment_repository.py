from typing import List, Optional

from pydantic import ValidationError as ModelValidationError

from app.Core.Exceptions.errors import StorageError
from app.Domains.Appointment.Models.appointment import Appointment
from app.Domains.Appointment.Repositories.appointment_repository import AppointmentRepository
from app.Infrastructure.Storage.json_store import JsonCollectionStore

APPOINTMENTS_KEY = "appointments"


class JsonAppointmentRepository(AppointmentRepository):
    def __init__(self, store: JsonCollectionStore, key: str = APPOINTMENTS_KEY):
        self.store = store
        self.key = key

    # Always re-read so every decision sees the current state on disk
    def _load(self) -> List[Appointment]:
        try:
            return [Appointment(**item) for item in self.store.load(self.key)]
        except ModelValidationError as e:
            raise StorageError(f"Collection '{self.key}' holds a malformed record", {"key": self.key}) from e

    def _dump(self, appointments: List[Appointment]) -> None:
        self.store.save(self.key, [a.model_dump(mode="json") for a in appointments])

    def get(self, appointment_id: str) -> Optional[Appointment]:
        for appointment in self._load():
            if appointment.id == appointment_id:
                return appointment
        return None

    def list_all(self) -> List[Appointment]:
        return self._load()

    def save(self, appointment: Appointment) -> Appointment:
        appointments = self._load()
        for index, existing in enumerate(appointments):
            if existing.id == appointment.id:
                appointments[index] = appointment
                break
        else:
            appointments.append(appointment)
        self._dump(appointments)
        return appointment

    def save_all(self, appointments: List[Appointment]) -> None:
        self._dump(appointments)

    def delete(self, appointment_id: str) -> bool:
        appointments = self._load()
        remaining = [a for a in appointments if a.id != appointment_id]
        if len(remaining) == len(appointments):
            return False
        self._dump(remaining)
        return True
