"""
Automatic archival of confirmed appointments whose day has passed.

Run at startup and then on a timer. Running it twice in a row is harmless:
the second pass finds nothing left to move.
"""

import asyncio
from datetime import datetime
from typing import Callable, List

from loguru import logger
from pydantic import BaseModel, Field

from app.Domains.Appointment.Models.appointment import AppointmentStatus
from app.Domains.Appointment.Repositories.appointment_repository import AppointmentRepository
from app.Domains.Session.Models.session import SYSTEM_ACTOR


class SweepSummary(BaseModel):
    ran_at: datetime
    archived: int = 0
    archived_ids: List[str] = Field(default_factory=list)


class ArchivalSweep:
    def __init__(self, repository: AppointmentRepository, clock: Callable[[], datetime] = datetime.now):
        self.repository = repository
        self.clock = clock

    def run(self) -> SweepSummary:
        now = self.clock()
        today = now.date()
        summary = SweepSummary(ran_at=now)

        appointments = self.repository.list_all()
        for appointment in appointments:
            if appointment.status != AppointmentStatus.CONFIRMED or appointment.scheduled_at is None:
                continue
            if appointment.scheduled_at.date() < today:
                appointment.status = AppointmentStatus.ARCHIVED
                appointment.attendance = None
                appointment.updated_at = now
                appointment.updated_by = SYSTEM_ACTOR
                summary.archived_ids.append(appointment.id)
                logger.info(f"Appointment {appointment.id} transitioned: confirmed → archived")

        summary.archived = len(summary.archived_ids)
        if summary.archived:
            self.repository.save_all(appointments)
            logger.info(f"Archival sweep moved {summary.archived} appointment(s)")
        else:
            logger.debug("Archival sweep found nothing to archive")
        return summary

    async def run_forever(self, interval_seconds: int) -> None:
        """Periodic sweep loop for the application lifespan."""
        while True:
            await asyncio.sleep(interval_seconds)
            try:
                self.run()
            except Exception as e:
                logger.error(f"Archival sweep error: {e}")
