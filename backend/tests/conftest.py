"""
Pytest fixtures for the scheduling backend tests.
"""

import os
import tempfile
from datetime import datetime, timedelta

import pytest

# Keep the app's module-level JSON store out of the source tree and the
# background sweep loop off while tests import main.
os.environ.setdefault("DATA_DIR", tempfile.mkdtemp(prefix="gaci-tests-"))
os.environ.setdefault("SWEEP_INTERVAL_SECONDS", "0")

from app.Domains.Appointment.Models.appointment import AppointmentIntake  # noqa: E402
from app.Domains.Appointment.Services.archival_sweep import ArchivalSweep  # noqa: E402
from app.Domains.Appointment.Services.lifecycle_service import LifecycleService  # noqa: E402
from app.Domains.Appointment.Services.listing_service import ListingService  # noqa: E402
from app.Domains.Scheduling.Services.slot_calendar import SlotCalendar  # noqa: E402
from app.Domains.Settings.Models.settings import OfficeSettings  # noqa: E402
from app.Domains.Settings.Services.settings_service import SettingsService  # noqa: E402
from app.Infrastructure.Repositories.in_memory_appointment_repository import (  # noqa: E402
    InMemoryAppointmentRepository,
)
from app.Infrastructure.Repositories.settings_repositories import (  # noqa: E402
    InMemorySettingsRepository,
)


class FakeClock:
    """A settable 'now' shared by every service in a test."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


@pytest.fixture
def clock():
    return FakeClock(datetime(2025, 3, 1, 9, 0))


@pytest.fixture
def repository():
    return InMemoryAppointmentRepository()


@pytest.fixture
def settings_service():
    return SettingsService(InMemorySettingsRepository(OfficeSettings(daily_limit=20)))


@pytest.fixture
def calendar(repository):
    return SlotCalendar(repository)


@pytest.fixture
def lifecycle(repository, calendar, settings_service, clock):
    return LifecycleService(repository, calendar, settings_service, clock=clock)


@pytest.fixture
def sweep(repository, clock):
    return ArchivalSweep(repository, clock=clock)


@pytest.fixture
def listing(repository, clock):
    return ListingService(repository, clock=clock)


@pytest.fixture
def make_intake():
    """Build intake payloads with sensible defaults."""

    def _make(**overrides) -> AppointmentIntake:
        data = {
            "full_name": "João Silva",
            "primary_contact": "99999-1111",
            "address": "Rua das Flores, 123",
            "city": "Buritis",
            "is_priority": False,
        }
        data.update(overrides)
        return AppointmentIntake(**data)

    return _make
