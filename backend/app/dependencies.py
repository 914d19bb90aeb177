from datetime import datetime
from typing import Callable, Optional

from fastapi import Depends, Header

from app.Core.Config.server import ServerConfig
from app.Domains.Appointment.Repositories.appointment_repository import AppointmentRepository
from app.Domains.Appointment.Services.archival_sweep import ArchivalSweep
from app.Domains.Appointment.Services.lifecycle_service import LifecycleService
from app.Domains.Appointment.Services.listing_service import ListingService
from app.Domains.Scheduling.Services.slot_calendar import SlotCalendar
from app.Domains.Session.Models.session import SessionContext
from app.Domains.Settings.Repositories.settings_repository import SettingsRepository
from app.Domains.Settings.Services.settings_service import SettingsService
from app.Infrastructure.Repositories.json_appointment_repository import JsonAppointmentRepository
from app.Infrastructure.Repositories.settings_repositories import JsonSettingsRepository
from app.Infrastructure.Storage.json_store import JsonCollectionStore

# Singletons (Infrastructure)
server_config = ServerConfig()
_store = JsonCollectionStore(server_config.data_dir)
_appointment_repository = JsonAppointmentRepository(_store)
_settings_repository = JsonSettingsRepository(_store)


def get_clock() -> Callable[[], datetime]:
    return datetime.now


def get_appointment_repository() -> AppointmentRepository:
    return _appointment_repository


def get_settings_repository() -> SettingsRepository:
    return _settings_repository


def get_session(
    x_user_id: Optional[str] = Header(None),
    x_user_name: Optional[str] = Header(None),
    x_user_role: Optional[str] = Header(None),
) -> Optional[SessionContext]:
    if not x_user_id:
        return None
    role = "admin" if (x_user_role or "").lower() == "admin" else "staff"
    return SessionContext(user_id=x_user_id, name=x_user_name, role=role)


def get_settings_service(
    repository: SettingsRepository = Depends(get_settings_repository),
) -> SettingsService:
    return SettingsService(repository, default_daily_limit=server_config.default_daily_limit)


def get_slot_calendar(
    repository: AppointmentRepository = Depends(get_appointment_repository),
) -> SlotCalendar:
    return SlotCalendar(repository)


def get_lifecycle_service(
    repository: AppointmentRepository = Depends(get_appointment_repository),
    calendar: SlotCalendar = Depends(get_slot_calendar),
    settings_service: SettingsService = Depends(get_settings_service),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> LifecycleService:
    return LifecycleService(repository, calendar, settings_service, clock=clock)


def get_listing_service(
    repository: AppointmentRepository = Depends(get_appointment_repository),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> ListingService:
    return ListingService(repository, clock=clock)


def get_archival_sweep(
    repository: AppointmentRepository = Depends(get_appointment_repository),
    clock: Callable[[], datetime] = Depends(get_clock),
) -> ArchivalSweep:
    return ArchivalSweep(repository, clock=clock)
