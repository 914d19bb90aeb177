from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.dependencies import (
    get_archival_sweep,
    get_session,
    get_settings_service,
    get_slot_calendar,
)
from app.Domains.Appointment.Services.archival_sweep import ArchivalSweep, SweepSummary
from app.Domains.Scheduling.Models.schedule import DayOccupancy
from app.Domains.Scheduling.Services.slot_calendar import SlotCalendar
from app.Domains.Session.Models.session import SessionContext
from app.Domains.Settings.Services.settings_service import SettingsService
from app.Http.DTOs.appointment_schemas import SettingsResponse, SettingsUpdateRequest
from app.Http.DTOs.error_schemas import APIErrorResponse

router = APIRouter(tags=["Schedule"])


@router.get("/schedule/slots", response_model=List[str], summary="Bookable time-of-day slots")
async def list_slots(calendar: SlotCalendar = Depends(get_slot_calendar)):
    return calendar.labels()


@router.get(
    "/schedule/{day}",
    response_model=DayOccupancy,
    summary="Slot occupancy for a date",
    description="Occupied and free slots plus remaining capacity for the day.",
)
async def day_occupancy(
    day: date,
    daily_limit: Optional[int] = Query(None, ge=0),
    calendar: SlotCalendar = Depends(get_slot_calendar),
    settings_service: SettingsService = Depends(get_settings_service),
):
    limit = daily_limit if daily_limit is not None else settings_service.daily_limit()
    return calendar.occupancy(day, limit)


@router.get("/settings", response_model=SettingsResponse, summary="Office settings")
async def get_settings(settings_service: SettingsService = Depends(get_settings_service)):
    return SettingsResponse(**settings_service.get_settings().model_dump())


@router.put(
    "/settings",
    response_model=SettingsResponse,
    summary="Change the daily capacity",
    responses={403: {"model": APIErrorResponse}, 422: {"model": APIErrorResponse}},
)
async def update_settings(
    body: SettingsUpdateRequest,
    settings_service: SettingsService = Depends(get_settings_service),
    session: Optional[SessionContext] = Depends(get_session),
):
    settings = settings_service.update_daily_limit(body.daily_limit, actor=session)
    return SettingsResponse(**settings.model_dump())


@router.post(
    "/maintenance/archive-sweep",
    response_model=SweepSummary,
    summary="Run the archival sweep now",
)
async def run_archive_sweep(sweep: ArchivalSweep = Depends(get_archival_sweep)):
    return sweep.run()
