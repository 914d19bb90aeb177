from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse

from app.dependencies import get_lifecycle_service, get_listing_service, get_session
from app.Domains.Appointment.Models.appointment import (
    Appointment,
    AppointmentIntake,
    AppointmentStatus,
)
from app.Domains.Appointment.Services.lifecycle_service import LifecycleService
from app.Domains.Appointment.Services.listing_service import ListingService
from app.Domains.Session.Models.session import SessionContext
from app.Http.DTOs.appointment_schemas import (
    AppointmentCreateRequest,
    AppointmentResponse,
    AttendanceRequest,
    ConfirmRequest,
)
from app.Http.DTOs.error_schemas import APIErrorResponse

router = APIRouter(tags=["Appointments"])

CONFLICT_RESPONSES = {
    404: {"model": APIErrorResponse},
    409: {"model": APIErrorResponse},
    422: {"model": APIErrorResponse},
}


def map_to_response(appointment: Appointment, request: Request) -> AppointmentResponse:
    """Helper to map Domain Entity to HATEOAS Response DTO."""
    base_url = str(request.base_url).rstrip("/")
    response = AppointmentResponse.model_validate(appointment)
    href = f"{base_url}/appointments/{appointment.id}"

    response.add_link(rel="self", href=href, method="GET")
    response.add_link(rel="priority", href=f"{href}/priority", method="POST")
    if appointment.status == AppointmentStatus.WAITING:
        response.add_link(rel="confirm", href=f"{href}/confirm", method="POST")
        response.add_link(rel="archive", href=f"{href}/archive", method="POST")
    elif appointment.status == AppointmentStatus.CONFIRMED:
        response.add_link(rel="revert", href=f"{href}/revert", method="POST")
        response.add_link(rel="archive", href=f"{href}/archive", method="POST")
    else:
        response.add_link(rel="attendance", href=f"{href}/attendance", method="POST")
        response.add_link(rel="postpone", href=f"{href}/postpone", method="POST")
    return response


@router.post(
    "/appointments",
    response_model=AppointmentResponse,
    status_code=201,
    summary="Register a new appointment request",
    description="Adds a person to the waiting list.",
    responses={422: {"model": APIErrorResponse}},
)
async def create_appointment(
    body: AppointmentCreateRequest,
    request: Request,
    service: LifecycleService = Depends(get_lifecycle_service),
    session: Optional[SessionContext] = Depends(get_session),
):
    created = service.create(AppointmentIntake(**body.model_dump()), actor=session)
    return map_to_response(created, request)


@router.get(
    "/appointments",
    response_model=List[AppointmentResponse],
    summary="List appointments",
    description="All appointments, optionally restricted to one status.",
)
async def list_appointments(
    request: Request,
    status: Optional[AppointmentStatus] = Query(None),
    listing: ListingService = Depends(get_listing_service),
):
    return [map_to_response(a, request) for a in listing.by_status(status)]


@router.get(
    "/appointments/{appointment_id}",
    response_model=AppointmentResponse,
    responses={404: {"model": APIErrorResponse}},
)
async def get_appointment(
    appointment_id: str,
    request: Request,
    service: LifecycleService = Depends(get_lifecycle_service),
):
    return map_to_response(service.get(appointment_id), request)


@router.put(
    "/appointments/{appointment_id}",
    response_model=AppointmentResponse,
    summary="Edit contact details",
    responses={404: {"model": APIErrorResponse}, 422: {"model": APIErrorResponse}},
)
async def update_appointment(
    appointment_id: str,
    body: AppointmentCreateRequest,
    request: Request,
    service: LifecycleService = Depends(get_lifecycle_service),
    session: Optional[SessionContext] = Depends(get_session),
):
    updated = service.update(appointment_id, AppointmentIntake(**body.model_dump()), actor=session)
    return map_to_response(updated, request)


@router.delete("/appointments/{appointment_id}", responses={404: {"model": APIErrorResponse}})
async def delete_appointment(
    appointment_id: str,
    service: LifecycleService = Depends(get_lifecycle_service),
    session: Optional[SessionContext] = Depends(get_session),
):
    service.delete(appointment_id, actor=session)
    return JSONResponse({"message": "Deleted successfully"})


@router.post(
    "/appointments/{appointment_id}/confirm",
    response_model=AppointmentResponse,
    summary="Confirm into a time slot",
    description="Books a slot on a date. Fails when the slot is taken or the day is full.",
    responses=CONFLICT_RESPONSES,
)
async def confirm_appointment(
    appointment_id: str,
    body: ConfirmRequest,
    request: Request,
    service: LifecycleService = Depends(get_lifecycle_service),
    session: Optional[SessionContext] = Depends(get_session),
):
    confirmed = service.confirm(
        appointment_id, body.date, body.time, daily_limit=body.daily_limit, actor=session
    )
    return map_to_response(confirmed, request)


@router.post(
    "/appointments/{appointment_id}/revert",
    response_model=AppointmentResponse,
    summary="Cancel the booking and return to the waiting list",
    responses=CONFLICT_RESPONSES,
)
async def revert_appointment(
    appointment_id: str,
    request: Request,
    service: LifecycleService = Depends(get_lifecycle_service),
    session: Optional[SessionContext] = Depends(get_session),
):
    return map_to_response(service.revert_to_waiting(appointment_id, actor=session), request)


@router.post(
    "/appointments/{appointment_id}/archive",
    response_model=AppointmentResponse,
    responses=CONFLICT_RESPONSES,
)
async def archive_appointment(
    appointment_id: str,
    request: Request,
    service: LifecycleService = Depends(get_lifecycle_service),
    session: Optional[SessionContext] = Depends(get_session),
):
    return map_to_response(service.archive(appointment_id, actor=session), request)


@router.post(
    "/appointments/{appointment_id}/attendance",
    response_model=AppointmentResponse,
    summary="Record whether the person attended",
    responses=CONFLICT_RESPONSES,
)
async def set_attendance(
    appointment_id: str,
    body: AttendanceRequest,
    request: Request,
    service: LifecycleService = Depends(get_lifecycle_service),
    session: Optional[SessionContext] = Depends(get_session),
):
    return map_to_response(service.set_attendance(appointment_id, body.value, actor=session), request)


@router.post(
    "/appointments/{appointment_id}/postpone",
    response_model=AppointmentResponse,
    summary="Move an archived appointment back to the waiting list",
    responses=CONFLICT_RESPONSES,
)
async def postpone_appointment(
    appointment_id: str,
    request: Request,
    service: LifecycleService = Depends(get_lifecycle_service),
    session: Optional[SessionContext] = Depends(get_session),
):
    return map_to_response(service.postpone(appointment_id, actor=session), request)


@router.post(
    "/appointments/{appointment_id}/priority",
    response_model=AppointmentResponse,
    summary="Toggle the priority flag",
    responses={404: {"model": APIErrorResponse}},
)
async def toggle_priority(
    appointment_id: str,
    request: Request,
    service: LifecycleService = Depends(get_lifecycle_service),
    session: Optional[SessionContext] = Depends(get_session),
):
    return map_to_response(service.toggle_priority(appointment_id, actor=session), request)
