from datetime import date
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, Request

from app.dependencies import get_listing_service
from app.Domains.Appointment.Models.appointment import AppointmentStatus
from app.Domains.Appointment.Services.listing_service import AuditField, ListingService
from app.Http.DTOs.appointment_schemas import (
    AppointmentResponse,
    OtherCitiesResponse,
    WaitingEntryResponse,
)
from app.Http.Routes.appointments import map_to_response

router = APIRouter(tags=["Views"])


@router.get(
    "/waiting-list",
    response_model=List[WaitingEntryResponse],
    summary="Home-city waiting list",
    description="Priority entries first, then oldest first, with expiry information.",
)
async def get_waiting_list(request: Request, listing: ListingService = Depends(get_listing_service)):
    return [
        WaitingEntryResponse(appointment=map_to_response(entry.appointment, request), expiry=entry.expiry)
        for entry in listing.waiting_list()
    ]


@router.get("/confirmed", response_model=List[AppointmentResponse], summary="Confirmed agenda")
async def get_confirmed(request: Request, listing: ListingService = Depends(get_listing_service)):
    return [map_to_response(a, request) for a in listing.confirmed()]


@router.get("/archived", response_model=List[AppointmentResponse], summary="Archived appointments")
async def get_archived(request: Request, listing: ListingService = Depends(get_listing_service)):
    return [map_to_response(a, request) for a in listing.archived()]


@router.get(
    "/other-cities",
    response_model=OtherCitiesResponse,
    summary="Open appointments outside the home city, grouped by city",
)
async def get_other_cities(request: Request, listing: ListingService = Depends(get_listing_service)):
    groups = listing.other_cities()
    return OtherCitiesResponse(
        groups={city: [map_to_response(a, request) for a in items] for city, items in groups.items()}
    )


@router.get("/search", response_model=List[AppointmentResponse], summary="Search by name, address or contact")
async def search(
    request: Request,
    q: str = Query("", description="Search term"),
    listing: ListingService = Depends(get_listing_service),
):
    return [map_to_response(a, request) for a in listing.search(q)]


@router.get(
    "/audit",
    summary="Audit rows for export",
    description="Filtered and field-projected rows. Formatting is left to the caller.",
)
async def get_audit(
    status: Optional[AppointmentStatus] = Query(None),
    start: Optional[date] = Query(None),
    end: Optional[date] = Query(None),
    fields: Optional[List[AuditField]] = Query(None),
    listing: ListingService = Depends(get_listing_service),
) -> List[Dict[str, Any]]:
    return listing.audit(status=status, start=start, end=end, fields=fields)
