from datetime import date as DateType
from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from app.Domains.Appointment.Models.appointment import (
    HOME_CITY,
    AppointmentStatus,
    AttendanceStatus,
)
from app.Domains.Appointment.Services.waiting_list import ExpiryInfo
from app.Http.Responses.hateoas import HateoasModel, Link

# --- Requests ---


class AppointmentCreateRequest(BaseModel):
    full_name: Optional[str] = None
    primary_contact: Optional[str] = None
    secondary_contact: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = HOME_CITY
    notes: Optional[str] = None
    is_priority: bool = False


class ConfirmRequest(BaseModel):
    date: DateType
    time: str = Field(..., examples=["08:10"])
    daily_limit: Optional[int] = None


class AttendanceRequest(BaseModel):
    value: AttendanceStatus


class SettingsUpdateRequest(BaseModel):
    daily_limit: int


# --- Responses ---


class AppointmentResponse(HateoasModel):
    id: str
    full_name: str
    primary_contact: str
    secondary_contact: Optional[str] = None
    address: str
    city: str
    notes: Optional[str] = None
    created_at: datetime
    is_priority: bool
    status: AppointmentStatus
    scheduled_at: Optional[datetime] = None
    attendance: Optional[AttendanceStatus] = None
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    updated_at: Optional[datetime] = None

    links: List[Link] = Field(default_factory=list, alias="_links")

    class Config:
        from_attributes = True
        populate_by_name = True


class WaitingEntryResponse(BaseModel):
    appointment: AppointmentResponse
    expiry: ExpiryInfo


class OtherCitiesResponse(BaseModel):
    groups: Dict[str, List[AppointmentResponse]]


class SettingsResponse(BaseModel):
    daily_limit: int
