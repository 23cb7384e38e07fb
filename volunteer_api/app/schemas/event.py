"""
Pydantic models for event data.

``EventCreate`` is the request body for creating an event and
``EventRead`` the representation returned by every event endpoint.
Location fields are stored flat in the database and exposed here as a
nested ``location`` object.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, model_validator

from .common import SQLITE_INT_MAX, CamelModel


class Location(CamelModel):
    country: Optional[str] = Field(None, examples=["Indonesia"])
    province: Optional[str] = Field(None, examples=["Jawa Barat"])
    city: Optional[str] = Field(None, examples=["Bandung"])
    district: Optional[str] = None
    village: Optional[str] = None
    rt_rw: Optional[str] = Field(None, examples=["003/005"])
    latitude: Optional[float] = Field(None, ge=-90, le=90, allow_inf_nan=False)
    longitude: Optional[float] = Field(None, ge=-180, le=180, allow_inf_nan=False)


class EventCreate(CamelModel):
    """Schema for creating an event."""

    title: str = Field(..., min_length=1, examples=["Beach Clean-up"])
    description: str = Field(..., min_length=1)
    image_url: Optional[str] = None
    organizer_id: str = Field(..., min_length=1)
    organizer_name: Optional[str] = None
    location: Location = Field(default_factory=Location)
    event_start_time: Optional[datetime] = Field(None, examples=["2025-09-01T08:00:00Z"])
    event_end_time: Optional[datetime] = None
    target_volunteer_count: int = Field(0, ge=0, le=SQLITE_INT_MAX, examples=[25])
    participation_fee_idr: int = Field(0, ge=0, le=SQLITE_INT_MAX)
    category: str = Field(..., min_length=1, examples=["environment"])

    @model_validator(mode="after")
    def check_time_range(self) -> "EventCreate":
        if (
            self.event_start_time is not None
            and self.event_end_time is not None
            and self.event_end_time < self.event_start_time
        ):
            raise ValueError("eventEndTime must not be before eventStartTime")
        return self


class EventRead(CamelModel):
    """Schema for reading an event from the API.

    ``registeredVolunteerIds`` is computed from the participations of
    the event, in registration order.
    """

    id: str
    title: str
    description: str
    image_url: Optional[str] = None
    organizer_id: str
    organizer_name: Optional[str] = None
    event_start_time: Optional[datetime] = None
    event_end_time: Optional[datetime] = None
    target_volunteer_count: int
    current_volunteer_count: int
    registered_volunteer_ids: List[str] = Field(default_factory=list)
    participation_fee_idr: int
    category: str
    is_active: bool
    created_at: datetime
    location: Location


class EventCreated(CamelModel):
    success: bool = True
    message: str = "Event created"
    event_id: str
