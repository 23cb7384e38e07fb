"""
Pydantic models for event participations.

A participation records that a volunteer signed up for an event,
optionally with a donation.  Each user may hold at most one
participation per event.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import CamelModel


class ParticipationCreate(CamelModel):
    user_id: str = Field(..., min_length=1, examples=["user_3f2a"])
    event_id: str = Field(..., min_length=1, examples=["event_9c1d"])
    # ``null`` is accepted and treated as no donation.
    donation_amount: Optional[float] = Field(0, ge=0, allow_inf_nan=False)


class ParticipationRead(CamelModel):
    id: str
    user_id: str
    event_id: str
    donation_amount: float
    registration_date: datetime


class ParticipationCreated(CamelModel):
    success: bool = True
    message: str = "Registration successful"
    participation_id: str
