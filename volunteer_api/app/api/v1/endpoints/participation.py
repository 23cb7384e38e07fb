"""
Participation endpoints for API v1.

Volunteers register for events here.  Capacity and duplicate checks
are enforced atomically by ``ParticipationService.register``.
"""

from typing import List

from fastapi import APIRouter, status

from volunteer_api.app.schemas.participation import (
    ParticipationCreate,
    ParticipationCreated,
    ParticipationRead,
)
from volunteer_api.app.services.participation_service import ParticipationService


router = APIRouter()


@router.post("", response_model=ParticipationCreated, status_code=status.HTTP_201_CREATED)
async def register_participation(participation: ParticipationCreate) -> ParticipationCreated:
    """Register a user as a volunteer for an event.

    - **404** if the event does not exist.
    - **400** with code ``already_registered`` if the user is already
      registered, or ``event_full`` if no seats remain.
    """
    return await ParticipationService.register(participation)


@router.get("/user/{user_id}", response_model=List[ParticipationRead])
async def list_user_participations(user_id: str) -> List[ParticipationRead]:
    return await ParticipationService.list_for_user(user_id)
