"""
Event endpoints for API v1.

Listing, searching and creating volunteer events.  Static paths
(``/search``, ``/organizer/{id}``) are declared before ``/{event_id}``
so they are not captured as event IDs.
"""

from typing import List

from fastapi import APIRouter, Query, status

from volunteer_api.app.schemas.event import EventCreate, EventCreated, EventRead
from volunteer_api.app.services.event_service import EventService


router = APIRouter()


@router.get("", response_model=List[EventRead])
async def list_events() -> List[EventRead]:
    """List active events, newest first."""
    return await EventService.list_events()


@router.post("", response_model=EventCreated, status_code=status.HTTP_201_CREATED)
async def create_event(event: EventCreate) -> EventCreated:
    """Create an event.

    ``organizerId`` must belong to an organization account, otherwise
    403 is returned.
    """
    return await EventService.create_event(event)


@router.get("/search", response_model=List[EventRead])
async def search_events(title: str = Query("", description="Substring of the event title")) -> List[EventRead]:
    return await EventService.search_events(title)


@router.get("/organizer/{organizer_id}", response_model=List[EventRead])
async def list_organizer_events(organizer_id: str) -> List[EventRead]:
    """List every event of an organizer, including inactive ones."""
    return await EventService.list_events_by_organizer(organizer_id)


@router.get("/{event_id}", response_model=EventRead)
async def get_event(event_id: str) -> EventRead:
    return await EventService.get_event(event_id)
