"""
Business logic for events.

Events are created by organization accounts and listed, searched and
fetched by the mobile app.  The list of registered volunteers is read
from the participations table in the same snapshot as the event rows,
so ``registeredVolunteerIds`` always agrees with
``currentVolunteerCount``.
"""

import logging
import sqlite3
from collections import defaultdict
from typing import Dict, List, Sequence

from volunteer_api.app.core.db import like_pattern, new_id, transaction
from volunteer_api.app.core.errors import ForbiddenError, NotFoundError
from volunteer_api.app.schemas.event import EventCreate, EventCreated, EventRead, Location


logger = logging.getLogger(__name__)


def _row_to_event(row: sqlite3.Row, volunteer_ids: List[str]) -> EventRead:
    return EventRead(
        id=row["id"],
        title=row["title"],
        description=row["description"],
        image_url=row["image_url"],
        organizer_id=row["organizer_id"],
        organizer_name=row["organizer_name"],
        event_start_time=row["event_start_time"],
        event_end_time=row["event_end_time"],
        target_volunteer_count=row["target_volunteer_count"],
        current_volunteer_count=row["current_volunteer_count"],
        registered_volunteer_ids=volunteer_ids,
        participation_fee_idr=row["participation_fee_idr"],
        category=row["category"],
        is_active=bool(row["is_active"]),
        created_at=row["created_at"],
        location=Location(
            country=row["location_country"],
            province=row["location_province"],
            city=row["location_city"],
            district=row["location_district"],
            village=row["location_village"],
            rt_rw=row["location_rt_rw"],
            latitude=row["location_latitude"],
            longitude=row["location_longitude"],
        ),
    )


class EventService:
    """Service for creating and querying volunteer events."""

    @classmethod
    def _query_events(cls, where: str, params: Sequence) -> List[EventRead]:
        """Return events matching ``where`` (aliased ``e``), newest first."""
        with transaction(immediate=False) as conn:
            rows = conn.execute(
                f"SELECT e.* FROM events e WHERE {where} ORDER BY e.created_at DESC, e.rowid DESC",
                tuple(params),
            ).fetchall()
            volunteers: Dict[str, List[str]] = defaultdict(list)
            if rows:
                participant_rows = conn.execute(
                    f"""
                    SELECT p.event_id, p.user_id
                    FROM participations p JOIN events e ON e.id = p.event_id
                    WHERE {where}
                    ORDER BY p.registration_date, p.rowid
                    """,
                    tuple(params),
                ).fetchall()
                for p in participant_rows:
                    volunteers[p["event_id"]].append(p["user_id"])
        return [_row_to_event(row, volunteers[row["id"]]) for row in rows]

    @classmethod
    async def create_event(cls, data: EventCreate) -> EventCreated:
        """Create an event on behalf of an organization.

        Raises ``ForbiddenError`` (``organizer_forbidden``) unless
        ``organizer_id`` belongs to a user of type ``organization``.
        When ``organizer_name`` is omitted the organization's registered
        name is used.
        """
        event_id = new_id("event")
        location = data.location
        with transaction() as conn:
            organizer = conn.execute(
                "SELECT id, user_type, organization_name, full_name FROM users WHERE id = ?",
                (data.organizer_id,),
            ).fetchone()
            if not organizer or organizer["user_type"] != "organization":
                raise ForbiddenError(
                    "Only organizations can create events", code="organizer_forbidden"
                )
            organizer_name = (
                data.organizer_name or organizer["organization_name"] or organizer["full_name"]
            )
            conn.execute(
                """
                INSERT INTO events (
                    id, title, description, image_url, organizer_id, organizer_name,
                    event_start_time, event_end_time, target_volunteer_count,
                    participation_fee_idr, category, is_active,
                    location_country, location_province, location_city,
                    location_district, location_village, location_rt_rw,
                    location_latitude, location_longitude
                ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?, ?, ?, 1, ?, ?, ?, ?, ?, ?, ?, ?)
                """,
                (
                    event_id,
                    data.title,
                    data.description,
                    data.image_url,
                    data.organizer_id,
                    organizer_name,
                    data.event_start_time.isoformat() if data.event_start_time else None,
                    data.event_end_time.isoformat() if data.event_end_time else None,
                    data.target_volunteer_count,
                    data.participation_fee_idr,
                    data.category,
                    location.country,
                    location.province,
                    location.city,
                    location.district,
                    location.village,
                    location.rt_rw,
                    location.latitude,
                    location.longitude,
                ),
            )
        logger.info(
            "Organization %s created event %s '%s'", data.organizer_id, event_id, data.title
        )
        return EventCreated(event_id=event_id)

    @classmethod
    async def list_events(cls) -> List[EventRead]:
        """Return all active events, newest first."""
        return cls._query_events("e.is_active = 1", ())

    @classmethod
    async def search_events(cls, title: str = "") -> List[EventRead]:
        """Substring search on the title of active events, ignoring case (Unicode-aware)."""
        return cls._query_events(
            "e.is_active = 1 AND casefold(e.title) LIKE ? ESCAPE '\\'", (like_pattern(title),)
        )

    @classmethod
    async def list_events_by_organizer(cls, organizer_id: str) -> List[EventRead]:
        """Return every event of an organizer, including inactive ones."""
        return cls._query_events("e.organizer_id = ?", (organizer_id,))

    @classmethod
    async def get_event(cls, event_id: str) -> EventRead:
        """Return a single active event or raise ``NotFoundError``."""
        events = cls._query_events("e.id = ? AND e.is_active = 1", (event_id,))
        if not events:
            raise NotFoundError("Event not found", code="event_not_found")
        return events[0]
