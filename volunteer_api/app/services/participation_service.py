"""
Business logic for registering volunteers to events.

Registration is the only multi-step write in the API: it checks the
event, the user's existing registrations and the remaining capacity,
then inserts a participation and increments the event counter.  All of
it runs in one ``BEGIN IMMEDIATE`` transaction, so concurrent
registrations for the same event are applied one after another and can
never overfill it.  The database backs this up with a unique index on
``(user_id, event_id)``, a ``CHECK`` on the counter and a guarded
increment that only succeeds while seats remain.
"""

import logging
import sqlite3
from typing import List

from volunteer_api.app.core.db import get_connection, new_id, transaction
from volunteer_api.app.core.errors import ConflictError, NotFoundError, ServiceError
from volunteer_api.app.schemas.participation import (
    ParticipationCreate,
    ParticipationCreated,
    ParticipationRead,
)


logger = logging.getLogger(__name__)


def _already_registered() -> ConflictError:
    return ConflictError("Already registered for this event", code="already_registered")


def _event_full() -> ConflictError:
    return ConflictError("Event is full", code="event_full")


class ParticipationService:
    """Service for event participations."""

    @classmethod
    async def register(cls, data: ParticipationCreate) -> ParticipationCreated:
        """Register ``data.user_id`` as a volunteer for ``data.event_id``.

        Checks run in this order: the event must exist
        (``event_not_found``), the user must not already be registered
        (``already_registered``) and the event must have a free seat
        (``event_full``).  On success the participation row and the
        counter increment are committed together; on any failure
        neither is.
        """
        participation_id = new_id("part")
        try:
            with transaction() as conn:
                event = conn.execute(
                    "SELECT id, current_volunteer_count, target_volunteer_count FROM events WHERE id = ?",
                    (data.event_id,),
                ).fetchone()
                if not event:
                    raise NotFoundError("Event not found", code="event_not_found")

                existing = conn.execute(
                    "SELECT id FROM participations WHERE user_id = ? AND event_id = ?",
                    (data.user_id, data.event_id),
                ).fetchone()
                if existing:
                    raise _already_registered()

                if event["current_volunteer_count"] >= event["target_volunteer_count"]:
                    raise _event_full()

                try:
                    conn.execute(
                        """
                        INSERT INTO participations (id, user_id, event_id, donation_amount)
                        VALUES (?, ?, ?, ?)
                        """,
                        (participation_id, data.user_id, data.event_id, data.donation_amount or 0),
                    )
                except sqlite3.IntegrityError as e:
                    raise _already_registered() from e

                updated = conn.execute(
                    """
                    UPDATE events
                    SET current_volunteer_count = current_volunteer_count + 1
                    WHERE id = ? AND current_volunteer_count < target_volunteer_count
                    """,
                    (data.event_id,),
                ).rowcount
                if updated != 1:
                    raise _event_full()
        except ServiceError as e:
            logger.info(
                "Registration of user %s for event %s rejected: %s",
                data.user_id,
                data.event_id,
                e.code,
            )
            raise
        logger.info(
            "User %s registered for event %s (participation %s)",
            data.user_id,
            data.event_id,
            participation_id,
        )
        return ParticipationCreated(participation_id=participation_id)

    @classmethod
    async def list_for_user(cls, user_id: str) -> List[ParticipationRead]:
        """Return a user's participations, most recent first."""
        conn = get_connection()
        try:
            rows = conn.execute(
                """
                SELECT id, user_id, event_id, donation_amount, registration_date
                FROM participations
                WHERE user_id = ?
                ORDER BY registration_date DESC, rowid DESC
                """,
                (user_id,),
            ).fetchall()
        finally:
            conn.close()
        return [ParticipationRead.model_validate(dict(row)) for row in rows]
