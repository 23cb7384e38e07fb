"""
Seed the database with demo content.

Creates one organization account, one event and a handful of articles
so the mobile app has something to show on a fresh install.  Articles
have no HTTP creation endpoint, so this script is the way to load them
during development.  Running it twice does nothing the second time.

Usage:
    python -m volunteer_api.seed --db ./volunteer_api/volunteer.db
"""

import argparse
import asyncio
import logging
import os
from typing import Dict, Optional

from volunteer_api.app.core.config import settings
from volunteer_api.app.core.db import get_connection, init_db
from volunteer_api.app.core.logging_config import setup_logging
from volunteer_api.app.schemas.article import ArticleCreate
from volunteer_api.app.schemas.event import EventCreate, Location
from volunteer_api.app.schemas.user import UserCreate, UserType
from volunteer_api.app.services.article_service import ArticleService
from volunteer_api.app.services.event_service import EventService
from volunteer_api.app.services.user_service import UserService


logger = logging.getLogger(__name__)

DEMO_ORG_EMAIL = "demo-org@example.org"

DEMO_ARTICLES = [
    ArticleCreate(
        title="Why volunteering matters",
        description="How a few hours a month change neighbourhoods.",
        category="inspiration",
        author_name="Editorial Team",
        is_featured=True,
    ),
    ArticleCreate(
        title="Preparing for a beach clean-up",
        description="What to bring and how to stay safe on the day.",
        category="guide",
        author_name="Editorial Team",
        is_featured=True,
    ),
    ArticleCreate(
        title="Teaching children to read",
        description="Lessons learned from a year of weekend classes.",
        category="education",
        author_name="Siti Rahma",
    ),
]


def _already_seeded() -> bool:
    conn = get_connection()
    try:
        row = conn.execute("SELECT id FROM users WHERE email = ?", (DEMO_ORG_EMAIL,)).fetchone()
    finally:
        conn.close()
    return row is not None


async def _seed() -> Dict[str, object]:
    org = await UserService.create_user(
        UserCreate(
            email=DEMO_ORG_EMAIL,
            password_hash="demo-password-hash",
            user_type=UserType.organization,
            organization_name="Demo Foundation",
            npwp="00.000.000.0-000.000",
        )
    )
    event = await EventService.create_event(
        EventCreate(
            title="Beach Clean-up",
            description="Collect plastic waste along the shore.",
            organizer_id=org.user_id,
            category="environment",
            target_volunteer_count=20,
            location=Location(country="Indonesia", province="Bali", city="Denpasar"),
        )
    )
    articles = [await ArticleService.create_article(a) for a in DEMO_ARTICLES]
    return {
        "organization_id": org.user_id,
        "event_id": event.event_id,
        "article_ids": [a.id for a in articles],
    }


def seed(db_path: Optional[str] = None) -> Optional[Dict[str, object]]:
    """Apply migrations and insert the demo rows.

    Returns the IDs of the created rows, or ``None`` if the demo
    organization already exists.
    """
    if db_path:
        settings.database_url = os.path.abspath(db_path)
    init_db()
    if _already_seeded():
        logger.info("Demo data already present, nothing to do")
        return None
    created = asyncio.run(_seed())
    logger.info("Seeded demo data: %s", created)
    return created


def main(argv: Optional[list] = None) -> None:
    ap = argparse.ArgumentParser(description="Insert demo data into the volunteer API database.")
    ap.add_argument("--db", help="Path to the SQLite database file (defaults to DATABASE_URL)")
    args = ap.parse_args(argv)
    setup_logging(settings.log_level)
    seed(args.db)


if __name__ == "__main__":
    main()
