"""
Top‑level router for version 1 of the API.

Aggregates the domain routers under their path prefixes.  When a new
domain is introduced, include its router here.
"""

from fastapi import APIRouter

from .endpoints import articles, events, health, participation, users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
router.include_router(events.router, prefix="/events", tags=["events"])
router.include_router(participation.router, prefix="/participation", tags=["participation"])
router.include_router(articles.router, prefix="/articles", tags=["articles"])
router.include_router(health.router, tags=["health"])
