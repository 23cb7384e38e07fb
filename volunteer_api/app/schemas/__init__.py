"""
Pydantic schema definitions for API payloads.

Each domain (users, events, participations, articles) defines its own
Pydantic models for request and response bodies.  Schemas are separated
from the database layout so that the flat ``location_*`` columns and
snake_case names never leak into the JSON contract.
"""
