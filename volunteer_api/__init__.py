"""
Volunteer Event API.

``volunteer_api.app`` holds the FastAPI backend; ``VolunteerAPI`` is an
HTTP client for it.
"""

from .client import VolunteerAPI

__all__ = ["VolunteerAPI"]
