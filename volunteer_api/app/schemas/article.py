"""
Pydantic models for articles.

Articles are read-only through the HTTP API.  ``ArticleCreate`` is used
by the seeding script and by tests to insert content.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import CamelModel


class ArticleCreate(CamelModel):
    title: str = Field(..., min_length=1)
    description: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = Field(None, examples=["education"])
    author_name: Optional[str] = None
    published_date: Optional[datetime] = None
    is_featured: bool = False
    is_active: bool = True


class ArticleSummary(CamelModel):
    """Article as shown in lists."""

    id: str
    title: str
    description: Optional[str] = None
    image_url: Optional[str] = None
    category: Optional[str] = None
    author_name: Optional[str] = None
    published_date: datetime
    is_featured: bool
    views: int


class ArticleRead(ArticleSummary):
    """Full article returned by the detail endpoint."""

    is_active: bool
