"""
Business logic for articles.

Articles are editorial content shown in the app.  They are read-only
over HTTP; ``create_article`` exists for the seeding script.  Fetching
an article's detail counts as one view.
"""

import logging
from typing import List, Sequence

from volunteer_api.app.core.db import get_connection, like_pattern, new_id, transaction
from volunteer_api.app.core.errors import NotFoundError
from volunteer_api.app.schemas.article import ArticleCreate, ArticleRead, ArticleSummary


logger = logging.getLogger(__name__)

FEATURED_LIMIT = 5

_SUMMARY_COLUMNS = (
    "id, title, description, image_url, category, author_name, published_date, is_featured, views"
)


class ArticleService:
    """Service for listing, searching and reading articles."""

    @classmethod
    def _query(cls, where: str, params: Sequence, order_by: str, limit: int | None = None) -> List[ArticleSummary]:
        sql = f"SELECT {_SUMMARY_COLUMNS} FROM articles WHERE {where} ORDER BY {order_by}"
        params = list(params)
        if limit is not None:
            sql += " LIMIT ?"
            params.append(limit)
        conn = get_connection()
        try:
            rows = conn.execute(sql, tuple(params)).fetchall()
        finally:
            conn.close()
        return [ArticleSummary.model_validate(dict(row)) for row in rows]

    @classmethod
    async def create_article(cls, data: ArticleCreate) -> ArticleRead:
        article_id = new_id("article")
        with transaction() as conn:
            conn.execute(
                """
                INSERT INTO articles (
                    id, title, description, image_url, category, author_name,
                    published_date, is_featured, is_active
                ) VALUES (?, ?, ?, ?, ?, ?, COALESCE(?, strftime('%Y-%m-%dT%H:%M:%fZ', 'now')), ?, ?)
                """,
                (
                    article_id,
                    data.title,
                    data.description,
                    data.image_url,
                    data.category,
                    data.author_name,
                    data.published_date.isoformat() if data.published_date else None,
                    int(data.is_featured),
                    int(data.is_active),
                ),
            )
            row = conn.execute("SELECT * FROM articles WHERE id = ?", (article_id,)).fetchone()
        logger.info("Created article %s '%s'", article_id, data.title)
        return ArticleRead.model_validate(dict(row))

    @classmethod
    async def list_articles(cls) -> List[ArticleSummary]:
        """Active articles, featured ones first, then newest first."""
        return cls._query("is_active = 1", (), "is_featured DESC, published_date DESC")

    @classmethod
    async def list_featured(cls, limit: int = FEATURED_LIMIT) -> List[ArticleSummary]:
        """The newest featured articles for the home screen."""
        return cls._query(
            "is_active = 1 AND is_featured = 1", (), "published_date DESC", limit=limit
        )

    @classmethod
    async def search_articles(cls, title: str = "") -> List[ArticleSummary]:
        """Substring search over title and description, ignoring case (Unicode-aware)."""
        pattern = like_pattern(title)
        return cls._query(
            "is_active = 1 AND (casefold(title) LIKE ? ESCAPE '\\'"
            " OR casefold(description) LIKE ? ESCAPE '\\')",
            (pattern, pattern),
            "published_date DESC",
        )

    @classmethod
    async def list_by_category(cls, category: str) -> List[ArticleSummary]:
        return cls._query("is_active = 1 AND category = ?", (category,), "published_date DESC")

    @classmethod
    async def get_article(cls, article_id: str) -> ArticleRead:
        """Return an active article and count the view.

        The increment and the read happen in one transaction, and the
        returned ``views`` already includes this fetch.
        """
        with transaction() as conn:
            updated = conn.execute(
                "UPDATE articles SET views = views + 1 WHERE id = ? AND is_active = 1",
                (article_id,),
            ).rowcount
            if updated == 0:
                raise NotFoundError("Article not found", code="article_not_found")
            row = conn.execute("SELECT * FROM articles WHERE id = ?", (article_id,)).fetchone()
        return ArticleRead.model_validate(dict(row))
