"""
Article endpoints for API v1.

Read-only access to articles.  Static paths are declared before
``/{article_id}``; fetching a single article increments its view
counter.
"""

from typing import List

from fastapi import APIRouter, Query

from volunteer_api.app.schemas.article import ArticleRead, ArticleSummary
from volunteer_api.app.services.article_service import ArticleService


router = APIRouter()


@router.get("", response_model=List[ArticleSummary])
async def list_articles() -> List[ArticleSummary]:
    """Active articles, featured first."""
    return await ArticleService.list_articles()


@router.get("/featured", response_model=List[ArticleSummary])
async def list_featured_articles() -> List[ArticleSummary]:
    """Up to five newest featured articles for the home screen."""
    return await ArticleService.list_featured()


@router.get("/search", response_model=List[ArticleSummary])
async def search_articles(
    title: str = Query("", description="Substring of the article title or description"),
) -> List[ArticleSummary]:
    return await ArticleService.search_articles(title)


@router.get("/category/{category}", response_model=List[ArticleSummary])
async def list_articles_by_category(category: str) -> List[ArticleSummary]:
    return await ArticleService.list_by_category(category)


@router.get("/{article_id}", response_model=ArticleRead)
async def get_article(article_id: str) -> ArticleRead:
    return await ArticleService.get_article(article_id)
