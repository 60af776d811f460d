from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Annotated

from bs4 import BeautifulSoup
from fastapi import APIRouter, Depends, HTTPException, Query

from ingestion.categories import Category
from ingestion.connectors.base import BaseConnector
from ingestion.models.domain import Article
from ingestion.repositories.articles import ArticleRepository
from ingestion.settings import Settings
from ingestion.tasks.refresh import refresh_all, refresh_category
from ingestion.utils.logging import get_logger

from .dependencies import get_connector, get_repository, settings_dependency
from .models import ErrorResponse, NewsResponse, RefreshResponse, SearchResponse

router = APIRouter(prefix="/api")

RepositoryDep = Annotated[ArticleRepository, Depends(get_repository)]
ConnectorDep = Annotated[BaseConnector, Depends(get_connector)]
SettingsDep = Annotated[Settings, Depends(settings_dependency)]

logger = get_logger(__name__)


def clean_query(raw: str) -> str:
    """Strip markup and surrounding whitespace from a user search string."""
    text = BeautifulSoup(raw, "html.parser").get_text()
    return text.strip()


# Sync handlers run in the threadpool; refresh paths block on upstream HTTP.
@router.get("/news", response_model=NewsResponse)
def list_news_route(
    repository: RepositoryDep,
    connector: ConnectorDep,
    category: Category = Query(Category.ALL),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
    refresh: bool = Query(False),
) -> NewsResponse:
    if refresh or not repository.list(category, 1, 0):
        logger.info("news.refresh_on_read", extra={"category": category.value, "requested": refresh})
        refresh_category(repository, connector, category)

    return NewsResponse(
        articles=repository.list(category, limit, offset),
        total_results=repository.count_total(category),
        category=category,
        last_updated=datetime.now(timezone.utc),
    )


@router.get("/news/search", response_model=SearchResponse, responses={400: {"model": ErrorResponse}})
async def search_news_route(
    repository: RepositoryDep,
    q: str = Query(..., min_length=1, max_length=200),
    category: Category = Query(Category.ALL),
    limit: int = Query(20, ge=1, le=100),
    offset: int = Query(0, ge=0),
) -> SearchResponse:
    query = clean_query(q)
    if not query:
        raise HTTPException(status_code=400, detail="Search query must be 1-200 characters")
    articles = repository.search(query, category, limit, offset)
    return SearchResponse(
        articles=articles,
        total_results=len(articles),
        category=category,
        query=query,
        limit=limit,
        offset=offset,
    )


@router.post("/news/refresh", response_model=RefreshResponse)
def refresh_news_route(
    repository: RepositoryDep,
    connector: ConnectorDep,
    settings: SettingsDep,
) -> RefreshResponse:
    report = refresh_all(repository, connector, retention=settings.retention)
    return RefreshResponse(
        message="News refreshed successfully",
        timestamp=datetime.now(timezone.utc),
        evicted=report.evicted,
        stored=report.totals.stored,
    )


@router.get("/news/{article_id}", response_model=Article, responses={404: {"model": ErrorResponse}})
async def get_article_route(
    article_id: uuid.UUID,
    repository: RepositoryDep,
) -> Article:
    article = repository.increment_views(str(article_id))
    if article is None:
        raise HTTPException(status_code=404, detail="Article not found")
    return article
