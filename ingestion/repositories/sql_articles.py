"""SQLAlchemy-backed article repository honouring the same contract as the in-memory store."""

from __future__ import annotations

import uuid
from datetime import datetime, timedelta
from pathlib import Path
from typing import List, Optional, Tuple

from sqlalchemy import Select, delete, func, select, update
from sqlalchemy.engine import Engine
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, sessionmaker

from ingestion.categories import Category
from ingestion.db.models import ArticleRow, Base
from ingestion.db.session import get_engine, get_sessionmaker, session_scope
from ingestion.models.domain import Article, ArticleCreate, SourceRef
from ingestion.repositories.articles import DEFAULT_RETENTION, eviction_cutoff, matches_query
from ingestion.services.deduplicator import collapse_duplicates, dedup_digest
from ingestion.settings import Settings
from ingestion.utils.logging import get_logger

logger = get_logger(__name__)


def to_article(row: ArticleRow) -> Article:
    return Article(
        id=row.id,
        title=row.title,
        description=row.description,
        url=row.url,
        image_url=row.image_url,
        published_at=row.published_at_utc,
        source=SourceRef(id=row.source_id, name=row.source_name),
        category=row.category,
        views=row.views,
    )


def ensure_schema(engine: Engine) -> None:
    url = engine.url
    if url.get_backend_name() == "sqlite" and url.database not in (None, "", ":memory:"):
        Path(url.database).parent.mkdir(parents=True, exist_ok=True)
    Base.metadata.create_all(bind=engine)


class SqlArticleRepository:
    """Article store on a relational database.

    Uniqueness of ``(title, url)`` is enforced by a unique digest column; a create
    that loses an insert race returns the row that won.
    """

    def __init__(self, factory: sessionmaker[Session]) -> None:
        self._factory = factory

    @classmethod
    def from_settings(cls, settings: Settings) -> "SqlArticleRepository":
        ensure_schema(get_engine(settings))
        return cls(get_sessionmaker(settings))

    def create(self, payload: ArticleCreate) -> Article:
        article, _ = self.create_or_get(payload)
        return article

    def create_or_get(self, payload: ArticleCreate) -> Tuple[Article, bool]:
        digest = dedup_digest(payload.title, payload.url)
        with session_scope(self._factory) as session:
            existing = self._find_by_key(session, digest)
            if existing is not None:
                return to_article(existing), False
            row = ArticleRow(
                id=str(uuid.uuid4()),
                key_digest=digest,
                title=payload.title,
                description=payload.description,
                url=payload.url,
                image_url=payload.image_url,
                published_at=payload.published_at,
                source_id=payload.source.id,
                source_name=payload.source.name,
                category=payload.category,
                views=0,
            )
            session.add(row)
            try:
                session.flush()
            except IntegrityError:
                # another writer inserted the same key between our lookup and flush
                session.rollback()
                winner = self._find_by_key(session, digest)
                if winner is None:
                    raise
                return to_article(winner), False
            return to_article(row), True

    def get(self, article_id: str) -> Optional[Article]:
        with session_scope(self._factory) as session:
            row = session.scalars(select(ArticleRow).where(ArticleRow.id == article_id)).first()
            return to_article(row) if row is not None else None

    def list(self, category: Category, limit: int, offset: int) -> List[Article]:
        stmt = self._ordered(category).offset(offset).limit(limit)
        with session_scope(self._factory) as session:
            return [to_article(row) for row in session.scalars(stmt)]

    def search(self, query: str, category: Category, limit: int, offset: int) -> List[Article]:
        term = query.lower()
        with session_scope(self._factory) as session:
            articles = [to_article(row) for row in session.scalars(self._ordered(category))]
        matched = [a for a in articles if matches_query(a, term)]
        return matched[offset : offset + limit]

    def count_total(self, category: Category) -> int:
        stmt = select(func.count()).select_from(ArticleRow)
        if not category.is_wildcard:
            stmt = stmt.where(ArticleRow.category == category)
        with session_scope(self._factory) as session:
            return int(session.execute(stmt).scalar_one())

    def increment_views(self, article_id: str) -> Optional[Article]:
        with session_scope(self._factory) as session:
            result = session.execute(
                update(ArticleRow)
                .where(ArticleRow.id == article_id)
                .values(views=ArticleRow.views + 1)
                .execution_options(synchronize_session=False)
            )
            if result.rowcount == 0:
                return None
            row = session.scalars(
                select(ArticleRow).where(ArticleRow.id == article_id).execution_options(populate_existing=True)
            ).one()
            return to_article(row)

    def evict_older_than(self, retention: timedelta = DEFAULT_RETENTION, now: Optional[datetime] = None) -> int:
        cutoff = eviction_cutoff(retention, now)
        with session_scope(self._factory) as session:
            result = session.execute(
                delete(ArticleRow)
                .where(ArticleRow.published_at < cutoff)
                .execution_options(synchronize_session=False)
            )
            removed = int(result.rowcount or 0)
        logger.info("repository.evicted", extra={"removed": removed, "cutoff": cutoff.isoformat(), "backend": "sql"})
        return removed

    def compact_duplicates(self) -> int:
        with session_scope(self._factory) as session:
            rows = session.scalars(select(ArticleRow).order_by(ArticleRow.seq.asc())).all()
            _, dropped = collapse_duplicates(rows)
            for row in dropped:
                session.delete(row)
        logger.info("repository.compacted", extra={"removed": len(dropped), "backend": "sql"})
        return len(dropped)

    def clear(self) -> None:
        with session_scope(self._factory) as session:
            session.execute(delete(ArticleRow).execution_options(synchronize_session=False))

    @staticmethod
    def _find_by_key(session: Session, digest: str) -> Optional[ArticleRow]:
        stmt = select(ArticleRow).where(ArticleRow.key_digest == digest)
        return session.scalars(stmt).first()

    @staticmethod
    def _ordered(category: Category) -> Select:
        stmt = select(ArticleRow).order_by(ArticleRow.published_at.desc(), ArticleRow.seq.asc())
        if not category.is_wildcard:
            stmt = stmt.where(ArticleRow.category == category)
        return stmt
