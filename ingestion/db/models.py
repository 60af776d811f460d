"""SQLAlchemy models for stored news articles."""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    DateTime,
    Enum as SAEnum,
    Index,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from ingestion.categories import Category
from ingestion.services import deduplicator


class Base(DeclarativeBase):
    """Base class for ORM models."""


class ArticleRow(Base):
    """One stored article.

    ``seq`` records insertion order for tie-breaking. Title and url are
    unbounded text; uniqueness of the pair is enforced on ``key_digest``.
    """

    __tablename__ = "news_articles"
    __table_args__ = (
        Index("ix_news_articles_category_published", "category", "published_at"),
    )

    seq: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    id: Mapped[str] = mapped_column(String(36), nullable=False, unique=True)
    key_digest: Mapped[str] = mapped_column(String(64), nullable=False, unique=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    image_url: Mapped[str | None] = mapped_column(Text)
    published_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False, index=True)
    source_id: Mapped[str | None] = mapped_column(Text)
    source_name: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[Category] = mapped_column(
        SAEnum(Category, name="news_category", native_enum=False, length=16, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    @property
    def dedup_key(self) -> deduplicator.DedupKey:
        return deduplicator.dedup_key(self.title, self.url)

    @property
    def published_at_utc(self) -> datetime:
        # SQLite hands back naive values; everything is written as UTC
        value = self.published_at
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
