"""Connector abstraction, errors, and record mapping."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional

from ingestion.categories import Category
from ingestion.models.domain import ArticleCreate, SourceRef

RawRecord = Dict[str, Any]

UNTITLED = "Untitled"
UNKNOWN_SOURCE = "Unknown Source"


class ConnectorError(Exception):
    """Base connector error."""


class TransientError(ConnectorError):
    """Retryable error (e.g., rate limit, network hiccup)."""


class PermanentError(ConnectorError):
    """Non-retryable error (e.g., 4xx semantics)."""


def _text_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _title_or_default(value: Any) -> str:
    # not trimmed; dedup compares titles exactly
    if value is None or not str(value).strip():
        return UNTITLED
    return str(value)


def normalize_record(record: Mapping[str, Any], category: Category) -> ArticleCreate:
    """Map an upstream record onto the ingestion DTO.

    The title is kept verbatim and a blank one becomes ``"Untitled"``. A
    missing source name becomes ``"Unknown Source"``. Missing ``url`` or ``publishedAt`` raises
    ``pydantic.ValidationError``.
    """
    source: Mapping[str, Any] = record.get("source") or {}
    return ArticleCreate(
        title=_title_or_default(record.get("title")),
        description=_text_or_none(record.get("description")),
        url=record.get("url"),
        image_url=_text_or_none(record.get("urlToImage") or record.get("imageUrl")),
        published_at=record.get("publishedAt") or record.get("published_at"),
        source=SourceRef(
            id=_text_or_none(source.get("id")),
            name=_text_or_none(source.get("name")) or UNKNOWN_SOURCE,
        ),
        category=category,
    )


class BaseConnector(ABC):
    """Abstract connector interface with a retry loop around ``_fetch_raw``."""

    source: str

    def fetch(self, category: Category, *, max_attempts: int = 3) -> List[RawRecord]:
        attempts = 0
        last_error: Optional[Exception] = None
        while attempts < max_attempts:
            attempts += 1
            try:
                return self._fetch_raw(category)
            except TransientError as exc:  # retry
                last_error = exc
                if attempts >= max_attempts:
                    raise
            except PermanentError:
                raise
        assert last_error is not None
        raise last_error

    @abstractmethod
    def _fetch_raw(self, category: Category) -> List[RawRecord]:
        """Return a list of raw item dicts from the upstream."""
