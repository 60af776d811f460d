"""Keyword relevance gate applied to fetched records before storage."""

from __future__ import annotations

from typing import Any, Iterable, List, Mapping

from ingestion.categories import CATEGORY_KEYWORDS, Category


def _record_text(record: Mapping[str, Any]) -> str:
    title = str(record.get("title") or "")
    description = str(record.get("description") or "")
    return f"{title} {description}".lower()


def is_relevant(record: Mapping[str, Any], category: Category) -> bool:
    """Return True if title/description mention any keyword of ``category``.

    The wildcard category accepts everything.
    """
    if category.is_wildcard:
        return True
    keywords = CATEGORY_KEYWORDS.get(category, frozenset())
    content = _record_text(record)
    return any(keyword in content for keyword in keywords)


def filter_relevant(records: Iterable[Mapping[str, Any]], category: Category) -> List[Mapping[str, Any]]:
    return [r for r in records if is_relevant(r, category)]
