from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from ingestion.categories import Category
from ingestion.connectors.base import normalize_record
from ingestion.models.domain import Article, ArticleCreate, SourceRef


def test_published_at_is_normalized_to_utc():
    payload = ArticleCreate(
        title="t",
        url="https://ex.com/t",
        published_at="2025-01-01T09:00:00+09:00",
        source=SourceRef(name="s"),
        category=Category.AI,
    )
    assert payload.published_at == datetime(2025, 1, 1, 0, 0, tzinfo=timezone.utc)
    assert payload.published_at.utcoffset() == timedelta(0)


def test_naive_published_at_is_assumed_utc():
    payload = ArticleCreate(
        title="t",
        url="https://ex.com/t",
        published_at=datetime(2025, 1, 1, 12, 0),
        source=SourceRef(name="s"),
        category=Category.AI,
    )
    assert payload.published_at.tzinfo is not None


def test_wildcard_category_is_rejected():
    with pytest.raises(ValidationError):
        ArticleCreate(
            title="t",
            url="https://ex.com/t",
            published_at=datetime.now(timezone.utc),
            source=SourceRef(name="s"),
            category=Category.ALL,
        )


def test_article_serializes_with_camel_case_aliases():
    article = Article(
        id="abc",
        title="t",
        url="https://ex.com/t",
        image_url="https://ex.com/t.png",
        published_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        source=SourceRef(id="src", name="Source"),
        category=Category.BCI,
    )
    data = article.model_dump(mode="json", by_alias=True)
    assert data["imageUrl"] == "https://ex.com/t.png"
    assert data["publishedAt"].startswith("2025-01-01T00:00:00")
    assert data["category"] == "bci"
    assert data["views"] == 0
    assert data["source"] == {"id": "src", "name": "Source"}


def test_negative_views_are_invalid():
    with pytest.raises(ValidationError):
        Article(
            id="abc",
            title="t",
            url="https://ex.com/t",
            published_at=datetime.now(timezone.utc),
            source=SourceRef(name="s"),
            category=Category.AI,
            views=-1,
        )


def test_normalize_record_applies_defaults():
    payload = normalize_record(
        {
            "title": "  ",
            "description": "",
            "url": "https://ex.com/untitled",
            "publishedAt": "2025-02-01T00:00:00Z",
            "source": {"id": None},
        },
        Category.SCIENCE_TECH,
    )
    assert payload.title == "Untitled"
    assert payload.description is None
    assert payload.image_url is None
    assert payload.source.id is None
    assert payload.source.name == "Unknown Source"
    assert payload.category == Category.SCIENCE_TECH


def test_normalize_record_maps_news_api_fields():
    payload = normalize_record(
        {
            "title": "FPGA tools",
            "description": "Vendor ships new synthesis flow",
            "url": "https://ex.com/fpga",
            "urlToImage": "https://ex.com/fpga.png",
            "publishedAt": "2025-02-01T10:30:00Z",
            "source": {"id": "ee", "name": "EE Journal"},
        },
        Category.EMBEDDED,
    )
    assert payload.image_url == "https://ex.com/fpga.png"
    assert payload.source == SourceRef(id="ee", name="EE Journal")
    assert payload.published_at == datetime(2025, 2, 1, 10, 30, tzinfo=timezone.utc)


@pytest.mark.parametrize("missing", ["url", "publishedAt"])
def test_normalize_record_rejects_missing_required_fields(missing: str):
    record = {"title": "t", "url": "https://ex.com/t", "publishedAt": "2025-02-01T00:00:00Z"}
    del record[missing]
    with pytest.raises(ValidationError):
        normalize_record(record, Category.AI)


def test_normalize_record_keeps_title_verbatim():
    payload = normalize_record(
        {"title": "  FPGA tools\n", "url": "https://ex.com/fpga", "publishedAt": "2025-02-01T00:00:00Z"},
        Category.EMBEDDED,
    )
    assert payload.title == "  FPGA tools\n"
    assert payload.dedup_key == ("  FPGA tools\n", "https://ex.com/fpga")
