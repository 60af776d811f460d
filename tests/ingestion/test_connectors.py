from __future__ import annotations

from datetime import datetime, timezone

import pytest

from ingestion.categories import CONCRETE_CATEGORIES, Category
from ingestion.connectors.base import PermanentError, TransientError, normalize_record
from ingestion.connectors.news_api import NewsAPIConnector
from ingestion.connectors.samples import sample_articles
from ingestion.services.classifier import is_relevant
from ingestion.settings import reset_settings_cache


@pytest.fixture(autouse=True)
def _no_api_key(monkeypatch):
    monkeypatch.delenv("NEWS_API_KEY", raising=False)
    reset_settings_cache()
    yield
    reset_settings_cache()


def _provider(category: Category):
    return [
        {
            "title": f"{category.value} headline",
            "description": "desc",
            "url": f"https://example.com/{category.value}",
            "publishedAt": "2025-01-01T00:00:00Z",
            "source": {"id": None, "name": "Example"},
        }
    ]


def test_provider_records_are_returned_as_is():
    connector = NewsAPIConnector(provider=_provider)
    items = connector.fetch(Category.AI)

    assert items == _provider(Category.AI)


def test_connector_retries_on_transient_error():
    calls = {"n": 0}

    def _flaky(category: Category):
        calls["n"] += 1
        if calls["n"] < 3:
            raise TransientError("temp outage")
        return _provider(category)

    connector = NewsAPIConnector(provider=_flaky)
    items = connector.fetch(Category.BCI, max_attempts=3)

    assert calls["n"] == 3
    assert len(items) == 1


def test_connector_gives_up_after_max_attempts():
    def _down(_category: Category):
        raise TransientError("still down")

    with pytest.raises(TransientError):
        NewsAPIConnector(provider=_down).fetch(Category.AI, max_attempts=2)


def test_permanent_error_is_not_retried():
    calls = {"n": 0}

    def _broken(_category: Category):
        calls["n"] += 1
        raise PermanentError("bad request")

    with pytest.raises(PermanentError):
        NewsAPIConnector(provider=_broken).fetch(Category.AI, max_attempts=5)
    assert calls["n"] == 1


def test_missing_api_key_falls_back_to_samples():
    items = NewsAPIConnector().fetch(Category.MATERIALS)

    assert items
    assert [i["title"] for i in items] == [i["title"] for i in sample_articles(Category.MATERIALS)]


@pytest.mark.parametrize("category", CONCRETE_CATEGORIES)
def test_samples_are_relevant_and_well_formed(category: Category):
    now = datetime(2025, 5, 1, 12, 0, tzinfo=timezone.utc)
    records = sample_articles(category, now=now)

    assert records
    for record in records:
        assert is_relevant(record, category)
        payload = normalize_record(record, category)
        assert payload.published_at <= now


def test_wildcard_samples_cover_every_category():
    total = sum(len(sample_articles(c)) for c in CONCRETE_CATEGORIES)
    assert len(sample_articles(Category.ALL)) == total
