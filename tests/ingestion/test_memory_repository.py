from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timedelta, timezone

import pytest
from pydantic import ValidationError

from ingestion.categories import Category
from ingestion.models.domain import ArticleCreate, SourceRef
from ingestion.repositories.articles import InMemoryArticleRepository


def _payload(title: str, url: str, *, hours_ago: float = 0, category: Category = Category.AI) -> ArticleCreate:
    return ArticleCreate(
        title=title,
        url=url,
        published_at=datetime.now(timezone.utc) - timedelta(hours=hours_ago),
        source=SourceRef(name="Wire"),
        category=category,
    )


def test_concurrent_creates_of_one_key_store_a_single_article():
    repo = InMemoryArticleRepository()
    payload = _payload("Race", "https://ex.com/race")

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(lambda _: repo.create(payload), range(64)))

    assert len({a.id for a in results}) == 1
    assert repo.count_total(Category.ALL) == 1


def test_concurrent_view_increments_are_not_lost():
    repo = InMemoryArticleRepository()
    article = repo.create(_payload("Hot", "https://ex.com/hot"))

    with ThreadPoolExecutor(max_workers=8) as pool:
        list(pool.map(lambda _: repo.increment_views(article.id), range(200)))

    stored = repo.get(article.id)
    assert stored is not None and stored.views == 200


def test_returned_articles_are_immutable():
    repo = InMemoryArticleRepository()
    article = repo.create(_payload("Frozen", "https://ex.com/frozen"))

    with pytest.raises(ValidationError):
        article.views = 99  # type: ignore[misc]

    stored = repo.get(article.id)
    assert stored is not None and stored.views == 0


def test_increment_returns_new_value_and_keeps_old_snapshot():
    repo = InMemoryArticleRepository()
    before = repo.create(_payload("Snapshot", "https://ex.com/snap"))

    after = repo.increment_views(before.id)

    assert before.views == 0
    assert after is not None and after.views == 1 and after.id == before.id


def test_compact_collapses_colliding_entries_keeping_first():
    repo = InMemoryArticleRepository()
    first = repo.create(_payload("Dup", "https://ex.com/dup"))
    other = repo.create(_payload("Other", "https://ex.com/other"))
    # simulate a duplicate that slipped past the key index
    clone = first.model_copy(update={"id": "clone-id", "category": Category.BCI})
    repo._articles[clone.id] = clone

    assert repo.count_total(Category.ALL) == 3
    assert repo.compact_duplicates() == 1
    assert repo.compact_duplicates() == 0

    remaining = {a.id for a in repo.list(Category.ALL, 10, 0)}
    assert remaining == {first.id, other.id}
    assert repo.create(_payload("Dup", "https://ex.com/dup")).id == first.id


def test_evict_defaults_to_three_day_window():
    repo = InMemoryArticleRepository()
    repo.create(_payload("stale", "https://ex.com/stale", hours_ago=73))
    kept = repo.create(_payload("fresh", "https://ex.com/fresh", hours_ago=71))

    assert repo.evict_older_than() == 1
    assert [a.id for a in repo.list(Category.ALL, 10, 0)] == [kept.id]


def test_naive_now_is_treated_as_utc():
    repo = InMemoryArticleRepository()
    repo.create(_payload("old", "https://ex.com/old", hours_ago=100))
    naive_now = datetime.now(timezone.utc).replace(tzinfo=None)

    assert repo.evict_older_than(timedelta(days=3), now=naive_now) == 1
