from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from ingestion.categories import Category
from ingestion.db.models import ArticleRow
from ingestion.models.domain import ArticleCreate, SourceRef
from ingestion.services.deduplicator import collapse_duplicates, dedup_digest, dedup_key


@dataclass(frozen=True)
class Item:
    name: str
    title: str
    url: str

    @property
    def dedup_key(self):
        return dedup_key(self.title, self.url)


def test_dedup_key_is_exact():
    assert dedup_key("Chip", "https://ex.com/a") != dedup_key("chip", "https://ex.com/a")
    assert dedup_key("Chip", "https://ex.com/a") != dedup_key("Chip ", "https://ex.com/a")


def test_collapse_keeps_first_of_each_key():
    items = [
        Item("first", "A", "u1"),
        Item("other", "B", "u1"),
        Item("second", "A", "u1"),
        Item("third", "A", "u1"),
    ]

    kept, dropped = collapse_duplicates(items)

    assert [i.name for i in kept] == ["first", "other"]
    assert [i.name for i in dropped] == ["second", "third"]


def test_collapse_empty():
    assert collapse_duplicates([]) == ([], [])


def test_models_share_the_same_key():
    payload = ArticleCreate(
        title="Chip",
        url="https://ex.com/a",
        published_at=datetime(2025, 1, 1, tzinfo=timezone.utc),
        source=SourceRef(name="Wire"),
        category=Category.EMBEDDED,
    )
    row = ArticleRow(title="Chip", url="https://ex.com/a")

    assert payload.dedup_key == dedup_key("Chip", "https://ex.com/a")
    assert row.dedup_key == payload.dedup_key


def test_digest_separates_title_and_url():
    assert dedup_digest("ab", "c") != dedup_digest("a", "bc")
    assert dedup_digest("Chip", "u") == dedup_digest("Chip", "u")
    assert len(dedup_digest("Chip", "u")) == 64
