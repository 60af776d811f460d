"""Refresh workflow: fetch per category, classify, store, enforce retention."""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Dict, Iterable, Mapping, Optional, Protocol

from pydantic import ValidationError

from ingestion.categories import CONCRETE_CATEGORIES, Category
from ingestion.connectors.base import ConnectorError, RawRecord, normalize_record
from ingestion.repositories.articles import DEFAULT_RETENTION, ArticleRepository
from ingestion.services.classifier import is_relevant
from ingestion.utils.logging import get_logger

logger = get_logger(__name__)


class Connector(Protocol):
    def fetch(self, category: Category) -> list[RawRecord]: ...


@dataclass
class IngestStats:
    fetched: int = 0
    relevant: int = 0
    stored: int = 0
    duplicates: int = 0
    skipped: int = 0

    def merge(self, other: "IngestStats") -> None:
        self.fetched += other.fetched
        self.relevant += other.relevant
        self.stored += other.stored
        self.duplicates += other.duplicates
        self.skipped += other.skipped

    def as_dict(self) -> Dict[str, int]:
        return {
            "fetched": self.fetched,
            "relevant": self.relevant,
            "stored": self.stored,
            "duplicates": self.duplicates,
            "skipped": self.skipped,
        }


@dataclass
class RefreshReport:
    evicted: int = 0
    compacted: int = 0
    per_category: Dict[Category, IngestStats] = field(default_factory=dict)

    @property
    def totals(self) -> IngestStats:
        total = IngestStats()
        for stats in self.per_category.values():
            total.merge(stats)
        return total


def ingest_records(
    repository: ArticleRepository,
    category: Category,
    records: Iterable[Mapping[str, Any]],
) -> IngestStats:
    """Store the relevant records of one fetched batch.

    Records failing validation are logged and skipped; earlier records of the
    batch stay stored.
    """
    if category.is_wildcard:
        raise ValueError("records must be ingested into a concrete category")
    stats = IngestStats()
    for record in records:
        stats.fetched += 1
        if not is_relevant(record, category):
            continue
        stats.relevant += 1
        try:
            payload = normalize_record(record, category)
        except ValidationError as exc:
            stats.skipped += 1
            logger.warning(
                "ingest.record_invalid",
                extra={"category": category.value, "url": record.get("url"), "errors": exc.error_count()},
            )
            continue
        _, created = repository.create_or_get(payload)
        if created:
            stats.stored += 1
        else:
            stats.duplicates += 1
    return stats


def refresh_category(
    repository: ArticleRepository,
    connector: Connector,
    category: Category,
    *,
    trace_id: Optional[str] = None,
    compact: bool = True,
) -> Dict[Category, IngestStats]:
    """Fetch and store one category; the wildcard refreshes every concrete category."""
    trace_id = trace_id or str(uuid.uuid4())
    targets = CONCRETE_CATEGORIES if category.is_wildcard else (category,)
    results: Dict[Category, IngestStats] = {}
    for target in targets:
        logger.info("refresh.category.start", extra={"trace_id": trace_id, "category": target.value})
        records = connector.fetch(target)
        stats = ingest_records(repository, target, records)
        results[target] = stats
        logger.info(
            "refresh.category.done",
            extra={"trace_id": trace_id, "category": target.value, **stats.as_dict()},
        )
    if compact:
        repository.compact_duplicates()
    return results


def refresh_all(
    repository: ArticleRepository,
    connector: Connector,
    *,
    retention: timedelta = DEFAULT_RETENTION,
) -> RefreshReport:
    """Evict expired articles, refetch every category, then compact."""
    trace_id = str(uuid.uuid4())
    logger.info("refresh.start", extra={"trace_id": trace_id, "retention_seconds": int(retention.total_seconds())})
    report = RefreshReport()
    report.evicted = repository.evict_older_than(retention)
    for category in CONCRETE_CATEGORIES:
        try:
            report.per_category.update(refresh_category(repository, connector, category, trace_id=trace_id, compact=False))
        except ConnectorError:
            logger.exception("refresh.category.failed", extra={"trace_id": trace_id, "category": category.value})
    report.compacted = repository.compact_duplicates()
    logger.info("refresh.done", extra={"trace_id": trace_id, "evicted": report.evicted, **report.totals.as_dict()})
    return report
