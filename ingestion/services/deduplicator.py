"""Deduplication helpers shared by the repository backends."""

from __future__ import annotations

import hashlib
from typing import Iterable, List, Protocol, Tuple, TypeVar

DedupKey = Tuple[str, str]


class _Keyed(Protocol):
    @property
    def dedup_key(self) -> DedupKey: ...  # noqa: D401


T = TypeVar("T", bound=_Keyed)


def dedup_key(title: str, url: str) -> DedupKey:
    # exact match on both fields; no trimming or case folding
    return (title, url)


def dedup_digest(title: str, url: str) -> str:
    """Fixed-width fingerprint of a dedup key, for indexing unbounded text."""
    raw = "\x00".join(dedup_key(title, url)).encode("utf-8")
    return hashlib.sha256(raw).hexdigest()


def collapse_duplicates(items: Iterable[T]) -> Tuple[List[T], List[T]]:
    """Split ``items`` into (kept, dropped), keeping the first item seen per dedup key."""
    seen: set[DedupKey] = set()
    kept: List[T] = []
    dropped: List[T] = []
    for item in items:
        key = item.dedup_key
        if key in seen:
            dropped.append(item)
            continue
        seen.add(key)
        kept.append(item)
    return kept, dropped
