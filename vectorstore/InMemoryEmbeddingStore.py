# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-23
# Description: InMemoryEmbeddingStore
# -----------------------------------------------------------------------------
import copy
import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Sequence, Dict, Any, List, Optional, Tuple

from embedding.EmbeddingRecord import EmbeddingRecord
from utility.logging_utils import get_class_logger
from vectorstore.EmbeddingStore import EmbeddingStore
from vectorstore.types import Pagination, validate_page_args, validate_cap


class InMemoryEmbeddingStore(EmbeddingStore):
    """
    Process-local EmbeddingStore for development and tests.
    A single lock gives per-record atomicity; records are deep-copied on
    the way in and out so callers never share mutable state with the store.
    """

    def __init__(self, logger=None) -> None:
        self.logger = logger or get_class_logger(self.__class__)
        self._lock = threading.Lock()
        # dict preserves insertion order, which is the tie-break for equal created_at
        self._records: Dict[str, EmbeddingRecord] = {}

    @staticmethod
    def _now() -> datetime:
        return datetime.now(timezone.utc)

    def _newest_first(self, records: List[EmbeddingRecord]) -> List[EmbeddingRecord]:
        # reversed() puts later inserts first; sort is stable
        return sorted(reversed(records), key=lambda r: r.created_at, reverse=True)

    def test_connection(self) -> bool:
        return True

    def put(
            self,
            company_name: str,
            source_text: str,
            vector: Sequence[float],
            owner_id: str,
            metadata: Dict[str, Any] | None = None,
    ) -> EmbeddingRecord:
        now = self._now()
        rec = EmbeddingRecord(
            id=uuid.uuid4().hex,
            company_name=company_name,
            source_text=source_text,
            owner_id=owner_id,
            created_at=now,
            updated_at=now,
            vector=list(vector),
            metadata=copy.deepcopy(metadata or {}),
        )
        with self._lock:
            self._records[rec.id] = rec
        self.logger.debug("Stored record %s for owner '%s'", rec.id, owner_id)
        return copy.deepcopy(rec)

    def get(self, record_id: str) -> Optional[EmbeddingRecord]:
        with self._lock:
            rec = self._records.get(record_id)
            return copy.deepcopy(rec) if rec is not None else None

    def update(
            self,
            record_id: str,
            new_source_text: str,
            new_vector: Sequence[float],
    ) -> Optional[EmbeddingRecord]:
        with self._lock:
            rec = self._records.get(record_id)
            if rec is None:
                return None
            # stored records are never mutated; readers holding a snapshot keep a consistent view
            updated = replace(
                rec,
                source_text=new_source_text,
                vector=list(new_vector),
                updated_at=self._now(),
            )
            self._records[record_id] = updated
            return copy.deepcopy(updated)

    def delete(self, record_id: str) -> bool:
        with self._lock:
            return self._records.pop(record_id, None) is not None

    def count(self, owner_id: str | None = None) -> int:
        with self._lock:
            if owner_id is None:
                return len(self._records)
            return sum(1 for r in self._records.values() if r.owner_id == owner_id)

    def _snapshot(self) -> List[EmbeddingRecord]:
        with self._lock:
            return list(self._records.values())

    def list_by_owner(
            self,
            owner_id: str,
            limit: int,
            page: int,
    ) -> Tuple[List[EmbeddingRecord], Pagination]:
        validate_page_args(limit, page)
        owned = self._newest_first([r for r in self._snapshot() if r.owner_id == owner_id])
        skip = (page - 1) * limit
        window = owned[skip:skip + limit]
        return (
            [copy.deepcopy(r.without_vector()) for r in window],
            Pagination.build(total=len(owned), page=page, limit=limit),
        )

    def find_by_name_substring(
            self,
            pattern: str,
            owner_id: str | None = None,
    ) -> List[EmbeddingRecord]:
        needle = pattern.casefold()
        hits = [
            r for r in self._snapshot()
            if needle in r.company_name.casefold()
            and (owner_id is None or r.owner_id == owner_id)
        ]
        return [copy.deepcopy(r.without_vector()) for r in self._newest_first(hits)]

    def recent_by_owner(self, owner_id: str, n: int) -> List[EmbeddingRecord]:
        validate_cap(n)
        owned = self._newest_first([r for r in self._snapshot() if r.owner_id == owner_id])
        return [copy.deepcopy(r) for r in owned[:n]]

    def scan_candidates(
            self,
            exclude_owner_id: str | None = None,
            cap: int = 1000,
    ) -> List[EmbeddingRecord]:
        validate_cap(cap)
        pool = [r for r in self._snapshot() if exclude_owner_id is None or r.owner_id != exclude_owner_id]
        return [copy.deepcopy(r) for r in self._newest_first(pool)[:cap]]
