# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-24
# Description: CandidateSource
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import List, Protocol, Sequence, runtime_checkable

from embedding.EmbeddingRecord import EmbeddingRecord
from vectorstore.EmbeddingStore import EmbeddingStore


@runtime_checkable
class CandidateSource(Protocol):
    """
    Produces the bounded set of records (with vectors) that a search or
    recommendation scores. `query_vector` lets an index-backed source
    pre-select neighbours; the brute-force scan ignores it.
    """

    def candidates(
            self,
            query_vector: Sequence[float],
            *,
            exclude_owner_id: str | None,
            cap: int,
    ) -> List[EmbeddingRecord]:
        ...


@dataclass
class ScanCandidateSource(CandidateSource):
    """
    Exact brute-force scan over the newest `cap` records of the store.
    Ranking is only exact within that window, not across the whole store.
    """
    store: EmbeddingStore

    def candidates(
            self,
            query_vector: Sequence[float],
            *,
            exclude_owner_id: str | None,
            cap: int,
    ) -> List[EmbeddingRecord]:
        return self.store.scan_candidates(exclude_owner_id=exclude_owner_id, cap=cap)
