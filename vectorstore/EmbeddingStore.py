# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-15
# Description: EmbeddingStore
# -----------------------------------------------------------------------------

from typing import Protocol, Sequence, Dict, Any, List, Optional, Tuple, runtime_checkable

from embedding.EmbeddingRecord import EmbeddingRecord
from vectorstore.types import Pagination


@runtime_checkable
class EmbeddingStore(Protocol):
    """
    Durable keyed storage for EmbeddingRecords.

    Ordering contract shared by every listing/scan operation: newest
    `created_at` first, ties broken newest-inserted first.
    Backends raise StoreError for persistence failures.
    """

    def test_connection(self) -> bool:
        ...

    def put(
            self,
            company_name: str,
            source_text: str,
            vector: Sequence[float],
            owner_id: str,
            metadata: Dict[str, Any] | None = None,
    ) -> EmbeddingRecord:
        ...

    def get(self, record_id: str) -> Optional[EmbeddingRecord]:
        ...

    def update(
            self,
            record_id: str,
            new_source_text: str,
            new_vector: Sequence[float],
    ) -> Optional[EmbeddingRecord]:
        ...

    def delete(self, record_id: str) -> bool:
        ...

    def count(self, owner_id: str | None = None) -> int:
        ...

    def list_by_owner(
            self,
            owner_id: str,
            limit: int,
            page: int,
    ) -> Tuple[List[EmbeddingRecord], Pagination]:
        ...

    def find_by_name_substring(
            self,
            pattern: str,
            owner_id: str | None = None,
    ) -> List[EmbeddingRecord]:
        ...

    def recent_by_owner(self, owner_id: str, n: int) -> List[EmbeddingRecord]:
        ...

    def scan_candidates(
            self,
            exclude_owner_id: str | None = None,
            cap: int = 1000,
    ) -> List[EmbeddingRecord]:
        ...
