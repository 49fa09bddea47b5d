# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-24
# Description: Ranker
# -----------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Sequence

from embedding.EmbeddingRecord import EmbeddingRecord
from errors.VectorErrors import DimensionMismatch
from similarity.CosineSimilarity import cosine_similarity


@dataclass(frozen=True)
class RankedResult:
    record: EmbeddingRecord  # vector stripped
    score: float

    def to_dict(self) -> Dict[str, Any]:
        out = self.record.to_dict()
        out["similarity_score"] = self.score
        return out


def rank_candidates(
        target: Sequence[float],
        candidates: Iterable[EmbeddingRecord],
        *,
        threshold: float,
        limit: int,
        exclude_owner_id: str | None = None,
) -> List[RankedResult]:
    """
    Score -> filter (score >= threshold) -> sort -> truncate.

    Sort order is score descending, then record id ascending for equal
    scores. A candidate whose vector length differs from the target aborts
    the whole batch with DimensionMismatch.
    """
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")

    scored: List[RankedResult] = []
    for rec in candidates:
        if exclude_owner_id is not None and rec.owner_id == exclude_owner_id:
            continue
        if rec.vector is None:
            raise ValueError(f"Candidate {rec.id} was loaded without its vector")
        if len(rec.vector) != len(target):
            raise DimensionMismatch(len(target), len(rec.vector), f"candidate {rec.id}")

        score = cosine_similarity(target, rec.vector)
        if score >= threshold:
            scored.append(RankedResult(record=rec.without_vector(), score=score))

    scored.sort(key=lambda r: (-r.score, r.record.id))
    return scored[:limit]
