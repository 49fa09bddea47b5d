# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-24
# Description: SimilarityService.py
# -----------------------------------------------------------------------------
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

import settings
from embedding.EmbeddingGenerator import EmbeddingGenerator
from embedding.EmbeddingRecord import EmbeddingRecord
from errors.VectorErrors import DimensionMismatch
from ranking.Ranker import RankedResult, rank_candidates
from retrieval.CandidateSource import CandidateSource, ScanCandidateSource
from similarity.CosineSimilarity import mean_vector
from utility.logging_utils import get_class_logger
from vectorstore.EmbeddingStore import EmbeddingStore
from vectorstore.types import Pagination


class SimilarityService:
    """
    Company research similarity search + recommendations.

    Responsibilities:
      - embed research text and persist it through an EmbeddingStore
      - rank stored records against a query (search) or against the
        caller's averaged recent history (recommend)

    Both rankings are exact only within the candidate window: the newest
    `search_candidate_cap` / `recommend_candidate_cap` records returned by
    the candidate source. Records older than that window are never scored.
    """

    def __init__(
            self,
            *,
            store: EmbeddingStore,
            embedder: EmbeddingGenerator,
            candidate_source: CandidateSource | None = None,
            dimension: int = settings.EMBEDDING_DIMENSION,
            search_candidate_cap: int = settings.SEARCH_CANDIDATE_CAP,
            recommend_candidate_cap: int = settings.RECOMMEND_CANDIDATE_CAP,
            recommend_history_size: int = settings.RECOMMEND_HISTORY_SIZE,
            recommend_threshold: float = settings.RECOMMEND_THRESHOLD,
            logger: logging.Logger | None = None,
    ) -> None:
        self.store = store
        self.embedder = embedder
        self.candidate_source = candidate_source or ScanCandidateSource(store=store)
        self.dimension = dimension
        self.search_candidate_cap = search_candidate_cap
        self.recommend_candidate_cap = recommend_candidate_cap
        self.recommend_history_size = recommend_history_size
        self.recommend_threshold = recommend_threshold
        self.logger = logger or get_class_logger(self.__class__)

        self.logger.info(
            "SimilarityService initialised (store=%s, embedder=%s, dim=%d, search_cap=%d, recommend_cap=%d)",
            type(store).__name__,
            type(embedder).__name__,
            dimension,
            search_candidate_cap,
            recommend_candidate_cap,
        )

    # -------------------------------------------------------------------------
    # helpers
    # -------------------------------------------------------------------------
    @staticmethod
    def _require_text(name: str, value: str) -> str:
        if not isinstance(value, str) or not value.strip():
            raise ValueError(f"{name} must not be empty")
        return value

    def _embed(self, text: str) -> List[float]:
        vector = self.embedder.embed(text)
        if len(vector) != self.dimension:
            raise DimensionMismatch(self.dimension, len(vector), "embedding provider output")
        return vector

    # -------------------------------------------------------------------------
    # CRUD
    # -------------------------------------------------------------------------
    def store_embedding(
            self,
            company_name: str,
            source_text: str,
            owner_id: str,
            metadata: Optional[Dict[str, Any]] = None,
    ) -> EmbeddingRecord:
        self._require_text("company_name", company_name)
        self._require_text("source_text", source_text)
        self._require_text("owner_id", owner_id)

        vector = self._embed(source_text)
        rec = self.store.put(company_name, source_text, vector, owner_id, metadata or {})
        self.logger.info("Stored embedding %s for company '%s' (owner=%s)", rec.id, company_name, owner_id)
        return rec

    def update_embedding(self, record_id: str, new_source_text: str) -> Optional[EmbeddingRecord]:
        """Re-embed `new_source_text` and replace the record's text + vector. None if absent."""
        self._require_text("new_source_text", new_source_text)

        if self.store.get(record_id) is None:
            self.logger.info("update_embedding: record %s not found", record_id)
            return None

        vector = self._embed(new_source_text)
        rec = self.store.update(record_id, new_source_text, vector)
        if rec is None:
            self.logger.info("update_embedding: record %s disappeared before update", record_id)
        else:
            self.logger.info("Updated embedding %s", record_id)
        return rec

    def delete_embedding(self, record_id: str) -> bool:
        deleted = self.store.delete(record_id)
        self.logger.info("delete_embedding: id=%s deleted=%s", record_id, deleted)
        return deleted

    def get_embedding(self, record_id: str) -> Optional[EmbeddingRecord]:
        return self.store.get(record_id)

    def list_by_owner(
            self,
            owner_id: str,
            limit: int = settings.LIST_DEFAULT_LIMIT,
            page: int = 1,
    ) -> Tuple[List[EmbeddingRecord], Pagination]:
        return self.store.list_by_owner(owner_id, limit, page)

    def search_by_name(self, pattern: str, owner_id: str | None = None) -> List[EmbeddingRecord]:
        self._require_text("pattern", pattern)
        return self.store.find_by_name_substring(pattern, owner_id)

    # -------------------------------------------------------------------------
    # Ranking
    # -------------------------------------------------------------------------
    def _rank(
            self,
            target: Sequence[float],
            *,
            cap: int,
            threshold: float,
            limit: int,
            exclude_owner_id: str | None,
    ) -> List[RankedResult]:
        candidates = self.candidate_source.candidates(target, exclude_owner_id=exclude_owner_id, cap=cap)
        results = rank_candidates(
            target,
            candidates,
            threshold=threshold,
            limit=limit,
            exclude_owner_id=exclude_owner_id,
        )
        self.logger.info(
            "Ranked %d candidates -> %d results (threshold=%.3f, limit=%d)",
            len(candidates),
            len(results),
            threshold,
            limit,
        )
        return results

    def search(
            self,
            query_text: str,
            limit: int = settings.SEARCH_DEFAULTS["limit"],
            threshold: float = settings.SEARCH_DEFAULTS["threshold"],
            exclude_owner_id: str | None = None,
    ) -> List[RankedResult]:
        """
        Rank stored records by cosine similarity to `query_text`.
        Results are exact only among the newest `search_candidate_cap` records.
        """
        self._require_text("query_text", query_text)
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")

        self.logger.info(
            "search: query=%r limit=%d threshold=%.3f exclude_owner_id=%s",
            query_text, limit, threshold, exclude_owner_id,
        )
        try:
            query_vector = self._embed(query_text)
            return self._rank(
                query_vector,
                cap=self.search_candidate_cap,
                threshold=threshold,
                limit=limit,
                exclude_owner_id=exclude_owner_id,
            )
        except Exception as e:
            self.logger.error("search failed: %s", e)
            raise

    def recommend(self, owner_id: str, limit: int = settings.RECOMMEND_DEFAULT_LIMIT) -> List[RankedResult]:
        """
        Recommend other users' records similar to the average of the caller's
        most recent records. No history -> empty list.
        """
        self._require_text("owner_id", owner_id)
        if limit < 1:
            raise ValueError(f"limit must be >= 1, got {limit}")

        try:
            history = self.store.recent_by_owner(owner_id, self.recommend_history_size)
            if not history:
                self.logger.info("recommend: owner %s has no history", owner_id)
                return []

            profile = mean_vector([rec.vector for rec in history])
            self.logger.debug("recommend: profile built from %d records", len(history))

            return self._rank(
                profile,
                cap=self.recommend_candidate_cap,
                threshold=self.recommend_threshold,
                limit=limit,
                exclude_owner_id=owner_id,
            )
        except Exception as e:
            self.logger.error("recommend failed for owner %s: %s", owner_id, e)
            raise
