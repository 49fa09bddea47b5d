# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-25
# Description: test_similarity_service.py
# -----------------------------------------------------------------------------
import pytest

from errors.VectorErrors import DimensionMismatch, EmbeddingGenerationError
from services.SimilarityService import SimilarityService
from vectorstore.InMemoryEmbeddingStore import InMemoryEmbeddingStore

INDUSTRY_TEXT = "company research report for the {} industry"


@pytest.fixture
def three_industries(service):
    recs = {}
    for owner, industry in (("u1", "fintech"), ("u2", "healthcare"), ("u3", "logistics")):
        recs[industry] = service.store_embedding(
            f"{industry.title()} Co",
            INDUSTRY_TEXT.format(industry),
            owner,
            {"industry": industry},
        )
    return recs


# -----------------------------------------------------------------------------
# CRUD
# -----------------------------------------------------------------------------
def test_store_embedding_embeds_source_text(service, embedder, store):
    rec = service.store_embedding("Acme", "acme makes rockets", "u1", {"website": "acme.example"})

    assert embedder.calls == ["acme makes rockets"]
    assert len(rec.vector) == 64
    assert store.get(rec.id).metadata == {"website": "acme.example"}


@pytest.mark.parametrize("name,text,owner", [("", "text", "u1"), ("Acme", "  ", "u1"), ("Acme", "text", "")])
def test_store_embedding_rejects_empty_fields(service, embedder, name, text, owner):
    with pytest.raises(ValueError):
        service.store_embedding(name, text, owner)
    assert embedder.calls == []


def test_store_embedding_rejects_wrong_dimension(store, embedder):
    svc = SimilarityService(store=store, embedder=embedder, dimension=1536)
    with pytest.raises(DimensionMismatch):
        svc.store_embedding("Acme", "acme makes rockets", "u1")
    assert store.count() == 0


def test_embedding_failure_is_reported_and_nothing_is_stored(service, embedder, store):
    embedder.fail = True
    with pytest.raises(EmbeddingGenerationError):
        service.store_embedding("Acme", "acme makes rockets", "u1")
    assert store.count() == 0


def test_update_embedding_regenerates_vector(service, embedder):
    rec = service.store_embedding("Acme", "acme makes rockets", "u1")
    updated = service.update_embedding(rec.id, "acme now sells insurance")

    assert updated is not None
    assert updated.source_text == "acme now sells insurance"
    assert updated.vector != rec.vector
    assert updated.owner_id == "u1"
    assert embedder.calls[-1] == "acme now sells insurance"


def test_update_missing_record_returns_none_without_embedding(service, embedder):
    assert service.update_embedding("missing", "new text") is None
    assert embedder.calls == []


def test_delete_embedding(service):
    rec = service.store_embedding("Acme", "acme makes rockets", "u1")
    assert service.delete_embedding(rec.id) is True
    assert service.delete_embedding(rec.id) is False
    assert service.get_embedding(rec.id) is None


def test_list_and_name_search_never_embed(service, embedder):
    service.store_embedding("Acme Rockets", "acme makes rockets", "u1")
    service.store_embedding("Beta Foods", "beta sells food", "u1")
    calls_before = len(embedder.calls)

    records, pagination = service.list_by_owner("u1", limit=1, page=2)
    hits = service.search_by_name("ROCKET")

    assert len(embedder.calls) == calls_before
    assert [r.company_name for r in records] == ["Acme Rockets"]
    assert pagination.total == 2 and pagination.pages == 2
    assert [r.company_name for r in hits] == ["Acme Rockets"]
    assert hits[0].vector is None


# -----------------------------------------------------------------------------
# search
# -----------------------------------------------------------------------------
def test_matching_industry_ranks_first(service, three_industries):
    results = service.search(INDUSTRY_TEXT.format("fintech"), limit=5, threshold=0.5)

    assert len(results) == 3
    assert results[0].record.id == three_industries["fintech"].id
    assert results[0].score == pytest.approx(1.0)
    assert all(r.score < results[0].score for r in results[1:])
    assert results[0].record.metadata == {"industry": "fintech"}
    assert results[0].record.vector is None


def test_search_respects_threshold_and_limit(service, three_industries):
    for threshold in (0.0, 0.5, 0.9, 0.99):
        for limit in (1, 2, 5):
            results = service.search("fintech industry research", limit=limit, threshold=threshold)
            assert len(results) <= limit
            assert all(r.score >= threshold for r in results)


def test_search_threshold_above_ceiling_is_empty(service, three_industries):
    assert service.search(INDUSTRY_TEXT.format("fintech"), limit=5, threshold=1.1) == []


def test_search_excludes_owner(service, three_industries):
    results = service.search(INDUSTRY_TEXT.format("fintech"), limit=5, threshold=0.0, exclude_owner_id="u1")
    assert "u1" not in {r.record.owner_id for r in results}
    assert len(results) == 2


def test_search_only_scores_the_candidate_window(store, embedder):
    svc = SimilarityService(store=store, embedder=embedder, dimension=64, search_candidate_cap=2)
    oldest = svc.store_embedding("Old Co", "quantum computing lab", "u1")
    svc.store_embedding("Mid Co", "bakery chain", "u2")
    svc.store_embedding("New Co", "shipping company", "u3")

    results = svc.search("quantum computing lab", limit=5, threshold=0.0)
    assert oldest.id not in {r.record.id for r in results}


def test_search_rejects_bad_arguments(service):
    with pytest.raises(ValueError):
        service.search("   ")
    with pytest.raises(ValueError):
        service.search("fintech", limit=0)


def test_search_propagates_embedding_failure(service, embedder, three_industries):
    embedder.fail = True
    with pytest.raises(EmbeddingGenerationError):
        service.search("fintech")


def test_search_aborts_on_corrupt_candidate(service, store, three_industries):
    store.put("Broken", "broken vector", [1.0, 2.0], "u9", {})
    with pytest.raises(DimensionMismatch):
        service.search(INDUSTRY_TEXT.format("fintech"), threshold=0.0)


# -----------------------------------------------------------------------------
# recommend
# -----------------------------------------------------------------------------
def _vector_service(store, **kwargs) -> SimilarityService:
    class _NoEmbed:
        def embed(self, text):
            raise AssertionError("recommend must not call the embedder")

    return SimilarityService(store=store, embedder=_NoEmbed(), dimension=3, **kwargs)


def test_recommend_with_no_history_is_empty(service, three_industries):
    assert service.recommend("nobody", limit=5) == []


def test_recommend_never_returns_callers_records():
    store = InMemoryEmbeddingStore()
    store.put("Mine A", "a", [1.0, 0.0, 0.0], "me", {})
    store.put("Mine B", "b", [0.9, 0.1, 0.0], "me", {})
    close = store.put("Close", "c", [1.0, 0.05, 0.0], "other", {})
    store.put("Far", "d", [0.0, 0.0, 1.0], "other", {})

    results = _vector_service(store).recommend("me", limit=5)

    assert [r.record.id for r in results] == [close.id]
    assert all(r.record.owner_id != "me" for r in results)
    assert all(r.score >= 0.6 for r in results)


def test_recommend_uses_average_of_recent_history_only():
    store = InMemoryEmbeddingStore()
    store.put("Old interest", "old", [0.0, 1.0, 0.0], "me", {})
    store.put("Recent 1", "r1", [1.0, 0.0, 0.0], "me", {})
    store.put("Recent 2", "r2", [1.0, 0.0, 0.0], "me", {})
    x_axis = store.put("X", "x", [1.0, 0.0, 0.0], "other", {})
    store.put("Y", "y", [0.0, 1.0, 0.0], "other", {})

    results = _vector_service(store, recommend_history_size=2).recommend("me", limit=5)

    assert [r.record.id for r in results] == [x_axis.id]
    assert results[0].score == pytest.approx(1.0)


def test_recommend_truncates_to_limit():
    store = InMemoryEmbeddingStore()
    store.put("Mine", "m", [1.0, 1.0, 0.0], "me", {})
    for i in range(6):
        store.put(f"Other {i}", "o", [1.0, 1.0, 0.1 * i], f"user{i}", {})

    results = _vector_service(store).recommend("me", limit=3)
    assert len(results) == 3
    scores = [r.score for r in results]
    assert scores == sorted(scores, reverse=True)


def test_recommend_rejects_bad_arguments(service):
    with pytest.raises(ValueError):
        service.recommend("")
    with pytest.raises(ValueError):
        service.recommend("u1", limit=0)
