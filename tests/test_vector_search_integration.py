# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-26
# Description: test_vector_search_integration.py
# -----------------------------------------------------------------------------
import os
import uuid

import pytest

from config.Config import Config

SAMPLE_COMPANIES = [
    ("TechCorp AI",
     "AI-powered software company specializing in machine learning solutions for enterprise clients. "
     "Focus on natural language processing and computer vision.",
     {"industry": "Technology", "tags": ["AI", "Enterprise"]}),
    ("DataFlow Systems",
     "Cloud-based data analytics platform helping businesses make data-driven decisions. "
     "Specializes in real-time analytics and business intelligence.",
     {"industry": "Analytics", "tags": ["Cloud", "BI"]}),
    ("GreenTech Solutions",
     "Renewable energy company developing solar and wind power solutions for commercial and "
     "residential markets. Focus on sustainable technology.",
     {"industry": "Energy", "tags": ["Renewable", "Sustainable"]}),
]


def _skip_if_missing_env():
    missing = [
        Config.ENV_VARS[f]
        for f in ("openai_api_key", "mongodb_uri")
        if not os.getenv(Config.ENV_VARS[f])
    ]
    if missing:
        pytest.skip(f"Missing env vars for live OpenAI/MongoDB: {', '.join(missing)}")


@pytest.mark.integration
def test_store_search_recommend_against_live_services():
    """
    Integration: OpenAI embeddings + MongoDB store.
    Stores three companies under fresh owners, searches, recommends, cleans up.
    """
    _skip_if_missing_env()

    from app.AppContainer import AppContainer

    container = AppContainer.from_env()
    assert container.health_runner.run_all() == {"store": True, "embedding": True}

    svc = container.similarity_service
    run = uuid.uuid4().hex[:8]
    stored = []
    try:
        for i, (name, text, meta) in enumerate(SAMPLE_COMPANIES):
            stored.append(svc.store_embedding(name, text, f"it-{run}-{i}", meta))

        results = svc.search("renewable energy solutions", limit=3, threshold=0.5)
        assert results, "expected at least one match"
        assert results[0].record.company_name == "GreenTech Solutions"

        recs = svc.recommend(f"it-{run}-0", limit=5)
        assert all(r.record.owner_id != f"it-{run}-0" for r in recs)
    finally:
        for rec in stored:
            svc.delete_embedding(rec.id)
