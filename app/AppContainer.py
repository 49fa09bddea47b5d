# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-20
# Description: AppContainer.py
# -----------------------------------------------------------------------------
from dataclasses import dataclass

import settings
from config.Config import Config
from embedding.EmbeddingGenerator import EmbeddingGenerator
from embedding.OpenAIEmbedder import OpenAIEmbedder
from health.HealthRunner import HealthRunner
from retrieval.CandidateSource import ScanCandidateSource
from services.SimilarityService import SimilarityService
from vectorstore.EmbeddingStore import EmbeddingStore
from vectorstore.MongoEmbeddingStore import MongoEmbeddingStore


@dataclass
class AppContainer:
    """
    Owns object instantiation and wiring.
    Build it once at process start and hand `similarity_service` to callers;
    nothing here is a module-level singleton.
    """
    store: EmbeddingStore
    embedder: EmbeddingGenerator
    similarity_service: SimilarityService
    health_runner: HealthRunner

    @classmethod
    def build(cls, *, store: EmbeddingStore, embedder: EmbeddingGenerator) -> "AppContainer":
        service = SimilarityService(
            store=store,
            embedder=embedder,
            candidate_source=ScanCandidateSource(store=store),
        )
        health = HealthRunner(store=store, embedder=embedder, expected_dim=settings.EMBEDDING_DIMENSION)
        return cls(store=store, embedder=embedder, similarity_service=service, health_runner=health)

    @classmethod
    def from_env(cls) -> "AppContainer":
        cfg = Config.from_env()
        return cls.build(
            store=MongoEmbeddingStore(cfg),
            embedder=OpenAIEmbedder(cfg),
        )
