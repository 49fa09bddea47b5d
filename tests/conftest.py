# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-12
# Description: conftest.py
# -----------------------------------------------------------------------------

import re
import sys
from pathlib import Path
from typing import Dict, List

import pytest

# add project root to sys.path
ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from errors.VectorErrors import EmbeddingGenerationError  # noqa: E402
from services.SimilarityService import SimilarityService  # noqa: E402
from vectorstore.InMemoryEmbeddingStore import InMemoryEmbeddingStore  # noqa: E402

TEST_DIM = 64


class VocabularyEmbedder:
    """
    Deterministic bag-of-words embedder: every new lowercase token gets the
    next free axis, so distinct words never collide.
    """

    def __init__(self, dim: int = TEST_DIM) -> None:
        self.dim = dim
        self.vocab: Dict[str, int] = {}
        self.calls: List[str] = []
        self.fail = False

    def embed(self, text: str) -> List[float]:
        self.calls.append(text)
        if self.fail:
            raise EmbeddingGenerationError("provider unavailable")

        vec = [0.0] * self.dim
        for tok in re.findall(r"[a-z0-9]+", text.lower()):
            if tok not in self.vocab:
                if len(self.vocab) >= self.dim:
                    raise EmbeddingGenerationError("test vocabulary exhausted")
                self.vocab[tok] = len(self.vocab)
            vec[self.vocab[tok]] += 1.0
        return vec


@pytest.fixture
def embedder() -> VocabularyEmbedder:
    return VocabularyEmbedder()


@pytest.fixture
def store() -> InMemoryEmbeddingStore:
    return InMemoryEmbeddingStore()


@pytest.fixture
def service(store, embedder) -> SimilarityService:
    return SimilarityService(store=store, embedder=embedder, dimension=TEST_DIM)
