# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-14
# Description: OpenAIEmbedder
# -----------------------------------------------------------------------------
from typing import Optional, List, Any

import openai
from openai import OpenAI

import settings
from config.Config import Config
from errors.VectorErrors import EmbeddingGenerationError
from utility.logging_utils import get_class_logger


class OpenAIEmbedder:
    """
    EmbeddingGenerator backed by the OpenAI embeddings endpoint.

    Vectors are returned as plain Python floats (float64) so that a
    store/retrieve round trip is bit-identical.
    """

    def __init__(
            self,
            cfg: Config,
            *,
            batch_size: int = 64,
            client: Optional[Any] = None,
            logger=None,
    ):
        self.cfg = cfg
        self.batch_size = batch_size
        self.logger = logger or get_class_logger(self.__class__)

        self.client = client or OpenAI(
            api_key=cfg.openai_api_key,
            base_url=cfg.openai_base_url,
            timeout=settings.OPENAI_TIMEOUT_SECONDS,
            max_retries=settings.OPENAI_MAX_RETRIES,
        )
        self.model = cfg.embedding_model
        self.logger.info("OpenAI embedder initialised (model='%s')", self.model)

    def embed(self, text: str) -> List[float]:
        return self.embed_texts([text])[0]

    def embed_texts(self, texts: List[str]) -> List[List[float]]:
        """
        Embed texts in batches of `batch_size`; output order matches input order.
        Any failure aborts the whole call with EmbeddingGenerationError.
        """
        for t in texts:
            if not isinstance(t, str) or not t.strip():
                raise EmbeddingGenerationError("Cannot embed empty text")

        out: List[List[float]] = []
        for i in range(0, len(texts), self.batch_size):
            out.extend(self._embed_batch(texts[i:i + self.batch_size]))

        self.logger.debug("Embedded %d texts with model '%s'", len(out), self.model)
        return out

    def _embed_batch(self, texts: List[str]) -> List[List[float]]:
        try:
            resp = self.client.embeddings.create(model=self.model, input=texts)
        except openai.OpenAIError as e:
            self.logger.error("Embedding request failed (model='%s'): %s", self.model, e)
            raise EmbeddingGenerationError(f"Failed to generate embedding: {e}") from e

        data = getattr(resp, "data", None) or []
        if len(data) != len(texts):
            raise EmbeddingGenerationError(
                f"Embedding response size mismatch: {len(data)} != {len(texts)}"
            )

        # The API may return items out of order; `index` is authoritative
        ordered = sorted(data, key=lambda d: getattr(d, "index", 0))
        vectors: List[List[float]] = []
        for d in ordered:
            emb = getattr(d, "embedding", None)
            if not emb:
                raise EmbeddingGenerationError("Embedding response contained an empty vector")
            vectors.append([float(x) for x in emb])
        return vectors
