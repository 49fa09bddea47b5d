# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-07
# Description: HealthRunner
# -----------------------------------------------------------------------------

from __future__ import annotations

import logging
import time
from typing import Dict, Optional

from embedding.EmbeddingGenerator import EmbeddingGenerator
from errors.VectorErrors import EmbeddingGenerationError
from utility.logging_utils import get_class_logger
from vectorstore.EmbeddingStore import EmbeddingStore


class HealthRunner:
    """
    Smoke tests for the engine's two collaborators.

    Checks included:
      - store     (EmbeddingStore.test_connection)
      - embedding (probe embed; vector length must equal the configured dimension)

    Checks never raise; failures are logged and reported as False.
    """

    PROBE_TEXT = "company research embedding healthcheck"

    def __init__(
            self,
            *,
            store: EmbeddingStore,
            embedder: EmbeddingGenerator,
            expected_dim: int,
            logger: Optional[logging.Logger] = None,
    ):
        self.store = store
        self.embedder = embedder
        self.expected_dim = expected_dim
        self.logger = logger or get_class_logger(self.__class__)

    def check_store(self) -> bool:
        ok = self.store.test_connection()
        if ok:
            self.logger.info("Store healthcheck PASSED (%s)", type(self.store).__name__)
        else:
            self.logger.error("Store healthcheck FAILED (%s)", type(self.store).__name__)
        return ok

    def check_embedding(self) -> bool:
        try:
            start = time.time()
            vector = self.embedder.embed(self.PROBE_TEXT)
            elapsed_ms = (time.time() - start) * 1000.0
        except EmbeddingGenerationError as e:
            self.logger.error("Embedding healthcheck FAILED: %s", e)
            return False

        dim = len(vector)
        self.logger.info("Embedding call succeeded in %.1f ms. Returned dimension: %d", elapsed_ms, dim)
        if dim != self.expected_dim:
            self.logger.warning("Dimension mismatch: expected %d, got %d.", self.expected_dim, dim)
            return False

        self.logger.info("Embedding healthcheck PASSED.")
        return True

    def run_all(self) -> Dict[str, bool]:
        self.logger.info("Starting healthcheck suite")
        results: Dict[str, bool] = {
            "store": self.check_store(),
            "embedding": self.check_embedding(),
        }
        passed = sum(1 for ok in results.values() if ok)
        self.logger.info("Healthcheck suite complete: %d/%d passed", passed, len(results))
        return results


if __name__ == "__main__":
    from app.AppContainer import AppContainer

    container = AppContainer.from_env()
    outcome = container.health_runner.run_all()
    container.health_runner.logger.info("HealthRunner result: %s", outcome)
