# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-22
# Description: VectorErrors
# -----------------------------------------------------------------------------


class EmbeddingGenerationError(RuntimeError):
    """The embedding provider failed (quota, network, malformed input or response)."""


class DimensionMismatch(ValueError):
    """Two vectors that must be compared have different lengths."""

    def __init__(self, expected: int, actual: int, context: str = "") -> None:
        self.expected = expected
        self.actual = actual
        msg = f"Vector dimension mismatch: expected {expected}, got {actual}"
        if context:
            msg = f"{msg} ({context})"
        super().__init__(msg)


class InvalidVector(ValueError):
    """A vector holds NaN or infinite components and cannot be scored."""


class StoreError(RuntimeError):
    """Persistence-layer failure raised by an EmbeddingStore backend."""
