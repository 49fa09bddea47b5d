# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-22
# Description: EmbeddingGenerator
# -----------------------------------------------------------------------------
from typing import List, Protocol, runtime_checkable


@runtime_checkable
class EmbeddingGenerator(Protocol):
    """
    Text -> fixed-length vector.
    Implementations raise EmbeddingGenerationError on any provider failure.
    """

    def embed(self, text: str) -> List[float]:
        ...
