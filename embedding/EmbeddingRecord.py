# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-11-14
# Description: EmbeddingRecord
# -----------------------------------------------------------------------------
from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Dict, Any, List, Optional


@dataclass
class EmbeddingRecord:
    """Company research text + its embedding vector + pass-through metadata."""
    id: str
    company_name: str
    source_text: str
    owner_id: str
    created_at: datetime
    updated_at: datetime
    # None when the record was loaded without its vector payload
    vector: Optional[List[float]] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def dimension(self) -> Optional[int]:
        return len(self.vector) if self.vector is not None else None

    def without_vector(self) -> "EmbeddingRecord":
        return replace(self, vector=None)

    def to_dict(self, include_vector: bool = False) -> Dict[str, Any]:
        """Plain-dict payload for a calling layer; timestamps as ISO-8601."""
        out: Dict[str, Any] = {
            "id": self.id,
            "company_name": self.company_name,
            "source_text": self.source_text,
            "owner_id": self.owner_id,
            "metadata": dict(self.metadata),
            "created_at": self.created_at.isoformat(),
            "updated_at": self.updated_at.isoformat(),
        }
        if include_vector and self.vector is not None:
            out["vector"] = list(self.vector)
        return out

    def short_preview(self, n: int = 80) -> str:
        """Return a compact text preview for logging/debugging."""
        clean = " ".join(self.source_text.split())
        preview = (clean[:n] + "...") if len(clean) > n else clean
        return f"[{self.company_name} | {self.id}] {preview}"
