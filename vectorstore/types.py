# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2025-12-07
# Description: types.py
# -----------------------------------------------------------------------------
import math
from dataclasses import dataclass, asdict
from typing import Any, Dict


@dataclass(frozen=True)
class Pagination:
    total: int
    page: int
    limit: int
    pages: int

    @classmethod
    def build(cls, *, total: int, page: int, limit: int) -> "Pagination":
        return cls(total=total, page=page, limit=limit, pages=math.ceil(total / limit))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def validate_page_args(limit: int, page: int) -> None:
    if limit < 1:
        raise ValueError(f"limit must be >= 1, got {limit}")
    if page < 1:
        raise ValueError(f"page must be >= 1, got {page}")


def validate_cap(cap: int) -> None:
    if cap < 1:
        raise ValueError(f"cap must be >= 1, got {cap}")
