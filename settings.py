# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-09
# Updated: 2026-01-18
# Description: settings.py
# -----------------------------------------------------------------------------
import os
from typing import Any, Dict


def _env(name: str, default: str = "") -> str:
    """Read env var safely and strip whitespace."""
    return (os.getenv(name) or default).strip()


def _env_int(name: str, default: int) -> int:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return int(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be an int, got {v!r}") from e


def _env_float(name: str, default: float) -> float:
    v = _env(name, "")
    if v == "":
        return default
    try:
        return float(v)
    except ValueError as e:
        raise RuntimeError(f"Env var {name} must be a float, got {v!r}") from e


# -----------------------------------------------------------------------------
# Embeddings
# -----------------------------------------------------------------------------
# text-embedding-ada-002 / text-embedding-3-small -> 1536
EMBEDDING_DIMENSION = _env_int("CLIENTIQ_EMBEDDING_DIMENSION", 1536)

OPENAI_TIMEOUT_SECONDS = _env_float("CLIENTIQ_OPENAI_TIMEOUT_SECONDS", 30.0)

# Embedding failures are surfaced to the caller, who decides whether to retry
OPENAI_MAX_RETRIES = _env_int("CLIENTIQ_OPENAI_MAX_RETRIES", 0)


# -----------------------------------------------------------------------------
# Candidate scan
# -----------------------------------------------------------------------------
# Ranking is exact only within the newest N records of the store.
SEARCH_CANDIDATE_CAP = _env_int("CLIENTIQ_SEARCH_CANDIDATE_CAP", 1000)
RECOMMEND_CANDIDATE_CAP = _env_int("CLIENTIQ_RECOMMEND_CANDIDATE_CAP", 500)


# -----------------------------------------------------------------------------
# Search / recommendation defaults
# -----------------------------------------------------------------------------
SEARCH_DEFAULTS: Dict[str, Any] = {
    "limit": _env_int("CLIENTIQ_SEARCH_LIMIT", 5),
    "threshold": _env_float("CLIENTIQ_SEARCH_THRESHOLD", 0.7),
}

RECOMMEND_HISTORY_SIZE = _env_int("CLIENTIQ_RECOMMEND_HISTORY_SIZE", 10)
RECOMMEND_THRESHOLD = _env_float("CLIENTIQ_RECOMMEND_THRESHOLD", 0.6)
RECOMMEND_DEFAULT_LIMIT = _env_int("CLIENTIQ_RECOMMEND_LIMIT", 5)

LIST_DEFAULT_LIMIT = _env_int("CLIENTIQ_LIST_LIMIT", 20)


# -----------------------------------------------------------------------------
# MongoDB
# -----------------------------------------------------------------------------
MONGO_TIMEOUT_MS = _env_int("CLIENTIQ_MONGO_TIMEOUT_MS", 30000)


# -----------------------------------------------------------------------------
# Sanity checks (tunable)
# -----------------------------------------------------------------------------
if EMBEDDING_DIMENSION < 1:
    raise RuntimeError("EMBEDDING_DIMENSION must be positive")

for _name, _cap in (
        ("SEARCH_CANDIDATE_CAP", SEARCH_CANDIDATE_CAP),
        ("RECOMMEND_CANDIDATE_CAP", RECOMMEND_CANDIDATE_CAP),
        ("RECOMMEND_HISTORY_SIZE", RECOMMEND_HISTORY_SIZE),
):
    if _cap < 1:
        raise RuntimeError(f"{_name} must be >= 1, got {_cap}")
