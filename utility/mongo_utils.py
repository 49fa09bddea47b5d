# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-23
# Description: mongo_utils.py
# -----------------------------------------------------------------------------
import certifi
from pymongo import MongoClient
from pymongo.errors import PyMongoError

import settings
from errors.VectorErrors import StoreError
from utility.logging_utils import get_logger

logger = get_logger(__name__)


def get_mongo_client(uri: str, timeout_ms: int | None = None) -> MongoClient:
    """
    Create a MongoDB client and verify it with a ping.

    Atlas (mongodb+srv://) URIs use certifi's CA bundle for TLS.
    Datetimes come back timezone-aware (UTC).
    Raises StoreError if the server cannot be reached.
    """
    if not uri:
        raise StoreError("MongoDB URI is empty")

    timeout_ms = timeout_ms or settings.MONGO_TIMEOUT_MS
    kwargs = {
        "serverSelectionTimeoutMS": timeout_ms,
        "connectTimeoutMS": timeout_ms,
        "socketTimeoutMS": timeout_ms,
        "tz_aware": True,
    }
    if uri.startswith("mongodb+srv://"):
        kwargs.update(tlsCAFile=certifi.where(), retryWrites=True, w="majority")

    try:
        client = MongoClient(uri, **kwargs)
        client.admin.command("ping")
    except PyMongoError as e:
        logger.error("MongoDB connection failed: %s", e)
        raise StoreError(f"MongoDB connection failed: {e}") from e

    logger.info("Connected to MongoDB (atlas=%s)", uri.startswith("mongodb+srv://"))
    return client
