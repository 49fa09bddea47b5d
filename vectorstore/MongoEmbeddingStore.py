# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-01-23
# Description: MongoEmbeddingStore
# -----------------------------------------------------------------------------
import re
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Sequence, Dict, Any, List, Optional, Tuple, Iterator

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, ReturnDocument
from pymongo.collection import Collection
from pymongo.errors import PyMongoError

from config.Config import Config
from embedding.EmbeddingRecord import EmbeddingRecord
from errors.VectorErrors import StoreError
from utility.logging_utils import get_class_logger
from utility.mongo_utils import get_mongo_client
from vectorstore.EmbeddingStore import EmbeddingStore
from vectorstore.types import Pagination, validate_page_args, validate_cap

# ObjectIds grow with insertion time, so _id breaks created_at ties newest-first
NEWEST_FIRST = [("created_at", DESCENDING), ("_id", DESCENDING)]
NO_VECTOR = {"vector": 0}


class MongoEmbeddingStore(EmbeddingStore):
    """
    EmbeddingStore on a MongoDB collection.

    Document shape:
      {_id, company_name, source_text, vector: [double], owner_id,
       metadata: {...}, created_at, updated_at}
    """

    def __init__(
            self,
            cfg: Config | None = None,
            *,
            collection: Collection | None = None,
            create_indexes: bool = True,
            logger=None,
    ) -> None:
        self.logger = logger or get_class_logger(self.__class__)

        if collection is None:
            if cfg is None:
                raise ValueError("MongoEmbeddingStore needs either cfg or collection")
            self.logger.info(
                "Initialising MongoDB store (database=%s, collection=%s)",
                cfg.mongodb_database,
                cfg.mongodb_collection,
            )
            client = get_mongo_client(cfg.mongodb_uri)
            collection = client[cfg.mongodb_database][cfg.mongodb_collection]

        self.collection: Collection = collection
        if create_indexes:
            self.ensure_indexes()

    @contextmanager
    def _guard(self, op: str) -> Iterator[None]:
        try:
            yield
        except PyMongoError as e:
            self.logger.error("MongoDB %s failed on '%s': %s", op, self.collection.name, e)
            raise StoreError(f"MongoDB {op} failed: {e}") from e

    def ensure_indexes(self) -> None:
        with self._guard("create_index"):
            self.collection.create_index([("owner_id", ASCENDING), ("created_at", DESCENDING)])
            self.collection.create_index([("company_name", ASCENDING), ("owner_id", ASCENDING)])

    @staticmethod
    def _oid(record_id: str) -> Optional[ObjectId]:
        return ObjectId(record_id) if ObjectId.is_valid(record_id) else None

    @staticmethod
    def _now() -> datetime:
        # BSON dates hold milliseconds; truncate so put() returns what get() will read back
        now = datetime.now(timezone.utc)
        return now.replace(microsecond=now.microsecond // 1000 * 1000)

    @staticmethod
    def _aware(ts: datetime) -> datetime:
        return ts if ts.tzinfo is not None else ts.replace(tzinfo=timezone.utc)

    def _to_record(self, doc: Dict[str, Any]) -> EmbeddingRecord:
        vector = doc.get("vector")
        return EmbeddingRecord(
            id=str(doc["_id"]),
            company_name=doc["company_name"],
            source_text=doc["source_text"],
            owner_id=doc["owner_id"],
            created_at=self._aware(doc["created_at"]),
            updated_at=self._aware(doc["updated_at"]),
            vector=[float(x) for x in vector] if vector is not None else None,
            metadata=doc.get("metadata") or {},
        )

    def test_connection(self) -> bool:
        """Simple health check: can we talk to MongoDB and read our collection?"""
        try:
            self.collection.estimated_document_count()
            return True
        except PyMongoError as e:
            self.logger.error("MongoDB connection failed: %s", e)
            return False

    def put(
            self,
            company_name: str,
            source_text: str,
            vector: Sequence[float],
            owner_id: str,
            metadata: Dict[str, Any] | None = None,
    ) -> EmbeddingRecord:
        now = self._now()
        doc = {
            "company_name": company_name,
            "source_text": source_text,
            "vector": [float(x) for x in vector],
            "owner_id": owner_id,
            "metadata": dict(metadata or {}),
            "created_at": now,
            "updated_at": now,
        }
        with self._guard("insert_one"):
            res = self.collection.insert_one(doc)
        doc["_id"] = res.inserted_id
        self.logger.debug("Inserted record %s for owner '%s'", res.inserted_id, owner_id)
        return self._to_record(doc)

    def get(self, record_id: str) -> Optional[EmbeddingRecord]:
        oid = self._oid(record_id)
        if oid is None:
            return None
        with self._guard("find_one"):
            doc = self.collection.find_one({"_id": oid})
        return self._to_record(doc) if doc else None

    def update(
            self,
            record_id: str,
            new_source_text: str,
            new_vector: Sequence[float],
    ) -> Optional[EmbeddingRecord]:
        oid = self._oid(record_id)
        if oid is None:
            return None
        with self._guard("find_one_and_update"):
            doc = self.collection.find_one_and_update(
                {"_id": oid},
                {"$set": {
                    "source_text": new_source_text,
                    "vector": [float(x) for x in new_vector],
                    "updated_at": self._now(),
                }},
                return_document=ReturnDocument.AFTER,
            )
        return self._to_record(doc) if doc else None

    def delete(self, record_id: str) -> bool:
        oid = self._oid(record_id)
        if oid is None:
            return False
        with self._guard("delete_one"):
            res = self.collection.delete_one({"_id": oid})
        return res.deleted_count > 0

    def count(self, owner_id: str | None = None) -> int:
        query = {"owner_id": owner_id} if owner_id is not None else {}
        with self._guard("count_documents"):
            return self.collection.count_documents(query)

    def list_by_owner(
            self,
            owner_id: str,
            limit: int,
            page: int,
    ) -> Tuple[List[EmbeddingRecord], Pagination]:
        validate_page_args(limit, page)
        query = {"owner_id": owner_id}
        with self._guard("find"):
            docs = list(
                self.collection.find(query, NO_VECTOR)
                .sort(NEWEST_FIRST)
                .skip((page - 1) * limit)
                .limit(limit)
            )
            total = self.collection.count_documents(query)
        return [self._to_record(d) for d in docs], Pagination.build(total=total, page=page, limit=limit)

    def find_by_name_substring(
            self,
            pattern: str,
            owner_id: str | None = None,
    ) -> List[EmbeddingRecord]:
        # literal substring, not a user-supplied regex
        query: Dict[str, Any] = {"company_name": {"$regex": re.escape(pattern), "$options": "i"}}
        if owner_id is not None:
            query["owner_id"] = owner_id
        with self._guard("find"):
            docs = list(self.collection.find(query, NO_VECTOR).sort(NEWEST_FIRST))
        return [self._to_record(d) for d in docs]

    def recent_by_owner(self, owner_id: str, n: int) -> List[EmbeddingRecord]:
        validate_cap(n)
        with self._guard("find"):
            docs = list(self.collection.find({"owner_id": owner_id}).sort(NEWEST_FIRST).limit(n))
        return [self._to_record(d) for d in docs]

    def scan_candidates(
            self,
            exclude_owner_id: str | None = None,
            cap: int = 1000,
    ) -> List[EmbeddingRecord]:
        validate_cap(cap)
        query = {"owner_id": {"$ne": exclude_owner_id}} if exclude_owner_id is not None else {}
        with self._guard("find"):
            docs = list(self.collection.find(query).sort(NEWEST_FIRST).limit(cap))
        self.logger.debug(
            "Scanned %d candidates (cap=%d, exclude_owner_id=%s)", len(docs), cap, exclude_owner_id
        )
        return [self._to_record(d) for d in docs]
