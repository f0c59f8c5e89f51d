"""MongoDB store implementation.

One collection per table. Records are stored as-is (datetimes as BSON
dates); Mongo's own ``_id`` is never exposed and only used to return
records in insertion order.

Transactions use client sessions and therefore need a replica set (or a
sharded cluster), as MongoDB requires.
"""

from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar
import logging

from motor.motor_asyncio import (
    AsyncIOMotorClient,
    AsyncIOMotorClientSession,
    AsyncIOMotorCollection,
)
from pymongo import ASCENDING
from pymongo.errors import DuplicateKeyError

from domain.shared.ports.store import (
    Criteria,
    DuplicateRecordError,
    IStore,
    Record,
    UniqueFields,
)
from infrastructure.config import get_mongodb_database, get_mongodb_uri

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Never return Mongo's ObjectId to the domain
_PROJECTION = {"_id": 0}
_INSERTION_ORDER = [("_id", ASCENDING)]


class MongoStore:
    """
    MongoDB implementation of IStore port.

    Every statement is logged and re-raised on failure. When bound to a
    client session (inside with_transaction) every statement joins that
    session's transaction.

    Example:
        >>> store = MongoStore(unique_fields={"users": ("username", "email")})
        >>> await store.ensure_indexes()
        >>> await store.insert("meals", meal.to_record())
    """

    def __init__(
        self,
        client: Optional[AsyncIOMotorClient] = None,
        database_name: Optional[str] = None,
        unique_fields: Optional[UniqueFields] = None,
        session: Optional[AsyncIOMotorClientSession] = None,
    ) -> None:
        """
        Initialize store with optional client.

        Args:
            client: Motor client (if None, creates one from config)
            database_name: Database (if None, read from config)
            unique_fields: Table -> fields backed by unique indexes
            session: Client session to bind statements to
        """
        if client is None:
            uri = get_mongodb_uri()
            if not uri:
                raise ValueError(
                    "MONGODB_URI not configured. "
                    "Set MONGODB_URI, MONGODB_USER and MONGODB_PASSWORD environment variables."
                )
            client = AsyncIOMotorClient(uri, tz_aware=True)

        self._client = client
        self._database_name = database_name or get_mongodb_database()
        self._db = client[self._database_name]
        self._unique_fields: UniqueFields = dict(unique_fields or {})
        self._session = session

    def _collection(self, table: str) -> AsyncIOMotorCollection:
        return self._db[table]

    async def ensure_indexes(self) -> None:
        """Create unique indexes and session_token lookup indexes."""
        for table, fields in self._unique_fields.items():
            for field in fields:
                await self._collection(table).create_index(field, unique=True)
        for table in ("meals", "users"):
            await self._collection(table).create_index("session_token")

        logger.info(
            "MongoDB indexes ensured",
            extra={"database": self._database_name, "unique_fields": self._unique_fields},
        )

    async def insert(self, table: str, record: Record) -> str:
        # insert_one adds _id to the document it is given
        document = dict(record)
        try:
            await self._collection(table).insert_one(document, session=self._session)
        except DuplicateKeyError as e:
            field, value = self._duplicate_key(table, e, record)
            raise DuplicateRecordError(table, field, value) from e
        except Exception as e:
            logger.error("Error in insert", extra={"collection": table, "error": str(e)})
            raise
        return str(record["id"])

    async def select_where(self, table: str, criteria: Criteria) -> List[Record]:
        try:
            cursor = self._collection(table).find(
                criteria, _PROJECTION, session=self._session
            ).sort(_INSERTION_ORDER)
            return await cursor.to_list(length=None)
        except Exception as e:
            logger.error(
                "Error in select_where",
                extra={"collection": table, "criteria": list(criteria), "error": str(e)},
            )
            raise

    async def select_one_where(self, table: str, criteria: Criteria) -> Optional[Record]:
        try:
            return await self._collection(table).find_one(
                criteria, _PROJECTION, sort=_INSERTION_ORDER, session=self._session
            )
        except Exception as e:
            logger.error(
                "Error in select_one_where",
                extra={"collection": table, "criteria": list(criteria), "error": str(e)},
            )
            raise

    async def update_where(self, table: str, criteria: Criteria, patch: Record) -> int:
        try:
            result = await self._collection(table).update_many(
                criteria, {"$set": patch}, session=self._session
            )
        except DuplicateKeyError as e:
            field, value = self._duplicate_key(table, e, patch)
            raise DuplicateRecordError(table, field, value) from e
        except Exception as e:
            logger.error(
                "Error in update_where",
                extra={"collection": table, "criteria": list(criteria), "error": str(e)},
            )
            raise
        # matched, not modified: rewriting identical values still counts
        return result.matched_count

    async def delete_where(self, table: str, criteria: Criteria) -> int:
        try:
            result = await self._collection(table).delete_many(criteria, session=self._session)
        except Exception as e:
            logger.error(
                "Error in delete_where",
                extra={"collection": table, "criteria": list(criteria), "error": str(e)},
            )
            raise
        return result.deleted_count

    async def with_transaction(self, fn: Callable[[IStore], Awaitable[T]]) -> T:
        """Run fn inside a client-session transaction."""
        if self._session is not None:
            # Already inside a transaction: join it
            return await fn(self)

        async with await self._client.start_session() as session:
            async with session.start_transaction():
                bound = MongoStore(
                    client=self._client,
                    database_name=self._database_name,
                    unique_fields=self._unique_fields,
                    session=session,
                )
                return await fn(bound)

    def close(self) -> None:
        """Close MongoDB connection."""
        self._client.close()
        logger.info("Closed MongoDB connection", extra={"database": self._database_name})

    def _duplicate_key(self, table: str, error: DuplicateKeyError, values: Record) -> "tuple[str, Any]":
        key_value: Dict[str, Any] = (error.details or {}).get("keyValue") or {}
        if key_value:
            field = next(iter(key_value))
            return field, key_value[field]
        for field in self._unique_fields.get(table, ()):
            if field in values:
                return field, values[field]
        return "id", values.get("id")
