"""MongoDB implementation for delongify."""

import logging
from datetime import datetime
from typing import Any, Optional

from pymongo import ASCENDING, AsyncMongoClient
from pymongo.errors import DuplicateKeyError, OperationFailure, PyMongoError

from ..exceptions import DuplicateSlugError, StorageError
from .base import SlugStoreBase
from .models import InsertResult, SlugMapping

# Server error codes for an index that exists with different options
INDEX_CONFLICT_CODES = (85, 86)


class MongoSlugStore(SlugStoreBase):
    """MongoDB implementation of the slug store.

    Expiry is delegated to a TTL index on ``expireAt``; uniqueness of slugs is
    enforced by a unique index on ``slug``.
    """

    TTL_INDEX_NAME = "expireAt_ttl"
    SLUG_INDEX_NAME = "slug_unique"

    def __init__(
        self,
        db_config: str,
        database_name: str = "dlgfy",
        collection_name: str = "slug-url-pairs",
        timeout_ms: int = 5000,
        logger: Optional[logging.Logger] = None,
        client: Optional[Any] = None,
    ):
        """Initialize MongoDB connection.

        Args:
            db_config: MongoDB connection URI
            database_name: Database holding the mapping collection
            collection_name: Collection of slug mappings
            timeout_ms: Server selection timeout in milliseconds
            logger: Optional logger instance
            client: Optional pre-built client (mainly for tests)
        """
        super().__init__(db_config)

        self.logger = logger or logging.getLogger(__name__)
        self.database_name = database_name
        self.collection_name = collection_name

        # The client connects lazily on first operation
        self.client = client or AsyncMongoClient(
            db_config,
            tz_aware=True,
            serverSelectionTimeoutMS=timeout_ms,
        )
        self.collection = self.client[database_name][collection_name]

        self.logger.debug(f"Using collection {database_name}.{collection_name}")

    async def ensure_indexes(self) -> None:
        """Create the TTL and unique slug indexes."""
        await self._create_index(
            [("expireAt", ASCENDING)],
            name=self.TTL_INDEX_NAME,
            expireAfterSeconds=0,
        )
        await self._create_index(
            [("slug", ASCENDING)],
            name=self.SLUG_INDEX_NAME,
            unique=True,
        )
        self.logger.info(f"Indexes ensured on {self.database_name}.{self.collection_name}")

    async def _create_index(self, keys, **kwargs) -> None:
        try:
            await self.collection.create_index(keys, **kwargs)
        except OperationFailure as e:
            if e.code in INDEX_CONFLICT_CODES:
                self.logger.warning(f"Index {kwargs.get('name')} already exists with different options: {e}")
                return
            raise StorageError(f"Failed to create index {kwargs.get('name')}: {e}") from e
        except PyMongoError as e:
            raise StorageError(f"Failed to create index {kwargs.get('name')}: {e}") from e

    async def insert_mapping(self, mapping: SlugMapping) -> InsertResult:
        """Insert a mapping document."""
        try:
            result = await self.collection.insert_one(mapping.to_document())
        except DuplicateKeyError as e:
            raise DuplicateSlugError(mapping.slug) from e
        except PyMongoError as e:
            raise StorageError(f"Failed to insert mapping for slug {mapping.slug}: {e}") from e

        return InsertResult(
            inserted_id=str(result.inserted_id),
            acknowledged=result.acknowledged,
        )

    async def slug_exists(self, slug: str) -> bool:
        """Check if any document uses the slug."""
        try:
            doc = await self.collection.find_one({"slug": slug}, projection={"_id": True})
        except PyMongoError as e:
            raise StorageError(f"Failed to look up slug {slug}: {e}") from e
        return doc is not None

    async def find_active(self, slug: str, now: datetime) -> Optional[SlugMapping]:
        """Find an unexpired mapping.

        The TTL monitor only runs periodically, so expired documents can still
        be present and are filtered here.
        """
        try:
            doc = await self.collection.find_one(
                {"slug": slug, "expireAt": {"$gt": now}},
                projection={"_id": False},
            )
        except PyMongoError as e:
            raise StorageError(f"Failed to look up slug {slug}: {e}") from e

        if doc is None:
            return None
        return SlugMapping.from_document(doc)

    async def close(self) -> None:
        """Close the client."""
        await self.client.close()
        self.logger.info("MongoDB connection closed")

    async def health_check(self) -> bool:
        """Ping the server."""
        try:
            await self.client.admin.command("ping")
            return True
        except PyMongoError as e:
            self.logger.error(f"MongoDB health check failed: {e}")
            return False
