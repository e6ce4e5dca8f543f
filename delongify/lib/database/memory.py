"""In-memory slug store, used for tests and local runs without MongoDB."""

import asyncio
import logging
from datetime import datetime
from typing import Dict, Optional

from ..exceptions import DuplicateSlugError
from .base import SlugStoreBase
from .models import InsertResult, SlugMapping


class InMemorySlugStore(SlugStoreBase):
    """Dictionary-backed slug store.

    Mirrors the MongoDB store: slugs are unique, expired mappings linger until
    ``purge_expired`` is called (the equivalent of a TTL sweep) but are never
    returned by ``find_active``.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        super().__init__("memory://")
        self.logger = logger or logging.getLogger(__name__)
        self._mappings: Dict[str, SlugMapping] = {}
        self._next_id = 1
        self._lock = asyncio.Lock()

    async def ensure_indexes(self) -> None:
        pass

    async def insert_mapping(self, mapping: SlugMapping) -> InsertResult:
        async with self._lock:
            if mapping.slug in self._mappings:
                raise DuplicateSlugError(mapping.slug)
            self._mappings[mapping.slug] = mapping
            inserted_id = self._next_id
            self._next_id += 1
        return InsertResult(inserted_id=str(inserted_id))

    async def slug_exists(self, slug: str) -> bool:
        return slug in self._mappings

    async def find_active(self, slug: str, now: datetime) -> Optional[SlugMapping]:
        mapping = self._mappings.get(slug)
        if mapping is None or not mapping.is_active(now):
            return None
        return mapping

    def purge_expired(self, now: datetime) -> int:
        """Drop mappings that expired at or before ``now``.

        Returns:
            Number of mappings removed
        """
        expired = [slug for slug, m in self._mappings.items() if not m.is_active(now)]
        for slug in expired:
            del self._mappings[slug]
        if expired:
            self.logger.debug(f"Purged {len(expired)} expired mappings")
        return len(expired)

    def __len__(self) -> int:
        return len(self._mappings)

    async def close(self) -> None:
        self._mappings.clear()

    async def health_check(self) -> bool:
        return True
