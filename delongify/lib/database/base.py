"""Abstract base class for slug store implementations."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from .models import InsertResult, SlugMapping


class SlugStoreBase(ABC):
    """Abstract base class for slug mapping persistence."""

    def __init__(self, db_config: str):
        """Initialize store.

        Args:
            db_config: Database connection string
        """
        self.db_config = db_config

    @abstractmethod
    async def ensure_indexes(self) -> None:
        """Create the expiry and slug indexes if they are missing.

        Must be idempotent: existing indexes are not an error.
        """
        pass

    @abstractmethod
    async def insert_mapping(self, mapping: SlugMapping) -> InsertResult:
        """Persist a new slug mapping.

        Args:
            mapping: The mapping to store

        Returns:
            Insert acknowledgment

        Raises:
            DuplicateSlugError: If a mapping with the same slug is stored
            StorageError: If the write fails
        """
        pass

    @abstractmethod
    async def slug_exists(self, slug: str) -> bool:
        """Check if any stored mapping uses the slug.

        Expired mappings that have not been removed yet still count.

        Args:
            slug: The slug to check

        Returns:
            True if exists, False otherwise
        """
        pass

    @abstractmethod
    async def find_active(self, slug: str, now: datetime) -> Optional[SlugMapping]:
        """Find the mapping for a slug that is still valid at ``now``.

        Args:
            slug: The slug to look up
            now: Current time (timezone aware)

        Returns:
            The mapping if found and not expired, None otherwise
        """
        pass

    @abstractmethod
    async def close(self) -> None:
        """Close database connections."""
        pass

    @abstractmethod
    async def health_check(self) -> bool:
        """Check if database is healthy.

        Returns:
            True if healthy, False otherwise
        """
        pass
