"""Business logic service for delongify."""

import logging
from contextlib import aclosing
from datetime import datetime, timedelta, timezone
from typing import AsyncIterator, Callable, Dict, Optional, Tuple

from .common.validators import normalize_url
from .database.base import SlugStoreBase
from .database.models import InsertResult, SlugMapping
from .exceptions import DuplicateSlugError, InvalidURLError, SlugGenerationError
from .liveness import URLLivenessChecker
from .slug import SlugGenerator

DEFAULT_TTL_SECONDS = 5 * 24 * 60 * 60


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SlugService:
    """Service layer for creating and resolving slug mappings."""

    def __init__(
        self,
        db: SlugStoreBase,
        slug_generator: Optional[SlugGenerator] = None,
        logger: Optional[logging.Logger] = None,
        liveness_checker: Optional[URLLivenessChecker] = None,
        default_scheme: str = "https",
        ttl_seconds: int = DEFAULT_TTL_SECONDS,
        max_attempts: int = 100,
        clock: Callable[[], datetime] = utcnow,
    ):
        """Initialize slug service.

        Args:
            db: Slug store
            slug_generator: Optional slug generator
            logger: Optional logger
            liveness_checker: When set, URLs must answer a GET before they
                are shortened
            default_scheme: Scheme given to URLs without http or https
            ttl_seconds: How long a mapping stays valid
            max_attempts: Slug candidates tried before giving up
            clock: Returns the current timezone-aware time
        """
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")

        self.db = db
        self.generator = slug_generator or SlugGenerator()
        self.logger = logger or logging.getLogger(__name__)
        self.liveness_checker = liveness_checker
        self.default_scheme = default_scheme
        self.ttl = timedelta(seconds=ttl_seconds)
        self.max_attempts = max_attempts
        self.clock = clock

    async def create_slug_url_pair(self, raw_url: str) -> Tuple[InsertResult, SlugMapping]:
        """Shorten a URL.

        Args:
            raw_url: URL as submitted by the client

        Returns:
            Tuple of (insert acknowledgment, stored mapping)

        Raises:
            InvalidURLError: If the URL is malformed or unreachable
            SlugGenerationError: If no free slug was found
            StorageError: If the store fails
        """
        url = normalize_url(raw_url, self.default_scheme)

        if self.liveness_checker is not None:
            if not await self.liveness_checker.is_reachable(url):
                raise InvalidURLError(url, "URL is not reachable")

        expire_at = self.clock() + self.ttl

        # A slug can pass the existence check and still be taken by a
        # concurrent insert; the unique index reports that as a duplicate.
        async with aclosing(self._free_slugs()) as candidates:
            async for slug in candidates:
                mapping = SlugMapping(slug=slug, url=url, expire_at=expire_at)
                try:
                    result = await self.db.insert_mapping(mapping)
                except DuplicateSlugError:
                    self.logger.info(f"Slug {slug} was taken concurrently, retrying")
                    continue

                self.logger.info(f"Created slug mapping: {slug} -> {url} (expires {expire_at.isoformat()})")
                return result, mapping

        raise SlugGenerationError(self.max_attempts)

    async def generate_unique_slug(self) -> str:
        """Generate a slug that no stored mapping uses.

        Raises:
            SlugGenerationError: If every attempt collided
        """
        async with aclosing(self._free_slugs()) as candidates:
            async for slug in candidates:
                return slug
        raise SlugGenerationError(self.max_attempts)

    async def _free_slugs(self) -> AsyncIterator[str]:
        """Yield slugs that are not stored, stopping once the attempt budget is spent."""
        for attempt in range(1, self.max_attempts + 1):
            slug = self.generator.generate()
            if await self.db.slug_exists(slug):
                self.logger.debug(f"Slug collision on attempt {attempt}: {slug}")
                continue
            yield slug

        self.logger.error(f"No free slug after {self.max_attempts} attempts")

    async def resolve_slug(self, slug: str) -> Optional[str]:
        """Get the URL a slug redirects to.

        Args:
            slug: The slug to look up

        Returns:
            The stored URL, or None if unknown or expired
        """
        mapping = await self.db.find_active(slug, self.clock())

        if mapping is None:
            self.logger.warning(f"Slug not found: {slug}")
            return None

        self.logger.info(f"Successful redirection of {slug} to {mapping.url}")
        return mapping.url

    async def health_check(self) -> Dict[str, bool]:
        """Perform health check.

        Returns:
            Dictionary with health status
        """
        db_healthy = await self.db.health_check()
        return {
            "database": db_healthy,
            "overall": db_healthy,
        }

    async def close(self) -> None:
        """Close service connections."""
        await self.db.close()
