"""Data models for delongify."""

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Dict


@dataclass(frozen=True)
class SlugMapping:
    """A slug and the URL it redirects to, valid until ``expire_at``."""

    slug: str
    url: str
    expire_at: datetime

    def is_active(self, now: datetime) -> bool:
        """Check whether the mapping has not yet expired at ``now``."""
        return self.expire_at > now

    def to_document(self) -> Dict[str, Any]:
        """Convert to the stored document layout."""
        return {
            "slug": self.slug,
            "url": self.url,
            "expireAt": self.expire_at,
        }

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dictionary."""
        return {
            "slug": self.slug,
            "url": self.url,
            "expireAt": self.expire_at.isoformat(),
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "SlugMapping":
        """Create from a stored document."""
        expire_at = doc["expireAt"]
        if isinstance(expire_at, str):
            expire_at = datetime.fromisoformat(expire_at)
        # BSON dates come back naive unless the client is tz aware
        if expire_at.tzinfo is None:
            expire_at = expire_at.replace(tzinfo=timezone.utc)
        return cls(slug=doc["slug"], url=doc["url"], expire_at=expire_at)


@dataclass(frozen=True)
class InsertResult:
    """Acknowledgment returned by the store for an inserted mapping."""

    inserted_id: str
    acknowledged: bool = True

    def to_dict(self) -> Dict[str, Any]:
        return {
            "insertedId": self.inserted_id,
            "acknowledged": self.acknowledged,
        }
