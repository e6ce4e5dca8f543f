"""Database layer for delongify."""

from .base import SlugStoreBase
from .memory import InMemorySlugStore
from .models import InsertResult, SlugMapping
from .mongo import MongoSlugStore

__all__ = [
    "SlugStoreBase",
    "InMemorySlugStore",
    "MongoSlugStore",
    "InsertResult",
    "SlugMapping",
]
