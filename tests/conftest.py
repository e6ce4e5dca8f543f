"""Pytest configuration and fixtures."""

from datetime import datetime, timedelta, timezone
from typing import AsyncGenerator, Iterable

import pytest
from httpx import ASGITransport, AsyncClient

from delongify.config import Config
from delongify.lib.common.logging_config import setup_logging
from delongify.lib.database.memory import InMemorySlugStore
from delongify.lib.service import SlugService
from delongify.lib.slug import SlugGenerator
from delongify.web_app import create_app

TEST_MONGODB_URI = "mongodb://localhost:27017/delongify-test"


class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)


class SequenceSlugGenerator(SlugGenerator):
    """Generator that hands out predetermined slugs."""

    def __init__(self, slugs: Iterable[str]):
        super().__init__()
        self._slugs = iter(slugs)
        self.calls = 0

    def generate(self) -> str:
        self.calls += 1
        return next(self._slugs)


def make_config(**overrides) -> Config:
    """Build a test config; rate limiting is off unless asked for."""
    values = {
        "mongodb_uri": TEST_MONGODB_URI,
        "rate_limit_enabled": False,
    }
    values.update(overrides)
    return Config(**values)


@pytest.fixture
def logger():
    """Create test logger."""
    return setup_logging(level="DEBUG")


@pytest.fixture
def clock():
    """Clock frozen at a fixed instant."""
    return FrozenClock(datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def store(logger):
    """In-memory slug store."""
    return InMemorySlugStore(logger=logger)


@pytest.fixture
def slug_generator():
    """Create slug generator."""
    return SlugGenerator()


@pytest.fixture
def service(store, slug_generator, logger, clock) -> SlugService:
    """Create service instance."""
    return SlugService(
        db=store,
        slug_generator=slug_generator,
        logger=logger,
        clock=clock,
    )


@pytest.fixture
def config() -> Config:
    return make_config()


@pytest.fixture
def app(service, config):
    """Create test FastAPI app."""
    return create_app(service_instance=service, config=config)


@pytest.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    """Create test client."""
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://testserver") as ac:
        yield ac


@pytest.fixture
def sample_urls():
    """Sample URLs for testing."""
    return [
        "https://example.com/test",
        "https://github.com/user/repo",
        "http://stackoverflow.com/questions/123456?tab=votes#answer",
    ]
