"""Exceptions raised by the delongify core."""


class DelongifyError(Exception):
    """Base class for all delongify errors."""


class InvalidURLError(DelongifyError, ValueError):
    """The submitted URL cannot be parsed or is not reachable."""

    def __init__(self, url: str, reason: str = "Invalid URL"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url!r}")


class StorageError(DelongifyError):
    """The slug store failed to complete an operation."""


class DuplicateSlugError(StorageError):
    """A mapping with the same slug is already stored."""

    def __init__(self, slug: str):
        self.slug = slug
        super().__init__(f"Slug '{slug}' already exists")


class SlugGenerationError(DelongifyError):
    """No free slug was found within the configured number of attempts."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"Unable to generate a unique slug after {attempts} attempts")
