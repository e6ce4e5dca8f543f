"""Slug generation utilities."""

import secrets
import string


class SlugGenerator:
    """Generate random slugs from a fixed alphabet.

    The alphabet and length are fixed at construction and never change for the
    lifetime of the generator.
    """

    # 64 URL-safe characters
    DEFAULT_ALPHABET = string.ascii_lowercase + string.ascii_uppercase + "1234567890_-"
    DEFAULT_LENGTH = 5

    def __init__(self, length: int = DEFAULT_LENGTH, alphabet: str = DEFAULT_ALPHABET):
        """Initialize slug generator.

        Args:
            length: Number of characters in each slug
            alphabet: Characters a slug is drawn from

        Raises:
            ValueError: If length is not positive or the alphabet is empty or
                contains duplicates
        """
        if length < 1:
            raise ValueError("Slug length must be at least 1")
        if not alphabet:
            raise ValueError("Slug alphabet must not be empty")
        if len(set(alphabet)) != len(alphabet):
            raise ValueError("Slug alphabet must not contain duplicate characters")

        self._length = length
        self._alphabet = alphabet

    @property
    def length(self) -> int:
        return self._length

    @property
    def alphabet(self) -> str:
        return self._alphabet

    def generate(self) -> str:
        """Generate a random slug.

        Every character is picked independently and uniformly using the
        operating system's CSPRNG. Failures of the random source propagate.

        Returns:
            Random slug
        """
        return "".join(secrets.choice(self._alphabet) for _ in range(self._length))

    def is_valid_format(self, slug: str) -> bool:
        """Check if a slug could have been produced by this generator."""
        return len(slug) == self._length and all(c in self._alphabet for c in slug)
