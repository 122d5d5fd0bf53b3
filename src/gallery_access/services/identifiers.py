"""Generators for gallery slugs, access codes and passwords."""

import re
import secrets
from dataclasses import dataclass
from typing import Protocol

# 0/O and 1/I/l are left out so codes can be read aloud or copied by hand.
ACCESS_CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
PASSWORD_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZabcdefghjkmnpqrstuvwxyz23456789"

DEFAULT_CODE_LENGTH = 8
FALLBACK_SLUG = "gallery"

_NON_ALPHANUMERIC = re.compile(r"[^a-z0-9]+")


class SlugRepository(Protocol):
    """Persistence interface for slug lookups."""

    def slug_exists(self, slug: str) -> bool:
        """Return true when a gallery already uses the slug."""


def slugify(name_a: str, name_b: str) -> str:
    """Build the base slug for a pair of names."""
    joined = f"{name_a}-{name_b}".lower()
    return _NON_ALPHANUMERIC.sub("-", joined).strip("-")


def generate_access_code(length: int = DEFAULT_CODE_LENGTH) -> str:
    """Return a random access code drawn from the unambiguous alphabet."""
    return _random_string(ACCESS_CODE_ALPHABET, length)


def generate_random_password(length: int = DEFAULT_CODE_LENGTH) -> str:
    """Return a random fallback password with mixed case."""
    return _random_string(PASSWORD_ALPHABET, length)


def generate_client_name(name_a: str, name_b: str) -> str:
    """Return the display name for a couple."""
    return f"{name_a} & {name_b}"


def _random_string(alphabet: str, length: int) -> str:
    if length <= 0:
        raise ValueError("length must be positive")
    return "".join(secrets.choice(alphabet) for _ in range(length))


@dataclass
class IdentifierService:
    """Generates identifiers that need a uniqueness check against the store."""

    repository: SlugRepository

    def generate_unique_slug(self, name_a: str, name_b: str) -> str:
        """Return a slug that no stored gallery used at the time of the check.

        The check is not atomic with the later insert; the unique index on
        ``gallery_slug`` remains the final arbiter.
        """
        base = slugify(name_a, name_b) or FALLBACK_SLUG
        slug = base
        counter = 1
        while self.repository.slug_exists(slug):
            slug = f"{base}-{counter}"
            counter += 1
        return slug
