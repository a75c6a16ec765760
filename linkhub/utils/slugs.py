"""Slug helpers for workspace identifiers."""
import re
import unicodedata

VALID_SLUG_RE = re.compile(r'^[a-z0-9\-]+$')


def slugify(value: str) -> str:
    """Generate a URL-safe slug (lower-cased, hyphenated)."""
    # Normalize unicode characters
    slug = unicodedata.normalize('NFKD', value)
    slug = slug.encode('ascii', 'ignore').decode('ascii')

    # Convert to lowercase and replace spaces/special chars with hyphens
    slug = slug.lower()
    slug = re.sub(r'[^a-z0-9]+', '-', slug)
    return slug.strip('-')


def is_valid_slug(slug: str) -> bool:
    return bool(slug) and VALID_SLUG_RE.match(slug) is not None
