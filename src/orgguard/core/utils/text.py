"""Slug helpers for organization URLs."""

import re

from orgguard.core.constants import MAX_SLUG_LENGTH


SLUG_PATTERN = re.compile(r"[a-z0-9]+(?:-[a-z0-9]+)*")


def generate_slug(name: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """Derive a URL slug from an organization name.

    Lowercases, drops anything that is not an ASCII letter, digit, space,
    underscore or hyphen, collapses runs of spaces/hyphens/underscores into one hyphen
    and trims hyphens from both ends.

    Examples:
        >>> generate_slug("Acme Corp")
        'acme-corp'
        >>> generate_slug("  R&D -- Team_42! ")
        'rd-team-42'

    Returns:
        The slug, or an empty string if nothing usable remains
    """
    slug = name.lower().strip()
    slug = re.sub(r"[^a-z0-9\s_-]", "", slug)
    slug = re.sub(r"[-\s_]+", "-", slug)
    return slug[:max_length].strip("-")


def is_valid_slug(slug: str) -> bool:
    """Whether ``slug`` is lowercase alphanumerics separated by single hyphens."""
    return len(slug) <= MAX_SLUG_LENGTH and SLUG_PATTERN.fullmatch(slug) is not None
