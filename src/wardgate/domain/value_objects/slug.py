"""Slug validation for permission and role identifiers."""

import re

from wardgate.domain.exceptions import ValidationError

_SLUG_RE = re.compile(r"^[a-z0-9][a-z0-9_.-]{0,99}$")


def canonical_slug(value: str) -> str:
    """Lookup form of a slug: trimmed and lower-cased, never rejected."""
    return value.strip().lower()


def normalize_slug(value: str) -> str:
    """Lower-case and validate a slug."""
    slug = canonical_slug(value)
    if not _SLUG_RE.match(slug):
        raise ValidationError(f"Invalid slug: {value!r}")
    return slug
