"""Pure helpers for identifiers and slugs."""

import re
from uuid import UUID

_WHITESPACE = re.compile(r"\s+")
_NON_SLUG = re.compile(r"[^\w-]")


def is_uuid(value: str) -> bool:
    """Check whether a string is a well-formed UUID.

    Args:
        value: Candidate identifier.

    Returns:
        True if value parses as a UUID in canonical hyphenated form.
    """
    try:
        parsed = UUID(value)
    except (ValueError, AttributeError, TypeError):
        return False
    return str(parsed) == value.lower()


def slugify(value: str) -> str:
    """Normalize a title or slug into a URL-safe slug.

    Lower-cases, drops apostrophes and joins words with underscores,
    e.g. "Men's Chill Crew Neck" -> "mens_chill_crew_neck". Anything other
    than word characters and hyphens is removed, so the result may be empty.
    """
    slug = value.strip().lower().replace("'", "")
    slug = _WHITESPACE.sub("_", slug)
    return _NON_SLUG.sub("", slug)
