import re

_WHITESPACE = re.compile(r"\s+")
_DISALLOWED = re.compile(r"[^a-z0-9\-]")


def normalize(name: str) -> str:
    """
    Derive a URL-safe slug from a human-readable name.

    "Book Club" -> "book-club", "  Sci-Fi!! Fans  " -> "sci-fi-fans".
    Slugs are not unique; two names may normalize to the same value.
    """
    slug = _WHITESPACE.sub("-", name.lower().strip())
    return _DISALLOWED.sub("", slug)
