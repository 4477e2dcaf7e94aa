"""Derive URL slugs from post titles."""

import re

# Any run of characters outside a-z/0-9 collapses to one hyphen. Non-ASCII
# letters count as "outside" and are not transliterated.
_NON_SLUG_RUN = re.compile(r"[^a-z0-9]+")
_EDGE_HYPHEN = re.compile(r"(^-|-$)")


def slugify(title: str) -> str:
    """
    Lowercase the title, collapse non-alphanumeric runs to '-', strip edge hyphens.

    "Test Post!!! With Special @Characters#" -> "test-post-with-special-characters"
    """
    slug = _NON_SLUG_RUN.sub("-", title.lower())
    return _EDGE_HYPHEN.sub("", slug)
