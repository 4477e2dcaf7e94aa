"""Pagination and filter parsing for list endpoints."""

import math
from dataclasses import dataclass

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10
MAX_LIMIT = 100
# Keeps (page - 1) * limit inside a signed 64-bit OFFSET.
MAX_PAGE = (2**63 - 1) // MAX_LIMIT


@dataclass(frozen=True)
class PageParams:
    page: int
    limit: int

    @property
    def skip(self) -> int:
        return (self.page - 1) * self.limit


def _parse_positive_int(raw: str | int | None, default: int, maximum: int) -> int:
    """Parse an int leniently; unparsable input gives default, values clamp to [1, maximum]."""
    if raw is None:
        return default
    try:
        value = int(str(raw).strip())
    except ValueError:
        return default
    return min(max(1, value), maximum)


def parse_page_params(page: str | int | None, limit: str | int | None) -> PageParams:
    """Build PageParams from raw query values (page defaults to 1, limit to 10, at most 100)."""
    return PageParams(
        page=_parse_positive_int(page, DEFAULT_PAGE, MAX_PAGE),
        limit=_parse_positive_int(limit, DEFAULT_LIMIT, MAX_LIMIT),
    )


def page_count(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit > 0 else 0


def parse_published(raw: str | bool | None) -> bool | None:
    """
    Tri-state published filter.

    None (absent) means no filter; True or "true" selects published posts;
    any other present value selects unpublished posts.
    """
    if raw is None:
        return None
    if isinstance(raw, bool):
        return raw
    return raw == "true"
