"""
Blog API: Offset Pagination
===========================

What:  Turns raw `page` / `limit` query strings into a row window and builds
       the `pagination` object of list responses.
How:   Pure functions; no I/O.

Parsing is best-effort and never raises:
    "3"      → 3
    "3abc"   → 3      (leading integer wins)
    "2.5"    → 2
    "abc"    → default
    "0", "-4" → default (pages and limits start at 1)
    None     → default

Window arithmetic for page p and limit l:
    start_index = (p - 1) * l
    end_index   = p * l
    next exists when end_index < total
    prev exists when start_index > 0
"""

import re
from dataclasses import dataclass
from typing import Optional

from blog_api.schemas.blog import PageLink, Pagination

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 10

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def parse_positive_int(raw: Optional[str], default: int) -> int:
    """Parses the leading integer of `raw`; falls back to `default` if absent or < 1."""
    if raw is None:
        return default
    match = _LEADING_INT.match(raw)
    if not match:
        return default
    value = int(match.group(1))
    return value if value >= 1 else default


@dataclass(frozen=True)
class PageWindow:
    """The slice of rows one list request asks for."""

    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT

    @classmethod
    def from_query(cls, page: Optional[str], limit: Optional[str]) -> "PageWindow":
        return cls(
            page=parse_positive_int(page, DEFAULT_PAGE),
            limit=parse_positive_int(limit, DEFAULT_LIMIT),
        )

    @property
    def start_index(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def end_index(self) -> int:
        return self.page * self.limit


def build_pagination(window: PageWindow, total_count: int) -> Pagination:
    """Links to the neighbouring pages of `window` given `total_count` rows."""
    pagination = Pagination()
    if window.end_index < total_count:
        pagination.next = PageLink(page=window.page + 1, limit=window.limit)
    if window.start_index > 0:
        pagination.prev = PageLink(page=window.page - 1, limit=window.limit)
    return pagination
