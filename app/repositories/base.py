"""Shared pieces of the session-bound repositories.

Repositories only read and stage changes on the session they were given.
Committing is the caller's job (see ``app.db.database.transaction``).

``Page.has_prev`` and ``Page.has_next`` serve the tutorial student paging;
the post API builds its navigation with ``PageResponse`` instead.
"""
import math
from dataclasses import dataclass
from typing import Generic, List, TypeVar

T = TypeVar("T")


@dataclass
class Page(Generic[T]):
    """A slice of an ordered result set plus what is needed to navigate it"""
    items: List[T]
    total: int
    page: int
    size: int

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.size) if self.size else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_prev(self) -> bool:
        return self.page > 1
