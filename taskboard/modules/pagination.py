"""
Pagination

Page request coercion and the count-then-fetch listing flow shared by the
user and task listings.
"""
import logging
import math
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Dict, Generic, List, Optional, TypeVar

logger = logging.getLogger("taskboard.pagination")

DEFAULT_PAGE_NUMBER = 1
DEFAULT_PAGE_SIZE = 5

T = TypeVar("T")


def coerce_positive_int(value: Any, default: int) -> int:
    """Parse value as a positive integer, falling back to default."""
    if value is None or isinstance(value, bool):
        return default
    try:
        number = int(str(value).strip())
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


@dataclass(frozen=True)
class PageRequest:
    page_number: int = DEFAULT_PAGE_NUMBER
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def coerce(
        cls,
        page_number: Any = None,
        page_size: Any = None,
        default_page_size: int = DEFAULT_PAGE_SIZE,
    ) -> "PageRequest":
        return cls(
            page_number=coerce_positive_int(page_number, DEFAULT_PAGE_NUMBER),
            page_size=coerce_positive_int(page_size, default_page_size),
        )

    @property
    def offset(self) -> int:
        return (self.page_number - 1) * self.page_size

    @property
    def limit(self) -> int:
        return self.page_size


@dataclass
class Page(Generic[T]):
    items: List[T]
    count: int
    no_of_pages: int
    current_page: int

    @property
    def metadata(self) -> Dict[str, int]:
        return {
            "count": self.count,
            "noOfPages": self.no_of_pages,
            "currentPage": self.current_page,
        }

    def to_dict(self, serialize: Optional[Callable[[T], Any]] = None) -> Dict[str, Any]:
        items = [serialize(item) for item in self.items] if serialize else list(self.items)
        return {"items": items, "metadata": self.metadata}


async def paginate(
    page: PageRequest,
    count: Callable[[], Awaitable[int]],
    fetch: Callable[[int, int], Awaitable[List[T]]],
) -> Page[T]:
    """
    Run a count-then-fetch listing.

    Args:
        page: Coerced page request
        count: Returns the number of rows matching the filter
        fetch: Called as fetch(limit, offset) for the requested page

    Returns:
        Page with items and {count, noOfPages, currentPage} metadata. When the
        page size exceeds the total or the page number is past the last page,
        items is empty and fetch is never called.
    """
    total = await count()
    no_of_pages = math.ceil(total / page.page_size)

    if page.page_size > total or page.page_number > no_of_pages:
        logger.debug(
            f"[paginate] empty page: count={total}, size={page.page_size}, "
            f"page={page.page_number}, pages={no_of_pages}"
        )
        return Page(items=[], count=total, no_of_pages=no_of_pages, current_page=page.page_number)

    items = await fetch(page.limit, page.offset)
    return Page(items=items, count=total, no_of_pages=no_of_pages, current_page=page.page_number)
