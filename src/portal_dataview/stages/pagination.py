"""
Pagination Stage Implementation.

Windows a collection into pages:
    - Page requests are clamped into [1, total_pages], never rejected
    - Changing the page size always returns to page 1
    - Page metadata is recomputed on every call
"""

from __future__ import annotations

import logging
import math
from typing import Any, List, NamedTuple, Optional, Sequence

from portal_dataview.config.models import PaginationConfig
from portal_dataview.domain.value_objects import PageInfo
from portal_dataview.stages.base import StageOutput

logger = logging.getLogger(__name__)


class PageWindow(NamedTuple):
    """One page of a collection plus its metadata."""

    windowed: Sequence[Any]
    page_info: PageInfo


def total_pages_for(total_items: int, items_per_page: int) -> int:
    """Number of pages needed; 0 for an empty collection."""
    return math.ceil(total_items / max(items_per_page, 1))


def clamp_page(page: int, total_pages: int) -> int:
    """Clamp a requested page into [1, total_pages] (1 when there are none)."""
    return max(1, min(page, total_pages))


def paginate(
    collection: Sequence[Any],
    current_page: int = 1,
    items_per_page: int = 10,
    page_size_options: Sequence[int] = (),
) -> PageWindow:
    """
    Cut one page out of a collection.

    Args:
        collection: Records to paginate
        current_page: Requested page, 1-indexed; clamped
        items_per_page: Page size; values below 1 are treated as 1
        page_size_options: Sizes a page-size control offers, copied into
            the PageInfo

    Returns:
        PageWindow with the slice and its PageInfo
    """
    size = max(items_per_page, 1)
    total_items = len(collection)
    total_pages = total_pages_for(total_items, size)
    page = clamp_page(current_page, total_pages)

    offset = (page - 1) * size
    windowed = collection[offset : offset + size]

    page_info = PageInfo(
        current_page=page,
        total_pages=total_pages,
        items_per_page=size,
        total_items=total_items,
        start_index=offset + 1 if total_items else 0,
        end_index=min(page * size, total_items),
        has_next_page=page < total_pages,
        has_previous_page=page > 1,
        page_size_options=list(page_size_options),
    )
    return PageWindow(windowed=windowed, page_info=page_info)


class PaginationStage:
    """Stateful pagination control for one view."""

    def __init__(self, config: Optional[PaginationConfig] = None) -> None:
        """
        Initialize with configuration.

        Args:
            config: Pagination configuration
        """
        self.config = config or PaginationConfig()
        self._current_page = self.config.initial_page
        self._items_per_page = self.config.page_size
        # Length of the collection seen by the last apply(); None before any
        self._total_items: Optional[int] = None

    @property
    def name(self) -> str:
        """Unique name of this stage."""
        return "pagination"

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def items_per_page(self) -> int:
        return self._items_per_page

    @property
    def total_pages(self) -> Optional[int]:
        """Pages in the last collection seen, None before the first apply()."""
        if self._total_items is None:
            return None
        return total_pages_for(self._total_items, self._items_per_page)

    @property
    def is_active(self) -> bool:
        return True

    @property
    def page_size_options(self) -> List[int]:
        """Configured page sizes plus the current one, ascending."""
        sizes = {size for size in self.config.page_size_options if size > 0}
        sizes.add(self._items_per_page)
        return sorted(sizes)

    def observe(self, total_items: int) -> None:
        """Record the size of the collection being paged and re-clamp."""
        self._total_items = max(total_items, 0)
        self._current_page = clamp_page(
            self._current_page, total_pages_for(self._total_items, self._items_per_page)
        )

    def go_to_page(self, page: int) -> int:
        """
        Move to a page, clamped into range.

        Until a collection has been seen (observe() or apply()) the number
        of pages is unknown, so only the lower bound is enforced: page 0
        becomes 1 but page 99 is kept. The next apply() clamps it against
        the collection it windows.

        Args:
            page: Requested page number

        Returns:
            The page actually applied
        """
        total_pages = self.total_pages
        if total_pages is None:
            applied = max(1, page)
        else:
            applied = clamp_page(page, total_pages)

        if applied != page:
            logger.debug(f"Page request {page} corrected to {applied}")
        self._current_page = applied
        return applied

    def next_page(self) -> int:
        return self.go_to_page(self._current_page + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self._current_page - 1)

    def change_page_size(self, new_size: int) -> int:
        """
        Change the page size and return to page 1.

        Args:
            new_size: Requested page size; values below 1 become 1

        Returns:
            The page size actually applied
        """
        applied = max(int(new_size), 1)
        if applied != new_size:
            logger.debug(f"Page size {new_size} corrected to {applied}")
        self._items_per_page = applied
        self._current_page = 1
        return applied

    def reset(self) -> None:
        self._current_page = self.config.initial_page
        self._items_per_page = self.config.page_size

    def apply(self, collection: Sequence[Any]) -> StageOutput:
        """
        Window a collection at the current page.

        The stored page is re-clamped first, so a collection that shrank
        (e.g. after a new search) never leaves the view past its last page.
        """
        self.observe(len(collection))
        window = paginate(
            collection, self._current_page, self._items_per_page, self.page_size_options
        )
        return StageOutput(
            records=window.windowed,
            input_count=len(collection),
            is_active=True,
            page_info=window.page_info,
        )

    def page_info(self, collection: Sequence[Any]) -> PageInfo:
        """PageInfo for a collection at the current page, without storing it."""
        return paginate(
            collection, self._current_page, self._items_per_page, self.page_size_options
        ).page_info
