"""
Search Stage Implementation.

Case-insensitive substring search over a collection:
    - Scoped to configured fields, or every string field when none given
    - Bypassed (identity) until the query reaches min_search_length
    - Optional debounce so the view only recomputes on settled input
"""

from __future__ import annotations

import logging
from typing import Any, List, Optional, Sequence

from portal_dataview.adapters.schedulers import ThreadingScheduler
from portal_dataview.config.models import SearchConfig
from portal_dataview.domain.value_objects import FieldRef
from portal_dataview.interfaces.scheduler import Scheduler
from portal_dataview.stages.debounce import DebouncedValue
from portal_dataview.stages.base import StageOutput
from portal_dataview.stages.field_access import (
    count_string_fields,
    get_field,
    iter_string_values,
)

logger = logging.getLogger(__name__)


def search(
    collection: Sequence[Any],
    query: str,
    searchable_fields: Optional[Sequence[FieldRef]] = None,
    min_search_length: int = 0,
) -> Sequence[Any]:
    """
    Filter a collection by case-insensitive substring match.

    Args:
        collection: Records to search
        query: Raw search text
        searchable_fields: Field names or accessors to inspect. None or
            empty means every string-valued field of each record.
        min_search_length: Queries shorter than this are ignored

    Returns:
        The input collection itself when the query is empty or too short,
        otherwise a new list of matching records
    """
    if not query or len(query) < min_search_length:
        return collection

    needle = query.lower()
    fields = list(searchable_fields or [])

    if not fields:
        return [item for item in collection if _any_string_matches(item, needle)]

    return [item for item in collection if _fields_match(item, fields, needle)]


def _any_string_matches(item: Any, needle: str) -> bool:
    return any(needle in value.lower() for value in iter_string_values(item))


def _fields_match(item: Any, fields: List[FieldRef], needle: str) -> bool:
    for field in fields:
        value = get_field(item, field)
        # Non-string values are never coerced
        if isinstance(value, str) and needle in value.lower():
            return True
    return False


class SearchStage:
    """Stateful search control for one view."""

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        scheduler: Optional[Scheduler] = None,
        searchable_fields: Optional[Sequence[FieldRef]] = None,
    ) -> None:
        """
        Initialize with configuration.

        Args:
            config: Search configuration
            scheduler: Timer source for debouncing (threading timers if None)
            searchable_fields: Overrides config.searchable_fields, and may
                contain accessor callables
        """
        self.config = config or SearchConfig()
        if searchable_fields is not None:
            self.searchable_fields: List[FieldRef] = list(searchable_fields)
        else:
            self.searchable_fields = list(self.config.searchable_fields)

        self._query: DebouncedValue[str] = DebouncedValue(
            "", self.config.debounce_ms, scheduler or ThreadingScheduler()
        )
        self._warned_wide = False

    @property
    def name(self) -> str:
        """Unique name of this stage."""
        return "search"

    @property
    def search_query(self) -> str:
        """Raw query as typed."""
        return self._query.value

    @property
    def effective_query(self) -> str:
        """Query the stage actually filters with (settled when debounced)."""
        return self._query.settled

    @property
    def is_searching(self) -> bool:
        return len(self.search_query) > 0

    @property
    def is_debouncing(self) -> bool:
        return self._query.debouncing

    @property
    def is_active(self) -> bool:
        query = self.effective_query
        return bool(query) and len(query) >= self.config.min_search_length

    def handle_search(self, value: str) -> None:
        """Record new input; the effective query follows after the debounce."""
        self._query.set(value or "")

    def clear_search(self) -> None:
        self._query.reset("")

    def reset(self) -> None:
        self.clear_search()

    def flush(self) -> None:
        """Apply a pending debounced query immediately."""
        self._query.flush()

    def close(self) -> None:
        """Cancel pending timers. Call when the view goes away."""
        self._query.cancel()

    def apply(self, collection: Sequence[Any]) -> StageOutput:
        """
        Apply search to a collection using the effective query.

        Args:
            collection: Records to search

        Returns:
            StageOutput with matching records
        """
        query = self.effective_query
        if not self.searchable_fields and self.is_active:
            self._note_wide_records(collection)

        records = search(
            collection,
            query,
            self.searchable_fields,
            self.config.min_search_length,
        )
        return StageOutput(
            records=records,
            input_count=len(collection),
            is_active=self.is_active,
            metadata={"query": query},
        )

    def _note_wide_records(self, collection: Sequence[Any]) -> None:
        if self._warned_wide or not collection:
            return
        width = count_string_fields(collection[0])
        if width > self.config.wide_record_field_threshold:
            logger.debug(
                f"Unscoped search over records with {width} string fields; "
                f"configure searchable_fields to narrow it"
            )
            self._warned_wide = True
