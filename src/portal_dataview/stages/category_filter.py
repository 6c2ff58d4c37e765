"""
Category Filter Implementation.

Filters records by exact match on one field:
    - Single-value filter with an "all" sentinel (CategoryFilterStage)
    - Multi-value filter where an empty selection means "all"
      (MultiSelectFilterStage)

Filter options are discovered from the stage's input on every call, so
after a search they only list categories that still have records.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, List, Optional, Sequence, Set

from portal_dataview.config.models import FilterConfig
from portal_dataview.domain.value_objects import FieldRef, FilterOption
from portal_dataview.stages.base import StageOutput
from portal_dataview.stages.field_access import field_label, get_field

logger = logging.getLogger(__name__)

# Sentinel filter value meaning "no category restriction"
ALL = "all"

OptionsFactory = Callable[[Sequence[Any]], List[FilterOption]]


def discover_filter_options(
    collection: Sequence[Any],
    filter_key: FieldRef,
    all_label: str = "All",
    get_filter_options: Optional[OptionsFactory] = None,
) -> List[FilterOption]:
    """
    Build the options for a category filter control.

    Args:
        collection: Records the control will filter
        filter_key: Field name or accessor to read categories from
        all_label: Label for the "all" option
        get_filter_options: Caller-supplied options; replaces discovery

    Returns:
        "all" option followed by the categories, sorted
    """
    options = [FilterOption(label=all_label, value=ALL)]

    if get_filter_options is not None:
        options.extend(get_filter_options(collection))
        return options

    options.extend(
        FilterOption(label=value, value=value)
        for value in sorted(unique_string_values(collection, filter_key))
    )
    return options


def unique_string_values(collection: Iterable[Any], filter_key: FieldRef) -> Set[str]:
    """Distinct non-empty string values of a field. Other values are skipped."""
    values: Set[str] = set()
    for item in collection:
        value = get_field(item, filter_key)
        if isinstance(value, str) and value:
            values.add(value)
    return values


def filter_collection(
    collection: Sequence[Any],
    filter_key: FieldRef,
    selected_value: str,
) -> Sequence[Any]:
    """
    Keep records whose field equals the selected value.

    Args:
        collection: Records to filter
        filter_key: Field name or accessor
        selected_value: Category to keep, or "all"

    Returns:
        The input itself for "all", otherwise a new list. Records with a
        missing or non-string field never match a specific category.
    """
    if selected_value == ALL:
        return collection

    return [
        item
        for item in collection
        if _matches(get_field(item, filter_key), selected_value)
    ]


def _matches(value: Any, selected_value: str) -> bool:
    return isinstance(value, str) and value == selected_value


class CategoryFilterStage:
    """Single-value category filter control for one view."""

    def __init__(
        self,
        config: Optional[FilterConfig] = None,
        filter_key: Optional[FieldRef] = None,
        get_filter_options: Optional[OptionsFactory] = None,
    ) -> None:
        """
        Initialize with configuration.

        Args:
            config: Filter configuration
            filter_key: Overrides config.filter_key; may be an accessor
            get_filter_options: Fixed taxonomy instead of discovered options
        """
        self.config = config or FilterConfig()
        self.filter_key: FieldRef = (
            filter_key if filter_key is not None else self.config.filter_key
        )
        self.get_filter_options = get_filter_options
        self._selected = self.config.default_value

    @property
    def name(self) -> str:
        """Unique name of this stage."""
        return "category_filter"

    @property
    def key_label(self) -> str:
        return field_label(self.filter_key)

    @property
    def selected_filter(self) -> str:
        return self._selected

    @property
    def is_filtered(self) -> bool:
        return self._selected != ALL

    @property
    def is_active(self) -> bool:
        return self.is_filtered

    def handle_filter_change(self, value: str) -> None:
        self._selected = value if value else ALL

    def clear_filter(self) -> None:
        self._selected = ALL

    def reset(self) -> None:
        self._selected = self.config.default_value

    def filter_options(self, collection: Sequence[Any]) -> List[FilterOption]:
        """Options for the control, derived from the given input."""
        return discover_filter_options(
            collection,
            self.filter_key,
            all_label=self.config.all_label,
            get_filter_options=self.get_filter_options,
        )

    def apply(self, collection: Sequence[Any]) -> StageOutput:
        """
        Apply the selected category to a collection.

        A selection that matches no option is kept, not reset; it simply
        yields no records.
        """
        records = filter_collection(collection, self.filter_key, self._selected)
        if self.is_filtered and not records and collection:
            logger.debug(
                f"Filter {self.key_label}={self._selected!r} matched none of "
                f"{len(collection)} records"
            )
        return StageOutput(
            records=records,
            input_count=len(collection),
            is_active=self.is_filtered,
            metadata={"filter_key": self.key_label, "selected": self._selected},
        )


class MultiSelectFilterStage:
    """Filter keeping records whose field is any of the selected values."""

    def __init__(
        self,
        filter_key: FieldRef,
        selected: Optional[Iterable[str]] = None,
        all_label: str = "All",
    ) -> None:
        self.filter_key = filter_key
        self.all_label = all_label
        self._selected: Set[str] = set(selected or [])

    @property
    def name(self) -> str:
        """Unique name of this stage."""
        return "multi_select_filter"

    @property
    def selected(self) -> List[str]:
        return sorted(self._selected)

    @property
    def is_filtered(self) -> bool:
        return bool(self._selected)

    @property
    def is_active(self) -> bool:
        return self.is_filtered

    def toggle(self, value: str) -> None:
        if value in self._selected:
            self._selected.discard(value)
        else:
            self._selected.add(value)

    def select(self, values: Iterable[str]) -> None:
        self._selected = {v for v in values if v != ALL}

    def clear(self) -> None:
        self._selected.clear()

    def reset(self) -> None:
        self.clear()

    def filter_options(self, collection: Sequence[Any]) -> List[FilterOption]:
        # No "all" entry: an empty selection already means all
        return discover_filter_options(collection, self.filter_key, self.all_label)[1:]

    def apply(self, collection: Sequence[Any]) -> StageOutput:
        if not self._selected:
            records: Sequence[Any] = collection
        else:
            records = [
                item for item in collection if self._matches_any(item)
            ]
        return StageOutput(
            records=records,
            input_count=len(collection),
            is_active=self.is_filtered,
            metadata={
                "filter_key": field_label(self.filter_key),
                "selected": self.selected,
            },
        )

    def _matches_any(self, item: Any) -> bool:
        value = get_field(item, self.filter_key)
        return isinstance(value, str) and value in self._selected
