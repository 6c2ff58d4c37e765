"""
Value Objects for Domain Layer.

Value objects are immutable objects that describe a computed view
(page metadata, aggregate counts, filter choices). They are derived on
every pipeline run and never stored.
"""

from __future__ import annotations

from typing import Any, Callable, List, Sequence, Union

from pydantic import BaseModel, Field, computed_field


# =============================================================================
# Type Aliases for improved readability
# =============================================================================

# A field is either a key/attribute name or an accessor callable
FieldAccessor = Callable[[Any], Any]
FieldRef = Union[str, FieldAccessor]

# Ordered, caller-owned collection of records
Collection = Sequence[Any]


class FilterOption(BaseModel):
    """A choice offered by a category filter control."""

    label: str
    value: str

    model_config = {"frozen": True}


class PageInfo(BaseModel):
    """Derived metadata for the current pagination window."""

    current_page: int = Field(default=1, ge=1)
    total_pages: int = Field(default=0, ge=0)
    items_per_page: int = Field(default=10, gt=0)
    total_items: int = Field(default=0, ge=0)
    start_index: int = Field(default=0, ge=0, description="1-indexed, 0 when empty")
    end_index: int = Field(default=0, ge=0, description="1-indexed, inclusive")
    has_next_page: bool = False
    has_previous_page: bool = False
    page_size_options: List[int] = Field(
        default_factory=list, description="Sizes offered by a page-size control"
    )

    model_config = {"frozen": True}


class PipelineStats(BaseModel):
    """Aggregate counts for a composed view."""

    total_records: int = Field(ge=0)
    filtered_records: int = Field(ge=0)
    displayed_records: int = Field(ge=0)
    is_filtered: bool = False

    model_config = {"frozen": True}

    @computed_field
    @property
    def hidden_records(self) -> int:
        """Records removed by search and filter."""
        return self.total_records - self.filtered_records


def option_values(options: List[FilterOption]) -> List[str]:
    """Extract the values from a list of filter options."""
    return [option.value for option in options]
