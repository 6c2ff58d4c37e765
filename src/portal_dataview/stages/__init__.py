"""
Stages Package - The Search, Filter and Pagination Steps.

Each stage offers a pure function (usable on its own) and a stateful
stage class holding the control value a view mutates.

Stages:
    - SearchStage / search(): Case-insensitive substring search
    - CategoryFilterStage / filter_collection(): "all"-or-one category
    - MultiSelectFilterStage: Any-of category filter
    - PaginationStage / paginate(): Clamped page windows

Design Principles:
    - Each stage is independently testable
    - Configuration injected via constructor
    - Total functions: clamp or no-op, never raise on input
"""

from portal_dataview.stages.base import StageOutput
from portal_dataview.stages.category_filter import (
    ALL,
    CategoryFilterStage,
    MultiSelectFilterStage,
    discover_filter_options,
    filter_collection,
)
from portal_dataview.stages.debounce import DebouncedValue, Debouncer
from portal_dataview.stages.pagination import PageWindow, PaginationStage, paginate
from portal_dataview.stages.search import SearchStage, search

__all__ = [
    "ALL",
    "CategoryFilterStage",
    "DebouncedValue",
    "Debouncer",
    "MultiSelectFilterStage",
    "PageWindow",
    "PaginationStage",
    "SearchStage",
    "StageOutput",
    "discover_filter_options",
    "filter_collection",
    "paginate",
    "search",
]
