"""
Domain Layer - Portal Records and View Results.

This package contains the core domain model for the data-view pipeline.
All models here are pure Python with no external dependencies
(except Pydantic for validation).

Entities:
    - Document, Provider, Contact: Records in the portal's collections
    - StageResult: Audit entry for one stage run
    - ViewResult: Complete result of a pipeline run

Value Objects:
    - FilterOption: A choice for the category filter control
    - PageInfo: Derived pagination metadata
    - PipelineStats: Total/filtered/displayed counts

Design Principles:
    - Immutable where possible (frozen models)
    - Derived values are recomputed, never cached
    - No infrastructure dependencies
"""

from portal_dataview.domain.value_objects import (
    Collection,
    FieldRef,
    FilterOption,
    PageInfo,
    PipelineStats,
)
from portal_dataview.domain.entities import (
    Contact,
    Document,
    FilterSnapshot,
    Provider,
    SearchSnapshot,
    StageResult,
    ViewResult,
)

__all__ = [
    "Collection",
    "FieldRef",
    "FilterOption",
    "PageInfo",
    "PipelineStats",
    "Contact",
    "Document",
    "FilterSnapshot",
    "Provider",
    "SearchSnapshot",
    "StageResult",
    "ViewResult",
]
