"""
Core Domain Entities.

This module defines the records the portal browses and the result of
running a view. The pipeline itself is generic over the record type; the
record models here are what the portal's static collections contain.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from portal_dataview.domain.value_objects import (
    FilterOption,
    PageInfo,
    PipelineStats,
)


class Document(BaseModel):
    """A file in the document hub (form, consent, policy)."""

    name: str = Field(..., description="Display name, usually the file name")
    path: str = Field(..., description="Location on the external file host")
    category: Optional[str] = Field(default=None, description="Document category")
    type: Optional[str] = Field(default=None, description="File type (pdf, form)")
    size: Optional[str] = Field(default=None, description="Human readable size")
    last_updated: Optional[str] = Field(default=None, alias="lastUpdated")
    description: Optional[str] = None
    department: Optional[str] = None
    tags: List[str] = Field(default_factory=list)

    model_config = {"frozen": True, "populate_by_name": True}


class Provider(BaseModel):
    """A referring provider in the provider directory."""

    name: str
    specialty: Optional[str] = None
    department: Optional[str] = None
    location: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    npi: Optional[str] = Field(default=None, description="National Provider Identifier")
    affiliations: List[str] = Field(default_factory=list)

    model_config = {"frozen": True}


class Contact(BaseModel):
    """An entry in the department contact directory."""

    name: str
    type: Optional[str] = Field(default=None, description="Contact kind (staff, location)")
    department: Optional[str] = None
    role: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    extension: Optional[str] = None

    model_config = {"frozen": True}


class StageResult(BaseModel):
    """Result of a single view stage for the audit trail."""

    stage_name: str
    input_count: int
    output_count: int
    duration_seconds: float = 0.0
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def reduction_ratio(self) -> float:
        """Calculate reduction ratio (0.0 = no reduction, 1.0 = all removed)."""
        if self.input_count == 0:
            return 0.0
        return 1.0 - (self.output_count / self.input_count)


class SearchSnapshot(BaseModel):
    """Search control state at the time a view was computed."""

    search_query: str = ""
    effective_query: str = ""
    is_searching: bool = False
    is_empty: bool = False
    is_debouncing: bool = False


class FilterSnapshot(BaseModel):
    """Category filter control state at the time a view was computed."""

    filter_key: str
    selected_filter: str
    filter_options: List[FilterOption] = Field(default_factory=list)
    is_filtered: bool = False


class ViewResult(BaseModel):
    """Complete output of one pipeline run: the window plus its metadata."""

    data: List[Any] = Field(default_factory=list)
    search: SearchSnapshot
    filter: FilterSnapshot
    pagination: PageInfo
    stats: PipelineStats
    audit_trail: List[StageResult] = Field(default_factory=list)

    model_config = {"arbitrary_types_allowed": True}

    @property
    def filter_options(self) -> List[FilterOption]:
        """Options the filter control should offer for this result."""
        return self.filter.filter_options
