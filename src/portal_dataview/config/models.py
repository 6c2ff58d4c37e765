"""
Configuration Models - Pydantic Models for Type-Safe Config.

All configuration is validated at load time using Pydantic.
"""

from __future__ import annotations

from typing import Dict, List

from pydantic import BaseModel, Field


class SearchConfig(BaseModel):
    """Configuration for the search stage."""

    searchable_fields: List[str] = Field(default_factory=list)
    min_search_length: int = Field(default=0, ge=0)
    debounce_ms: int = Field(default=0, ge=0)
    # Unscoped searches over records wider than this are logged
    wide_record_field_threshold: int = Field(default=12, ge=1)


class FilterConfig(BaseModel):
    """Configuration for the category filter stage."""

    filter_key: str = "type"
    default_value: str = "all"
    all_label: str = "All"


class PaginationConfig(BaseModel):
    """Configuration for the pagination stage."""

    page_size: int = Field(default=10, gt=0)
    initial_page: int = Field(default=1, ge=1)
    page_size_options: List[int] = Field(default_factory=lambda: [10, 20, 50])


class ViewConfig(BaseModel):
    """Configuration for one browsable view (documents, providers, ...)."""

    name: str = "default"
    collection: str = Field(default="", description="Static collection to load")
    search: SearchConfig = Field(default_factory=SearchConfig)
    filter: FilterConfig = Field(default_factory=FilterConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)


class ObservabilityConfig(BaseModel):
    """Configuration for structured logging."""

    enabled: bool = True
    use_json: bool = True
    service_name: str = "portal_dataview"


class PortalConfig(BaseModel):
    """Root configuration object."""

    version: str = "1.0"
    data_dir: str = "data"
    views: Dict[str, ViewConfig] = Field(default_factory=dict)
    observability: ObservabilityConfig = Field(default_factory=ObservabilityConfig)

    def get_view(self, name: str) -> ViewConfig:
        """
        Get configuration for a view, falling back to defaults.

        A view that is not configured gets default stages named after it.
        """
        view = self.views.get(name)
        if view is None:
            return ViewConfig(name=name, collection=name)
        if view.name == "default":
            return view.model_copy(update={"name": name})
        return view
