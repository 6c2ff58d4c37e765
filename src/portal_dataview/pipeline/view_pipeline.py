"""
View Pipeline - Main Composer.

The ViewPipeline chains the three stages of a browsable view in a fixed
order and derives aggregate stats from their outputs:

    collection -> search -> category filter -> pagination -> page

The order is part of the contract: `filtered_records` counts what
survives search AND filter, `displayed_records` counts the page window.
Stats are recomputed on every run() and never stored.
"""

from __future__ import annotations

import logging
import time
import uuid
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from portal_dataview.adapters.static_provider import StaticCollectionProvider
from portal_dataview.config.models import (
    FilterConfig,
    PaginationConfig,
    PortalConfig,
    SearchConfig,
    ViewConfig,
)
from portal_dataview.domain.entities import (
    FilterSnapshot,
    SearchSnapshot,
    StageResult,
    ViewResult,
)
from portal_dataview.domain.value_objects import FieldRef, PipelineStats
from portal_dataview.interfaces.audit_logger import AuditLogger
from portal_dataview.interfaces.collection_provider import CollectionProvider
from portal_dataview.interfaces.metrics_collector import MetricsCollector
from portal_dataview.interfaces.scheduler import Scheduler
from portal_dataview.interfaces.view_stage import ViewStage
from portal_dataview.observability.observability_manager import ObservabilityManager
from portal_dataview.stages.base import StageOutput
from portal_dataview.stages.category_filter import CategoryFilterStage, OptionsFactory
from portal_dataview.stages.pagination import PaginationStage
from portal_dataview.stages.search import SearchStage

logger = logging.getLogger(__name__)

SearchOptions = Union[SearchConfig, Mapping[str, Any], None]
FilterOptions = Union[FilterConfig, Mapping[str, Any], None]
PaginationOptions = Union[PaginationConfig, Mapping[str, Any], None]


class ViewPipeline:
    """Search, filter and paginate one collection for one view."""

    def __init__(
        self,
        collection: Optional[Sequence[Any]] = None,
        search: SearchOptions = None,
        filter: FilterOptions = None,
        pagination: PaginationOptions = None,
        *,
        name: str = "default",
        searchable_fields: Optional[Sequence[FieldRef]] = None,
        filter_key: Optional[FieldRef] = None,
        get_filter_options: Optional[OptionsFactory] = None,
        scheduler: Optional[Scheduler] = None,
        audit_logger: Optional[AuditLogger] = None,
        metrics_collector: Optional[MetricsCollector] = None,
    ) -> None:
        """
        Initialize pipeline with its stages.

        Args:
            collection: Records to browse; may be replaced later
            search: SearchConfig or equivalent dict
            filter: FilterConfig or equivalent dict
            pagination: PaginationConfig or equivalent dict
            name: View name used in logs and metric tags
            searchable_fields: Field names or accessors, overrides config
            filter_key: Field name or accessor, overrides config
            get_filter_options: Fixed category list instead of discovery
            scheduler: Timer source for search debouncing
            audit_logger: For the stage audit trail (optional)
            metrics_collector: For stage timings and counts (optional)
        """
        self.name = name
        self._collection: Sequence[Any] = collection if collection is not None else []
        self.search = SearchStage(
            SearchConfig.model_validate(_clamped(search)),
            scheduler=scheduler,
            searchable_fields=searchable_fields,
        )
        self.filter = CategoryFilterStage(
            FilterConfig.model_validate(_as_dict(filter)),
            filter_key=filter_key,
            get_filter_options=get_filter_options,
        )
        self.pagination = PaginationStage(
            PaginationConfig.model_validate(_clamped(pagination))
        )
        self.audit_logger = audit_logger
        self.metrics_collector = metrics_collector
        self.correlation_id = str(uuid.uuid4())

    @classmethod
    def from_config(
        cls,
        config: ViewConfig,
        collection: Optional[Sequence[Any]] = None,
        **kwargs: Any,
    ) -> "ViewPipeline":
        """
        Build a pipeline from a ViewConfig.

        Args:
            config: View configuration
            collection: Records to browse
            **kwargs: Passed through to the constructor (scheduler, loggers)
        """
        return cls(
            collection,
            search=config.search,
            filter=config.filter,
            pagination=config.pagination,
            name=config.name,
            **kwargs,
        )

    @classmethod
    def for_view(
        cls,
        config: PortalConfig,
        view_name: str,
        provider: Optional[CollectionProvider] = None,
        **kwargs: Any,
    ) -> "ViewPipeline":
        """
        Build a configured view over its collection.

        The view's collection is loaded from `provider`, by default the
        static files in config.data_dir. Unless an audit logger or metrics
        collector is passed in, both come from config.observability (none
        when it is disabled).

        Args:
            config: Loaded portal configuration
            view_name: Key of the view in config.views
            provider: Source of collections
            **kwargs: Passed through to the constructor

        Raises:
            CollectionLoadError: If the collection cannot be loaded
        """
        view = config.get_view(view_name)
        if provider is None:
            provider = StaticCollectionProvider(config.data_dir)
        records = provider.load(view.collection or view.name)

        if "audit_logger" not in kwargs or "metrics_collector" not in kwargs:
            obs = ObservabilityManager.from_config(config.observability)
            if obs is not None:
                kwargs.setdefault("audit_logger", obs)
                kwargs.setdefault("metrics_collector", obs)
        return cls.from_config(view, records, **kwargs)

    @property
    def collection(self) -> Sequence[Any]:
        return self._collection

    @property
    def stages(self) -> List[ViewStage]:
        """Stages in execution order."""
        return [self.search, self.filter, self.pagination]

    def set_collection(self, collection: Sequence[Any]) -> None:
        """Replace the records being browsed; the page is re-clamped on next run."""
        self._collection = collection

    # =========================================================================
    # Controls
    # =========================================================================

    def handle_search(self, value: str) -> None:
        self.search.handle_search(value)

    def clear_search(self) -> None:
        self.search.clear_search()

    def handle_filter_change(self, value: str) -> None:
        self.filter.handle_filter_change(value)

    def clear_filter(self) -> None:
        self.filter.clear_filter()

    def go_to_page(self, page: int) -> int:
        """
        Move to a page of the current filtered result, clamped into range.

        Returns:
            The page actually applied
        """
        self.pagination.observe(len(self._narrow(self._collection)))
        applied = self.pagination.go_to_page(page)
        if applied != page:
            self._log_correction("page", page, applied)
        return applied

    def next_page(self) -> int:
        return self.go_to_page(self.pagination.current_page + 1)

    def previous_page(self) -> int:
        return self.go_to_page(self.pagination.current_page - 1)

    def change_page_size(self, new_size: int) -> int:
        """Change the page size; always returns to page 1."""
        applied = self.pagination.change_page_size(new_size)
        if applied != new_size:
            self._log_correction("page_size", new_size, applied)
        return applied

    def reset(self) -> None:
        """Restore every stage's control value to its configured default."""
        for stage in self.stages:
            stage.reset()

    def close(self) -> None:
        """Cancel pending timers. Call when the view goes away."""
        self.search.close()

    # =========================================================================
    # Execution
    # =========================================================================

    def run(self, collection: Optional[Sequence[Any]] = None) -> ViewResult:
        """
        Compute the current view.

        Args:
            collection: Records to use for this run; defaults to the
                pipeline's collection

        Returns:
            ViewResult with the page window, control snapshots and stats
        """
        start_time = time.perf_counter()
        source = collection if collection is not None else self._collection
        if self.audit_logger:
            self.audit_logger.set_correlation_id(self.correlation_id)

        audit_trail: List[StageResult] = []

        search_out = self._execute_stage(self.search, source, audit_trail)
        # Options come from the filter's input, i.e. after search
        filter_options = self.filter.filter_options(search_out.records)
        filter_out = self._execute_stage(self.filter, search_out.records, audit_trail)
        page_out = self._execute_stage(self.pagination, filter_out.records, audit_trail)

        stats = PipelineStats(
            total_records=len(source),
            filtered_records=filter_out.output_count,
            displayed_records=page_out.output_count,
            is_filtered=self.search.is_searching or self.filter.is_filtered,
        )

        if self.metrics_collector:
            self.metrics_collector.record_timing(
                "view_run_seconds",
                time.perf_counter() - start_time,
                {"view": self.name},
            )
            self.metrics_collector.record_gauge(
                "view_filtered_records", stats.filtered_records, {"view": self.name}
            )

        logger.debug(
            f"View '{self.name}': {stats.displayed_records} shown, "
            f"{stats.filtered_records}/{stats.total_records} matched"
        )

        return ViewResult(
            data=list(page_out.records),
            search=SearchSnapshot(
                search_query=self.search.search_query,
                effective_query=self.search.effective_query,
                is_searching=self.search.is_searching,
                is_empty=search_out.is_empty,
                is_debouncing=self.search.is_debouncing,
            ),
            filter=FilterSnapshot(
                filter_key=self.filter.key_label,
                selected_filter=self.filter.selected_filter,
                filter_options=filter_options,
                is_filtered=self.filter.is_filtered,
            ),
            pagination=page_out.page_info,
            stats=stats,
            audit_trail=audit_trail,
        )

    def _narrow(self, collection: Sequence[Any]) -> Sequence[Any]:
        """Search then filter, without pagination or audit."""
        return self.filter.apply(self.search.apply(collection).records).records

    def _execute_stage(
        self,
        stage: ViewStage,
        records: Sequence[Any],
        audit_trail: List[StageResult],
    ) -> StageOutput:
        """Execute a single stage and record it."""
        stage_start = time.perf_counter()

        if self.audit_logger:
            self.audit_logger.log_stage_start(stage.name, len(records))

        output = stage.apply(records)

        stage_duration = time.perf_counter() - stage_start

        if self.audit_logger:
            self.audit_logger.log_stage_end(
                stage.name, output.output_count, stage_duration, dict(output.metadata)
            )

        if self.metrics_collector:
            self.metrics_collector.record_timing(
                "stage_duration_seconds",
                stage_duration,
                {"stage": stage.name, "view": self.name},
            )
            self.metrics_collector.record_count(
                "records_removed_total",
                output.input_count - output.output_count,
                {"stage": stage.name, "view": self.name},
            )

        audit_trail.append(
            StageResult(
                stage_name=stage.name,
                input_count=output.input_count,
                output_count=output.output_count,
                duration_seconds=stage_duration,
                metadata={"active": output.is_active, **output.metadata},
            )
        )
        return output

    def _log_correction(self, control: str, requested: Any, applied: Any) -> None:
        logger.debug(f"View '{self.name}': {control} {requested!r} -> {applied!r}")
        if self.audit_logger:
            self.audit_logger.log_correction(control, requested, applied)


# Control values compose() accepts alongside the stage configuration
_SEARCH_CONTROLS = ("query",)
_FILTER_CONTROLS = ("selected_value", "filter_key", "get_filter_options")
_PAGINATION_CONTROLS = ("page",)


def compose(
    collection: Sequence[Any],
    search: SearchOptions = None,
    filter: FilterOptions = None,
    pagination: PaginationOptions = None,
    **kwargs: Any,
) -> ViewResult:
    """
    Run search -> filter -> paginate once over a collection.

    Each options dict holds the stage's configuration plus its control
    value: `query` for search, `selected_value` for the filter, `page` for
    pagination. `searchable_fields` and `filter_key` may hold accessor
    callables. Numeric settings below their minimum, or not numbers at
    all, are corrected rather than rejected; an unusable page becomes 1.

    Args:
        collection: Records to browse
        search: Search options and query
        filter: Filter options and selected value
        pagination: Pagination options and page
        **kwargs: Passed through to ViewPipeline (loggers, name)

    Returns:
        ViewResult for the given control values

    Example:
        >>> result = compose(
        ...     documents,
        ...     search={"query": "Form", "searchable_fields": ["name"]},
        ...     filter={"filter_key": "category", "selected_value": "Administrative Forms"},
        ...     pagination={"page_size": 10},
        ... )
        >>> result.stats.filtered_records
    """
    search_cfg, search_ctl = _split(search, _SEARCH_CONTROLS)
    filter_cfg, filter_ctl = _split(filter, _FILTER_CONTROLS)
    pagination_cfg, pagination_ctl = _split(pagination, _PAGINATION_CONTROLS)

    searchable_fields = search_cfg.pop("searchable_fields", None)
    if searchable_fields is not None and any(callable(f) for f in searchable_fields):
        kwargs.setdefault("searchable_fields", searchable_fields)
    elif searchable_fields is not None:
        search_cfg["searchable_fields"] = list(searchable_fields)

    if "filter_key" in filter_ctl:
        kwargs.setdefault("filter_key", filter_ctl["filter_key"])
    if "get_filter_options" in filter_ctl:
        kwargs.setdefault("get_filter_options", filter_ctl["get_filter_options"])

    pipeline = ViewPipeline(
        collection,
        search=search_cfg,
        filter=filter_cfg,
        pagination=pagination_cfg,
        **kwargs,
    )
    try:
        if search_ctl.get("query"):
            pipeline.handle_search(search_ctl["query"])
            # One-shot composition applies the query without waiting
            pipeline.search.flush()
        if "selected_value" in filter_ctl:
            pipeline.handle_filter_change(filter_ctl["selected_value"])
        if "page" in pagination_ctl:
            pipeline.go_to_page(_to_int(pagination_ctl["page"], 1))
        return pipeline.run()
    finally:
        pipeline.close()


def _as_dict(options: Union[Any, Mapping[str, Any], None]) -> Dict[str, Any]:
    if options is None:
        return {}
    if hasattr(options, "model_dump"):
        return options.model_dump()
    return dict(options)


def _split(
    options: Union[Any, Mapping[str, Any], None],
    control_keys: Tuple[str, ...],
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Separate control values from stage configuration."""
    config = _as_dict(options)
    controls = {key: config.pop(key) for key in control_keys if key in config}
    return config, controls


# Lowest value each numeric setting accepts; anything below is raised to it
_FLOORS = {
    "min_search_length": 0,
    "debounce_ms": 0,
    "wide_record_field_threshold": 1,
    "page_size": 1,
    "initial_page": 1,
}


def _clamped(options: Union[Any, Mapping[str, Any], None]) -> Dict[str, Any]:
    """Stage options with out-of-range or non-numeric settings corrected."""
    config = _as_dict(options)
    for key, floor in _FLOORS.items():
        if key in config:
            value = _to_int(config[key], floor)
            if value < floor:
                value = floor
            if value != config[key]:
                logger.debug(f"Option {key}={config[key]!r} corrected to {value}")
            config[key] = value
    return config


def _to_int(value: Any, default: int) -> int:
    """int(value), or the default when the value is not a number."""
    try:
        return int(value)
    except (TypeError, ValueError):
        return default
