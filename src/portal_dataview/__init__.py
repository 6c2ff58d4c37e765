"""
Portal Data-View - Search, Filter and Pagination for Portal Collections.

Turns an in-memory collection of portal records (documents, providers,
contacts) into the page a table or list displays. Each view runs the same
three stages in a fixed order and reports aggregate stats for the result.

Architecture:
    - Hexagonal Architecture (Ports & Adapters)
    - Dependency Injection for schedulers, loggers and metrics
    - Stages are independently testable and total (never raise on input)
    - Configuration-driven views via YAML

Main Components:
    - domain: Result models (PageInfo, PipelineStats, ViewResult) and records
    - interfaces: Protocols for stages, schedulers, loggers, providers
    - stages: Search (with debouncing), category filter and pagination
    - pipeline: The ViewPipeline composer and compose()
    - adapters: Schedulers, console logger, metrics, static fixture loader
    - config: Configuration models and loaders
    - export: CSV/JSON export of the current view

Example:
    >>> from portal_dataview.pipeline import compose
    >>> result = compose(documents, search={"query": "form"}, pagination={"page_size": 10})
    >>> print(f"Showing {result.stats.displayed_records} of {result.stats.filtered_records}")

"""

import logging

__version__ = "0.4.0"


def configure_logging(
    level: int = logging.INFO,
    format: str = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
) -> None:
    """
    Configure logging for Portal Data-View.

    Call this at application startup to see log messages.
    By default, only WARNING and above are visible.

    Args:
        level: Logging level (default: INFO)
        format: Log message format

    Example:
        >>> import portal_dataview
        >>> portal_dataview.configure_logging(logging.DEBUG)
    """
    logging.basicConfig(
        level=level,
        format=format,
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Set our package's logger
    logging.getLogger("portal_dataview").setLevel(level)
