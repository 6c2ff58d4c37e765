"""
Observability Package - Structured Logging and Metrics.

    - ObservabilityManager: structlog events with correlation IDs, usable
      as both audit logger and metrics collector for a ViewPipeline
"""

from portal_dataview.observability.observability_manager import (
    ObservabilityManager,
    get_correlation_id,
    set_correlation_id,
)

__all__ = [
    "ObservabilityManager",
    "get_correlation_id",
    "set_correlation_id",
]
