"""
Observability Manager - Structured Logging and Metrics for Views.

Provides:
    - Structured JSON logging via structlog
    - Correlation ID propagation (one ID per view instance)
    - In-memory event and metric series for inspection

Design Notes:
    - Correlation ID lives in a ContextVar and is bound into structlog
    - Implements the AuditLogger and MetricsCollector protocols, so one
      instance can be handed to a ViewPipeline for both
"""

from __future__ import annotations

import logging
import threading
import uuid
from contextvars import ContextVar
from datetime import datetime
from typing import Any, Dict, List, Optional

import structlog

from portal_dataview.config.models import ObservabilityConfig

_correlation_id: ContextVar[Optional[str]] = ContextVar("correlation_id", default=None)


def get_correlation_id() -> Optional[str]:
    """Get current correlation ID from context."""
    return _correlation_id.get()


def set_correlation_id(correlation_id: str) -> None:
    """Set correlation ID in context."""
    _correlation_id.set(correlation_id)


class ObservabilityManager:
    """
    Unified observability: structured events and metrics.

    Example:
        >>> obs = ObservabilityManager(use_json=False)
        >>> pipeline = ViewPipeline(docs, audit_logger=obs, metrics_collector=obs)
        >>> pipeline.run()
        >>> [e["event_type"] for e in obs.get_events()]
        ['stage_start', 'stage_end', ...]
    """

    def __init__(
        self,
        service_name: str = "portal_dataview",
        use_json: bool = True,
        log_level: int = logging.INFO,
    ) -> None:
        """
        Initialize observability manager.

        Args:
            service_name: Service name for log entries
            use_json: Render JSON lines (False for the dev console renderer)
            log_level: Logging level
        """
        self.service_name = service_name
        self.use_json = use_json
        self.log_level = log_level
        self._metrics: Dict[str, List[Dict[str, Any]]] = {}
        self._events: List[Dict[str, Any]] = []
        self._lock = threading.Lock()

        self._configure_structlog()
        self._logger = structlog.get_logger(service_name)

    @classmethod
    def from_config(
        cls, config: ObservabilityConfig
    ) -> Optional["ObservabilityManager"]:
        """
        Build from the observability section of a PortalConfig.

        Returns None when observability is disabled; ViewPipeline then runs
        without an audit logger or metrics collector.
        """
        if not config.enabled:
            return None
        return cls(service_name=config.service_name, use_json=config.use_json)

    def _configure_structlog(self) -> None:
        """Configure structlog for structured logging."""
        processors = [
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
        ]

        if self.use_json:
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer())

        structlog.configure(
            processors=processors,
            wrapper_class=structlog.make_filtering_bound_logger(self.log_level),
            context_class=dict,
            logger_factory=structlog.PrintLoggerFactory(),
            cache_logger_on_first_use=False,
        )

    def set_correlation_id(self, correlation_id: str) -> None:
        """
        Set correlation ID for current context.

        Args:
            correlation_id: Unique ID for request tracing
        """
        set_correlation_id(correlation_id)
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(correlation_id=correlation_id)

    def generate_correlation_id(self) -> str:
        """Generate and set a new correlation ID."""
        correlation_id = str(uuid.uuid4())
        self.set_correlation_id(correlation_id)
        return correlation_id

    def log_event(
        self,
        event_type: str,
        data: Optional[Dict[str, Any]] = None,
        level: str = "info",
    ) -> None:
        """
        Log a structured event.

        Args:
            event_type: Type of event (e.g., "stage_start", "correction")
            data: Additional event data
            level: Log level (debug, info, warning, error)
        """
        event_data = {
            "event_type": event_type,
            "timestamp": datetime.now().isoformat(),
            "correlation_id": get_correlation_id(),
            **(data or {}),
        }

        with self._lock:
            self._events.append(event_data)

        log_method = getattr(self._logger, level.lower(), self._logger.info)
        fields = {k: v for k, v in event_data.items() if k not in ("event_type", "correlation_id")}
        log_method(event_type, **fields)

    def record_metric(
        self,
        name: str,
        value: float,
        tags: Optional[Dict[str, str]] = None,
        metric_type: str = "gauge",
    ) -> None:
        """
        Record a metric value.

        Args:
            name: Metric name
            value: Metric value
            tags: Additional tags/labels
            metric_type: Type (gauge, counter, histogram)
        """
        metric_entry = {
            "timestamp": datetime.now().isoformat(),
            "value": value,
            "tags": tags or {},
            "type": metric_type,
            "correlation_id": get_correlation_id(),
        }

        with self._lock:
            self._metrics.setdefault(name, []).append(metric_entry)

    def get_trace_context(self) -> Dict[str, Any]:
        """Current correlation ID and service info."""
        return {
            "correlation_id": get_correlation_id(),
            "service_name": self.service_name,
            "timestamp": datetime.now().isoformat(),
        }

    def get_metrics(self) -> Dict[str, List[Dict[str, Any]]]:
        """Get all recorded metrics."""
        with self._lock:
            return dict(self._metrics)

    def get_events(self) -> List[Dict[str, Any]]:
        """Get all recorded events."""
        with self._lock:
            return list(self._events)

    def clear(self) -> None:
        """Clear all recorded metrics and events."""
        with self._lock:
            self._metrics.clear()
            self._events.clear()

    # =========================================================================
    # AuditLogger Protocol Compatibility
    # =========================================================================

    def log_stage_start(
        self,
        stage_name: str,
        input_count: int,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log start of a pipeline stage (AuditLogger compatible)."""
        self.log_event(
            "stage_start",
            {"stage_name": stage_name, "input_count": input_count, **(metadata or {})},
            level="debug",
        )

    def log_stage_end(
        self,
        stage_name: str,
        output_count: int,
        duration_seconds: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log end of a pipeline stage (AuditLogger compatible)."""
        self.log_event(
            "stage_end",
            {
                "stage_name": stage_name,
                "output_count": output_count,
                "duration_seconds": duration_seconds,
                **(metadata or {}),
            },
        )

    def log_correction(self, control: str, requested: Any, applied: Any) -> None:
        """Log a silently corrected control value (AuditLogger compatible)."""
        self.log_event(
            "correction",
            {"control": control, "requested": requested, "applied": applied},
            level="warning",
        )

    # =========================================================================
    # MetricsCollector Protocol Compatibility
    # =========================================================================

    def record_timing(
        self,
        name: str,
        duration_seconds: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        """Record timing metric (MetricsCollector compatible)."""
        self.record_metric(name, duration_seconds, tags, metric_type="histogram")

    def record_count(
        self,
        name: str,
        value: int,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        """Record count metric (MetricsCollector compatible)."""
        self.record_metric(name, float(value), tags, metric_type="counter")

    def record_gauge(
        self,
        name: str,
        value: float,
        tags: Optional[Dict[str, str]] = None,
    ) -> None:
        """Record gauge metric (MetricsCollector compatible)."""
        self.record_metric(name, value, tags, metric_type="gauge")
