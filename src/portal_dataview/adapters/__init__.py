"""
Adapters Package - Infrastructure Implementations.

This package contains concrete implementations of the abstract
interfaces defined in the interfaces package. Following the
Hexagonal Architecture (Ports & Adapters) pattern.

Providers:
    - StaticCollectionProvider: Records from JSON/YAML fixture files

Schedulers:
    - ThreadingScheduler: Wall-clock timers for debouncing
    - ManualScheduler: Explicitly advanced clock

Loggers:
    - ConsoleAuditLogger: Simple console output

Metrics:
    - InMemoryMetricsCollector: Simple in-memory collection

Design Principles:
    - All adapters implement their respective protocols
    - Easily swappable via Dependency Injection
    - No view logic in adapters
"""

from portal_dataview.adapters.console_logger import ConsoleAuditLogger
from portal_dataview.adapters.metrics_collector import InMemoryMetricsCollector
from portal_dataview.adapters.schedulers import ManualScheduler, ThreadingScheduler
from portal_dataview.adapters.static_provider import (
    CollectionLoadError,
    StaticCollectionProvider,
)

__all__ = [
    "CollectionLoadError",
    "ConsoleAuditLogger",
    "InMemoryMetricsCollector",
    "ManualScheduler",
    "StaticCollectionProvider",
    "ThreadingScheduler",
]
