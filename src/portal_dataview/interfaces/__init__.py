"""
Interfaces Layer - Abstract Protocols for Dependencies.

This package defines the abstract interfaces (using typing.Protocol) for all
pluggable parts of the pipeline. High-level modules depend on these
abstractions, not on concrete implementations.

Protocols:
    - ViewStage: Base protocol for pipeline stages
    - Scheduler / TimerHandle: Cancellable deferred execution
    - AuditLogger: Logging abstraction for the audit trail
    - MetricsCollector: Performance metrics abstraction
    - CollectionProvider: Data loading in front of the pipeline
"""

from portal_dataview.interfaces.audit_logger import AuditLogger
from portal_dataview.interfaces.collection_provider import CollectionProvider
from portal_dataview.interfaces.metrics_collector import MetricsCollector
from portal_dataview.interfaces.scheduler import Scheduler, TimerHandle
from portal_dataview.interfaces.view_stage import ViewStage

__all__ = [
    "AuditLogger",
    "CollectionProvider",
    "MetricsCollector",
    "Scheduler",
    "TimerHandle",
    "ViewStage",
]
