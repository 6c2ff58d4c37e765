"""
Audit Logger Protocol.

Defines the interface for recording what each pipeline run did. The
audit logger tracks stage input/output counts and corrections applied to
control values (e.g. a clamped page request).

Design Notes:
    - Correlation ID propagation for tracing one view's runs
    - No side effects on pipeline output
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Protocol, runtime_checkable


@runtime_checkable
class AuditLogger(Protocol):
    """Interface for audit logging."""

    def set_correlation_id(self, correlation_id: str) -> None:
        """Set correlation ID for subsequent log entries."""
        ...

    def log_stage_start(
        self,
        stage_name: str,
        input_count: int,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log the start of a stage.

        Args:
            stage_name: Name of the stage
            input_count: Number of records entering the stage
            metadata: Optional additional context
        """
        ...

    def log_stage_end(
        self,
        stage_name: str,
        output_count: int,
        duration_seconds: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """
        Log the end of a stage.

        Args:
            stage_name: Name of the stage
            output_count: Number of records leaving the stage
            duration_seconds: Time taken for the stage
            metadata: Optional additional context
        """
        ...

    def log_correction(
        self,
        control: str,
        requested: Any,
        applied: Any,
    ) -> None:
        """
        Log that a control value was silently corrected.

        Args:
            control: Which control (page, page_size)
            requested: Value the caller asked for
            applied: Value actually used
        """
        ...
