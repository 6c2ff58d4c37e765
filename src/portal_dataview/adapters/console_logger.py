"""
Console Audit Logger.

A simple audit logger that outputs pipeline runs to the console.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional


class ConsoleAuditLogger:
    """Simple console-based audit logger."""

    def __init__(self, verbose: bool = True) -> None:
        """
        Initialize console logger.

        Args:
            verbose: If True, log all events. If False, only stage summaries
                and corrections.
        """
        self._verbose = verbose
        self._correlation_id: Optional[str] = None
        self.corrections: List[Dict[str, Any]] = []

    def set_correlation_id(self, correlation_id: str) -> None:
        """Set correlation ID for subsequent log entries."""
        self._correlation_id = correlation_id

    def log_stage_start(
        self,
        stage_name: str,
        input_count: int,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log the start of a stage."""
        if self._verbose:
            self._log("INFO", f"Starting {stage_name} with {input_count} records")

    def log_stage_end(
        self,
        stage_name: str,
        output_count: int,
        duration_seconds: float,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> None:
        """Log the end of a stage."""
        if self._verbose:
            self._log(
                "INFO",
                f"Completed {stage_name}: {output_count} records "
                f"({duration_seconds * 1000:.2f}ms)",
            )

    def log_correction(
        self,
        control: str,
        requested: Any,
        applied: Any,
    ) -> None:
        """Log that a control value was silently corrected."""
        self.corrections.append(
            {"control": control, "requested": requested, "applied": applied}
        )
        self._log("WARN", f"{control} {requested!r} corrected to {applied!r}")

    def _log(self, level: str, message: str) -> None:
        """Internal logging method."""
        timestamp = datetime.now().strftime("%H:%M:%S")
        corr_id = self._correlation_id[:8] if self._correlation_id else "--------"
        print(f"[{timestamp}] [{corr_id}] [{level:5}] {message}")
