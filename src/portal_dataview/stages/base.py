"""
Stage Output - What a Stage Hands to the Next One.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Sequence

from portal_dataview.domain.value_objects import PageInfo


@dataclass(frozen=True)
class StageOutput:
    """
    Records produced by a stage.

    A dataclass rather than a pydantic model so `records` keeps the exact
    object a bypassed stage received.
    """

    records: Sequence[Any]
    input_count: int
    is_active: bool = False
    page_info: Optional[PageInfo] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def output_count(self) -> int:
        return len(self.records)

    @property
    def is_empty(self) -> bool:
        return len(self.records) == 0
