"""
View Stage Protocol.

Defines the interface shared by the search, category filter and
pagination stages. Each stage transforms the collection it receives and
reports how many records went in and came out.

The view stage is responsible for:
    - Applying its transform to the collection from the previous stage
    - Holding its own control value (query, selected filter, page)
    - Never raising on normal input (clamp or no-op instead)

Design Notes:
    - Uses typing.Protocol for structural subtyping
    - Stages do not know about each other; ordering lives in the pipeline
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, Sequence, runtime_checkable

if TYPE_CHECKING:
    from portal_dataview.stages.base import StageOutput


@runtime_checkable
class ViewStage(Protocol):
    """Interface for one step of the view pipeline."""

    @property
    def name(self) -> str:
        """Unique name of this stage."""
        ...

    @property
    def is_active(self) -> bool:
        """True when the stage currently narrows its input."""
        ...

    def apply(self, collection: Sequence[Any]) -> "StageOutput":
        """
        Apply the stage to a collection.

        Args:
            collection: Output of the previous stage

        Returns:
            StageOutput with the resulting records
        """
        ...

    def reset(self) -> None:
        """Restore the stage's control value to its configured default."""
        ...

