"""
Collection Provider Protocol.

Defines the data-loading seam in front of the pipeline. A provider
returns an already-loaded collection of records; the pipeline never loads
data itself.
"""

from __future__ import annotations

from typing import Any, Dict, List, Protocol, runtime_checkable


@runtime_checkable
class CollectionProvider(Protocol):
    """Interface for loading named record collections."""

    def load(self, name: str) -> List[Dict[str, Any]]:
        """
        Load a collection by name.

        Args:
            name: Collection name (e.g. "documents", "providers")

        Returns:
            List of records

        Raises:
            CollectionLoadError: If the collection cannot be loaded
        """
        ...

    def available(self) -> List[str]:
        """Names of collections this provider can load."""
        ...
