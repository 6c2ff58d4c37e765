"""
Static Collection Provider.

Loads the portal's record collections from static JSON or YAML fixture
files. This is the data-loading layer in front of the pipeline: it is the
only place load and parse failures surface.

Lookup order for a collection named "documents":
    documents.json, documents.yaml, documents.yml
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from threading import RLock
from typing import Any, Dict, List, Optional, Union

import yaml

logger = logging.getLogger(__name__)

SUPPORTED_SUFFIXES = (".json", ".yaml", ".yml")


class CollectionLoadError(Exception):
    """Raised when a collection cannot be loaded or is malformed."""

    def __init__(self, message: str, name: Optional[str] = None) -> None:
        super().__init__(message)
        self.name = name
        self.message = message


class StaticCollectionProvider:
    """Reads named collections from a directory of fixture files."""

    def __init__(self, base_path: Union[str, Path]) -> None:
        """
        Initialize provider.

        Args:
            base_path: Directory holding the fixture files
        """
        self._base_path = Path(base_path)
        self._loaded: Dict[str, List[Dict[str, Any]]] = {}
        self._lock = RLock()

    def load(self, name: str) -> List[Dict[str, Any]]:
        """
        Load a collection by name.

        Each collection is read from disk once per provider.

        Args:
            name: Collection name (file stem)

        Returns:
            List of record dicts

        Raises:
            CollectionLoadError: If the file is missing, unparsable, or not
                a list of records
        """
        with self._lock:
            if name in self._loaded:
                return self._loaded[name]

            path = self._find(name)
            records = self._parse(path, name)
            self._loaded[name] = records
            logger.info(f"Loaded collection '{name}': {len(records)} records from {path.name}")
            return records

    def available(self) -> List[str]:
        """Names of collections present in the base directory."""
        if not self._base_path.is_dir():
            return []
        return sorted(
            {p.stem for p in self._base_path.iterdir() if p.suffix in SUPPORTED_SUFFIXES}
        )

    def reload(self, name: str) -> List[Dict[str, Any]]:
        """Drop the in-memory copy and read the collection again."""
        with self._lock:
            self._loaded.pop(name, None)
            return self.load(name)

    def _find(self, name: str) -> Path:
        for suffix in SUPPORTED_SUFFIXES:
            path = self._base_path / f"{name}{suffix}"
            if path.is_file():
                return path
        raise CollectionLoadError(
            f"Collection not found: {name} (looked in {self._base_path})", name=name
        )

    def _parse(self, path: Path, name: str) -> List[Dict[str, Any]]:
        try:
            with open(path, encoding="utf-8") as f:
                if path.suffix == ".json":
                    raw = json.load(f)
                else:
                    raw = yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError, UnicodeDecodeError) as e:
            raise CollectionLoadError(f"Cannot parse {path.name}: {e}", name=name) from e
        except OSError as e:
            raise CollectionLoadError(f"Cannot read {path.name}: {e}", name=name) from e

        # Exported views wrap the records as {"_metadata": ..., "data": [...]}
        if isinstance(raw, dict) and isinstance(raw.get("data"), list):
            raw = raw["data"]

        if not isinstance(raw, list):
            raise CollectionLoadError(
                f"{path.name} must contain a list of records, got {type(raw).__name__}",
                name=name,
            )

        bad = [i for i, record in enumerate(raw) if not isinstance(record, dict)]
        if bad:
            raise CollectionLoadError(
                f"{path.name}: entries {bad[:5]} are not records", name=name
            )
        return raw
