"""
Configuration Loader.

Reads a portal config file, lays an optional profile over it and returns
a PortalConfig that is ready to build views from:

    - data_dir is absolute; a relative one is taken from the config
      file's directory (or the loader's base path for plain dicts)
    - every view carries its name and the collection it reads, both
      defaulting to the view's key
    - profiles live next to the config file, in profiles/<name>.yaml
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Union

import yaml

from portal_dataview.adapters.static_provider import StaticCollectionProvider
from portal_dataview.config.models import PortalConfig

logger = logging.getLogger(__name__)

PROFILE_DIR = "profiles"


def deep_merge(base: Mapping[str, Any], overlay: Mapping[str, Any]) -> Dict[str, Any]:
    """Copy of base with overlay laid on top; nested mappings merge key by key."""
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, Mapping) and isinstance(value, Mapping):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def read_yaml(path: Path) -> Dict[str, Any]:
    """
    Read one YAML mapping. An empty file is an empty mapping.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the document is not a mapping
    """
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"{path.name} must hold a mapping, not {type(data).__name__}")
    return data


class ConfigLoader:
    """Builds PortalConfig objects from YAML files or dicts."""

    def __init__(self, base_path: Optional[Union[str, Path]] = None) -> None:
        """
        Args:
            base_path: Directory that relative config paths, and the data
                directory of dict configs, are resolved against
        """
        self.base_path = Path(base_path) if base_path is not None else Path(".")

    def load(
        self,
        config_path: Union[str, Path],
        profile: Optional[str] = None,
    ) -> PortalConfig:
        """
        Load a config file, optionally overlaid with a profile.

        Raises:
            FileNotFoundError: If the config file or profile doesn't exist
            ValueError: If a file is not a YAML mapping
            ValidationError: If a value is out of range
        """
        path = Path(config_path)
        if not path.is_absolute():
            path = self.base_path / path

        raw = read_yaml(path)
        if profile:
            profile_path = path.parent / PROFILE_DIR / f"{profile}.yaml"
            if not profile_path.is_file():
                raise FileNotFoundError(f"Profile not found: {profile} ({profile_path})")
            raw = deep_merge(raw, read_yaml(profile_path))
            logger.debug(f"Applied profile '{profile}' to {path.name}")

        return self._build(raw, relative_to=path.parent)

    def load_from_dict(self, config_dict: Mapping[str, Any]) -> PortalConfig:
        """Validate an in-memory config; data_dir resolves against base_path."""
        return self._build(config_dict, relative_to=self.base_path)

    def missing_collections(self, config: PortalConfig) -> Dict[str, str]:
        """
        Views whose collection has no file in the data directory.

        Returns:
            Mapping of view name to the collection it cannot find
        """
        available = set(StaticCollectionProvider(config.data_dir).available())
        return {
            key: view.collection
            for key, view in config.views.items()
            if view.collection not in available
        }

    def _build(self, raw: Mapping[str, Any], relative_to: Path) -> PortalConfig:
        raw = dict(raw)
        views = raw.get("views") or {}
        if not isinstance(views, Mapping):
            raise ValueError(f"views must be a mapping, not {type(views).__name__}")
        raw["views"] = {key: _with_key_defaults(key, view) for key, view in views.items()}

        data_dir = Path(raw.get("data_dir", "data"))
        if not data_dir.is_absolute():
            data_dir = relative_to / data_dir
        raw["data_dir"] = str(data_dir.resolve())

        config = PortalConfig.model_validate(raw)
        missing = self.missing_collections(config)
        if missing:
            logger.warning(
                f"No data for views {sorted(missing)} in {config.data_dir}"
            )
        return config


def _with_key_defaults(key: str, view: Any) -> Any:
    # An empty view entry in YAML reads as None
    if view is None:
        view = {}
    if not isinstance(view, Mapping):
        return view
    return {"name": key, "collection": key, **view}


def load_config(
    config_path: Union[str, Path],
    profile: Optional[str] = None,
    base_path: Optional[Union[str, Path]] = None,
) -> PortalConfig:
    """Shortcut for ConfigLoader(base_path).load(config_path, profile)."""
    return ConfigLoader(base_path=base_path).load(config_path, profile)
