"""
Configuration Package - Models and Loaders.

This package handles all configuration aspects of the portal views:
    - Pydantic models for type-safe configuration
    - YAML loader with validation
    - Support for configuration profiles

Configuration Structure:
    - PortalConfig: Root configuration object
    - ViewConfig: One browsable view and its stages
    - SearchConfig / FilterConfig / PaginationConfig: Per-stage settings
    - ObservabilityConfig: Structured logging settings
"""

from portal_dataview.config.models import (
    FilterConfig,
    ObservabilityConfig,
    PaginationConfig,
    PortalConfig,
    SearchConfig,
    ViewConfig,
)
from portal_dataview.config.loader import ConfigLoader, load_config

__all__ = [
    "ConfigLoader",
    "FilterConfig",
    "ObservabilityConfig",
    "PaginationConfig",
    "PortalConfig",
    "SearchConfig",
    "ViewConfig",
    "load_config",
]
