"""
Pytest Configuration and Shared Fixtures.

This module contains fixtures available to all tests.
"""

from __future__ import annotations

import json
import random
from pathlib import Path
from typing import Any, Dict, List

import pytest

from portal_dataview.adapters.console_logger import ConsoleAuditLogger
from portal_dataview.adapters.metrics_collector import InMemoryMetricsCollector
from portal_dataview.adapters.schedulers import ManualScheduler
from portal_dataview.config.models import (
    FilterConfig,
    PaginationConfig,
    SearchConfig,
)

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture(autouse=True)
def set_random_seed():
    """Ensure all tests are deterministic."""
    random.seed(42)
    yield


@pytest.fixture
def fixtures_dir() -> Path:
    """Directory holding the static collection fixtures."""
    return FIXTURES_DIR


@pytest.fixture
def sample_config_path() -> Path:
    """Path to sample configuration file."""
    return FIXTURES_DIR / "sample_config.yaml"


@pytest.fixture
def documents() -> List[Dict[str, Any]]:
    """
    Document hub fixture (14 records).

    Includes one record without a category, one with a null category and
    one with a numeric category.
    """
    with open(FIXTURES_DIR / "documents.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def seven_items() -> List[Dict[str, Any]]:
    """Seven simple records for pagination scenarios."""
    return [{"id": i, "name": f"Item {i}"} for i in range(7)]


@pytest.fixture
def ten_items() -> List[Dict[str, Any]]:
    """Ten records spread over three types."""
    types = ["form", "policy", "guide"]
    return [
        {"id": i, "name": f"Record {i}", "type": types[i % 3]} for i in range(10)
    ]


@pytest.fixture
def manual_scheduler() -> ManualScheduler:
    """Scheduler whose clock only moves when the test advances it."""
    return ManualScheduler()


@pytest.fixture
def console_logger() -> ConsoleAuditLogger:
    """Create console logger for testing."""
    return ConsoleAuditLogger(verbose=False)


@pytest.fixture
def metrics_collector() -> InMemoryMetricsCollector:
    """Create metrics collector for testing."""
    return InMemoryMetricsCollector()


@pytest.fixture
def document_search_config() -> SearchConfig:
    """Search scoped to document names."""
    return SearchConfig(searchable_fields=["name"], min_search_length=0)


@pytest.fixture
def category_filter_config() -> FilterConfig:
    """Filter documents by category."""
    return FilterConfig(filter_key="category", all_label="All Categories")


@pytest.fixture
def small_pages_config() -> PaginationConfig:
    """Three records per page."""
    return PaginationConfig(page_size=3)
