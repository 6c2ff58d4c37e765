"""
Exporters - CSV and JSON Output of a View.

Every JSON export carries a `_metadata` block (export time, tool, version,
format) next to the `data`, so an exported file can be read back by the
StaticCollectionProvider.
"""

from __future__ import annotations

import csv
import io
import json
import logging
from datetime import datetime
from typing import Any, Dict, Mapping, Optional, Sequence

from pydantic import BaseModel

from portal_dataview import __version__
from portal_dataview.domain.entities import ViewResult
from portal_dataview.stages.field_access import get_field

logger = logging.getLogger(__name__)

EXPORTED_BY = "portal_dataview"


def to_csv(records: Sequence[Any], headers: Mapping[str, str]) -> str:
    """
    Render records as CSV.

    Args:
        records: Records to export (dicts, models or objects)
        headers: Field name -> column title, in column order

    Returns:
        CSV text with a header row. Missing or None values are empty.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(list(headers.values()))
    for record in records:
        row = []
        for key in headers:
            value = get_field(record, key)
            row.append("" if value is None else value)
        writer.writerow(row)
    return buffer.getvalue()


def to_json(
    data: Any,
    metadata: Optional[Mapping[str, Any]] = None,
    indent: int = 2,
) -> str:
    """
    Render data as JSON wrapped with export metadata.

    Args:
        data: Payload to export
        metadata: Extra metadata merged over the defaults
        indent: JSON indentation

    Returns:
        JSON text of {"_metadata": {...}, "data": data}
    """
    export = {
        "_metadata": {
            "exported_at": datetime.now().isoformat(),
            "exported_by": EXPORTED_BY,
            "app_version": __version__,
            "format": "json",
            **(metadata or {}),
        },
        "data": _jsonable(data),
    }
    return json.dumps(export, indent=indent, default=str)


def export_view(
    result: ViewResult,
    fmt: str = "json",
    headers: Optional[Mapping[str, str]] = None,
    description: str = "",
) -> str:
    """
    Export the current page of a view.

    Args:
        result: ViewResult to export
        fmt: "json" or "csv"
        headers: CSV columns (field -> title); defaults to the fields of
            the first record
        description: Free text stored in the JSON metadata

    Returns:
        Exported text

    Raises:
        ValueError: If fmt is not a supported format
    """
    if fmt == "json":
        return to_json(
            result.data,
            metadata={
                "description": description,
                "stats": result.stats.model_dump(),
                "page": result.pagination.model_dump(),
                "search_query": result.search.effective_query,
                "selected_filter": result.filter.selected_filter,
            },
        )

    if fmt == "csv":
        if headers is None:
            headers = _default_headers(result.data)
        return to_csv(result.data, headers)

    raise ValueError(f"Unsupported export format: {fmt!r} (expected 'json' or 'csv')")


def _default_headers(records: Sequence[Any]) -> Dict[str, str]:
    if not records:
        return {}
    first = _jsonable(records[0])
    if not isinstance(first, dict):
        logger.warning(f"Cannot derive CSV headers from {type(records[0]).__name__}")
        return {}
    return {key: key for key in first}


def _jsonable(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True)
    if isinstance(value, Mapping):
        return {k: _jsonable(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_jsonable(v) for v in value]
    return value
