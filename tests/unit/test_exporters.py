"""
Unit Tests for Exporters.

Test Aspects Covered:
    ✅ Business Logic: CSV columns, JSON metadata envelope
    ✅ Edge Cases: Missing values, models, empty views
    ✅ Error Handling: Unsupported format
"""

from __future__ import annotations

import csv
import io
import json
from typing import Any, Dict, List

import pytest

from portal_dataview import __version__
from portal_dataview.domain.entities import Document
from portal_dataview.export.exporters import export_view, to_csv, to_json
from portal_dataview.pipeline.view_pipeline import compose


class TestToCsv:
    """Test cases for to_csv()."""

    def test_header_titles_and_column_order(self) -> None:
        """
        SCENARIO: Headers map fields to titles
        EXPECTED: Header row uses titles, columns follow header order
        """
        # Arrange
        records = [{"name": "Visitor Policy.pdf", "category": "Policies", "size": "80 KB"}]

        # Act
        text = to_csv(records, {"category": "Category", "name": "Name"})

        # Assert
        assert text == "Category,Name\nPolicies,Visitor Policy.pdf\n"

    def test_missing_and_none_values_are_empty(self) -> None:
        """
        SCENARIO: Record lacks a column and has a None value
        EXPECTED: Both cells empty
        """
        # Arrange
        records = [{"name": "Legacy Referral Form.pdf", "category": None}]

        # Act
        text = to_csv(records, {"name": "Name", "category": "Category", "size": "Size"})

        # Assert
        assert text.splitlines()[1] == "Legacy Referral Form.pdf,,"

    def test_values_with_commas_are_quoted(self) -> None:
        """
        SCENARIO: Value contains a comma
        EXPECTED: Parsed back as one cell
        """
        # Arrange
        records = [{"name": "Release of Information, Signed.pdf"}]

        # Act
        text = to_csv(records, {"name": "Name"})

        # Assert
        rows = list(csv.reader(io.StringIO(text)))
        assert rows[1] == ["Release of Information, Signed.pdf"]

    def test_model_records(self) -> None:
        """
        SCENARIO: Records are Document models
        EXPECTED: Attributes read by field name
        """
        # Arrange
        docs = [Document(name="A.pdf", path="/a.pdf", lastUpdated="2024-01-02")]

        # Act
        text = to_csv(docs, {"name": "Name", "last_updated": "Updated"})

        # Assert
        assert text.splitlines()[1] == "A.pdf,2024-01-02"


class TestToJson:
    """Test cases for to_json()."""

    def test_envelope(self) -> None:
        """
        SCENARIO: Export a list of records
        EXPECTED: _metadata block with tool, version and format; data unchanged
        """
        # Act
        payload = json.loads(to_json([{"name": "a"}]))

        # Assert
        meta = payload["_metadata"]
        assert meta["exported_by"] == "portal_dataview"
        assert meta["app_version"] == __version__
        assert meta["format"] == "json"
        assert "exported_at" in meta
        assert payload["data"] == [{"name": "a"}]

    def test_extra_metadata_merged(self) -> None:
        """
        SCENARIO: Caller passes extra metadata
        EXPECTED: Merged into the _metadata block
        """
        # Act
        payload = json.loads(to_json([], metadata={"description": "weekly"}))

        # Assert
        assert payload["_metadata"]["description"] == "weekly"

    def test_models_dumped_by_alias(self) -> None:
        """
        SCENARIO: Export Document models
        EXPECTED: Field aliases used in the output
        """
        # Arrange
        doc = Document(name="A.pdf", path="/a.pdf", last_updated="2024-01-02")

        # Act
        payload = json.loads(to_json([doc]))

        # Assert
        assert payload["data"][0]["lastUpdated"] == "2024-01-02"


class TestExportView:
    """Test cases for export_view()."""

    @pytest.fixture
    def result(self, documents: List[Dict[str, Any]]):
        return compose(
            documents,
            search={"query": "Form", "searchable_fields": ["name"]},
            filter={"filter_key": "category", "selected_value": "Administrative Forms"},
            pagination={"page_size": 2},
        )

    def test_json_carries_view_state(self, result) -> None:
        """
        SCENARIO: Export a searched and filtered page as JSON
        EXPECTED: Page data plus stats, page info, query and filter
        """
        # Act
        payload = json.loads(export_view(result, description="admin forms"))

        # Assert
        meta = payload["_metadata"]
        assert len(payload["data"]) == 2
        assert meta["stats"]["filtered_records"] == 4
        assert meta["page"]["total_pages"] == 2
        assert meta["search_query"] == "Form"
        assert meta["selected_filter"] == "Administrative Forms"
        assert meta["description"] == "admin forms"

    def test_csv_default_headers(self, result) -> None:
        """
        SCENARIO: CSV export without explicit headers
        EXPECTED: Columns taken from the first record's keys
        """
        # Act
        text = export_view(result, fmt="csv")

        # Assert
        rows = list(csv.DictReader(io.StringIO(text)))
        assert len(rows) == 2
        assert rows[0]["category"] == "Administrative Forms"

    def test_csv_of_empty_view(self, documents: List[Dict[str, Any]]) -> None:
        """
        SCENARIO: No records on the page
        EXPECTED: Empty output, no error
        """
        # Arrange
        empty = compose(documents, search={"query": "zzzz"})

        # Act
        text = export_view(empty, fmt="csv")

        # Assert
        assert text.strip() == ""

    def test_unsupported_format(self, result) -> None:
        """
        SCENARIO: Export as XML
        EXPECTED: ValueError
        """
        with pytest.raises(ValueError, match="Unsupported export format"):
            export_view(result, fmt="xml")
