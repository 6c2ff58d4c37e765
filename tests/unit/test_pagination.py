"""
Unit Tests for the Pagination Stage.

Test Aspects Covered:
    ✅ Business Logic: Page windows and page metadata
    ✅ Edge Cases: Empty collection, out-of-range pages, page size below 1
    ✅ State: Page size change resets to page 1, re-clamp on shrink, size options
"""

from __future__ import annotations

from typing import Any, Dict, List

import pytest

from portal_dataview.config.models import PaginationConfig
from portal_dataview.stages.pagination import (
    PaginationStage,
    clamp_page,
    paginate,
    total_pages_for,
)


class TestPaginateFunction:
    """Test cases for the pure paginate() function."""

    def test_first_page(self, seven_items: List[Dict[str, Any]]) -> None:
        """
        SCENARIO: 7 items, page size 3, page 1
        EXPECTED: Items 0..2, has_next True, has_previous False
        """
        # Act
        window = paginate(seven_items, current_page=1, items_per_page=3)

        # Assert
        assert window.windowed == seven_items[0:3]
        info = window.page_info
        assert info.total_pages == 3
        assert info.start_index == 1
        assert info.end_index == 3
        assert info.has_next_page is True
        assert info.has_previous_page is False

    def test_last_partial_page(self, seven_items: List[Dict[str, Any]]) -> None:
        """
        SCENARIO: 7 items, page size 3, page 3
        EXPECTED: Only item 6, has_next False
        """
        # Act
        window = paginate(seven_items, current_page=3, items_per_page=3)

        # Assert
        assert window.windowed == seven_items[6:7]
        assert window.page_info.start_index == 7
        assert window.page_info.end_index == 7
        assert window.page_info.has_next_page is False
        assert window.page_info.has_previous_page is True

    def test_page_beyond_range_is_clamped(self, seven_items: List[Dict[str, Any]]) -> None:
        """
        SCENARIO: Request page 999999
        EXPECTED: Last page is returned
        """
        # Act
        window = paginate(seven_items, current_page=999999, items_per_page=3)

        # Assert
        assert window.page_info.current_page == 3
        assert window.windowed == seven_items[6:7]

    def test_empty_collection(self) -> None:
        """
        SCENARIO: No records
        EXPECTED: Page 1 of 0, both indices 0, no navigation
        """
        # Act
        window = paginate([], current_page=4, items_per_page=10)

        # Assert
        info = window.page_info
        assert list(window.windowed) == []
        assert info.current_page == 1
        assert info.total_pages == 0
        assert info.start_index == 0
        assert info.end_index == 0
        assert info.has_next_page is False
        assert info.has_previous_page is False

    def test_exact_multiple(self, ten_items: List[Dict[str, Any]]) -> None:
        """
        SCENARIO: 10 items, page size 5
        EXPECTED: Exactly two full pages
        """
        # Act
        window = paginate(ten_items, current_page=2, items_per_page=5)

        # Assert
        assert window.page_info.total_pages == 2
        assert len(window.windowed) == 5
        assert window.page_info.has_next_page is False

    @pytest.mark.parametrize(
        "total_items,per_page,expected",
        [(0, 10, 0), (1, 10, 1), (10, 10, 1), (11, 10, 2), (5, 0, 5)],
    )
    def test_total_pages_for(self, total_items: int, per_page: int, expected: int) -> None:
        """
        SCENARIO: Various collection sizes and page sizes
        EXPECTED: ceil(total / size), page size floored at 1
        """
        assert total_pages_for(total_items, per_page) == expected

    @pytest.mark.parametrize(
        "page,total,expected",
        [(-5, 3, 1), (0, 3, 1), (2, 3, 2), (999999, 3, 3), (4, 0, 1)],
    )
    def test_clamp_page(self, page: int, total: int, expected: int) -> None:
        """
        SCENARIO: Requested pages in and out of range
        EXPECTED: Always within [1, max(total, 1)]
        """
        assert clamp_page(page, total) == expected


class TestPaginationStage:
    """Test cases for the stateful PaginationStage."""

    @pytest.fixture
    def stage(self, small_pages_config: PaginationConfig) -> PaginationStage:
        return PaginationStage(small_pages_config)

    def test_go_to_page_beyond_last(
        self, stage: PaginationStage, seven_items: List[Dict[str, Any]]
    ) -> None:
        """
        SCENARIO: go_to_page(999999) on 7 items with page size 3
        EXPECTED: Page 3 applied and returned
        """
        # Arrange
        stage.apply(seven_items)

        # Act
        applied = stage.go_to_page(999999)

        # Assert
        assert applied == 3
        assert stage.current_page == 3

    def test_go_to_negative_page(
        self, stage: PaginationStage, seven_items: List[Dict[str, Any]]
    ) -> None:
        """
        SCENARIO: go_to_page(-5)
        EXPECTED: Page 1
        """
        # Arrange
        stage.apply(seven_items)

        # Act
        applied = stage.go_to_page(-5)

        # Assert
        assert applied == 1

    def test_go_to_page_before_any_collection(
        self, stage: PaginationStage, seven_items: List[Dict[str, Any]]
    ) -> None:
        """
        SCENARIO: Page 5 and page 0 requested before any collection is seen
        EXPECTED: Only the lower bound holds until apply() clamps to the last page
        """
        # Act
        applied = stage.go_to_page(5)
        lowered = PaginationStage(PaginationConfig(page_size=3)).go_to_page(0)

        # Assert
        assert applied == 5
        assert lowered == 1
        assert stage.total_pages is None
        output = stage.apply(seven_items)
        assert stage.current_page == 3
        assert output.page_info.current_page == 3

    def test_next_and_previous(
        self, stage: PaginationStage, seven_items: List[Dict[str, Any]]
    ) -> None:
        """
        SCENARIO: Walk forward past the end and back past the start
        EXPECTED: Stops at 3 and at 1
        """
        # Arrange
        stage.apply(seven_items)

        # Act / Assert
        assert stage.next_page() == 2
        assert stage.next_page() == 3
        assert stage.next_page() == 3
        assert stage.previous_page() == 2
        assert stage.previous_page() == 1
        assert stage.previous_page() == 1

    def test_change_page_size_resets_to_first_page(
        self, stage: PaginationStage, seven_items: List[Dict[str, Any]]
    ) -> None:
        """
        SCENARIO: On page 3, page size changed to 2
        EXPECTED: Page 1 with 4 total pages
        """
        # Arrange
        stage.apply(seven_items)
        stage.go_to_page(3)

        # Act
        stage.change_page_size(2)
        output = stage.apply(seven_items)

        # Assert
        assert stage.current_page == 1
        assert output.page_info.total_pages == 4
        assert output.records == seven_items[0:2]

    @pytest.mark.parametrize("requested", [0, -3])
    def test_page_size_below_one_is_corrected(
        self, stage: PaginationStage, requested: int
    ) -> None:
        """
        SCENARIO: Page size 0 or negative
        EXPECTED: Corrected to 1
        """
        # Act
        applied = stage.change_page_size(requested)

        # Assert
        assert applied == 1
        assert stage.items_per_page == 1

    def test_shrinking_collection_reclamps(
        self, stage: PaginationStage, ten_items: List[Dict[str, Any]]
    ) -> None:
        """
        SCENARIO: On page 4 of 10 items, collection shrinks to 4 items
        EXPECTED: Current page moves to the new last page
        """
        # Arrange
        stage.apply(ten_items)
        stage.go_to_page(4)

        # Act
        output = stage.apply(ten_items[:4])

        # Assert
        assert stage.current_page == 2
        assert output.records == ten_items[3:4]

    def test_reset_restores_config(
        self, stage: PaginationStage, seven_items: List[Dict[str, Any]]
    ) -> None:
        """
        SCENARIO: Page and page size changed, then reset
        EXPECTED: Configured initial page and page size
        """
        # Arrange
        stage.apply(seven_items)
        stage.change_page_size(50)

        # Act
        stage.reset()

        # Assert
        assert stage.current_page == 1
        assert stage.items_per_page == 3

    def test_output_always_active(self, stage: PaginationStage) -> None:
        """
        SCENARIO: Apply to an empty collection
        EXPECTED: Stage is active and reports empty page info
        """
        # Act
        output = stage.apply([])

        # Assert
        assert output.is_active is True
        assert output.page_info is not None
        assert output.page_info.total_pages == 0


class TestPageSizeOptions:
    """Test cases for the page sizes offered to a page-size control."""

    def test_configured_options_reported(self, seven_items: List[Dict[str, Any]]) -> None:
        """
        SCENARIO: Config offers 10, 20 and 50 with page size 10
        EXPECTED: PageInfo lists exactly those sizes
        """
        # Arrange
        stage = PaginationStage(PaginationConfig(page_size=10, page_size_options=[50, 10, 20]))

        # Act
        output = stage.apply(seven_items)

        # Assert
        assert output.page_info.page_size_options == [10, 20, 50]

    def test_current_size_always_offered(self, seven_items: List[Dict[str, Any]]) -> None:
        """
        SCENARIO: Page size changed to 3, which the config does not list
        EXPECTED: 3 joins the options so the control can show it
        """
        # Arrange
        stage = PaginationStage(PaginationConfig(page_size_options=[10, 20]))

        # Act
        stage.change_page_size(3)
        info = stage.page_info(seven_items)

        # Assert
        assert info.page_size_options == [3, 10, 20]

    def test_non_positive_options_dropped(self) -> None:
        """
        SCENARIO: Config lists 0 and -5 among the options
        EXPECTED: Only positive sizes are offered
        """
        # Arrange
        stage = PaginationStage(PaginationConfig(page_size_options=[0, -5, 25]))

        # Act / Assert
        assert stage.page_size_options == [10, 25]

    def test_plain_paginate_offers_none(self, seven_items: List[Dict[str, Any]]) -> None:
        """
        SCENARIO: paginate() called without options
        EXPECTED: Empty option list
        """
        # Act
        window = paginate(seven_items, 1, 3)

        # Assert
        assert window.page_info.page_size_options == []
