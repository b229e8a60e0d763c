"""
Tests for pagination rules.
"""

import pytest

from horizon_api.domain.pagination import (
    DEFAULT_PAGE_INDEX,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    Page,
    PageParam,
    calculate_offset,
    create_default_page_param,
    create_page,
    is_valid_page_param,
)


class TestCalculateOffset:
    """Test row offset computation."""

    @pytest.mark.parametrize(
        "page_index,page_size,expected",
        [(1, 10, 0), (2, 10, 10), (3, 10, 20), (1, 100, 0), (5, 1, 4)],
    )
    def test_offset(self, page_index, page_size, expected):
        assert calculate_offset(page_index, page_size) == expected


class TestCreatePage:
    """Test Page construction."""

    def test_page_count_rounds_up(self):
        page = create_page(PageParam(1, 10), 25, list(range(10)))
        assert page.page_count == 3
        assert page.data_count == 25
        assert page.page_index == 1
        assert page.page_size == 10
        assert len(page.data) == 10

    def test_exact_multiple(self):
        page = create_page(PageParam(2, 10), 20, list(range(10)))
        assert page.page_count == 2

    def test_no_data(self):
        """Test an empty result has zero pages."""
        page = create_page(PageParam(1, 10), 0, [])
        assert page.page_count == 0
        assert page.data == []

    def test_page_past_end(self):
        """Test a page past the last one keeps the totals."""
        page = create_page(PageParam(10, 10), 5, [])
        assert page.page_count == 1
        assert page.data_count == 5
        assert page.data == []

    def test_data_is_copied_to_list(self):
        page = create_page(PageParam(1, 3), 3, ("a", "b", "c"))
        assert isinstance(page, Page)
        assert page.data == ["a", "b", "c"]


class TestIsValidPageParam:
    """Test page parameter validation."""

    @pytest.mark.parametrize(
        "page_index,page_size",
        [(1, 1), (1, 20), (3, MAX_PAGE_SIZE), (1000, 50)],
    )
    def test_valid(self, page_index, page_size):
        assert is_valid_page_param(PageParam(page_index, page_size)) is True

    @pytest.mark.parametrize(
        "page_index,page_size",
        [(0, 10), (-1, 10), (1, 0), (1, -5), (1, MAX_PAGE_SIZE + 1)],
    )
    def test_invalid(self, page_index, page_size):
        assert is_valid_page_param(PageParam(page_index, page_size)) is False


class TestDefaults:
    """Test default page parameters."""

    def test_default_values(self):
        param = create_default_page_param()
        assert param.page_index == DEFAULT_PAGE_INDEX == 1
        assert param.page_size == DEFAULT_PAGE_SIZE == 20

    def test_fresh_value_each_call(self):
        assert create_default_page_param() is not create_default_page_param()

    def test_default_is_valid(self):
        assert is_valid_page_param(create_default_page_param())

    def test_page_param_is_frozen(self):
        param = create_default_page_param()
        with pytest.raises(AttributeError):
            param.page_index = 5
