"""Unit tests for paging configuration and page coercion."""

from __future__ import annotations

import pydantic
import pytest

from wedata.fetch.core import FetchMode, PlanningError
from wedata.fetch.models import PageResult
from wedata.fetch.runtime.paging import DEFAULT_PAGE_SIZE, FetchConfig, coerce_page


class TestFetchConfig:
    """Test FetchConfig defaults and validation."""

    def test_defaults(self):
        """Test default configuration favours parallel fetching."""
        config = FetchConfig()

        assert config.page_size == DEFAULT_PAGE_SIZE == 10000
        assert config.concurrency is None
        assert config.mode is FetchMode.PARALLEL

    @pytest.mark.parametrize("page_size", [0, -5])
    def test_invalid_page_size(self, page_size):
        """Test non-positive page size is rejected before any request."""
        with pytest.raises(PlanningError):
            FetchConfig(page_size=page_size)

    @pytest.mark.parametrize("concurrency", [0, -1])
    def test_invalid_concurrency(self, concurrency):
        """Test non-positive concurrency is rejected."""
        with pytest.raises(PlanningError, match="concurrency"):
            FetchConfig(concurrency=concurrency)


class TestCoercePage:
    """Test coerce_page conversion."""

    def test_page_result_passthrough(self):
        """Test PageResult instances are returned as is."""
        page = PageResult(documents=[{"id": 1}], total=1)
        assert coerce_page(page) is page

    def test_mapping_is_validated(self):
        """Test a decoded response body becomes a PageResult."""
        page = coerce_page({"documents": [{"id": 1}], "total": 3, "queryTime": 4})

        assert isinstance(page, PageResult)
        assert page.documents == [{"id": 1}]
        assert page.total == 3

    def test_missing_total_rejected(self):
        """Test a body without total fails validation."""
        with pytest.raises(pydantic.ValidationError):
            coerce_page({"documents": []})
