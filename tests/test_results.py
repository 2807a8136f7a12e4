"""Tests for result assembly and facet extraction."""

import pytest

from crossquery.results import ResultAssembler, extract_facet
from crossquery.schema import SearchResult


@pytest.fixture
def assembler():
    return ResultAssembler(page_size=10)


class TestTotalPages:
    @pytest.mark.parametrize("total,count,expected", [(25, 10, 3), (0, 10, 0), (10, 10, 1), (11, 10, 2), (1, 100, 1)])
    def test_ceil(self, assembler, total, count, expected):
        assert assembler.assemble([], total, limit=count).total_pages == expected

    def test_zero_count_has_no_pages(self, assembler):
        result = assembler.assemble([], 25, limit=0, offset=30)
        assert result.count == 0
        assert result.total_pages == 0
        assert result.page == 1


class TestPage:
    @pytest.mark.parametrize("offset,limit,expected", [(None, 10, 1), (0, 10, 1), (10, 10, 2), (25, 10, 3), (40, 20, 3)])
    def test_page_from_offset(self, assembler, offset, limit, expected):
        assert assembler.assemble([], 100, limit=limit, offset=offset).page == expected

    def test_missing_limit_uses_page_size(self, assembler):
        result = assembler.assemble(["a", "b"], 25, offset=20)
        assert result.count == 10
        assert result.page == 3
        assert result.total_pages == 3
        assert result.items == ["a", "b"]


class TestExtractFacet:
    def test_regular_output(self):
        items, total = extract_facet([{"items": [{"_id": 1}], "total": [{"count": 7}]}])
        assert items == [{"_id": 1}]
        assert total == 7

    @pytest.mark.parametrize(
        "output",
        [[], None, [{}], [{"items": [], "total": []}], [{"items": None, "total": None}]],
    )
    def test_empty_output_is_valid(self, output):
        assert extract_facet(output) == ([], 0)

    def test_from_facet_empty_match(self, assembler):
        result = assembler.from_facet([{"items": [], "total": []}], limit=10, offset=0)
        assert isinstance(result, SearchResult)
        assert result.items == []
        assert result.total == 0
        assert result.total_pages == 0
