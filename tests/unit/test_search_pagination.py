"""Unit tests for the paginator."""

import pytest

from portal_search.domain import RankedResult
from portal_search.search.pagination import Paginator


def _results(count: int) -> list[RankedResult]:
    return [RankedResult(candidate_id=index, score=0) for index in range(1, count + 1)]


class TestPaginator:
    def test_default_page_is_first_twenty(self):
        page = Paginator().paginate(_results(45))

        assert page.ids == list(range(1, 21))
        assert (page.page, page.page_size, page.total) == (1, 20, 45)

    def test_page_two_holds_ranks_21_to_40(self):
        page = Paginator().paginate(_results(45), page=2, page_size=20)
        assert page.ids == list(range(21, 41))

    def test_last_partial_page(self):
        page = Paginator().paginate(_results(45), page=3, page_size=20)
        assert page.ids == [41, 42, 43, 44, 45]
        assert not page.has_next

    def test_page_past_the_end_is_empty_with_total(self):
        page = Paginator().paginate(_results(45), page=4, page_size=20)

        assert page.items == []
        assert page.total == 45
        assert page.page == 4

    @pytest.mark.parametrize("requested", [0, -3, 1])
    def test_pages_below_one_become_one(self, requested):
        page = Paginator().paginate(_results(5), page=requested)
        assert page.page == 1
        assert page.ids == [1, 2, 3, 4, 5]

    def test_page_size_is_bounded(self):
        paginator = Paginator(default_page_size=20, max_page_size=50)

        assert len(paginator.paginate(_results(200), page_size=1000)) == 50
        assert paginator.paginate(_results(3), page_size=0).page_size == 1

    def test_pages_partition_the_results(self):
        results = _results(45)
        paginator = Paginator()
        first = paginator.paginate(results, page_size=7)

        collected = []
        for number in range(1, first.total_pages + 1):
            collected.extend(paginator.paginate(results, page=number, page_size=7).ids)

        assert first.total_pages == 7
        assert collected == [r.candidate_id for r in results]

    def test_empty_results(self):
        page = Paginator().paginate([])
        assert page.total == 0
        assert page.total_pages == 0
        assert not page.has_next
        assert not page.has_previous

    def test_navigation_flags(self):
        page = Paginator().paginate(_results(45), page=2)
        assert page.has_next
        assert page.has_previous
        assert page.total_pages == 3

    def test_rejects_inconsistent_bounds(self):
        with pytest.raises(ValueError, match="Invalid page bounds"):
            Paginator(default_page_size=50, max_page_size=10)
