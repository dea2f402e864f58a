"""Fixed-size pagination over a fully ordered result list."""

from __future__ import annotations

from collections.abc import Sequence

from portal_search.domain.model import Page, RankedResult


DEFAULT_PAGE_SIZE = 20
MAX_PAGE_SIZE = 100


class Paginator:
    """Slices ordered results into 1-based pages.

    Page numbers at or below 1 become 1. Page sizes are clamped to
    ``[1, max_page_size]``. A page past the end is empty, not an error, and
    still reports the full total.
    """

    def __init__(self, default_page_size: int = DEFAULT_PAGE_SIZE, max_page_size: int = MAX_PAGE_SIZE) -> None:
        if default_page_size < 1 or max_page_size < default_page_size:
            raise ValueError(
                f"Invalid page bounds: default_page_size={default_page_size}, max_page_size={max_page_size}"
            )
        self.default_page_size = default_page_size
        self.max_page_size = max_page_size

    def resolve_page_size(self, page_size: int | None) -> int:
        if page_size is None:
            return self.default_page_size
        return max(1, min(page_size, self.max_page_size))

    def paginate(self, results: Sequence[RankedResult], page: int = 1, page_size: int | None = None) -> Page:
        """Return the slice ``[(page-1)*size, page*size)`` of ``results``."""
        page = max(page, 1)
        size = self.resolve_page_size(page_size)
        start = (page - 1) * size
        return Page(items=list(results[start : start + size]), page=page, page_size=size, total=len(results))
