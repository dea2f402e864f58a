"""Stateless search pipeline: normalize, filter, rank, paginate."""

from __future__ import annotations

from collections.abc import Iterable
import logging

from portal_search.config import Settings
from portal_search.domain.model import Candidate, Page, SearchRequest, TermMode
from portal_search.search.analyzers import CasePolicy, normalize_query
from portal_search.search.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE, Paginator
from portal_search.search.predicates import apply_predicate, build_predicate
from portal_search.search.ranking import rank
from portal_search.search.schema import SearchableEntity


logger = logging.getLogger(__name__)


class SearchEngine:
    """Run one search request against a stream of candidates.

    Holds configuration only. Every call is independent, so one engine can
    serve concurrent callers without locking.
    """

    def __init__(
        self,
        *,
        case_sensitive: bool = False,
        default_term_mode: TermMode = TermMode.ALL,
        default_page_size: int = DEFAULT_PAGE_SIZE,
        max_page_size: int = MAX_PAGE_SIZE,
    ) -> None:
        self.case_policy = CasePolicy(case_sensitive=case_sensitive)
        self.default_term_mode = default_term_mode
        self.paginator = Paginator(default_page_size=default_page_size, max_page_size=max_page_size)

    @classmethod
    def from_settings(cls, settings: Settings) -> SearchEngine:
        return cls(
            case_sensitive=settings.case_sensitive,
            default_term_mode=TermMode(settings.default_term_mode),
            default_page_size=settings.default_page_size,
            max_page_size=settings.max_page_size,
        )

    def resolve_term_mode(self, entity: SearchableEntity, request: SearchRequest) -> TermMode:
        return request.term_mode or entity.term_mode or self.default_term_mode

    def execute(self, entity: SearchableEntity, request: SearchRequest, candidates: Iterable[Candidate]) -> Page:
        """Filter, rank and paginate ``candidates`` for ``request``.

        Args:
            entity: Entity declaration
            request: The search request
            candidates: Candidate stream from the storage layer

        Returns:
            The requested page plus the total match count

        Raises:
            SearchConfigurationError: On unknown filters or tenancy mismatches
        """
        terms = normalize_query(request.query, self.case_policy)
        predicate = build_predicate(
            entity,
            terms,
            filters=request.filters,
            tenant_id=request.tenant_id,
            term_mode=self.resolve_term_mode(entity, request),
        )

        matched = apply_predicate(predicate, candidates)
        ranked = rank(matched, terms, entity)
        page = self.paginator.paginate(ranked, page=request.page, page_size=request.page_size)

        logger.debug(
            "Search on %s: %d terms, %d matches, page %d (%d items)",
            entity.name,
            len(terms),
            page.total,
            page.page,
            len(page.items),
        )
        return page
