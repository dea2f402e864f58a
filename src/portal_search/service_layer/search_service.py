"""Search service orchestration layer.

The facade the (excluded) controller layer calls: one ``search`` per entity
kind. It looks up the entity declaration, pulls candidates from the storage
collaborator and runs the generic engine. Tenant scope arrives already
resolved by the authorization layer and is trusted as given.
"""

from contextlib import ExitStack
import logging
from typing import Any

from portal_search.adapters.candidate_source import AbstractCandidateSource
from portal_search.config import Settings, get_settings
from portal_search.domain.errors import SearchConfigurationError, UnknownTermModeError
from portal_search.domain.model import Page, SearchRequest, TenantId, TermMode
from portal_search.observability import (
    SEARCH_ERRORS,
    SEARCH_LATENCY,
    SEARCH_REQUESTS,
    SEARCH_RESULTS,
    create_span,
    search_context,
    track_latency,
)
from portal_search.registry import EntityRegistry, default_registry
from portal_search.search.engine import SearchEngine


logger = logging.getLogger(__name__)


class SearchService:
    """High-level search orchestration service.

    Stateless between calls: the same instance can serve parallel callers.
    Total and page contents are computed from one pass over the candidate
    stream but are not isolated from concurrent writes in storage.
    """

    def __init__(
        self,
        candidate_source: AbstractCandidateSource,
        registry: EntityRegistry | None = None,
        settings: Settings | None = None,
        engine: SearchEngine | None = None,
    ):
        """Initialize search service with dependencies.

        Args:
            candidate_source: Storage collaborator providing candidates (required)
            registry: Entity declarations; defaults to the portal entities
            settings: Configuration; defaults to environment settings
            engine: Pre-built engine; defaults to one built from settings
        """
        self.candidate_source = candidate_source
        self.registry = registry if registry is not None else default_registry()
        self.settings = settings if settings is not None else get_settings()
        self.engine = engine if engine is not None else SearchEngine.from_settings(self.settings)

    def search(
        self,
        entity_kind: str,
        query: str | None = None,
        filters: dict[str, Any] | None = None,
        tenant_id: TenantId | None = None,
        page: int = 1,
        page_size: int | None = None,
        term_mode: TermMode | str | None = None,
    ) -> Page:
        """Search one entity kind.

        Args:
            entity_kind: Registered entity name ("users", "spaces", ...)
            query: Free text; blank or None matches everything
            filters: Filter name -> value; None values are not applied
            tenant_id: Tenant scope, or None for globally privileged callers
            page: 1-based page number (values below 1 become 1)
            page_size: Results per page (default and upper bound from settings)
            term_mode: Override the entity's term combination ("all"/"any")

        Returns:
            Page with ordered RankedResults and the total match count

        Raises:
            SearchConfigurationError: Unknown entity, filter or term mode, or bad wiring
        """
        request = SearchRequest(
            query=query,
            filters=filters or {},
            tenant_id=tenant_id,
            page=page,
            page_size=page_size,
            term_mode=self._parse_term_mode(entity_kind, term_mode),
        )
        return self.execute(entity_kind, request)

    def _parse_term_mode(self, entity_kind: str, term_mode: TermMode | str | None) -> TermMode | None:
        if term_mode is None:
            return None
        try:
            return TermMode(term_mode)
        except ValueError:
            exc = UnknownTermModeError(term_mode, [mode.value for mode in TermMode])
            self._configuration_failure(entity_kind, exc)
            raise exc from None

    def execute(self, entity_kind: str, request: SearchRequest) -> Page:
        """Run a prepared SearchRequest against ``entity_kind``."""
        with ExitStack() as stack:
            stack.enter_context(search_context(entity_kind, request.tenant_id))
            if self.settings.tracing_enabled:
                span = stack.enter_context(
                    create_span(
                        "search.execute",
                        attributes={
                            "search.entity": entity_kind,
                            "search.scoped": request.tenant_id is not None,
                            "search.page": request.page,
                        },
                    )
                )
            else:
                span = None
            if self.settings.metrics_enabled:
                stack.enter_context(track_latency(SEARCH_LATENCY, entity=entity_kind))

            try:
                entity = self.registry.require(entity_kind)
                candidates = self.candidate_source.candidates(entity.name, request.tenant_id)
                page = self.engine.execute(entity, request, candidates)
            except SearchConfigurationError as exc:
                self._configuration_failure(entity_kind, exc)
                raise
            except Exception as exc:
                logger.warning("Search on %s failed: %s: %s", entity_kind, type(exc).__name__, exc)
                self._record_failure(entity_kind, exc)
                raise

            if span is not None:
                span.set_attribute("search.total", page.total)
                span.set_attribute("search.returned", len(page.items))
            if self.settings.metrics_enabled:
                SEARCH_REQUESTS.labels(entity=entity_kind, status="ok").inc()
                SEARCH_RESULTS.labels(entity=entity_kind).observe(page.total)

        logger.info(
            "Search on %s returned %d of %d results (page %d)",
            entity_kind,
            len(page.items),
            page.total,
            page.page,
        )
        return page

    def resolve(self, entity_kind: str, page: Page) -> list[Any]:
        """Translate a page's ids back into stored records, preserving order."""
        entity = self.registry.require(entity_kind)
        return self.candidate_source.fetch_many(entity.name, page.ids)

    def _configuration_failure(self, entity_kind: str, exc: SearchConfigurationError) -> None:
        logger.error("Search configuration error on %s: %s", entity_kind, exc)
        self._record_failure(entity_kind, exc)

    def _record_failure(self, entity_kind: str, exc: Exception) -> None:
        if not self.settings.metrics_enabled:
            return
        SEARCH_REQUESTS.labels(entity=entity_kind, status="error").inc()
        SEARCH_ERRORS.labels(entity=entity_kind, error_type=type(exc).__name__).inc()
