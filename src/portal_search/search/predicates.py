"""Predicate builder: turns terms, filters and tenant scope into one check.

The predicate is built once per call and then answered per candidate. Parts
are evaluated cheapest-first (tenant, filters, terms) and short-circuit.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
import logging
from typing import Any, Protocol

from portal_search.domain.errors import EntityWiringError, UnknownFilterError
from portal_search.domain.model import Candidate, TenantId, TermMode
from portal_search.search.analyzers import CasePolicy, QueryTerms
from portal_search.search.schema import SearchableEntity, SearchField, SearchFilter


logger = logging.getLogger(__name__)


class CandidatePredicate(Protocol):
    """Protocol implemented by every predicate part."""

    def __call__(self, candidate: Candidate) -> bool:  # pragma: no cover - interface definition
        ...

    def describe(self) -> dict[str, Any]:  # pragma: no cover - interface definition
        ...


def field_texts(value: Any, case_policy: CasePolicy) -> tuple[str, ...]:
    """Normalize a field value into the strings terms are matched against.

    None yields nothing; lists, tuples and sets yield one string per element.
    """
    if value is None:
        return ()
    if isinstance(value, str):
        return (case_policy(value),)
    if isinstance(value, (list, tuple, set, frozenset)):
        return tuple(case_policy(str(item)) for item in value if item is not None)
    return (case_policy(str(value)),)


def field_contains(texts: Sequence[str], term: str) -> bool:
    return any(term in text for text in texts)


def term_match_counts(
    candidate: Candidate,
    terms: QueryTerms,
    fields: Sequence[SearchField],
) -> tuple[int, ...]:
    """Return, per term, how many fields of the candidate contain it."""
    texts = [field_texts(search_field.read(candidate), terms.case_policy) for search_field in fields]
    return tuple(sum(1 for field_text in texts if field_contains(field_text, term)) for term in terms)


@dataclass(frozen=True)
class TenantPredicate:
    """Keeps only candidates belonging to one tenant."""

    tenant_id: TenantId

    def __call__(self, candidate: Candidate) -> bool:
        if candidate.tenant_id is None:
            return False
        return str(candidate.tenant_id) == str(self.tenant_id)

    def describe(self) -> dict[str, Any]:
        return {"tenant": self.tenant_id}


@dataclass(frozen=True)
class CompiledFilter:
    """A registry filter paired with its parsed request value."""

    search_filter: SearchFilter
    parsed: Any

    def __call__(self, candidate: Candidate) -> bool:
        return self.search_filter.matches(candidate, self.parsed)

    def describe(self) -> dict[str, Any]:
        parsed = sorted(self.parsed) if isinstance(self.parsed, frozenset) else self.parsed
        return {"filter": self.search_filter.name, "value": parsed}


@dataclass(frozen=True)
class TermPredicate:
    """Substring match of query terms across the entity's fields.

    ALL: every term must appear in at least one field.
    ANY: at least one term must appear in at least one field.
    """

    terms: QueryTerms
    fields: tuple[SearchField, ...]
    mode: TermMode = TermMode.ALL

    def __call__(self, candidate: Candidate) -> bool:
        if self.terms.is_empty():
            return True
        counts = term_match_counts(candidate, self.terms, self.fields)
        if self.mode is TermMode.ANY:
            return any(counts)
        return all(counts)

    def describe(self) -> dict[str, Any]:
        return {
            "terms": list(self.terms),
            "fields": [f.name for f in self.fields],
            "mode": self.mode.value,
        }


@dataclass(frozen=True)
class AllOf:
    """Conjunction of predicate parts, evaluated in order."""

    parts: tuple[CandidatePredicate, ...] = ()

    def __call__(self, candidate: Candidate) -> bool:
        return all(part(candidate) for part in self.parts)

    def describe(self) -> dict[str, Any]:
        return {"all_of": [part.describe() for part in self.parts]}


def compile_filters(entity: SearchableEntity, filters: Mapping[str, Any]) -> list[CompiledFilter]:
    """Resolve request filters against the entity's registry.

    Raises:
        UnknownFilterError: If a filter name is not registered for the entity
    """
    compiled: list[CompiledFilter] = []
    for name, value in filters.items():
        search_filter = entity.get_filter(name)
        if search_filter is None:
            raise UnknownFilterError(entity.name, name, entity.filter_names)
        if value is None:
            continue
        parsed = search_filter.parse(value)
        if parsed is None:
            continue
        compiled.append(CompiledFilter(search_filter, parsed))
    return compiled


def build_predicate(
    entity: SearchableEntity,
    terms: QueryTerms,
    filters: Mapping[str, Any] | None = None,
    tenant_id: TenantId | None = None,
    term_mode: TermMode = TermMode.ALL,
) -> AllOf:
    """Build the predicate for one search call.

    Args:
        entity: Entity declaration providing fields and the filter registry
        terms: Normalized query terms (may be empty)
        filters: Filter name -> request value; None values are not applied
        tenant_id: Tenant to scope to, or None for an unscoped caller
        term_mode: How terms combine

    Returns:
        Conjunctive predicate over tenant, filters and terms

    Raises:
        UnknownFilterError: For filter names missing from the registry
        EntityWiringError: When a tenant is given for an entity without tenancy
    """
    parts: list[CandidatePredicate] = []

    if tenant_id is not None:
        if not entity.supports_tenancy:
            raise EntityWiringError(f"Entity {entity.name!r} has no tenant attribute but a tenant scope was given")
        parts.append(TenantPredicate(tenant_id))
        parts.extend(compile_filters(entity, entity.scoped_filters))

    parts.extend(compile_filters(entity, filters or {}))

    if not terms.is_empty():
        parts.append(TermPredicate(terms, tuple(entity.fields), term_mode))

    predicate = AllOf(tuple(parts))
    logger.debug("Built predicate for %s: %s", entity.name, predicate.describe())
    return predicate


def apply_predicate(predicate: CandidatePredicate, candidates: Iterable[Candidate]) -> list[Candidate]:
    """Return the candidates that satisfy the predicate, in input order."""
    return [candidate for candidate in candidates if predicate(candidate)]
