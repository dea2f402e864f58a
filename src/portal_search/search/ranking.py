"""Relevance scoring and deterministic ordering.

score = number of (term, field) pairs where the field contains the term.
A record matching one term in three fields therefore outranks a record
matching two terms in one field each.

Ordering is score descending, then the entity's secondary sort fields, then
candidate id ascending, so equal scores never produce an ambiguous order.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

from portal_search.domain.model import Candidate, RankedResult, RecordId
from portal_search.search.analyzers import QueryTerms
from portal_search.search.predicates import term_match_counts
from portal_search.search.schema import SearchableEntity, SearchField, SortField


@dataclass(frozen=True)
class ScoredCandidate:
    """Candidate paired with its score, before ordering."""

    candidate: Candidate
    score: int


def score_candidate(candidate: Candidate, terms: QueryTerms, fields: Sequence[SearchField]) -> int:
    """Count matched (term, field) pairs; zero when there are no terms."""
    if terms.is_empty():
        return 0
    return sum(term_match_counts(candidate, terms, fields))


def _sort_value(value: Any, descending: bool) -> tuple:
    # Missing values sort last in both directions.
    if value is None:
        return (0,) if descending else (1,)
    if isinstance(value, str):
        value = (value.casefold(), value)
    return (1, value) if descending else (0, value)


def _id_key(candidate_id: RecordId) -> tuple:
    if isinstance(candidate_id, int):
        return (0, candidate_id, "")
    return (1, 0, str(candidate_id))


def order_scored(scored: Iterable[ScoredCandidate], sort: Sequence[SortField]) -> list[ScoredCandidate]:
    """Order scored candidates deterministically.

    Uses successive stable sorts from the least to the most significant key,
    which lets each secondary field keep its own direction.
    """
    ordered = sorted(scored, key=lambda item: _id_key(item.candidate.id))
    for sort_field in reversed(sort):
        ordered.sort(
            key=lambda item, f=sort_field: _sort_value(f.read(item.candidate), f.descending),
            reverse=sort_field.descending,
        )
    ordered.sort(key=lambda item: item.score, reverse=True)
    return ordered


def rank(candidates: Iterable[Candidate], terms: QueryTerms, entity: SearchableEntity) -> list[RankedResult]:
    """Score and order candidates that already passed the predicate.

    Args:
        candidates: Filtered candidates
        terms: Normalized query terms
        entity: Entity declaration providing scored fields and sort order

    Returns:
        RankedResults in final order
    """
    fields = entity.scored_fields
    scored = [ScoredCandidate(candidate, score_candidate(candidate, terms, fields)) for candidate in candidates]
    return [
        RankedResult(
            candidate_id=item.candidate.id,
            score=item.score,
            tie_break=tuple(sort_field.read(item.candidate) for sort_field in entity.sort),
        )
        for item in order_scored(scored, entity.sort)
    ]
