"""Query normalization for the substring search engine.

Free text is split on runs of whitespace into terms. There is no stemming,
stopword removal or fuzzy expansion: a term is matched verbatim as a
substring. The only transformation is the case policy, which is chosen once
per call and applied identically to terms and field values.
"""

from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass
import re


_WHITESPACE = re.compile(r"\s+", re.UNICODE)


@dataclass(frozen=True)
class CasePolicy:
    """Normalizes text before substring comparison."""

    case_sensitive: bool = False

    def __call__(self, text: str) -> str:
        if self.case_sensitive:
            return text
        return text.casefold()


CASE_INSENSITIVE = CasePolicy(case_sensitive=False)
CASE_SENSITIVE = CasePolicy(case_sensitive=True)


@dataclass(frozen=True)
class QueryTerms(Sequence[str]):
    """Immutable, restartable sequence of normalized query terms.

    ``raw`` keeps the terms as typed; iteration yields them with the case
    policy applied, so every field sees the same form of each term.
    """

    raw: tuple[str, ...] = ()
    case_policy: CasePolicy = CASE_INSENSITIVE

    @classmethod
    def empty(cls, case_policy: CasePolicy = CASE_INSENSITIVE) -> QueryTerms:
        return cls((), case_policy)

    def __iter__(self) -> Iterator[str]:
        return (self.case_policy(term) for term in self.raw)

    def __getitem__(self, index):  # type: ignore[override]
        if isinstance(index, slice):
            return QueryTerms(self.raw[index], self.case_policy)
        return self.case_policy(self.raw[index])

    def __len__(self) -> int:
        return len(self.raw)

    def is_empty(self) -> bool:
        return not self.raw


def split_terms(raw_query: str | None) -> tuple[str, ...]:
    """Split raw text on whitespace runs, dropping empty pieces."""
    if raw_query is None:
        return ()
    stripped = raw_query.strip()
    if not stripped:
        return ()
    return tuple(term for term in _WHITESPACE.split(stripped) if term)


def normalize_query(raw_query: str | None, case_policy: CasePolicy = CASE_INSENSITIVE) -> QueryTerms:
    """Turn a raw query string into the terms used for matching and scoring.

    Args:
        raw_query: User text, possibly None or blank
        case_policy: Case handling shared by every field in this call

    Returns:
        QueryTerms, empty when the query is blank
    """
    terms = split_terms(raw_query)
    if not terms:
        return QueryTerms.empty(case_policy)
    return QueryTerms(terms, case_policy)
