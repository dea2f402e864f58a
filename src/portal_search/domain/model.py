"""Domain models for search requests and results.

Following Cosmic Python principles:
- Value Objects are immutable (frozen=True)
- No infrastructure dependencies

A request is built per call, consumed once and discarded. Candidates are
read-only projections of stored records that live for a single search call.
"""

from collections.abc import Mapping
from enum import Enum
import math
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


RecordId = str | int
TenantId = str | int


class TermMode(str, Enum):
    """How query terms combine when deciding whether a candidate matches."""

    ALL = "all"
    ANY = "any"


class Candidate(BaseModel):
    """Minimal projection of a stored record.

    ``values`` holds the searchable field values and filter attributes keyed
    by attribute name. ``tenant_id`` is already resolved by the storage layer.
    """

    model_config = ConfigDict(frozen=True)

    id: RecordId
    values: Mapping[str, Any] = Field(default_factory=dict)
    tenant_id: TenantId | None = None

    def get(self, attribute: str, default: Any = None) -> Any:
        """Return an attribute value, or ``default`` when the record lacks it."""
        return self.values.get(attribute, default)


class SearchRequest(BaseModel):
    """Value object describing one search call.

    ``page`` values at or below 1 (and missing pages) are coerced to 1.
    ``page_size`` of None means "use the configured default".
    """

    model_config = ConfigDict(frozen=True)

    query: str | None = None
    filters: dict[str, Any] = Field(default_factory=dict)
    tenant_id: TenantId | None = None
    page: int = 1
    page_size: int | None = None
    term_mode: TermMode | None = None

    @field_validator("page", mode="before")
    @classmethod
    def _coerce_page(cls, value: Any) -> int:
        if value is None:
            return 1
        try:
            page = int(value)
        except (TypeError, ValueError):
            return 1
        return max(page, 1)

    @field_validator("filters", mode="before")
    @classmethod
    def _default_filters(cls, value: Any) -> Any:
        return {} if value is None else value

    def active_filters(self) -> dict[str, Any]:
        """Return filters with an actual value; ``None`` means "not applied"."""
        return {name: value for name, value in self.filters.items() if value is not None}


class RankedResult(BaseModel):
    """A candidate that passed the predicate, with its relevance score."""

    model_config = ConfigDict(frozen=True)

    candidate_id: RecordId
    score: int = Field(ge=0)
    tie_break: tuple[Any, ...] = ()


class Page(BaseModel):
    """One slice of an ordered result list plus the total before slicing.

    The total and the page contents come from the same candidate stream but
    are not snapshot-isolated from concurrent writes in storage.
    """

    model_config = ConfigDict(frozen=True)

    items: list[RankedResult]
    page: int = Field(ge=1)
    page_size: int = Field(ge=1)
    total: int = Field(ge=0)

    @property
    def ids(self) -> list[RecordId]:
        return [item.candidate_id for item in self.items]

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.page_size) if self.total else 0

    @property
    def has_next(self) -> bool:
        return self.page < self.total_pages

    @property
    def has_previous(self) -> bool:
        return self.page > 1

    def __len__(self) -> int:
        return len(self.items)
