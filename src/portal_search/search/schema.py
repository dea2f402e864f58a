"""
Declarative description of a searchable entity.

An entity is described by:
- SearchField: a value read from a candidate and matched against query terms
- SearchFilter: a named attribute filter (tri-state, tags, membership)
- SortField: one component of the secondary ordering used to break score ties

Entities only declare what to match, filter and sort on. The generic
predicate builder and scorer do the work, so no entity carries its own
matching or ordering code.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
import logging
from typing import Any

from portal_search.domain.errors import EntityWiringError
from portal_search.domain.model import Candidate, TermMode


logger = logging.getLogger(__name__)

Accessor = Callable[[Candidate], Any]

_TRUE_STRINGS = frozenset({"true", "1", "yes", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "off"})


class FilterType(str, Enum):
    """Types of filters supported in an entity's registry."""

    TRI_STATE = "tri_state"
    TAGS = "tags"
    MEMBERSHIP = "membership"


@dataclass(frozen=True)
class SearchField:
    """
    A field whose value is matched against query terms.

    Args:
        name: Field name (e.g., "full_name", "room_name")
        attribute: Candidate attribute to read (default: same as name)
        scored: Whether matches on this field count toward relevance
        accessor: Optional callable used instead of ``attribute``
    """

    name: str
    attribute: str | None = None
    scored: bool = True
    accessor: Accessor | None = None

    def read(self, candidate: Candidate) -> Any:
        if self.accessor is not None:
            return self.accessor(candidate)
        return candidate.get(self.attribute or self.name)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the field definition (accessors are not serializable)."""
        return {"name": self.name, "attribute": self.attribute or self.name, "scored": self.scored}


def _split_values(value: Any) -> list[str]:
    """Accept a comma-separated string or an iterable of strings."""
    if isinstance(value, str):
        pieces = value.split(",")
    elif isinstance(value, Iterable):
        pieces = [str(item) for item in value]
    else:
        pieces = [str(value)]
    return [piece.strip() for piece in pieces if piece.strip()]


@dataclass(frozen=True)
class SearchFilter(ABC):
    """Base class for named filters."""

    name: str
    attribute: str | None = None
    accessor: Accessor | None = None

    @property
    @abstractmethod
    def filter_type(self) -> FilterType:
        """Return the filter type."""

    @abstractmethod
    def parse(self, value: Any) -> Any:
        """Return the parsed filter value, or None when the filter should not apply."""

    @abstractmethod
    def matches(self, candidate: Candidate, parsed: Any) -> bool:
        """Check a candidate against an already parsed value."""

    def read(self, candidate: Candidate) -> Any:
        if self.accessor is not None:
            return self.accessor(candidate)
        return candidate.get(self.attribute or self.name)

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "type": self.filter_type.value, "attribute": self.attribute or self.name}


@dataclass(frozen=True)
class TriStateFilter(SearchFilter):
    """
    Boolean attribute filter where ``False`` also matches unset attributes.

    ``True`` keeps candidates whose attribute is truthy. ``False`` keeps
    candidates whose attribute is falsy or missing. Accepts booleans and the
    strings "true"/"false" (any case). Anything else is not applied.
    """

    @property
    def filter_type(self) -> FilterType:
        return FilterType.TRI_STATE

    def parse(self, value: Any) -> bool | None:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        logger.warning("Ignoring unparseable value %r for tri-state filter %s", value, self.name)
        return None

    def matches(self, candidate: Candidate, parsed: bool) -> bool:
        actual = bool(self.read(candidate))
        return actual is parsed


@dataclass(frozen=True)
class TagFilter(SearchFilter):
    """
    Multi-valued attribute filter requiring every requested tag.

    Tags compare exactly after trimming. ``"extra tag, one tag"`` keeps only
    candidates tagged with both.
    """

    @property
    def filter_type(self) -> FilterType:
        return FilterType.TAGS

    def parse(self, value: Any) -> frozenset[str] | None:
        tags = frozenset(_split_values(value))
        return tags or None

    def matches(self, candidate: Candidate, parsed: frozenset[str]) -> bool:
        raw = self.read(candidate) or ()
        present = {str(tag).strip() for tag in raw}
        return parsed <= present


@dataclass(frozen=True)
class MembershipFilter(SearchFilter):
    """
    Single-valued attribute filter matching any of the requested values.

    Values that exist nowhere simply match no candidate.
    """

    @property
    def filter_type(self) -> FilterType:
        return FilterType.MEMBERSHIP

    def parse(self, value: Any) -> frozenset[str] | None:
        values = frozenset(_split_values(value))
        return values or None

    def matches(self, candidate: Candidate, parsed: frozenset[str]) -> bool:
        actual = self.read(candidate)
        if actual is None:
            return False
        return str(actual) in parsed


@dataclass(frozen=True)
class SortField:
    """One component of an entity's secondary ordering."""

    attribute: str
    descending: bool = False

    def read(self, candidate: Candidate) -> Any:
        return candidate.get(self.attribute)


@dataclass
class SearchableEntity:
    """
    Everything the generic engine needs to know about one entity kind.

    Example:
        entity = SearchableEntity(
            name="spaces",
            fields=[SearchField("name")],
            filters=[TriStateFilter("approved"), TriStateFilter("disabled"), TagFilter("tag", attribute="tags")],
            tenant_attribute="institution_id",
            sort=[SortField("name")],
            scoped_filters={"disabled": False},
        )
    """

    name: str
    fields: list[SearchField]
    filters: list[SearchFilter] = field(default_factory=list)
    tenant_attribute: str | None = None
    sort: list[SortField] = field(default_factory=list)
    term_mode: TermMode | None = None
    scoped_filters: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.fields:
            raise EntityWiringError(f"Entity {self.name!r} declares no search fields")

        field_names = [f.name for f in self.fields]
        if len(set(field_names)) != len(field_names):
            raise EntityWiringError(f"Entity {self.name!r} declares duplicate search fields: {field_names}")

        self._filter_map: dict[str, SearchFilter] = {}
        for search_filter in self.filters:
            if search_filter.name in self._filter_map:
                raise EntityWiringError(f"Entity {self.name!r} declares filter {search_filter.name!r} twice")
            self._filter_map[search_filter.name] = search_filter

        missing = [name for name in self.scoped_filters if name not in self._filter_map]
        if missing:
            raise EntityWiringError(f"Entity {self.name!r} has scoped filters outside its registry: {missing}")

    def __contains__(self, filter_name: str) -> bool:
        return filter_name in self._filter_map

    @property
    def filter_names(self) -> list[str]:
        return list(self._filter_map)

    @property
    def scored_fields(self) -> list[SearchField]:
        return [f for f in self.fields if f.scored]

    @property
    def supports_tenancy(self) -> bool:
        return self.tenant_attribute is not None

    def get_filter(self, name: str) -> SearchFilter | None:
        return self._filter_map.get(name)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entity declaration for diagnostics."""
        return {
            "name": self.name,
            "fields": [f.to_dict() for f in self.fields],
            "filters": [f.to_dict() for f in self.filters],
            "tenant_attribute": self.tenant_attribute,
            "sort": [{"attribute": s.attribute, "descending": s.descending} for s in self.sort],
            "term_mode": self.term_mode.value if self.term_mode else None,
            "scoped_filters": dict(self.scoped_filters),
        }
