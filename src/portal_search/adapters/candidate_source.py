"""Candidate source abstractions and implementations.

The storage layer owns records. The engine only asks it for a stream of
Candidates (with tenant ids already resolved) and, after ranking, for the
records behind a page of ids.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterable, Iterator, Mapping
import logging
from typing import TYPE_CHECKING, Any

from portal_search.domain.model import Candidate, RecordId, TenantId


if TYPE_CHECKING:
    from portal_search.registry import EntityRegistry


logger = logging.getLogger(__name__)


class AbstractCandidateSource(ABC):
    """Abstract storage collaborator.

    Implementations may narrow by tenant themselves; the engine applies the
    tenant predicate again either way, so a source can never widen a scope.
    Failures (storage unavailable, timeouts) propagate to the caller as-is.
    """

    @abstractmethod
    def candidates(self, entity_kind: str, tenant_id: TenantId | None = None) -> Iterable[Candidate]:
        """Return the candidate stream for an entity kind.

        Args:
            entity_kind: Registered entity name (e.g. "users")
            tenant_id: Tenant scope, or None for unscoped callers

        Returns:
            Iterable of Candidates with field values and tenant ids resolved
        """
        raise NotImplementedError

    @abstractmethod
    def fetch_many(self, entity_kind: str, ids: list[RecordId]) -> list[Any]:
        """Return the records for ``ids`` in the same order, skipping missing ones."""
        raise NotImplementedError


class InMemoryCandidateSource(AbstractCandidateSource):
    """In-memory candidate source for tests and small datasets.

    Records are plain mappings with an ``id`` key. The tenant of each record
    is read from the entity's tenant attribute when one is configured.
    """

    def __init__(self, tenant_attributes: Mapping[str, str | None] | None = None) -> None:
        self._records: dict[str, dict[RecordId, Mapping[str, Any]]] = {}
        self._tenant_attributes: dict[str, str | None] = dict(tenant_attributes or {})

    @classmethod
    def for_registry(cls, registry: "EntityRegistry") -> "InMemoryCandidateSource":
        """Create a source that resolves tenants the way each registered entity declares."""
        return cls({entity.name: entity.tenant_attribute for entity in registry.list_entities()})

    def add(self, entity_kind: str, record: Mapping[str, Any]) -> None:
        """Store a record, replacing any previous record with the same id."""
        if "id" not in record:
            raise ValueError(f"Record for {entity_kind!r} has no 'id': {record!r}")
        self._records.setdefault(entity_kind, {})[record["id"]] = dict(record)

    def extend(self, entity_kind: str, records: Iterable[Mapping[str, Any]]) -> None:
        for record in records:
            self.add(entity_kind, record)

    def remove(self, entity_kind: str, record_id: RecordId) -> bool:
        """Remove a record.

        Returns:
            True if a record was removed, False if not found
        """
        return self._records.get(entity_kind, {}).pop(record_id, None) is not None

    def count(self, entity_kind: str) -> int:
        return len(self._records.get(entity_kind, {}))

    def _tenant_of(self, entity_kind: str, record: Mapping[str, Any]) -> TenantId | None:
        attribute = self._tenant_attributes.get(entity_kind)
        if attribute is None:
            return None
        return record.get(attribute)

    def candidates(self, entity_kind: str, tenant_id: TenantId | None = None) -> Iterator[Candidate]:
        for record in list(self._records.get(entity_kind, {}).values()):
            record_tenant = self._tenant_of(entity_kind, record)
            if tenant_id is not None and str(record_tenant) != str(tenant_id):
                continue
            yield Candidate(id=record["id"], values=record, tenant_id=record_tenant)

    def fetch_many(self, entity_kind: str, ids: list[RecordId]) -> list[Mapping[str, Any]]:
        records = self._records.get(entity_kind, {})
        found = [records[record_id] for record_id in ids if record_id in records]
        if len(found) != len(ids):
            logger.debug("fetch_many(%s): %d of %d ids no longer exist", entity_kind, len(ids) - len(found), len(ids))
        return found
