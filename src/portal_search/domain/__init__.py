"""Domain layer - request/result value objects and the error taxonomy.

Nothing here depends on storage, HTTP or observability.
"""

from portal_search.domain.errors import (
    EntityWiringError,
    SearchConfigurationError,
    UnknownEntityError,
    UnknownFilterError,
    UnknownTermModeError,
)
from portal_search.domain.model import (
    Candidate,
    Page,
    RankedResult,
    RecordId,
    SearchRequest,
    TenantId,
    TermMode,
)


__all__ = [
    "Candidate",
    "EntityWiringError",
    "Page",
    "RankedResult",
    "RecordId",
    "SearchConfigurationError",
    "SearchRequest",
    "TenantId",
    "TermMode",
    "UnknownEntityError",
    "UnknownFilterError",
    "UnknownTermModeError",
]
