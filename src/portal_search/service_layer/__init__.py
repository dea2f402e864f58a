"""Service layer - search facade orchestrating entities, storage and the engine."""

from .search_service import SearchService


__all__ = [
    "SearchService",
]
