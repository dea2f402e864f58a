"""Entity registry powering the search facade."""

from collections.abc import Iterable
from typing import Any

from portal_search.domain.errors import EntityWiringError, UnknownEntityError
from portal_search.entities import portal_entities
from portal_search.search.schema import SearchableEntity


class EntityRegistry:
    """Central registry of searchable entity declarations.

    Usage:
        registry = EntityRegistry()
        registry.register(users_entity())

        entity = registry.require("users")
        all_entities = registry.list_entities()
    """

    def __init__(self, entities: Iterable[SearchableEntity] = ()) -> None:
        """Initialize the registry, optionally with initial entities."""
        self._entities: dict[str, SearchableEntity] = {}
        for entity in entities:
            self.register(entity)

    def register(self, entity: SearchableEntity, *, replace: bool = False) -> None:
        """Register an entity declaration.

        Args:
            entity: Declaration to register
            replace: Allow overwriting an existing declaration with the same name

        Raises:
            EntityWiringError: If the name is taken and ``replace`` is False
        """
        if entity.name in self._entities and not replace:
            raise EntityWiringError(f"Entity {entity.name!r} is already registered")
        self._entities[entity.name] = entity

    def get_entity(self, name: str) -> SearchableEntity | None:
        """Get an entity by name, or None if not registered."""
        return self._entities.get(name)

    def require(self, name: str) -> SearchableEntity:
        """Get an entity by name.

        Raises:
            UnknownEntityError: If no entity is registered under ``name``
        """
        entity = self._entities.get(name)
        if entity is None:
            raise UnknownEntityError(name, self.list_names())
        return entity

    def list_entities(self) -> list[SearchableEntity]:
        return list(self._entities.values())

    def list_names(self) -> list[str]:
        return list(self._entities.keys())

    def describe(self) -> list[dict[str, Any]]:
        """Return a JSON-serializable summary of every registered entity."""
        return [entity.to_dict() for entity in self._entities.values()]

    def __len__(self) -> int:
        return len(self._entities)

    def __contains__(self, name: str) -> bool:
        return name in self._entities


def default_registry() -> EntityRegistry:
    """Registry holding the portal's users, spaces, institutions and recordings."""
    return EntityRegistry(portal_entities())
