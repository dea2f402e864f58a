"""Error taxonomy for the search engine.

Configuration errors mean the caller and the engine disagree about what an
entity looks like. They are raised immediately and must be fixed in code.
Input errors (blank queries, pages past the end, unparseable filter values)
never raise; each has a fallback in the component that meets it.
"""


class SearchConfigurationError(Exception):
    """Base class for caller/engine wiring mismatches."""


class UnknownEntityError(SearchConfigurationError):
    """Raised when a search names an entity kind nobody registered."""

    def __init__(self, entity_kind: str, known: list[str] | None = None) -> None:
        self.entity_kind = entity_kind
        self.known = sorted(known or [])
        message = f"Unknown entity kind: {entity_kind!r}"
        if self.known:
            message = f"{message} (registered: {', '.join(self.known)})"
        super().__init__(message)


class UnknownFilterError(SearchConfigurationError):
    """Raised when a filter name is not in the entity's filter registry."""

    def __init__(self, entity_kind: str, filter_name: str, known: list[str] | None = None) -> None:
        self.entity_kind = entity_kind
        self.filter_name = filter_name
        self.known = sorted(known or [])
        message = f"Unknown filter {filter_name!r} for entity {entity_kind!r}"
        if self.known:
            message = f"{message} (registered: {', '.join(self.known)})"
        super().__init__(message)


class EntityWiringError(SearchConfigurationError):
    """Raised when an entity declaration is incomplete or inconsistent."""


class UnknownTermModeError(SearchConfigurationError):
    """Raised when a request asks for a term mode the engine does not know."""

    def __init__(self, term_mode: object, known: list[str]) -> None:
        self.term_mode = term_mode
        self.known = list(known)
        super().__init__(f"Unknown term mode {term_mode!r} (expected one of: {', '.join(self.known)})")
