"""Adapters layer - storage collaborator contract and implementations.

Following Cosmic Python Chapter 2: Repository Pattern.
"""

from .candidate_source import (
    AbstractCandidateSource,
    InMemoryCandidateSource,
)


__all__ = [
    "AbstractCandidateSource",
    "InMemoryCandidateSource",
]
