"""
Generic search, filter and ranking engine.

This package is entity-agnostic:
- analyzers: query normalization and case policy
- schema: declarative fields, filters and sort keys for an entity
- predicates: tenant/filter/term predicate builder
- ranking: relevance scoring and deterministic ordering
- pagination: fixed-size page slicing
- engine: runs the pipeline for one request
"""
