"""Query DSL module.

Builders that translate search payloads into backend-native queries:
a join tree plus WHERE mapping for relational stores, and a nested filter
or an aggregation pipeline for document stores. Operator translation is
handled by the `compilers` subpackage.
"""

from .builders import DocumentPipelineBuilder, RelationalQueryBuilder, build_filter

__all__ = ("DocumentPipelineBuilder", "RelationalQueryBuilder", "build_filter")
