from .document import (
    DocumentPipeline,
    DocumentPipelineBuilder,
    DocumentQuery,
    build_filter,
    build_sort,
)
from .relational import (
    JoinNode,
    RelationalQuery,
    RelationalQueryBuilder,
    prepare_order,
)

__all__ = (
    "DocumentPipeline",
    "DocumentPipelineBuilder",
    "DocumentQuery",
    "build_filter",
    "build_sort",
    "JoinNode",
    "RelationalQuery",
    "RelationalQueryBuilder",
    "prepare_order",
)
