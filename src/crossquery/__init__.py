"""
This __init__.py file makes the crossquery directory a Python package
and exposes the main `SearchEngine` and payload classes for easy access.
"""

from .abc import DocumentCursor, DocumentHandle, RelationalHandle
from .constants import Operator, SortOrder
from .engine import SearchEngine
from .schema import (
    Criterion,
    DocumentSearchPayload,
    Lookup,
    Pagination,
    RelatedEntity,
    RelationalSearchPayload,
    SearchResult,
    SortSpec,
)

__version__ = "0.1.0"

__all__ = [
    "SearchEngine",
    "RelationalHandle",
    "DocumentHandle",
    "DocumentCursor",
    "Operator",
    "SortOrder",
    "Criterion",
    "Pagination",
    "SortSpec",
    "Lookup",
    "RelatedEntity",
    "RelationalSearchPayload",
    "DocumentSearchPayload",
    "SearchResult",
]
