"""Type aliases for crossquery package.

This module provides reusable type definitions to ensure consistency
across the codebase and improve code readability.
"""

from typing import Tuple, Union

from .schema import DocumentSearchPayload, RelationalSearchPayload

# Any search request the engine accepts
Payload = Union[RelationalSearchPayload, DocumentSearchPayload]

# Relational ordering: path segments followed by ASC/DESC
OrderTuple = Tuple[str, ...]
