"""Document-store operator translator.

Transforms operators into MongoDB query-operator documents.

Equality is always expressed with an explicit ``$eq`` so the condition
keeps its meaning inside ``$and`` wrappers and nested sub-documents.
LIKE and ILIKE both become a case-insensitive ``$regex``.
"""

from typing import Any, Sequence

from crossquery.constants import Operator

from .base import BaseTranslator

__all__ = (
    "DocumentTranslator",
    "document_translator",
)


class DocumentTranslator(BaseTranslator):
    backend = "document"

    _OP_MAP = {
        Operator.EQ: lambda values: {"$eq": values[0]},
        Operator.NEQ: lambda values: {"$ne": values[0]},
        Operator.GT: lambda values: {"$gt": values[0]},
        Operator.GTE: lambda values: {"$gte": values[0]},
        Operator.LT: lambda values: {"$lt": values[0]},
        Operator.LTE: lambda values: {"$lte": values[0]},
        Operator.LIKE: lambda values: {"$regex": values[0], "$options": "i"},
        Operator.ILIKE: lambda values: {"$regex": values[0], "$options": "i"},
        Operator.IN: lambda values: {"$in": list(values)},
        Operator.NOT_IN: lambda values: {"$nin": list(values)},
        Operator.BETWEEN: lambda values: {"$gte": values[0], "$lte": values[1]},
        Operator.NOT_BETWEEN: lambda values: {"$not": {"$gte": values[0], "$lte": values[1]}},
    }

    def fallback(self, values: Sequence[str]) -> Any:
        # raw value: implicit equality
        return values[0]


document_translator = DocumentTranslator()
