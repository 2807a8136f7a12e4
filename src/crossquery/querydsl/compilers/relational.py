"""Relational operator translator.

Conditions use Sequelize-style operator keys (``$eq``, ``$notIn``,
``$between``...) keyed under the column name by the join-tree builder.

LIKE and ILIKE wrap the value in ``%`` wildcards (substring match).
"""

from typing import Any, Dict, Sequence

from crossquery.constants import Operator

from .base import BaseTranslator

__all__ = (
    "RelationalTranslator",
    "relational_translator",
)


class RelationalTranslator(BaseTranslator):
    backend = "relational"

    _OP_MAP = {
        Operator.EQ: lambda values: {"$eq": values[0]},
        Operator.NEQ: lambda values: {"$ne": values[0]},
        Operator.GT: lambda values: {"$gt": values[0]},
        Operator.GTE: lambda values: {"$gte": values[0]},
        Operator.LT: lambda values: {"$lt": values[0]},
        Operator.LTE: lambda values: {"$lte": values[0]},
        Operator.LIKE: lambda values: {"$like": f"%{values[0]}%"},
        Operator.ILIKE: lambda values: {"$iLike": f"%{values[0]}%"},
        Operator.IN: lambda values: {"$in": list(values)},
        Operator.NOT_IN: lambda values: {"$notIn": list(values)},
        Operator.BETWEEN: lambda values: {"$between": [values[0], values[1]]},
        Operator.NOT_BETWEEN: lambda values: {"$notBetween": [values[0], values[1]]},
    }

    def fallback(self, values: Sequence[str]) -> Dict[str, Any]:
        return {"$eq": values[0]}


relational_translator = RelationalTranslator()
