"""Base operator translator.

Defines the contract shared by the per-backend operator translators: a
finite table mapping each `Operator` to a pure function of the value list.
"""

from abc import ABC, abstractmethod
from typing import Any, Callable, ClassVar, Dict, Sequence

from crossquery.constants import MEMBERSHIP_OPERATORS, RANGE_OPERATORS, Operator
from crossquery.exceptions import InvalidCriterionError

__all__ = ("BaseTranslator",)


class BaseTranslator(ABC):
    """Abstract base class for operator translators.

    Subclasses fill `_OP_MAP` and implement `fallback`, used for an operator
    absent from the table.
    """

    backend: ClassVar[str] = "generic"
    _OP_MAP: ClassVar[Dict[Operator, Callable[[Sequence[str]], Any]]] = {}

    def translate(self, operator: Operator, values: Sequence[str], field: str = "") -> Any:
        """Convert an operator and its values into a backend-native condition.

        Raises:
            InvalidCriterionError: no values for an operator reading the first
                value, or fewer than two for a range operator
        """
        if not values and operator not in MEMBERSHIP_OPERATORS:
            raise InvalidCriterionError(
                "Criterion has no value", field=field, operator=getattr(operator, "value", operator), backend=self.backend
            )
        if operator in RANGE_OPERATORS and len(values) < 2:
            raise InvalidCriterionError(
                "Range operator needs a lower and an upper bound",
                field=field,
                operator=getattr(operator, "value", operator),
                values=list(values),
            )
        fn = self._OP_MAP.get(operator)
        if fn is None:
            return self.fallback(values)
        return fn(values)

    @abstractmethod
    def fallback(self, values: Sequence[str]) -> Any:
        """Equality condition on the first value."""
        raise NotImplementedError

    @property
    def operators(self) -> frozenset:
        return frozenset(self._OP_MAP)
