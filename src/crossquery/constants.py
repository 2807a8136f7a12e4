"""
Shared search vocabulary for both storage backends.
"""

from enum import Enum


class Operator(str, Enum):
    EQ = "EQ"
    NEQ = "NEQ"
    GT = "GT"
    GTE = "GTE"
    LT = "LT"
    LTE = "LTE"
    LIKE = "LIKE"
    ILIKE = "ILIKE"
    IN = "IN"
    NOT_IN = "NIN"
    BETWEEN = "BETWEEN"
    NOT_BETWEEN = "NBETWEEN"


class SortOrder(str, Enum):
    ASC = "ASC"
    DESC = "DESC"


# Operators whose value list carries a lower and an upper bound
RANGE_OPERATORS = frozenset({Operator.BETWEEN, Operator.NOT_BETWEEN})

# Operators matching against the whole value list; an empty list is valid
MEMBERSHIP_OPERATORS = frozenset({Operator.IN, Operator.NOT_IN})

SORT_DIRECTION_MAP = {
    SortOrder.ASC: 1,
    SortOrder.DESC: -1,
}

# Stages allowed inside a correlated lookup sub-pipeline
LOOKUP_SUBPIPELINE_STAGES = frozenset({"$match", "$lookup", "$project"})
