"""
Tests for operator translators: every operator on both backends, fallback and validation.
"""

import pytest

from crossquery.constants import Operator
from crossquery.exceptions import InvalidCriterionError, ValidationError
from crossquery.querydsl.compilers.document import DocumentTranslator
from crossquery.querydsl.compilers.relational import RelationalTranslator

BACKENDS = [
    ("relational", RelationalTranslator()),
    ("document", DocumentTranslator()),
]

RELATIONAL_CASES = [
    (Operator.EQ, ["john"], {"$eq": "john"}),
    (Operator.NEQ, ["john"], {"$ne": "john"}),
    (Operator.GT, ["30"], {"$gt": "30"}),
    (Operator.GTE, ["30"], {"$gte": "30"}),
    (Operator.LT, ["30"], {"$lt": "30"}),
    (Operator.LTE, ["30"], {"$lte": "30"}),
    (Operator.LIKE, ["jo"], {"$like": "%jo%"}),
    (Operator.ILIKE, ["jo"], {"$iLike": "%jo%"}),
    (Operator.IN, ["a", "b"], {"$in": ["a", "b"]}),
    (Operator.NOT_IN, ["a", "b"], {"$notIn": ["a", "b"]}),
    (Operator.BETWEEN, ["1", "9"], {"$between": ["1", "9"]}),
    (Operator.NOT_BETWEEN, ["1", "9"], {"$notBetween": ["1", "9"]}),
]

DOCUMENT_CASES = [
    (Operator.EQ, ["john"], {"$eq": "john"}),
    (Operator.NEQ, ["john"], {"$ne": "john"}),
    (Operator.GT, ["30"], {"$gt": "30"}),
    (Operator.GTE, ["30"], {"$gte": "30"}),
    (Operator.LT, ["30"], {"$lt": "30"}),
    (Operator.LTE, ["30"], {"$lte": "30"}),
    (Operator.LIKE, ["jo"], {"$regex": "jo", "$options": "i"}),
    (Operator.ILIKE, ["jo"], {"$regex": "jo", "$options": "i"}),
    (Operator.IN, ["a", "b"], {"$in": ["a", "b"]}),
    (Operator.NOT_IN, ["a", "b"], {"$nin": ["a", "b"]}),
    (Operator.BETWEEN, ["1", "9"], {"$gte": "1", "$lte": "9"}),
    (Operator.NOT_BETWEEN, ["1", "9"], {"$not": {"$gte": "1", "$lte": "9"}}),
]


@pytest.mark.parametrize("operator,values,expected", RELATIONAL_CASES)
def test_relational_translate(operator, values, expected):
    assert RelationalTranslator().translate(operator, values) == expected


@pytest.mark.parametrize("operator,values,expected", DOCUMENT_CASES)
def test_document_translate(operator, values, expected):
    assert DocumentTranslator().translate(operator, values) == expected


@pytest.mark.parametrize("name,translator", BACKENDS)
def test_table_covers_every_operator(name, translator):
    assert translator.operators == frozenset(Operator)


@pytest.mark.parametrize("name,translator", BACKENDS)
def test_wire_values_are_accepted(name, translator):
    # str-valued enum: "NIN" hashes like Operator.NOT_IN
    assert translator.translate("NIN", ["x"]) == translator.translate(Operator.NOT_IN, ["x"])


def test_relational_unknown_operator_falls_back_to_equality():
    assert RelationalTranslator().translate("REGEX", ["abc", "ignored"]) == {"$eq": "abc"}


def test_document_unknown_operator_falls_back_to_raw_value():
    assert DocumentTranslator().translate("REGEX", ["abc"]) == "abc"


@pytest.mark.parametrize("name,translator", BACKENDS)
@pytest.mark.parametrize("operator", [Operator.BETWEEN, Operator.NOT_BETWEEN])
def test_range_operator_requires_two_values(name, translator, operator):
    with pytest.raises(InvalidCriterionError) as exc_info:
        translator.translate(operator, ["1"], field="age")
    assert exc_info.value.details["field"] == "age"
    assert isinstance(exc_info.value, ValidationError)


@pytest.mark.parametrize("name,translator", BACKENDS)
@pytest.mark.parametrize("operator", [Operator.EQ, Operator.LIKE, Operator.GT])
def test_empty_values_rejected_for_single_value_operators(name, translator, operator):
    with pytest.raises(InvalidCriterionError):
        translator.translate(operator, [], field="name")


@pytest.mark.parametrize(
    "translator,operator,expected",
    [
        (RelationalTranslator(), Operator.IN, {"$in": []}),
        (RelationalTranslator(), Operator.NOT_IN, {"$notIn": []}),
        (DocumentTranslator(), Operator.IN, {"$in": []}),
        (DocumentTranslator(), Operator.NOT_IN, {"$nin": []}),
        (DocumentTranslator(), "NIN", {"$nin": []}),
    ],
)
def test_empty_membership_list_is_valid(translator, operator, expected):
    assert translator.translate(operator, [], field="genre") == expected


def test_in_copies_value_list():
    values = ["a"]
    condition = RelationalTranslator().translate(Operator.IN, values)
    values.append("b")
    assert condition == {"$in": ["a"]}
