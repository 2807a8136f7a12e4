"""Tests for aggregation stage value objects."""

import pytest
from pydantic import ValidationError as PydanticValidationError

from crossquery.querydsl.stages import (
    FacetStage,
    LookupStage,
    MatchStage,
    ProjectStage,
    SortStage,
    UnwindStage,
    render_pipeline,
)


class TestMatchStage:
    def test_empty_filter_has_no_stage(self):
        assert MatchStage.from_filter({}) is None

    def test_single_condition(self):
        stage = MatchStage.from_filter({"title": {"$eq": "Heat"}})
        assert stage.to_native() == {"$match": {"title": {"$eq": "Heat"}}}

    def test_multiple_conditions_wrapped_in_and(self):
        stage = MatchStage.from_filter({"a": {"$eq": "1"}, "b": {"$gt": "2"}})
        assert stage.to_native() == {"$match": {"$and": [{"a": {"$eq": "1"}}, {"b": {"$gt": "2"}}]}}


def test_stages_are_immutable():
    stage = FacetStage(offset=0, limit=10)
    with pytest.raises(PydanticValidationError):
        stage.limit = 20


def test_facet_rejects_zero_limit():
    with pytest.raises(PydanticValidationError):
        FacetStage(offset=0, limit=0)


def test_unwind_preserves_empty_by_default():
    assert UnwindStage(path="director").to_native() == {
        "$unwind": {"path": "$director", "preserveNullAndEmptyArrays": True}
    }


def test_render_pipeline_keeps_order():
    stages = [
        LookupStage(from_="directors", as_="director", local_field="director_id", foreign_field="_id"),
        ProjectStage(include=("title",)),
        SortStage(keys=(("year", -1),)),
    ]
    assert [next(iter(s)) for s in render_pipeline(stages)] == ["$lookup", "$project", "$sort"]
    assert [s.kind for s in stages] == ["lookup", "project", "sort"]
