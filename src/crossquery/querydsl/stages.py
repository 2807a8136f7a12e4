"""Aggregation pipeline stages.

Each stage is an immutable value object tagged by ``kind``; ``to_native()``
renders the MongoDB stage document. A pipeline is an ordered list of stages.
"""

from typing import Any, Dict, List, Literal, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field

__all__ = (
    "MatchStage",
    "LookupStage",
    "UnwindStage",
    "ProjectStage",
    "SortStage",
    "FacetStage",
    "Stage",
    "render_pipeline",
)


class _Stage(BaseModel):
    model_config = ConfigDict(frozen=True)

    def to_native(self) -> Dict[str, Any]:
        raise NotImplementedError


class MatchStage(_Stage):
    kind: Literal["match"] = "match"
    filter: Dict[str, Any]

    @classmethod
    def from_filter(cls, filter: Dict[str, Any]) -> Optional["MatchStage"]:
        """Wrap a filter for matching; None when the filter matches everything.

        More than one top-level condition is combined with ``$and``.
        """
        if not filter:
            return None
        if len(filter) == 1:
            return cls(filter=dict(filter))
        return cls(filter={"$and": [{key: value} for key, value in filter.items()]})

    def to_native(self) -> Dict[str, Any]:
        return {"$match": self.filter}


class LookupStage(_Stage):
    kind: Literal["lookup"] = "lookup"
    from_: str
    as_: str
    local_field: Optional[str] = None
    foreign_field: Optional[str] = None
    let: Optional[Dict[str, Any]] = None
    pipeline: Optional[Tuple[Dict[str, Any], ...]] = None

    def to_native(self) -> Dict[str, Any]:
        spec: Dict[str, Any] = {"from": self.from_}
        if self.pipeline is not None:
            if self.let:
                spec["let"] = dict(self.let)
            spec["pipeline"] = list(self.pipeline)
        else:
            spec["localField"] = self.local_field
            spec["foreignField"] = self.foreign_field
        spec["as"] = self.as_
        return {"$lookup": spec}


class UnwindStage(_Stage):
    kind: Literal["unwind"] = "unwind"
    path: str
    preserve_empty: bool = True

    def to_native(self) -> Dict[str, Any]:
        return {
            "$unwind": {
                "path": f"${self.path}",
                "preserveNullAndEmptyArrays": self.preserve_empty,
            }
        }


class ProjectStage(_Stage):
    kind: Literal["project"] = "project"
    include: Tuple[str, ...]

    def to_native(self) -> Dict[str, Any]:
        return {"$project": {field: 1 for field in self.include}}


class SortStage(_Stage):
    kind: Literal["sort"] = "sort"
    keys: Tuple[Tuple[str, int], ...]

    def to_native(self) -> Dict[str, Any]:
        return {"$sort": {field: direction for field, direction in self.keys}}


class FacetStage(_Stage):
    """Page and total count computed from the same stage input."""

    kind: Literal["facet"] = "facet"
    offset: int = Field(0, ge=0)
    limit: int = Field(..., ge=1)

    def to_native(self) -> Dict[str, Any]:
        return {
            "$facet": {
                "items": [{"$skip": self.offset}, {"$limit": self.limit}],
                "total": [{"$count": "count"}],
            }
        }


Stage = Union[MatchStage, LookupStage, UnwindStage, ProjectStage, SortStage, FacetStage]


def render_pipeline(stages: List[Stage]) -> List[Dict[str, Any]]:
    return [stage.to_native() for stage in stages]
