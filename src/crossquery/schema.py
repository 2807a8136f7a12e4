"""Pydantic schemas for search payloads and results."""

import math
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from .constants import Operator, SortOrder
from .settings import settings

T = TypeVar("T")


class Criterion(BaseModel):
    field: str = Field(..., min_length=1, description="Dotted path; dots traverse relationships or sub-documents.")
    operator: Operator = Field(Operator.EQ, description="Comparison operator.")
    value: List[str] = Field(default_factory=list, description="Operator arguments, in order.")
    required: Optional[bool] = Field(None, description="Overrides the default join strictness for this path.")

    @field_validator("value", mode="before")
    @classmethod
    def coerce_values(cls, v: Any) -> List[str]:
        if v is None:
            return []
        if not isinstance(v, (list, tuple)):
            v = [v]
        return [item if isinstance(item, str) else str(item) for item in v]

    @property
    def segments(self) -> List[str]:
        return self.field.split(".")


class Pagination(BaseModel):
    limit: Optional[int] = None
    offset: Optional[int] = None


class SortSpec(BaseModel):
    field: str = Field(..., min_length=1)
    order: SortOrder = SortOrder.ASC


class RelatedEntity:
    """Joinable model descriptor for one relationship.

    Wraps the model handle a relational backend joins against. When an alias
    is requested (self-joins, the same table joined twice), ``aliaser`` is
    called with the model and the alias and its result is used instead.

    Example:
        >>> profile = RelatedEntity(ProfileModel)
        >>> profile.resolve()
        ProfileModel
    """

    def __init__(self, model: Any, aliaser: Optional[Callable[[Any, str], Any]] = None) -> None:
        self.model = model
        self.aliaser = aliaser

    def resolve(self, alias: Optional[str] = None) -> Any:
        if alias is None or self.aliaser is None:
            return self.model
        return self.aliaser(self.model, alias)

    def __repr__(self) -> str:
        return f"<RelatedEntity: {self.model!r}>"


class RelationalSearchPayload(BaseModel):
    """Search request for a relational backend.

    ``related_entities`` maps every relationship name that may appear in a
    criterion or a projection path to an object exposing ``resolve(alias)``.
    ``nested_selected_fields`` is keyed by dotted relationship path.
    """

    model_config = ConfigDict(arbitrary_types_allowed=True)

    criteria: List[Criterion] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)
    related_entities: Dict[str, Any] = Field(default_factory=dict)
    parent_selected_fields: Optional[List[str]] = None
    nested_selected_fields: Optional[Dict[str, List[str]]] = None
    required_joins: bool = Field(default_factory=lambda: settings.REQUIRED_JOINS)
    is_sub_query: bool = False
    aliases: Dict[str, str] = Field(default_factory=dict)
    order_by: List[SortSpec] = Field(default_factory=list)
    default_order: List[SortSpec] = Field(default_factory=list)
    group_by: Optional[List[str]] = None


class Lookup(BaseModel):
    """Cross-collection join descriptor for the aggregation pipeline.

    Either ``local_field``/``foreign_field`` (plain equality join) or a
    correlated ``pipeline`` (optionally with ``let`` bindings) must be given.
    """

    model_config = ConfigDict(populate_by_name=True)

    from_: str = Field(..., alias="from", min_length=1)
    local_field: Optional[str] = Field(None, alias="localField")
    foreign_field: Optional[str] = Field(None, alias="foreignField")
    as_: str = Field(..., alias="as", min_length=1)
    pipeline: Optional[List[Dict[str, Any]]] = None
    let: Optional[Dict[str, Any]] = None
    single_result: bool = Field(False, alias="singleResult")

    @model_validator(mode="after")
    def check_join_keys(self) -> "Lookup":
        if self.pipeline is None and (not self.local_field or not self.foreign_field):
            raise ValueError("lookup needs localField and foreignField unless a pipeline is given")
        return self

    @property
    def is_correlated(self) -> bool:
        return self.pipeline is not None


class DocumentSearchPayload(BaseModel):
    """Search request for a document backend.

    ``populate`` is only honoured by simple (find) mode and ``lookups`` only
    by pipeline (aggregate) mode. ``group_by`` is accepted but not applied.
    """

    criteria: List[Criterion] = Field(default_factory=list)
    pagination: Pagination = Field(default_factory=Pagination)
    lookups: List[Lookup] = Field(default_factory=list)
    populate: List[str] = Field(default_factory=list)
    selected_fields: Optional[List[str]] = None
    sort: List[SortSpec] = Field(default_factory=list)
    group_by: Optional[List[str]] = None


class SearchResult(BaseModel, Generic[T]):
    model_config = ConfigDict(arbitrary_types_allowed=True)

    items: List[T] = Field(default_factory=list)
    total: int = 0
    page: int = 1
    count: int = 0
    total_pages: int = 0

    @classmethod
    def from_page(cls, items: List[T], total: int, count: int, page: int = 1) -> "SearchResult[T]":
        total_pages = math.ceil(total / count) if count > 0 else 0
        return cls(items=items, total=total, page=page, count=count, total_pages=total_pages)
