"""Relational join-tree builder.

Turns a flat criteria list into a top-level WHERE mapping plus a tree of
join (include) nodes, one node per relationship on a dotted path:

    criteria = [Criterion(field="name", value=["john"]),
                Criterion(field="profile.age", operator="GT", value=["30"])]

    where   -> {"name": {"$eq": "john"}}
    include -> [{"as": "profile", "required": True,
                 "where": {"age": {"$gt": "30"}}, "include": [], ...}]

Every build starts from an empty tree; nothing is shared between calls.
"""

from typing import Any, Dict, List, Optional, Sequence

from crossquery.abc import RelatedEntityResolver
from crossquery.exceptions import UnknownRelationshipError
from crossquery.logger import Logger
from crossquery.schema import Criterion, RelationalSearchPayload, SortSpec
from crossquery.types import OrderTuple

from ..compilers.base import BaseTranslator
from ..compilers.relational import relational_translator
from ..compilers.utils import split_path

__all__ = (
    "JoinNode",
    "RelationalQuery",
    "RelationalQueryBuilder",
    "prepare_order",
)


class JoinNode:
    """One joined relationship in the include tree."""

    def __init__(self, relationship: str, model: Any, required: bool) -> None:
        self.relationship = relationship
        self.model = model
        self.required = required
        self.where: Dict[str, Any] = {}
        self.attributes: Optional[List[str]] = None
        self.children: List["JoinNode"] = []

    def to_include(self) -> Dict[str, Any]:
        """Render the native include mapping for this node and its children."""
        include: Dict[str, Any] = {
            "model": self.model,
            "as": self.relationship,
            "required": self.required,
            "include": [c.to_include() for c in self.children],
        }
        if self.where:
            include["where"] = dict(self.where)
        if self.attributes is not None:
            include["attributes"] = list(self.attributes)
        return include

    def __repr__(self) -> str:
        return f"<JoinNode: {self.relationship} required={self.required} where={self.where} children={len(self.children)}>"


class RelationalQuery:
    """Product of a relational build: top-level where, join tree and ordering."""

    def __init__(
        self,
        where: Dict[str, Any],
        joins: List[JoinNode],
        order: Optional[List[OrderTuple]] = None,
    ) -> None:
        self.where = where
        self.joins = joins
        self.order = order

    @property
    def include(self) -> List[Dict[str, Any]]:
        return [node.to_include() for node in self.joins]

    @property
    def distinct(self) -> bool:
        # fan-out joins duplicate root rows
        return bool(self.joins)


def _match(nodes: List[JoinNode], relationship: str) -> Optional[JoinNode]:
    return next((n for n in nodes if n.relationship == relationship), None)


def prepare_order(order_by: Sequence[SortSpec], default_order: Sequence[SortSpec] = ()) -> Optional[List[OrderTuple]]:
    """Convert sort specs into ordering tuples, falling back to ``default_order``.

    ``profile.age DESC`` becomes ``("profile", "age", "DESC")`` so the backend
    can order by a column reached through the join tree. Input order is kept.
    """
    specs = list(order_by) or list(default_order)
    if not specs:
        return None
    return [(*spec.field.split("."), spec.order.value) for spec in specs]


class RelationalQueryBuilder:
    """Build a `RelationalQuery` from a `RelationalSearchPayload`."""

    def __init__(self, translator: BaseTranslator = relational_translator) -> None:
        self.translator = translator
        self.logger = Logger(self.__class__.__name__)

    def build(self, payload: RelationalSearchPayload) -> RelationalQuery:
        where: Dict[str, Any] = {}
        roots: List[JoinNode] = []

        for criterion in payload.criteria:
            self._apply_criterion(criterion, where, roots, payload)

        if payload.nested_selected_fields:
            for path, fields in payload.nested_selected_fields.items():
                node = self._walk(roots, path.split("."), payload, payload.required_joins)
                node.attributes = list(fields)

        order = prepare_order(payload.order_by, payload.default_order)
        query = RelationalQuery(where=where, joins=roots, order=order)
        self.logger.debug("Final where clause: %s", query.where)
        self.logger.debug("Final include options: %s", query.joins)
        self.logger.debug("Final sort order: %s", query.order)
        return query

    def _apply_criterion(
        self,
        criterion: Criterion,
        where: Dict[str, Any],
        roots: List[JoinNode],
        payload: RelationalSearchPayload,
    ) -> None:
        condition = self.translator.translate(criterion.operator, criterion.value, field=criterion.field)
        path, attribute = split_path(criterion.field)
        if not path:
            where[attribute] = condition
            return

        required = criterion.required if criterion.required is not None else payload.required_joins
        existed = self._find(roots, path) is not None
        node = self._walk(roots, path, payload, required)
        node.where[attribute] = condition
        if existed:
            node.required = required

    def _find(self, roots: List[JoinNode], path: Sequence[str]) -> Optional[JoinNode]:
        siblings = roots
        node = None
        for segment in path:
            node = _match(siblings, segment)
            if node is None:
                return None
            siblings = node.children
        return node

    def _walk(
        self,
        roots: List[JoinNode],
        path: Sequence[str],
        payload: RelationalSearchPayload,
        required: bool,
    ) -> JoinNode:
        """Return the node at ``path``, creating missing nodes along the way."""
        siblings = roots
        for depth, segment in enumerate(path):
            node = _match(siblings, segment)
            if node is None:
                node = JoinNode(segment, self._resolve(segment, path[: depth + 1], payload), required)
                siblings.append(node)
                self.logger.debug("Building include for relationship: %s", segment)
            siblings = node.children
        return node

    def _resolve(self, relationship: str, path: Sequence[str], payload: RelationalSearchPayload) -> Any:
        entity: Optional[RelatedEntityResolver] = payload.related_entities.get(relationship)
        if entity is None:
            raise UnknownRelationshipError(
                "Relationship not found in related entities",
                relationship=relationship,
                path=".".join(path),
            )
        return entity.resolve(payload.aliases.get(relationship))
