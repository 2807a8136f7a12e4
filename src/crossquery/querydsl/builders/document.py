"""Document-store filter and pipeline builders.

Document criteria never join: a dotted field addresses an embedded
sub-document, so ``profile.age > 30`` becomes ``{"profile": {"age": {"$gt": "30"}}}``.

Two execution shapes are produced from the same filter:

- `DocumentQuery` for simple mode (``count_documents`` + ``find`` chain);
- `DocumentPipeline` for aggregation mode, ending in a ``$facet`` that
  returns the page and the total count from one execution.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from crossquery.constants import LOOKUP_SUBPIPELINE_STAGES, SORT_DIRECTION_MAP
from crossquery.exceptions import InvalidStageError
from crossquery.logger import Logger
from crossquery.schema import Criterion, DocumentSearchPayload, Lookup, SortSpec
from crossquery.settings import settings

from ..compilers.base import BaseTranslator
from ..compilers.document import document_translator
from ..compilers.utils import clamp, set_nested
from ..stages import (
    FacetStage,
    LookupStage,
    MatchStage,
    ProjectStage,
    SortStage,
    Stage,
    UnwindStage,
    render_pipeline,
)

__all__ = (
    "DocumentQuery",
    "DocumentPipeline",
    "DocumentPipelineBuilder",
    "build_filter",
    "build_sort",
)


def build_filter(
    criteria: Optional[Sequence[Criterion]],
    translator: BaseTranslator = document_translator,
) -> Dict[str, Any]:
    """Build a nested filter mirroring the embedded-document shape.

    Criteria sharing a path prefix merge into the same nested dict; the last
    criterion wins for a repeated leaf.
    """
    filter: Dict[str, Any] = {}
    for criterion in criteria or ():
        condition = translator.translate(criterion.operator, criterion.value, field=criterion.field)
        set_nested(filter, criterion.segments, condition)
    return filter


def build_sort(sort: Sequence[SortSpec]) -> Dict[str, int]:
    """Map sort specs to ``{field: 1 | -1}``, keeping input order as key precedence."""
    return {spec.field: SORT_DIRECTION_MAP[spec.order] for spec in sort}


class DocumentQuery:
    """Simple-mode query: a filter plus the cursor modifiers to chain on ``find``."""

    def __init__(
        self,
        filter: Dict[str, Any],
        projection: Optional[str] = None,
        sort: Optional[Dict[str, int]] = None,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
        populate: Sequence[str] = (),
    ) -> None:
        self.filter = filter
        self.projection = projection
        self.sort = sort
        self.limit = limit
        self.offset = offset
        self.populate = list(populate)

    @classmethod
    def from_payload(
        cls,
        payload: DocumentSearchPayload,
        translator: BaseTranslator = document_translator,
    ) -> "DocumentQuery":
        # no clamping in simple mode: limit/offset pass through as given
        return cls(
            filter=build_filter(payload.criteria, translator),
            projection=" ".join(payload.selected_fields) if payload.selected_fields else None,
            sort=build_sort(payload.sort) or None,
            limit=payload.pagination.limit,
            offset=payload.pagination.offset,
            populate=payload.populate,
        )

    def __repr__(self) -> str:
        return f"<DocumentQuery: filter={self.filter} sort={self.sort} limit={self.limit} offset={self.offset}>"


class DocumentPipeline:
    """Ordered aggregation stages plus the effective (clamped) page bounds."""

    def __init__(self, stages: List[Stage], limit: int, offset: int) -> None:
        self.stages = stages
        self.limit = limit
        self.offset = offset

    @property
    def pipeline(self) -> List[Dict[str, Any]]:
        return render_pipeline(self.stages)

    @property
    def kinds(self) -> List[str]:
        return [stage.kind for stage in self.stages]

    def __repr__(self) -> str:
        return f"<DocumentPipeline: {self.kinds} limit={self.limit} offset={self.offset}>"


class DocumentPipelineBuilder:
    """Build a `DocumentPipeline` from a `DocumentSearchPayload`.

    Stage order is fixed: match, lookups (each single-result lookup followed
    by an unwind), project, sort, facet. Empty stages are omitted, except the
    terminal facet.
    """

    def __init__(
        self,
        translator: BaseTranslator = document_translator,
        default_limit: Optional[int] = None,
        min_limit: Optional[int] = None,
        max_limit: Optional[int] = None,
    ) -> None:
        self.translator = translator
        self.default_limit = default_limit if default_limit is not None else settings.DEFAULT_PAGE_SIZE
        self.min_limit = min_limit if min_limit is not None else settings.MIN_PAGE_SIZE
        self.max_limit = max_limit if max_limit is not None else settings.MAX_PAGE_SIZE
        self.logger = Logger(self.__class__.__name__)

    def page_bounds(self, limit: Optional[int], offset: Optional[int]) -> Tuple[int, int]:
        """Return the clamped ``(limit, offset)`` actually applied by the facet."""
        effective_limit = clamp(limit, self.default_limit, self.min_limit, self.max_limit)
        effective_offset = max(offset if offset is not None else 0, 0)
        return effective_limit, effective_offset

    def build(self, payload: DocumentSearchPayload) -> DocumentPipeline:
        stages: List[Stage] = []

        filter = build_filter(payload.criteria, self.translator)
        match = MatchStage.from_filter(filter)
        if match is not None:
            stages.append(match)

        for lookup in payload.lookups:
            stages.append(self._lookup_stage(lookup))
            if lookup.single_result:
                stages.append(UnwindStage(path=lookup.as_))

        if payload.selected_fields:
            stages.append(ProjectStage(include=tuple(payload.selected_fields)))

        sort = build_sort(payload.sort)
        if sort:
            stages.append(SortStage(keys=tuple(sort.items())))

        limit, offset = self.page_bounds(payload.pagination.limit, payload.pagination.offset)
        stages.append(FacetStage(offset=offset, limit=limit))

        result = DocumentPipeline(stages=stages, limit=limit, offset=offset)
        self.logger.debug("Aggregation pipeline: %s", result.pipeline)
        return result

    def _lookup_stage(self, lookup: Lookup) -> LookupStage:
        if not lookup.is_correlated:
            return LookupStage(
                from_=lookup.from_,
                as_=lookup.as_,
                local_field=lookup.local_field,
                foreign_field=lookup.foreign_field,
            )
        self._check_sub_pipeline(lookup.pipeline, lookup.as_)
        return LookupStage(
            from_=lookup.from_,
            as_=lookup.as_,
            let=lookup.let,
            pipeline=tuple(lookup.pipeline),
        )

    def _check_sub_pipeline(self, stages: Sequence[Dict[str, Any]], lookup_as: str) -> None:
        """Reject stages outside the allowed set, including inside nested ``$lookup`` pipelines."""
        for stage in stages:
            operators = set(stage)
            if len(operators) != 1 or not operators <= LOOKUP_SUBPIPELINE_STAGES:
                raise InvalidStageError(
                    "Stage not allowed in lookup pipeline",
                    stage=sorted(operators),
                    lookup=lookup_as,
                    allowed=sorted(LOOKUP_SUBPIPELINE_STAGES),
                )
            nested = stage.get("$lookup")
            if isinstance(nested, dict) and nested.get("pipeline"):
                self._check_sub_pipeline(nested["pipeline"], lookup_as)
