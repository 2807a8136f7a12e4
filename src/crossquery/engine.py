"""
Main engine for orchestrating search queries.

This module provides the `SearchEngine`, which builds a backend-native query
from a search payload, executes it through the caller's backend handle and
assembles a uniform `SearchResult` page.

Every query is fully built before the first backend call, so a malformed
payload or an unknown relationship never reaches the backend.
"""

from typing import Optional, Union

from .abc import DocumentHandle, RelationalHandle
from .logger import Logger
from .querydsl.builders.document import DocumentPipeline, DocumentPipelineBuilder, DocumentQuery
from .querydsl.builders.relational import RelationalQuery, RelationalQueryBuilder
from .querydsl.compilers.document import document_translator
from .results import ResultAssembler
from .schema import DocumentSearchPayload, RelationalSearchPayload, SearchResult
from .settings import settings
from .types import Payload


class SearchEngine:
    """High-level orchestrator for relational and document searches.

    Builders and the assembler are stateless and may be shared; each search
    call owns the query it builds.

    Attributes:
        relational: Join-tree builder for relational payloads
        pipeline: Aggregation pipeline builder for document payloads
        assembler: Result assembler shaping every page
    """

    def __init__(
        self,
        relational: Optional[RelationalQueryBuilder] = None,
        pipeline: Optional[DocumentPipelineBuilder] = None,
        assembler: Optional[ResultAssembler] = None,
        allow_disk_use: Optional[bool] = None,
    ) -> None:
        self.relational = relational or RelationalQueryBuilder()
        self.pipeline = pipeline or DocumentPipelineBuilder()
        self.assembler = assembler or ResultAssembler()
        self.allow_disk_use = allow_disk_use if allow_disk_use is not None else settings.AGGREGATE_ALLOW_DISK_USE
        self.logger = Logger(self.__class__.__name__)

    # ------------------------------------------------------------------
    # Pure builds
    # ------------------------------------------------------------------
    def build_relational(self, payload: RelationalSearchPayload) -> RelationalQuery:
        return self.relational.build(payload)

    def build_document_query(self, payload: DocumentSearchPayload) -> DocumentQuery:
        query = DocumentQuery.from_payload(payload, document_translator)
        self.logger.debug("Document filter: %s", query.filter)
        return query

    def build_pipeline(self, payload: DocumentSearchPayload) -> DocumentPipeline:
        return self.pipeline.build(payload)

    # ------------------------------------------------------------------
    # Searches
    # ------------------------------------------------------------------
    async def search_relational(self, payload: RelationalSearchPayload, handle: RelationalHandle) -> SearchResult:
        """Count and fetch one page from a relational backend (two round trips)."""
        query = self.build_relational(payload)
        include = query.include
        limit = payload.pagination.limit
        offset = payload.pagination.offset

        total = await handle.count(where=query.where, include=include, distinct=query.distinct)
        items = await handle.find_all(
            where=query.where,
            include=include,
            attributes=payload.parent_selected_fields,
            limit=limit,
            offset=offset,
            sub_query=payload.is_sub_query,
            order=query.order,
            group=payload.group_by,
        )
        self.logger.message("Relational search returned %d of %d rows.", len(items), total)
        return self.assembler.assemble(items, total, limit=limit, offset=offset)

    async def search_documents(self, payload: DocumentSearchPayload, handle: DocumentHandle) -> SearchResult:
        """Count and find one page from a document backend (two round trips, no clamping)."""
        query = self.build_document_query(payload)

        total = await handle.count_documents(query.filter)
        cursor = handle.find(query.filter)
        if query.projection:
            cursor = cursor.select(query.projection)
        if query.limit is not None:
            cursor = cursor.limit(query.limit)
        if query.offset is not None:
            cursor = cursor.skip(query.offset)
        if query.sort:
            cursor = cursor.sort(query.sort)
        for path in query.populate:
            cursor = cursor.populate(path)
        items = await cursor.to_list()

        self.logger.message("Document search returned %d of %d documents.", len(items), total)
        return self.assembler.assemble(items, total, limit=query.limit, offset=query.offset)

    async def aggregate_documents(self, payload: DocumentSearchPayload, handle: DocumentHandle) -> SearchResult:
        """Fetch one page and the total count from a single ``$facet`` aggregation."""
        built = self.build_pipeline(payload)
        output = await handle.aggregate(built.pipeline, allowDiskUse=self.allow_disk_use)
        result = self.assembler.from_facet(output, limit=built.limit, offset=built.offset)
        self.logger.message("Aggregate search returned %d of %d documents.", len(result.items), result.total)
        return result

    async def search(
        self,
        payload: Payload,
        handle: Union[RelationalHandle, DocumentHandle],
        *,
        pipeline: bool = False,
    ) -> SearchResult:
        """Dispatch on the payload type.

        Args:
            payload: Relational or document search payload
            handle: Backend handle matching the payload
            pipeline: For document payloads, use aggregation (facet) mode

        Raises:
            TypeError: If the payload type is not supported
        """
        if isinstance(payload, RelationalSearchPayload):
            return await self.search_relational(payload, handle)
        if isinstance(payload, DocumentSearchPayload):
            if pipeline:
                return await self.aggregate_documents(payload, handle)
            return await self.search_documents(payload, handle)
        raise TypeError(f"payload must be a RelationalSearchPayload or DocumentSearchPayload, got {type(payload).__name__}")
