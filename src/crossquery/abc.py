"""Abstract backend handles consumed by the search engine.

Concrete handles live outside this package (they wrap a live connection);
the engine only relies on the methods declared here. Whatever a handle
raises propagates to the caller unchanged.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Protocol, Sequence, runtime_checkable

from .types import OrderTuple


@runtime_checkable
class RelatedEntityResolver(Protocol):
    """Anything that turns a relationship into a joinable model handle."""

    def resolve(self, alias: Optional[str] = None) -> Any: ...


class RelationalHandle(ABC):
    """Queryable model of a relational backend (one table plus its associations)."""

    @abstractmethod
    async def count(
        self,
        *,
        where: Dict[str, Any],
        include: List[Dict[str, Any]],
        distinct: bool,
    ) -> int:
        """Count root rows matching ``where`` through the ``include`` join tree."""
        raise NotImplementedError

    @abstractmethod
    async def find_all(
        self,
        *,
        where: Dict[str, Any],
        include: List[Dict[str, Any]],
        attributes: Optional[List[str]],
        limit: Optional[int],
        offset: Optional[int],
        sub_query: bool,
        order: Optional[List[OrderTuple]],
        group: Optional[List[str]],
    ) -> List[Any]:
        """Fetch one page of root rows."""
        raise NotImplementedError


class DocumentCursor(ABC):
    """Chainable query over a document collection; every modifier returns a cursor."""

    @abstractmethod
    def select(self, fields: str) -> "DocumentCursor":
        raise NotImplementedError

    @abstractmethod
    def limit(self, limit: int) -> "DocumentCursor":
        raise NotImplementedError

    @abstractmethod
    def skip(self, offset: int) -> "DocumentCursor":
        raise NotImplementedError

    @abstractmethod
    def sort(self, sort: Dict[str, int]) -> "DocumentCursor":
        raise NotImplementedError

    @abstractmethod
    def populate(self, path: str) -> "DocumentCursor":
        """Expand a referenced document path client-side."""
        raise NotImplementedError

    @abstractmethod
    async def to_list(self) -> List[Any]:
        raise NotImplementedError


class DocumentHandle(ABC):
    """Queryable collection of a document backend."""

    @abstractmethod
    async def count_documents(self, filter: Dict[str, Any]) -> int:
        raise NotImplementedError

    @abstractmethod
    def find(self, filter: Dict[str, Any]) -> DocumentCursor:
        raise NotImplementedError

    @abstractmethod
    async def aggregate(self, pipeline: Sequence[Dict[str, Any]], **options: Any) -> List[Dict[str, Any]]:
        raise NotImplementedError
