"""Result assembly for both backends.

Normalizes raw counts and item lists into a `SearchResult` page, and
extracts the page and total from a ``$facet`` aggregation output.
"""

from typing import Any, Dict, List, Optional, Sequence, Tuple

from .schema import SearchResult
from .settings import settings

__all__ = ("ResultAssembler", "extract_facet")


def extract_facet(output: Optional[Sequence[Dict[str, Any]]]) -> Tuple[List[Any], int]:
    """Return ``(items, total)`` from the single document produced by the facet stage.

    An empty aggregation result, or an empty ``items``/``total`` branch, is a
    valid empty page.
    """
    if not output:
        return [], 0
    facet = output[0] or {}
    items = list(facet.get("items") or [])
    counts = facet.get("total") or []
    total = int(counts[0].get("count", 0)) if counts else 0
    return items, total


class ResultAssembler:
    """Shape raw backend output into `SearchResult` pages."""

    def __init__(self, page_size: Optional[int] = None) -> None:
        self.page_size = page_size if page_size is not None else settings.DEFAULT_PAGE_SIZE

    def assemble(
        self,
        items: Sequence[Any],
        total: int,
        limit: Optional[int] = None,
        offset: Optional[int] = None,
    ) -> SearchResult:
        """Build a page.

        ``count`` is the requested limit (page size when absent); ``page`` is
        1-based from ``offset``; with ``count == 0`` the page is 1 and there
        are no pages.
        """
        count = limit if limit is not None else self.page_size
        page = offset // count + 1 if offset and count > 0 else 1
        return SearchResult.from_page(items=list(items), total=int(total), count=count, page=page)

    def from_facet(self, output: Optional[Sequence[Dict[str, Any]]], limit: int, offset: int) -> SearchResult:
        items, total = extract_facet(output)
        return self.assemble(items, total, limit=limit, offset=offset)
