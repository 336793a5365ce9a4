"""Offset pagination link builder."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional
from urllib.parse import urlencode


@dataclass(frozen=True)
class PaginationLinks:
    next_page: Optional[str]
    prev_page: Optional[str]


def page_offset(page: int, size: int) -> int:
    """Row offset for a 1-indexed page."""
    return (page - 1) * size


def build_pagination_links(
    base_path: str,
    total: int,
    page: int,
    size: int,
    query: Optional[Mapping[str, Any]] = None,
) -> PaginationLinks:
    """
    Build next/prev relative URLs for an offset-paginated listing.

    ``page`` and ``size`` always lead the query string; every other entry of
    ``query`` whose value is not None is carried forward in insertion order.

    Args:
        base_path: Path the links point at (e.g. "/papers")
        total: Number of rows matching the filters before pagination
        page: Current 1-indexed page
        size: Page size
        query: Active filters to preserve

    Returns:
        PaginationLinks with None for a missing next or previous page
    """
    offset = page_offset(page, size)
    has_next = total > offset + size
    has_prev = page > 1

    def build_url(page_value: int) -> str:
        params: list[tuple[str, str]] = [("page", str(page_value)), ("size", str(size))]
        for key, value in (query or {}).items():
            if value is None or key in ("page", "size"):
                continue
            params.append((key, str(value)))
        return f"{base_path}?{urlencode(params)}"

    return PaginationLinks(
        next_page=build_url(page + 1) if has_next else None,
        prev_page=build_url(page - 1) if has_prev else None,
    )
