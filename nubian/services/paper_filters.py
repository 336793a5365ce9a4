"""Access-scoped predicates for paper listings.

Who may see which papers is decided here and nowhere else. The functions are
pure: they take the requesting principal and the requested filters and return
SQLAlchemy expressions, so visibility can be tested without a database.
"""

from dataclasses import dataclass
from typing import Optional

from sqlalchemy import ColumnElement, or_

from nubian.models.field import Category, Field
from nubian.models.paper import Paper, PaperStatus
from nubian.services.auth_service import Principal

DEFAULT_VISIBLE_STATUS = PaperStatus.PUBLISHED.value
DEFAULT_PAGE_SIZE = 10


@dataclass(frozen=True)
class PaperFilters:
    """Filters accepted by the paper listing."""

    category_id: Optional[int] = None
    field_id: Optional[int] = None
    user_id: Optional[str] = None
    search: Optional[str] = None
    status: Optional[str] = None
    page: int = 1
    size: int = DEFAULT_PAGE_SIZE

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.size

    def query_params(self) -> dict[str, object]:
        """Active filters keyed by their query-string names."""
        return {
            "categoryId": self.category_id,
            "fieldId": self.field_id,
            "userId": self.user_id,
            "search": self.search,
            "status": self.status,
        }


def resolve_status_scope(principal: Optional[Principal], filters: PaperFilters) -> Optional[str]:
    """
    Status the listing must be restricted to, or None for no restriction.

    - anonymous: published only, the status filter is ignored
    - admin: the status filter if given, otherwise every status
    - user listing their own papers: the status filter if given, otherwise every status
    - any other user request: published only, the status filter is ignored
    """
    if principal is None:
        return DEFAULT_VISIBLE_STATUS
    if principal.is_admin or principal.owns(filters.user_id):
        return filters.status or None
    return DEFAULT_VISIBLE_STATUS


def build_paper_conditions(
    principal: Optional[Principal], filters: PaperFilters
) -> list[ColumnElement[bool]]:
    """
    Predicates for the listing and its count query.

    Expects ``Paper`` joined to ``Category`` and ``Category`` to ``Field``.
    """
    conditions: list[ColumnElement[bool]] = []

    if filters.field_id is not None:
        conditions.append(Field.id == filters.field_id)

    if filters.user_id is not None:
        conditions.append(Paper.user_id == filters.user_id)

    if filters.category_id is not None:
        conditions.append(Paper.category_id == filters.category_id)

    search = (filters.search or "").strip()
    if search:
        pattern = f"%{search}%"
        conditions.append(
            or_(
                Paper.title.ilike(pattern),
                Paper.abstract.ilike(pattern),
                Field.name.ilike(pattern),
                Category.name.ilike(pattern),
            )
        )

    status = resolve_status_scope(principal, filters)
    if status is not None:
        conditions.append(Paper.status == status)

    return conditions


def can_view_paper(principal: Optional[Principal], paper: Paper) -> bool:
    """Single-paper visibility: published, the owner's own, or any for admins."""
    if paper.status == DEFAULT_VISIBLE_STATUS:
        return True
    if principal is None:
        return False
    return principal.is_admin or principal.owns(paper.user_id)


def can_modify_paper(principal: Principal, paper: Paper) -> bool:
    """Owner or admin may update and delete."""
    return principal.is_admin or principal.owns(paper.user_id)
