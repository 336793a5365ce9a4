"""Repository for Paper model operations."""

from typing import Any, Optional

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload
from sqlalchemy.sql import Select

from nubian.models.field import Category, Field
from nubian.models.keyword import PaperKeyword
from nubian.models.paper import MAX_PAPER_ID, Paper
from nubian.services.auth_service import Principal
from nubian.services.paper_filters import PaperFilters, build_paper_conditions
from nubian.utils.logger import get_logger

log = get_logger(__name__)


def _with_relations(stmt: Select) -> Select:
    """Eager-load everything a paper response carries."""
    return stmt.options(
        selectinload(Paper.user),
        selectinload(Paper.category).selectinload(Category.field),
        selectinload(Paper.keywords),
    )


class PaperRepository:
    """Repository for paper CRUD operations and access-scoped listings."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_papers(
        self, principal: Optional[Principal], filters: PaperFilters
    ) -> tuple[list[Paper], int]:
        """
        Get one page of papers visible to ``principal``.

        Args:
            principal: Requesting user/admin, or None for anonymous requests
            filters: Listing filters and pagination

        Returns:
            Tuple of (papers on the page, total matching papers)
        """
        conditions = build_paper_conditions(principal, filters)

        query = (
            select(Paper)
            .join(Category, Paper.category_id == Category.id)
            .join(Field, Category.field_id == Field.id)
            .where(*conditions)
            .order_by(Paper.created_at.desc(), Paper.id.asc())
            .offset(filters.offset)
            .limit(filters.size)
        )

        count_query = (
            select(func.count(func.distinct(Paper.id)))
            .select_from(Paper)
            .join(Category, Paper.category_id == Category.id)
            .join(Field, Category.field_id == Field.id)
            .where(*conditions)
        )

        log.debug(
            "query papers",
            principal=principal.kind if principal else "anonymous",
            conditions=len(conditions),
            page=filters.page,
            size=filters.size,
        )

        total = (await self.session.execute(count_query)).scalar_one()
        result = await self.session.execute(_with_relations(query))
        papers = list(result.scalars().all())

        log.debug("query result", count=len(papers), total=total)
        return papers, total

    async def get_by_id(self, paper_id: int) -> Optional[Paper]:
        """Get paper by primary key with its relations (re)loaded."""
        result = await self.session.execute(
            _with_relations(select(Paper).where(Paper.id == paper_id)).execution_options(
                populate_existing=True
            )
        )
        return result.scalar_one_or_none()

    async def get_by_id_or_slug(self, identifier: str) -> Optional[Paper]:
        """Get paper whose id or slug matches a path segment."""
        predicates = [Paper.slug == identifier]
        if identifier.isascii() and identifier.isdigit() and int(identifier) <= MAX_PAPER_ID:
            predicates.append(Paper.id == int(identifier))

        result = await self.session.execute(
            _with_relations(select(Paper).where(or_(*predicates)).order_by(Paper.id).limit(1))
        )
        return result.scalar_one_or_none()

    async def slug_exists(self, slug: str) -> bool:
        result = await self.session.execute(select(Paper.id).where(Paper.slug == slug).limit(1))
        return result.scalar_one_or_none() is not None

    async def create(self, paper_data: dict[str, Any]) -> Paper:
        """
        Create a new paper.

        Caller is responsible for committing the transaction.
        """
        paper = Paper(**paper_data)
        self.session.add(paper)
        await self.session.flush()
        await self.session.refresh(paper)
        log.info("paper created", paper_id=paper.id, slug=paper.slug)
        return paper

    async def update(self, paper_id: int, values: dict[str, Any]) -> None:
        """
        Apply a partial update to a paper.

        Caller is responsible for committing the transaction.
        """
        if not values:
            return
        await self.session.execute(
            update(Paper)
            .where(Paper.id == paper_id)
            .values(**values, updated_at=func.now())
        )
        await self.session.flush()
        log.debug("paper updated", paper_id=paper_id, fields=sorted(values))

    async def delete_with_keywords(self, paper_id: int) -> bool:
        """
        Delete a paper and all its keyword attachments.

        Caller is responsible for committing the transaction.

        Returns:
            True if the paper row was deleted
        """
        await self.session.execute(delete(PaperKeyword).where(PaperKeyword.paper_id == paper_id))
        result = await self.session.execute(delete(Paper).where(Paper.id == paper_id))
        await self.session.flush()
        deleted = result.rowcount > 0
        log.debug("paper deleted", paper_id=paper_id, deleted=deleted)
        return deleted
