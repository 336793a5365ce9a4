"""Repository for the field/category taxonomy and institutions."""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from nubian.models.field import Category, Field
from nubian.models.institution import Institution
from nubian.utils.logger import get_logger

log = get_logger(__name__)


class TaxonomyRepository:
    """Read access to fields, categories and institutions."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_fields(self) -> list[Field]:
        result = await self.session.execute(select(Field).order_by(Field.name, Field.id))
        return list(result.scalars().all())

    async def get_field(self, field_id: int) -> Optional[Field]:
        result = await self.session.execute(select(Field).where(Field.id == field_id))
        return result.scalar_one_or_none()

    async def list_categories(self, field_id: int) -> list[Category]:
        """Categories belonging to a field, by name."""
        result = await self.session.execute(
            select(Category).where(Category.field_id == field_id).order_by(Category.name, Category.id)
        )
        categories = list(result.scalars().all())
        log.debug("query categories", field_id=field_id, count=len(categories))
        return categories

    async def category_exists(self, category_id: int) -> bool:
        result = await self.session.execute(
            select(Category.id).where(Category.id == category_id).limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def list_institutions(self) -> list[Institution]:
        result = await self.session.execute(select(Institution).order_by(Institution.name))
        return list(result.scalars().all())
