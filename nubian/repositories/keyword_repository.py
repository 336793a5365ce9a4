"""Repository for Keyword model operations."""

from typing import Iterable, Optional

from sqlalchemy import and_, delete, select, text
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.ext.asyncio import AsyncSession

from nubian.models.keyword import Keyword, PaperKeyword
from nubian.utils.logger import get_logger

log = get_logger(__name__)

KEYWORD_SEARCH_LIMIT = 10


class KeywordRepository:
    """Repository for keywords and their attachment to papers."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_existing_ids(self, keyword_ids: Iterable[int]) -> set[int]:
        """Subset of ``keyword_ids`` present in the keyword table."""
        ids = set(keyword_ids)
        if not ids:
            return set()
        result = await self.session.execute(select(Keyword.id).where(Keyword.id.in_(ids)))
        return set(result.scalars().all())

    async def get_by_name(self, name: str) -> Optional[Keyword]:
        result = await self.session.execute(select(Keyword).where(Keyword.name == name))
        return result.scalar_one_or_none()

    async def get_or_create(self, name: str) -> tuple[int, bool]:
        """
        Id of the keyword named ``name``, creating it if missing.

        Concurrent creators of the same name converge on one row: the insert
        is skipped on conflict and the existing row is read back.

        Caller is responsible for committing the transaction.

        Returns:
            Tuple of (keyword id, created)
        """
        existing = await self.get_by_name(name)
        if existing is not None:
            return existing.id, False

        result = await self.session.execute(
            pg_insert(Keyword)
            .values(name=name, aliases=[])
            .on_conflict_do_nothing(index_elements=[Keyword.name])
            .returning(Keyword.id)
        )
        keyword_id = result.scalar_one_or_none()
        if keyword_id is not None:
            log.info("keyword created", keyword_id=keyword_id, name=name)
            return keyword_id, True

        existing = await self.get_by_name(name)
        if existing is None:
            # conflict row vanished between insert and read
            raise LookupError(f"Keyword '{name}' could not be created or found")
        return existing.id, False

    async def ensure_attached(self, paper_id: int, keyword_id: int) -> bool:
        """
        Attach a keyword to a paper if it is not attached already.

        Caller is responsible for committing the transaction.

        Returns:
            True if a new attachment row was inserted, False if it already existed
        """
        result = await self.session.execute(
            pg_insert(PaperKeyword)
            .values(paper_id=paper_id, keyword_id=keyword_id)
            .on_conflict_do_nothing(
                index_elements=[PaperKeyword.paper_id, PaperKeyword.keyword_id]
            )
            .returning(PaperKeyword.id)
        )
        inserted = result.scalar_one_or_none() is not None
        if not inserted:
            log.warning(
                "keyword already attached",
                paper_id=paper_id,
                keyword_id=keyword_id,
            )
        return inserted

    async def detach(self, paper_id: int, keyword_id: int) -> bool:
        """
        Remove a keyword attachment. Missing attachments are not an error.

        Returns:
            True if an attachment row was removed
        """
        result = await self.session.execute(
            delete(PaperKeyword).where(
                and_(PaperKeyword.paper_id == paper_id, PaperKeyword.keyword_id == keyword_id)
            )
        )
        return result.rowcount > 0

    async def search(self, query: str, limit: int = KEYWORD_SEARCH_LIMIT) -> list[dict]:
        """
        Fuzzy keyword search over names and aliases using pg_trgm.

        Ranked by the best trigram similarity between the query and the name
        or any alias.
        """
        result = await self.session.execute(
            text("""
                SELECT k.id, k.name, k.aliases
                FROM keywords AS k
                WHERE k.name % :q
                   OR EXISTS (
                        SELECT 1
                        FROM jsonb_array_elements_text(COALESCE(k.aliases, '[]'::jsonb)) AS alias
                        WHERE alias % :q
                   )
                ORDER BY GREATEST(
                    similarity(k.name, :q),
                    COALESCE((
                        SELECT MAX(similarity(alias, :q))
                        FROM jsonb_array_elements_text(COALESCE(k.aliases, '[]'::jsonb)) AS alias
                    ), 0)
                ) DESC, k.id ASC
                LIMIT :limit
            """),
            {"q": query, "limit": limit},
        )
        rows = result.fetchall()
        log.debug("keyword search", query=query, results=len(rows))
        return [{"id": row.id, "name": row.name, "aliases": row.aliases or []} for row in rows]
