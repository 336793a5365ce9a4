"""Keyword reconciliation and attachment."""

from typing import Iterable

from nubian.exceptions import ValidationError
from nubian.repositories.keyword_repository import KeywordRepository
from nubian.utils.logger import get_logger

log = get_logger(__name__)


class KeywordService:
    """Resolves keyword ids and free-text names into keyword rows."""

    def __init__(self, keyword_repository: KeywordRepository):
        self.keyword_repository = keyword_repository

    async def validate_ids(self, keyword_ids: Iterable[int]) -> set[int]:
        """
        Check that every id exists.

        Raises:
            ValidationError: Naming every id missing from the keyword table
        """
        requested = set(keyword_ids)
        if not requested:
            return set()

        found = await self.keyword_repository.get_existing_ids(requested)
        missing = sorted(requested - found)
        if missing:
            raise ValidationError(
                message=f"Invalid keyword IDs: {', '.join(str(i) for i in missing)}",
                details={"keyword_ids": missing},
            )
        return requested

    async def existing_ids(self, keyword_ids: Iterable[int]) -> set[int]:
        """Subset of ids present in the keyword table; unknown ids are dropped."""
        return await self.keyword_repository.get_existing_ids(keyword_ids)

    async def resolve_names(self, names: Iterable[str]) -> set[int]:
        """Ids for free-text keyword names, creating the ones that do not exist."""
        ids: set[int] = set()
        for raw in names:
            name = raw.strip()
            if not name:
                continue
            keyword_id, created = await self.keyword_repository.get_or_create(name)
            if created:
                log.debug("new keyword resolved", keyword_id=keyword_id, name=name)
            ids.add(keyword_id)
        return ids

    async def reconcile(self, existing_ids: Iterable[int], new_names: Iterable[str]) -> set[int]:
        """
        Deduplicated keyword id set for a paper submission.

        Existing ids are validated before any new keyword is created, so an
        invalid id leaves the keyword table untouched.

        Raises:
            ValidationError: If any existing id is unknown
        """
        ids = await self.validate_ids(existing_ids)
        ids |= await self.resolve_names(new_names)
        return ids

    async def attach_all(self, paper_id: int, keyword_ids: Iterable[int]) -> int:
        """
        Ensure every keyword is attached to the paper.

        Returns:
            Number of attachments actually inserted
        """
        inserted = 0
        for keyword_id in sorted(set(keyword_ids)):
            if await self.keyword_repository.ensure_attached(paper_id, keyword_id):
                inserted += 1
        return inserted

    async def detach_all(self, paper_id: int, keyword_ids: Iterable[int]) -> int:
        """Detach keywords from the paper; ids that are not attached are ignored."""
        removed = 0
        for keyword_id in sorted(set(keyword_ids)):
            if await self.keyword_repository.detach(paper_id, keyword_id):
                removed += 1
        return removed

    async def search(self, query: str) -> list[dict]:
        """Trigram search over keyword names and aliases."""
        q = query.strip()
        if not q:
            raise ValidationError(message="Search query is required", details={"field": "q"})
        return await self.keyword_repository.search(q)
