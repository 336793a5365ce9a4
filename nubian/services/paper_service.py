"""Service for paper submission, review and retrieval."""

from dataclasses import dataclass
from typing import Any, Optional

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from nubian.clients.content_store_client import ContentStoreClient, StoredFile
from nubian.exceptions import (
    ContentStoreError,
    ForbiddenError,
    ResourceNotFoundError,
    ValidationError,
)
from nubian.models.paper import Paper, PaperStatus, REVIEWED_STATUSES
from nubian.repositories.paper_repository import PaperRepository
from nubian.repositories.taxonomy_repository import TaxonomyRepository
from nubian.schemas.papers import PaperCreate, PaperUpdate
from nubian.services.auth_service import Principal
from nubian.services.keyword_service import KeywordService
from nubian.services.paper_filters import PaperFilters, can_modify_paper, can_view_paper
from nubian.utils.logger import get_logger
from nubian.utils.slugs import slugify, with_suffix

log = get_logger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
SLUG_CONSTRAINT = "uq_papers_slug"
MAX_SLUG_ATTEMPTS = 5


@dataclass(frozen=True)
class PdfUpload:
    """An uploaded PDF held in memory."""

    filename: str
    content_type: Optional[str]
    content: bytes


class PaperService:
    """Orchestrates paper mutations across the database and the content store.

    Every mutation validates its input before touching the content store or
    the database, and commits exactly once at the end. Content store calls are
    made outside the database transaction.
    """

    def __init__(
        self,
        session: AsyncSession,
        paper_repository: PaperRepository,
        taxonomy_repository: TaxonomyRepository,
        keyword_service: KeywordService,
        content_store: ContentStoreClient,
        max_upload_bytes: int,
    ):
        self.session = session
        self.paper_repository = paper_repository
        self.taxonomy_repository = taxonomy_repository
        self.keyword_service = keyword_service
        self.content_store = content_store
        self.max_upload_bytes = max_upload_bytes

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _validate_pdf(self, upload: Optional[PdfUpload]) -> PdfUpload:
        if upload is None or not upload.content:
            raise ValidationError(message="A PDF file is required", details={"field": "file"})
        if upload.content_type != PDF_CONTENT_TYPE:
            raise ValidationError(
                message="Only PDF files are allowed",
                details={"field": "file", "content_type": upload.content_type},
            )
        if len(upload.content) > self.max_upload_bytes:
            raise ValidationError(
                message=f"File exceeds the maximum size of {self.max_upload_bytes} bytes",
                details={"field": "file", "size": len(upload.content)},
            )
        return upload

    async def _validate_category(self, category_id: int) -> None:
        if not await self.taxonomy_repository.category_exists(category_id):
            raise ValidationError(
                message=f"Invalid category ID: {category_id}",
                details={"category_id": category_id},
            )

    async def _first_free_suffix(self, base: str) -> int:
        n = 1
        while await self.paper_repository.slug_exists(with_suffix(base, n)):
            n += 1
        return n

    async def _insert_with_unique_slug(self, title: str, values: dict[str, Any]) -> Paper:
        """
        Insert a paper under the first free slug for its title.

        A concurrent submission can claim the chosen slug between the lookup
        and the insert. Each attempt runs in a savepoint, so a collision on
        the slug constraint only rolls back that attempt before the next
        suffix is tried.
        """
        base = slugify(title)
        n = await self._first_free_suffix(base)
        for attempt in range(1, MAX_SLUG_ATTEMPTS + 1):
            slug = with_suffix(base, n)
            try:
                async with self.session.begin_nested():
                    return await self.paper_repository.create({**values, "slug": slug})
            except IntegrityError as e:
                if SLUG_CONSTRAINT not in str(e.orig) or attempt == MAX_SLUG_ATTEMPTS:
                    raise
                log.warning("slug taken, retrying", slug=slug, attempt=attempt)
                n += 1

        raise IntegrityError("Failed to pick a unique slug", None, Exception(SLUG_CONSTRAINT))

    async def _upload(self, upload: PdfUpload) -> StoredFile:
        return await self.content_store.upload(
            filename=upload.filename, content=upload.content, content_type=PDF_CONTENT_TYPE
        )

    async def _delete_remote(self, cid: str, paper_id: Optional[int] = None) -> None:
        """Best-effort removal of a stored PDF; failures are only logged."""
        try:
            await self.content_store.delete_by_cid(cid)
        except ContentStoreError as e:
            log.warning("stored file delete failed", paper_id=paper_id, cid=cid, error=e.message)

    async def _reload(self, paper_id: int) -> Paper:
        paper = await self.paper_repository.get_by_id(paper_id)
        if paper is None:
            raise ResourceNotFoundError("Paper", str(paper_id))
        return paper

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    async def list_papers(
        self, principal: Optional[Principal], filters: PaperFilters
    ) -> tuple[list[Paper], int]:
        """One page of papers visible to the principal, with the total count."""
        return await self.paper_repository.list_papers(principal, filters)

    async def get_visible(self, principal: Optional[Principal], identifier: str) -> Paper:
        """
        Fetch a paper by id or slug.

        Papers the principal may not see are reported as missing.

        Raises:
            ResourceNotFoundError: If no visible paper matches
        """
        paper = await self.paper_repository.get_by_id_or_slug(identifier)
        if paper is None or not can_view_paper(principal, paper):
            raise ResourceNotFoundError("Paper", identifier)
        return paper

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def create(
        self, principal: Principal, data: PaperCreate, upload: Optional[PdfUpload]
    ) -> Paper:
        """
        Submit a paper for review.

        Process:
        1. Validate the PDF, category and keyword ids
        2. Upload the PDF to the content store
        3. Insert the paper as pending and attach its keywords
        4. Commit, or remove the uploaded PDF again if the database write fails

        Raises:
            ForbiddenError: If the principal is not a user
            ValidationError: If any input is invalid
            ContentStoreError: If the upload fails (nothing is written)
        """
        if principal.kind != "user":
            raise ForbiddenError()

        pdf = self._validate_pdf(upload)
        await self._validate_category(data.category_id)
        await self.keyword_service.validate_ids(data.keywords)

        stored = await self._upload(pdf)

        try:
            keyword_ids = await self.keyword_service.reconcile(data.keywords, data.new_keywords)
            paper = await self._insert_with_unique_slug(
                data.title,
                {
                    "title": data.title,
                    "abstract": data.abstract,
                    "notes": data.notes,
                    "status": PaperStatus.PENDING.value,
                    "user_id": principal.id,
                    "category_id": data.category_id,
                    "ipfs_cid": stored.cid,
                    "ipfs_url": self.content_store.gateway_url(stored.cid),
                },
            )
            await self.keyword_service.attach_all(paper.id, keyword_ids)
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            await self._delete_remote(stored.cid)
            raise

        log.info(
            "paper submitted",
            paper_id=paper.id,
            slug=paper.slug,
            user_id=principal.id,
            keywords=len(keyword_ids),
        )
        return await self._reload(paper.id)

    async def update(
        self,
        principal: Principal,
        paper_id: int,
        data: PaperUpdate,
        upload: Optional[PdfUpload] = None,
    ) -> Paper:
        """
        Apply a partial update to a paper.

        Owners may edit content and keywords. Changing the status or the PDF
        requires an admin. A replaced PDF is removed from the content store
        after the commit.

        Raises:
            ResourceNotFoundError: If the paper does not exist
            ForbiddenError: If the principal may not make this change
            ValidationError: If any input is invalid
        """
        paper = await self.paper_repository.get_by_id(paper_id)
        if paper is None:
            raise ResourceNotFoundError("Paper", str(paper_id))
        if not can_modify_paper(principal, paper):
            raise ForbiddenError()

        supplied = data.model_fields_set
        values: dict[str, Any] = {}

        for name in ("title", "abstract", "notes"):
            if name in supplied and getattr(data, name) is not None:
                values[name] = getattr(data, name)

        if data.category_id is not None:
            await self._validate_category(data.category_id)
            values["category_id"] = data.category_id

        if data.status is not None:
            if not principal.is_admin:
                raise ForbiddenError("Only admins can update the status of a paper")
            reason = (data.rejection_reason or "").strip()
            if data.status == PaperStatus.REJECTED.value and not reason:
                raise ValidationError(
                    message="rejectionReason is required to reject a paper",
                    details={"field": "rejectionReason"},
                )
            values["status"] = data.status
            values["reviewed_by"] = principal.id if data.status in REVIEWED_STATUSES else None
            values["rejection_reason"] = reason if data.status == PaperStatus.REJECTED.value else None

        pdf: Optional[PdfUpload] = None
        if upload is not None:
            if not principal.is_admin:
                raise ForbiddenError("Only admins can change a paper's PDF")
            pdf = self._validate_pdf(upload)

        previous_cid = paper.ipfs_cid
        if pdf is not None:
            stored = await self._upload(pdf)
            values["ipfs_cid"] = stored.cid
            values["ipfs_url"] = self.content_store.gateway_url(stored.cid)

        await self.paper_repository.update(paper_id, values)

        if data.removed_keywords:
            await self.keyword_service.detach_all(paper_id, data.removed_keywords)

        attach_ids: set[int] = set()
        if data.added_keywords:
            # unknown ids are skipped, not rejected
            attach_ids |= await self.keyword_service.existing_ids(data.added_keywords)
        if data.new_keywords:
            attach_ids |= await self.keyword_service.resolve_names(data.new_keywords)
        if attach_ids:
            await self.keyword_service.attach_all(paper_id, attach_ids)

        await self.session.commit()
        log.info(
            "paper updated",
            paper_id=paper_id,
            principal=principal.kind,
            fields=sorted(values),
            status=values.get("status"),
        )

        if pdf is not None and previous_cid and previous_cid != values["ipfs_cid"]:
            await self._delete_remote(previous_cid, paper_id)

        return await self._reload(paper_id)

    async def delete(self, principal: Principal, paper_id: int) -> str:
        """
        Delete a paper, its keyword attachments and its stored PDF.

        Returns:
            Confirmation message naming the deleted paper

        Raises:
            ResourceNotFoundError: If the paper does not exist
            ForbiddenError: If the principal is neither owner nor admin
        """
        paper = await self.paper_repository.get_by_id(paper_id)
        if paper is None:
            raise ResourceNotFoundError("Paper", str(paper_id))
        if not can_modify_paper(principal, paper):
            raise ForbiddenError()

        title, cid = paper.title, paper.ipfs_cid
        await self.paper_repository.delete_with_keywords(paper_id)
        await self.session.commit()
        log.info("paper deleted", paper_id=paper_id, principal=principal.kind)

        if cid:
            await self._delete_remote(cid, paper_id)

        return f"'{title}' paper deleted successfully"
