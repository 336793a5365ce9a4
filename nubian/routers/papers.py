"""Papers router."""

from typing import Annotated, Optional

from fastapi import APIRouter, File, Form, Path, Query, UploadFile, status

from nubian.models.paper import MAX_PAPER_ID
from nubian.schemas.papers import (
    DeletePaperResponse,
    PaperCreate,
    PaperListResponse,
    PaperResponse,
    PaperStatusValue,
    PaperUpdate,
)
from nubian.dependencies import (
    CurrentPrincipalOptional,
    CurrentPrincipalRequired,
    CurrentUser,
    PaperServiceDep,
)
from nubian.services.paper_filters import DEFAULT_PAGE_SIZE, PaperFilters
from nubian.services.paper_service import PdfUpload
from nubian.utils.pagination import build_pagination_links

router = APIRouter()

PAPERS_PATH = "/papers"

PaperIdPath = Annotated[int, Path(ge=1, le=MAX_PAPER_ID)]


async def _read_upload(file: Optional[UploadFile]) -> Optional[PdfUpload]:
    if file is None:
        return None
    content = await file.read()
    return PdfUpload(
        filename=file.filename or "paper.pdf",
        content_type=file.content_type,
        content=content,
    )


@router.get(PAPERS_PATH, response_model=PaperListResponse)
async def list_papers(
    paper_service: PaperServiceDep,
    principal: CurrentPrincipalOptional,
    category_id: Annotated[Optional[int], Query(alias="categoryId")] = None,
    field_id: Annotated[Optional[int], Query(alias="fieldId")] = None,
    user_id: Annotated[Optional[str], Query(alias="userId")] = None,
    search: Optional[str] = None,
    paper_status: Annotated[Optional[PaperStatusValue], Query(alias="status")] = None,
    page: int = Query(1, ge=1),
    size: int = Query(DEFAULT_PAGE_SIZE, ge=1, le=100),
) -> PaperListResponse:
    """Paginated papers visible to the caller. Anonymous callers see published papers only."""
    filters = PaperFilters(
        category_id=category_id,
        field_id=field_id,
        user_id=user_id,
        search=search,
        status=paper_status,
        page=page,
        size=size,
    )
    papers, total = await paper_service.list_papers(principal, filters)
    links = build_pagination_links(PAPERS_PATH, total, page, size, filters.query_params())

    return PaperListResponse(
        data=[PaperResponse.model_validate(p, from_attributes=True) for p in papers],
        next_page=links.next_page,
        prev_page=links.prev_page,
        total=total,
        size=size,
    )


@router.post(PAPERS_PATH, response_model=PaperResponse, status_code=status.HTTP_201_CREATED)
async def create_paper(
    paper_service: PaperServiceDep,
    principal: CurrentUser,
    title: Annotated[str, Form()],
    abstract: Annotated[str, Form()],
    category_id: Annotated[int, Form(alias="categoryId")],
    notes: Annotated[Optional[str], Form()] = None,
    keywords: Annotated[list[int], Form()] = [],
    new_keywords: Annotated[list[str], Form(alias="newKeywords")] = [],
    file: Annotated[Optional[UploadFile], File()] = None,
) -> PaperResponse:
    """Submit a paper with its PDF. New papers start as pending."""
    data = PaperCreate(
        title=title,
        abstract=abstract,
        notes=notes,
        category_id=category_id,
        keywords=keywords,
        new_keywords=new_keywords,
    )
    paper = await paper_service.create(principal, data, await _read_upload(file))
    return PaperResponse.model_validate(paper, from_attributes=True)


@router.get(PAPERS_PATH + "/{identifier}", response_model=PaperResponse)
async def get_paper(
    identifier: str,
    paper_service: PaperServiceDep,
    principal: CurrentPrincipalOptional,
) -> PaperResponse:
    """Get a single paper by id or slug."""
    paper = await paper_service.get_visible(principal, identifier)
    return PaperResponse.model_validate(paper, from_attributes=True)


@router.put(PAPERS_PATH + "/{paper_id}", response_model=PaperResponse)
async def update_paper(
    paper_id: PaperIdPath,
    paper_service: PaperServiceDep,
    principal: CurrentPrincipalRequired,
    title: Annotated[Optional[str], Form()] = None,
    abstract: Annotated[Optional[str], Form()] = None,
    notes: Annotated[Optional[str], Form()] = None,
    category_id: Annotated[Optional[int], Form(alias="categoryId")] = None,
    paper_status: Annotated[Optional[PaperStatusValue], Form(alias="status")] = None,
    rejection_reason: Annotated[Optional[str], Form(alias="rejectionReason")] = None,
    added_keywords: Annotated[list[int], Form(alias="addedKeywords")] = [],
    removed_keywords: Annotated[list[int], Form(alias="removedKeywords")] = [],
    new_keywords: Annotated[list[str], Form(alias="newKeywords")] = [],
    file: Annotated[Optional[UploadFile], File()] = None,
) -> PaperResponse:
    """Partially update a paper. Status changes and PDF replacement are admin-only."""
    supplied = {
        "title": title,
        "abstract": abstract,
        "notes": notes,
        "category_id": category_id,
        "status": paper_status,
        "rejection_reason": rejection_reason,
        "added_keywords": added_keywords,
        "removed_keywords": removed_keywords,
        "new_keywords": new_keywords,
    }
    data = PaperUpdate.model_validate({k: v for k, v in supplied.items() if v not in (None, [])})
    paper = await paper_service.update(principal, paper_id, data, await _read_upload(file))
    return PaperResponse.model_validate(paper, from_attributes=True)


@router.delete(PAPERS_PATH + "/{paper_id}", response_model=DeletePaperResponse)
async def delete_paper(
    paper_id: PaperIdPath,
    paper_service: PaperServiceDep,
    principal: CurrentPrincipalRequired,
) -> DeletePaperResponse:
    """Delete a paper, its keyword attachments and its stored PDF."""
    message = await paper_service.delete(principal, paper_id)
    return DeletePaperResponse(message=message)
