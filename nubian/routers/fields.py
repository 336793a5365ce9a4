"""Field, category and institution lookups."""

from fastapi import APIRouter

from nubian.schemas.taxonomy import (
    CategoryResponse,
    FieldResponse,
    InstitutionListResponse,
    InstitutionResponse,
)
from nubian.dependencies import TaxonomyRepoDep
from nubian.exceptions import ResourceNotFoundError

router = APIRouter()


@router.get("/fields", response_model=list[FieldResponse])
async def list_fields(taxonomy_repo: TaxonomyRepoDep) -> list[FieldResponse]:
    """All research fields by name."""
    fields = await taxonomy_repo.list_fields()
    return [FieldResponse.model_validate(f) for f in fields]


@router.get("/fields/{field_id}/categories", response_model=list[CategoryResponse])
async def list_field_categories(field_id: int, taxonomy_repo: TaxonomyRepoDep) -> list[CategoryResponse]:
    """Categories of one field."""
    if await taxonomy_repo.get_field(field_id) is None:
        raise ResourceNotFoundError("Field", str(field_id))
    categories = await taxonomy_repo.list_categories(field_id)
    return [CategoryResponse.model_validate(c) for c in categories]


@router.get("/institutions", response_model=InstitutionListResponse)
async def list_institutions(taxonomy_repo: TaxonomyRepoDep) -> InstitutionListResponse:
    institutions = await taxonomy_repo.list_institutions()
    return InstitutionListResponse(
        institutions=[InstitutionResponse.model_validate(i) for i in institutions]
    )
