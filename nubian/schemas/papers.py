"""Schemas for papers endpoints."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PaperStatusValue = Literal["pending", "published", "rejected"]


class CamelModel(BaseModel):
    """Model serialized with camelCase keys and populated by either name."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# ============================================================================
# Inputs
# ============================================================================


class PaperCreate(CamelModel):
    """Fields of a new paper submission (the PDF travels separately)."""

    title: str = Field(min_length=1)
    abstract: str = Field(min_length=1)
    notes: str | None = None
    category_id: int = Field(gt=0)
    keywords: list[int] = Field(default_factory=list)
    new_keywords: list[str] = Field(default_factory=list)


class PaperUpdate(CamelModel):
    """Partial update; only fields that were supplied are applied."""

    title: str | None = Field(default=None, min_length=1)
    abstract: str | None = Field(default=None, min_length=1)
    notes: str | None = None
    category_id: int | None = Field(default=None, gt=0)
    status: PaperStatusValue | None = None
    rejection_reason: str | None = None
    added_keywords: list[int] = Field(default_factory=list)
    removed_keywords: list[int] = Field(default_factory=list)
    new_keywords: list[str] = Field(default_factory=list)


# ============================================================================
# Responses
# ============================================================================


class PaperOwner(CamelModel):
    id: str
    name: str
    email: str


class PaperCategory(CamelModel):
    id: int
    name: str
    field_id: int


class PaperField(CamelModel):
    id: int
    name: str


class PaperKeyword(CamelModel):
    id: int
    name: str
    aliases: list[str] = Field(default_factory=list)


class PaperResponse(CamelModel):
    """Paper with its owner, taxonomy and keywords."""

    id: int
    title: str
    slug: str
    abstract: str
    notes: str | None = None
    status: PaperStatusValue
    user_id: str
    category_id: int
    reviewed_by: str | None = None
    rejection_reason: str | None = None
    ipfs_cid: str
    ipfs_url: str
    created_at: datetime
    updated_at: datetime
    user: PaperOwner
    category: PaperCategory
    field: PaperField
    keywords: list[PaperKeyword] = Field(default_factory=list)


class PaperListResponse(BaseModel):
    """One page of papers with links to the neighbouring pages."""

    data: list[PaperResponse]
    next_page: str | None = None
    prev_page: str | None = None
    total: int
    size: int


class DeletePaperResponse(BaseModel):
    """Response for delete paper endpoint."""

    message: str
