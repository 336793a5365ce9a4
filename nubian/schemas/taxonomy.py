"""Schemas for fields, categories and institutions."""

from typing import Literal

from pydantic import BaseModel, ConfigDict


class FieldResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class CategoryResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class InstitutionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class InstitutionListResponse(BaseModel):
    """Response for the institutions endpoint."""

    status: Literal["success"] = "success"
    institutions: list[InstitutionResponse]
