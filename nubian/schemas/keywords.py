"""Keyword search schemas."""

from pydantic import BaseModel, Field


class KeywordResult(BaseModel):
    """Keyword matched by a fuzzy search."""

    id: int
    name: str
    aliases: list[str] = Field(default_factory=list)
