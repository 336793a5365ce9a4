"""Keyword search router."""

from fastapi import APIRouter, Query

from nubian.schemas.keywords import KeywordResult
from nubian.dependencies import KeywordServiceDep

router = APIRouter()


@router.get("/keywords", response_model=list[KeywordResult])
async def search_keywords(
    keyword_service: KeywordServiceDep,
    q: str = Query(..., min_length=1, description="Text to match against keyword names and aliases"),
) -> list[KeywordResult]:
    """Up to 10 keywords ranked by trigram similarity to ``q``."""
    rows = await keyword_service.search(q)
    return [KeywordResult.model_validate(row) for row in rows]
