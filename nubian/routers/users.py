"""Session introspection router."""

from fastapi import APIRouter

from nubian.schemas.users import MeResponse
from nubian.dependencies import CurrentAdmin, CurrentUser

router = APIRouter()


def _me(principal) -> MeResponse:
    return MeResponse(id=principal.id, kind=principal.kind, email=principal.email, name=principal.name)


@router.get("/user/me", response_model=MeResponse)
async def get_current_user_info(principal: CurrentUser) -> MeResponse:
    """Principal behind a user session token."""
    return _me(principal)


@router.get("/admin/me", response_model=MeResponse)
async def get_current_admin_info(principal: CurrentAdmin) -> MeResponse:
    """Principal behind an admin session token."""
    return _me(principal)
