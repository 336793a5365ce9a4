"""FastAPI dependency injection providers."""

from typing import Annotated

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from nubian.database import get_db
from nubian.services.auth_service import Principal, get_auth_service
from nubian.services.donation_service import DonationService
from nubian.services.keyword_service import KeywordService
from nubian.services.paper_service import PaperService
from nubian.repositories.taxonomy_repository import TaxonomyRepository
from nubian.exceptions import InvalidTokenError, MissingTokenError
from nubian.utils.logger import get_logger
from nubian.utils.request_context import set_principal
from nubian.factories.service_factories import (
    get_donation_service,
    get_keyword_service,
    get_paper_service,
)

log = get_logger(__name__)


# Type aliases for cleaner router signatures
DbSession = Annotated[AsyncSession, Depends(get_db)]


# Service dependencies
def get_paper_service_dep(db: DbSession) -> PaperService:
    """Get PaperService with database session."""
    return get_paper_service(db)


def get_keyword_service_dep(db: DbSession) -> KeywordService:
    """Get KeywordService with database session."""
    return get_keyword_service(db)


def get_donation_service_dep(db: DbSession) -> DonationService:
    """Get DonationService with database session."""
    return get_donation_service(db)


PaperServiceDep = Annotated[PaperService, Depends(get_paper_service_dep)]
KeywordServiceDep = Annotated[KeywordService, Depends(get_keyword_service_dep)]
DonationServiceDep = Annotated[DonationService, Depends(get_donation_service_dep)]


# Repository dependencies (request-scoped)
def get_taxonomy_repository(db: DbSession) -> TaxonomyRepository:
    """Get TaxonomyRepository with database session."""
    return TaxonomyRepository(db)


TaxonomyRepoDep = Annotated[TaxonomyRepository, Depends(get_taxonomy_repository)]


# ============================================================================
# Authentication Dependencies
# ============================================================================


async def get_current_principal_optional(
    authorization: Annotated[str | None, Header(alias="Authorization")] = None,
) -> Principal | None:
    """Get current principal if a valid token is presented, None otherwise."""
    if not authorization:
        return None

    try:
        principal = await get_auth_service().verify_token(authorization)
    except (MissingTokenError, InvalidTokenError) as e:
        log.debug("optional auth ignored", reason=e.message)
        return None

    set_principal(principal)
    return principal


async def get_current_principal_required(
    authorization: Annotated[str | None, Header(alias="Authorization")] = None,
) -> Principal:
    """Get current principal, raise 401 if not authenticated."""
    if not authorization:
        raise MissingTokenError()

    principal = await get_auth_service().verify_token(authorization)
    set_principal(principal)
    return principal


async def get_current_user(principal: Annotated[Principal, Depends(get_current_principal_required)]) -> Principal:
    """Require a token from the user identity domain."""
    if principal.kind != "user":
        raise InvalidTokenError("A user session is required")
    return principal


async def get_current_admin(principal: Annotated[Principal, Depends(get_current_principal_required)]) -> Principal:
    """Require a token from the admin identity domain."""
    if not principal.is_admin:
        raise InvalidTokenError("An admin session is required")
    return principal


# Type aliases for auth dependencies
CurrentPrincipalOptional = Annotated[Principal | None, Depends(get_current_principal_optional)]
CurrentPrincipalRequired = Annotated[Principal, Depends(get_current_principal_required)]
CurrentUser = Annotated[Principal, Depends(get_current_user)]
CurrentAdmin = Annotated[Principal, Depends(get_current_admin)]
