"""Factory functions for business logic services.

Services are not cached because they depend on the request-scoped db session.
"""

from sqlalchemy.ext.asyncio import AsyncSession

from nubian.config import get_settings
from nubian.factories.client_factories import get_content_store_client
from nubian.repositories.donation_repository import DonationRepository
from nubian.repositories.keyword_repository import KeywordRepository
from nubian.repositories.paper_repository import PaperRepository
from nubian.repositories.taxonomy_repository import TaxonomyRepository
from nubian.repositories.user_repository import UserRepository
from nubian.services.donation_service import DonationService
from nubian.services.keyword_service import KeywordService
from nubian.services.paper_service import PaperService


def get_keyword_service(db_session: AsyncSession) -> KeywordService:
    """Create KeywordService bound to a session."""
    return KeywordService(keyword_repository=KeywordRepository(db_session))


def get_paper_service(db_session: AsyncSession) -> PaperService:
    """
    Create PaperService with dependencies.

    Args:
        db_session: Database session

    Returns:
        PaperService instance
    """
    settings = get_settings()
    return PaperService(
        session=db_session,
        paper_repository=PaperRepository(db_session),
        taxonomy_repository=TaxonomyRepository(db_session),
        keyword_service=get_keyword_service(db_session),
        content_store=get_content_store_client(),
        max_upload_bytes=settings.max_upload_bytes,
    )


def get_donation_service(db_session: AsyncSession) -> DonationService:
    """Create DonationService bound to a session."""
    settings = get_settings()
    return DonationService(
        session=db_session,
        donation_repository=DonationRepository(db_session),
        user_repository=UserRepository(db_session),
        secret_key=settings.paystack_secret_key,
    )
