"""Repository layer for data access."""

from nubian.repositories.paper_repository import PaperRepository
from nubian.repositories.keyword_repository import KeywordRepository
from nubian.repositories.taxonomy_repository import TaxonomyRepository
from nubian.repositories.user_repository import UserRepository
from nubian.repositories.donation_repository import DonationRepository

__all__ = [
    "PaperRepository",
    "KeywordRepository",
    "TaxonomyRepository",
    "UserRepository",
    "DonationRepository",
]
