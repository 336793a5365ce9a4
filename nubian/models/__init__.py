"""Database models."""

from nubian.models.institution import Institution
from nubian.models.user import User
from nubian.models.admin import Admin
from nubian.models.field import Field, Category
from nubian.models.keyword import Keyword, PaperKeyword
from nubian.models.paper import Paper, PaperStatus
from nubian.models.donation import PaystackDonation

__all__ = [
    "Institution",
    "User",
    "Admin",
    "Field",
    "Category",
    "Keyword",
    "PaperKeyword",
    "Paper",
    "PaperStatus",
    "PaystackDonation",
]
