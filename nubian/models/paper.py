"""Paper model for submitted research papers."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import TYPE_CHECKING

from sqlalchemy import (
    CheckConstraint,
    ForeignKey,
    Integer,
    String,
    Text,
    TIMESTAMP,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship
from nubian.database import Base

if TYPE_CHECKING:
    from nubian.models.field import Category, Field
    from nubian.models.keyword import Keyword
    from nubian.models.user import User


class PaperStatus(str, Enum):
    """Review lifecycle of a paper."""

    PENDING = "pending"
    PUBLISHED = "published"
    REJECTED = "rejected"


REVIEWED_STATUSES = frozenset({PaperStatus.PUBLISHED.value, PaperStatus.REJECTED.value})

# papers.id is an int4 column
MAX_PAPER_ID = 2**31 - 1


class Paper(Base):
    """Research paper submitted by a user and reviewed by an admin."""

    __tablename__ = "papers"
    __table_args__ = (
        CheckConstraint(
            "status IN ('pending', 'published', 'rejected')",
            name="ck_papers_status",
        ),
        CheckConstraint(
            "(status = 'rejected') = (rejection_reason IS NOT NULL)",
            name="ck_papers_rejection_reason",
        ),
        CheckConstraint(
            "reviewed_by IS NULL OR status IN ('published', 'rejected')",
            name="ck_papers_reviewed_by",
        ),
        UniqueConstraint("slug", name="uq_papers_slug"),
    )

    # Primary key
    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Content
    title: Mapped[str] = mapped_column(Text)
    slug: Mapped[str] = mapped_column(Text, index=True)
    abstract: Mapped[str] = mapped_column(Text)
    notes: Mapped[str | None] = mapped_column(Text)

    # Review
    status: Mapped[str] = mapped_column(
        String(20), default=PaperStatus.PENDING.value, server_default="pending", index=True
    )
    reviewed_by: Mapped[str | None] = mapped_column(Text, ForeignKey("admins.id"))
    rejection_reason: Mapped[str | None] = mapped_column(Text)

    # Ownership and taxonomy
    user_id: Mapped[str] = mapped_column(Text, ForeignKey("users.id"), index=True)
    category_id: Mapped[int] = mapped_column(Integer, ForeignKey("categories.id"), index=True)

    # Stored PDF
    ipfs_cid: Mapped[str] = mapped_column(Text)
    ipfs_url: Mapped[str] = mapped_column(Text)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    user: Mapped[User] = relationship("User")
    category: Mapped[Category] = relationship("Category")
    keywords: Mapped[list[Keyword]] = relationship(
        "Keyword",
        secondary="paper_keywords",
        order_by="Keyword.id",
        viewonly=True,
    )

    @property
    def field(self) -> Field:
        """Field reached through the paper's category."""
        return self.category.field

    def __repr__(self):
        return f"<Paper(slug='{self.slug}', status='{self.status}')>"
