"""User model for researchers managed by the session provider."""

from __future__ import annotations

from datetime import datetime
from typing import TYPE_CHECKING

from sqlalchemy import Boolean, ForeignKey, Integer, String, Text, TIMESTAMP, func
from sqlalchemy.orm import Mapped, mapped_column, relationship
from nubian.database import Base

if TYPE_CHECKING:
    from nubian.models.institution import Institution


class User(Base):
    """Researcher account."""

    __tablename__ = "users"

    # Primary key (issued by the identity provider)
    id: Mapped[str] = mapped_column(Text, primary_key=True)

    # Profile information
    name: Mapped[str] = mapped_column(Text)
    email: Mapped[str] = mapped_column(String(255), unique=True, index=True)
    email_verified: Mapped[bool] = mapped_column(
        Boolean, default=False, server_default="false"
    )
    image: Mapped[str | None] = mapped_column(Text)
    institution_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("institutions.id", ondelete="SET NULL")
    )
    areas_of_interest: Mapped[str | None] = mapped_column(Text)

    # Timestamps
    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now()
    )
    updated_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now(), onupdate=func.now()
    )

    # Relationships
    institution: Mapped[Institution | None] = relationship("Institution")

    def __repr__(self):
        return f"<User(id='{self.id}', email='{self.email}')>"
