"""Keyword model and the paper/keyword join table."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import ForeignKey, Integer, Text, TIMESTAMP, UniqueConstraint, func, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from nubian.database import Base


class Keyword(Base):
    """Free-text keyword with optional aliases used for fuzzy search."""

    __tablename__ = "keywords"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, unique=True)
    aliases: Mapped[list | None] = mapped_column(
        JSONB, default=list, server_default=text("'[]'::jsonb")
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now()
    )

    def __repr__(self):
        return f"<Keyword(name='{self.name}')>"


class PaperKeyword(Base):
    """Attachment of a keyword to a paper. At most one row per pair."""

    __tablename__ = "paper_keywords"
    __table_args__ = (
        UniqueConstraint("paper_id", "keyword_id", name="uq_paper_keywords_paper_keyword"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    paper_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("papers.id", ondelete="CASCADE"), index=True
    )
    keyword_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("keywords.id", ondelete="CASCADE"), index=True
    )

    created_at: Mapped[datetime] = mapped_column(
        TIMESTAMP(timezone=True), server_default=func.now()
    )

    def __repr__(self):
        return f"<PaperKeyword(paper_id={self.paper_id}, keyword_id={self.keyword_id})>"
