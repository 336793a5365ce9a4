"""Field and category taxonomy models."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship
from nubian.database import Base


class Field(Base):
    """Top-level research field (e.g. Life Sciences)."""

    __tablename__ = "fields"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text)

    categories: Mapped[list[Category]] = relationship(
        "Category",
        back_populates="field",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    def __repr__(self):
        return f"<Field(name='{self.name}')>"


class Category(Base):
    """Category within a field. Papers are filed under exactly one category."""

    __tablename__ = "categories"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text)
    field_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("fields.id", ondelete="CASCADE"), index=True
    )

    field: Mapped[Field] = relationship("Field", back_populates="categories")

    def __repr__(self):
        return f"<Category(name='{self.name}', field_id={self.field_id})>"
