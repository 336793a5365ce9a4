"""Institution model."""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column
from nubian.database import Base


class Institution(Base):
    """Research institution a user may belong to."""

    __tablename__ = "institutions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, unique=True)

    def __repr__(self):
        return f"<Institution(name='{self.name}')>"
