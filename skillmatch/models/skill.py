"""Skill model for the master skills catalogue."""

from typing import Optional
from uuid import UUID, uuid4

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin


class Skill(Base, TimestampMixin):
    """A named skill (e.g. "Python", "Project Management").

    Personnel hold skills at a proficiency level and projects require them at
    a minimum proficiency level; both links live in their own join tables.
    """

    __tablename__ = "skills"

    id: Mapped[UUID] = mapped_column(primary_key=True, default=uuid4)
    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        index=True
    )
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    def __repr__(self) -> str:
        """String representation of Skill."""
        return f"<Skill(id={self.id}, name='{self.name}', category='{self.category}')>"
