"""
Noteful Backend — Folder SQLAlchemy Model
===========================================

What:  ORM mapping of the existing `folders` table.
Why:   `notes.folder_id` is a foreign key into this table; mapping it lets the
       shared metadata resolve that key (and lets the test suite create it).
Who:   Referenced by the Note model. No route or service reads folders.
"""

from sqlalchemy import Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base


class Folder(Base):
    """A folder that notes are filed under. Owned and managed outside this API."""

    __tablename__ = "folders"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)

    def __repr__(self) -> str:
        return f"<Folder(id={self.id}, name='{self.name}')>"
