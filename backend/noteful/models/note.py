"""
Noteful Backend — Note SQLAlchemy Model
=========================================

What:  ORM model representing the `notes` table.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Used by SqlNoteRepository for all CRUD operations.

Table Design:
    - id:        Integer primary key, assigned at insert, never changed
    - name:      Free-text title
    - content:   Free-text body
    - folder_id: Foreign key to folders.id; a folder's notes go with it
    - modified:  Timestamp of last change (timezone-aware)

    Every column is NOT NULL: a persisted note always has all five fields.
"""

from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, Text, text
from sqlalchemy.orm import Mapped, mapped_column

from noteful.database import Base
from noteful.models.folder import Folder  # noqa: F401  (registers the referenced table)


class Note(Base):
    """
    Represents a note in the database.

    Lifecycle:
        1. Created by POST /api/notes
        2. Read by GET /api/notes and GET /api/notes/{id}
        3. Updated in place by PATCH (only the supplied columns)
        4. Hard-deleted by DELETE (no tombstone)
    """

    __tablename__ = "notes"

    id: Mapped[int] = mapped_column(
        Integer,
        primary_key=True,
        autoincrement=True,
        comment="Unique identifier, immutable after creation",
    )

    name: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note title (raw; sanitized on the way out)",
    )

    # Why TIMESTAMP WITH TIME ZONE: Unambiguous time representation globally
    modified: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
        server_default=text("CURRENT_TIMESTAMP"),
        comment="When this note was last changed",
    )

    # Existence of the folder is the database's concern, not the API's
    folder_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("folders.id", ondelete="CASCADE"),
        nullable=False,
        comment="Folder this note is filed under",
    )

    content: Mapped[str] = mapped_column(
        Text,
        nullable=False,
        comment="Note body (raw; sanitized on the way out)",
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return (
            f"<Note(id={self.id}, folder_id={self.folder_id}, "
            f"modified='{self.modified}')>"
        )
