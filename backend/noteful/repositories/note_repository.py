"""
Noteful Backend — SQLAlchemy Note Repository
==============================================

What:  NoteRepository implementation over an AsyncSession.
Who:   Built per request by the notes routes from the session dependency.
When:  One instance per request; it never outlives its session.

Transactions:
    Writes are flushed as they happen and committed when NoteService calls
    commit(), before the response is built. The session dependency
    (get_db_session) rolls back on any error, so a request never leaves a
    half-written transaction behind.

Query plans:
    list_all:      SELECT * FROM notes ORDER BY id
    get_by_id:     SELECT * FROM notes WHERE id = :id        (primary key)
    insert:        INSERT ... ; SELECT ... WHERE id = :id    (re-read)
    delete_by_id:  DELETE FROM notes WHERE id = :id
    update_by_id:  UPDATE notes SET <given columns> WHERE id = :id
"""

import logging
from typing import Any, Dict, List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.models.note import Note
from noteful.repositories.base import NoteRepository

logger = logging.getLogger(__name__)


class SqlNoteRepository(NoteRepository):
    """Notes stored in a relational database through async SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def list_all(self) -> List[Note]:
        result = await self.session.execute(select(Note).order_by(Note.id))
        return list(result.scalars().all())

    async def get_by_id(self, note_id: int) -> Optional[Note]:
        result = await self.session.execute(
            select(Note).where(Note.id == note_id)
        )
        return result.scalar_one_or_none()

    async def insert(self, fields: Dict[str, Any]) -> Note:
        note = Note(**fields)
        self.session.add(note)
        await self.session.flush()  # Emits the INSERT without committing
        # Re-read so the caller sees the row exactly as the database stored it
        # (server defaults, type round-trips), not the object we constructed.
        await self.session.refresh(note)
        logger.debug("Inserted note %s", note.id)
        return note

    async def delete_by_id(self, note_id: int) -> int:
        result = await self.session.execute(
            delete(Note).where(Note.id == note_id)
        )
        return result.rowcount

    async def update_by_id(self, note_id: int, fields: Dict[str, Any]) -> int:
        result = await self.session.execute(
            update(Note).where(Note.id == note_id).values(**fields)
        )
        return result.rowcount

    async def commit(self) -> None:
        await self.session.commit()
