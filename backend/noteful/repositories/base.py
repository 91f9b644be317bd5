"""
Noteful Backend — Abstract Note Repository Interface
=====================================================

What:  Abstract base class defining the storage primitives for notes.
Why:   NoteService receives a repository at construction instead of reaching
       for a global database handle. Anything that implements these
       coroutines can stand behind the API.
How:   Concrete implementations inherit from NoteRepository and implement
       every abstract method.
"""

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from noteful.models.note import Note


class NoteRepository(ABC):
    """
    Storage contract for the `notes` relation.

    Contract:
        - Every method is one round trip; nothing is cached between calls
        - Missing rows are reported as None / 0, never as exceptions
        - Storage failures propagate unchanged
    """

    @abstractmethod
    async def list_all(self) -> List[Note]:
        """Return every note, in the store's natural order."""
        ...

    @abstractmethod
    async def get_by_id(self, note_id: int) -> Optional[Note]:
        """
        Look up a single note.

        Returns:
            The note, or None when no row has this id.
        """
        ...

    @abstractmethod
    async def insert(self, fields: Dict[str, Any]) -> Note:
        """
        Persist a new note.

        Returns:
            The full row as stored, including the id the store kept.
        """
        ...

    @abstractmethod
    async def delete_by_id(self, note_id: int) -> int:
        """Delete a note. Returns the number of rows removed (0 or 1)."""
        ...

    @abstractmethod
    async def update_by_id(self, note_id: int, fields: Dict[str, Any]) -> int:
        """
        Write only the given columns of one note.

        Columns missing from `fields` keep their stored values.

        Returns:
            The number of rows changed (0 or 1).
        """
        ...

    @abstractmethod
    async def commit(self) -> None:
        """
        Make every write since the last commit durable.

        Called by NoteService before it answers, so a failed commit is
        reported to the client instead of after the response is sent.
        """
        ...
