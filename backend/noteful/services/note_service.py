"""
Noteful Backend — Note Service (Request Handling Logic)
=========================================================

What:  Validation, lookup, sanitization and serialization for the notes resource.
Why:   Keeps every business rule out of the routes, which only deal with
       status codes and headers.
How:   Composes a NoteRepository (storage) and a Sanitizer, both handed in
       at construction.
Who:   Called by the notes route handlers.

Operation Flow:
    list    → repository.list_all → sanitize each → [NoteResponse]
    get     → resolve_note → sanitize → NoteResponse
    create  → presence check → NoteCreate → repository.insert → commit → sanitize
    delete  → resolve_note → repository.delete_by_id → commit
    update  → resolve_note → validate → repository.update_by_id (given columns only) → commit

    resolve_note is the single "resolve-or-404" step shared by get, delete and
    update, so all three report a missing note identically. An id the integer
    column cannot hold names no note and is answered without a query.

Error Handling Strategy:
    - Missing note → NotFoundError (404)
    - Bad body → ValidationError (400), naming the first violation only
    - Any SQLAlchemyError → StorageError (500). The subtype is not inspected;
      its class name is kept in the context for the server log.
"""

import logging
from contextlib import contextmanager
from typing import Any, Iterator, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import SQLAlchemyError

from noteful.exceptions import (
    NotFoundError,
    StorageError,
    ValidationError,
    describe_invalid,
)
from noteful.models.note import Note
from noteful.repositories.base import NoteRepository
from noteful.schemas.note import INT4_MAX, INT4_MIN, NoteCreate, NoteResponse, NoteUpdate
from noteful.services.sanitizer import Sanitizer

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = tuple(NoteCreate.model_fields)
UPDATABLE_FIELDS = tuple(NoteUpdate.model_fields)


@contextmanager
def storage_errors(action: str, **context) -> Iterator[None]:
    """Re-raise any database failure inside the block as StorageError."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error("Database error while %s: %s", action, str(e), exc_info=True)
        raise StorageError(
            message=f"Could not complete {action}. Please try again later.",
            context={"original_error": type(e).__name__, **context},
        ) from e


class NoteService:
    """
    Business logic for the notes resource.

    Responsibilities:
        - list_notes():  Every note, sanitized
        - get_note():    One note or NotFoundError
        - create_note(): Fail-fast presence validation, then insert
        - delete_note(): Resolve, then delete
        - update_note(): Resolve, validate, then write only the supplied fields
    """

    def __init__(self, repository: NoteRepository, sanitizer: Sanitizer):
        self.repository = repository
        self.sanitizer = sanitizer

    # ── Serialization ─────────────────────────────────────────────────────

    def serialize(self, note: Note) -> NoteResponse:
        """Outbound form of a note. Only `name` and `content` are sanitized."""
        return NoteResponse(
            id=note.id,
            name=self.sanitizer.sanitize(note.name),
            modified=note.modified,
            folder_id=note.folder_id,
            content=self.sanitizer.sanitize(note.content),
        )

    # ── Lookup ────────────────────────────────────────────────────────────

    async def resolve_note(self, note_id: int) -> Note:
        """
        Fetch a note or fail with NotFoundError.

        Raises:
            NotFoundError: No note has this id (→ 404)
            StorageError: Query execution failed (→ 500)
        """
        if not INT4_MIN <= note_id <= INT4_MAX:
            raise NotFoundError(resource="Note", resource_id=note_id)
        with storage_errors("note lookup", note_id=note_id):
            note = await self.repository.get_by_id(note_id)
        if note is None:
            raise NotFoundError(resource="Note", resource_id=note_id)
        return note

    # ── Operations ────────────────────────────────────────────────────────

    async def list_notes(self) -> List[NoteResponse]:
        with storage_errors("note listing"):
            notes = await self.repository.list_all()
        return [self.serialize(note) for note in notes]

    async def get_note(self, note_id: int) -> NoteResponse:
        note = await self.resolve_note(note_id)
        return self.serialize(note)

    async def create_note(self, payload: Optional[Mapping[str, Any]]) -> NoteResponse:
        """
        Insert a new note after checking that every field is present.

        Presence is checked on the raw body first, in declaration order (id,
        name, modified, folder_id, content), and the first missing or null
        field is reported. Only then is the body validated against NoteCreate,
        so a missing field is never hidden by a type error in a later one.

        Raises:
            ValidationError: A field is missing or has the wrong type (→ 400)
            StorageError: The insert failed, e.g. a duplicate id (→ 500)
        """
        body = payload or {}
        for key in REQUIRED_FIELDS:
            if body.get(key) is None:
                raise ValidationError(
                    message=f"Missing '{key}' in request body",
                    field=key,
                )

        try:
            fields = NoteCreate.model_validate(body).as_fields()
        except PydanticValidationError as e:
            field, message = describe_invalid(e.errors())
            raise ValidationError(message=message, field=field) from e

        with storage_errors("note creation"):
            note = await self.repository.insert(fields)
            await self.repository.commit()
        logger.info("Note %s created in folder %s", note.id, note.folder_id)
        return self.serialize(note)

    async def delete_note(self, note_id: int) -> None:
        await self.resolve_note(note_id)
        with storage_errors("note deletion", note_id=note_id):
            deleted = await self.repository.delete_by_id(note_id)
            if deleted:
                await self.repository.commit()
        if not deleted:
            # Removed by a concurrent request between lookup and delete
            raise NotFoundError(resource="Note", resource_id=note_id)
        logger.info("Note %s deleted", note_id)

    async def update_note(self, note_id: int, payload: Optional[NoteUpdate]) -> None:
        """
        Apply a partial update.

        A field counts as supplied when the body contains it with a non-null
        value; empty strings and zero are written as given. Fields that were
        not supplied are left untouched in storage.

        Raises:
            NotFoundError: No note has this id (→ 404)
            ValidationError: None of the updatable fields was supplied (→ 400)
            StorageError: The update failed (→ 500)
        """
        await self.resolve_note(note_id)

        changes = payload.supplied_fields() if payload is not None else {}
        if not changes:
            quoted = [f"'{name}'" for name in UPDATABLE_FIELDS]
            raise ValidationError(
                message=(
                    "Request body must contain either "
                    f"{', '.join(quoted[:-1])}, or {quoted[-1]}"
                ),
            )

        with storage_errors("note update", note_id=note_id):
            updated = await self.repository.update_by_id(note_id, changes)
            if updated:
                await self.repository.commit()
        if not updated:
            raise NotFoundError(resource="Note", resource_id=note_id)
        logger.info("Note %s updated: %s", note_id, ", ".join(sorted(changes)))
