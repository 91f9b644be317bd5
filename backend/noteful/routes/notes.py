"""
Noteful Backend — Notes Route Handlers
========================================

What:  The five operations of the /api/notes resource.
How:   Each handler gets a NoteService built for the current request, calls it
       and picks the status code. Errors raised by the service are turned into
       responses by the global exception handlers in main.py.

Status codes:
    GET    /api/notes        200
    POST   /api/notes        201 + Location header
    GET    /api/notes/{id}   200
    DELETE /api/notes/{id}   204, empty body
    PATCH  /api/notes/{id}   204, empty body
"""

import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Request, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from noteful.database import get_db_session
from noteful.repositories.note_repository import SqlNoteRepository
from noteful.schemas.note import (
    ErrorResponse,
    NoteCreate,
    NoteResponse,
    NoteUpdate,
)
from noteful.services.note_service import NoteService
from noteful.services.sanitizer import Sanitizer, sanitizer

logger = logging.getLogger(__name__)

# ── Router Configuration ──────────────────────────────────────────────────
router = APIRouter(prefix="/api", tags=["Notes"])


# ── Dependencies ──────────────────────────────────────────────────────────
def get_sanitizer() -> Sanitizer:
    """Outbound text filter. Override in tests to swap the policy."""
    return sanitizer


def get_note_service(
    db: AsyncSession = Depends(get_db_session),
    text_sanitizer: Sanitizer = Depends(get_sanitizer),
) -> NoteService:
    """
    Build the service for one request.

    Why per request: the repository wraps the request's session, which is
    committed or rolled back when the request ends.
    """
    return NoteService(repository=SqlNoteRepository(db), sanitizer=text_sanitizer)


# ── Collection ────────────────────────────────────────────────────────────
@router.get(
    "/notes",
    response_model=List[NoteResponse],
    responses={500: {"description": "Server error", "model": ErrorResponse}},
    summary="List all notes",
)
async def list_notes(
    service: NoteService = Depends(get_note_service),
) -> List[NoteResponse]:
    return await service.list_notes()


@router.post(
    "/notes",
    response_model=NoteResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"description": "A required field is missing", "model": ErrorResponse},
        500: {"description": "Server error", "model": ErrorResponse},
    },
    summary="Create a note",
    description=(
        "All of id, name, modified, folder_id and content are required. "
        "The response carries a Location header pointing at the new note."
    ),
    # The body is checked by NoteService (presence before types); documented as NoteCreate
    openapi_extra={
        "requestBody": {
            "content": {"application/json": {"schema": NoteCreate.model_json_schema()}},
        },
    },
)
async def create_note(
    request: Request,
    response: Response,
    payload: Optional[Dict[str, Any]] = Body(default=None),
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    note = await service.create_note(payload)
    response.headers["Location"] = f"{request.url.path.rstrip('/')}/{note.id}"
    return note


# ── Single Note ───────────────────────────────────────────────────────────
@router.get(
    "/notes/{note_id}",
    response_model=NoteResponse,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Get a single note by ID",
)
async def get_note(
    note_id: int,
    service: NoteService = Depends(get_note_service),
) -> NoteResponse:
    return await service.get_note(note_id)


@router.delete(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"description": "Note not found", "model": ErrorResponse}},
    summary="Delete a note",
)
async def delete_note(
    note_id: int,
    service: NoteService = Depends(get_note_service),
) -> Response:
    await service.delete_note(note_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/notes/{note_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={
        400: {"description": "No updatable field supplied", "model": ErrorResponse},
        404: {"description": "Note not found", "model": ErrorResponse},
    },
    summary="Partially update a note",
    description=(
        "Send any subset of name, modified, folder_id and content. "
        "Fields not in the body keep their stored values."
    ),
)
async def update_note(
    note_id: int,
    payload: Optional[NoteUpdate] = Body(default=None),
    service: NoteService = Depends(get_note_service),
) -> Response:
    await service.update_note(note_id, payload)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
