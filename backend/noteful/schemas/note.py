"""
Noteful Backend — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the API contract between clients and backend.
Why:   Type coercion of request bodies, serialization of responses, and
       OpenAPI doc generation.
Who:   Used by route handlers and by NoteService.

Design Decision:
    Request models declare every field Optional. FastAPI would otherwise reject
    a missing field with its own 422 response; presence rules ("Missing 'name'
    in request body", "at least one field") are business rules and live in
    NoteService, which reports them as 400s in the API's error shape.
    Field declaration order is significant: it is the order in which create
    validation reports missing fields. NoteService checks presence on the raw
    body before it validates against NoteCreate, so a missing field is always
    reported ahead of a mistyped one.

Integer columns are 32-bit (PostgreSQL INTEGER); ids and folder ids outside
INT4_MIN..INT4_MAX are rejected here rather than by the database driver.
"""

from datetime import datetime, timezone
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field, field_validator

INT4_MIN = -(2 ** 31)
INT4_MAX = 2 ** 31 - 1

# Accepted in place of a timestamp; stands for the time the request arrived
NOW_KEYWORD = "now"


def parse_modified(value: Any) -> Any:
    """Map the "now" keyword to the current UTC time; pass anything else on."""
    if isinstance(value, str) and value.strip().lower() == NOW_KEYWORD:
        return datetime.now(timezone.utc)
    return value


# ══════════════════════════════════════════════════════════════════════════
# Request Models — What clients send
# ══════════════════════════════════════════════════════════════════════════


class NoteCreate(BaseModel):
    """
    Body of POST /api/notes.

    All five fields are required by NoteService (checked in this order).
    """
    id: Optional[int] = Field(
        default=None, ge=INT4_MIN, le=INT4_MAX, description="Note identifier"
    )
    name: Optional[str] = Field(default=None, description="Note title")
    modified: Optional[datetime] = Field(
        default=None, description='Last change (ISO 8601, or "now")'
    )
    folder_id: Optional[int] = Field(
        default=None, ge=INT4_MIN, le=INT4_MAX, description="Folder the note belongs to"
    )
    content: Optional[str] = Field(default=None, description="Note body")

    @field_validator("modified", mode="before")
    @classmethod
    def accept_now(cls, value: Any) -> Any:
        return parse_modified(value)

    def as_fields(self) -> Dict[str, Any]:
        """Column values for insertion, in declaration order."""
        return self.model_dump()


class NoteUpdate(BaseModel):
    """
    Body of PATCH /api/notes/{id}.

    Any subset of the four mutable fields. `id` and unknown keys are ignored.
    """
    name: Optional[str] = Field(default=None, description="New title")
    modified: Optional[datetime] = Field(
        default=None, description='New modification time (ISO 8601, or "now")'
    )
    folder_id: Optional[int] = Field(
        default=None, ge=INT4_MIN, le=INT4_MAX, description="New folder"
    )
    content: Optional[str] = Field(default=None, description="New body")

    @field_validator("modified", mode="before")
    @classmethod
    def accept_now(cls, value: Any) -> Any:
        return parse_modified(value)

    def supplied_fields(self) -> Dict[str, Any]:
        """
        The fields the client actually sent with a non-null value.

        Empty strings and zero are real values and are kept; an explicit
        null is treated as not sent because every note column is NOT NULL.
        """
        return self.model_dump(exclude_unset=True, exclude_none=True)


# ══════════════════════════════════════════════════════════════════════════
# Response Models — What the API returns
# ══════════════════════════════════════════════════════════════════════════


class NoteResponse(BaseModel):
    """
    Serialized note. `name` and `content` are always sanitized before they
    reach this model; the other fields are passed through unchanged.
    """
    id: int = Field(description="Note identifier")
    name: str = Field(description="Sanitized note title")
    modified: datetime = Field(description="When the note was last changed")
    folder_id: int = Field(description="Folder the note belongs to")
    content: str = Field(description="Sanitized note body")


# ══════════════════════════════════════════════════════════════════════════
# Error Response Models
# ══════════════════════════════════════════════════════════════════════════


class ErrorDetail(BaseModel):
    message: str = Field(description="Human-readable error description")


class ErrorResponse(BaseModel):
    """
    What:  Error body returned for every failed request.

    Example:
        {"error": {"message": "Note doesn't exist"}}
    """
    error: ErrorDetail


class HealthResponse(BaseModel):
    """
    What:  Health check response showing service and database status.
    Who:   Returned by GET /health for monitoring and load balancer probes.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected")
    uptime_seconds: float = Field(description="Seconds since service started")
