"""
Noteful Backend — Custom Exception Hierarchy
==============================================

What:  Defines application-specific exceptions for different error scenarios.
Why:   Custom exceptions enable targeted error handling with appropriate HTTP
       status codes and user-friendly messages.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return `{"error": {"message": ...}}` with the matching status code.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    NotefulError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── StorageError      → 500 Internal Server Error
"""

from typing import Any, Dict, Optional, Sequence, Tuple


class NotefulError(Exception):
    """
    Base exception for all Noteful application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(NotefulError):
    """
    Raised when a request body fails validation.

    When:    A create body is missing a field, or a partial update supplies none.
    HTTP:    400 Bad Request

    Validation is fail-fast: the message names the first violation only.

    Example response:
        {"error": {"message": "Missing 'name' in request body"}}
    """

    def __init__(
        self,
        message: str = "Validation failed",
        field: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if field:
            ctx["field"] = field
        super().__init__(message=message, context=ctx)
        self.field = field


class NotFoundError(NotefulError):
    """
    Raised when a requested note does not exist.

    When:    GET, DELETE or PATCH /api/notes/{id} with an unknown id.
    HTTP:    404 Not Found

    SQLAlchemy returns None for missing rows; the service converts that into
    this exception so routes never branch on None.
    """

    def __init__(
        self,
        resource: str = "Note",
        resource_id: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"{resource} doesn't exist"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id is not None:
            ctx["resource_id"] = str(resource_id)
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class StorageError(NotefulError):
    """
    Raised when a database operation fails.

    What:    A query, insert, update or delete failed (connectivity, constraint
             violation, deadlock, ...).
    HTTP:    500 Internal Server Error

    The subtype of the underlying failure is never inspected. Its class name
    goes into `context` for the server log; the client gets a generic message.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


def describe_invalid(errors: Sequence[Dict[str, Any]], source: str = "body") -> Tuple[Optional[str], str]:
    """
    Turn pydantic error dicts into (field, message) for the first error only.

    Used for request parsing failures raised by FastAPI and for bodies the
    service validates itself, so both read the same:
        "Invalid 'folder_id' in request body: Input should be a valid integer..."
    """
    first = errors[0] if errors else {}
    loc = first.get("loc", ())
    detail = first.get("msg", "invalid value")
    fields = [str(part) for part in loc if isinstance(part, str)]
    if fields:
        field = ".".join(fields)
        return field, f"Invalid '{field}' in request {source}: {detail}"
    return None, f"Invalid request {source}: {detail}"
