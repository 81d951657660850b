"""
StackIt Backend: Custom Exception Hierarchy
============================================

What:  Application-specific exceptions for the error scenarios of the Q&A API.
How:   Each exception carries a user-facing message and a context dict.
       Handlers registered in main.py turn them into JSON error responses.

Exception Hierarchy:
    StackItError (base)
    ├── ValidationError   → 400 Bad Request (inline, user can fix)
    ├── NotFoundError     → 404 Not Found
    ├── SubmissionError   → 503 Service Unavailable (retryable)
    └── DatabaseError     → 500 Internal Server Error

Authorization failures (accepting an answer on someone else's question,
asking without a session) have no exception here: those operations become
silent no-ops in the service layer.
"""

from typing import Any, Dict, Optional


class StackItError(Exception):
    """
    Base exception for all StackIt application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned for server errors)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(StackItError):
    """
    Raised when user input fails a business rule.

    When:    Empty answer, short title or description, missing tags,
             answering without a session.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Title must be at least 10 characters long",
            "details": {"field": "title"}
        }
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


class NotFoundError(StackItError):
    """
    Raised when a requested resource does not exist.

    Repositories return None for missing records; the service layer converts
    that into this exception so routes never deal with None checks.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"{resource} with ID '{resource_id}' was not found"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class SubmissionError(StackItError):
    """
    Raised when a write could not be completed after all retries.

    HTTP:    503 Service Unavailable, with Retry-After
    The message is the same one the web client shows inline, and the
    submission can be retried as-is: nothing was persisted.
    """

    def __init__(
        self,
        message: str = "Failed to post question. Please try again.",
        retry_after: Optional[int] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if retry_after:
            ctx["retry_after"] = retry_after
        super().__init__(message=message, context=ctx)
        self.retry_after = retry_after


class DatabaseError(StackItError):
    """
    Raised when a repository operation fails unexpectedly.

    The client always receives a generic message; query details are logged
    server-side only.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
