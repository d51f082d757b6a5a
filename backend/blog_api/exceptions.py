"""
Blog API — Custom Exception Hierarchy
======================================

What:  Application-specific exceptions for the three failure classes.
Why:   Services raise these instead of building responses; the handlers
       registered in main.py turn each type into one HTTP status code.
How:   Each exception carries a user-facing message and an optional context
       dict (logged, never returned).

Exception Hierarchy:
    BlogApiError (base)
    ├── ValidationError   → 400 Bad Request (record violates the blog schema)
    ├── NotFoundError     → 404 Not Found (no record for the identifier)
    └── DatabaseError     → 500 Internal Server Error (anything else from the store)

Every error response body is {"message": <exception message>}.
"""

from typing import Any, Dict, Optional


class BlogApiError(Exception):
    """
    Base exception for all Blog API errors.

    Attributes:
        message:  Error description returned in the response body
        context:  Additional debug info (logged but NOT returned to client)
    """

    status_code = 500

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BlogApiError):
    """
    Raised when a record fails the persisted-schema rules.

    When:    Missing/empty required field, non-string field value.
    HTTP:    400 Bad Request

    Example message:
        "Blog validation failed: title: Path `title` is required."
    """

    status_code = 400

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


class NotFoundError(BlogApiError):
    """
    Raised when no record matches the requested identifier.

    The message is action-specific ("Blog not found" for reads and deletes,
    "Blog cannot be edited because it was not found" for updates).
    HTTP:    404 Not Found
    """

    status_code = 404

    def __init__(
        self,
        message: str = "Blog not found",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)
        self.resource_id = resource_id


class DatabaseError(BlogApiError):
    """
    Raised when a store operation fails for any reason other than validation.

    When:    Connection lost, driver error, constraint violation.
    HTTP:    500 Internal Server Error

    The message is the underlying error text; the original exception type is
    kept in context for the server log.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "A database error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
