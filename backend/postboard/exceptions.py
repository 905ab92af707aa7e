"""
Postboard Backend — Custom Exception Hierarchy
================================================

What:  Application-specific exceptions for the error scenarios of the post API.
How:   Each exception carries a client-safe message and an optional context
       dict. Global exception handlers (registered in main.py) turn them into
       JSON error responses with the matching HTTP status code.
Who:   Raised by the store adapter and PostService; caught by global handlers.

Exception Hierarchy:
    PostboardError (base)
    ├── ValidationError         → 400 Bad Request
    ├── NotFoundError           → 404 Not Found
    ├── StoreError              → 500 Internal Server Error
    └── StoreConnectionError    → fatal at startup (also a ConnectionError)

Not-found is a normal outcome at the store level: PostStore returns None/False
and PostService converts that into NotFoundError for the HTTP layer.
"""

from typing import Any, Dict, Optional


class PostboardError(Exception):
    """
    Base exception for all Postboard application errors.

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


class ValidationError(PostboardError):
    """
    Raised when a request body does not have the required post fields.

    FastAPI's RequestValidationError is restated as this exception
    (main.to_validation_error), so every 400 is rendered from it.
    HTTP:    400 Bad Request

    Example response:
        {
            "error": "validation_error",
            "message": "Request body must be a JSON object with string fields ...",
            "details": {"fields": ["title"]}
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


class NotFoundError(PostboardError):
    """
    Raised when an update or delete targets a post id that does not exist.

    HTTP:    404 Not Found
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


class StoreError(PostboardError):
    """
    Raised when a request-scoped store operation fails.

    When:    Driver error, constraint violation, lost connection, or the
             per-operation timeout expiring.
    HTTP:    500 Internal Server Error

    The response always carries the fixed message "Server error"; the
    operation name and underlying error type stay in `context` for the logs.
    """

    def __init__(
        self,
        message: str = "Server error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)


class StoreConnectionError(PostboardError, ConnectionError):
    """
    Raised when the store cannot be reached while the application starts.

    Not mapped to any HTTP response: the lifespan re-raises it and the
    server process exits without serving traffic.
    """

    def __init__(
        self,
        message: str = "Could not connect to the post store",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
