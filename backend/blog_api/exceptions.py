"""
Blog API: Custom Exception Hierarchy
====================================

What:  Application-specific exceptions for the three failure categories.
How:   Each exception class carries a client-safe message, an optional context
       dict (logged, never returned) and the HTTP status it maps to.
       A single handler registered in main.py turns any of them into the
       error envelope `{"success": false, "message": ...}`.
Who:   Raised by the blog service; caught by the global handlers.

Exception Hierarchy:
    BlogApiError (base)
    ├── ValidationError   → 400 Bad Request (missing required field, bad body)
    ├── NotFoundError     → 404 Not Found
    └── ServerError       → 500 Internal Server Error (storage failures, bugs)
"""

from typing import Any, Dict, Optional


class BlogApiError(Exception):
    """
    Base exception for all Blog API errors.

    Attributes:
        message:      User-facing error description (safe to return in API response)
        context:      Additional debug info (logged but NOT returned to client)
        status_code:  HTTP status the error envelope is sent with
    """

    status_code: int = 500

    def __init__(
        self,
        message: str = "Server Error",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(BlogApiError):
    """
    Raised when client input fails presence validation.

    When:    Create without title/content, PUT with neither field,
             PATCH without title, or a request body that is not usable.
    HTTP:    400 Bad Request
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
    Raised when a requested resource does not exist.

    When:    Any /api/blogs/{id} operation whose id does not resolve,
             including ids that are not well-formed UUIDs.
    HTTP:    404 Not Found

    The storage layer returns None for missing rows; the service converts
    that None into this exception.
    """

    status_code = 404

    def __init__(
        self,
        resource: str = "Resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=f"{resource} not found", context=ctx)


class ServerError(BlogApiError):
    """
    Raised when a storage operation fails unexpectedly.

    When:    Connection lost mid-query, constraint violation, driver bug, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is always the generic "Server Error";
    the original exception is chained (`raise ... from`) and its details go
    to the server log only.
    """

    status_code = 500

    def __init__(
        self,
        message: str = "Server Error",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
