"""
Shopfront Backend: Custom Exception Hierarchy
=============================================

What:  Application-specific exceptions for the three failure categories of
       the resource handlers.
How:   Each exception class carries a message and optional context dict.
       Global exception handlers (registered in main.py) catch these and
       return structured JSON error responses with correct HTTP status codes.
Who:   Raised by services; caught by global handlers.

Exception Hierarchy:
    ShopfrontError (base)
    ├── ValidationError   → 400 Bad Request (client can fix)
    ├── NotFoundError     → 404 Not Found
    └── DatabaseError     → 500 Internal Server Error
"""

from typing import Any, Dict, Optional


class ShopfrontError(Exception):
    """
    Base exception for all Shopfront application errors.

    Attributes:
        message:  User-facing error description (safe to return in API response)
        context:  Additional debug info (logged but NOT returned to client,
                  except for ValidationError where it names the offending fields)
    """

    def __init__(
        self,
        message: str = "An unexpected error occurred",
        context: Optional[Dict[str, Any]] = None,
    ):
        self.message = message
        self.context = context or {}
        super().__init__(self.message)


class ValidationError(ShopfrontError):
    """
    Raised when client input fails a business rule.

    When:    Required create fields missing, a non-nullable field set to null,
             a blank name.
    HTTP:    400 Bad Request

    Type/shape errors in the JSON body are rejected earlier by FastAPI's own
    request validation (422); this exception covers the presence rules the
    schemas intentionally leave optional.

    Example response:
        {
            "error": "validation_error",
            "message": "Please provide product name, price, and stock.",
            "details": {"missing_fields": ["stock"]}
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


class NotFoundError(ShopfrontError):
    """
    Raised when a requested resource does not exist.

    When:    GET/PUT/DELETE on an id with no matching row.
    HTTP:    404 Not Found

    SQLAlchemy returns None (or a zero rowcount) for missing records rather
    than raising; services convert that into this exception.
    """

    def __init__(
        self,
        resource: str = "resource",
        resource_id: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ):
        message = f"The requested {resource} was not found"
        if resource_id:
            message = f"No {resource} found with id '{resource_id}'"
        ctx = context or {}
        ctx["resource"] = resource
        if resource_id:
            ctx["resource_id"] = resource_id
        super().__init__(message=message, context=ctx)


class DatabaseError(ShopfrontError):
    """
    Raised when database operations fail unexpectedly.

    When:    Connection lost mid-query, constraint violation (e.g. unknown
             category or tag id), deadlock, etc.
    HTTP:    500 Internal Server Error

    The message returned to the client is always generic. The SQL error
    itself is logged server-side by the service that caught it.
    """

    def __init__(
        self,
        message: str = "A database error occurred. Please try again later.",
        context: Optional[Dict[str, Any]] = None,
    ):
        super().__init__(message=message, context=context)
